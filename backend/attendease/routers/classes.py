"""
Router pour la gestion des classes scolaires et de leurs élèves.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from attendease.dependencies import get_store
from attendease.schemas.school_class import ClassCreate, ClassResponse, ClassUpdate
from attendease.schemas.student import Student, StudentCreate, StudentUpdate
from attendease.schemas.subject import Subject
from attendease.services import class_service, student_service
from attendease.services.store import AppStore

router = APIRouter(prefix="/api/v1/classes", tags=["Classes"])


@router.post("", response_model=ClassResponse, status_code=201, summary="Créer une classe")
def create_class(data: ClassCreate, store: AppStore = Depends(get_store)):
    """Crée une nouvelle classe scolaire avec un nom unique."""
    return ClassResponse.from_class(class_service.create_class(store, data))


@router.get("", response_model=List[ClassResponse], summary="Lister les classes")
def list_classes(store: AppStore = Depends(get_store)):
    """Retourne toutes les classes avec leur nombre d'élèves."""
    return [ClassResponse.from_class(c) for c in class_service.get_classes(store)]


@router.get("/{class_id}", response_model=ClassResponse, summary="Détail d'une classe")
def get_class(class_id: str, store: AppStore = Depends(get_store)):
    school_class = class_service.find_class(store, class_id)
    if school_class is None:
        raise HTTPException(status_code=404, detail="Classe introuvable.")
    return ClassResponse.from_class(school_class)


@router.put("/{class_id}", response_model=ClassResponse, summary="Modifier une classe")
def update_class(class_id: str, data: ClassUpdate, store: AppStore = Depends(get_store)):
    """
    Renomme la classe et remplace ses matières.
    Un renommage régénère les matricules de tous les élèves.
    """
    return ClassResponse.from_class(class_service.update_class(store, class_id, data))


@router.delete("/{class_id}", status_code=204, summary="Supprimer une classe")
def delete_class(class_id: str, store: AppStore = Depends(get_store)):
    """Supprime une classe définitivement, avec tous ses élèves."""
    class_service.delete_class(store, class_id)


@router.get("/{class_id}/subjects", response_model=List[Subject], summary="Matières d'une classe")
def list_class_subjects(class_id: str, store: AppStore = Depends(get_store)):
    return class_service.get_subjects_for_class(store, class_id)


# --- Gestion des élèves ---

@router.get("/{class_id}/students", response_model=List[Student], summary="Lister les élèves")
def list_students(class_id: str, subject_id: Optional[str] = None, store: AppStore = Depends(get_store)):
    """Élèves de la classe ; avec `subject_id`, seulement ceux inscrits à cette matière."""
    if subject_id:
        return student_service.get_students_for_subject_in_class(store, class_id, subject_id)
    return student_service.get_students_by_class(store, class_id)


@router.post("/{class_id}/students", response_model=Student, status_code=201, summary="Inscrire un élève")
def create_student(class_id: str, data: StudentCreate, store: AppStore = Depends(get_store)):
    """Les matières non enseignées dans la classe sont ignorées."""
    return student_service.create_student(store, class_id, data)


@router.put("/{class_id}/students/{student_id}", response_model=Student, summary="Modifier un élève")
def update_student(class_id: str, student_id: str, data: StudentUpdate, store: AppStore = Depends(get_store)):
    """Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés."""
    return student_service.update_student(store, class_id, student_id, data)


@router.delete("/{class_id}/students/{student_id}", status_code=204, summary="Retirer un élève")
def delete_student(class_id: str, student_id: str, store: AppStore = Depends(get_store)):
    student_service.delete_student(store, class_id, student_id)
