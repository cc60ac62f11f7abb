"""
Router pour la liste globale des matières.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from attendease.dependencies import get_store
from attendease.schemas.subject import Subject, SubjectCreate, SubjectUpdate
from attendease.services import subject_service
from attendease.services.store import AppStore

router = APIRouter(prefix="/api/v1/subjects", tags=["Matières"])


@router.get("", response_model=List[Subject], summary="Lister les matières")
def list_subjects(store: AppStore = Depends(get_store)):
    return subject_service.get_subjects(store)


@router.post("", response_model=Subject, status_code=201, summary="Créer une matière")
def create_subject(data: SubjectCreate, store: AppStore = Depends(get_store)):
    """Crée une matière au nom unique (insensible à la casse)."""
    return subject_service.create_subject(store, data)


@router.get("/{subject_id}", response_model=Subject, summary="Détail d'une matière")
def get_subject(subject_id: str, store: AppStore = Depends(get_store)):
    subject = subject_service.find_subject(store, subject_id)
    if subject is None:
        raise HTTPException(status_code=404, detail="Matière introuvable.")
    return subject


@router.put("/{subject_id}", response_model=Subject, summary="Renommer une matière")
def update_subject(subject_id: str, data: SubjectUpdate, store: AppStore = Depends(get_store)):
    return subject_service.update_subject(store, subject_id, data)


@router.delete("/{subject_id}", status_code=204, summary="Supprimer une matière")
def delete_subject(subject_id: str, store: AppStore = Depends(get_store)):
    """Supprime la matière et la retire de toutes les classes et de tous les élèves."""
    subject_service.delete_subject(store, subject_id)
