"""
Service métier pour les élèves, toujours rattachés à une classe.
Les inscriptions d'un élève sont limitées aux matières de sa classe à chaque écriture.
"""

import logging
from typing import List

from attendease.config import settings
from attendease.exceptions import NotFoundError
from attendease.naming import new_id, require_non_empty
from attendease.schemas.photo import photo_ref
from attendease.schemas.student import Student, StudentCreate, StudentUpdate
from attendease.services.cascades import intersect_subjects
from attendease.services.class_service import require_class
from attendease.services.roll_numbers import generate_roll_number
from attendease.services.store import AppStore

logger = logging.getLogger(__name__)


def get_students_by_class(store: AppStore, class_id: str) -> List[Student]:
    """Copie des élèves de la classe, dans l'ordre d'inscription."""
    with store.lock:
        school_class = require_class(store, class_id)
        return [s.model_copy(deep=True) for s in school_class.students]


def get_students_for_subject_in_class(store: AppStore, class_id: str, subject_id: str) -> List[Student]:
    """Élèves de la classe inscrits à la matière (la liste d'appel)."""
    return [s for s in get_students_by_class(store, class_id) if subject_id in s.subject_ids]


def get_student(store: AppStore, class_id: str, student_id: str) -> Student:
    """Recherche interne : l'élève de l'agrégat lui-même. Lève NotFoundError."""
    school_class = require_class(store, class_id)
    student = next((s for s in school_class.students if s.id == student_id), None)
    if student is None:
        raise NotFoundError("Élève introuvable.")
    return student


def create_student(store: AppStore, class_id: str, data: StudentCreate, *, commit: bool = True) -> Student:
    """
    Inscrit un nouvel élève dans la classe.

    Les matières non enseignées dans la classe sont ignorées sans erreur.
    Le matricule est généré (max + 1), la photo vaut le placeholder si absente.
    `commit=False` laisse l'écriture à l'appelant (import en masse).
    """
    name = require_non_empty(data.name, "Le nom de l'élève")
    photo_url = _display_url(data.photo_url) or settings.PLACEHOLDER_PHOTO_URL

    # calcul du matricule et ajout sous le même verrou
    with store.lock:
        school_class = require_class(store, class_id)
        student = Student(
            id=new_id("student", name),
            name=name,
            roll_number=generate_roll_number(school_class),
            photo_url=photo_url,
            class_id=school_class.id,
            subject_ids=intersect_subjects(data.subject_ids, school_class.subject_ids),
        )
        school_class.students.append(student)
        if commit:
            store.save()
        return student.model_copy(deep=True)


def update_student(store: AppStore, class_id: str, student_id: str, data: StudentUpdate) -> Student:
    """
    Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés.
    Le matricule n'est jamais modifié ici (seul un renommage de classe le régénère).
    """
    with store.lock:
        school_class = require_class(store, class_id)
        student = get_student(store, class_id, student_id)

        update_data = data.model_dump(exclude_unset=True)
        name = None
        if "name" in update_data:
            name = require_non_empty(update_data["name"], "Le nom de l'élève")

        # toutes les validations sont faites avant la première modification
        if name is not None:
            student.name = name
        if "photo_url" in update_data:
            student.photo_url = _display_url(update_data["photo_url"])
        if update_data.get("subject_ids") is not None:
            student.subject_ids = intersect_subjects(update_data["subject_ids"], school_class.subject_ids)

        store.save()
        return student.model_copy(deep=True)


def delete_student(store: AppStore, class_id: str, student_id: str) -> None:
    with store.lock:
        school_class = require_class(store, class_id)
        get_student(store, class_id, student_id)
        school_class.students = [s for s in school_class.students if s.id != student_id]
        store.save()


def _display_url(value):
    ref = photo_ref(value)
    return ref.resolve_display_url() if ref is not None else None
