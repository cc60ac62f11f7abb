"""
Service métier pour la liste globale des matières.
"""

import logging
from typing import List, Optional

from attendease.exceptions import DuplicateError, NotFoundError
from attendease.naming import new_id, normalize_name, require_non_empty
from attendease.schemas.subject import Subject, SubjectCreate, SubjectUpdate
from attendease.services.cascades import cascade_subject_deletion
from attendease.services.store import AppStore

logger = logging.getLogger(__name__)


def get_subjects(store: AppStore) -> List[Subject]:
    """Copie de toutes les matières, dans l'ordre de création."""
    with store.lock:
        return [s.model_copy() for s in store.data.subjects]


def get_subject(store: AppStore, subject_id: str) -> Optional[Subject]:
    """
    Recherche interne : retourne l'objet de l'agrégat lui-même (modifiable par les services).
    Les routes passent par find_subject.
    """
    return next((s for s in store.data.subjects if s.id == subject_id), None)


def find_subject(store: AppStore, subject_id: str) -> Optional[Subject]:
    """Copie d'une matière, ou None si inexistante."""
    with store.lock:
        subject = get_subject(store, subject_id)
        return subject.model_copy() if subject is not None else None


def get_subject_by_name(store: AppStore, name: str) -> Optional[Subject]:
    """Recherche insensible à la casse et aux espaces autour."""
    wanted = normalize_name(name)
    return next((s for s in store.data.subjects if normalize_name(s.name) == wanted), None)


def create_subject(store: AppStore, data: SubjectCreate) -> Subject:
    """
    Crée une matière.
    Lève ValidationError si le nom est vide, DuplicateError s'il existe déjà.
    """
    name = require_non_empty(data.name, "Le nom de la matière")
    with store.lock:
        if get_subject_by_name(store, name) is not None:
            raise DuplicateError(f"Une matière avec le nom '{name}' existe déjà.")

        subject = Subject(id=new_id("subj", name), name=name)
        store.data.subjects.append(subject)
        store.save()
        return subject.model_copy()


def update_subject(store: AppStore, subject_id: str, data: SubjectUpdate) -> Subject:
    """Renomme une matière (le nom reste unique, la matière elle-même exclue)."""
    with store.lock:
        subject = get_subject(store, subject_id)
        if subject is None:
            raise NotFoundError("Matière introuvable.")
        name = require_non_empty(data.name, "Le nom de la matière")

        existing = get_subject_by_name(store, name)
        if existing is not None and existing.id != subject_id:
            raise DuplicateError(f"Une matière avec le nom '{name}' existe déjà.")

        subject.name = name
        store.save()
        return subject.model_copy()


def delete_subject(store: AppStore, subject_id: str) -> None:
    """
    Supprime une matière et la retire de toutes les classes et de tous les élèves.
    Une seule écriture après la cascade.
    """
    with store.lock:
        subject = get_subject(store, subject_id)
        if subject is None:
            raise NotFoundError("Matière introuvable.")

        store.data.subjects = [s for s in store.data.subjects if s.id != subject_id]
        cascade_subject_deletion(store.data, subject_id)
        store.save()
    logger.info("Matière %s supprimée", subject_id)
