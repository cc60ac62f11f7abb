"""
Service métier pour la gestion des classes scolaires.
Une classe possède ses élèves : les supprimer ou renommer la classe se répercute sur eux.
"""

import logging
from typing import List, Optional

from attendease.exceptions import DuplicateError, NotFoundError
from attendease.naming import new_id, normalize_name, require_non_empty
from attendease.schemas.school_class import ClassCreate, ClassItem, ClassUpdate
from attendease.schemas.subject import Subject
from attendease.services.cascades import cascade_class_rename, restrict_student_subjects
from attendease.services.store import AppStore

logger = logging.getLogger(__name__)


def get_classes(store: AppStore) -> List[ClassItem]:
    """Copie de toutes les classes (élèves compris), dans l'ordre de création."""
    with store.lock:
        return [c.model_copy(deep=True) for c in store.data.classes]


def get_class(store: AppStore, class_id: str) -> Optional[ClassItem]:
    """
    Recherche interne : retourne la classe de l'agrégat elle-même, ou None si inexistante.
    Les routes passent par find_class.
    """
    return next((c for c in store.data.classes if c.id == class_id), None)


def find_class(store: AppStore, class_id: str) -> Optional[ClassItem]:
    """Copie d'une classe (élèves compris), ou None si inexistante."""
    with store.lock:
        school_class = get_class(store, class_id)
        return school_class.model_copy(deep=True) if school_class is not None else None


def get_class_by_name(store: AppStore, name: str) -> Optional[ClassItem]:
    wanted = normalize_name(name)
    return next((c for c in store.data.classes if normalize_name(c.name) == wanted), None)


def require_class(store: AppStore, class_id: str) -> ClassItem:
    school_class = get_class(store, class_id)
    if school_class is None:
        raise NotFoundError("Classe introuvable.")
    return school_class


def get_subjects_for_class(store: AppStore, class_id: str) -> List[Subject]:
    """Matières enseignées dans la classe, dans l'ordre de la liste globale."""
    with store.lock:
        school_class = require_class(store, class_id)
        taught = set(school_class.subject_ids)
        return [s.model_copy() for s in store.data.subjects if s.id in taught]


def create_class(store: AppStore, data: ClassCreate) -> ClassItem:
    """
    Crée une classe vide.
    Lève ValidationError si le nom est vide, DuplicateError s'il existe déjà,
    NotFoundError si une matière demandée n'existe pas.
    """
    name = require_non_empty(data.name, "Le nom de la classe")
    with store.lock:
        if get_class_by_name(store, name) is not None:
            raise DuplicateError(f"Une classe avec le nom '{name}' existe déjà.")
        subject_ids = _check_subject_ids(store, data.subject_ids)

        school_class = ClassItem(id=new_id("class", name), name=name, subject_ids=subject_ids, students=[])
        store.data.classes.append(school_class)
        store.save()
        return school_class.model_copy(deep=True)


def update_class(store: AppStore, class_id: str, data: ClassUpdate) -> ClassItem:
    """
    Renomme la classe et remplace ses matières.

    - nom modifié → tous les matricules sont régénérés avec le nouveau préfixe
    - dans tous les cas, les élèves perdent les matières retirées de la classe
    """
    with store.lock:
        school_class = require_class(store, class_id)
        name = require_non_empty(data.name, "Le nom de la classe")
        existing = get_class_by_name(store, name)
        if existing is not None and existing.id != class_id:
            raise DuplicateError(f"Une classe avec le nom '{name}' existe déjà.")
        subject_ids = _check_subject_ids(store, data.subject_ids)

        renamed = name != school_class.name
        school_class.name = name
        school_class.subject_ids = subject_ids
        if renamed:
            cascade_class_rename(school_class)
        restrict_student_subjects(school_class)

        store.save()
        return school_class.model_copy(deep=True)


def delete_class(store: AppStore, class_id: str) -> None:
    """Supprime la classe et tous ses élèves en une seule écriture."""
    with store.lock:
        school_class = require_class(store, class_id)
        store.data.classes = [c for c in store.data.classes if c.id != class_id]
        store.save()
    logger.info("Classe %s supprimée avec %d élèves", class_id, len(school_class.students))


def _check_subject_ids(store: AppStore, subject_ids: List[str]) -> List[str]:
    """Dédoublonne la liste et vérifie que chaque matière existe."""
    known = {s.id for s in store.data.subjects}
    result: List[str] = []
    for sid in subject_ids:
        if sid not in known:
            raise NotFoundError(f"Matière '{sid}' introuvable.")
        if sid not in result:
            result.append(sid)
    return result
