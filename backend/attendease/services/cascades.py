"""
Propagations qui rétablissent les invariants de l'agrégat après une
suppression ou un renommage. Elles modifient l'agrégat en mémoire sans
l'écrire : l'appelant fait un seul save() après la cascade.
"""

import logging
from typing import List

from attendease.schemas.app_data import AppData
from attendease.schemas.school_class import ClassItem
from attendease.services.roll_numbers import generate_roll_number

logger = logging.getLogger(__name__)


def cascade_subject_deletion(data: AppData, subject_id: str) -> None:
    """Retire la matière de toutes les classes et de tous les élèves."""
    for class_item in data.classes:
        class_item.subject_ids = [sid for sid in class_item.subject_ids if sid != subject_id]
        for student in class_item.students:
            student.subject_ids = [sid for sid in student.subject_ids if sid != subject_id]


def cascade_class_rename(class_item: ClassItem) -> None:
    """
    Réattribue tous les matricules avec le préfixe du nouveau nom.
    Les élèves sont traités dans l'ordre : chaque numéro est calculé contre
    ceux déjà réattribués, la numérotation repart donc de 001.
    """
    for student in class_item.students:
        student.roll_number = ""
    for student in class_item.students:
        student.roll_number = generate_roll_number(class_item, exclude_student_id=student.id)
    logger.info(
        "Matricules régénérés pour la classe %s (%d élèves)",
        class_item.id, len(class_item.students),
    )


def restrict_student_subjects(class_item: ClassItem) -> None:
    """Limite les inscriptions de chaque élève aux matières de la classe."""
    for student in class_item.students:
        student.subject_ids = intersect_subjects(student.subject_ids, class_item.subject_ids)


def intersect_subjects(subject_ids: List[str], allowed: List[str]) -> List[str]:
    """Garde l'ordre demandé, sans doublons, en ne conservant que les matières autorisées."""
    allowed_set = set(allowed)
    result: List[str] = []
    for sid in subject_ids:
        if sid in allowed_set and sid not in result:
            result.append(sid)
    return result
