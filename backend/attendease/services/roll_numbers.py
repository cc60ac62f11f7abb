"""
Génération des numéros de matricule, propres à une classe : `<PREFIXE>-<NNN>`.

On repart toujours du plus grand suffixe existant (max + 1) : un numéro libéré
par une suppression n'est jamais réattribué.
"""

from typing import Optional

from attendease.naming import class_prefix
from attendease.schemas.school_class import ClassItem


def parse_suffix(roll_number: str) -> Optional[int]:
    """Suffixe numérique (après le dernier tiret), ou None s'il est illisible."""
    suffix = roll_number.rsplit("-", 1)[-1] if roll_number else ""
    if not suffix.isdigit():
        return None
    return int(suffix)


def generate_roll_number(class_item: ClassItem, exclude_student_id: Optional[str] = None) -> str:
    """
    Calcule le prochain numéro de matricule de la classe.
    `exclude_student_id` ignore le numéro actuel d'un élève (régénération de son propre numéro).
    """
    suffixes = [
        parse_suffix(s.roll_number)
        for s in class_item.students
        if s.id != exclude_student_id
    ]
    next_number = max((n for n in suffixes if n is not None), default=0) + 1
    return f"{class_prefix(class_item.name)}-{next_number:03d}"


def has_class_prefix(class_item: ClassItem, roll_number: str) -> bool:
    """Vrai si le numéro est au format `<PREFIXE>-<NNN>` du nom actuel de la classe."""
    prefix = f"{class_prefix(class_item.name)}-"
    return roll_number.startswith(prefix) and parse_suffix(roll_number) is not None
