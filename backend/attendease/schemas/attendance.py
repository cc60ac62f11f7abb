"""
Schémas Pydantic pour les feuilles de présence (une par classe + matière + jour).
"""

import datetime as dt
from typing import List

from pydantic import BaseModel, field_validator

PRESENT = "present"
ABSENT = "absent"
PENDING = "pending"
VALID_STATUSES = {PRESENT, ABSENT, PENDING}


class AttendanceRecord(BaseModel):
    student_id: str
    status: str = PENDING

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: str) -> str:
        if v not in VALID_STATUSES:
            raise ValueError(f"Statut invalide. Valeurs acceptées : {sorted(VALID_STATUSES)}")
        return v


class AttendanceSession(BaseModel):
    class_id: str
    subject_id: str
    date: dt.date
    records: List[AttendanceRecord]

    @property
    def is_complete(self) -> bool:
        """Vrai quand plus aucun élève n'est en attente (vrai aussi pour une liste vide)."""
        return all(r.status != PENDING for r in self.records)


class AttendanceSummary(AttendanceSession):
    present_count: int
    absent_count: int
    pending_count: int
    complete: bool


class AttendanceMark(BaseModel):
    """Corps de requête pour marquer un élève (PUT .../students/{student_id})."""
    status: str

    @field_validator("status")
    @classmethod
    def marked_status(cls, v: str) -> str:
        if v not in (PRESENT, ABSENT):
            raise ValueError("Le statut doit être 'present' ou 'absent'.")
        return v
