"""
Schémas Pydantic pour les élèves.
"""

from typing import List, Optional

from pydantic import BaseModel, field_validator


class Student(BaseModel):
    """Élève, possédé exclusivement par sa classe."""
    id: str
    name: str
    roll_number: str
    photo_url: Optional[str] = None
    class_id: str
    subject_ids: List[str] = []

    @field_validator("subject_ids", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class StudentCreate(BaseModel):
    """Schéma de création d'un élève (POST /classes/{id}/students)."""
    name: str
    subject_ids: List[str] = []
    photo_url: Optional[str] = None


class StudentUpdate(BaseModel):
    """
    Mise à jour partielle d'un élève (PUT /classes/{id}/students/{student_id}).
    Seuls les champs explicitement fournis sont appliqués : `photo_url: null`
    supprime la photo, un champ absent ne change rien.
    """
    name: Optional[str] = None
    photo_url: Optional[str] = None
    subject_ids: Optional[List[str]] = None


class StudentImportReport(BaseModel):
    """Rapport retourné après un import CSV."""
    success_count: int
    error_count: int
    errors: List[str]
