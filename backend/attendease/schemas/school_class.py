"""
Schémas Pydantic pour les classes scolaires.
"""

from typing import List

from pydantic import BaseModel, field_validator

from attendease.schemas.student import Student


class ClassItem(BaseModel):
    """Classe : matières enseignées + élèves inscrits (liste ordonnée)."""
    id: str
    name: str
    subject_ids: List[str] = []
    students: List[Student] = []

    @field_validator("subject_ids", "students", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class ClassCreate(BaseModel):
    name: str
    subject_ids: List[str] = []


class ClassUpdate(BaseModel):
    name: str
    subject_ids: List[str]


class ClassResponse(BaseModel):
    id: str
    name: str
    subject_ids: List[str]
    nb_students: int

    @classmethod
    def from_class(cls, class_item: ClassItem) -> "ClassResponse":
        return cls(
            id=class_item.id,
            name=class_item.name,
            subject_ids=list(class_item.subject_ids),
            nb_students=len(class_item.students),
        )
