"""
Schémas Pydantic pour les matières (liste globale).
"""

from pydantic import BaseModel


class Subject(BaseModel):
    id: str
    name: str


class SubjectCreate(BaseModel):
    """Corps de requête de création d'une matière (POST /subjects)."""
    name: str


class SubjectUpdate(BaseModel):
    """Corps de requête de renommage d'une matière (PUT /subjects/{id})."""
    name: str
