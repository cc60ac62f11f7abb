"""
Agrégat racine persisté sous une seule clé.
"""

from typing import List, Optional

from pydantic import BaseModel

from attendease.schemas.school_class import ClassItem
from attendease.schemas.subject import Subject


class AppData(BaseModel):
    version: Optional[int] = None  # absent sur les données antérieures au versionnage
    subjects: List[Subject] = []
    classes: List[ClassItem] = []
