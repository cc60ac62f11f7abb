"""
Modèle SQLAlchemy pour la table kv_entries.
Support clé-valeur : une ligne par clé (agrégat AppData, feuilles de présence).
"""

from sqlalchemy import Column, DateTime, String, Text, func

from attendease.database import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
