"""
Dépendances FastAPI.
Le magasin est construit une seule fois par processus et partagé par toutes les requêtes.
"""

from typing import Optional

from attendease.database import SessionLocal
from attendease.services.persistence import SqlKeyValueStore
from attendease.services.store import AppStore

_store: Optional[AppStore] = None


def get_store() -> AppStore:
    """Dépendance FastAPI : fournit le magasin partagé (chargé au premier appel)."""
    global _store
    if _store is None:
        _store = AppStore(SqlKeyValueStore(SessionLocal))
    return _store
