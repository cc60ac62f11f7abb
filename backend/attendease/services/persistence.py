"""
Support de persistance clé-valeur.

Le cœur ne lit et n'écrit que des chaînes sous des clés :
- la clé de l'agrégat AppData (settings.APP_DATA_KEY)
- les clés `attendance-<classId>-<subjectId>-<date>` des feuilles de présence
"""

import logging
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attendease.exceptions import PersistenceError
from attendease.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValuePort(Protocol):
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore:
    """Support en mémoire (tests, scripts)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.entries: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def set(self, key: str, value: str) -> None:
        self.entries[key] = value


class SqlKeyValueStore:
    """Support SQL : une ligne de kv_entries par clé, une session courte par appel."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        try:
            with self._session_factory() as db:
                entry = db.get(KeyValueEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            logger.error("Lecture de la clé %s impossible : %s", key, e)
            raise PersistenceError(f"Lecture impossible pour la clé '{key}'.") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as db:
                entry = db.get(KeyValueEntry, key)
                if entry is None:
                    db.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
                db.commit()
        except SQLAlchemyError as e:
            logger.error("Écriture de la clé %s impossible : %s", key, e)
            raise PersistenceError(f"Écriture impossible pour la clé '{key}'.") from e
