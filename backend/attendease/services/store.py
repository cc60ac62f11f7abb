"""
Magasin de l'agrégat AppData.

Chargé une seule fois, modifié en place par les services, puis réécrit en
entier après chaque opération (pas de transaction multi-opérations).
Les requêtes HTTP tournent en parallèle : toute opération qui modifie
l'agrégat (ou une feuille de présence) s'exécute sous `store.lock`.
Une version absente ou différente de CURRENT_VERSION provoque un reseed :
les anciennes données sont écartées, pas migrées.
"""

import logging
import threading
from typing import Callable, Optional

from attendease.config import settings
from attendease.exceptions import PersistenceError
from attendease.schemas.app_data import AppData
from attendease.services.cascades import intersect_subjects
from attendease.services.persistence import KeyValuePort
from attendease.services.roll_numbers import generate_roll_number, has_class_prefix
from attendease.services.seed import build_default_data

logger = logging.getLogger(__name__)

CURRENT_VERSION = 3


class AppStore:
    def __init__(
        self,
        port: KeyValuePort,
        *,
        data_key: Optional[str] = None,
        seed_factory: Callable[[], AppData] = build_default_data,
    ):
        self.port = port
        self.data_key = data_key or settings.APP_DATA_KEY
        self._seed_factory = seed_factory
        self._data: Optional[AppData] = None
        # verrou réentrant : un service qui en appelle un autre le reprend sans bloquer
        self.lock = threading.RLock()

    @property
    def data(self) -> AppData:
        """Agrégat en mémoire, chargé au premier accès."""
        with self.lock:
            if self._data is None:
                self._data = self.load()
            return self._data

    def load(self) -> AppData:
        """
        Lit l'agrégat depuis le support.
        Absent, illisible ou d'une autre version → reseed complet.
        Sinon passe de contrôle d'intégrité (voir repair_app_data).
        """
        try:
            raw = self.port.get(self.data_key)
        except PersistenceError as e:
            logger.warning("Lecture de l'agrégat impossible, reseed : %s", e)
            return self._reseed("support illisible")

        if raw is None:
            return self._reseed("aucune donnée")

        try:
            data = AppData.model_validate_json(raw)
        except ValueError as e:
            logger.warning("Agrégat persistant illisible : %s", e)
            return self._reseed("données illisibles")

        if data.version != CURRENT_VERSION:
            return self._reseed(f"version {data.version} ≠ {CURRENT_VERSION}")

        self._data = data
        if repair_app_data(data):
            logger.info("Agrégat corrigé au chargement, réécriture")
            self.save(data)
        return data

    def save(self, data: Optional[AppData] = None) -> None:
        """Estampille la version et réécrit l'agrégat complet. Lève PersistenceError en cas d'échec."""
        with self.lock:
            data = data if data is not None else self.data
            data.version = CURRENT_VERSION
            self._data = data
            self.port.set(self.data_key, data.model_dump_json())

    def _reseed(self, reason: str) -> AppData:
        logger.info("Reseed des données par défaut (%s)", reason)
        data = self._seed_factory()
        try:
            self.save(data)
        except PersistenceError as e:
            # l'agrégat reste utilisable en mémoire, la prochaine écriture réessaiera
            logger.error("Écriture des données par défaut impossible : %s", e)
        return data


def repair_app_data(data: AppData) -> bool:
    """
    Rétablit les invariants d'un agrégat chargé. Retourne True si quelque chose a changé.

    - chaque élève pointe vers sa classe
    - un élève sans matière reçoit toutes celles de sa classe
    - les inscriptions sont limitées aux matières de la classe
    - un matricule hors format (ou en double) pour le nom actuel de la classe est régénéré
    """
    changed = False
    for class_item in data.classes:
        seen = set()
        for student in class_item.students:
            if student.class_id != class_item.id:
                student.class_id = class_item.id
                changed = True

            if not student.subject_ids:
                student.subject_ids = list(class_item.subject_ids)
                changed = changed or bool(class_item.subject_ids)
            restricted = intersect_subjects(student.subject_ids, class_item.subject_ids)
            if restricted != student.subject_ids:
                student.subject_ids = restricted
                changed = True

            if not has_class_prefix(class_item, student.roll_number) or student.roll_number in seen:
                student.roll_number = generate_roll_number(class_item, exclude_student_id=student.id)
                changed = True
            seen.add(student.roll_number)
    return changed
