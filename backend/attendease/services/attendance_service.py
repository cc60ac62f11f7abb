"""
Service des feuilles de présence : une feuille par (classe, matière, jour),
persistée sous sa propre clé, indépendamment de l'agrégat AppData.

Cycle de vie :
- ouverture : tous les élèves de la liste d'appel en `pending`
- marquage : present / absent, feuille réécrite après chaque élève
- résumé : bascule present ⇄ absent à tout moment (pending → present)
- réouverture : la feuille est réconciliée avec la liste d'appel actuelle
"""

import datetime as dt
import logging
from typing import List, Optional

from pydantic import TypeAdapter

from attendease.exceptions import NotFoundError, ValidationError
from attendease.schemas.attendance import (
    ABSENT,
    PENDING,
    PRESENT,
    AttendanceRecord,
    AttendanceSession,
    AttendanceSummary,
)
from attendease.schemas.student import Student
from attendease.services import class_service, student_service, subject_service
from attendease.services.store import AppStore

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(List[AttendanceRecord])


def transcript_key(class_id: str, subject_id: str, day: dt.date) -> str:
    return f"attendance-{class_id}-{subject_id}-{day.isoformat()}"


def build_roster(store: AppStore, class_id: str, subject_id: str) -> List[Student]:
    """Élèves de la classe inscrits à la matière. Lève NotFoundError si l'une des deux n'existe pas."""
    class_service.require_class(store, class_id)
    if subject_service.get_subject(store, subject_id) is None:
        raise NotFoundError("Matière introuvable.")
    return student_service.get_students_for_subject_in_class(store, class_id, subject_id)


def reconcile(records: List[AttendanceRecord], roster: List[Student]) -> List[AttendanceRecord]:
    """
    Aligne une feuille existante sur la liste d'appel :
    les élèves sortis disparaissent, les nouveaux arrivent en `pending`.
    """
    roster_ids = [s.id for s in roster]
    allowed = set(roster_ids)
    kept: List[AttendanceRecord] = []
    seen = set()
    for record in records:
        if record.student_id in allowed and record.student_id not in seen:
            kept.append(record)
            seen.add(record.student_id)
    kept.extend(AttendanceRecord(student_id=sid, status=PENDING) for sid in roster_ids if sid not in seen)
    return kept


def start_session(
    store: AppStore, class_id: str, subject_id: str, day: Optional[dt.date] = None
) -> AttendanceSession:
    """
    Ouvre (ou reprend) la feuille du jour.
    Une feuille déjà enregistrée est reprise telle quelle, après réconciliation.
    """
    day = day or dt.date.today()
    key = transcript_key(class_id, subject_id, day)
    with store.lock:
        roster = build_roster(store, class_id, subject_id)
        stored = _load_records(store, key)
        records = reconcile(stored or [], roster)
        if stored is None or records != stored:
            _save_records(store, key, records)

    return AttendanceSession(class_id=class_id, subject_id=subject_id, date=day, records=records)


def mark_attendance(
    store: AppStore,
    class_id: str,
    subject_id: str,
    student_id: str,
    status: str,
    day: Optional[dt.date] = None,
) -> AttendanceSession:
    """Marque un élève présent ou absent et réécrit la feuille complète."""
    if status not in (PRESENT, ABSENT):
        raise ValidationError("Le statut doit être 'present' ou 'absent'.")

    with store.lock:
        session = start_session(store, class_id, subject_id, day)
        _find_record(session, student_id).status = status
        _save_records(store, transcript_key(class_id, subject_id, session.date), session.records)
    return session


def toggle_attendance(
    store: AppStore, class_id: str, subject_id: str, student_id: str, day: Optional[dt.date] = None
) -> AttendanceSession:
    """Bascule present ⇄ absent depuis le résumé ; un élève encore en attente devient présent."""
    with store.lock:
        session = start_session(store, class_id, subject_id, day)
        record = _find_record(session, student_id)
        record.status = ABSENT if record.status == PRESENT else PRESENT
        _save_records(store, transcript_key(class_id, subject_id, session.date), session.records)
    return session


def get_summary(
    store: AppStore, class_id: str, subject_id: str, day: Optional[dt.date] = None
) -> AttendanceSummary:
    session = start_session(store, class_id, subject_id, day)
    statuses = [r.status for r in session.records]
    return AttendanceSummary(
        **session.model_dump(),
        present_count=statuses.count(PRESENT),
        absent_count=statuses.count(ABSENT),
        pending_count=statuses.count(PENDING),
        complete=session.is_complete,
    )


def _find_record(session: AttendanceSession, student_id: str) -> AttendanceRecord:
    record = next((r for r in session.records if r.student_id == student_id), None)
    if record is None:
        raise NotFoundError("Élève absent de la liste d'appel.")
    return record


def _load_records(store: AppStore, key: str) -> Optional[List[AttendanceRecord]]:
    raw = store.port.get(key)
    if raw is None:
        return None
    try:
        return _RECORDS.validate_json(raw)
    except ValueError as e:
        logger.warning("Feuille de présence %s illisible, recréée : %s", key, e)
        return None


def _save_records(store: AppStore, key: str, records: List[AttendanceRecord]) -> None:
    store.port.set(key, _RECORDS.dump_json(records).decode("utf-8"))
