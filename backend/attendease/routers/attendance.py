"""
Router pour la prise de présence d'une classe dans une matière, un jour donné.
"""

import datetime as dt

from fastapi import APIRouter, Depends

from attendease.dependencies import get_store
from attendease.schemas.attendance import AttendanceMark, AttendanceSession, AttendanceSummary
from attendease.services import attendance_service
from attendease.services.store import AppStore

router = APIRouter(prefix="/api/v1/attendance", tags=["Présences"])


@router.post(
    "/{class_id}/{subject_id}/{day}",
    response_model=AttendanceSession,
    summary="Ouvrir ou reprendre la feuille de présence",
)
def start_session(class_id: str, subject_id: str, day: dt.date, store: AppStore = Depends(get_store)):
    """Crée la feuille (tous en attente) ou reprend celle déjà enregistrée pour ce jour."""
    return attendance_service.start_session(store, class_id, subject_id, day)


@router.put(
    "/{class_id}/{subject_id}/{day}/students/{student_id}",
    response_model=AttendanceSession,
    summary="Marquer un élève",
)
def mark_student(
    class_id: str,
    subject_id: str,
    day: dt.date,
    student_id: str,
    data: AttendanceMark,
    store: AppStore = Depends(get_store),
):
    return attendance_service.mark_attendance(store, class_id, subject_id, student_id, data.status, day)


@router.get(
    "/{class_id}/{subject_id}/{day}/summary",
    response_model=AttendanceSummary,
    summary="Résumé de la feuille de présence",
)
def get_summary(class_id: str, subject_id: str, day: dt.date, store: AppStore = Depends(get_store)):
    return attendance_service.get_summary(store, class_id, subject_id, day)


@router.post(
    "/{class_id}/{subject_id}/{day}/students/{student_id}/toggle",
    response_model=AttendanceSession,
    summary="Basculer présent / absent",
)
def toggle_student(
    class_id: str, subject_id: str, day: dt.date, student_id: str, store: AppStore = Depends(get_store)
):
    """Correction depuis le résumé : présent ⇄ absent, un élève en attente devient présent."""
    return attendance_service.toggle_attendance(store, class_id, subject_id, student_id, day)
