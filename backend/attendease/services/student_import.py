"""
Service d'import CSV pour les élèves.
Gère le parsing, la validation ligne par ligne et la création des élèves.

Colonnes obligatoires (noms exacts, ordre libre) : `Student Name`, `Class Name`, `Subjects`.
`Subjects` contient des noms de matières séparés par des virgules ; une cellule vide
est valide (aucune inscription).

Une ligne invalide n'empêche pas l'import des autres : chaque erreur est
rapportée avec son numéro de ligne. Seules une structure CSV illisible ou des
colonnes manquantes annulent tout le lot.
"""

import csv
import io
import logging
from typing import List, Union

from attendease.config import settings
from attendease.exceptions import DomainError
from attendease.schemas.school_class import ClassItem
from attendease.schemas.student import StudentCreate, StudentImportReport
from attendease.services import class_service, subject_service, student_service
from attendease.services.store import AppStore

logger = logging.getLogger(__name__)

COL_STUDENT = "Student Name"
COL_CLASS = "Class Name"
COL_SUBJECTS = "Subjects"
REQUIRED_COLUMNS = (COL_STUDENT, COL_CLASS, COL_SUBJECTS)


class RowError(Exception):
    """Erreur limitée à une ligne du CSV : rapportée, jamais propagée."""


def _detect_separator(sample: str) -> str:
    """Détecte le séparateur CSV (virgule ou point-virgule) sur la ligne d'en-tête."""
    if sample.count(";") > sample.count(","):
        return ";"
    return ","


def _read_rows(text: str):
    """
    Lit toutes les lignes (en-tête compris), lignes vides ignorées.
    Retourne (en-tête, lignes, nombre de lignes de données, problèmes de structure).
    """
    lines = text.splitlines()
    header_line = next((line for line in lines if line.strip()), "")
    separator = _detect_separator(header_line)
    problems: List[str] = []
    rows: List[List[str]] = []
    try:
        for raw in csv.reader(io.StringIO(text), delimiter=separator, strict=True):
            if not raw or all(not cell.strip() for cell in raw):
                continue
            rows.append(raw)
    except csv.Error as e:
        problems.append(f"CSV illisible : {e}")

    if not rows:
        return None, [], 0, problems

    header = [h.strip() for h in rows[0]]
    data_rows = rows[1:]
    # en cas d'erreur de lecture, les lignes non lues comptent aussi
    total = max(len(data_rows), sum(1 for line in lines if line.strip()) - 1) if problems else len(data_rows)
    for index, raw in enumerate(data_rows):
        if len(raw) != len(header):
            problems.append(
                f"Ligne {index + 2} : {len(raw)} champs trouvés, {len(header)} attendus."
            )
    return header, data_rows, total, problems


def _resolve_subjects(store: AppStore, school_class: ClassItem, cell: str) -> List[str]:
    """Convertit la cellule `Subjects` en IDs. S'arrête à la première matière invalide."""
    subject_ids: List[str] = []
    for subject_name in (part.strip() for part in cell.split(",")):
        if not subject_name:
            continue
        subject = subject_service.get_subject_by_name(store, subject_name)
        if subject is None:
            raise RowError(f"matière \"{subject_name}\" introuvable.")
        if subject.id not in school_class.subject_ids:
            raise RowError(
                f"la matière \"{subject_name}\" n'est pas enseignée en classe \"{school_class.name}\"."
            )
        subject_ids.append(subject.id)
    return subject_ids


def _import_row(store: AppStore, row: dict) -> None:
    student_name = (row.get(COL_STUDENT) or "").strip()
    class_name = (row.get(COL_CLASS) or "").strip()
    subjects_cell = (row.get(COL_SUBJECTS) or "").strip()

    if not student_name:
        raise RowError("nom de l'élève manquant.")
    if not class_name:
        raise RowError("nom de la classe manquant.")

    school_class = class_service.get_class_by_name(store, class_name)
    if school_class is None:
        raise RowError(f"classe \"{class_name}\" introuvable.")

    subject_ids = _resolve_subjects(store, school_class, subjects_cell) if subjects_cell else []

    try:
        student_service.create_student(
            store,
            school_class.id,
            StudentCreate(name=student_name, subject_ids=subject_ids),
            commit=False,
        )
    except DomainError as e:
        raise RowError(f"création de \"{student_name}\" impossible : {e}") from e
    except Exception as e:
        logger.exception("Import CSV : échec inattendu pour \"%s\"", student_name)
        raise RowError(f"création de \"{student_name}\" impossible : erreur interne.") from e


def _report(success: int, failed: int, errors: List[str]) -> StudentImportReport:
    """Construit le rapport en ne gardant que les premiers messages ; le reste part dans les logs."""
    limit = settings.IMPORT_ERROR_LIMIT
    if len(errors) > limit:
        logger.warning("Import CSV : %d erreurs non renvoyées au client", len(errors) - limit)
        for message in errors[limit:]:
            logger.warning("Import CSV : %s", message)
    return StudentImportReport(success_count=success, error_count=failed, errors=errors[:limit])


def parse_and_import_csv(content: Union[bytes, str], store: AppStore) -> StudentImportReport:
    """
    Parse le CSV, valide chaque ligne et crée les élèves valides.

    Règles :
    - structure illisible ou colonnes manquantes → lot entier rejeté
      (error_count = nombre de lignes de données)
    - ligne sans nom d'élève / de classe, classe inconnue, matière inconnue ou
      non enseignée dans la classe → ligne rejetée, les suivantes continuent
    - une seule écriture du magasin à la fin du lot
    """
    text = content.decode("utf-8-sig") if isinstance(content, bytes) else content.lstrip("\ufeff")

    header, data_rows, total, problems = _read_rows(text)

    if header is None:
        return _report(0, 0, problems or ["Fichier CSV vide ou illisible."])

    if problems:
        return _report(0, total, problems)

    missing = [col for col in REQUIRED_COLUMNS if col not in header]
    if missing:
        return _report(0, len(data_rows), [
            f"Colonnes manquantes : {', '.join(missing)}. "
            f"Colonnes attendues : {', '.join(REQUIRED_COLUMNS)}."
        ])

    success = 0
    errors: List[str] = []
    # le lot entier sous le verrou : aucune écriture concurrente ne voit un lot à moitié ajouté
    with store.lock:
        for index, raw in enumerate(data_rows):
            row_num = index + 2  # ligne 1 = en-tête
            row = dict(zip(header, raw))
            try:
                _import_row(store, row)
            except RowError as e:
                errors.append(f"Ligne {row_num} : {e}")
                continue
            success += 1

        if success:
            store.save()
    logger.info("Import CSV terminé : %d élèves créés, %d lignes rejetées", success, len(errors))
    return _report(success, len(errors), errors)
