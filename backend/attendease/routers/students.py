"""
Router pour l'import en masse des élèves.
POST /api/v1/students/upload : fichier CSV (Student Name, Class Name, Subjects)
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from attendease.dependencies import get_store
from attendease.schemas.student import StudentImportReport
from attendease.services.student_import import parse_and_import_csv
from attendease.services.store import AppStore

router = APIRouter(prefix="/api/v1/students", tags=["Élèves"])

ALLOWED_CONTENT_TYPES = {"text/csv", "text/plain", "application/vnd.ms-excel"}
MAX_FILE_SIZE_MB = 5


@router.post("/upload", response_model=StudentImportReport, summary="Importer des élèves via CSV")
async def upload_students(
    file: UploadFile = File(...),
    store: AppStore = Depends(get_store),
):
    """
    Importe une liste d'élèves depuis un fichier CSV.

    Format attendu du CSV :
    - Colonnes obligatoires : `Student Name`, `Class Name`, `Subjects`
    - `Subjects` : noms de matières séparés par des virgules (cellule entre guillemets)
    - Encodage : UTF-8 (avec ou sans BOM)

    Retourne le nombre d'élèves créés, de lignes rejetées, et le détail des premières erreurs.
    """
    # Validation du type de fichier
    if file.content_type not in ALLOWED_CONTENT_TYPES and not (file.filename or "").endswith(".csv"):
        raise HTTPException(
            status_code=400,
            detail="Format invalide. Seuls les fichiers CSV sont acceptés."
        )

    content = await file.read()

    # Validation de la taille
    if len(content) > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"Fichier trop volumineux. Taille maximale : {MAX_FILE_SIZE_MB} Mo."
        )

    if not content:
        raise HTTPException(status_code=400, detail="Le fichier CSV est vide.")

    try:
        content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Le fichier doit être encodé en UTF-8.")

    # hors de la boucle d'événements : l'import attend le verrou du magasin
    return await run_in_threadpool(parse_and_import_csv, content, store)
