"""
Point d'entrée principal de l'API AttendEase.
Démarrage : uvicorn attendease.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import attendease.models  # noqa: F401  (enregistre les modèles dans Base.metadata avant create_all)
from attendease.database import Base, engine
from attendease.exceptions import (
    DomainError,
    DuplicateError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from attendease.routers import attendance, classes, students, subjects

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : crée la table clé-valeur si besoin."""
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="AttendEase API",
    description="API de gestion des classes, matières, élèves et feuilles de présence",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS : autorise tous les ports localhost en développement (à restreindre en production).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(subjects.router)
app.include_router(classes.router)
app.include_router(students.router)
app.include_router(attendance.router)

ERROR_STATUS_CODES = {
    NotFoundError: 404,
    DuplicateError: 409,
    ValidationError: 422,
    PersistenceError: 503,
}


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Traduit les erreurs métier des services en codes HTTP."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        400,
    )
    if status_code == 503:
        logger.error("Erreur de persistance : %s", exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware (qui injecte les headers CORS).
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "AttendEase API", "version": "0.1.0"}
