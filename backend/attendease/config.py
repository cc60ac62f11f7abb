"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Base de données (support du stockage clé-valeur)
    DATABASE_URL: str = "sqlite:///./attendease.db"

    # Clé unique sous laquelle est sérialisé l'agrégat AppData
    APP_DATA_KEY: str = "attendeaseAppData"

    # Photo affichée quand un élève n'en a pas
    PLACEHOLDER_PHOTO_URL: str = "https://placehold.co/100x100.png"

    # Génération des données par défaut (reseed)
    SEED_MIN_STUDENTS: int = 20
    SEED_MAX_STUDENTS: int = 30
    SEED_RANDOM_SEED: Optional[int] = None

    # Import CSV : nombre de messages d'erreur détaillés renvoyés au client
    IMPORT_ERROR_LIMIT: int = 10

    # Environnement
    ENV: str = "development"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
