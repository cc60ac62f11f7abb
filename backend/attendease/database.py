"""
Configuration de la connexion à la base de données.
La base ne sert que de support au stockage clé-valeur (voir services/persistence.py).
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from attendease.config import settings

# SQLite refuse par défaut le partage d'une connexion entre threads (serveur ASGI)
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
