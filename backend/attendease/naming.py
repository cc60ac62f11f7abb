"""
Normalisation des noms et génération des identifiants.
"""

import re
import time
import uuid

from attendease.exceptions import ValidationError

_WHITESPACE = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Forme de comparaison d'un nom : sans espaces autour, en minuscules."""
    return name.strip().lower()


def require_non_empty(value: str, field_name: str) -> str:
    """Retourne la valeur sans espaces autour, ou lève ValidationError si elle est vide."""
    if value is None or not value.strip():
        raise ValidationError(f"{field_name} ne peut pas être vide.")
    return value.strip()


def slugify(name: str) -> str:
    return _WHITESPACE.sub("-", name.strip().lower())


def new_id(kind: str, name: str) -> str:
    """
    Identifiant lisible : `<kind>-<slug>-<timestamp ms>-<suffixe>`.
    Le suffixe aléatoire évite les collisions quand plusieurs entités
    du même nom sont créées dans la même milliseconde (import CSV).
    """
    return f"{kind}-{slugify(name)}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def class_prefix(class_name: str) -> str:
    """Préfixe des numéros de matricule : nom de la classe sans espaces, en majuscules."""
    return _WHITESPACE.sub("", class_name).upper()
