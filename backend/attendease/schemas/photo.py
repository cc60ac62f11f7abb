"""
Références de photo d'élève.
Le stockage réel des fichiers est externe : on ne manipule qu'une URL distante
ou une prévisualisation locale (blob:, data:) fournie par le client.
"""

from dataclasses import dataclass
from typing import Optional

LOCAL_PREVIEW_SCHEMES = ("blob:", "data:")


@dataclass(frozen=True)
class RemotePhoto:
    url: str

    def resolve_display_url(self) -> str:
        return self.url


@dataclass(frozen=True)
class LocalPreviewPhoto:
    """Prévisualisation locale : le handle est directement affichable par le client qui l'a créé."""
    handle: str

    def resolve_display_url(self) -> str:
        return self.handle


def photo_ref(value: Optional[str]):
    """Construit la référence adaptée à la valeur stockée, ou None si pas de photo."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    if value.startswith(LOCAL_PREVIEW_SCHEMES):
        return LocalPreviewPhoto(handle=value)
    return RemotePhoto(url=value)
