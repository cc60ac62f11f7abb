"""
Erreurs métier levées par les services.
Toutes héritent de ValueError : les appelants qui interceptent ValueError
continuent de fonctionner.
"""


class DomainError(ValueError):
    """Violation d'une règle métier."""


class ValidationError(DomainError):
    """Champ obligatoire vide ou structure invalide (ex. en-têtes CSV)."""


class DuplicateError(DomainError):
    """Nom déjà utilisé (matière, classe)."""


class NotFoundError(DomainError):
    """Entité référencée introuvable."""


class PersistenceError(DomainError):
    """Lecture ou écriture impossible sur le support de persistance."""
