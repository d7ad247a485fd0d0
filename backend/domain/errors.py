"""
Taxonomie des erreurs de la génération de contenu IA.

Chaque erreur porte un `kind` lisible par machine, repris tel quel dans l'enveloppe d'erreur
renvoyée par l'API (`backend/api/errors.py`).
"""

from __future__ import annotations


class ErrorKinds:
    """Codes d'erreur exposés aux clients."""

    INVALID_INPUT = "INVALID_INPUT"
    RATE_LIMITED = "RATE_LIMITED"
    NOT_FOUND = "NOT_FOUND"
    GENERATION_FAILED = "GENERATION_FAILED"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class GenerationError(Exception):
    """Erreur de base du pipeline de génération."""

    kind: str = ErrorKinds.GENERATION_FAILED

    def __init__(self, message: str) -> None:
        """Initialise l'erreur avec un message lisible."""
        super().__init__(message)
        self.message = message


class InvalidInput(GenerationError):
    """Requête mal formée, rejetée avant toute consommation de quota."""

    kind = ErrorKinds.INVALID_INPUT


class RateLimited(GenerationError):
    """Admission refusée par le registre de quotas."""

    kind = ErrorKinds.RATE_LIMITED

    def __init__(self, retry_after: float, message: str = "Too many AI generations") -> None:
        """Conserve le délai (secondes) avant réouverture de la fenêtre."""
        super().__init__(message)
        self.retry_after = retry_after


class NotFound(GenerationError):
    """Produit absent ou non possédé par l'identité (indiscernables)."""

    kind = ErrorKinds.NOT_FOUND


class ProviderError(GenerationError):
    """Échec de transport ou d'indisponibilité du fournisseur de modèle."""

    code = "provider_error"


class MalformedResponse(GenerationError):
    """Le fournisseur a répondu mais le contenu ne passe pas la validation."""

    code = "malformed_response"


class GenerationFailed(GenerationError):
    """Catégorie unique vue par l'appelant pour ProviderError et MalformedResponse.

    `code` garde la distinction interne pour les logs et les métriques.
    """

    kind = ErrorKinds.GENERATION_FAILED

    def __init__(self, code: str, message: str = "Failed to generate AI content") -> None:
        """Initialise avec le code interne (`provider_error` / `malformed_response`)."""
        super().__init__(message)
        self.code = code


class PersistenceError(GenerationError):
    """Échec d'écriture du contenu validé ; la requête échoue entièrement."""

    kind = ErrorKinds.PERSISTENCE_ERROR
