"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Extraire l'identité authentifiée (claim `sub` du JWT) sans la revérifier ailleurs.
- Fournir l'orchestrateur depuis le conteneur ; les tests le remplacent via
  `app.dependency_overrides`.
"""

from fastapi import Header, HTTPException

from backend.core.container import container
from backend.core.http_constants import HTTP_UNAUTHORIZED
from backend.domain.auth import decode_token
from backend.domain.content_orchestrator import ContentOrchestrator


def get_current_identity(authorization: str | None = Header(None)) -> str:
    """Retourne l'identité opaque portée par le token `Authorization: Bearer ...`."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=HTTP_UNAUTHORIZED, detail="missing_token")
    token = authorization.split(" ", 1)[1].strip()
    data = decode_token(token, container.settings.JWT_SECRET, container.settings.JWT_ALG)
    if not data:
        raise HTTPException(status_code=HTTP_UNAUTHORIZED, detail="invalid_token")
    return data.sub


def get_orchestrator() -> ContentOrchestrator:
    """Retourne l'orchestrateur de génération du conteneur."""
    return container.orchestrator
