"""
Endpoint de santé pour vérifier la disponibilité de l'API et du backend.

Expose `/health` pour signaler l'état général de l'application, du stockage et du fournisseur
LLM configuré.
"""

from fastapi import APIRouter

from backend.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et indique les backends configurés."""
    return {
        "status": "ok",
        "storage": getattr(container, "storage_backend", "unknown"),
        "llm_model": getattr(container.llm, "model", "unknown"),
    }
