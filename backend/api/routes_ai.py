"""Routes de génération de contenu IA.

Ce module expose la génération de description, mots-clés SEO et catégorie, à partir de zéro ou
pour un produit existant de l'utilisateur authentifié.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.api.deps import get_current_identity, get_orchestrator
from backend.api.schemas import GeneratedContentResponse, GeneratePayload, ProductGeneratePayload

router = APIRouter(prefix="/ai", tags=["ai"])
_identity_dep = Depends(get_current_identity)
_orchestrator_dep = Depends(get_orchestrator)


@router.post(
    "/generate",
    response_model=GeneratedContentResponse,
    response_model_exclude_none=True,
)
def generate(payload: GeneratePayload, identity=_identity_dep, orch=_orchestrator_dep):
    """Génère un contenu à partir d'un titre et d'attributs libres."""
    result = orch.generate(
        identity,
        payload.title,
        attributes=payload.attributes,
        language=payload.language,
    )
    return result.to_payload()


@router.post(
    "/generate/{product_id}",
    response_model=GeneratedContentResponse,
    response_model_exclude_none=True,
)
def generate_for_product(
    product_id: str,
    payload: ProductGeneratePayload | None = None,
    identity=_identity_dep,
    orch=_orchestrator_dep,
):
    """Génère un contenu pour un produit de l'utilisateur et le lie à ce produit."""
    language = payload.language if payload else "en"
    result = orch.generate_for_product(identity, product_id, language=language)
    return result.to_payload()
