"""
Entités du domaine métier.

Ce module définit les modèles de données manipulés par la passerelle de génération de contenu :
produits (référencés, non possédés), artefacts validés et contenus persistés.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Language = Literal["en", "id"]
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "id")

AttributeValue = str | int | float | bool | None


class Product(BaseModel):
    """Produit d'un vendeur, tel que lu depuis le dépôt de contenus."""

    id: str
    owner_id: str
    title: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    category: str | None = None


class ContentArtifact(BaseModel):
    """Triplet validé (description, mots-clés, catégorie), immuable une fois construit."""

    model_config = ConfigDict(frozen=True)

    description: str
    keywords: list[str]
    category: str


class PersistedContent(ContentArtifact):
    """Artefact enregistré : identifiant, date de création, modèle, langue, produit lié."""

    id: str
    created_at: datetime
    model: str
    language: Language
    product_id: str | None = None


class GenerationResult(BaseModel):
    """Résultat d'une orchestration réussie, éventuellement assorti d'avertissements."""

    content: PersistedContent
    warnings: list[str] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Sérialise le résultat au format de réponse de l'API."""
        c = self.content
        payload: dict[str, Any] = {
            "description": c.description,
            "keywords": list(c.keywords),
            "category": c.category,
            "id": c.id,
            "createdAt": c.created_at.isoformat(),
        }
        if c.product_id is not None:
            payload["productId"] = c.product_id
        if self.warnings:
            payload["warnings"] = list(self.warnings)
        return payload
