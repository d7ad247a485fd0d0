# Schémas Pydantic exposés par l'API (requêtes et réponses).

from pydantic import BaseModel, Field

from backend.domain.entities import AttributeValue, Language


class GeneratePayload(BaseModel):
    """Requête de génération à partir de zéro.

    Champs:
    - title: str (non vide)
    - attributes: dict[str, scalaire] | None
    - language: "en" | "id" (défaut "en")
    """

    title: str = Field(min_length=1)
    attributes: dict[str, AttributeValue] | None = None
    language: Language = "en"


class ProductGeneratePayload(BaseModel):
    """Requête de génération pour un produit existant (corps optionnel)."""

    language: Language = "en"


class GeneratedContentResponse(BaseModel):
    """Contenu généré et persisté.

    Champs:
    - description, keywords, category: artefact validé
    - id, createdAt: identifiant et date de création du contenu persisté
    - productId: produit lié (génération pour produit uniquement)
    - warnings: avertissements non bloquants (ex. `category_patch_failed`)
    """

    description: str
    keywords: list[str]
    category: str
    id: str
    createdAt: str
    productId: str | None = None
    warnings: list[str] | None = None
