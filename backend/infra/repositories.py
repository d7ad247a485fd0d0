"""
Dépôts de contenus IA et de produits.

Ce module définit le contrat du dépôt consommé par l'orchestrateur et une implémentation en
mémoire (dev/tests). L'implémentation SQL vit dans `backend.infra.repo.content_store`.
"""

import threading
import uuid
from datetime import UTC, datetime
from typing import Any, Protocol

from backend.domain.entities import ContentArtifact, PersistedContent, Product


class ContentStore(Protocol):
    """Contrat de persistance consommé par la passerelle de génération."""

    def create_content(
        self,
        artifact: ContentArtifact,
        model_name: str,
        language: str,
        product_id: str | None = None,
    ) -> PersistedContent: ...

    def find_product_by_owner(self, product_id: str, identity: str) -> Product | None: ...

    def patch_product_category(self, product_id: str, category: str) -> bool: ...


class InMemoryContentStore:
    """
    Dépôt en mémoire (utilisé pour dev/tests).

    Stocke produits et contenus dans des dicts locaux, non persistants, protégés par un verrou.
    """

    def __init__(self):
        """Initialise une base mémoire vide."""
        self._lock = threading.Lock()
        self._products: dict[str, dict[str, Any]] = {}
        self._contents: dict[str, PersistedContent] = {}

    def add_product(
        self,
        owner_id: str,
        title: str,
        attributes: dict[str, Any] | None = None,
        category: str | None = None,
        product_id: str | None = None,
    ) -> Product:
        """Enregistre un produit (amorçage des tests et de la démo) et le renvoie."""
        record = {
            "id": product_id or uuid.uuid4().hex,
            "owner_id": owner_id,
            "title": title,
            "attributes": dict(attributes or {}),
            "category": category,
        }
        with self._lock:
            self._products[record["id"]] = record
        return Product(**record)

    def get_product(self, product_id: str) -> Product | None:
        """Retourne un produit par id, sans contrôle de propriétaire."""
        with self._lock:
            record = self._products.get(product_id)
            return Product(**record) if record else None

    def create_content(
        self,
        artifact: ContentArtifact,
        model_name: str,
        language: str,
        product_id: str | None = None,
    ) -> PersistedContent:
        """Crée un contenu persisté (append-only) et en renvoie une copie détachée."""
        content = PersistedContent(
            **artifact.model_dump(),
            id=uuid.uuid4().hex,
            created_at=datetime.now(UTC),
            model=model_name,
            language=language,
            product_id=product_id,
        )
        with self._lock:
            self._contents[content.id] = content
        return content.model_copy(deep=True)

    def list_contents(self, product_id: str | None = None) -> list[PersistedContent]:
        """Liste les contenus, filtrables par produit."""
        with self._lock:
            items = [c.model_copy(deep=True) for c in self._contents.values()]
        if product_id is None:
            return items
        return [c for c in items if c.product_id == product_id]

    def find_product_by_owner(self, product_id: str, identity: str) -> Product | None:
        """Retourne le produit seulement s'il appartient à `identity`."""
        with self._lock:
            record = self._products.get(product_id)
            if not record or record["owner_id"] != identity:
                return None
            return Product(**record)

    def patch_product_category(self, product_id: str, category: str) -> bool:
        """Renseigne la catégorie si elle est encore vide ; False si déjà présente."""
        with self._lock:
            record = self._products.get(product_id)
            if record is None:
                raise KeyError(f"product_not_found:{product_id}")
            if record.get("category"):
                return False
            record["category"] = category
            return True
