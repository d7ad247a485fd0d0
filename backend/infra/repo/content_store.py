# ============================================================
# Module : backend/infra/repo/content_store.py
# Objet  : Accès SQL pour les contenus IA et la lecture/patch des produits.
# Notes  : le schéma est géré hors de ce module (create_schema sert au dev/tests).
# ============================================================

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import or_, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ...domain.entities import ContentArtifact, PersistedContent, Product
from .db import get_session_factory, session_scope
from .models import AIContentORM, Base, ProductORM


def create_schema(engine: Engine) -> None:
    """Crée les tables manquantes (dev/tests uniquement)."""
    Base.metadata.create_all(engine)


def _to_product(row: ProductORM) -> Product:
    return Product(
        id=row.id,
        owner_id=row.user_id,
        title=row.title,
        # colonne JSON externe : toute valeur autre qu'un objet est ignorée
        attributes=row.attributes if isinstance(row.attributes, dict) else {},
        category=row.category,
    )


class SqlContentStore:
    """Dépôt SQLAlchemy : une session (transaction) par opération."""

    def __init__(self, engine: Engine) -> None:
        """Construit le dépôt à partir d'un moteur SQLAlchemy."""
        self._engine = engine
        self._sessions: sessionmaker = get_session_factory(engine)

    def add_product(
        self,
        owner_id: str,
        title: str,
        attributes: dict | None = None,
        category: str | None = None,
        product_id: str | None = None,
    ) -> Product:
        """Insère un produit (amorçage dev/tests)."""
        row = ProductORM(
            id=product_id or uuid.uuid4().hex,
            user_id=owner_id,
            title=title,
            attributes=attributes or {},
            category=category,
        )
        with session_scope(self._sessions) as session:
            session.add(row)
            session.flush()
            return _to_product(row)

    def get_product(self, product_id: str) -> Product | None:
        """Retourne un produit par id, sans contrôle de propriétaire."""
        with session_scope(self._sessions) as session:
            row = session.get(ProductORM, product_id)
            return _to_product(row) if row else None

    def create_content(
        self,
        artifact: ContentArtifact,
        model_name: str,
        language: str,
        product_id: str | None = None,
    ) -> PersistedContent:
        """Insère une ligne `ai_contents` et renvoie le contenu persisté."""
        content = PersistedContent(
            **artifact.model_dump(),
            id=uuid.uuid4().hex,
            created_at=datetime.now(UTC),
            model=model_name,
            language=language,
            product_id=product_id,
        )
        row = AIContentORM(
            id=content.id,
            description=content.description,
            keywords=list(content.keywords),
            category=content.category,
            model=content.model,
            language=content.language,
            product_id=content.product_id,
            created_at=content.created_at,
        )
        with session_scope(self._sessions) as session:
            session.add(row)
        return content

    def list_contents(self, product_id: str | None = None) -> list[PersistedContent]:
        """Liste les contenus (par date de création), filtrables par produit."""
        stmt = select(AIContentORM)
        if product_id is not None:
            stmt = stmt.where(AIContentORM.product_id == product_id)
        stmt = stmt.order_by(AIContentORM.created_at)
        with session_scope(self._sessions) as session:
            rows = session.execute(stmt).scalars().all()
            return [
                PersistedContent(
                    id=r.id,
                    description=r.description,
                    keywords=list(r.keywords or []),
                    category=r.category,
                    model=r.model,
                    language=r.language,
                    product_id=r.product_id,
                    created_at=r.created_at,
                )
                for r in rows
            ]

    def find_product_by_owner(self, product_id: str, identity: str) -> Product | None:
        """Retourne le produit seulement s'il appartient à `identity`."""
        stmt = select(ProductORM).where(
            ProductORM.id == product_id, ProductORM.user_id == identity
        )
        with session_scope(self._sessions) as session:
            row = session.execute(stmt).scalars().first()
            return _to_product(row) if row else None

    def patch_product_category(self, product_id: str, category: str) -> bool:
        """Mise à jour conditionnelle : n'écrit que si la catégorie est encore vide.

        Lève KeyError si le produit n'existe pas.
        """
        stmt = (
            update(ProductORM)
            .where(
                ProductORM.id == product_id,
                or_(ProductORM.category.is_(None), ProductORM.category == ""),
            )
            .values(category=category)
        )
        with session_scope(self._sessions) as session:
            result = session.execute(stmt)
            if result.rowcount:
                return True
            if session.get(ProductORM, product_id) is None:
                raise KeyError(f"product_not_found:{product_id}")
            return False
