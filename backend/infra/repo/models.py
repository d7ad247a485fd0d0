"""SQLAlchemy models for persistence layer (Product, AIContent)."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    MetaData,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Classe de base pour tous les modèles SQLAlchemy."""

    metadata = MetaData()


class ProductORM(Base):
    """Modèle ORM des produits (référencés par la passerelle, gérés ailleurs)."""

    __tablename__ = "products"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(512), nullable=False)
    attributes = Column(JSON, nullable=True)
    category = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class AIContentORM(Base):
    """Modèle ORM des contenus générés (append-only)."""

    __tablename__ = "ai_contents"

    id = Column(String(64), primary_key=True)
    description = Column(Text, nullable=False)
    keywords = Column(JSON, nullable=False)
    category = Column(String(255), nullable=False)
    model = Column(String(128), nullable=False)
    language = Column(String(8), nullable=False)
    product_id = Column(String(64), ForeignKey("products.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
