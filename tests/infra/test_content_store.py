"""Tests des dépôts de contenus (mémoire et SQLAlchemy).

Les deux implémentations doivent respecter le même contrat : contenus append-only, contrôle de
propriétaire et patch conditionnel de la catégorie.
"""

from __future__ import annotations

import pytest

from backend.domain.entities import ContentArtifact
from backend.infra.repo.content_store import SqlContentStore, create_schema
from backend.infra.repo.db import get_engine
from backend.infra.repositories import InMemoryContentStore
from tests.fakes import OTHER, OWNER

# Constantes pour éviter les erreurs PLR2004 (Magic values)
EXPECTED_CONTENTS = 2

ARTIFACT = ContentArtifact(description="d", keywords=["a", "b"], category="Electronics")


@pytest.fixture(params=["memory", "sql"])
def any_store(request):
    """Dépôt en mémoire ou SQLite en mémoire."""
    if request.param == "memory":
        return InMemoryContentStore()
    engine = get_engine()
    create_schema(engine)
    return SqlContentStore(engine)


def test_create_content_without_product(any_store) -> None:
    """Teste l'insertion d'un contenu non lié."""
    content = any_store.create_content(ARTIFACT, "gemini-1.5-flash", "en")

    assert content.id
    assert content.product_id is None
    assert content.model == "gemini-1.5-flash"
    stored = any_store.list_contents()
    assert [c.id for c in stored] == [content.id]
    assert stored[0].keywords == ["a", "b"]


def test_contents_are_append_only(any_store) -> None:
    """Teste que chaque génération ajoute une ligne, sans remplacement."""
    product = any_store.add_product(OWNER, "Mouse")
    first = any_store.create_content(ARTIFACT, "m", "en", product_id=product.id)
    second = any_store.create_content(ARTIFACT, "m", "id", product_id=product.id)

    contents = any_store.list_contents(product.id)
    assert len(contents) == EXPECTED_CONTENTS
    assert {c.id for c in contents} == {first.id, second.id}
    assert any_store.list_contents("other-product") == []


def test_find_product_by_owner(any_store) -> None:
    """Teste le contrôle de propriétaire."""
    product = any_store.add_product(OWNER, "Mouse", {"dpi": 1600})

    found = any_store.find_product_by_owner(product.id, OWNER)
    assert found is not None
    assert found.title == "Mouse"
    assert found.attributes == {"dpi": 1600}
    assert any_store.find_product_by_owner(product.id, OTHER) is None
    assert any_store.find_product_by_owner("missing", OWNER) is None


def test_patch_category_only_when_empty(any_store) -> None:
    """Teste la mise à jour conditionnelle de la catégorie."""
    product = any_store.add_product(OWNER, "Mouse")

    assert any_store.patch_product_category(product.id, "Electronics") is True
    assert any_store.patch_product_category(product.id, "Accessories") is False
    assert any_store.get_product(product.id).category == "Electronics"


def test_patch_category_fills_blank_string(any_store) -> None:
    """Teste qu'une catégorie vide ("") est considérée comme absente."""
    product = any_store.add_product(OWNER, "Mouse", category="")
    assert any_store.patch_product_category(product.id, "Electronics") is True


def test_patch_category_missing_product_raises(any_store) -> None:
    """Teste l'erreur sur produit inexistant."""
    with pytest.raises(KeyError):
        any_store.patch_product_category("missing", "Electronics")


def test_product_id_can_be_provided(any_store) -> None:
    """Teste l'amorçage avec un identifiant imposé."""
    product = any_store.add_product(OWNER, "Mouse", product_id="p-42")
    assert product.id == "p-42"
    assert any_store.get_product("p-42").owner_id == OWNER


def test_in_memory_store_hands_out_detached_copies() -> None:
    """Teste qu'un contenu renvoyé ne partage aucune liste avec l'enregistrement stocké."""
    store = InMemoryContentStore()
    created = store.create_content(ARTIFACT, "m", "en")

    created.keywords.append("x")
    store.list_contents()[0].keywords.append("y")

    assert store.list_contents()[0].keywords == ["a", "b"]


@pytest.mark.parametrize("raw_attributes", [["a", "b"], "color=black", 42, None])
def test_sql_store_ignores_non_mapping_attributes(raw_attributes) -> None:
    """Teste qu'une colonne `attributes` externe mal formée ne fait pas échouer la lecture."""
    from backend.infra.repo.db import get_session_factory, session_scope
    from backend.infra.repo.models import ProductORM

    engine = get_engine()
    create_schema(engine)
    with session_scope(get_session_factory(engine)) as session:
        session.add(ProductORM(id="p1", user_id=OWNER, title="Mouse", attributes=raw_attributes))

    product = SqlContentStore(engine).find_product_by_owner("p1", OWNER)

    assert product is not None
    assert product.attributes == {}
