"""Construction des prompts de génération de fiches produit (anglais / indonésien)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from backend.domain.errors import InvalidInput

NO_ATTRIBUTES = {
    "en": "No specific attributes",
    "id": "Tidak ada atribut spesifik",
}

TEMPLATE_EN = """Create an attractive and SEO-friendly product description for the following product:

Title: {title}
Attributes: {attributes}

Please provide:
1. A detailed and persuasive product description (200-300 words)
2. 5-8 relevant SEO keywords
3. An appropriate product category

Format response as JSON:
{{
  "description": "full description here",
  "keywords": ["keyword 1", "keyword 2", ...],
  "category": "product category"
}}"""

TEMPLATE_ID = """Buat deskripsi produk yang menarik dan SEO-friendly untuk produk berikut:

Judul: {title}
Atribut: {attributes}

Tolong berikan:
1. Deskripsi produk yang detail dan persuasif (200-300 kata)
2. 5-8 kata kunci SEO yang relevan
3. Kategori produk yang tepat

Format respons sebagai JSON:
{{
  "description": "deskripsi lengkap di sini",
  "keywords": ["kata kunci 1", "kata kunci 2", ...],
  "category": "kategori produk"
}}"""

TEMPLATES = {"en": TEMPLATE_EN, "id": TEMPLATE_ID}


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def render_attributes(attributes: Mapping[str, Any] | None, language: str) -> str:
    """Sérialise les attributs en `clé: valeur` séparés par `, `."""
    if not attributes:
        return NO_ATTRIBUTES[language]
    return ", ".join(f"{key}: {_render_value(value)}" for key, value in attributes.items())


def build_prompt(title: str, attributes: Mapping[str, Any] | None = None, language: str = "en") -> str:
    """Construit le prompt modèle pour un titre, des attributs et une langue.

    Fonction pure : mêmes entrées, même texte à l'octet près. Toute langue hors `en`/`id` lève
    `InvalidInput`.
    """
    template = TEMPLATES.get(language)
    if template is None:
        raise InvalidInput(f"unsupported_language:{language}")
    return template.format(title=title, attributes=render_attributes(attributes, language))
