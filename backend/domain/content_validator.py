"""
Validation des réponses brutes du modèle.

La sortie du modèle est traitée comme une entrée non fiable : extraction de l'objet JSON entre la
première `{` et la dernière `}` (tolère la prose autour), parsing strict, puis validation
structurelle. Aucune confiance partielle : la moindre anomalie lève `MalformedResponse`.
"""

from __future__ import annotations

import json
from typing import Any

from backend.domain.entities import ContentArtifact
from backend.domain.errors import MalformedResponse


def extract_json_object(raw_text: str) -> dict[str, Any]:
    """Extrait et parse l'objet JSON encadré par la première `{` et la dernière `}`."""
    text = raw_text or ""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise MalformedResponse("no_json_object")
    try:
        parsed = json.loads(text[start : end + 1])
    except (ValueError, RecursionError) as exc:
        # imbrication pathologique : le décodeur C dépasse la pile
        raise MalformedResponse("invalid_json") from exc
    if not isinstance(parsed, dict):
        raise MalformedResponse("not_an_object")
    return parsed


def _required_text(parsed: dict[str, Any], key: str) -> str:
    value = parsed.get(key)
    if not isinstance(value, str):
        raise MalformedResponse(f"missing_{key}")
    value = value.strip()
    if not value:
        raise MalformedResponse(f"empty_{key}")
    return value


def _keywords(parsed: dict[str, Any]) -> list[str]:
    raw = parsed.get("keywords")
    if not isinstance(raw, list):
        raise MalformedResponse("keywords_not_a_list")
    keywords: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            raise MalformedResponse("keyword_not_a_string")
        item = item.strip()
        if item:
            keywords.append(item)
    if not keywords:
        raise MalformedResponse("empty_keywords")
    return keywords


def validate_response(raw_text: str) -> ContentArtifact:
    """Transforme le texte brut du modèle en `ContentArtifact` nettoyé.

    Toutes les chaînes sont débarrassées des espaces en tête/fin ; les mots-clés vides après
    nettoyage sont écartés et au moins un doit subsister.
    """
    parsed = extract_json_object(raw_text)
    return ContentArtifact(
        description=_required_text(parsed, "description"),
        keywords=_keywords(parsed),
        category=_required_text(parsed, "category"),
    )
