"""LLM factice déterministe pour le développement local (aucun appel réseau)."""

from __future__ import annotations

import json
import re
from typing import Literal, overload

from backend.infra.llm.base import LLM

_TITLE_RE = re.compile(r"^(?:Title|Judul): (.*)$", re.MULTILINE)


class FakeLLM(LLM):
    """Renvoie un objet JSON construit à partir du titre présent dans le prompt.

    La réponse est entourée de prose, comme le font souvent les vrais modèles.
    """

    model = "fake-llm"

    @overload
    def complete(
        self, prompt: str, *, with_usage: Literal[True]
    ) -> tuple[str, dict[str, int]]: ...

    @overload
    def complete(self, prompt: str, *, with_usage: Literal[False] = False) -> str: ...

    def complete(
        self, prompt: str, *, with_usage: bool = False
    ) -> str | tuple[str, dict[str, int]]:
        """Réponse déterministe dérivée du titre ; usage estimé en mots."""
        match = _TITLE_RE.search(prompt)
        title = match.group(1).strip() if match else "Product"
        body = {
            "description": f"{title} - a dependable choice for everyday use.",
            "keywords": [w.lower() for w in title.split()[:5]] or ["product"],
            "category": "General",
        }
        text = f"Here is your content:\n{json.dumps(body)}\n"
        if with_usage:
            words = len(prompt.split())
            return text, {"prompt_tokens": words, "completion_tokens": len(text.split())}
        return text
