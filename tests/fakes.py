"""
Fakes pour les tests unitaires.

Ce module fournit une horloge contrôlable et un LLM scripté (réponses ou exceptions successives)
pour tester la passerelle de génération sans dépendances externes.
"""

from __future__ import annotations

import json
from typing import Literal, overload

from backend.infra.llm.base import LLM

OWNER = "user-1"
OTHER = "user-2"

VALID_RESPONSE = json.dumps(
    {
        "description": "A compact wireless mouse with a long battery life.",
        "keywords": ["wireless mouse", "ergonomic", "bluetooth"],
        "category": "Electronics",
    }
)


class FakeClock:
    """Horloge monotone avancée manuellement par les tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


class ScriptedLLM(LLM):
    """
    LLM factice scripté.

    Chaque appel consomme l'élément suivant de `script` : une chaîne est renvoyée, une exception
    est levée. Script épuisé -> `default`. Les prompts reçus sont conservés dans `prompts`.
    """

    model = "fake-model"

    def __init__(self, script: list | None = None, default: str = VALID_RESPONSE) -> None:
        self.script = list(script or [])
        self.default = default
        self.prompts: list[str] = []

    @overload
    def complete(
        self, prompt: str, *, with_usage: Literal[True]
    ) -> tuple[str, dict[str, int]]: ...

    @overload
    def complete(self, prompt: str, *, with_usage: Literal[False] = False) -> str: ...

    def complete(
        self, prompt: str, *, with_usage: bool = False
    ) -> str | tuple[str, dict[str, int]]:
        self.prompts.append(prompt)
        item = self.script.pop(0) if self.script else self.default
        if isinstance(item, BaseException):
            raise item
        if with_usage:
            return item, {"prompt_tokens": 10, "completion_tokens": 5}
        return item
