"""Client LLM texte pour Google Gemini (SDK google-genai)."""

from __future__ import annotations

from typing import Any, Literal, overload

from google import genai
from google.genai import types

from backend.infra.llm.base import LLM


class GeminiLLM(LLM):
    """LLM basé sur Gemini : un appel `generate_content` par invocation, sans retry."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-1.5-flash",
        timeout: float = 30.0,
    ) -> None:
        """Initialise le client Gemini (clé, modèle, timeout amont en secondes)."""
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client: genai.Client | None = None

    @property
    def client(self) -> genai.Client:
        """Client SDK, construit au premier usage."""
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("GEMINI_API_KEY is not configured")
            # google-genai exprime le timeout HTTP en millisecondes
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
        return self._client

    @overload
    def complete(
        self, prompt: str, *, with_usage: Literal[True]
    ) -> tuple[str, dict[str, int]]: ...

    @overload
    def complete(self, prompt: str, *, with_usage: Literal[False] = False) -> str: ...

    def complete(
        self, prompt: str, *, with_usage: bool = False
    ) -> str | tuple[str, dict[str, int]]:
        """Envoie le prompt et retourne le texte brut (et l'usage si demandé)."""
        response = self.client.models.generate_content(model=self.model, contents=prompt)
        text = response.text or ""
        if with_usage:
            return text, self._extract_usage_dict(response)
        return text

    def _extract_usage_dict(self, response: Any) -> dict[str, int]:
        meta = getattr(response, "usage_metadata", None)
        if not meta:
            return {}
        return {
            "prompt_tokens": int(getattr(meta, "prompt_token_count", 0) or 0),
            "completion_tokens": int(getattr(meta, "candidates_token_count", 0) or 0),
            "total_tokens": int(getattr(meta, "total_token_count", 0) or 0),
        }
