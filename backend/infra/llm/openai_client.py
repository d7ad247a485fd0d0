"""
Client LLM basé sur l'API OpenAI (chat.completions).

Le client SDK est créé paresseusement au premier appel : l'application démarre sans clé, mais
tout appel sans clé configurée échoue et remonte comme erreur fournisseur.
"""

from __future__ import annotations

from typing import Any, Literal, overload

from openai import OpenAI

from backend.infra.llm.base import LLM


class OpenAILLM(LLM):
    """LLM basé sur OpenAI, un appel `chat.completions` par invocation."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
    ) -> None:
        """Initialise le client OpenAI (clé, modèle, timeout amont en secondes)."""
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client: OpenAI | None = None

    @property
    def client(self) -> OpenAI:
        """Client SDK, construit au premier usage."""
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("OPENAI_API_KEY is not configured")
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
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
        """
        Génère du texte (et éventuellement les métriques d'usage).

        - with_usage=False (défaut) -> str
        - with_usage=True -> (str, dict[str, int])
        """
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        choice = resp.choices[0]
        text = getattr(getattr(choice, "message", None), "content", None) or ""
        if with_usage:
            return str(text), self._extract_usage_dict(resp)
        return str(text)

    def _extract_usage_dict(self, resp: Any) -> dict[str, int]:
        """Extrait les infos d'usage depuis la réponse OpenAI ; toujours un dict."""
        usage = getattr(resp, "usage", None)
        if not usage:
            return {}
        return {
            "prompt_tokens": int(getattr(usage, "prompt_tokens", 0) or 0),
            "completion_tokens": int(getattr(usage, "completion_tokens", 0) or 0),
            "total_tokens": int(getattr(usage, "total_tokens", 0) or 0),
        }
