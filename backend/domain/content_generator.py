"""Adaptateur entre le prompt construit et le fournisseur de modèle externe."""

from __future__ import annotations

import structlog

from backend.app.metrics import LLM_TOKENS_TOTAL, labelize_model
from backend.domain.errors import ProviderError
from backend.infra.llm.base import LLM


class ContentGenerator:
    """Émet exactement un appel amont par invocation ; aucune relance ni streaming."""

    def __init__(self, llm: LLM, allowed_models: list[str] | None = None) -> None:
        """Initialise l'adaptateur avec le fournisseur et la liste blanche des labels modèle."""
        self.llm = llm
        self.allowed_models = allowed_models or []
        self._log = structlog.get_logger(__name__).bind(component="content_generator")

    @property
    def model_name(self) -> str:
        """Nom du modèle utilisé, persisté avec chaque contenu."""
        return getattr(self.llm, "model", "unknown")

    def generate(self, prompt: str) -> str:
        """Retourne le texte brut du fournisseur ; toute défaillance devient `ProviderError`."""
        try:
            text, usage = self.llm.complete(prompt, with_usage=True)
        except Exception as exc:
            self._log.warning(
                "llm_call_failed", model=self.model_name, error_type=type(exc).__name__
            )
            raise ProviderError(f"provider_unavailable:{type(exc).__name__}") from exc
        self._record_usage(usage)
        return text

    def _record_usage(self, usage: dict[str, int] | None) -> None:
        if not usage:
            return
        model = labelize_model(self.model_name, self.allowed_models)
        for kind in ("prompt_tokens", "completion_tokens"):
            value = usage.get(kind)
            if isinstance(value, int) and value > 0:
                LLM_TOKENS_TOTAL.labels(model=model, kind=kind).inc(value)
