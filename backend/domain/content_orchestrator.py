"""Orchestrateur de génération de contenu produit.

Ce module coordonne l'admission par quota, la construction du prompt, l'appel au fournisseur de
modèle, la validation de la réponse et la persistance de l'artefact. Pour un produit existant, il
renseigne aussi sa catégorie si elle était vide, en écriture secondaire best-effort.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

import structlog

from backend.app.metrics import (
    AI_CATEGORY_PATCH,
    AI_GENERATION_FAILURES,
    AI_GENERATION_LATENCY,
    AI_GENERATION_REQUESTS,
    AI_QUOTA_REJECTIONS,
)
from backend.domain.content_generator import ContentGenerator
from backend.domain.content_validator import validate_response
from backend.domain.entities import (
    SUPPORTED_LANGUAGES,
    ContentArtifact,
    GenerationResult,
    PersistedContent,
)
from backend.domain.errors import (
    GenerationFailed,
    InvalidInput,
    MalformedResponse,
    NotFound,
    PersistenceError,
    ProviderError,
    RateLimited,
)
from backend.domain.prompt_builder import build_prompt
from backend.domain.quota import QuotaLedger
from backend.infra.repositories import ContentStore

CATEGORY_PATCH_FAILED = "category_patch_failed"


def _check_language(language: str) -> None:
    if language not in SUPPORTED_LANGUAGES:
        raise InvalidInput(f"unsupported_language:{language}")


class ContentOrchestrator:
    """Passerelle de génération : quota, génération, validation, persistance."""

    def __init__(
        self,
        ledger: QuotaLedger,
        generator: ContentGenerator,
        store: ContentStore,
    ) -> None:
        """Initialise l'orchestrateur avec ses collaborateurs."""
        self.ledger = ledger
        self.generator = generator
        self.store = store
        self._log = structlog.get_logger(__name__)

    def generate(
        self,
        identity: str,
        title: str,
        attributes: Mapping[str, Any] | None = None,
        language: str = "en",
    ) -> GenerationResult:
        """Génère un contenu à partir d'un titre et d'attributs, sans lien produit."""
        title = (title or "").strip()
        if not title:
            raise InvalidInput("title_required")
        _check_language(language)
        self._admit(identity)

        start = time.perf_counter()
        AI_GENERATION_REQUESTS.labels(mode="scratch", language=language).inc()
        try:
            artifact = self._produce(identity, title, attributes, language)
            content = self._persist(identity, artifact, language, product_id=None)
        finally:
            AI_GENERATION_LATENCY.labels(mode="scratch").observe(time.perf_counter() - start)
        self._log.info("ai_generation_completed", identity=identity, content_id=content.id)
        return GenerationResult(content=content)

    def generate_for_product(
        self, identity: str, product_id: str, language: str = "en"
    ) -> GenerationResult:
        """Génère un contenu pour un produit possédé par `identity` et le lie au produit.

        Un produit absent et un produit appartenant à une autre identité produisent la même
        erreur `NotFound`.
        """
        _check_language(language)
        self._admit(identity)

        product = self.store.find_product_by_owner(product_id, identity)
        if product is None:
            raise NotFound("Product not found or access denied")

        start = time.perf_counter()
        AI_GENERATION_REQUESTS.labels(mode="product", language=language).inc()
        warnings: list[str] = []
        try:
            artifact = self._produce(identity, product.title, product.attributes, language)
            content = self._persist(identity, artifact, language, product_id=product.id)
            if not product.category and artifact.category:
                if not self._backfill_category(product.id, artifact.category):
                    warnings.append(CATEGORY_PATCH_FAILED)
        finally:
            AI_GENERATION_LATENCY.labels(mode="product").observe(time.perf_counter() - start)
        self._log.info(
            "ai_generation_completed",
            identity=identity,
            product_id=product.id,
            content_id=content.id,
        )
        return GenerationResult(content=content, warnings=warnings)

    # -------------------- Étapes internes --------------------

    def _admit(self, identity: str) -> None:
        decision = self.ledger.admit(identity)
        if not decision.allowed:
            AI_QUOTA_REJECTIONS.inc()
            self._log.info(
                "ai_quota_rejected", identity=identity, retry_after=decision.retry_after
            )
            raise RateLimited(retry_after=decision.retry_after or 0.0)

    def _produce(
        self,
        identity: str,
        title: str,
        attributes: Mapping[str, Any] | None,
        language: str,
    ) -> ContentArtifact:
        prompt = build_prompt(title, attributes, language)
        try:
            raw = self.generator.generate(prompt)
            return validate_response(raw)
        except (ProviderError, MalformedResponse) as exc:
            AI_GENERATION_FAILURES.labels(code=exc.code).inc()
            self._log.warning(
                "ai_generation_failed", identity=identity, code=exc.code, reason=exc.message
            )
            raise GenerationFailed(code=exc.code) from exc

    def _persist(
        self,
        identity: str,
        artifact: ContentArtifact,
        language: str,
        product_id: str | None,
    ) -> PersistedContent:
        try:
            return self.store.create_content(
                artifact, self.generator.model_name, language, product_id=product_id
            )
        except Exception as exc:
            AI_GENERATION_FAILURES.labels(code="persistence_error").inc()
            self._log.error(
                "ai_content_persist_failed",
                identity=identity,
                product_id=product_id,
                error_type=type(exc).__name__,
            )
            raise PersistenceError("Failed to save generated content") from exc

    def _backfill_category(self, product_id: str, category: str) -> bool:
        """Patch best-effort : un échec n'annule pas le contenu déjà persisté."""
        try:
            applied = self.store.patch_product_category(product_id, category)
        except Exception as exc:
            AI_CATEGORY_PATCH.labels(result="error").inc()
            self._log.warning(
                "ai_category_patch_failed",
                product_id=product_id,
                error_type=type(exc).__name__,
            )
            return False
        AI_CATEGORY_PATCH.labels(result="applied" if applied else "skipped").inc()
        return True
