"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, fournisseur LLM, registre de quotas, dépôt,
orchestrateur) et expose un singleton `container` utilisé par le reste de l'application.
"""

from backend.core.settings import Settings, get_settings
from backend.domain.content_generator import ContentGenerator
from backend.domain.content_orchestrator import ContentOrchestrator
from backend.domain.quota import QuotaLedger
from backend.infra.llm.base import LLM
from backend.infra.llm.fake import FakeLLM
from backend.infra.llm.gemini_client import GeminiLLM
from backend.infra.llm.openai_client import OpenAILLM
from backend.infra.repo.content_store import SqlContentStore, create_schema
from backend.infra.repo.db import get_engine
from backend.infra.repositories import InMemoryContentStore

DEFAULT_MODELS = {"gemini": "gemini-1.5-flash", "openai": "gpt-4o-mini", "fake": "fake-llm"}


def build_llm(settings: Settings) -> LLM:
    """Sélectionne le fournisseur LLM selon `LLM_PROVIDER`."""
    provider = (settings.LLM_PROVIDER or "gemini").strip().lower()
    if provider not in DEFAULT_MODELS:
        raise RuntimeError(f"Unsupported LLM_PROVIDER: {provider}")
    if provider == "fake":
        return FakeLLM()
    model = settings.LLM_MODEL or DEFAULT_MODELS[provider]
    if provider == "openai":
        return OpenAILLM(
            api_key=settings.OPENAI_API_KEY, model=model, timeout=settings.LLM_TIMEOUT_SECONDS
        )
    return GeminiLLM(
        api_key=settings.GEMINI_API_KEY, model=model, timeout=settings.LLM_TIMEOUT_SECONDS
    )


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.llm = build_llm(self.settings)
        self.ledger = QuotaLedger(
            points=self.settings.AI_QUOTA_POINTS,
            window_seconds=self.settings.AI_QUOTA_WINDOW_SECONDS,
        )
        if self.settings.DATABASE_URL:
            engine = get_engine(self.settings.DATABASE_URL)
            if self.settings.DB_CREATE_TABLES:
                create_schema(engine)
            self.store = SqlContentStore(engine)
            self.storage_backend = "sql"
        else:
            self.store = InMemoryContentStore()
            self.storage_backend = "memory"
        self.orchestrator = self.build_orchestrator()

    def build_orchestrator(self) -> ContentOrchestrator:
        """(Re)construit l'orchestrateur à partir des composants courants."""
        generator = ContentGenerator(self.llm, allowed_models=self.settings.ALLOWED_LLM_MODELS)
        return ContentOrchestrator(ledger=self.ledger, generator=generator, store=self.store)


container = Container()
