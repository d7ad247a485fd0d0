"""Configuration de test pour pytest avec gestion des chemins.

Ce module ajoute la racine du projet au sys.path et fournit les fixtures communes : horloge
factice, registre de quotas, dépôt en mémoire, orchestrateur et client HTTP authentifié.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from backend...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Pas de base SQL ni de vrai fournisseur pendant les tests
os.environ["LLM_PROVIDER"] = "fake"
os.environ.pop("DATABASE_URL", None)

from fastapi.testclient import TestClient  # noqa: E402

from backend.domain.content_generator import ContentGenerator  # noqa: E402
from backend.domain.content_orchestrator import ContentOrchestrator  # noqa: E402
from backend.domain.quota import QuotaLedger  # noqa: E402
from backend.infra.repositories import InMemoryContentStore  # noqa: E402
from tests.fakes import OWNER, VALID_RESPONSE, FakeClock, ScriptedLLM  # noqa: E402


@pytest.fixture
def clock() -> FakeClock:
    """Horloge monotone contrôlable."""
    return FakeClock()


@pytest.fixture
def ledger(clock: FakeClock) -> QuotaLedger:
    """Registre de quotas aux valeurs par défaut (5 points / 24 h) sur horloge factice."""
    return QuotaLedger(clock=clock)


@pytest.fixture
def store() -> InMemoryContentStore:
    """Dépôt en mémoire vierge."""
    return InMemoryContentStore()


@pytest.fixture
def llm() -> ScriptedLLM:
    """LLM factice renvoyant une réponse valide par défaut."""
    return ScriptedLLM(default=VALID_RESPONSE)


@pytest.fixture
def orchestrator(ledger, llm, store) -> ContentOrchestrator:
    """Orchestrateur assemblé sur les fakes."""
    return ContentOrchestrator(ledger=ledger, generator=ContentGenerator(llm), store=store)


@pytest.fixture
def auth_headers():
    """Fabrique d'en-têtes `Authorization` pour une identité donnée."""
    from backend.core.container import container
    from backend.domain.auth import create_access_token

    def _headers(identity: str = OWNER) -> dict[str, str]:
        settings = container.settings
        token = create_access_token(settings.JWT_SECRET, settings.JWT_ALG, 5, {"sub": identity})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client(orchestrator):
    """Client HTTP dont l'orchestrateur est remplacé par celui des fixtures."""
    from backend.api.deps import get_orchestrator
    from backend.app.main import app

    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
