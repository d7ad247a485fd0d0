"""
Application principale FastAPI.

Ce module assemble les composants de la passerelle de génération de contenu : logging,
middlewares, gestion des erreurs, routes et métriques.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (contexte de requête, métriques)
- Monter les routers (santé, génération IA, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI

from backend.api.errors import install_error_handlers
from backend.api.routes_ai import router as ai_router
from backend.api.routes_health import router as health_router
from backend.app.metrics import PrometheusMiddleware, metrics_router
from backend.core.container import container
from backend.core.logging import setup_logging
from backend.middlewares.request_context import RequestContextMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution
    - Installe les handlers d'erreurs (enveloppe `{error, message, retryAfter?}`)
    - Publie les routes de santé, de génération et de métriques
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)
    app.include_router(health_router)
    app.include_router(ai_router)
    app.include_router(metrics_router)
    return app


app = create_app()
