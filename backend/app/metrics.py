"""
Métriques Prometheus pour l'application.

Ce module définit les métriques HTTP et les métriques métier de la génération de contenu IA, ainsi
que l'endpoint `/metrics` et le middleware de mesure des requêtes.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Business/generation metrics
AI_GENERATION_REQUESTS = Counter(
    "ai_generation_requests_total",
    "Total AI content generation requests admitted",
    ["mode", "language"],
)
AI_GENERATION_FAILURES = Counter(
    "ai_generation_failures_total",
    "Total AI content generation failures",
    ["code"],
)
AI_QUOTA_REJECTIONS = Counter(
    "ai_quota_rejections_total",
    "Total generation requests rejected by the per-user quota",
)
AI_GENERATION_LATENCY = Histogram(
    "ai_generation_latency_seconds",
    "Latency of AI content generation (admission to persistence)",
    ["mode"],
    buckets=[0.5, 1.0, 2.0, 4.0, 8.0, 15.0, 30.0, 60.0],
)
AI_CATEGORY_PATCH = Counter(
    "ai_category_patch_total",
    "Product category back-fill outcomes",
    ["result"],
)
LLM_TOKENS_TOTAL = Counter(
    "llm_tokens_total",
    "Accumulated LLM tokens",
    ["model", "kind"],
)


def _normalize_allowed(allowed: list[str] | str | None) -> list[str]:
    """Normalize allowed values from settings (list or CSV string)."""
    if not allowed:
        return []
    if isinstance(allowed, list):
        if len(allowed) == 1 and "," in (allowed[0] or ""):
            return [s.strip() for s in allowed[0].split(",") if s.strip()]
        return [str(x).strip() for x in allowed if str(x).strip()]
    return [s.strip() for s in str(allowed).split(",") if s.strip()]


def labelize_model(model: str | None, allowed: list[str] | str | None) -> str:
    """Project model label through a whitelist; otherwise 'unknown'."""
    vals = set(_normalize_allowed(allowed))
    if not vals:
        return model or "unknown"
    return (model or "").strip() if (model or "").strip() in vals else "unknown"


def route_template(request: Request) -> str:
    """Retourne le gabarit de route (`/ai/generate/{product_id}`) plutôt que le chemin brut."""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or "unmatched"


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Les routes sont étiquetées par gabarit afin que les identifiants de produit ne fassent pas
    exploser la cardinalité.
    """

    async def dispatch(self, request: Request, call_next):
        """Traite une requête HTTP et collecte comptage et latence."""
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = route_template(request)
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
