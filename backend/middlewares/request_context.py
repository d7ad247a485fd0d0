"""Middleware Starlette de contexte de requête.

Attribue un identifiant à chaque requête (repris de `X-Request-ID` s'il est fourni), le lie aux
contextvars structlog pour que tous les logs de la requête le portent, et renvoie l'identifiant
ainsi que la durée de traitement dans les en-têtes de réponse.
"""

import time
from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware d'identifiant de requête et de chronométrage.

    Args:
        app: Application ASGI à wrapper.
        header_name: En-tête HTTP portant l'ID de requête.
        timing_header: En-tête HTTP portant la durée en millisecondes.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Request-ID",
        timing_header: str = "X-Process-Time-ms",
    ) -> None:
        super().__init__(app)
        self.header_name = header_name
        self.timing_header = timing_header
        self._log = structlog.get_logger(__name__)

    async def dispatch(self, request, call_next: Callable):
        request_id = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers[self.header_name] = request_id
        response.headers[self.timing_header] = str(duration_ms)
        self._log.debug(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        return response
