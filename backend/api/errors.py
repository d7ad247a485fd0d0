"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Toutes les erreurs sont renvoyées sous la forme `{error, message, trace_id, retryAfter?}` où
`error` est un code lisible par machine (`RATE_LIMITED`, `NOT_FOUND`, `GENERATION_FAILED`,
`INVALID_INPUT`, ...).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from backend.core.http_constants import (
    HTTP_BAD_GATEWAY,
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
    HTTP_TOO_MANY_REQUESTS,
)
from backend.domain.errors import ErrorKinds, GenerationError, GenerationFailed, RateLimited

log = logging.getLogger(__name__)

KIND_STATUS = {
    ErrorKinds.INVALID_INPUT: HTTP_BAD_REQUEST,
    ErrorKinds.NOT_FOUND: HTTP_NOT_FOUND,
    ErrorKinds.RATE_LIMITED: HTTP_TOO_MANY_REQUESTS,
    ErrorKinds.GENERATION_FAILED: HTTP_BAD_GATEWAY,
    ErrorKinds.PERSISTENCE_ERROR: HTTP_INTERNAL_SERVER_ERROR,
}

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    429: "RATE_LIMITED",
    500: "INTERNAL_ERROR",
}


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    error: str
    message: str
    trace_id: str | None = None
    retry_after: int | None = None
    details: Any = None


def retry_after_seconds(retry_after: float | None) -> int:
    """Arrondit un délai au nombre entier de secondes supérieur, au moins 1."""
    return max(1, math.ceil(retry_after or 0))


def create_error_response(status_code: int, envelope: ErrorEnvelope) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {
        "error": envelope.error,
        "message": envelope.message,
        "trace_id": envelope.trace_id,
    }
    headers = None
    if envelope.retry_after is not None:
        content["retryAfter"] = envelope.retry_after
        headers = {"Retry-After": str(envelope.retry_after)}
    if envelope.details:
        content["details"] = envelope.details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request state (set by middleware) or headers."""
    trace_id = getattr(request.state, "request_id", None)
    return trace_id or request.headers.get("X-Request-ID")


def handle_generation_error(request: Request, exc: GenerationError) -> JSONResponse:
    """Traduit une erreur du domaine en enveloppe HTTP."""
    status = KIND_STATUS.get(exc.kind, HTTP_INTERNAL_SERVER_ERROR)
    envelope = ErrorEnvelope(
        error=exc.kind, message=exc.message, trace_id=extract_trace_id(request)
    )
    if isinstance(exc, RateLimited):
        envelope.retry_after = retry_after_seconds(exc.retry_after)
        hours = math.ceil(envelope.retry_after / 3600)
        envelope.message = f"Too many AI generations. Try again in {hours} hours."
    log.info(
        "Generation error",
        extra={
            "code": exc.kind,
            "internal_code": exc.code if isinstance(exc, GenerationFailed) else None,
            "status_code": status,
            "trace_id": envelope.trace_id,
        },
    )
    return create_error_response(status, envelope)


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Requête mal formée : 400 INVALID_INPUT, rejetée avant toute admission."""
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    envelope = ErrorEnvelope(
        error=ErrorKinds.INVALID_INPUT,
        message="Invalid input",
        trace_id=extract_trace_id(request),
        details=details,
    )
    return create_error_response(HTTP_BAD_REQUEST, envelope)


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standard envelope."""
    envelope = ErrorEnvelope(
        error=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        message=str(exc.detail),
        trace_id=extract_trace_id(request),
    )
    return create_error_response(exc.status_code, envelope)


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle generic exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    log.error(
        "Unexpected error occurred",
        extra={"trace_id": trace_id, "exception_type": type(exc).__name__},
        exc_info=True,
    )
    envelope = ErrorEnvelope(
        error="INTERNAL_ERROR", message="An unexpected error occurred", trace_id=trace_id
    )
    return create_error_response(HTTP_INTERNAL_SERVER_ERROR, envelope)


def install_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers d'erreurs sur l'application."""
    app.add_exception_handler(GenerationError, handle_generation_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
