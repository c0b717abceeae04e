"""FastAPI middleware: correlation IDs, CORS and error handling."""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

import structlog
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from topiko.clients.magictext import SmsDeliveryError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request, Response

logger = structlog.get_logger()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Reads or generates X-Correlation-ID and binds it to structlog context."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID", uuid.uuid4().hex[:12])

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            path=request.url.path,
            method=request.method,
        )

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000, 2)

        logger.info("Request completed", status=response.status_code, duration_ms=duration_ms)

        response.headers["X-Correlation-ID"] = correlation_id
        return response


def add_cors(app: FastAPI, origins: list[str]) -> None:
    """Allow the landing page (served from another origin) to call the API."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Correlation-ID"],
        expose_headers=["X-Correlation-ID"],
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers returning structured JSON errors."""

    @app.exception_handler(ValueError)
    async def value_error_handler(_request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "bad_request", "detail": str(exc)},
        )

    @app.exception_handler(SmsDeliveryError)
    async def sms_error_handler(_request: Request, exc: SmsDeliveryError) -> JSONResponse:
        logger.error("OTP delivery failed", error=str(exc), gateway_status=exc.status_code)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to send OTP", "detail": exc.body or str(exc)},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception", error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "detail": "An unexpected error occurred"},
        )
