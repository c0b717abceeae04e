"""FastAPI application factory and entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI

from topiko import __version__
from topiko.api.middleware import CorrelationIdMiddleware, add_cors, add_exception_handlers
from topiko.api.routes import analytics, assessments, otp, system
from topiko.clients.magictext import MagicTextClient
from topiko.clients.supabase import SupabaseClient
from topiko.config import Settings
from topiko.logging import configure_logging
from topiko.otp import OtpRelay
from topiko.scoring.rules import load_rule_table
from topiko.scoring.scorer import ReadinessScorer

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = structlog.get_logger()

API_PREFIX = "/api/v1"


def init_state(app: FastAPI, settings: Settings) -> None:
    """Build the process-wide collaborators and attach them to app state."""
    app.state.settings = settings
    app.state.scorer = ReadinessScorer(load_rule_table(settings.rules_path))
    app.state.otp_relay = OtpRelay(
        MagicTextClient(
            api_key=settings.sms_api_key,
            sender_id=settings.sms_sender_id,
            base_url=settings.sms_gateway_url,
            timeout=settings.sms_timeout,
        ),
        brand=settings.otp_brand,
        support_phone=settings.otp_support_phone,
        otp_length=settings.otp_length,
    )
    app.state.analytics_store = SupabaseClient(
        url=settings.supabase_url,
        api_key=settings.supabase_key,
        timeout=settings.supabase_timeout,
    )


def include_routes(app: FastAPI) -> None:
    app.include_router(system.router, prefix=API_PREFIX)
    app.include_router(otp.router, prefix=API_PREFIX)
    app.include_router(assessments.router, prefix=API_PREFIX)
    app.include_router(analytics.router, prefix=API_PREFIX)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    logger.info(
        "Topiko API started",
        host=settings.api_host,
        port=settings.api_port,
        sms_gateway=settings.sms_configured,
        analytics_store=settings.analytics_configured,
    )
    yield
    logger.info("Topiko API shut down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory."""
    settings = settings or Settings()
    configure_logging(log_level=settings.log_level, log_format=settings.log_format)

    app = FastAPI(
        title="Topiko Funnel",
        description="OTP relay, funnel analytics and digital readiness scoring API",
        version=__version__,
        lifespan=lifespan,
    )
    init_state(app, settings)

    app.add_middleware(CorrelationIdMiddleware)
    add_cors(app, settings.cors_origins)
    add_exception_handlers(app)

    from prometheus_client import make_asgi_app

    app.mount("/metrics", make_asgi_app())
    include_routes(app)
    return app


def main() -> None:
    """Entry point for `topiko-api` command."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "topiko.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )
