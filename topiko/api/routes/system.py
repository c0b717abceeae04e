"""Health check and config endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from topiko import __version__
from topiko.api.deps import SettingsDep
from topiko.api.schemas import ConfigCheckResponse, HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health_check(settings: SettingsDep) -> HealthResponse:
    # The scorer has no external dependencies, so the service is healthy
    # even when the SMS gateway or analytics store are not configured.
    return HealthResponse(
        status="healthy",
        version=__version__,
        checks={
            "scorer": True,
            "sms_gateway": settings.sms_configured,
            "analytics_store": settings.analytics_configured,
        },
    )


@router.get("/config/check", response_model=ConfigCheckResponse)
def config_check(settings: SettingsDep) -> ConfigCheckResponse:
    return ConfigCheckResponse(
        configured={
            "magictext": settings.sms_configured,
            "supabase": settings.analytics_configured,
            "custom_rules": settings.rules_path is not None,
        }
    )
