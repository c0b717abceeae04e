"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from topiko.clients.supabase import SupabaseClient
from topiko.config import Settings
from topiko.otp import OtpRelay
from topiko.scoring.scorer import ReadinessScorer


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[no-any-return]


def _get_scorer(request: Request) -> ReadinessScorer:
    return request.app.state.scorer  # type: ignore[no-any-return]


def _get_otp_relay(request: Request) -> OtpRelay:
    return request.app.state.otp_relay  # type: ignore[no-any-return]


def _get_analytics_store(request: Request) -> SupabaseClient:
    return request.app.state.analytics_store  # type: ignore[no-any-return]


SettingsDep = Annotated[Settings, Depends(_get_settings)]
ScorerDep = Annotated[ReadinessScorer, Depends(_get_scorer)]
OtpRelayDep = Annotated[OtpRelay, Depends(_get_otp_relay)]
AnalyticsStoreDep = Annotated[SupabaseClient, Depends(_get_analytics_store)]
