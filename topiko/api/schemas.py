"""API request/response schemas (separate from domain models)."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from topiko.models.analytics import PageInfo, UtmParams
from topiko.models.base import FrozenModel

# --- Responses ---


class HealthResponse(FrozenModel):
    status: str
    version: str
    checks: dict[str, bool] = Field(default_factory=dict)


class ConfigCheckResponse(FrozenModel):
    configured: dict[str, bool]


class AnalyticsResponse(FrozenModel):
    recorded: bool


# --- Requests ---


class OtpRequest(FrozenModel):
    mobile: str = ""
    otp: str | None = None


class VisitRequest(FrozenModel):
    session_id: str = Field(min_length=1)
    page: PageInfo = PageInfo()
    utm: UtmParams | None = None


class ScreenViewRequest(FrozenModel):
    session_id: str = Field(min_length=1)
    screen_name: str
    previous_screen: str | None = None
    time_spent: int | None = Field(default=None, ge=0)
    action_details: dict[str, Any] = Field(default_factory=dict)


class ActionRequest(FrozenModel):
    session_id: str = Field(min_length=1)
    action_type: str
    screen_name: str = "landing"
    action_details: dict[str, Any] = Field(default_factory=dict)


class ConversionRequest(FrozenModel):
    session_id: str = Field(min_length=1)
    type: str
    screen_name: str = "results"
    data: dict[str, Any] = Field(default_factory=dict)


class DropOffRequest(FrozenModel):
    session_id: str = Field(min_length=1)
    screen_name: str
    reason: str = "unknown"
    time_spent: int | None = Field(default=None, ge=0)
    exit_page: str = ""
