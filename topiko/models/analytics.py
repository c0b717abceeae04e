"""Models for funnel analytics rows."""

from __future__ import annotations

from enum import StrEnum

from topiko.models.base import FrozenModel


class Screen(StrEnum):
    LANDING = "landing"
    MOBILE_ENTRY = "mobile_entry"
    OTP_VERIFICATION = "otp_verification"
    BASIC_INFO = "basic_info"
    ASSESSMENT = "assessment"
    RESULTS = "results"


class ActionType(StrEnum):
    SCREEN_VIEW = "screen_view"
    SCREEN_EXIT = "screen_exit"
    DROP_OFF = "drop_off"
    CONVERSION = "conversion"


class UtmParams(FrozenModel):
    utm_source: str | None = None
    utm_medium: str | None = None
    utm_campaign: str | None = None
    utm_content: str | None = None
    utm_term: str | None = None


class PageInfo(FrozenModel):
    page_url: str = ""
    page_title: str = ""
    referrer: str = ""
    user_agent: str = ""
    screen_width: int | None = None
    screen_height: int | None = None
    language: str = ""
    timezone: str = ""


class SessionInfo(FrozenModel):
    device_type: str = "desktop"
    browser: str = "unknown"
    traffic_source: str = "direct"
    landing_page: str = ""
