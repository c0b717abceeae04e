"""Funnel analytics tracking.

Analytics are non-critical: every write catches store failures, logs a
warning and reports ``False`` so the user flow is never interrupted.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs, urlparse

import httpx
import structlog

from topiko.metrics import analytics_writes_total
from topiko.models.analytics import ActionType, Screen, SessionInfo, UtmParams

if TYPE_CHECKING:
    from collections.abc import Callable

    from topiko.clients.supabase import SupabaseClient
    from topiko.models.analytics import PageInfo

logger = structlog.get_logger()

PAGE_VISITS = "page_visits"
USER_SESSIONS = "user_sessions"
FUNNEL_ANALYTICS = "funnel_analytics"
DAILY_STATS = "daily_stats"

CONVERSION_STEPS = {
    Screen.LANDING: 1,
    Screen.MOBILE_ENTRY: 2,
    Screen.OTP_VERIFICATION: 3,
    Screen.BASIC_INFO: 4,
    Screen.ASSESSMENT: 5,
    Screen.RESULTS: 6,
}

CONVERSION_STATUSES = {
    "mobile_entered": "mobile_entered",
    "otp_verified": "otp_verified",
    "assessment_started": "assessment_started",
    "assessment_completed": "completed",
    "whatsapp_clicked": "whatsapp_conversion",
}

_REFERRER_SOURCES = ("google", "facebook", "instagram", "linkedin", "youtube")


def _utcnow_iso() -> str:
    return datetime.now(UTC).isoformat()


def conversion_step(screen: str) -> int:
    return CONVERSION_STEPS.get(screen, 0)


def detect_device(user_agent: str) -> str:
    ua = user_agent.lower()
    if "mobi" in ua or "android" in ua:
        return "mobile"
    if "tablet" in ua or "ipad" in ua:
        return "tablet"
    return "desktop"


def detect_browser(user_agent: str) -> str:
    # Order matters: Chrome user agents also mention Safari.
    if "Chrome" in user_agent:
        return "chrome"
    if "Firefox" in user_agent:
        return "firefox"
    if "Safari" in user_agent:
        return "safari"
    if "Edge" in user_agent:
        return "edge"
    return "unknown"


def traffic_source(referrer: str, utm_source: str | None = None) -> str:
    if utm_source:
        return utm_source
    if not referrer:
        return "direct"
    host = urlparse(referrer).hostname or ""
    for source in _REFERRER_SOURCES:
        if source in host:
            return source
    return "referral"


def parse_utm_params(url: str) -> UtmParams:
    query = parse_qs(urlparse(url).query)
    return UtmParams(
        **{field: query[field][0] for field in UtmParams.model_fields if query.get(field)}
    )


def build_session_info(page: PageInfo, utm: UtmParams) -> SessionInfo:
    return SessionInfo(
        device_type=detect_device(page.user_agent),
        browser=detect_browser(page.user_agent),
        traffic_source=traffic_source(page.referrer, utm.utm_source),
        landing_page=page.page_url,
    )


class FunnelAnalytics:
    """Records one session's funnel events in the analytics store."""

    def __init__(self, store: SupabaseClient, session_id: str) -> None:
        self.store = store
        self.session_id = session_id

    def _write(self, table: str, operation: Callable[[], None]) -> bool:
        try:
            operation()
        except httpx.HTTPError as exc:
            analytics_writes_total.labels(table=table, status="failed").inc()
            logger.warning(
                "Analytics write failed (non-critical)",
                table=table,
                session_id=self.session_id,
                error=str(exc),
            )
            return False
        analytics_writes_total.labels(table=table, status="ok").inc()
        return True

    def _event(
        self,
        screen: str,
        action_type: str,
        details: dict[str, Any] | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "screen_name": screen,
            "action_type": action_type,
            "action_details": details or {},
            "conversion_step": conversion_step(screen),
            **extra,
        }

    def track_page_visit(self, page: PageInfo, utm: UtmParams) -> bool:
        row = {"session_id": self.session_id, **page.model_dump(), **utm.model_dump()}
        return self._write(PAGE_VISITS, lambda: self.store.insert(PAGE_VISITS, row))

    def initialize_session(self, session_info: SessionInfo, utm: UtmParams) -> bool:
        """Bump an existing session's page views or create the session row."""

        def _upsert_session() -> None:
            existing = self.store.select(
                USER_SESSIONS, filters={"session_id": self.session_id}, limit=1
            )
            if existing:
                views = existing[0].get("total_page_views") or 0
                self.store.update(
                    USER_SESSIONS,
                    {"last_activity": _utcnow_iso(), "total_page_views": int(views) + 1},
                    filters={"session_id": self.session_id},
                )
            else:
                self.store.insert(
                    USER_SESSIONS,
                    {
                        "session_id": self.session_id,
                        **session_info.model_dump(),
                        **utm.model_dump(),
                    },
                )

        return self._write(USER_SESSIONS, _upsert_session)

    def track_screen_view(
        self,
        screen: str,
        previous_screen: str | None = None,
        time_spent: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> bool:
        rows = []
        if previous_screen and previous_screen != screen:
            rows.append(
                self._event(
                    previous_screen,
                    ActionType.SCREEN_EXIT,
                    details,
                    time_spent=time_spent,
                    next_screen=screen,
                )
            )
        rows.append(self._event(screen, ActionType.SCREEN_VIEW, details))
        return self._write(FUNNEL_ANALYTICS, lambda: self.store.insert(FUNNEL_ANALYTICS, rows))

    def track_action(
        self, action_type: str, screen: str, details: dict[str, Any] | None = None
    ) -> bool:
        row = self._event(screen, action_type, details)
        return self._write(FUNNEL_ANALYTICS, lambda: self.store.insert(FUNNEL_ANALYTICS, row))

    def update_conversion_status(self, status: str, extra: dict[str, Any] | None = None) -> bool:
        values = {"conversion_status": status, "last_activity": _utcnow_iso(), **(extra or {})}
        return self._write(
            USER_SESSIONS,
            lambda: self.store.update(
                USER_SESSIONS, values, filters={"session_id": self.session_id}
            ),
        )

    def track_drop_off(
        self,
        screen: str,
        reason: str = "unknown",
        time_spent: int | None = None,
        exit_page: str = "",
    ) -> bool:
        row = self._event(
            screen,
            ActionType.DROP_OFF,
            {"reason": reason},
            time_spent=time_spent,
            dropped_off=True,
        )
        recorded = self._write(
            FUNNEL_ANALYTICS, lambda: self.store.insert(FUNNEL_ANALYTICS, row)
        )
        status_ok = self.update_conversion_status("dropped_off", {"exit_page": exit_page})
        return recorded and status_ok

    def update_daily_stats(self, today: date | None = None) -> bool:
        day = (today or datetime.now(UTC).date()).isoformat()
        return self._write(
            DAILY_STATS,
            lambda: self.store.upsert(DAILY_STATS, {"date": day}, on_conflict="date"),
        )

    def track_conversion(
        self, kind: str, data: dict[str, Any] | None = None, screen: str = "results"
    ) -> bool:
        status_ok = self.update_conversion_status(CONVERSION_STATUSES.get(kind, kind), data)
        action_ok = self.track_action(ActionType.CONVERSION, screen, {"type": kind, **(data or {})})
        return status_ok and action_ok
