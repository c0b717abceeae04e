"""Funnel analytics endpoints.

Each endpoint reports whether the event was stored; store failures never
produce an error response.
"""

from __future__ import annotations

from fastapi import APIRouter

from topiko.analytics import FunnelAnalytics, build_session_info, parse_utm_params
from topiko.api.deps import AnalyticsStoreDep
from topiko.api.schemas import (
    ActionRequest,
    AnalyticsResponse,
    ConversionRequest,
    DropOffRequest,
    ScreenViewRequest,
    VisitRequest,
)
from topiko.models.analytics import Screen

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post("/visit", response_model=AnalyticsResponse)
def track_visit(request: VisitRequest, store: AnalyticsStoreDep) -> AnalyticsResponse:
    """Record the landing visit, open or bump the session, and log the landing screen."""
    tracker = FunnelAnalytics(store, request.session_id)
    utm = request.utm or parse_utm_params(request.page.page_url)
    visit_ok = tracker.track_page_visit(request.page, utm)
    session_ok = tracker.initialize_session(build_session_info(request.page, utm), utm)
    screen_ok = tracker.track_screen_view(Screen.LANDING)
    return AnalyticsResponse(recorded=visit_ok and session_ok and screen_ok)


@router.post("/screen", response_model=AnalyticsResponse)
def track_screen(request: ScreenViewRequest, store: AnalyticsStoreDep) -> AnalyticsResponse:
    tracker = FunnelAnalytics(store, request.session_id)
    recorded = tracker.track_screen_view(
        request.screen_name,
        previous_screen=request.previous_screen,
        time_spent=request.time_spent,
        details=request.action_details,
    )
    return AnalyticsResponse(recorded=recorded)


@router.post("/action", response_model=AnalyticsResponse)
def track_action(request: ActionRequest, store: AnalyticsStoreDep) -> AnalyticsResponse:
    tracker = FunnelAnalytics(store, request.session_id)
    recorded = tracker.track_action(
        request.action_type, request.screen_name, request.action_details
    )
    return AnalyticsResponse(recorded=recorded)


@router.post("/conversion", response_model=AnalyticsResponse)
def track_conversion(request: ConversionRequest, store: AnalyticsStoreDep) -> AnalyticsResponse:
    tracker = FunnelAnalytics(store, request.session_id)
    recorded = tracker.track_conversion(request.type, request.data, screen=request.screen_name)
    return AnalyticsResponse(recorded=recorded)


@router.post("/drop-off", response_model=AnalyticsResponse)
def track_drop_off(request: DropOffRequest, store: AnalyticsStoreDep) -> AnalyticsResponse:
    tracker = FunnelAnalytics(store, request.session_id)
    recorded = tracker.track_drop_off(
        request.screen_name,
        reason=request.reason,
        time_spent=request.time_spent,
        exit_page=request.exit_page,
    )
    return AnalyticsResponse(recorded=recorded)


@router.post("/daily-stats", response_model=AnalyticsResponse)
def touch_daily_stats(store: AnalyticsStoreDep) -> AnalyticsResponse:
    tracker = FunnelAnalytics(store, session_id="system")
    return AnalyticsResponse(recorded=tracker.update_daily_stats())
