"""Prometheus metric definitions for the Topiko funnel."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# --- Assessments ---

assessments_total = Counter(
    "topiko_assessments_total",
    "Total readiness assessments scored",
    labelnames=["product"],
)

readiness_score = Histogram(
    "topiko_readiness_score",
    "Distribution of overall readiness scores",
    buckets=(20, 40, 60, 80, 100),
)

# --- OTP relay ---

otp_requests_total = Counter(
    "topiko_otp_requests_total",
    "Total OTP send attempts",
    labelnames=["status"],
)

# --- Analytics ---

analytics_writes_total = Counter(
    "topiko_analytics_writes_total",
    "Total analytics store writes",
    labelnames=["table", "status"],
)
