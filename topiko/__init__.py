"""Topiko lead funnel: OTP relay, funnel analytics and digital readiness scoring."""

__version__ = "0.1.0"
