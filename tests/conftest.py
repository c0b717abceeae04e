"""Shared test fixtures."""

from __future__ import annotations

import pytest

from topiko.config import Settings
from topiko.models.answers import AnswerSet
from topiko.scoring.scorer import ReadinessScorer

SUPABASE_URL = "https://funnel.supabase.test"
SMS_URL = "http://sms.magictext.test/V2/http-api-post.php"


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        sms_api_key="",
        supabase_url="",
        supabase_key="",
        rules_path=None,
        log_level="DEBUG",
        log_format="console",
        _env_file=None,
    )


@pytest.fixture()
def live_settings() -> Settings:
    """Settings with both external services configured (mocked with respx)."""
    return Settings(
        sms_api_key="sms-test-key",
        sms_gateway_url=SMS_URL,
        supabase_url=SUPABASE_URL,
        supabase_key="anon-test-key",
        rules_path=None,
        log_level="DEBUG",
        _env_file=None,
    )


@pytest.fixture()
def scorer() -> ReadinessScorer:
    return ReadinessScorer()


@pytest.fixture()
def entry_answers() -> AnswerSet:
    return AnswerSet(
        goals=["more_customers"],
        digital_status="no_presence",
        budget="below_2k",
        challenge="no_leads",
    )


@pytest.fixture()
def premium_answers() -> AnswerSet:
    return AnswerSet(
        goals=["app", "brand"],
        digital_status="no_results",
        budget="25k_plus",
        challenge="dont_know",
    )


@pytest.fixture()
def branding_answers() -> AnswerSet:
    return AnswerSet(
        goals=["brand"],
        digital_status="basic_website",
        budget="10k_25k",
        challenge="low_sales",
    )
