"""Questionnaire answer tags and the per-submission answer set."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from pydantic import field_validator

from topiko.models.base import FrozenModel


class Goal(StrEnum):
    MORE_CUSTOMERS = "more_customers"
    SHOWCASE = "showcase"
    BRAND = "brand"
    AUTOMATE = "automate"
    APP = "app"


class DigitalStatus(StrEnum):
    NO_PRESENCE = "no_presence"
    BASIC_SOCIAL = "basic_social"
    BASIC_WEBSITE = "basic_website"
    NO_RESULTS = "no_results"


class Budget(StrEnum):
    BELOW_2K = "below_2k"
    FROM_2K_TO_10K = "2k_10k"
    FROM_10K_TO_25K = "10k_25k"
    ABOVE_25K = "25k_plus"


class Challenge(StrEnum):
    NO_LEADS = "no_leads"
    DONT_KNOW = "dont_know"
    NO_TIME = "no_time"
    LOW_SALES = "low_sales"


class AnswerSet(FrozenModel):
    """One user's questionnaire responses.

    Tags are kept as plain strings so that unrecognized values survive
    validation and score as zero instead of rejecting the submission.
    """

    goals: tuple[str, ...] = ()
    digital_status: str = ""
    budget: str = ""
    challenge: str = ""
    session_id: str | None = None

    @field_validator("goals", mode="before")
    @classmethod
    def _coerce_goals(cls, value: object) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, Iterable) or isinstance(value, dict):
            return ()
        seen: dict[str, None] = {}
        for item in value:
            if item is None:
                continue
            seen.setdefault(str(item), None)
        return tuple(seen)

    @field_validator("digital_status", "budget", "challenge", mode="before")
    @classmethod
    def _coerce_tag(cls, value: object) -> str:
        if value is None or isinstance(value, (list, tuple, dict, set)):
            return ""
        return str(value)

    @field_validator("session_id", mode="before")
    @classmethod
    def _coerce_session(cls, value: object) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    def has_goal(self, goal: str) -> bool:
        return goal in self.goals
