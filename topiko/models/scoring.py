"""Models for readiness scoring output."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from enum import StrEnum

from pydantic import Field

from topiko.models.answers import AnswerSet
from topiko.models.base import FrozenModel, utcnow
from topiko.models.product import ProductRecommendation


# Inclusive output bounds shared with the rule-table validators.
SCORE_RANGE = (0, 100)
MARKETING_RANGE = (25, 95)
WEBSITE_RANGE = (30, 95)
BRANDING_RANGE = (20, 95)
SOLUTION_MATCH_RANGE = (60, 95)


class CategoryLevel(StrEnum):
    HIGH = "high"
    MEDIUM_HIGH = "medium-high"
    MEDIUM = "medium"
    LOW_MEDIUM = "low-medium"
    LOW = "low"


class Adjustment(FrozenModel):
    """One step of a dimension's adjustment chain."""

    reason: str
    operation: str  # "add" or "multiply"
    value: float


class DimensionTrace(FrozenModel):
    """Auditable path from a dimension's base value to its final score."""

    base: float
    adjustments: tuple[Adjustment, ...] = ()
    adjusted: float
    score: int = Field(ge=0, le=100)


class DimensionBreakdown(FrozenModel):
    """One weighted dimension's contribution to the overall score."""

    score: int = Field(ge=0, le=100)
    weight: float = Field(ge=0.0, le=1.0)
    weighted_score: float
    qualifiers: dict[str, str] = Field(default_factory=dict)
    trace: DimensionTrace


class ScoreBreakdown(FrozenModel):
    goals: DimensionBreakdown
    digital_status: DimensionBreakdown
    budget: DimensionBreakdown
    challenge: DimensionBreakdown

    def items(self) -> Iterator[tuple[str, DimensionBreakdown]]:
        """Yield (dimension, breakdown) in weighting order."""
        yield "goals", self.goals
        yield "digital_status", self.digital_status
        yield "budget", self.budget
        yield "challenge", self.challenge


class Category(FrozenModel):
    level: CategoryLevel
    label: str
    color: str


class RecommendationItem(FrozenModel):
    icon: str
    title: str
    description: str
    priority: str


class Recommendations(FrozenModel):
    immediate: tuple[RecommendationItem, ...] = ()
    short_term: tuple[RecommendationItem, ...] = ()
    long_term: tuple[RecommendationItem, ...] = ()
    product_suggestion: ProductRecommendation


class ScoreResult(FrozenModel):
    """Overall readiness score with breakdown and recommendations."""

    total_score: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    category: Category
    recommendations: Recommendations


class DimensionScores(FrozenModel):
    visibility: int = Field(ge=0, le=100)
    engagement: int = Field(ge=0, le=100)
    automation: int = Field(ge=0, le=100)
    brand_presentation: int = Field(ge=0, le=100)


class CategoryMatch(FrozenModel):
    """Fit percentages for the three service categories."""

    marketing: int = Field(alias="Marketing", ge=MARKETING_RANGE[0], le=MARKETING_RANGE[1])
    website: int = Field(alias="Website", ge=WEBSITE_RANGE[0], le=WEBSITE_RANGE[1])
    branding: int = Field(alias="Branding", ge=BRANDING_RANGE[0], le=BRANDING_RANGE[1])


class Insight(FrozenModel):
    type: str
    icon: str
    title: str
    description: str
    priority: str


class Assessment(FrozenModel):
    """Full readiness report for one submission."""

    timestamp: datetime = Field(default_factory=utcnow)
    session_id: str | None = None
    overall: ScoreResult
    dimensions: DimensionScores
    three_category_match: CategoryMatch
    solution_match: int = Field(ge=SOLUTION_MATCH_RANGE[0], le=SOLUTION_MATCH_RANGE[1])
    insights: tuple[Insight, ...] = ()
    answers: AnswerSet
