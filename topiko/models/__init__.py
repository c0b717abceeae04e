"""Re-exports all Pydantic models."""

from topiko.models.analytics import ActionType, PageInfo, Screen, SessionInfo, UtmParams
from topiko.models.answers import AnswerSet, Budget, Challenge, DigitalStatus, Goal
from topiko.models.otp import OtpDispatch
from topiko.models.product import Confidence, Product, ProductRecommendation
from topiko.models.scoring import (
    Adjustment,
    Assessment,
    Category,
    CategoryLevel,
    CategoryMatch,
    DimensionBreakdown,
    DimensionScores,
    DimensionTrace,
    Insight,
    RecommendationItem,
    Recommendations,
    ScoreBreakdown,
    ScoreResult,
)

__all__ = [
    "ActionType",
    "Adjustment",
    "AnswerSet",
    "Assessment",
    "Budget",
    "Category",
    "CategoryLevel",
    "CategoryMatch",
    "Challenge",
    "Confidence",
    "DigitalStatus",
    "DimensionBreakdown",
    "DimensionScores",
    "DimensionTrace",
    "Goal",
    "Insight",
    "OtpDispatch",
    "PageInfo",
    "Product",
    "ProductRecommendation",
    "RecommendationItem",
    "Recommendations",
    "Screen",
    "ScoreBreakdown",
    "ScoreResult",
    "SessionInfo",
    "UtmParams",
]
