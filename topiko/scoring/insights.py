"""Staged recommendations and ranked insights derived from a score."""

from __future__ import annotations

from typing import TYPE_CHECKING

from topiko.models.scoring import CategoryLevel, Insight, RecommendationItem, Recommendations
from topiko.scoring.products import recommend_product

if TYPE_CHECKING:
    from topiko.models.answers import AnswerSet
    from topiko.models.scoring import ScoreResult

MAX_INSIGHTS = 5
WEAK_DIMENSION_THRESHOLD = 60
OPPORTUNITY_SCORE_CEILING = 80

_OVERALL_ICONS = {
    CategoryLevel.HIGH: "🎉",
    CategoryLevel.MEDIUM_HIGH: "👍",
}
_DEFAULT_OVERALL_ICON = "💡"

_READINESS_DESCRIPTIONS = {
    CategoryLevel.HIGH: (
        "With a score of {score}/100, you're well-positioned for digital success. "
        "Your business shows strong readiness across multiple dimensions."
    ),
    CategoryLevel.MEDIUM_HIGH: (
        "Your score of {score}/100 indicates good digital readiness. "
        "A few strategic improvements could unlock significant growth."
    ),
    CategoryLevel.MEDIUM: (
        "At {score}/100, you're on the right track. "
        "Focus on strengthening key areas to accelerate your digital journey."
    ),
    CategoryLevel.LOW_MEDIUM: (
        "Your {score}/100 score shows potential. "
        "With the right guidance, you can build a strong digital foundation."
    ),
    CategoryLevel.LOW: (
        "Starting at {score}/100 is perfectly fine. "
        "Every successful business began somewhere, and you're taking the right first step."
    ),
}

_IMPROVEMENTS: dict[str, Insight] = {
    "goals": Insight(
        type="improvement",
        icon="🎯",
        title="Expand Your Vision",
        description=(
            "Consider additional goals like automation or branding "
            "to maximize your digital potential."
        ),
        priority="medium",
    ),
    "digital_status": Insight(
        type="improvement",
        icon="🌐",
        title="Strengthen Online Presence",
        description=(
            "Building a more robust digital foundation will significantly "
            "improve your readiness score."
        ),
        priority="high",
    ),
    "budget": Insight(
        type="improvement",
        icon="💰",
        title="Investment Planning",
        description="Consider allocating more resources to digital initiatives for better ROI.",
        priority="low",
    ),
    "challenge": Insight(
        type="improvement",
        icon="🔍",
        title="Problem Clarity",
        description="Identifying specific challenges helps us provide more targeted solutions.",
        priority="medium",
    ),
}

_OPPORTUNITY = Insight(
    type="opportunity",
    icon="🚀",
    title="High Growth Potential",
    description=(
        "Your budget allows for advanced solutions that could significantly "
        "accelerate your digital transformation."
    ),
    priority="medium",
)


def readiness_description(level: CategoryLevel, score: int) -> str:
    template = _READINESS_DESCRIPTIONS.get(level, _READINESS_DESCRIPTIONS[CategoryLevel.MEDIUM])
    return template.format(score=score)


def generate_insights(result: ScoreResult, answers: AnswerSet) -> list[Insight]:
    """Overall insight, then weak dimensions in weighting order, then opportunity."""
    category = result.category
    insights = [
        Insight(
            type="overall",
            icon=_OVERALL_ICONS.get(category.level, _DEFAULT_OVERALL_ICON),
            title=f"You're {category.label}!",
            description=readiness_description(category.level, result.total_score),
            priority="high",
        )
    ]

    for dimension, breakdown in result.breakdown.items():
        if breakdown.score < WEAK_DIMENSION_THRESHOLD:
            insights.append(_IMPROVEMENTS[dimension])

    if answers.budget == "25k_plus" and result.total_score < OPPORTUNITY_SCORE_CEILING:
        insights.append(_OPPORTUNITY)

    return insights[:MAX_INSIGHTS]


def get_recommendations(answers: AnswerSet) -> Recommendations:
    immediate: list[RecommendationItem] = []
    short_term: list[RecommendationItem] = []
    long_term: list[RecommendationItem] = []

    if answers.digital_status == "no_presence":
        immediate.append(
            RecommendationItem(
                icon="🌐",
                title="Establish Online Presence",
                description="Start with a basic website or social media profiles",
                priority="high",
            )
        )
    if answers.challenge == "no_leads":
        immediate.append(
            RecommendationItem(
                icon="📈",
                title="Lead Generation Setup",
                description="Implement basic lead capture and follow-up systems",
                priority="high",
            )
        )

    if answers.has_goal("automate"):
        short_term.append(
            RecommendationItem(
                icon="🤖",
                title="Process Automation",
                description="Set up automated customer management workflows",
                priority="medium",
            )
        )
    if answers.has_goal("brand"):
        short_term.append(
            RecommendationItem(
                icon="✨",
                title="Brand Development",
                description="Create consistent brand identity across all platforms",
                priority="medium",
            )
        )

    if answers.budget == "25k_plus":
        long_term.append(
            RecommendationItem(
                icon="🚀",
                title="Advanced Solutions",
                description="Custom development and enterprise-level features",
                priority="low",
            )
        )

    return Recommendations(
        immediate=tuple(immediate),
        short_term=tuple(short_term),
        long_term=tuple(long_term),
        product_suggestion=recommend_product(answers),
    )
