"""Readiness scorer: composes the dimension, product and insight functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from topiko.models.answers import AnswerSet
from topiko.models.base import utcnow
from topiko.models.scoring import (
    Assessment,
    DimensionBreakdown,
    ScoreBreakdown,
    ScoreResult,
)
from topiko.scoring import dimensions, insights, products
from topiko.scoring.rules import DEFAULT_RULES

if TYPE_CHECKING:
    from datetime import datetime

    from topiko.models.product import ProductRecommendation
    from topiko.models.scoring import (
        CategoryMatch,
        DimensionScores,
        DimensionTrace,
        Insight,
    )
    from topiko.scoring.rules import RuleTable

logger = structlog.get_logger()


class ReadinessScorer:
    """Pure mapping from an answer set to scores and recommendations.

    Holds only the rule table, which it never mutates, so one instance can
    be shared by every request.
    """

    def __init__(self, rules: RuleTable = DEFAULT_RULES) -> None:
        self.rules = rules

    def calculate_overall_score(self, answers: AnswerSet) -> ScoreResult:
        rules = self.rules
        weights = rules.weights
        traces: dict[str, tuple[DimensionTrace, float]] = {
            "goals": (dimensions.score_goals(answers, rules), weights.goals),
            "digital_status": (
                dimensions.score_digital_status(answers, rules),
                weights.digital_status,
            ),
            "budget": (dimensions.score_budget(answers, rules), weights.budget),
            "challenge": (dimensions.score_challenge(answers, rules), weights.challenge),
        }
        qualifiers = dimensions.qualifiers(answers, rules)

        breakdown: dict[str, DimensionBreakdown] = {}
        total = 0.0
        for name, (trace, weight) in traces.items():
            weighted = trace.score * weight
            total += weighted
            breakdown[name] = DimensionBreakdown(
                score=trace.score,
                weight=weight,
                weighted_score=weighted,
                qualifiers=qualifiers[name],
                trace=trace,
            )

        # Bands are matched on the unrounded sum: 59.75 reports 60 but is
        # still "Getting Started".
        return ScoreResult(
            total_score=dimensions.clamp(dimensions.round_half_up(total)),
            breakdown=ScoreBreakdown(**breakdown),
            category=dimensions.category_for(total, rules),
            recommendations=insights.get_recommendations(answers),
        )

    def calculate_dimension_scores(self, answers: AnswerSet) -> DimensionScores:
        return dimensions.calculate_dimension_scores(answers, self.rules)

    def calculate_three_category_match(self, answers: AnswerSet) -> CategoryMatch:
        return dimensions.calculate_three_category_match(answers, self.rules)

    def get_product_recommendation(
        self, score: ScoreResult, answers: AnswerSet
    ) -> ProductRecommendation:
        """Pick a product for the answers.

        Args:
            score: The overall result for the same answers. No current rule
                reads it; it is part of the signature so score-based rules
                can be added without changing callers.
            answers: The answer set the recommendation rules match against.
        """
        return products.recommend_product(answers)

    def calculate_solution_match_score(self, answers: AnswerSet, product: str) -> int:
        return products.calculate_solution_match_score(answers, product, self.rules)

    def generate_insights(self, result: ScoreResult, answers: AnswerSet) -> list[Insight]:
        return insights.generate_insights(result, answers)

    def assess(self, answers: AnswerSet, timestamp: datetime | None = None) -> Assessment:
        """Score an answer set and bundle every derived view into one report."""
        overall = self.calculate_overall_score(answers)
        product = overall.recommendations.product_suggestion
        assessment = Assessment(
            timestamp=timestamp or utcnow(),
            session_id=answers.session_id,
            overall=overall,
            dimensions=self.calculate_dimension_scores(answers),
            three_category_match=self.calculate_three_category_match(answers),
            solution_match=self.calculate_solution_match_score(answers, product.product),
            insights=tuple(self.generate_insights(overall, answers)),
            answers=answers,
        )
        logger.debug(
            "Assessment scored",
            session_id=answers.session_id,
            total_score=overall.total_score,
            category=overall.category.label,
            product=product.product,
        )
        return assessment

    def export_scoring_data(self, answers: AnswerSet) -> dict[str, object]:
        """JSON-ready report for the admin dashboard."""
        return self.assess(answers).model_dump(mode="json", by_alias=True)


def score_answers(data: object, scorer: ReadinessScorer | None = None) -> Assessment:
    """Validate loosely structured answers and assess them.

    Anything that is not a mapping is treated as an empty answer set.
    """
    answers = AnswerSet.model_validate(data) if isinstance(data, dict) else AnswerSet()
    return (scorer or ReadinessScorer()).assess(answers)
