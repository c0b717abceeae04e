"""Digital readiness scoring."""

from topiko.scoring.products import RECOMMENDATION_RULES, ProductRule, recommend_product
from topiko.scoring.rules import DEFAULT_RULES, RuleTable, load_rule_table
from topiko.scoring.scorer import ReadinessScorer, score_answers

__all__ = [
    "DEFAULT_RULES",
    "RECOMMENDATION_RULES",
    "ProductRule",
    "ReadinessScorer",
    "RuleTable",
    "load_rule_table",
    "recommend_product",
    "score_answers",
]
