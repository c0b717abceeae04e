"""Product catalogue, recommendation rules and solution-match scoring."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from topiko.models.product import Confidence, Product, ProductRecommendation
from topiko.scoring.dimensions import clamp, round_half_up
from topiko.scoring.rules import DEFAULT_RULES

if TYPE_CHECKING:
    from topiko.models.answers import AnswerSet
    from topiko.scoring.rules import RuleTable

CATALOGUE: dict[Product, ProductRecommendation] = {
    Product.DISBLAY: ProductRecommendation(
        product=Product.DISBLAY,
        confidence=Confidence.HIGH,
        reason="Perfect starting point for digital presence",
        features=(
            "Quick setup and deployment",
            "Basic online presence",
            "Mobile-friendly design",
            "WhatsApp integration",
        ),
        pricing="Under ₹2,000/month",
        setup_time="24-48 hours",
    ),
    Product.HEBT: ProductRecommendation(
        product=Product.HEBT,
        confidence=Confidence.HIGH,
        reason="Advanced custom solutions for your requirements",
        features=(
            "Custom app development",
            "Enterprise-grade features",
            "Full technical support",
            "Scalable architecture",
        ),
        pricing="₹25,000+/month",
        setup_time="4-8 weeks",
    ),
    Product.BRANDPRENEURING: ProductRecommendation(
        product=Product.BRANDPRENEURING,
        confidence=Confidence.HIGH,
        reason="Complete brand building and digital presence solution",
        features=(
            "Professional brand strategy",
            "Complete digital ecosystem",
            "Marketing campaign support",
            "Premium design and development",
        ),
        pricing="₹15,000-30,000/month",
        setup_time="2-4 weeks",
    ),
    Product.TOPIKO: ProductRecommendation(
        product=Product.TOPIKO,
        confidence=Confidence.MEDIUM,
        reason="Comprehensive solution for growing businesses",
        features=(
            "Professional website and app",
            "Lead management system",
            "Digital marketing tools",
            "Analytics and reporting",
        ),
        pricing="₹5,000-15,000/month",
        setup_time="1-2 weeks",
    ),
}


@dataclass(frozen=True)
class ProductRule:
    """A recommendation rule: the first rule whose predicate matches wins."""

    name: str
    product: Product
    matches: Callable[[AnswerSet], bool]


RECOMMENDATION_RULES: tuple[ProductRule, ...] = (
    ProductRule(
        name="entry_level",
        product=Product.DISBLAY,
        matches=lambda a: a.budget == "below_2k" or a.digital_status == "no_presence",
    ),
    ProductRule(
        name="premium_custom",
        product=Product.HEBT,
        matches=lambda a: a.budget == "25k_plus" and a.has_goal("app"),
    ),
    ProductRule(
        name="branding_bundle",
        product=Product.BRANDPRENEURING,
        matches=lambda a: a.has_goal("brand") and a.budget in ("10k_25k", "25k_plus"),
    ),
)

DEFAULT_PRODUCT = Product.TOPIKO


def recommend_product(
    answers: AnswerSet,
    rules: tuple[ProductRule, ...] = RECOMMENDATION_RULES,
) -> ProductRecommendation:
    for rule in rules:
        if rule.matches(answers):
            return CATALOGUE[rule.product]
    return CATALOGUE[DEFAULT_PRODUCT]


# ----------------------------------------------------------------------
# Solution match
# ----------------------------------------------------------------------


def calculate_solution_match_score(
    answers: AnswerSet, product: str, rules: RuleTable = DEFAULT_RULES
) -> int:
    """Fit between the answers and a product, clamped to the table's range."""
    tables = rules.solution_match
    fit = tables.products.get(product, tables.unknown_product)
    score = float(fit.base)

    if answers.goals:
        aligned = sum(1 for goal in answers.goals if goal in fit.strengths)
        score += aligned / len(answers.goals) * tables.goal_alignment_weight

    for matrix, tag in (
        (tables.budget, answers.budget),
        (tables.digital_status, answers.digital_status),
        (tables.challenge, answers.challenge),
    ):
        score += matrix.get(tag, {}).get(product, 0)

    return clamp(round_half_up(score), tables.floor, tables.ceiling)
