"""Tests for product recommendation rules and solution-match scoring."""

from __future__ import annotations

import pytest

from topiko.models.answers import AnswerSet
from topiko.models.product import Confidence, Product
from topiko.scoring.products import (
    CATALOGUE,
    RECOMMENDATION_RULES,
    ProductRule,
    calculate_solution_match_score,
    recommend_product,
)


class TestRecommendProduct:
    @pytest.mark.parametrize(
        ("answers", "expected"),
        [
            (AnswerSet(budget="below_2k"), Product.DISBLAY),
            (AnswerSet(digital_status="no_presence", budget="10k_25k"), Product.DISBLAY),
            (AnswerSet(goals=["app"], budget="25k_plus"), Product.HEBT),
            (AnswerSet(goals=["brand"], budget="10k_25k"), Product.BRANDPRENEURING),
            (AnswerSet(goals=["brand"], budget="25k_plus"), Product.BRANDPRENEURING),
            (AnswerSet(goals=["brand"], budget="2k_10k"), Product.TOPIKO),
            (AnswerSet(), Product.TOPIKO),
        ],
    )
    def test_rules(self, answers, expected):
        assert recommend_product(answers).product == expected

    def test_entry_rule_wins_over_premium(self):
        answers = AnswerSet(goals=["app"], digital_status="no_presence", budget="25k_plus")
        assert recommend_product(answers).product == Product.DISBLAY

    def test_premium_rule_wins_over_branding(self):
        answers = AnswerSet(goals=["app", "brand"], budget="25k_plus")
        assert recommend_product(answers).product == Product.HEBT

    def test_rule_order(self):
        assert [rule.name for rule in RECOMMENDATION_RULES] == [
            "entry_level",
            "premium_custom",
            "branding_bundle",
        ]

    def test_custom_rules(self):
        rules = (ProductRule(name="always_hebt", product=Product.HEBT, matches=lambda a: True),)
        assert recommend_product(AnswerSet(budget="below_2k"), rules).product == Product.HEBT

    def test_returns_catalogue_entry(self):
        rec = recommend_product(AnswerSet(budget="below_2k"))
        assert rec is CATALOGUE[Product.DISBLAY]
        assert rec.setup_time == "24-48 hours"
        assert len(rec.features) == 4


class TestCatalogue:
    def test_every_product_listed(self):
        assert set(CATALOGUE) == set(Product)

    def test_entries_match_keys(self):
        for product, rec in CATALOGUE.items():
            assert rec.product == product
            assert rec.pricing
            assert rec.reason

    def test_default_product_is_medium_confidence(self):
        assert CATALOGUE[Product.TOPIKO].confidence == Confidence.MEDIUM
        assert CATALOGUE[Product.HEBT].confidence == Confidence.HIGH


class TestSolutionMatch:
    def test_premium_capped(self, premium_answers):
        # 80 + 7.5 + 10 + 8 - 3 = 102.5
        assert calculate_solution_match_score(premium_answers, Product.HEBT) == 95

    def test_entry_level(self, entry_answers):
        # 60 + 0 + 8 + 5 + 3
        assert calculate_solution_match_score(entry_answers, Product.DISBLAY) == 76

    def test_partial_alignment_rounds_half_up(self):
        answers = AnswerSet(
            goals=["showcase", "automate"],
            digital_status="basic_website",
            budget="10k_25k",
            challenge="dont_know",
        )
        # 70 + 7.5 + 5 + 3 + 3 = 88.5
        assert calculate_solution_match_score(answers, Product.TOPIKO) == 89

    def test_floor(self):
        answers = AnswerSet(
            goals=["showcase"],
            digital_status="no_presence",
            budget="below_2k",
            challenge="dont_know",
        )
        # 80 + 0 - 15 - 8 - 3 = 54
        assert calculate_solution_match_score(answers, Product.HEBT) == 60

    def test_empty_goals_have_no_alignment(self):
        answers = AnswerSet(budget="10k_25k")
        assert calculate_solution_match_score(answers, Product.BRANDPRENEURING) == 83

    def test_unknown_product_uses_neutral_base(self):
        assert calculate_solution_match_score(AnswerSet(), "Mystery Box") == 65

    def test_unknown_tags_contribute_nothing(self):
        answers = AnswerSet(digital_status="x", budget="y", challenge="z")
        assert calculate_solution_match_score(answers, Product.TOPIKO) == 70
