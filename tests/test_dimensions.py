"""Tests for the per-dimension scoring functions."""

from __future__ import annotations

import pytest

from topiko.models.answers import AnswerSet, Goal
from topiko.scoring import dimensions
from topiko.scoring.rules import DEFAULT_RULES, GoalRule, RuleTable


def _answers(**kwargs) -> AnswerSet:
    return AnswerSet(**kwargs)


class TestRoundHalfUp:
    def test_half_goes_up(self):
        assert dimensions.round_half_up(12.5) == 13
        assert dimensions.round_half_up(0.5) == 1

    def test_nearest(self):
        assert dimensions.round_half_up(29.4) == 29
        assert dimensions.round_half_up(29.6) == 30


class TestGoalsScore:
    def test_empty_goals_score_zero(self):
        trace = dimensions.score_goals(_answers(goals=[]), DEFAULT_RULES)
        assert trace.score == 0
        assert trace.adjustments == ()

    def test_unknown_goals_are_ignored(self):
        trace = dimensions.score_goals(_answers(goals=["world_domination"]), DEFAULT_RULES)
        assert trace.score == 0

    def test_single_goal(self):
        # (20 + 2) * 1.1 = 24.2
        trace = dimensions.score_goals(_answers(goals=["brand"]), DEFAULT_RULES)
        assert trace.base == 20
        assert trace.adjusted == pytest.approx(24.2)
        assert trace.score == 24

    def test_low_complexity_medium_impact_goal(self):
        trace = dimensions.score_goals(_answers(goals=["showcase"]), DEFAULT_RULES)
        assert trace.score == 20
        assert trace.adjustments == ()

    def test_combination_and_focus_bonus(self):
        # (50 + 7) * 1.2 + 12 (app+brand) + 5 (focus) = 85.4
        trace = dimensions.score_goals(_answers(goals=["app", "brand"]), DEFAULT_RULES)
        reasons = [a.reason for a in trace.adjustments]
        assert "combination app+brand" in reasons
        assert "focus bonus" in reasons
        assert trace.adjusted == pytest.approx(85.4)
        assert trace.score == 85

    def test_combination_bonuses_stack(self):
        goals = ["brand", "showcase", "more_customers"]
        trace = dimensions.score_goals(_answers(goals=goals), DEFAULT_RULES)
        # (65 + 4) * 1.2 + 8 + 5 = 95.8
        assert trace.adjusted == pytest.approx(95.8)
        assert trace.score == 96

    def test_too_many_goals_penalty_is_exactly_point_nine(self):
        flat = {g.value: GoalRule(base=1, complexity="low", impact="medium") for g in Goal}
        rules = RuleTable(goals=flat)
        answers = _answers(goals=["more_customers", "showcase", "brand", "automate"])
        trace = dimensions.score_goals(answers, rules)

        # 4 + 8 (brand+showcase) + 10 (more_customers+automate) = 22 before the penalty
        last = trace.adjustments[-1]
        assert last.operation == "multiply"
        assert last.value == 0.9
        assert trace.adjusted == pytest.approx(22 * 0.9)
        assert trace.score == 20

    def test_too_many_goals_still_clamped(self):
        answers = _answers(goals=[g.value for g in Goal])
        trace = dimensions.score_goals(answers, DEFAULT_RULES)
        assert trace.adjustments[-1].value == 0.9
        assert trace.adjusted > 100
        assert trace.score == 100


class TestDigitalStatusScore:
    def test_base_score(self):
        trace = dimensions.score_digital_status(
            _answers(digital_status="basic_website"), DEFAULT_RULES
        )
        assert trace.score == 65

    def test_emerging_penalty_with_advanced_goal(self):
        answers = _answers(goals=["automate"], digital_status="basic_social")
        trace = dimensions.score_digital_status(answers, DEFAULT_RULES)
        assert trace.adjustments[0].value == 0.85
        assert trace.score == dimensions.round_half_up(35 * 0.85)

    def test_low_readiness_penalty(self):
        answers = _answers(goals=["app"], digital_status="no_presence")
        trace = dimensions.score_digital_status(answers, DEFAULT_RULES)
        assert trace.adjustments[0].value == 0.7
        assert trace.score == dimensions.round_half_up(15 * 0.7)

    def test_no_penalty_for_advanced_status(self):
        answers = _answers(goals=["app"], digital_status="no_results")
        trace = dimensions.score_digital_status(answers, DEFAULT_RULES)
        assert trace.score == 80
        assert trace.adjustments == ()

    def test_unknown_status_scores_zero(self):
        trace = dimensions.score_digital_status(_answers(digital_status="bogus"), DEFAULT_RULES)
        assert trace.score == 0


class TestBudgetScore:
    def test_limited_budget_halves(self):
        answers = _answers(goals=["app"], budget="below_2k")
        trace = dimensions.score_budget(answers, DEFAULT_RULES)
        assert trace.adjusted == pytest.approx(12.5)
        assert trace.score == 13

    def test_moderate_budget_needs_two_expensive_goals(self):
        one = dimensions.score_budget(_answers(goals=["app"], budget="2k_10k"), DEFAULT_RULES)
        two = dimensions.score_budget(
            _answers(goals=["app", "brand"], budget="2k_10k"), DEFAULT_RULES
        )
        assert one.score == 55
        assert two.score == 44

    def test_excellent_budget_bonus(self):
        answers = _answers(goals=["brand"], budget="25k_plus")
        trace = dimensions.score_budget(answers, DEFAULT_RULES)
        assert trace.score == 99

    def test_no_expensive_goals_no_adjustment(self):
        answers = _answers(goals=["showcase"], budget="below_2k")
        assert dimensions.score_budget(answers, DEFAULT_RULES).score == 25


class TestChallengeScore:
    def test_no_alignment(self):
        answers = _answers(goals=["brand"], challenge="low_sales")
        trace = dimensions.score_challenge(answers, DEFAULT_RULES)
        assert trace.score == 90
        assert trace.adjustments == ()

    def test_sales_automation_alignment(self):
        answers = _answers(goals=["automate"], challenge="low_sales")
        trace = dimensions.score_challenge(answers, DEFAULT_RULES)
        assert trace.adjustments[0].value == 1.1
        assert trace.score == 99

    def test_leads_customer_alignment_clamped(self):
        answers = _answers(goals=["more_customers"], challenge="no_leads")
        trace = dimensions.score_challenge(answers, DEFAULT_RULES)
        assert trace.adjustments[0].value == 1.15
        assert trace.score <= 100
        assert trace.score >= 97

    def test_missing_challenge(self):
        assert dimensions.score_challenge(_answers(), DEFAULT_RULES).score == 0


class TestQualifiers:
    def test_known_tags(self, premium_answers):
        q = dimensions.qualifiers(premium_answers, DEFAULT_RULES)
        assert q["digital_status"] == {"readiness": "advanced", "gap": "minor"}
        assert q["budget"] == {"viability": "excellent", "risk": "minimal"}
        assert q["challenge"] == {"specificity": "low", "urgency": "low"}

    def test_unknown_tags(self):
        q = dimensions.qualifiers(_answers(budget="lots"), DEFAULT_RULES)
        assert q["budget"]["viability"] == "unknown"
        assert q["digital_status"]["readiness"] == "unknown"


class TestDimensionScores:
    def test_premium_profile(self, premium_answers):
        dims = dimensions.calculate_dimension_scores(premium_answers, DEFAULT_RULES)
        assert dims.visibility == 90
        assert dims.engagement == 50
        assert dims.automation == 40
        assert dims.brand_presentation == 100

    def test_showcase_boosts_visibility(self):
        answers = _answers(goals=["showcase"], digital_status="basic_social")
        dims = dimensions.calculate_dimension_scores(answers, DEFAULT_RULES)
        assert dims.visibility == 65

    def test_automation_profile(self):
        answers = _answers(goals=["automate"], budget="10k_25k", challenge="no_time")
        dims = dimensions.calculate_dimension_scores(answers, DEFAULT_RULES)
        assert dims.automation == 100

    def test_empty_answers(self):
        dims = dimensions.calculate_dimension_scores(_answers(), DEFAULT_RULES)
        assert dims.visibility == 0
        assert dims.engagement == 30
        assert dims.automation == 10
        assert dims.brand_presentation == 40


class TestThreeCategoryMatch:
    def test_premium_profile(self, premium_answers):
        match = dimensions.calculate_three_category_match(premium_answers, DEFAULT_RULES)
        assert match.marketing == 90
        assert match.website == 80
        assert match.branding == 95

    def test_marketing_capped(self):
        answers = _answers(
            goals=["more_customers", "showcase", "brand"],
            digital_status="no_results",
            budget="25k_plus",
            challenge="no_leads",
        )
        assert dimensions.calculate_three_category_match(answers, DEFAULT_RULES).marketing == 95

    def test_unknown_budget_uses_defaults(self):
        match = dimensions.calculate_three_category_match(_answers(), DEFAULT_RULES)
        assert match.marketing == 50  # 40 + 10 default budget
        assert match.website == 60  # 50 + 10 default budget
        assert match.branding == 40  # 35 + 5 default budget

    def test_serializes_with_title_case_keys(self, premium_answers):
        match = dimensions.calculate_three_category_match(premium_answers, DEFAULT_RULES)
        assert set(match.model_dump(by_alias=True)) == {"Marketing", "Website", "Branding"}


class TestCategoryFor:
    @pytest.mark.parametrize(
        ("score", "label"),
        [
            (100, "Digitally Ready"),
            (80, "Digitally Ready"),
            (79, "Nearly Ready"),
            (60, "Nearly Ready"),
            (40, "Getting Started"),
            (20, "Early Stage"),
            (19, "Just Beginning"),
            (0, "Just Beginning"),
        ],
    )
    def test_bands(self, score, label):
        assert dimensions.category_for(score, DEFAULT_RULES).label == label
