"""Per-dimension scoring functions.

Every function here is pure: it reads an answer set and the rule table and
returns a ``DimensionTrace`` recording the base value, each adjustment in
the order applied, the adjusted value and the final clamped integer.
Unrecognized tags contribute zero; nothing in this module raises on bad
answers.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from topiko.models.scoring import (
    Adjustment,
    Category,
    CategoryMatch,
    DimensionScores,
    DimensionTrace,
)

if TYPE_CHECKING:
    from topiko.models.answers import AnswerSet
    from topiko.scoring.rules import BonusTable, RuleTable

UNKNOWN = "unknown"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as the web client does."""
    return math.floor(value + 0.5)


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(value, high))


class _Chain:
    """Accumulates an adjustment chain and renders it as a trace."""

    def __init__(self, base: float) -> None:
        self.base = base
        self.value = base
        self.steps: list[Adjustment] = []

    def add(self, reason: str, amount: float) -> None:
        if amount:
            self.value += amount
            self.steps.append(Adjustment(reason=reason, operation="add", value=amount))

    def multiply(self, reason: str, factor: float) -> None:
        self.value *= factor
        self.steps.append(Adjustment(reason=reason, operation="multiply", value=factor))

    def finish(self, low: int = 0, high: int = 100) -> DimensionTrace:
        return DimensionTrace(
            base=self.base,
            adjustments=tuple(self.steps),
            adjusted=self.value,
            score=clamp(round_half_up(self.value), low, high),
        )


def known_goals(answers: AnswerSet, rules: RuleTable) -> tuple[str, ...]:
    """Selected goals that the rule table recognizes, in selection order."""
    return tuple(goal for goal in answers.goals if goal in rules.goals)


# ----------------------------------------------------------------------
# Weighted dimensions
# ----------------------------------------------------------------------


def score_goals(answers: AnswerSet, rules: RuleTable) -> DimensionTrace:
    goals = known_goals(answers, rules)
    if not goals:
        return DimensionTrace(base=0, adjusted=0, score=0)

    mods = rules.modifiers
    goal_rules = [rules.goals[goal] for goal in goals]
    chain = _Chain(sum(rule.base for rule in goal_rules))
    chain.add(
        "complexity bonus",
        sum(mods.complexity_bonus.get(rule.complexity, 0) for rule in goal_rules),
    )

    multiplier = 1.0
    for rule in goal_rules:
        if rule.impact == "high":
            multiplier += mods.impact_step
    if multiplier != 1.0:
        chain.multiply("impact multiplier", multiplier)

    for combo in rules.goal_combinations:
        if all(goal in goals for goal in combo.goals):
            chain.add(f"combination {'+'.join(combo.goals)}", combo.bonus)

    if mods.focus_min_goals <= len(goals) <= mods.focus_max_goals:
        chain.add("focus bonus", mods.focus_bonus)
    elif len(goals) > mods.focus_max_goals:
        chain.multiply("too many goals", mods.unfocused_penalty)

    return chain.finish()


def score_digital_status(answers: AnswerSet, rules: RuleTable) -> DimensionTrace:
    rule = rules.digital_status.get(answers.digital_status)
    if rule is None:
        return DimensionTrace(base=0, adjusted=0, score=0)

    mods = rules.modifiers
    chain = _Chain(rule.score)
    if any(goal in mods.advanced_goals for goal in answers.goals):
        penalty = mods.status_gap_penalty.get(rule.readiness)
        if penalty is not None:
            chain.multiply(f"advanced goals with {rule.readiness} readiness", penalty)
    return chain.finish()


def score_budget(answers: AnswerSet, rules: RuleTable) -> DimensionTrace:
    rule = rules.budget.get(answers.budget)
    if rule is None:
        return DimensionTrace(base=0, adjusted=0, score=0)

    mods = rules.modifiers
    chain = _Chain(rule.score)
    expensive = sum(1 for goal in answers.goals if goal in mods.expensive_goals)
    if expensive >= 1 and rule.viability == "limited":
        chain.multiply("expensive goals on a limited budget", mods.limited_budget_penalty)
    elif expensive >= 2 and rule.viability == "moderate":
        chain.multiply("several expensive goals on a moderate budget", mods.moderate_budget_penalty)
    if expensive >= 1 and rule.viability == "excellent":
        chain.multiply("budget matches expensive goals", mods.excellent_budget_bonus)
    return chain.finish()


def score_challenge(answers: AnswerSet, rules: RuleTable) -> DimensionTrace:
    rule = rules.challenge.get(answers.challenge)
    if rule is None:
        return DimensionTrace(base=0, adjusted=0, score=0)

    mods = rules.modifiers
    chain = _Chain(rule.score)
    if answers.challenge == "no_leads" and answers.has_goal("more_customers"):
        chain.multiply("lead problem with customer goal", mods.leads_alignment_bonus)
    if answers.challenge == "low_sales" and answers.has_goal("automate"):
        chain.multiply("sales problem with automation goal", mods.sales_alignment_bonus)
    return chain.finish()


def qualifiers(answers: AnswerSet, rules: RuleTable) -> dict[str, dict[str, str]]:
    """Rule-table qualifiers for the selected single-choice tags."""
    status = rules.digital_status.get(answers.digital_status)
    budget = rules.budget.get(answers.budget)
    challenge = rules.challenge.get(answers.challenge)
    return {
        "goals": {},
        "digital_status": {
            "readiness": status.readiness if status else UNKNOWN,
            "gap": status.gap if status else UNKNOWN,
        },
        "budget": {
            "viability": budget.viability if budget else UNKNOWN,
            "risk": budget.risk if budget else UNKNOWN,
        },
        "challenge": {
            "specificity": challenge.specificity if challenge else UNKNOWN,
            "urgency": challenge.urgency if challenge else UNKNOWN,
        },
    }


# ----------------------------------------------------------------------
# Additive tables: derived dimensions and category match
# ----------------------------------------------------------------------


def score_bonus_table(table: BonusTable, answers: AnswerSet) -> DimensionTrace:
    chain = _Chain(table.base)
    if table.status_points or table.status_default:
        chain.add(
            f"status {answers.digital_status or UNKNOWN}",
            table.status_points.get(answers.digital_status, table.status_default),
        )
    for goal, bonus in table.goal_bonus.items():
        if answers.has_goal(goal):
            chain.add(f"goal {goal}", bonus)
    if table.budget_points or table.budget_default:
        chain.add(
            f"budget {answers.budget or UNKNOWN}",
            table.budget_points.get(answers.budget, table.budget_default),
        )
    chain.add(f"challenge {answers.challenge}", table.challenge_bonus.get(answers.challenge, 0))
    return chain.finish(table.floor, table.ceiling)


def calculate_dimension_scores(answers: AnswerSet, rules: RuleTable) -> DimensionScores:
    tables = rules.dimensions
    return DimensionScores(
        visibility=score_bonus_table(tables.visibility, answers).score,
        engagement=score_bonus_table(tables.engagement, answers).score,
        automation=score_bonus_table(tables.automation, answers).score,
        brand_presentation=score_bonus_table(tables.brand_presentation, answers).score,
    )


def calculate_three_category_match(answers: AnswerSet, rules: RuleTable) -> CategoryMatch:
    tables = rules.category_match
    return CategoryMatch(
        marketing=score_bonus_table(tables.marketing, answers).score,
        website=score_bonus_table(tables.website, answers).score,
        branding=score_bonus_table(tables.branding, answers).score,
    )


def category_for(score: float, rules: RuleTable) -> Category:
    for band in rules.categories:
        if score >= band.min_score:
            return Category(level=band.level, label=band.label, color=band.color)
    lowest = rules.categories[-1]
    return Category(level=lowest.level, label=lowest.label, color=lowest.color)
