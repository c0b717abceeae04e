"""Scoring rule table: every per-tag point value used by the scorer.

The table is plain configuration. Business stakeholders can tune it by
dumping the defaults (``topiko rules``), editing the JSON and pointing
``RULES_PATH`` at the result; no scoring code needs to change.

Mappings in the table are read-only views, so a loaded table (including
the shared ``DEFAULT_RULES``) cannot be edited in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Annotated, Any, Literal, TypeVar

from pydantic import (
    AfterValidator,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    WrapSerializer,
    model_validator,
)

from topiko.models.base import FrozenModel
from topiko.models.product import Product
from topiko.models.scoring import (
    BRANDING_RANGE,
    MARKETING_RANGE,
    SCORE_RANGE,
    SOLUTION_MATCH_RANGE,
    WEBSITE_RANGE,
    CategoryLevel,
)

if TYPE_CHECKING:
    from pathlib import Path

Level = Literal["low", "medium", "high"]

K = TypeVar("K")
V = TypeVar("V")


def _freeze(value: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(dict(value))


def _as_dict(value: Mapping[Any, Any], handler: SerializerFunctionWrapHandler) -> Any:
    return handler(dict(value))


ReadOnlyMapping = Annotated[
    Mapping[K, V],
    AfterValidator(_freeze),
    WrapSerializer(_as_dict),
]


class Weights(FrozenModel):
    goals: float = Field(default=0.25, ge=0.0, le=1.0)
    digital_status: float = Field(default=0.30, ge=0.0, le=1.0)
    budget: float = Field(default=0.25, ge=0.0, le=1.0)
    challenge: float = Field(default=0.20, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _sum_to_one(self) -> Weights:
        total = self.goals + self.digital_status + self.budget + self.challenge
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Dimension weights must sum to 1.0, got {total:.4f}")
        return self


class GoalRule(FrozenModel):
    base: int
    complexity: Level
    impact: Level


class StatusRule(FrozenModel):
    score: int
    readiness: str
    gap: str


class BudgetRule(FrozenModel):
    score: int
    viability: str
    risk: str


class ChallengeRule(FrozenModel):
    score: int
    specificity: str
    urgency: str


class GoalCombination(FrozenModel):
    """Bonus granted when every listed goal is selected."""

    goals: tuple[str, ...]
    bonus: int


class CategoryBand(FrozenModel):
    min_score: int = Field(ge=0, le=100)
    level: CategoryLevel
    label: str
    color: str


class BonusTable(FrozenModel):
    """Additive score: base plus per-tag points, clamped to [floor, ceiling].

    Goal and challenge bonuses apply only when the tag is present.
    Budget and status points apply to the selected tag; an unrecognized
    tag receives the ``*_default`` value.
    """

    model_config = ConfigDict(validate_default=True)

    base: int = 0
    floor: int = 0
    ceiling: int = 100
    goal_bonus: ReadOnlyMapping[str, int] = Field(default_factory=dict)
    challenge_bonus: ReadOnlyMapping[str, int] = Field(default_factory=dict)
    budget_points: ReadOnlyMapping[str, int] = Field(default_factory=dict)
    budget_default: int = 0
    status_points: ReadOnlyMapping[str, int] = Field(default_factory=dict)
    status_default: int = 0

    def check_bounds(self, name: str, bounds: tuple[int, int]) -> None:
        """Reject a clamp range that reaches outside ``bounds``."""
        low, high = bounds
        if not low <= self.floor <= self.ceiling <= high:
            raise ValueError(
                f"{name} must clamp within [{low}, {high}], "
                f"got floor={self.floor} ceiling={self.ceiling}"
            )


class ScoreModifiers(FrozenModel):
    """Bonuses and multipliers applied on top of the per-tag scores."""

    model_config = ConfigDict(validate_default=True)

    complexity_bonus: ReadOnlyMapping[str, int] = Field(
        default_factory=lambda: {"high": 5, "medium": 2, "low": 0}
    )
    impact_step: float = 0.1
    focus_bonus: int = 5
    focus_min_goals: int = 2
    focus_max_goals: int = 3
    unfocused_penalty: float = 0.9

    # Goals that need an existing online footprint to pay off.
    advanced_goals: tuple[str, ...] = ("app", "automate")
    status_gap_penalty: ReadOnlyMapping[str, float] = Field(
        default_factory=lambda: {"low": 0.7, "emerging": 0.85}
    )

    # Goals that are costly to deliver.
    expensive_goals: tuple[str, ...] = ("app", "automate", "brand")
    limited_budget_penalty: float = 0.5
    moderate_budget_penalty: float = 0.8
    excellent_budget_bonus: float = 1.1

    leads_alignment_bonus: float = 1.15
    sales_alignment_bonus: float = 1.1


class ProductFit(FrozenModel):
    base: int
    strengths: tuple[str, ...] = ()


def _default_product_fits() -> dict[str, ProductFit]:
    return {
        Product.DISBLAY: ProductFit(base=60, strengths=("showcase", "basic")),
        Product.TOPIKO: ProductFit(base=70, strengths=("more_customers", "showcase", "brand")),
        Product.BRANDPRENEURING: ProductFit(base=75, strengths=("brand", "more_customers")),
        Product.HEBT: ProductFit(base=80, strengths=("app", "automate")),
    }


def _fit_row(disblay: int, topiko: int, bundle: int, hebt: int) -> dict[str, int]:
    return {
        Product.DISBLAY: disblay,
        Product.TOPIKO: topiko,
        Product.BRANDPRENEURING: bundle,
        Product.HEBT: hebt,
    }


def _default_budget_fit() -> dict[str, dict[str, int]]:
    return {
        "below_2k": _fit_row(8, -5, -10, -15),
        "2k_10k": _fit_row(5, 8, 3, -8),
        "10k_25k": _fit_row(0, 5, 8, 3),
        "25k_plus": _fit_row(-3, 3, 5, 10),
    }


def _default_status_fit() -> dict[str, dict[str, int]]:
    return {
        "no_presence": _fit_row(5, 0, -3, -8),
        "basic_social": _fit_row(3, 5, 3, -5),
        "basic_website": _fit_row(0, 3, 5, 3),
        "no_results": _fit_row(-3, 5, 8, 8),
    }


def _default_challenge_fit() -> dict[str, dict[str, int]]:
    return {
        "no_leads": _fit_row(3, 8, 5, 5),
        "low_sales": _fit_row(5, 8, 8, 3),
        "no_time": _fit_row(8, 5, 3, 8),
        "dont_know": _fit_row(5, 3, 0, -3),
    }


class SolutionMatchTables(FrozenModel):
    """Product fit: base and strengths per product, plus tag×product matrices."""

    model_config = ConfigDict(validate_default=True)

    floor: int = SOLUTION_MATCH_RANGE[0]
    ceiling: int = SOLUTION_MATCH_RANGE[1]
    goal_alignment_weight: float = 15
    products: ReadOnlyMapping[str, ProductFit] = Field(default_factory=_default_product_fits)
    unknown_product: ProductFit = ProductFit(base=65)
    budget: ReadOnlyMapping[str, ReadOnlyMapping[str, int]] = Field(
        default_factory=_default_budget_fit
    )
    digital_status: ReadOnlyMapping[str, ReadOnlyMapping[str, int]] = Field(
        default_factory=_default_status_fit
    )
    challenge: ReadOnlyMapping[str, ReadOnlyMapping[str, int]] = Field(
        default_factory=_default_challenge_fit
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> SolutionMatchTables:
        low, high = SOLUTION_MATCH_RANGE
        if not low <= self.floor <= self.ceiling <= high:
            raise ValueError(
                f"Solution match must clamp within [{low}, {high}], "
                f"got floor={self.floor} ceiling={self.ceiling}"
            )
        return self


def _default_goals() -> dict[str, GoalRule]:
    return {
        "more_customers": GoalRule(base=25, complexity="medium", impact="high"),
        "showcase": GoalRule(base=20, complexity="low", impact="medium"),
        "brand": GoalRule(base=20, complexity="medium", impact="high"),
        "automate": GoalRule(base=25, complexity="high", impact="high"),
        "app": GoalRule(base=30, complexity="high", impact="high"),
    }


def _default_statuses() -> dict[str, StatusRule]:
    return {
        "no_presence": StatusRule(score=15, readiness="low", gap="major"),
        "basic_social": StatusRule(score=35, readiness="emerging", gap="significant"),
        "basic_website": StatusRule(score=65, readiness="developing", gap="moderate"),
        "no_results": StatusRule(score=80, readiness="advanced", gap="minor"),
    }


def _default_budgets() -> dict[str, BudgetRule]:
    return {
        "below_2k": BudgetRule(score=25, viability="limited", risk="high"),
        "2k_10k": BudgetRule(score=55, viability="moderate", risk="medium"),
        "10k_25k": BudgetRule(score=75, viability="good", risk="low"),
        "25k_plus": BudgetRule(score=90, viability="excellent", risk="minimal"),
    }


def _default_challenges() -> dict[str, ChallengeRule]:
    return {
        "no_leads": ChallengeRule(score=85, specificity="high", urgency="critical"),
        "dont_know": ChallengeRule(score=30, specificity="low", urgency="low"),
        "no_time": ChallengeRule(score=65, specificity="medium", urgency="high"),
        "low_sales": ChallengeRule(score=90, specificity="high", urgency="critical"),
    }


def _default_combinations() -> tuple[GoalCombination, ...]:
    return (
        GoalCombination(goals=("brand", "showcase"), bonus=8),
        GoalCombination(goals=("more_customers", "automate"), bonus=10),
        GoalCombination(goals=("app", "brand"), bonus=12),
    )


def _default_categories() -> tuple[CategoryBand, ...]:
    return (
        CategoryBand(
            min_score=80, level=CategoryLevel.HIGH, label="Digitally Ready", color="#10b981"
        ),
        CategoryBand(
            min_score=60, level=CategoryLevel.MEDIUM_HIGH, label="Nearly Ready", color="#3b82f6"
        ),
        CategoryBand(
            min_score=40, level=CategoryLevel.MEDIUM, label="Getting Started", color="#f59e0b"
        ),
        CategoryBand(
            min_score=20, level=CategoryLevel.LOW_MEDIUM, label="Early Stage", color="#ef4444"
        ),
        CategoryBand(min_score=0, level=CategoryLevel.LOW, label="Just Beginning", color="#6b7280"),
    )


class DerivedDimensionTables(FrozenModel):
    visibility: BonusTable = BonusTable(
        status_points={
            "no_presence": 20,
            "basic_social": 50,
            "basic_website": 75,
            "no_results": 90,
        },
        goal_bonus={"showcase": 15},
    )
    engagement: BonusTable = BonusTable(
        base=30,
        goal_bonus={"more_customers": 30, "brand": 20},
        challenge_bonus={"no_leads": 20, "low_sales": 25},
    )
    automation: BonusTable = BonusTable(
        base=10,
        goal_bonus={"automate": 50},
        budget_points={"10k_25k": 20, "25k_plus": 30},
        challenge_bonus={"no_time": 20},
    )
    brand_presentation: BonusTable = BonusTable(
        base=40,
        goal_bonus={"brand": 40, "app": 20},
        budget_points={"25k_plus": 20},
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> DerivedDimensionTables:
        for name in ("visibility", "engagement", "automation", "brand_presentation"):
            getattr(self, name).check_bounds(name, SCORE_RANGE)
        return self


class CategoryMatchTables(FrozenModel):
    marketing: BonusTable = BonusTable(
        base=40,
        floor=25,
        ceiling=95,
        goal_bonus={"more_customers": 25, "showcase": 15, "brand": 10},
        challenge_bonus={"no_leads": 20, "low_sales": 15},
        budget_points={"below_2k": 10, "2k_10k": 15, "10k_25k": 20, "25k_plus": 25},
        budget_default=10,
        status_points={
            "no_presence": -10,
            "basic_social": 5,
            "basic_website": 10,
            "no_results": 15,
        },
    )
    website: BonusTable = BonusTable(
        base=50,
        floor=30,
        ceiling=95,
        goal_bonus={"showcase": 20, "more_customers": 15, "app": 10},
        challenge_bonus={"no_leads": 10, "low_sales": 10},
        budget_points={"below_2k": 15, "2k_10k": 20, "10k_25k": 15, "25k_plus": 10},
        budget_default=10,
        status_points={"no_presence": 25, "basic_social": 20, "basic_website": 5, "no_results": 10},
    )
    branding: BonusTable = BonusTable(
        base=35,
        floor=20,
        ceiling=95,
        goal_bonus={"brand": 30, "showcase": 15, "app": 10},
        challenge_bonus={"low_sales": 15, "no_leads": 10},
        budget_points={"below_2k": 5, "2k_10k": 10, "10k_25k": 20, "25k_plus": 25},
        budget_default=5,
        status_points={"no_presence": 5, "basic_social": 10, "basic_website": 15, "no_results": 20},
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> CategoryMatchTables:
        self.marketing.check_bounds("marketing", MARKETING_RANGE)
        self.website.check_bounds("website", WEBSITE_RANGE)
        self.branding.check_bounds("branding", BRANDING_RANGE)
        return self


class RuleTable(FrozenModel):
    """Immutable scoring configuration, built once per process."""

    model_config = ConfigDict(validate_default=True)

    weights: Weights = Weights()
    goals: ReadOnlyMapping[str, GoalRule] = Field(default_factory=_default_goals)
    goal_combinations: tuple[GoalCombination, ...] = Field(default_factory=_default_combinations)
    digital_status: ReadOnlyMapping[str, StatusRule] = Field(default_factory=_default_statuses)
    budget: ReadOnlyMapping[str, BudgetRule] = Field(default_factory=_default_budgets)
    challenge: ReadOnlyMapping[str, ChallengeRule] = Field(default_factory=_default_challenges)
    modifiers: ScoreModifiers = ScoreModifiers()
    dimensions: DerivedDimensionTables = DerivedDimensionTables()
    category_match: CategoryMatchTables = CategoryMatchTables()
    solution_match: SolutionMatchTables = SolutionMatchTables()
    categories: tuple[CategoryBand, ...] = Field(default_factory=_default_categories)

    @model_validator(mode="after")
    def _check_categories(self) -> RuleTable:
        if not self.categories:
            raise ValueError("At least one category band is required")
        floors = [band.min_score for band in self.categories]
        if floors != sorted(floors, reverse=True):
            raise ValueError("Category bands must be ordered from highest to lowest min_score")
        if floors[-1] != 0:
            raise ValueError("The lowest category band must start at 0")
        return self


DEFAULT_RULES = RuleTable()


def load_rule_table(path: Path | None = None) -> RuleTable:
    """Load a rule table from JSON, or return the built-in defaults.

    Raises:
        pydantic.ValidationError: The file does not describe a valid table.
    """
    if path is None:
        return DEFAULT_RULES
    return RuleTable.model_validate_json(path.read_text(encoding="utf-8"))
