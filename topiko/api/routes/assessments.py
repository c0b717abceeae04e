"""Readiness assessment endpoints."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, BackgroundTasks, Body

from topiko.analytics import FunnelAnalytics
from topiko.api.deps import AnalyticsStoreDep, ScorerDep
from topiko.clients.supabase import SupabaseClient
from topiko.metrics import assessments_total, readiness_score
from topiko.models.answers import AnswerSet
from topiko.models.scoring import Assessment, ScoreResult
from topiko.scoring.rules import RuleTable

logger = structlog.get_logger()

router = APIRouter(tags=["assessments"])


def _answers(payload: Any) -> AnswerSet:
    # Deliberately lenient: the funnel must always get a result back.
    return AnswerSet.model_validate(payload) if isinstance(payload, dict) else AnswerSet()


def _record_completion(store: SupabaseClient, assessment: Assessment) -> None:
    if assessment.session_id is None:
        return
    tracker = FunnelAnalytics(store, assessment.session_id)
    tracker.track_conversion(
        "assessment_completed",
        {
            "readiness_score": assessment.overall.total_score,
            "recommended_product": assessment.overall.recommendations.product_suggestion.product,
        },
    )


@router.get("/rules", response_model=RuleTable)
def get_rules(scorer: ScorerDep) -> RuleTable:
    return scorer.rules


@router.post("/assessments/score", response_model=ScoreResult)
def score(scorer: ScorerDep, payload: Any = Body(default=None)) -> ScoreResult:
    return scorer.calculate_overall_score(_answers(payload))


@router.post("/assessments", response_model=Assessment)
def assess(
    scorer: ScorerDep,
    store: AnalyticsStoreDep,
    background: BackgroundTasks,
    payload: Any = Body(default=None),
) -> Assessment:
    assessment = scorer.assess(_answers(payload))
    product = assessment.overall.recommendations.product_suggestion.product
    assessments_total.labels(product=product).inc()
    readiness_score.observe(assessment.overall.total_score)

    # Scoring never waits on the analytics store.
    background.add_task(_record_completion, store, assessment)
    logger.info(
        "Assessment completed",
        session_id=assessment.session_id,
        total_score=assessment.overall.total_score,
        product=product,
    )
    return assessment
