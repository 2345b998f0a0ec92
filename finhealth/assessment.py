"""
Assessment entry point: one call from questionnaire answers to results.

    profile → calculate_scores
            → compare_portfolios, project_cost_impact, project_behavioral_impact
            → generate_recommendations
            → AssessmentResult

No state is kept between calls; the caller stores the returned bundle.
"""

from __future__ import annotations

import logging
from typing import Iterable

from finhealth.analysis.behavior import project_behavioral_impact
from finhealth.analysis.costs import project_cost_impact
from finhealth.analysis.portfolio import compare_portfolios
from finhealth.config import AppConfig
from finhealth.models.profile import UserProfile
from finhealth.models.results import AssessmentResult
from finhealth.recommendations.engine import generate_recommendations
from finhealth.scoring.calculator import calculate_scores

logger = logging.getLogger(__name__)


def run_assessment(
    profile: UserProfile,
    config: AppConfig | None = None,
    seed: int | None = None,
) -> AssessmentResult:
    """Compute scores, projections and recommendations for one profile.

    Args:
        profile: Complete, validated questionnaire answers.
        config:  Engine configuration; defaults to ``AppConfig()``.
        seed:    Optional seed for the display-only monthly trade jitter.

    Returns:
        Frozen ``AssessmentResult`` bundle.
    """
    cfg = config or AppConfig()

    scores = calculate_scores(profile, cfg.scoring)
    portfolio = compare_portfolios(profile, cfg)
    costs = project_cost_impact(profile, cfg)
    behavior = project_behavioral_impact(profile, cfg, seed=seed)
    recommendations = generate_recommendations(profile, scores, costs, behavior, cfg)

    logger.info(
        "Assessment for %s: overall=%d (%s), %d recommendation(s)",
        profile.name, scores.overall, scores.label, len(recommendations),
        extra={
            "profile": profile.name,
            "overall": scores.overall,
            "n_recommendations": len(recommendations),
        },
    )

    return AssessmentResult(
        profile=profile,
        scores=scores,
        portfolio=portfolio,
        costs=costs,
        behavior=behavior,
        recommendations=recommendations,
    )


def run_assessments(
    profiles: Iterable[UserProfile],
    config: AppConfig | None = None,
    seed: int | None = None,
) -> list[AssessmentResult]:
    """Run ``run_assessment`` for each profile independently, in input order."""
    cfg = config or AppConfig()
    return [run_assessment(p, cfg, seed=seed) for p in profiles]
