"""
Recommendation engine: evaluates every rule, then ranks and truncates.

Usage flow
----------
1. evaluate_rules(ctx)            -> list[Recommendation]  (rule order)
2. rank_recommendations(recs, n)  -> list[Recommendation]  (priority order, ≤ n)

``generate_recommendations()`` runs both steps.

Ranking: stable sort by priority (high, medium, low); among equal
priorities the rule evaluation order is kept.  A recommendation id appears at
most once; if two entries share an id, the first evaluated wins.
"""

from __future__ import annotations

import logging

from finhealth.config import AppConfig
from finhealth.models.profile import UserProfile
from finhealth.models.results import BehavioralData, CostProjection, Recommendation, Scores
from finhealth.recommendations.rules import RULES, Rule, RuleContext

logger = logging.getLogger(__name__)


def evaluate_rules(
    ctx: RuleContext,
    rules: tuple[Rule, ...] = RULES,
) -> list[Recommendation]:
    """Run each rule once; collect the recommendations that fired."""
    fired: list[Recommendation] = []
    for rule in rules:
        rec = rule(ctx)
        if rec is not None:
            logger.debug("Rule %s fired (%s)", rec.id, rec.priority)
            fired.append(rec)
    return fired


def rank_recommendations(
    recommendations: list[Recommendation],
    limit: int,
) -> list[Recommendation]:
    """De-duplicate by id, sort by priority (stable), keep the first ``limit``.

    Args:
        recommendations: Recommendations in evaluation order.
        limit:           Maximum number to return.

    Returns:
        At most ``limit`` recommendations, high priority first.
    """
    seen: set[str] = set()
    unique: list[Recommendation] = []
    for rec in recommendations:
        if rec.id in seen:
            logger.warning("Dropping duplicate recommendation id %r", rec.id)
            continue
        seen.add(rec.id)
        unique.append(rec)

    ranked = sorted(unique, key=lambda r: r.priority.rank)
    return ranked[:limit]


def generate_recommendations(
    profile: UserProfile,
    scores: Scores,
    costs: CostProjection,
    behavior: BehavioralData,
    config: AppConfig | None = None,
) -> list[Recommendation]:
    """Produce the ranked recommendation list for one assessment.

    Args:
        profile:  Questionnaire answers.
        scores:   Output of ``calculate_scores()``.
        costs:    Output of ``project_cost_impact()``.
        behavior: Output of ``project_behavioral_impact()``.
        config:   Thresholds and output size; defaults to ``AppConfig()``.

    Returns:
        At most ``config.recommendations.max_recommendations`` items.
    """
    cfg = config or AppConfig()
    ctx = RuleContext(
        profile=profile,
        scores=scores,
        costs=costs,
        behavior=behavior,
        config=cfg,
    )
    fired = evaluate_rules(ctx)
    ranked = rank_recommendations(fired, cfg.recommendations.max_recommendations)
    if len(ranked) < len(fired):
        logger.debug("Truncated %d recommendations to %d", len(fired), len(ranked))
    return ranked
