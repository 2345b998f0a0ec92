"""
Fee-impact projection: what the user's current fees cost over 30 years
compared with a low-cost index portfolio and no advisor.

Rates are percent per year.  Starting from the invested-bucket midpoint, each
track compounds annually at::

    value[y + 1] = value[y] * (1 + market_return - total_fee_rate / 100)

and the rounded value is recorded for every year 0..horizon inclusive, so the
presentation layer can chart both curves.  ``savings`` is the difference of
the two terminal values and is positive whenever current fees are higher.
"""

from __future__ import annotations

import logging

from finhealth.config import AppConfig
from finhealth.models.profile import UserProfile
from finhealth.models.results import CostProjection, FeeBreakdown
from finhealth.taxonomy.buckets import AdvisorFeeBucket, ExpenseRatioBucket, invested_amount
from finhealth.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

# Representative midpoints of each bucket, in percent.
_EXPENSE_RATIO_ESTIMATES: dict[ExpenseRatioBucket, float] = {
    ExpenseRatioBucket.UNDER_0_1:       0.05,
    ExpenseRatioBucket.FROM_0_1_TO_0_5: 0.30,
    ExpenseRatioBucket.FROM_0_5_TO_1:   0.75,
    ExpenseRatioBucket.OVER_1:          1.25,
    ExpenseRatioBucket.UNKNOWN:         0.65,
}
DEFAULT_EXPENSE_RATIO = 0.65

_ADVISOR_FEE_ESTIMATES: dict[AdvisorFeeBucket, float] = {
    AdvisorFeeBucket.UNDER_0_5:     0.35,
    AdvisorFeeBucket.FROM_0_5_TO_1: 0.75,
    AdvisorFeeBucket.FROM_1_TO_1_5: 1.25,
    AdvisorFeeBucket.OVER_1_5:      1.75,
    AdvisorFeeBucket.FLAT_FEE:      0.50,
    AdvisorFeeBucket.UNKNOWN:       1.00,
}
DEFAULT_ADVISOR_FEE = 1.0

RECOMMENDED_ADVISOR_FEE = 0.0


def expense_ratio_estimate(bucket: ExpenseRatioBucket | None) -> float:
    """Percent expense ratio for a bucket (0.65 when unanswered)."""
    return _EXPENSE_RATIO_ESTIMATES.get(bucket, DEFAULT_EXPENSE_RATIO)


def advisor_fee_estimate(profile: UserProfile) -> float:
    """Percent advisor fee; 0 without an advisor, 1.0 when the fee is unknown."""
    if not profile.has_advisor:
        return 0.0
    return _ADVISOR_FEE_ESTIMATES.get(profile.advisor_fee, DEFAULT_ADVISOR_FEE)


def compound_series(
    start: float,
    annual_return: float,
    fee_rate: float,
    years: int,
) -> list[int]:
    """Year-indexed rounded values of ``start`` compounding net of ``fee_rate``.

    Args:
        start:         Value at year 0.
        annual_return: Gross market return as a fraction (0.07).
        fee_rate:      Annual fee drag in percent (1.05).
        years:         Horizon; the result has ``years + 1`` elements.
    """
    growth = 1 + annual_return - fee_rate / 100
    values: list[int] = []
    value = start
    for year in range(years + 1):
        values.append(round_half_up(value))
        if year < years:
            value *= growth
    return values


def project_cost_impact(
    profile: UserProfile,
    config: AppConfig | None = None,
) -> CostProjection:
    """Compare current fees with the recommended low-cost setup.

    Args:
        profile: Questionnaire answers.
        config:  Projection assumptions; defaults to ``AppConfig()``.

    Returns:
        CostProjection with both year-indexed value series.
    """
    cfg = (config or AppConfig()).projection
    balance = invested_amount(profile.total_invested)

    current_er = expense_ratio_estimate(profile.expense_ratio)
    recommended_er = cfg.recommended_expense_ratio
    current_advisor = advisor_fee_estimate(profile)
    recommended_advisor = RECOMMENDED_ADVISOR_FEE

    total_current = current_er + current_advisor
    total_recommended = recommended_er + recommended_advisor

    annual_current_cost = balance * (total_current / 100)
    annual_recommended_cost = balance * (total_recommended / 100)

    breakdown = [
        FeeBreakdown(
            label="Fund expense ratios",
            description="Annual fees charged by your funds",
            current=current_er,
            recommended=recommended_er,
            annual_savings=balance * ((current_er - recommended_er) / 100),
        )
    ]
    if profile.has_advisor:
        breakdown.append(
            FeeBreakdown(
                label="Advisor fees",
                description="Percentage of assets charged by advisor",
                current=current_advisor,
                recommended=recommended_advisor,
                annual_savings=balance * ((current_advisor - recommended_advisor) / 100),
            )
        )

    years = cfg.cost_horizon_years
    with_current = compound_series(balance, cfg.market_return, total_current, years)
    with_recommended = compound_series(balance, cfg.market_return, total_recommended, years)
    savings = with_recommended[-1] - with_current[-1]

    logger.debug(
        "Cost projection: balance=%d current=%.2f%% recommended=%.2f%% savings=%d",
        balance, total_current, total_recommended, savings,
    )

    return CostProjection(
        portfolio_value=balance,
        current_expense_ratio=current_er,
        recommended_expense_ratio=recommended_er,
        current_advisor_fee=current_advisor,
        recommended_advisor_fee=recommended_advisor,
        total_current_fees=total_current,
        total_recommended_fees=total_recommended,
        annual_current_cost=annual_current_cost,
        annual_recommended_cost=annual_recommended_cost,
        total_annual_savings=annual_current_cost - annual_recommended_cost,
        fee_breakdown=breakdown,
        horizon_years=years,
        projection_with_current_fees=with_current,
        projection_with_recommended_fees=with_recommended,
        final_value_with_current_fees=with_current[-1],
        final_value_with_recommended_fees=with_recommended[-1],
        savings=savings,
    )
