"""
Financial health scoring: converts a UserProfile into five category scores
and a weighted overall score.

Overall formula (weights from ``ScoringConfig.weights``, default shown)
-------------------------------------------------------------------------
    overall = round(
        investment_strategy * 0.20
        + cost_efficiency   * 0.30
        + tax_optimization  * 0.15
        + behavioral_health * 0.25
        + goal_coverage     * 0.10
    )

Category scores (each clamped to 0–100)
---------------------------------------
investment_strategy:
    Additive from 0.  Diversification (up to 40): stocks +15, any
    international +15, any bonds +10; cash above 20% −5, other above 10% −5.
    Age fit (up to 30): gap between actual and target stock share
    ≤5 → 30, ≤10 → 20, ≤20 → 10, else 0.  Global diversification (up to 30):
    estimated international share 20–40 → 30, 10–19 → 20, >0 → 10.
    Timeline adjustment: short timelines reward bonds, long ones reward stocks.

cost_efficiency:
    Expense-ratio base (0–70) + advisor component (0–30; 30 with no advisor).

tax_optimization:
    50 base + 20 assumed tax-advantaged accounts + 30 for college savings
    (automatic without children), minus a small adjustment for high incomes.

behavioral_health:
    Trading (0–40) + panic selling (0–30) + balance checking (0–30).

goal_coverage:
    Share of *applicable* safety-net point blocks in place, scaled to 100.
    Items that do not apply to the user (life insurance for a single
    25-year-old) are left out of both numerator and denominator.

Unrecognized or missing answers never raise; every lookup has a default.
"""

from __future__ import annotations

from finhealth.config import ScoringConfig
from finhealth.models.profile import UserProfile
from finhealth.models.results import Scores
from finhealth.taxonomy.buckets import (
    AdvisorFeeBucket,
    CheckingFrequency,
    ExpenseRatioBucket,
    IncomeBracket,
    PanicSelling,
    RetirementTimeline,
    TradingFrequency,
)
from finhealth.utils.numbers import clamp, clamp_score, round_half_up

# Share of the stock allocation assumed to be international.
INTERNATIONAL_SHARE = 0.3

# ── Cost efficiency tables ────────────────────────────────────────────────────

_EXPENSE_RATIO_POINTS: dict[ExpenseRatioBucket, int] = {
    ExpenseRatioBucket.UNDER_0_1:       70,
    ExpenseRatioBucket.FROM_0_1_TO_0_5: 50,
    ExpenseRatioBucket.FROM_0_5_TO_1:   25,
    ExpenseRatioBucket.OVER_1:           0,
    ExpenseRatioBucket.UNKNOWN:         35,
}
_DEFAULT_EXPENSE_RATIO_POINTS = 35

_ADVISOR_FEE_POINTS: dict[AdvisorFeeBucket, int] = {
    AdvisorFeeBucket.UNDER_0_5:     25,
    AdvisorFeeBucket.FROM_0_5_TO_1: 20,
    AdvisorFeeBucket.FROM_1_TO_1_5: 10,
    AdvisorFeeBucket.OVER_1_5:       0,
    AdvisorFeeBucket.FLAT_FEE:      20,
    AdvisorFeeBucket.UNKNOWN:       10,
}
_DEFAULT_ADVISOR_FEE_POINTS = 10
_NO_ADVISOR_POINTS = 30

# ── Tax optimization ──────────────────────────────────────────────────────────

_TAX_BASE = 50
_TAX_ADVANTAGED_ACCOUNTS = 20
_COLLEGE_SAVINGS_POINTS = 30

_INCOME_TAX_ADJUSTMENT: dict[IncomeBracket, int] = {
    IncomeBracket.UNDER_50K:          0,
    IncomeBracket.FROM_50K_TO_100K:   0,
    IncomeBracket.FROM_100K_TO_200K: -5,
    IncomeBracket.FROM_200K_TO_500K: -5,
    IncomeBracket.OVER_500K:        -10,
}

# ── Behavioral health tables ──────────────────────────────────────────────────

_TRADING_POINTS: dict[TradingFrequency, int] = {
    TradingFrequency.RARELY:       40,
    TradingFrequency.OCCASIONALLY: 30,
    TradingFrequency.MONTHLY:      15,
    TradingFrequency.WEEKLY:        0,
}
_DEFAULT_TRADING_POINTS = 20

_PANIC_POINTS: dict[PanicSelling, int] = {
    PanicSelling.NEVER:     30,
    PanicSelling.ONCE:      20,
    PanicSelling.SOMETIMES: 10,
    PanicSelling.OFTEN:      0,
}
_DEFAULT_PANIC_POINTS = 15

_CHECKING_POINTS: dict[CheckingFrequency, int] = {
    CheckingFrequency.YEARLY:    30,
    CheckingFrequency.QUARTERLY: 25,
    CheckingFrequency.MONTHLY:   20,
    CheckingFrequency.WEEKLY:    10,
    CheckingFrequency.DAILY:      0,
}
_DEFAULT_CHECKING_POINTS = 15

# ── Goal coverage ─────────────────────────────────────────────────────────────

_EMERGENCY_FUND_POINTS = 40
_LIFE_INSURANCE_POINTS = 20
_DISABILITY_POINTS = 15
_ESTATE_PLAN_POINTS = 10
_COLLEGE_POINTS = 15

INSURANCE_AGE_THRESHOLD = 30   # life/disability apply above this age (or with children)
ESTATE_AGE_THRESHOLD = 40      # estate plan applies above this age


# ── Shared helpers ────────────────────────────────────────────────────────────


def target_stock_percent(age: int, config: ScoringConfig | None = None) -> int:
    """Age-based stock target: ``clamp(110 - age, min, max)``."""
    cfg = config or ScoringConfig()
    return int(clamp(110 - age, cfg.min_stock_target, cfg.max_stock_target))


def estimated_international(stocks: int) -> int:
    """Estimated international share of the whole portfolio, in percent."""
    return round_half_up(stocks * INTERNATIONAL_SHARE)


def stock_gap(profile: UserProfile, config: ScoringConfig | None = None) -> int:
    """Signed gap: actual stock percent minus the age-based target."""
    return profile.allocation.stocks - target_stock_percent(profile.age, config)


# ── Entry point ───────────────────────────────────────────────────────────────


def calculate_scores(
    profile: UserProfile,
    config: ScoringConfig | None = None,
) -> Scores:
    """Compute all category scores and the weighted overall score.

    Args:
        profile: Questionnaire answers.
        config:  Scoring parameters; defaults to ``ScoringConfig()``.

    Returns:
        Scores with every field in [0, 100].
    """
    cfg = config or ScoringConfig()
    w = cfg.weights

    investment_strategy = investment_strategy_score(profile, cfg)
    cost_efficiency     = cost_efficiency_score(profile)
    tax_optimization    = tax_optimization_score(profile)
    behavioral_health   = behavioral_health_score(profile)
    goal_coverage       = goal_coverage_score(profile)

    overall = clamp_score(
        investment_strategy * w.investment_strategy
        + cost_efficiency   * w.cost_efficiency
        + tax_optimization  * w.tax_optimization
        + behavioral_health * w.behavioral_health
        + goal_coverage     * w.goal_coverage
    )

    return Scores(
        overall=overall,
        investment_strategy=investment_strategy,
        cost_efficiency=cost_efficiency,
        tax_optimization=tax_optimization,
        behavioral_health=behavioral_health,
        goal_coverage=goal_coverage,
    )


# ── Category scores ───────────────────────────────────────────────────────────


def investment_strategy_score(
    profile: UserProfile,
    config: ScoringConfig | None = None,
) -> int:
    alloc = profile.allocation
    intl = estimated_international(alloc.stocks)
    score = 0

    # Diversification
    if alloc.stocks > 0:
        score += 15
    if intl > 0:
        score += 15
    if alloc.bonds > 0:
        score += 10
    if alloc.cash > 20:
        score -= 5
    if alloc.other > 10:
        score -= 5

    # Age-appropriate allocation
    gap = abs(stock_gap(profile, config))
    if gap <= 5:
        score += 30
    elif gap <= 10:
        score += 20
    elif gap <= 20:
        score += 10

    # Global diversification
    if 20 <= intl <= 40:
        score += 30
    elif 10 <= intl < 20:
        score += 20
    elif intl > 0:
        score += 10

    score += _timeline_adjustment(profile)
    return clamp_score(score)


def _timeline_adjustment(profile: UserProfile) -> int:
    """Reward bonds for short timelines and stocks for long ones."""
    alloc = profile.allocation
    match profile.retirement_timeline:
        case RetirementTimeline.UNDER_5:
            return -10 if alloc.bonds < 40 else 5
        case RetirementTimeline.FROM_5_TO_10:
            return -5 if alloc.bonds < 30 else 3
        case RetirementTimeline.FROM_20_TO_30:
            return -5 if alloc.stocks < 60 else 0
        case RetirementTimeline.OVER_30:
            return -10 if alloc.stocks < 70 else 5
        case _:
            return 0


def cost_efficiency_score(profile: UserProfile) -> int:
    score = _EXPENSE_RATIO_POINTS.get(profile.expense_ratio, _DEFAULT_EXPENSE_RATIO_POINTS)

    if not profile.has_advisor:
        score += _NO_ADVISOR_POINTS
    else:
        score += _ADVISOR_FEE_POINTS.get(profile.advisor_fee, _DEFAULT_ADVISOR_FEE_POINTS)

    return clamp_score(score)


def tax_optimization_score(profile: UserProfile) -> int:
    score = _TAX_BASE + _TAX_ADVANTAGED_ACCOUNTS

    if not profile.has_children or profile.financial_gaps.college_savings:
        score += _COLLEGE_SAVINGS_POINTS

    score += _INCOME_TAX_ADJUSTMENT.get(profile.income, 0)

    return clamp_score(score)


def behavioral_health_score(profile: UserProfile) -> int:
    # Unanswered buckets are None, which no table contains.
    score = (
        _TRADING_POINTS.get(profile.trading_frequency, _DEFAULT_TRADING_POINTS)
        + _PANIC_POINTS.get(profile.panic_selling, _DEFAULT_PANIC_POINTS)
        + _CHECKING_POINTS.get(profile.checking_frequency, _DEFAULT_CHECKING_POINTS)
    )
    return clamp_score(score)


def goal_coverage_score(profile: UserProfile) -> int:
    gaps = profile.financial_gaps
    needs_insurance = profile.has_children or profile.age > INSURANCE_AGE_THRESHOLD

    # (points, applies to this user, in place)
    blocks: list[tuple[int, bool, bool]] = [
        (_EMERGENCY_FUND_POINTS, True,                                gaps.emergency_fund),
        (_LIFE_INSURANCE_POINTS, needs_insurance,                     gaps.life_insurance),
        (_DISABILITY_POINTS,     needs_insurance,                     gaps.disability_insurance),
        (_ESTATE_PLAN_POINTS,    profile.age > ESTATE_AGE_THRESHOLD,  gaps.estate_plan),
        (_COLLEGE_POINTS,
         profile.has_children and profile.has_education_goal,         gaps.college_savings),
    ]

    possible = sum(points for points, applies, _ in blocks if applies)
    earned = sum(points for points, applies, covered in blocks if applies and covered)
    return clamp_score(100 * earned / possible)
