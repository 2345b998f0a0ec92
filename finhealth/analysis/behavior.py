"""
Behavioral cost projection: the return drag attributed to overtrading.

Each trading-frequency answer maps to an estimated trade count and an annual
"behavioral penalty" in percent.  The invested-bucket midpoint is compounded
over the behavioral horizon (10 years by default) both at the market return
("buy and hold") and at the market return minus the penalty ("your value").

The monthly trade history is illustrative only.  Without a seed the annual
count is spread evenly over the year (earliest months take the remainder),
so the series sums to ``trades_per_year`` and is fully reproducible.  With a
seed, each month gets ``trades_per_year // 12`` plus a seeded coin flip.
"""

from __future__ import annotations

import random

from finhealth.config import AppConfig
from finhealth.models.profile import UserProfile
from finhealth.models.results import BehavioralData, TradingHistoryPoint
from finhealth.taxonomy.buckets import TradingFrequency, invested_amount
from finhealth.utils.numbers import round_half_up

_TRADES_PER_YEAR: dict[TradingFrequency, int] = {
    TradingFrequency.RARELY:        1,
    TradingFrequency.OCCASIONALLY:  6,
    TradingFrequency.MONTHLY:      12,
    TradingFrequency.WEEKLY:       52,
}
DEFAULT_TRADES_PER_YEAR = 6

_PENALTY_PERCENT: dict[TradingFrequency, float] = {
    TradingFrequency.RARELY:       0.0,
    TradingFrequency.OCCASIONALLY: 0.5,
    TradingFrequency.MONTHLY:      1.5,
    TradingFrequency.WEEKLY:       3.5,
}
DEFAULT_PENALTY_PERCENT = 1.0

MONTHS = 12


def trading_history(trades_per_year: int, seed: int | None = None) -> list[TradingHistoryPoint]:
    """Spread an annual trade count across twelve months for display."""
    base, remainder = divmod(trades_per_year, MONTHS)
    if seed is None:
        counts = [base + (1 if month < remainder else 0) for month in range(MONTHS)]
    else:
        rng = random.Random(seed)
        counts = [base + (1 if rng.random() > 0.5 else 0) for _ in range(MONTHS)]
    return [TradingHistoryPoint(month=m, trades=c) for m, c in enumerate(counts)]


def project_behavioral_impact(
    profile: UserProfile,
    config: AppConfig | None = None,
    seed: int | None = None,
) -> BehavioralData:
    """Estimate what the user's trading habits cost over the horizon.

    Args:
        profile: Questionnaire answers.
        config:  Projection assumptions; defaults to ``AppConfig()``.
        seed:    Optional seed for the display-only monthly jitter.

    Returns:
        BehavioralData; ``buy_and_hold_value >= your_value`` always.
    """
    cfg = (config or AppConfig()).projection
    balance = invested_amount(profile.total_invested)

    trades = _TRADES_PER_YEAR.get(profile.trading_frequency, DEFAULT_TRADES_PER_YEAR)
    penalty = _PENALTY_PERCENT.get(profile.trading_frequency, DEFAULT_PENALTY_PERCENT)
    years = cfg.behavioral_horizon_years

    buy_and_hold = round_half_up(balance * (1 + cfg.market_return) ** years)
    yours = round_half_up(balance * (1 + cfg.market_return - penalty / 100) ** years)

    return BehavioralData(
        trades_per_year=trades,
        trading_history=trading_history(trades, seed),
        cost_per_trade=cfg.cost_per_trade,
        annual_penalty_percent=penalty,
        horizon_years=years,
        buy_and_hold_value=buy_and_hold,
        your_value=yours,
    )
