"""
Portfolio analysis: current allocation issues vs. an age-based three-fund
recommendation.

Issue detection (current portfolio)
-----------------------------------
    international < 10%            → "Missing international diversification"
    cash > 20%                     → "Too much cash not growing"
    other > 10%                    → "Overly complex with non-core assets"
    |stocks − target| > 15         → "Too aggressive for your age" (over)
                                     "Too conservative for your timeline" (under)
    bonds < 10% and age > 40       → "Need more bonds for stability"

International exposure is estimated as 30% of the stock allocation; the
questionnaire does not ask for it directly.

Recommended portfolio
---------------------
Stocks at the age-based target, split 70/30 domestic/international, the
remainder in bonds, nothing in cash or other assets.  Always sums to 100.
"""

from __future__ import annotations

import logging

from finhealth.analysis.costs import expense_ratio_estimate
from finhealth.config import AppConfig
from finhealth.models.profile import Allocation, UserProfile
from finhealth.models.results import (
    CurrentPortfolio,
    PortfolioComparison,
    PortfolioExplanation,
    RecommendedFund,
    RecommendedPortfolio,
)
from finhealth.scoring.calculator import estimated_international, target_stock_percent
from finhealth.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

MIN_INTERNATIONAL = 10
MAX_CASH = 20
MAX_OTHER = 10
ALLOCATION_GAP_LIMIT = 15
MIN_BONDS = 10
BONDS_AGE_THRESHOLD = 40

# "Already optimal" thresholds: a looser stock gap but stricter cash limit.
OPTIMAL_STOCK_GAP = 10
OPTIMAL_MAX_CASH = 15

DOMESTIC_SHARE = 0.7

ISSUE_NO_INTERNATIONAL = "Missing international diversification"
ISSUE_EXCESS_CASH = "Too much cash not growing"
ISSUE_EXCESS_OTHER = "Overly complex with non-core assets"
ISSUE_TOO_AGGRESSIVE = "Too aggressive for your age"
ISSUE_TOO_CONSERVATIVE = "Too conservative for your timeline"
ISSUE_LOW_BONDS = "Need more bonds for stability"

_DOMESTIC_FUND = ("Total US Stock Market Index", "VTI", 0.03)
_INTERNATIONAL_FUND = ("Total International Stock Index", "VXUS", 0.05)
_BOND_FUND = ("Total Bond Market Index", "BND", 0.03)


def analyze_current_portfolio(
    profile: UserProfile,
    config: AppConfig | None = None,
) -> CurrentPortfolio:
    """Return the user's allocation with every detected issue, in rule order."""
    cfg = config or AppConfig()
    alloc = profile.allocation
    issues: list[str] = []

    if estimated_international(alloc.stocks) < MIN_INTERNATIONAL:
        issues.append(ISSUE_NO_INTERNATIONAL)
    if alloc.cash > MAX_CASH:
        issues.append(ISSUE_EXCESS_CASH)
    if alloc.other > MAX_OTHER:
        issues.append(ISSUE_EXCESS_OTHER)

    target = target_stock_percent(profile.age, cfg.scoring)
    if abs(alloc.stocks - target) > ALLOCATION_GAP_LIMIT:
        issues.append(ISSUE_TOO_AGGRESSIVE if alloc.stocks > target else ISSUE_TOO_CONSERVATIVE)

    if alloc.bonds < MIN_BONDS and profile.age > BONDS_AGE_THRESHOLD:
        issues.append(ISSUE_LOW_BONDS)

    return CurrentPortfolio(allocation=alloc, issues=issues)


def build_recommended_portfolio(
    profile: UserProfile,
    config: AppConfig | None = None,
) -> RecommendedPortfolio:
    """Build the fully-invested three-fund recommendation for this profile."""
    cfg = config or AppConfig()
    alloc = profile.allocation

    stocks = target_stock_percent(profile.age, cfg.scoring)
    bonds = 100 - stocks
    domestic = round_half_up(stocks * DOMESTIC_SHARE)
    international = stocks - domestic
    current_intl = estimated_international(alloc.stocks)

    benefits: list[str] = []
    if current_intl < MIN_INTERNATIONAL:
        benefits.append("Global diversification reduces risk")
    if alloc.cash > MAX_CASH:
        benefits.append("Cash put to work for long-term growth")
    if alloc.other > MAX_OTHER:
        benefits.append("Simplified to core asset classes")
    benefits.append("Lower costs with index funds")
    benefits.append("Easier to manage and rebalance")

    current_er = expense_ratio_estimate(profile.expense_ratio)
    recommended_er = cfg.projection.recommended_expense_ratio

    explanations = [
        PortfolioExplanation(
            key="simplify",
            title="Simplify",
            current="Complex mix across multiple asset types",
            recommended="Just 3 index funds cover the entire global market",
            why="Simpler is better. More investments doesn't mean more diversification.",
        ),
        PortfolioExplanation(
            key="cut-costs",
            title="Cut costs",
            current=f"Average expense ratio: {current_er:.2f}%",
            recommended=f"Average expense ratio: {recommended_er:.2f}%",
            why="A 1% fee can cost you 25% of your total returns over 30 years.",
        ),
        PortfolioExplanation(
            key="diversify",
            title="Diversify globally",
            current=f"~{current_intl}% international",
            recommended=f"{international}% international stocks",
            why=(
                "The US is only 60% of world markets. "
                "International diversification reduces risk."
            ),
        ),
        PortfolioExplanation(
            key="balance-risk",
            title="Balance risk",
            current=f"{alloc.stocks}% stocks at age {profile.age}",
            recommended=f"{stocks}% stocks",
            why="This balance gives you growth while protecting against volatility.",
        ),
    ]

    funds = [
        RecommendedFund(name=name, ticker=ticker, percentage=pct, expense_ratio=er)
        for (name, ticker, er), pct in (
            (_DOMESTIC_FUND, domestic),
            (_INTERNATIONAL_FUND, international),
            (_BOND_FUND, bonds),
        )
    ]

    return RecommendedPortfolio(
        allocation=Allocation(stocks=stocks, bonds=bonds, cash=0, other=0),
        benefits=benefits,
        explanations=explanations,
        recommended_funds=funds,
    )


def compare_portfolios(
    profile: UserProfile,
    config: AppConfig | None = None,
) -> PortfolioComparison:
    """Current vs. recommended, plus whether the comparison is worth showing."""
    cfg = config or AppConfig()
    current = analyze_current_portfolio(profile, cfg)
    recommended = build_recommended_portfolio(profile, cfg)

    gap = abs(current.allocation.stocks - recommended.allocation.stocks)
    optimal = (
        gap <= OPTIMAL_STOCK_GAP
        and current.allocation.cash <= OPTIMAL_MAX_CASH
        and not current.issues
    )
    logger.debug(
        "Portfolio comparison: gap=%d issues=%d optimal=%s",
        gap, len(current.issues), optimal,
    )

    return PortfolioComparison(
        current=current,
        recommended=recommended,
        stock_gap=gap,
        is_already_optimal=optimal,
    )
