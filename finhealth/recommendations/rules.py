"""
Recommendation rules: one function per recommendation id.

Every rule takes a ``RuleContext`` and returns either ``None`` (trigger not
met) or one fully-formed ``Recommendation``.  Rules are independent of each
other; a profile may trigger any subset.  ``RULES`` lists them in evaluation
order, which is also the tie-break order among equal priorities.

    id               trigger                                        priority
    ---------------  ---------------------------------------------  --------
    cut-costs        cost_efficiency < 70                           high
    stop-trading     behavioral_health < 70 and trades > rarely     high
    emergency-fund   no emergency fund                              high
    open-529         children and no college savings                medium
    life-insurance   children and no life insurance                 high
    rebalance        |stocks − age target| > 15                     medium
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from finhealth.config import AppConfig
from finhealth.models.profile import UserProfile
from finhealth.models.results import (
    BehavioralData,
    CostProjection,
    Recommendation,
    RecommendationStep,
    Scores,
)
from finhealth.scoring.calculator import target_stock_percent
from finhealth.taxonomy.buckets import (
    Priority,
    RecommendationCategory,
    TradingFrequency,
    income_amount,
)
from finhealth.utils.numbers import format_compact, format_currency

# Term life coverage, as a multiple of annual income.
LIFE_COVER_MIN_MULTIPLE = 10
LIFE_COVER_MAX_MULTIPLE = 12


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may inspect."""

    profile:  UserProfile
    scores:   Scores
    costs:    CostProjection
    behavior: BehavioralData
    config:   AppConfig


Rule = Callable[[RuleContext], Optional[Recommendation]]


def cut_costs(ctx: RuleContext) -> Recommendation | None:
    if ctx.scores.cost_efficiency >= ctx.config.recommendations.cost_score_threshold:
        return None

    savings = ctx.costs.savings
    years = ctx.costs.horizon_years
    return Recommendation(
        id="cut-costs",
        title="Cut your investment costs",
        category=RecommendationCategory.COST_EFFICIENCY,
        priority=Priority.HIGH,
        current_state=f"You're paying {ctx.costs.total_current_fees:.2f}% in fees annually",
        recommended_state=(
            f"Switch to low-cost index funds "
            f"({ctx.costs.recommended_expense_ratio:.2f}% fees)"
        ),
        dollar_impact=max(savings, 0),
        impact_description=f"Save ${format_compact(savings)} over {years} years",
        explanation=(
            "Every 1% in fees costs you about 25% of your total returns over time "
            "due to compounding. This is the single biggest improvement you can make."
        ),
        steps=[
            RecommendationStep(
                title="Open a low-cost brokerage account",
                description=(
                    "Choose Vanguard, Fidelity, or Schwab - all offer excellent "
                    "low-cost index funds."
                ),
                link="https://investor.vanguard.com",
            ),
            RecommendationStep(
                title="Sell your high-fee investments",
                description=(
                    "Liquidate funds with expense ratios over 0.2%. Consider tax "
                    "implications if in taxable accounts."
                ),
            ),
            RecommendationStep(
                title="Buy three low-cost index funds",
                description=(
                    "VTI (US stocks), VXUS (International stocks), BND (Bonds) - "
                    "that's all you need."
                ),
            ),
            RecommendationStep(
                title="Set up automatic investments",
                description="Automate monthly contributions to remove emotion from investing.",
            ),
        ],
    )


def stop_trading(ctx: RuleContext) -> Recommendation | None:
    if ctx.scores.behavioral_health >= ctx.config.recommendations.behavioral_score_threshold:
        return None
    if ctx.profile.trading_frequency == TradingFrequency.RARELY:
        return None

    behavior = ctx.behavior
    return Recommendation(
        id="stop-trading",
        title="Stop overtrading your portfolio",
        category=RecommendationCategory.BEHAVIORAL_HEALTH,
        priority=Priority.HIGH,
        current_state=f"You made ~{behavior.trades_per_year} trades last year",
        recommended_state="Make 1-2 trades per year (annual rebalancing only)",
        dollar_impact=max(behavior.behavioral_cost, 0),
        impact_description=(
            f"Overtrading costs you ~{behavior.annual_penalty_percent:g}% annually"
        ),
        explanation=(
            "Research shows frequent traders underperform buy-and-hold investors by "
            "2-3% annually due to transaction costs, bad timing, and taxes."
        ),
        steps=[
            RecommendationStep(
                title="Delete trading apps from your phone",
                description="Remove the temptation to check and trade frequently.",
            ),
            RecommendationStep(
                title="Set a quarterly review schedule",
                description="Check your portfolio only 4 times per year on specific dates.",
            ),
            RecommendationStep(
                title="Automate your investments",
                description=(
                    "Set up automatic monthly contributions so you don't need to "
                    "actively manage."
                ),
            ),
            RecommendationStep(
                title="Create a 48-hour rule",
                description="Wait 48 hours before making any trade to avoid emotional decisions.",
            ),
        ],
    )


def emergency_fund(ctx: RuleContext) -> Recommendation | None:
    if ctx.profile.financial_gaps.emergency_fund:
        return None

    return Recommendation(
        id="emergency-fund",
        title="Build an emergency fund",
        category=RecommendationCategory.GOAL_COVERAGE,
        priority=Priority.HIGH,
        current_state="No dedicated emergency fund",
        recommended_state="6 months of expenses in high-yield savings",
        dollar_impact=0,
        impact_description="Prevents forced selling during emergencies",
        explanation=(
            "Without an emergency fund, unexpected expenses force you to sell "
            "investments at the worst times, locking in losses and disrupting your "
            "long-term plan."
        ),
        steps=[
            RecommendationStep(
                title="Calculate your monthly expenses",
                description=(
                    "Add up rent/mortgage, utilities, food, insurance, and essential costs."
                ),
            ),
            RecommendationStep(
                title="Open a high-yield savings account",
                description=(
                    "Look for accounts paying 4-5% APY. Keep this separate from checking."
                ),
                link="https://www.nerdwallet.com/best/banking/high-yield-online-savings-accounts",
            ),
            RecommendationStep(
                title="Set up automatic transfers",
                description=(
                    "Move a fixed amount each paycheck until you reach 6 months of expenses."
                ),
            ),
        ],
    )


def open_529(ctx: RuleContext) -> Recommendation | None:
    profile = ctx.profile
    if not profile.has_children or profile.financial_gaps.college_savings:
        return None

    n = profile.number_of_children
    kids = "child" if n == 1 else "children"
    return Recommendation(
        id="open-529",
        title="Open 529 college savings plans",
        category=RecommendationCategory.GOAL_COVERAGE,
        priority=Priority.MEDIUM,
        current_state=f"{n} {kids} with no 529 plans",
        recommended_state="Active 529 plan with automatic contributions",
        dollar_impact=ctx.config.recommendations.college_savings_impact,
        impact_description="Tax savings over 18 years of contributions",
        explanation=(
            "529 plans offer tax-free growth and many states offer tax deductions. "
            "Starting early maximizes compound growth for education expenses."
        ),
        steps=[
            RecommendationStep(
                title="Research your state's 529 plan",
                description="Many states offer tax deductions for contributions to their plan.",
                link="https://www.savingforcollege.com/compare-529-plans",
            ),
            RecommendationStep(
                title="Open an account for each child",
                description="You can open accounts online in about 15 minutes.",
            ),
            RecommendationStep(
                title="Start with automatic contributions",
                description=(
                    "Even $200-300/month per child adds up significantly over 18 years."
                ),
            ),
            RecommendationStep(
                title="Choose age-based portfolios",
                description=(
                    "These automatically become more conservative as your child "
                    "approaches college."
                ),
            ),
        ],
    )


def life_insurance(ctx: RuleContext) -> Recommendation | None:
    profile = ctx.profile
    if not profile.has_children or profile.financial_gaps.life_insurance:
        return None

    income = income_amount(profile.income)
    low = format_currency(income * LIFE_COVER_MIN_MULTIPLE)
    high = format_currency(income * LIFE_COVER_MAX_MULTIPLE)
    return Recommendation(
        id="life-insurance",
        title="Get term life insurance",
        category=RecommendationCategory.GOAL_COVERAGE,
        priority=Priority.HIGH,
        current_state="No life insurance with dependents",
        recommended_state=(
            f"Term life policy ({LIFE_COVER_MIN_MULTIPLE}-{LIFE_COVER_MAX_MULTIPLE}x "
            f"annual income, about {low}-{high})"
        ),
        dollar_impact=0,
        impact_description="Protects your family's financial future",
        explanation=(
            "With dependents relying on your income, life insurance ensures they're "
            "protected if something happens to you. Term life is affordable and "
            "straightforward."
        ),
        steps=[
            RecommendationStep(
                title="Calculate coverage needed",
                description=(
                    "Aim for 10-12x your annual income, plus debts and future "
                    "education costs."
                ),
            ),
            RecommendationStep(
                title="Get quotes from multiple providers",
                description="Compare term life policies from several insurers.",
                link="https://www.policygenius.com",
            ),
            RecommendationStep(
                title="Choose appropriate term length",
                description=(
                    "Select a term that covers until your youngest child is "
                    "financially independent."
                ),
            ),
        ],
    )


def rebalance(ctx: RuleContext) -> Recommendation | None:
    profile = ctx.profile
    stocks = profile.allocation.stocks
    target = target_stock_percent(profile.age, ctx.config.scoring)
    if abs(stocks - target) <= ctx.config.recommendations.rebalance_gap_threshold:
        return None

    if stocks > target:
        explanation = (
            "Your portfolio is more aggressive than recommended for your age. "
            "Reducing stock exposure will lower volatility."
        )
    else:
        explanation = (
            "Your portfolio is too conservative for your timeline. "
            "More stocks will help maximize long-term growth."
        )

    return Recommendation(
        id="rebalance",
        title="Rebalance your portfolio allocation",
        category=RecommendationCategory.INVESTMENT_STRATEGY,
        priority=Priority.MEDIUM,
        current_state=f"{stocks}% in stocks at age {profile.age}",
        recommended_state=f"{target}% in stocks for your age and timeline",
        dollar_impact=0,
        impact_description="Better risk-adjusted returns over time",
        explanation=explanation,
        steps=[
            RecommendationStep(
                title="Review your current allocation",
                description=(
                    "Log into your accounts and calculate your total stock/bond/cash "
                    "percentages."
                ),
            ),
            RecommendationStep(
                title="Sell overweight positions",
                description="Reduce positions that are above target allocation.",
            ),
            RecommendationStep(
                title="Buy underweight positions",
                description="Add to positions that are below target allocation.",
            ),
            RecommendationStep(
                title="Set annual rebalancing reminder",
                description="Rebalance once per year to maintain your target allocation.",
            ),
        ],
    )


RULES: tuple[Rule, ...] = (
    cut_costs,
    stop_trading,
    emergency_fund,
    open_529,
    life_insurance,
    rebalance,
)
