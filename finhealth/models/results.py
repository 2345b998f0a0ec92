"""
Assessment output models.

Everything the engine produces is a frozen pydantic model: scores, the
current-vs-recommended portfolio comparison, the fee and behavioral
projections, and the ranked recommendations.  ``AssessmentResult`` bundles
them for one run.  Nothing here is persisted; a new bundle is computed every
time the user asks for results and the caller owns storing it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finhealth.models.profile import Allocation, UserProfile
from finhealth.taxonomy.buckets import Priority, RecommendationCategory

# Lower bounds of each overall-score label band, highest first.
_LABEL_BANDS: tuple[tuple[int, str], ...] = (
    (80, "Excellent"),
    (60, "Good"),
    (40, "Fair"),
)
_PERCENTILE_BANDS: tuple[tuple[int, int], ...] = (
    (90, 95),
    (80, 85),
    (70, 70),
    (60, 55),
    (50, 40),
)


def score_label(score: int) -> str:
    """Return the verbal band for a 0–100 score."""
    for floor, label in _LABEL_BANDS:
        if score >= floor:
            return label
    return "Needs Attention"


def score_percentile(score: int) -> int:
    """Approximate percentile of a 0–100 score among all assessments."""
    for floor, pct in _PERCENTILE_BANDS:
        if score >= floor:
            return pct
    return 25


class Scores(BaseModel):
    """Five category scores plus the weighted overall score, all 0–100."""

    model_config = ConfigDict(frozen=True)

    overall: int
    investment_strategy: int
    cost_efficiency: int
    tax_optimization: int
    behavioral_health: int
    goal_coverage: int

    @field_validator("*")
    @classmethod
    def validate_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"scores must be in [0, 100], got {v}.")
        return v

    @property
    def label(self) -> str:
        return score_label(self.overall)

    @property
    def percentile(self) -> int:
        return score_percentile(self.overall)

    def categories(self) -> dict[str, int]:
        """Category name → score, in display order (overall excluded)."""
        return {
            "investment_strategy": self.investment_strategy,
            "cost_efficiency":     self.cost_efficiency,
            "tax_optimization":    self.tax_optimization,
            "behavioral_health":   self.behavioral_health,
            "goal_coverage":       self.goal_coverage,
        }


# ── Portfolio comparison ──────────────────────────────────────────────────────


class CurrentPortfolio(BaseModel):
    """The user's allocation as entered, with detected problems."""

    model_config = ConfigDict(frozen=True)

    allocation: Allocation
    issues: list[str] = []


class RecommendedFund(BaseModel):
    """One fund of the suggested three-fund portfolio."""

    model_config = ConfigDict(frozen=True)

    name: str
    ticker: str
    percentage: int
    expense_ratio: float


class PortfolioExplanation(BaseModel):
    """A current → recommended talking point with its rationale."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    current: str
    recommended: str
    why: str


class RecommendedPortfolio(BaseModel):
    """Age-based target allocation (fully invested) and its rationale."""

    model_config = ConfigDict(frozen=True)

    allocation: Allocation
    benefits: list[str]
    explanations: list[PortfolioExplanation]
    recommended_funds: list[RecommendedFund]


class PortfolioComparison(BaseModel):
    """Current vs. recommended portfolio.

    ``is_already_optimal`` lets the presentation layer suppress the
    comparison when the user is already close to target: stock gap of at
    most 10 points, at most 15% cash, and no detected issues.
    """

    model_config = ConfigDict(frozen=True)

    current: CurrentPortfolio
    recommended: RecommendedPortfolio
    stock_gap: int
    is_already_optimal: bool


# ── Projections ───────────────────────────────────────────────────────────────


class FeeBreakdown(BaseModel):
    """One fee line: current vs. recommended rate and the yearly difference."""

    model_config = ConfigDict(frozen=True)

    label: str
    description: str
    current: float
    recommended: float
    annual_savings: float


class CostProjection(BaseModel):
    """Fee comparison and compounded portfolio value under both fee levels.

    Rates are in percent (``0.75`` means 0.75% per year).  The two
    ``projection_*`` series are indexed by year: element ``i`` is the
    rounded portfolio value at the end of year ``i`` (element 0 is the
    starting balance).

    Attributes:
        portfolio_value:                   Starting balance (bucket midpoint).
        current_expense_ratio:             Fund expense ratio today.
        recommended_expense_ratio:         Index-fund expense ratio.
        current_advisor_fee:               Advisor fee today (0 if none).
        recommended_advisor_fee:           Always 0.
        total_current_fees:                Sum of current rates.
        total_recommended_fees:            Sum of recommended rates.
        annual_current_cost:               Dollars per year at current rates.
        annual_recommended_cost:           Dollars per year at recommended rates.
        total_annual_savings:              Difference of the two annual costs.
        fee_breakdown:                     Per-fee rows.
        horizon_years:                     Length of the projection.
        projection_with_current_fees:      Year-indexed values, current fees.
        projection_with_recommended_fees:  Year-indexed values, recommended fees.
        final_value_with_current_fees:     Last element of the current series.
        final_value_with_recommended_fees: Last element of the recommended series.
        savings:                           Final recommended − final current.
    """

    model_config = ConfigDict(frozen=True)

    portfolio_value: int
    current_expense_ratio: float
    recommended_expense_ratio: float
    current_advisor_fee: float
    recommended_advisor_fee: float
    total_current_fees: float
    total_recommended_fees: float
    annual_current_cost: float
    annual_recommended_cost: float
    total_annual_savings: float
    fee_breakdown: list[FeeBreakdown]
    horizon_years: int
    projection_with_current_fees: list[int]
    projection_with_recommended_fees: list[int]
    final_value_with_current_fees: int
    final_value_with_recommended_fees: int
    savings: int


class TradingHistoryPoint(BaseModel):
    """Illustrative trade count for one month (0 = January)."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(ge=0, le=11)
    trades: int = Field(ge=0)


class BehavioralData(BaseModel):
    """Estimated cost of the user's trading habits over the horizon.

    ``trading_history`` is a display aid derived from ``trades_per_year``;
    it is not a forecast and carries no weight in any score.
    """

    model_config = ConfigDict(frozen=True)

    trades_per_year: int
    trading_history: list[TradingHistoryPoint]
    cost_per_trade: float
    annual_penalty_percent: float
    horizon_years: int
    buy_and_hold_value: int
    your_value: int

    @property
    def behavioral_cost(self) -> int:
        """Dollars lost to overtrading over the horizon."""
        return self.buy_and_hold_value - self.your_value


# ── Recommendations ───────────────────────────────────────────────────────────


class RecommendationStep(BaseModel):
    """One concrete action step, optionally with a reference link."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    link: Optional[str] = None


class Recommendation(BaseModel):
    """A personalized, actionable recommendation.

    Attributes:
        id:                 Stable short key; one per rule (e.g. ``"cut-costs"``).
        title:              Headline.
        category:           Score category this improves.
        priority:           high / medium / low.
        current_state:      Where the user is today.
        recommended_state:  Where they should be.
        dollar_impact:      Estimated dollar benefit; 0 when not quantifiable.
        impact_description: Human-readable impact summary.
        explanation:        Why this matters.
        steps:              Ordered action steps.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    category: RecommendationCategory
    priority: Priority
    current_state: str
    recommended_state: str
    dollar_impact: int = 0
    impact_description: str
    explanation: str
    steps: list[RecommendationStep]

    @field_validator("id", "title")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("id and title must not be empty.")
        return v


# ── Bundle ────────────────────────────────────────────────────────────────────


class AssessmentResult(BaseModel):
    """Everything one assessment run produces, handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    profile: UserProfile
    scores: Scores
    portfolio: PortfolioComparison
    costs: CostProjection
    behavior: BehavioralData
    recommendations: list[Recommendation]
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)
    )

    @property
    def high_priority_count(self) -> int:
        return sum(1 for r in self.recommendations if r.priority == Priority.HIGH)
