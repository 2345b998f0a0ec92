"""
ASCII terminal formatters for the ``assess`` command.

All formatters accept result models and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Score bars
----------
Category scores are drawn as a 20-cell bar so the weakest areas stand out
when scanning the report::

  Cost Efficiency        25  #####...............
"""

from __future__ import annotations

from finhealth.models.results import (
    AssessmentResult,
    BehavioralData,
    CostProjection,
    PortfolioComparison,
    Recommendation,
    Scores,
)
from finhealth.taxonomy.buckets import label_for
from finhealth.utils.numbers import format_compact, format_currency, format_percent

BAR_WIDTH = 20

_CATEGORY_TITLES: dict[str, str] = {
    "investment_strategy": "Investment Strategy",
    "cost_efficiency":     "Cost Efficiency",
    "tax_optimization":    "Tax Optimization",
    "behavioral_health":   "Behavioral Health",
    "goal_coverage":       "Goal Coverage",
}


def score_bar(score: int, width: int = BAR_WIDTH) -> str:
    """``#`` for the filled share of ``width`` cells, ``.`` for the rest."""
    filled = max(0, min(width, score * width // 100))
    return "#" * filled + "." * (width - filled)


# ── Scores ────────────────────────────────────────────────────────────────────


def format_score_summary(scores: Scores, name: str) -> str:
    """Overall score headline plus the five category bars."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Financial Health Score ===")
    lines.append(f"  Name:       {name}")
    lines.append(f"  Overall:    {scores.overall}/100  [{scores.label}]")
    lines.append(f"  Percentile: better than ~{scores.percentile}% of assessments")
    lines.append("")

    header = f"  {'Category':<22}  {'Score':>5}  Bar"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2 + BAR_WIDTH - 3))
    for key, value in scores.categories().items():
        lines.append(f"  {_CATEGORY_TITLES[key]:<22}  {value:>5}  {score_bar(value)}")

    return "\n".join(lines)


# ── Portfolio ─────────────────────────────────────────────────────────────────


def format_portfolio_comparison(portfolio: PortfolioComparison) -> str:
    """Current vs. recommended allocation, issues and the three-fund lineup."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Portfolio Comparison ===")

    cur = portfolio.current.allocation
    rec = portfolio.recommended.allocation

    if portfolio.is_already_optimal:
        lines.append(
            f"  Your allocation ({cur.stocks}% stocks / {cur.bonds}% bonds / "
            f"{cur.cash}% cash) is already close to the target. Nothing to change."
        )
        return "\n".join(lines)

    header = f"  {'Asset':<8}  {'Current':>8}  {'Target':>8}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for asset in ("stocks", "bonds", "cash", "other"):
        lines.append(
            f"  {asset.capitalize():<8}  {getattr(cur, asset):>7}%  {getattr(rec, asset):>7}%"
        )
    lines.append(f"  Stock gap: {portfolio.stock_gap} points")

    if portfolio.current.issues:
        lines.append("")
        lines.append("  Issues:")
        for issue in portfolio.current.issues:
            lines.append(f"    - {issue}")

    lines.append("")
    lines.append("  Recommended funds:")
    for fund in portfolio.recommended.recommended_funds:
        lines.append(
            f"    {fund.ticker:<5}  {fund.percentage:>3}%  {fund.name:<34}"
            f"  ER {format_percent(fund.expense_ratio)}"
        )

    lines.append("")
    lines.append("  Benefits:")
    for benefit in portfolio.recommended.benefits:
        lines.append(f"    + {benefit}")

    return "\n".join(lines)


# ── Projections ───────────────────────────────────────────────────────────────


def format_cost_projection(costs: CostProjection) -> str:
    """Fee table and the terminal values under both fee levels."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Fee Impact ===")
    lines.append(f"  Starting balance: {format_currency(costs.portfolio_value)}")
    lines.append("")

    header = f"  {'Fee':<22}  {'Current':>8}  {'Target':>8}  {'Saved / yr':>11}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for row in costs.fee_breakdown:
        lines.append(
            f"  {row.label:<22}  {format_percent(row.current):>8}  "
            f"{format_percent(row.recommended):>8}  {format_currency(row.annual_savings):>11}"
        )
    lines.append(
        f"  {'Total':<22}  {format_percent(costs.total_current_fees):>8}  "
        f"{format_percent(costs.total_recommended_fees):>8}  "
        f"{format_currency(costs.total_annual_savings):>11}"
    )

    lines.append("")
    lines.append(f"  After {costs.horizon_years} years:")
    lines.append(f"    With current fees:     {format_currency(costs.final_value_with_current_fees):>14}")
    lines.append(f"    With recommended fees: {format_currency(costs.final_value_with_recommended_fees):>14}")
    if costs.savings > 0:
        lines.append(f"    Fees cost you:         {format_currency(costs.savings):>14}")
    else:
        lines.append("    Your fees are already at the low-cost level.")

    return "\n".join(lines)


def format_behavioral_impact(behavior: BehavioralData) -> str:
    """Trading habit cost and the illustrative monthly trade counts."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Trading Behavior ===")
    lines.append(f"  Estimated trades per year: {behavior.trades_per_year}")
    lines.append(f"  Annual behavior penalty:   {behavior.annual_penalty_percent:g}%")
    lines.append("")
    lines.append(f"  After {behavior.horizon_years} years:")
    lines.append(f"    Buy and hold: {format_currency(behavior.buy_and_hold_value):>14}")
    lines.append(f"    Your habits:  {format_currency(behavior.your_value):>14}")
    lines.append(f"    Difference:   {format_currency(behavior.behavioral_cost):>14}")

    counts = " ".join(f"{p.trades:>2}" for p in behavior.trading_history)
    lines.append("")
    lines.append("  Trades by month (J F M A M J J A S O N D):")
    lines.append(f"    {counts}")
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations(recommendations: list[Recommendation]) -> str:
    """Numbered priority actions with their steps."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Priority Actions ===")

    if not recommendations:
        lines.append("  (no actions needed -- keep doing what you're doing)")
        return "\n".join(lines)

    for rank, rec in enumerate(recommendations, start=1):
        lines.append("")
        lines.append(f"  {rank}. [{rec.priority.upper()}] {rec.title}  ({rec.category})")
        lines.append(f"     Now:    {rec.current_state}")
        lines.append(f"     Target: {rec.recommended_state}")
        impact = rec.impact_description
        if rec.dollar_impact > 0:
            impact = f"${format_compact(rec.dollar_impact)} -- {impact}"
        lines.append(f"     Impact: {impact}")
        for step_no, step in enumerate(rec.steps, start=1):
            lines.append(f"       {step_no}) {step.title}")
            if step.link:
                lines.append(f"          {step.link}")

    return "\n".join(lines)


# ── Full report ───────────────────────────────────────────────────────────────


def format_profile_answers(result: AssessmentResult) -> str:
    """Echo the questionnaire answers that drive the scores."""
    p = result.profile
    lines: list[str] = []
    lines.append("")
    lines.append("=== Your Answers ===")
    lines.append(f"  Age:               {p.age}")
    lines.append(f"  Income:            {label_for(p.income)}")
    lines.append(f"  Invested:          {label_for(p.total_invested)}")
    lines.append(f"  Retirement in:     {label_for(p.retirement_timeline)}")
    lines.append(f"  Expense ratio:     {label_for(p.expense_ratio)}")
    advisor = label_for(p.advisor_fee) if p.has_advisor else "No advisor"
    lines.append(f"  Advisor fee:       {advisor}")
    lines.append(f"  Trading:           {label_for(p.trading_frequency)}")
    lines.append(f"  Sold in downturns: {label_for(p.panic_selling)}")
    lines.append(f"  Checks balances:   {label_for(p.checking_frequency)}")
    if p.goals:
        goals = ", ".join(sorted(label_for(g) for g in p.goals))
        lines.append(f"  Goals:             {goals}")
    if p.biggest_concern:
        lines.append(f"  Biggest concern:   {p.biggest_concern}")
    return "\n".join(lines)


def format_assessment_report(result: AssessmentResult) -> str:
    """All report sections for one assessment, in reading order."""
    sections = [
        format_score_summary(result.scores, result.profile.name),
        format_profile_answers(result),
        format_recommendations(result.recommendations),
        format_portfolio_comparison(result.portfolio),
        format_cost_projection(result.costs),
        format_behavioral_impact(result.behavior),
    ]
    return "\n".join(sections)


def format_batch_summary(results: list[AssessmentResult]) -> str:
    """One row per profile when several are assessed in one run."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Assessment Summary ===")
    header = (
        f"  {'Name':<24}  {'Overall':>7}  {'Label':<16}  "
        f"{'Actions':>7}  {'High':>4}  {'Fee cost':>12}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for r in results:
        lines.append(
            f"  {r.profile.name[:24]:<24}  {r.scores.overall:>7}  {r.scores.label:<16}  "
            f"{len(r.recommendations):>7}  {r.high_priority_count:>4}  "
            f"{format_currency(max(r.costs.savings, 0)):>12}"
        )
    return "\n".join(lines)
