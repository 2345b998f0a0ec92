"""
Tests for finhealth/recommendations/rules.py.

What we test
------------
Each rule in isolation:
  - fires on its trigger and returns None otherwise
  - carries its fixed id, category and priority
  - fills dynamic text (fees, trade counts, child count, coverage range)
  - quantified rules report a non-negative dollar impact
"""

from __future__ import annotations

from finhealth.analysis.behavior import project_behavioral_impact
from finhealth.analysis.costs import project_cost_impact
from finhealth.config import AppConfig, RecommendationConfig
from finhealth.models.profile import UserProfile
from finhealth.recommendations.rules import (
    RULES,
    RuleContext,
    cut_costs,
    emergency_fund,
    life_insurance,
    open_529,
    rebalance,
    stop_trading,
)
from finhealth.scoring.calculator import calculate_scores
from finhealth.taxonomy.buckets import Priority, RecommendationCategory


# ── Helpers ────────────────────────────────────────────────────────────────────

def _ctx(profile: UserProfile, config: AppConfig | None = None) -> RuleContext:
    cfg = config or AppConfig()
    return RuleContext(
        profile=profile,
        scores=calculate_scores(profile, cfg.scoring),
        costs=project_cost_impact(profile, cfg),
        behavior=project_behavioral_impact(profile, cfg),
        config=cfg,
    )


def test_rules_evaluation_order():
    assert [r.__name__ for r in RULES] == [
        "cut_costs", "stop_trading", "emergency_fund",
        "open_529", "life_insurance", "rebalance",
    ]


class TestCutCosts:
    def test_fires_below_threshold(self, struggling_profile):
        rec = cut_costs(_ctx(struggling_profile))
        assert rec is not None
        assert rec.id == "cut-costs"
        assert rec.priority is Priority.HIGH
        assert rec.category is RecommendationCategory.COST_EFFICIENCY
        assert "3.00%" in rec.current_state
        assert "0.05%" in rec.recommended_state
        assert rec.dollar_impact > 0
        assert "over 30 years" in rec.impact_description
        assert len(rec.steps) == 4

    def test_dollar_impact_is_projected_savings(self, struggling_profile):
        ctx = _ctx(struggling_profile)
        assert cut_costs(ctx).dollar_impact == ctx.costs.savings

    def test_silent_at_or_above_threshold(self, baseline_profile):
        # cost efficiency 80
        assert cut_costs(_ctx(baseline_profile)) is None

    def test_threshold_from_config(self, baseline_profile):
        cfg = AppConfig(recommendations=RecommendationConfig(cost_score_threshold=90))
        assert cut_costs(_ctx(baseline_profile, cfg)) is not None


class TestStopTrading:
    def test_fires_for_overtrader(self, struggling_profile):
        rec = stop_trading(_ctx(struggling_profile))
        assert rec is not None
        assert rec.id == "stop-trading"
        assert rec.category is RecommendationCategory.BEHAVIORAL_HEALTH
        assert "~52 trades" in rec.current_state
        assert "3.5%" in rec.impact_description
        assert rec.dollar_impact > 0

    def test_silent_for_rare_trader_even_with_low_score(self, make_profile):
        p = make_profile(trading_frequency="rarely", panic_selling="often", checking_frequency="daily")
        ctx = _ctx(p)
        assert ctx.scores.behavioral_health < 70
        assert stop_trading(ctx) is None

    def test_silent_with_healthy_score(self, baseline_profile):
        assert stop_trading(_ctx(baseline_profile)) is None


class TestEmergencyFund:
    def test_fires_without_fund(self, make_profile):
        rec = emergency_fund(_ctx(make_profile(financial_gaps={})))
        assert rec is not None
        assert rec.id == "emergency-fund"
        assert rec.priority is Priority.HIGH
        assert rec.dollar_impact == 0
        assert rec.steps[1].link is not None

    def test_silent_with_fund(self, baseline_profile):
        assert emergency_fund(_ctx(baseline_profile)) is None


class TestOpen529:
    def test_fires_for_children_without_savings(self, make_profile):
        p = make_profile(has_children=True, number_of_children=2)
        rec = open_529(_ctx(p))
        assert rec is not None
        assert rec.priority is Priority.MEDIUM
        assert rec.current_state == "2 children with no 529 plans"
        assert rec.dollar_impact == 27_000

    def test_singular_child(self, make_profile):
        rec = open_529(_ctx(make_profile(has_children=True, number_of_children=1)))
        assert rec.current_state == "1 child with no 529 plans"

    def test_silent_without_children(self, baseline_profile):
        assert open_529(_ctx(baseline_profile)) is None

    def test_silent_with_college_savings(self, make_profile):
        p = make_profile(
            has_children=True, number_of_children=1,
            financial_gaps={"emergency_fund": True, "college_savings": True},
        )
        assert open_529(_ctx(p)) is None


class TestLifeInsurance:
    def test_fires_for_parent_without_cover(self, make_profile):
        p = make_profile(has_children=True, number_of_children=1, income="100k-200k")
        rec = life_insurance(_ctx(p))
        assert rec is not None
        assert rec.id == "life-insurance"
        assert rec.priority is Priority.HIGH
        assert "$1,500,000-$1,800,000" in rec.recommended_state

    def test_silent_with_cover(self, make_profile):
        p = make_profile(
            has_children=True, number_of_children=1,
            financial_gaps={"emergency_fund": True, "life_insurance": True},
        )
        assert life_insurance(_ctx(p)) is None

    def test_silent_without_children(self, make_profile):
        assert life_insurance(_ctx(make_profile(age=50, financial_gaps={}))) is None


class TestRebalance:
    def test_too_aggressive(self, make_profile):
        p = make_profile(age=55, allocation={"stocks": 80, "bonds": 20, "cash": 0, "other": 0})
        rec = rebalance(_ctx(p))
        assert rec is not None
        assert rec.current_state == "80% in stocks at age 55"
        assert rec.recommended_state.startswith("55%")
        assert "more aggressive" in rec.explanation

    def test_too_conservative(self, make_profile):
        p = make_profile(age=25, allocation={"stocks": 40, "bonds": 60, "cash": 0, "other": 0})
        rec = rebalance(_ctx(p))
        assert rec is not None
        assert "too conservative" in rec.explanation

    def test_gap_of_15_is_silent(self, baseline_profile):
        assert rebalance(_ctx(baseline_profile)) is None
