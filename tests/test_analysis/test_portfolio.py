"""
Tests for finhealth/analysis/portfolio.py.

What we test
------------
analyze_current_portfolio():
  - Each issue rule fires on its own threshold and not below it.
  - Issues are reported in rule order.

build_recommended_portfolio():
  - Allocation is fully invested (no cash, no other) and sums to 100.
  - Fund percentages sum to 100 and split stocks 70/30.
  - Benefits mention only the problems the user actually has.

compare_portfolios():
  - is_already_optimal only when gap <= 10, cash <= 15 and no issues.
"""

from __future__ import annotations

import pytest

from finhealth.analysis.portfolio import (
    ISSUE_EXCESS_CASH,
    ISSUE_EXCESS_OTHER,
    ISSUE_LOW_BONDS,
    ISSUE_NO_INTERNATIONAL,
    ISSUE_TOO_AGGRESSIVE,
    ISSUE_TOO_CONSERVATIVE,
    analyze_current_portfolio,
    build_recommended_portfolio,
    compare_portfolios,
)


def _alloc(stocks, bonds, cash=0, other=0):
    return {"stocks": stocks, "bonds": bonds, "cash": cash, "other": other}


class TestAnalyzeCurrentPortfolio:
    def test_clean_portfolio_has_no_issues(self, make_profile):
        p = make_profile(age=35, allocation=_alloc(70, 20, 10))
        assert analyze_current_portfolio(p).issues == []

    def test_missing_international(self, make_profile):
        # 30 stocks -> 9% international; age 80 target 30 keeps the gap at 0
        p = make_profile(age=80, allocation=_alloc(30, 70))
        assert analyze_current_portfolio(p).issues == [ISSUE_NO_INTERNATIONAL]

    def test_international_at_threshold_ok(self, make_profile):
        # 33 stocks -> 10% international
        p = make_profile(age=80, allocation=_alloc(33, 67))
        assert ISSUE_NO_INTERNATIONAL not in analyze_current_portfolio(p).issues

    def test_excess_cash_and_other(self, make_profile):
        p = make_profile(age=50, allocation=_alloc(55, 10, 21, 14))
        issues = analyze_current_portfolio(p).issues
        assert issues == [ISSUE_EXCESS_CASH, ISSUE_EXCESS_OTHER]

    def test_cash_and_other_at_threshold_ok(self, make_profile):
        p = make_profile(age=50, allocation=_alloc(60, 10, 20, 10))
        assert analyze_current_portfolio(p).issues == []

    def test_too_aggressive(self, make_profile):
        p = make_profile(age=55, allocation=_alloc(80, 20))
        assert ISSUE_TOO_AGGRESSIVE in analyze_current_portfolio(p).issues

    def test_too_conservative(self, make_profile):
        p = make_profile(age=25, allocation=_alloc(50, 50))
        assert ISSUE_TOO_CONSERVATIVE in analyze_current_portfolio(p).issues

    def test_gap_of_15_is_not_an_issue(self, make_profile):
        p = make_profile(age=35, allocation=_alloc(60, 30, 10))
        assert analyze_current_portfolio(p).issues == []

    def test_low_bonds_over_40(self, make_profile):
        p = make_profile(age=45, allocation=_alloc(65, 5, 30))
        assert analyze_current_portfolio(p).issues == [ISSUE_EXCESS_CASH, ISSUE_LOW_BONDS]

    def test_low_bonds_ignored_when_young(self, make_profile):
        p = make_profile(age=40, allocation=_alloc(70, 5, 15, 10))
        assert ISSUE_LOW_BONDS not in analyze_current_portfolio(p).issues

    def test_allocation_passed_through(self, baseline_profile):
        current = analyze_current_portfolio(baseline_profile)
        assert current.allocation == baseline_profile.allocation


class TestBuildRecommendedPortfolio:
    @pytest.mark.parametrize("age", [18, 25, 33, 47, 55, 61, 79, 100])
    def test_allocation_fully_invested(self, make_profile, age):
        rec = build_recommended_portfolio(make_profile(age=age))
        a = rec.allocation
        assert a.cash == 0 and a.other == 0
        assert a.stocks + a.bonds == 100

    @pytest.mark.parametrize("age", [18, 25, 33, 47, 55, 61, 79, 100])
    def test_funds_sum_to_100(self, make_profile, age):
        rec = build_recommended_portfolio(make_profile(age=age))
        assert sum(f.percentage for f in rec.recommended_funds) == 100

    def test_fund_split(self, make_profile):
        rec = build_recommended_portfolio(make_profile(age=35))
        funds = {f.ticker: f for f in rec.recommended_funds}
        assert [f.ticker for f in rec.recommended_funds] == ["VTI", "VXUS", "BND"]
        # target 75: 53 domestic (52.5 half-up), 22 international, 25 bonds
        assert funds["VTI"].percentage == 53
        assert funds["VXUS"].percentage == 22
        assert funds["BND"].percentage == 25
        assert funds["VXUS"].expense_ratio == 0.05

    def test_benefits_reflect_issues(self, make_profile):
        messy = build_recommended_portfolio(make_profile(age=80, allocation=_alloc(20, 30, 30, 20)))
        clean = build_recommended_portfolio(make_profile(age=35, allocation=_alloc(70, 20, 10)))
        assert len(messy.benefits) == 5
        assert clean.benefits == ["Lower costs with index funds", "Easier to manage and rebalance"]

    def test_explanations_keys(self, baseline_profile):
        rec = build_recommended_portfolio(baseline_profile)
        assert [e.key for e in rec.explanations] == [
            "simplify", "cut-costs", "diversify", "balance-risk",
        ]

    def test_cut_costs_explanation_uses_current_expense_ratio(self, make_profile):
        rec = build_recommended_portfolio(make_profile(expense_ratio="over-1"))
        cut = next(e for e in rec.explanations if e.key == "cut-costs")
        assert cut.current == "Average expense ratio: 1.25%"
        assert cut.recommended == "Average expense ratio: 0.05%"


class TestComparePortfolios:
    def test_optimal(self, make_profile):
        p = make_profile(age=35, allocation=_alloc(70, 20, 10))
        cmp = compare_portfolios(p)
        assert cmp.stock_gap == 5
        assert cmp.is_already_optimal

    def test_gap_over_10_not_optimal(self, baseline_profile):
        # 60 stocks vs 75 target: no issue (gap 15) but not close enough
        cmp = compare_portfolios(baseline_profile)
        assert cmp.current.issues == []
        assert cmp.stock_gap == 15
        assert not cmp.is_already_optimal

    def test_cash_over_15_not_optimal(self, make_profile):
        p = make_profile(age=35, allocation=_alloc(70, 12, 18))
        cmp = compare_portfolios(p)
        assert cmp.current.issues == []
        assert not cmp.is_already_optimal

    def test_issues_not_optimal(self, struggling_profile):
        assert not compare_portfolios(struggling_profile).is_already_optimal
