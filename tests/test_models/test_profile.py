"""
Tests for UserProfile, Allocation and FinancialGaps.

What we test
------------
- Hard validation: age range, allocation sum and bounds, non-empty name.
- Soft validation: unknown or empty buckets become None, unknown goals are
  dropped, number_of_children is clamped.
- goals: a bare string is one tag; a non-list value is rejected.
- camelCase questionnaire keys are accepted, including the
  ``collegesSavings`` spelling.
- Profiles are immutable.
"""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from finhealth.models.profile import Allocation, FinancialGaps, UserProfile
from finhealth.taxonomy.buckets import Goal, InvestedBucket, TradingFrequency


class TestAllocation:
    def test_valid(self):
        a = Allocation(stocks=60, bonds=30, cash=10, other=0)
        assert a.stocks + a.bonds + a.cash + a.other == 100

    def test_sum_not_100_raises(self):
        with pytest.raises(ValidationError, match="sum to 100"):
            Allocation(stocks=60, bonds=30, cash=5, other=0)

    def test_negative_raises(self):
        with pytest.raises(ValidationError):
            Allocation(stocks=110, bonds=-10, cash=0, other=0)

    def test_frozen(self):
        a = Allocation(stocks=100, bonds=0, cash=0, other=0)
        with pytest.raises(ValidationError):
            a.stocks = 50


class TestUserProfileHardValidation:
    def test_baseline_is_valid(self, baseline_profile):
        assert baseline_profile.name == "Test User"
        assert baseline_profile.age == 35

    @pytest.mark.parametrize("age", [17, 101, -1])
    def test_age_out_of_range_raises(self, make_profile, age):
        with pytest.raises(ValidationError):
            make_profile(age=age)

    @pytest.mark.parametrize("age", [18, 100])
    def test_age_bounds_inclusive(self, make_profile, age):
        assert make_profile(age=age).age == age

    def test_empty_name_raises(self, make_profile):
        with pytest.raises(ValidationError, match="name"):
            make_profile(name="   ")

    def test_name_is_stripped(self, make_profile):
        assert make_profile(name="  Alex  ").name == "Alex"

    def test_bad_allocation_raises(self, make_profile):
        with pytest.raises(ValidationError, match="sum to 100"):
            make_profile(allocation={"stocks": 50, "bonds": 20, "cash": 0, "other": 0})


class TestUserProfileSoftValidation:
    def test_empty_bucket_becomes_none(self, make_profile):
        p = make_profile(total_invested="", trading_frequency="")
        assert p.total_invested is None
        assert p.trading_frequency is None

    def test_unknown_bucket_becomes_none_and_warns(self, make_profile, caplog):
        with caplog.at_level(logging.WARNING, logger="finhealth.models.profile"):
            p = make_profile(expense_ratio="very-high")
        assert p.expense_ratio is None
        assert "expense_ratio" in caplog.text

    def test_known_bucket_parsed_to_enum(self, make_profile):
        p = make_profile(total_invested="1m-plus", trading_frequency="weekly")
        assert p.total_invested is InvestedBucket.OVER_1M
        assert p.trading_frequency is TradingFrequency.WEEKLY

    def test_unknown_goal_dropped(self, make_profile):
        p = make_profile(goals=["retirement", "yacht"])
        assert p.goals == frozenset({Goal.RETIREMENT})

    def test_duplicate_goals_collapse(self, make_profile):
        p = make_profile(goals=["house", "house"])
        assert p.goals == frozenset({Goal.HOUSE})

    def test_single_goal_string_is_one_tag(self, make_profile):
        p = make_profile(goals="education")
        assert p.goals == frozenset({Goal.EDUCATION})
        assert p.has_education_goal

    @pytest.mark.parametrize("raw", [None, "", []])
    def test_empty_goals(self, make_profile, raw):
        assert make_profile(goals=raw).goals == frozenset()

    @pytest.mark.parametrize("raw", [5, True, {"retirement": True}])
    def test_non_list_goals_raise(self, make_profile, raw):
        with pytest.raises(ValidationError, match="goals must be a list"):
            make_profile(goals=raw)

    @pytest.mark.parametrize("raw,expected", [(-2, 0), (3, 3), (9, 6), ("2", 2), ("", 0), ("x", 0)])
    def test_children_clamped(self, make_profile, raw, expected):
        assert make_profile(number_of_children=raw).number_of_children == expected

    def test_has_education_goal(self, make_profile):
        assert make_profile(goals=["education"]).has_education_goal
        assert not make_profile(goals=["travel"]).has_education_goal


class TestCamelCaseInput:
    def test_questionnaire_keys(self):
        p = UserProfile.model_validate({
            "name": "Camel",
            "age": 40,
            "hasChildren": True,
            "numberOfChildren": 1,
            "totalInvested": "50k-100k",
            "retirementTimeline": "10-20",
            "allocation": {"stocks": 50, "bonds": 40, "cash": 10, "other": 0},
            "expenseRatio": "0.5-1",
            "hasAdvisor": True,
            "advisorFee": "1-1.5",
            "tradingFrequency": "monthly",
            "panicSelling": "sometimes",
            "checkingFrequency": "weekly",
            "financialGaps": {
                "emergencyFund": True,
                "lifeInsurance": True,
                "collegesSavings": True,
            },
            "biggestConcern": "Fees",
        })
        assert p.has_children and p.number_of_children == 1
        assert p.total_invested is InvestedBucket.FROM_50K_TO_100K
        assert p.has_advisor
        assert p.financial_gaps.emergency_fund
        assert p.financial_gaps.life_insurance
        assert p.financial_gaps.college_savings
        assert p.biggest_concern == "Fees"

    def test_gaps_snake_and_camel_spellings(self):
        assert FinancialGaps.model_validate({"college_savings": True}).college_savings
        assert FinancialGaps.model_validate({"collegeSavings": True}).college_savings
        assert FinancialGaps.model_validate({"collegesSavings": True}).college_savings

    def test_missing_gaps_default_false(self):
        gaps = FinancialGaps()
        assert not any(gaps.model_dump().values())


class TestImmutability:
    def test_profile_frozen(self, baseline_profile):
        with pytest.raises(ValidationError):
            baseline_profile.age = 50
