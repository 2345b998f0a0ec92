"""
Shared pytest fixtures for the financial health assessment test suite.

Provides:
  - ``make_profile``: factory building a valid ``UserProfile`` from a
    baseline answer set plus keyword overrides.
  - ``baseline_profile``: a middle-of-the-road 35-year-old.
  - ``optimal_profile``: every answer at its best bucket (all scores 100).
  - ``struggling_profile``: high fees, overtrading, no safety net, children.
  - ``default_config``: ``AppConfig()`` with built-in defaults.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from finhealth.config import AppConfig
from finhealth.models.profile import UserProfile

BASELINE_ANSWERS: dict[str, Any] = {
    "name": "Test User",
    "age": 35,
    "income": "50k-100k",
    "has_children": False,
    "number_of_children": 0,
    "goals": ["retirement"],
    "retirement_timeline": "20-30",
    "total_invested": "100k-500k",
    "allocation": {"stocks": 60, "bonds": 30, "cash": 10, "other": 0},
    "expense_ratio": "0.1-0.5",
    "has_advisor": False,
    "advisor_fee": None,
    "trading_frequency": "occasionally",
    "panic_selling": "once",
    "checking_frequency": "quarterly",
    "financial_gaps": {"emergency_fund": True},
    "biggest_concern": "",
}


def build_profile(**overrides: Any) -> UserProfile:
    """Baseline answers with top-level keys replaced by ``overrides``."""
    return UserProfile.model_validate({**BASELINE_ANSWERS, **overrides})


@pytest.fixture
def make_profile() -> Callable[..., UserProfile]:
    return build_profile


@pytest.fixture
def baseline_profile() -> UserProfile:
    return build_profile()


@pytest.fixture
def optimal_profile() -> UserProfile:
    """Young, cheap, calm investor; every category scores 100."""
    return build_profile(
        name="Optimal",
        age=25,
        retirement_timeline="30-plus",
        allocation={"stocks": 90, "bonds": 10, "cash": 0, "other": 0},
        expense_ratio="under-0.1",
        has_advisor=False,
        trading_frequency="rarely",
        panic_selling="never",
        checking_frequency="yearly",
        financial_gaps={"emergency_fund": True},
        income="under-50k",
    )


@pytest.fixture
def struggling_profile() -> UserProfile:
    """55-year-old parent with expensive funds, a costly advisor and no safety net."""
    return build_profile(
        name="Struggling",
        age=55,
        income=None,
        has_children=True,
        number_of_children=2,
        goals=["retirement", "education"],
        retirement_timeline="10-20",
        total_invested="100k-500k",
        allocation={"stocks": 80, "bonds": 5, "cash": 15, "other": 0},
        expense_ratio="over-1",
        has_advisor=True,
        advisor_fee="over-1.5",
        trading_frequency="weekly",
        panic_selling="often",
        checking_frequency="daily",
        financial_gaps={},
    )


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()
