"""
User profile input model - the questionnaire answers as one frozen snapshot.

The input-collection layer builds a ``UserProfile`` incrementally and hands
the finished record to ``run_assessment()``.  Construction is the validation
boundary:

- Numeric fields are hard-validated (age 18–100, allocation percentages that
  sum to 100, non-empty name).  Violations raise ``pydantic.ValidationError``.
- Enumerated answers are *soft*-validated.  Empty or unrecognized bucket
  strings are logged and coerced to ``None``; the calculators resolve ``None``
  to a documented default contribution.  A bad answer costs a slightly-off
  score, never a crash.
- ``number_of_children`` is clamped to 0–6 rather than rejected.

Both snake_case field names and the questionnaire's camelCase keys are
accepted (``totalInvested``, ``financialGaps.collegesSavings``, ...).
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from finhealth.taxonomy.buckets import (
    AdvisorFeeBucket,
    CheckingFrequency,
    ExpenseRatioBucket,
    Goal,
    IncomeBracket,
    InvestedBucket,
    PanicSelling,
    RetirementTimeline,
    TradingFrequency,
)

logger = logging.getLogger(__name__)

MIN_AGE = 18
MAX_AGE = 100
MAX_CHILDREN = 6

_BUCKET_FIELDS: dict[str, type[StrEnum]] = {
    "income":              IncomeBracket,
    "retirement_timeline": RetirementTimeline,
    "total_invested":      InvestedBucket,
    "expense_ratio":       ExpenseRatioBucket,
    "advisor_fee":         AdvisorFeeBucket,
    "trading_frequency":   TradingFrequency,
    "panic_selling":       PanicSelling,
    "checking_frequency":  CheckingFrequency,
}


class Allocation(BaseModel):
    """Percentage split of the portfolio across four asset classes.

    Attributes:
        stocks: Percent in equities (domestic and international combined).
        bonds:  Percent in fixed income.
        cash:   Percent in cash and money-market funds.
        other:  Percent in anything else (real estate, crypto, commodities).
    """

    model_config = ConfigDict(frozen=True)

    stocks: int = Field(ge=0, le=100)
    bonds: int = Field(ge=0, le=100)
    cash: int = Field(ge=0, le=100)
    other: int = Field(ge=0, le=100)

    @model_validator(mode="after")
    def validate_sums_to_100(self) -> "Allocation":
        total = self.stocks + self.bonds + self.cash + self.other
        if total != 100:
            raise ValueError(f"allocation must sum to 100, got {total}.")
        return self


class FinancialGaps(BaseModel):
    """Safety-net coverage flags: ``True`` means the item is in place."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    emergency_fund: bool = False
    life_insurance: bool = False
    disability_insurance: bool = False
    estate_plan: bool = False
    college_savings: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "college_savings", "collegeSavings", "collegesSavings"
        ),
    )


class UserProfile(BaseModel):
    """Complete questionnaire answers for one assessment run.

    Attributes:
        name:                Display name; non-empty.
        age:                 Age in years, 18–100.
        income:              Household income bracket, or ``None`` if unanswered.
        has_children:        Whether the user has dependent children.
        number_of_children:  Child count, clamped to 0–6.
        goals:               Selected goal tags (unknown tags are dropped).
        retirement_timeline: Years-to-retirement bucket.
        total_invested:      Invested-amount bucket.
        allocation:          Current asset allocation.
        expense_ratio:       Average fund expense ratio bucket.
        has_advisor:         Whether a paid advisor manages the money.
        advisor_fee:         Advisor fee bucket; ignored when ``has_advisor``
                             is ``False``.
        trading_frequency:   How often the user trades.
        panic_selling:       How often the user has sold in a downturn.
        checking_frequency:  How often the user checks balances.
        financial_gaps:      Safety-net coverage flags.
        biggest_concern:     Free text; display only, never scored.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    name: str
    age: int = Field(ge=MIN_AGE, le=MAX_AGE)
    income: Optional[IncomeBracket] = None
    has_children: bool = False
    number_of_children: int = 0
    goals: frozenset[Goal] = frozenset()
    retirement_timeline: Optional[RetirementTimeline] = None
    total_invested: Optional[InvestedBucket] = None
    allocation: Allocation
    expense_ratio: Optional[ExpenseRatioBucket] = None
    has_advisor: bool = False
    advisor_fee: Optional[AdvisorFeeBucket] = None
    trading_frequency: Optional[TradingFrequency] = None
    panic_selling: Optional[PanicSelling] = None
    checking_frequency: Optional[CheckingFrequency] = None
    financial_gaps: FinancialGaps = FinancialGaps()
    biggest_concern: str = ""

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must not be empty.")
        return v.strip()

    @field_validator("number_of_children", mode="before")
    @classmethod
    def clamp_children(cls, v: Any) -> int:
        try:
            count = int(v or 0)
        except (TypeError, ValueError):
            logger.warning("Unreadable number_of_children %r; using 0.", v)
            return 0
        return max(0, min(MAX_CHILDREN, count))

    @field_validator("goals", mode="before")
    @classmethod
    def drop_unknown_goals(cls, v: Any) -> frozenset[Goal]:
        if v is None or v == "":
            return frozenset()
        if isinstance(v, str):
            v = [v]
        elif not isinstance(v, (list, tuple, set, frozenset)):
            raise ValueError(
                f"goals must be a list of goal tags, got {type(v).__name__}."
            )
        goals: set[Goal] = set()
        for tag in v:
            try:
                goals.add(Goal(tag))
            except ValueError:
                logger.warning("Ignoring unrecognized goal %r.", tag)
        return frozenset(goals)

    @field_validator(*_BUCKET_FIELDS, mode="before")
    @classmethod
    def coerce_unknown_bucket(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None or v == "":
            return None
        enum_cls = _BUCKET_FIELDS[info.field_name]
        try:
            return enum_cls(v)
        except ValueError:
            logger.warning(
                "Unrecognized %s answer %r; falling back to the default.",
                info.field_name, v,
            )
            return None

    @property
    def has_education_goal(self) -> bool:
        return Goal.EDUCATION in self.goals
