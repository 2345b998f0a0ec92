"""
Enumerated answer buckets for the assessment questionnaire.

Every multiple-choice answer the questionnaire collects is a coarse bucket
standing in for a continuous quantity (``"100k-500k"`` invested,
``"0.5-1"`` percent expense ratio, ...).  Each bucket is a ``StrEnum`` whose
value is the wire string the input layer sends, so a profile round-trips
through JSON unchanged.

Lookup tables elsewhere in the package are keyed by these enum members,
never by raw strings, and every lookup carries an explicit default for
answers that are missing or unrecognized.

``BUCKET_LABELS`` maps each bucket enum to the display labels of its members,
as shown in the questionnaire; reports use ``label_for`` to echo answers.

This module has NO imports from any other ``finhealth`` package.
"""

from enum import StrEnum


class IncomeBracket(StrEnum):
    """Household income before taxes."""

    UNDER_50K = "under-50k"
    FROM_50K_TO_100K = "50k-100k"
    FROM_100K_TO_200K = "100k-200k"
    FROM_200K_TO_500K = "200k-500k"
    OVER_500K = "500k-plus"


class Goal(StrEnum):
    """Financial goals; a profile may select any combination."""

    RETIREMENT = "retirement"
    HOUSE = "house"
    EDUCATION = "education"
    TRAVEL = "travel"
    EMERGENCY = "emergency"
    WEALTH = "wealth"


class RetirementTimeline(StrEnum):
    """Years until the user expects to retire."""

    UNDER_5 = "under-5"
    FROM_5_TO_10 = "5-10"
    FROM_10_TO_20 = "10-20"
    FROM_20_TO_30 = "20-30"
    OVER_30 = "30-plus"


class InvestedBucket(StrEnum):
    """Total amount currently invested across all accounts."""

    UNDER_10K = "under-10k"
    FROM_10K_TO_50K = "10k-50k"
    FROM_50K_TO_100K = "50k-100k"
    FROM_100K_TO_500K = "100k-500k"
    FROM_500K_TO_1M = "500k-1m"
    OVER_1M = "1m-plus"


class ExpenseRatioBucket(StrEnum):
    """Average expense ratio of the user's funds, in percent."""

    UNDER_0_1 = "under-0.1"
    FROM_0_1_TO_0_5 = "0.1-0.5"
    FROM_0_5_TO_1 = "0.5-1"
    OVER_1 = "over-1"
    UNKNOWN = "unknown"


class AdvisorFeeBucket(StrEnum):
    """Annual advisory fee as a percentage of assets (or flat)."""

    UNDER_0_5 = "under-0.5"
    FROM_0_5_TO_1 = "0.5-1"
    FROM_1_TO_1_5 = "1-1.5"
    OVER_1_5 = "over-1.5"
    FLAT_FEE = "flat-fee"
    UNKNOWN = "unknown"


class TradingFrequency(StrEnum):
    """How often the user buys or sells investments."""

    RARELY = "rarely"
    OCCASIONALLY = "occasionally"
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class PanicSelling(StrEnum):
    """How often the user has sold during a market decline."""

    NEVER = "never"
    ONCE = "once"
    SOMETIMES = "sometimes"
    OFTEN = "often"


class CheckingFrequency(StrEnum):
    """How often the user checks portfolio balances."""

    YEARLY = "yearly"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"


class Priority(StrEnum):
    """Display priority of a recommendation."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: 0 for high, 2 for low."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[str, int] = {"high": 0, "medium": 1, "low": 2}


class RecommendationCategory(StrEnum):
    """Score category a recommendation improves."""

    INVESTMENT_STRATEGY = "Investment Strategy"
    COST_EFFICIENCY = "Cost Efficiency"
    TAX_OPTIMIZATION = "Tax Optimization"
    BEHAVIORAL_HEALTH = "Behavioral Health"
    GOAL_COVERAGE = "Goal Coverage"


# ── Display labels ────────────────────────────────────────────────────────────

# Keyed by enum class: members of different enums can share a wire string
# ("weekly", "monthly") and StrEnum members hash as that string.
BUCKET_LABELS: dict[type[StrEnum], dict[str, str]] = {
    IncomeBracket: {
        IncomeBracket.UNDER_50K:          "Under $50,000",
        IncomeBracket.FROM_50K_TO_100K:   "$50,000 - $100,000",
        IncomeBracket.FROM_100K_TO_200K:  "$100,000 - $200,000",
        IncomeBracket.FROM_200K_TO_500K:  "$200,000 - $500,000",
        IncomeBracket.OVER_500K:          "$500,000+",
    },
    Goal: {
        Goal.RETIREMENT:                  "Retirement",
        Goal.HOUSE:                       "Buy a Home",
        Goal.EDUCATION:                   "Children's Education",
        Goal.TRAVEL:                      "Travel",
        Goal.EMERGENCY:                   "Emergency Fund",
        Goal.WEALTH:                      "Build Wealth",
    },
    RetirementTimeline: {
        RetirementTimeline.UNDER_5:       "Less than 5 years",
        RetirementTimeline.FROM_5_TO_10:  "5-10 years",
        RetirementTimeline.FROM_10_TO_20: "10-20 years",
        RetirementTimeline.FROM_20_TO_30: "20-30 years",
        RetirementTimeline.OVER_30:       "30+ years",
    },
    InvestedBucket: {
        InvestedBucket.UNDER_10K:         "Under $10,000",
        InvestedBucket.FROM_10K_TO_50K:   "$10,000 - $50,000",
        InvestedBucket.FROM_50K_TO_100K:  "$50,000 - $100,000",
        InvestedBucket.FROM_100K_TO_500K: "$100,000 - $500,000",
        InvestedBucket.FROM_500K_TO_1M:   "$500,000 - $1,000,000",
        InvestedBucket.OVER_1M:           "$1,000,000+",
    },
    ExpenseRatioBucket: {
        ExpenseRatioBucket.UNDER_0_1:       "Under 0.1%",
        ExpenseRatioBucket.FROM_0_1_TO_0_5: "0.1% - 0.5%",
        ExpenseRatioBucket.FROM_0_5_TO_1:   "0.5% - 1.0%",
        ExpenseRatioBucket.OVER_1:          "Over 1.0%",
        ExpenseRatioBucket.UNKNOWN:         "I don't know",
    },
    AdvisorFeeBucket: {
        AdvisorFeeBucket.UNDER_0_5:       "Under 0.5%",
        AdvisorFeeBucket.FROM_0_5_TO_1:   "0.5% - 1.0%",
        AdvisorFeeBucket.FROM_1_TO_1_5:   "1.0% - 1.5%",
        AdvisorFeeBucket.OVER_1_5:        "Over 1.5%",
        AdvisorFeeBucket.FLAT_FEE:        "Flat fee",
        AdvisorFeeBucket.UNKNOWN:         "I don't know",
    },
    TradingFrequency: {
        TradingFrequency.RARELY:          "Rarely",
        TradingFrequency.OCCASIONALLY:    "Occasionally",
        TradingFrequency.MONTHLY:         "Monthly",
        TradingFrequency.WEEKLY:          "Weekly or more",
    },
    PanicSelling: {
        PanicSelling.NEVER:               "Never",
        PanicSelling.ONCE:                "Once or twice",
        PanicSelling.SOMETIMES:           "Sometimes",
        PanicSelling.OFTEN:               "Often",
    },
    CheckingFrequency: {
        CheckingFrequency.YEARLY:         "Yearly or less",
        CheckingFrequency.QUARTERLY:      "Quarterly",
        CheckingFrequency.MONTHLY:        "Monthly",
        CheckingFrequency.WEEKLY:         "Weekly",
        CheckingFrequency.DAILY:          "Daily or more",
    },
}


def label_for(bucket: StrEnum | None) -> str:
    """Return the display label for a bucket, or ``"Not answered"``."""
    if bucket is None:
        return "Not answered"
    return BUCKET_LABELS.get(type(bucket), {}).get(bucket, str(bucket))


# ── Representative midpoints ──────────────────────────────────────────────────

INVESTED_MIDPOINTS: dict[InvestedBucket, int] = {
    InvestedBucket.UNDER_10K:         5_000,
    InvestedBucket.FROM_10K_TO_50K:   30_000,
    InvestedBucket.FROM_50K_TO_100K:  75_000,
    InvestedBucket.FROM_100K_TO_500K: 300_000,
    InvestedBucket.FROM_500K_TO_1M:   750_000,
    InvestedBucket.OVER_1M:           2_000_000,
}
DEFAULT_INVESTED = 100_000

INCOME_MIDPOINTS: dict[IncomeBracket, int] = {
    IncomeBracket.UNDER_50K:         35_000,
    IncomeBracket.FROM_50K_TO_100K:  75_000,
    IncomeBracket.FROM_100K_TO_200K: 150_000,
    IncomeBracket.FROM_200K_TO_500K: 350_000,
    IncomeBracket.OVER_500K:         750_000,
}
DEFAULT_INCOME = 75_000


def invested_amount(bucket: InvestedBucket | None) -> int:
    """Resolve the invested bucket to a dollar midpoint (100,000 if unknown)."""
    if bucket is None:
        return DEFAULT_INVESTED
    return INVESTED_MIDPOINTS.get(bucket, DEFAULT_INVESTED)


def income_amount(bucket: IncomeBracket | None) -> int:
    """Resolve the income bracket to a dollar midpoint (75,000 if unknown)."""
    if bucket is None:
        return DEFAULT_INCOME
    return INCOME_MIDPOINTS.get(bucket, DEFAULT_INCOME)
