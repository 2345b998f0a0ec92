"""
Profile file loader: JSON or CSV → validated ``UserProfile`` objects.

JSON - either a single profile object or an array of them.  Keys may be
snake_case or the questionnaire's camelCase::

    {"name": "Alex", "age": 35, "totalInvested": "100k-500k",
     "allocation": {"stocks": 60, "bonds": 30, "cash": 10, "other": 0},
     "financialGaps": {"emergencyFund": true}, ...}

CSV - one profile per row with a header.  Required columns:
  name, age, stocks, bonds, cash, other

Optional columns (empty string → default):
  income, has_children, number_of_children, goals (``;``-separated),
  retirement_timeline, total_invested, expense_ratio, has_advisor,
  advisor_fee, trading_frequency, panic_selling, checking_frequency,
  emergency_fund, life_insurance, disability_insurance, estate_plan,
  college_savings, biggest_concern

Boolean columns:
  true/1/yes/t/y  → True
  false/0/no/f/n  → False (default if omitted)

All profiles are validated before any are returned.  If any fails, a single
``ProfileLoadError`` lists the first 10 failures.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from finhealth.models.profile import UserProfile

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = frozenset({"name", "age", "stocks", "bonds", "cash", "other"})

_ALLOCATION_COLUMNS = ("stocks", "bonds", "cash", "other")
_GAP_COLUMNS = (
    "emergency_fund", "life_insurance", "disability_insurance",
    "estate_plan", "college_savings",
)
_BOOL_COLUMNS = ("has_children", "has_advisor")
_TEXT_COLUMNS = (
    "income", "retirement_timeline", "total_invested", "expense_ratio",
    "advisor_fee", "trading_frequency", "panic_selling", "checking_frequency",
    "biggest_concern",
)

# Starting answers of a fresh questionnaire, in the camelCase wire format.
# The name is filled in so the template validates as-is.
SAMPLE_PROFILE: dict[str, Any] = {
    "name": "Sample User",
    "age": 35,
    "income": "",
    "hasChildren": False,
    "numberOfChildren": 0,
    "goals": [],
    "retirementTimeline": "",
    "totalInvested": "",
    "allocation": {"stocks": 60, "bonds": 30, "cash": 10, "other": 0},
    "expenseRatio": "",
    "hasAdvisor": False,
    "advisorFee": "",
    "tradingFrequency": "",
    "panicSelling": "",
    "checkingFrequency": "",
    "financialGaps": {
        "emergencyFund": False,
        "lifeInsurance": False,
        "disabilityInsurance": False,
        "estatePlan": False,
        "collegeSavings": False,
    },
    "biggestConcern": "",
}

_TRUE_VALUES = frozenset({"true", "1", "yes", "t", "y"})
_FALSE_VALUES = frozenset({"false", "0", "no", "f", "n", ""})


class ProfileLoadError(ValueError):
    """Raised when a profile file cannot be parsed or fails validation."""


def load_profiles(path: Path) -> list[UserProfile]:
    """Load one or more profiles from a ``.json`` or ``.csv`` file.

    Args:
        path: Profile file (must exist).

    Returns:
        Validated profiles in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ProfileLoadError:  If the file is malformed or any profile is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        records = _read_json_records(path)
    elif suffix == ".csv":
        records = _read_csv_records(path)
    else:
        raise ProfileLoadError(
            f"Unsupported profile format '{suffix}' (expected .json or .csv): {path}"
        )

    reshape = _row_to_record if suffix == ".csv" else None
    profiles = _validate_records(records, path, reshape)
    logger.info("Loaded %d profile(s) from %s", len(profiles), path.name)
    return profiles


def profile_from_dict(data: dict[str, Any]) -> UserProfile:
    """Validate a single profile mapping (snake_case or camelCase keys)."""
    return UserProfile.model_validate(data)


def write_sample_profile(path: Path) -> Path:
    """Write ``SAMPLE_PROFILE`` as pretty-printed JSON and return ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(SAMPLE_PROFILE, indent=2) + "\n", encoding="utf-8")
    return path

# ── Private helpers ────────────────────────────────────────────────────────────


def _read_json_records(path: Path) -> list[dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ProfileLoadError(f"{path.name} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ProfileLoadError(f"Invalid JSON in {path.name}: {exc}") from exc

    if isinstance(data, dict):
        return [data]
    if isinstance(data, list) and all(isinstance(item, dict) for item in data):
        return data
    raise ProfileLoadError(
        f"{path.name} must contain a profile object or an array of profile objects."
    )


def _read_csv_records(path: Path) -> list[dict[str, str]]:
    try:
        return _read_csv_rows(path)
    except UnicodeDecodeError as exc:
        raise ProfileLoadError(f"{path.name} is not valid UTF-8: {exc}") from exc


def _read_csv_rows(path: Path) -> list[dict[str, str]]:
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ProfileLoadError(f"CSV file is empty or has no header row: {path}")

        missing = REQUIRED_CSV_COLUMNS - set(reader.fieldnames)
        if missing:
            raise ProfileLoadError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(reader.fieldnames)}"
            )

        rows = list(reader)

    if not rows:
        logger.warning("Profile CSV is empty (header only): %s", path)
    return rows


def _row_to_record(row: dict[str, str]) -> dict[str, Any]:
    """Reshape a flat CSV row into the nested profile structure."""

    def text(key: str) -> str:
        return (row.get(key) or "").strip()

    record: dict[str, Any] = {
        "name": text("name"),
        "age": text("age"),
        "allocation": {col: text(col) for col in _ALLOCATION_COLUMNS},
        "financial_gaps": {col: _parse_bool(text(col), col) for col in _GAP_COLUMNS},
        "goals": [g.strip() for g in text("goals").split(";") if g.strip()],
        "number_of_children": text("number_of_children") or 0,
    }
    for col in _BOOL_COLUMNS:
        record[col] = _parse_bool(text(col), col)
    for col in _TEXT_COLUMNS:
        record[col] = text(col)
    return record


def _parse_bool(raw: str, key: str) -> bool:
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Boolean field '{key}' must be true/false, got '{raw}'.")


def _validate_records(
    records: list[dict[str, Any]],
    path: Path,
    reshape: Optional[Callable[[dict[str, str]], dict[str, Any]]] = None,
) -> list[UserProfile]:
    profiles: list[UserProfile] = []
    errors: list[tuple[int, str]] = []

    for i, record in enumerate(records):
        try:
            if reshape is not None:
                record = reshape(record)
            profiles.append(profile_from_dict(record))
        except (ValueError, ValidationError) as exc:
            errors.append((i, str(exc)))

    if errors:
        max_shown = 10
        detail = "\n".join(f"  Profile {idx}: {msg}" for idx, msg in errors[:max_shown])
        suffix = f"\n  … and {len(errors) - max_shown} more" if len(errors) > max_shown else ""
        raise ProfileLoadError(
            f"{len(errors)} profile(s) failed validation in {path.name}:\n{detail}{suffix}"
        )

    return profiles
