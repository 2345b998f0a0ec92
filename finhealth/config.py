"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      - committed static defaults
  2. ``config/local.toml``        - optional local overrides (gitignored)
  3. ``.env``                     - local env overrides (gitignored)
  4. Environment variables        - ``FINHEALTH_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine itself never reads files or the environment: ``run_assessment``
takes an ``AppConfig`` argument and falls back to ``AppConfig()`` whose
defaults mirror ``config/default.toml``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class ScoringWeights(BaseModel):
    """Weights of the five category scores in the overall score."""

    model_config = ConfigDict(frozen=True)

    investment_strategy: float = 0.20
    cost_efficiency: float = 0.30
    tax_optimization: float = 0.15
    behavioral_health: float = 0.25
    goal_coverage: float = 0.10

    @model_validator(mode="after")
    def validate_sum(self) -> "ScoringWeights":
        total = (
            self.investment_strategy
            + self.cost_efficiency
            + self.tax_optimization
            + self.behavioral_health
            + self.goal_coverage
        )
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"scoring weights must sum to 1.0, got {total:.4f}.")
        if min(self.model_dump().values()) < 0:
            raise ValueError("scoring weights must be non-negative.")
        return self


class ScoringConfig(BaseModel):
    """Score calculator parameters.

    The age-based stock target is ``clamp(110 - age, min_stock_target,
    max_stock_target)``.
    """

    model_config = ConfigDict(frozen=True)

    weights: ScoringWeights = ScoringWeights()
    min_stock_target: int = 30
    max_stock_target: int = 90

    @model_validator(mode="after")
    def validate_bounds(self) -> "ScoringConfig":
        if not 0 <= self.min_stock_target <= self.max_stock_target <= 100:
            raise ValueError(
                "stock target bounds must satisfy 0 <= min <= max <= 100, got "
                f"{self.min_stock_target}..{self.max_stock_target}."
            )
        return self


class ProjectionConfig(BaseModel):
    """Market and fee assumptions shared by the cost and behavioral projections."""

    model_config = ConfigDict(frozen=True)

    market_return: float = 0.07
    cost_horizon_years: int = 30
    behavioral_horizon_years: int = 10
    recommended_expense_ratio: float = 0.05   # percent
    cost_per_trade: float = 25.0              # dollars

    @field_validator("market_return")
    @classmethod
    def validate_market_return(cls, v: float) -> float:
        if not -0.5 < v < 0.5:
            raise ValueError(f"market_return must be in (-0.5, 0.5), got {v}.")
        return v

    @field_validator("cost_horizon_years", "behavioral_horizon_years")
    @classmethod
    def validate_horizon(cls, v: int) -> int:
        if not 1 <= v <= 100:
            raise ValueError(f"projection horizons must be in [1, 100], got {v}.")
        return v


class RecommendationConfig(BaseModel):
    """Recommendation trigger thresholds and output size."""

    model_config = ConfigDict(frozen=True)

    max_recommendations: int = 5
    cost_score_threshold: int = 70
    behavioral_score_threshold: int = 70
    rebalance_gap_threshold: int = 15
    college_savings_impact: int = 27_000

    @field_validator("max_recommendations")
    @classmethod
    def validate_max(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_recommendations must be >= 1, got {v}.")
        return v


class OutputConfig(BaseModel):
    """Where the CLI writes assessment exports."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration - the single source of truth."""

    model_config = ConfigDict(frozen=True)

    scoring: ScoringConfig = ScoringConfig()
    projection: ProjectionConfig = ProjectionConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply FINHEALTH_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply FINHEALTH_* env vars to the raw config dict.

    Supported overrides:
      FINHEALTH_LOG_LEVEL      → raw["logging"]["level"]
      FINHEALTH_OUTPUT_DIR     → raw["output"]["output_dir"]
      FINHEALTH_MARKET_RETURN  → raw["projection"]["market_return"]
      FINHEALTH_DEBUG          → raw["debug"]
    """
    if log_level := os.environ.get("FINHEALTH_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get("FINHEALTH_OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if market_return := os.environ.get("FINHEALTH_MARKET_RETURN"):
        raw.setdefault("projection", {})["market_return"] = float(market_return)

    if debug := os.environ.get("FINHEALTH_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    scoring_raw = dict(raw.get("scoring", {}))
    weights = ScoringWeights(**scoring_raw.pop("weights", {}))

    return AppConfig(
        scoring=ScoringConfig(weights=weights, **scoring_raw),
        projection=ProjectionConfig(**raw.get("projection", {})),
        recommendations=RecommendationConfig(**raw.get("recommendations", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
