"""
Financial Health Assessment - CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (assessment, template export, ...).
  5. Report result to stdout.

Install and run::

    pip install -e .
    finhealth --help
    finhealth sample-profile --out my_profile.json
    finhealth assess my_profile.json
    finhealth assess profiles.csv --output-dir data/outputs
    finhealth validate-config --full
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="finhealth",
    help="Financial health self-assessment - scores, fee projections and priority actions.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from finhealth.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from finhealth.utils.logging import configure_logging
    configure_logging(config.logging)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("assess")
def assess(
    profile_path: str = typer.Argument(
        ...,
        help="Profile file: a JSON object, a JSON array of objects, or a CSV.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Write JSON / CSV / Parquet exports here ('' = configured output_dir).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the full result as JSON instead of the text report.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for the illustrative monthly trade counts.",
    ),
) -> None:
    """Score one or more profiles and print the report.

    Exits with code 1 if the profile file is missing or any profile is invalid;
    nothing is assessed in that case.
    """
    from finhealth.assessment import run_assessments
    from finhealth.ingestion.profile_loader import ProfileLoadError, load_profiles
    from finhealth.reporting.export import assessment_to_dict, write_assessment_outputs
    from finhealth.reporting.formatters import format_assessment_report, format_batch_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        profiles = load_profiles(Path(profile_path))
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ProfileLoadError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if not profiles:
        typer.echo("[ERROR] No profiles found in file.", err=True)
        raise typer.Exit(code=1)

    results = run_assessments(profiles, config, seed=seed)

    if as_json:
        payload = [assessment_to_dict(r) for r in results]
        typer.echo(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
    else:
        for result in results:
            typer.echo(format_assessment_report(result))
        if len(results) > 1:
            typer.echo(format_batch_summary(results))

    if output_dir is not None:
        out = Path(output_dir or config.output.output_dir)
        for result in results:
            paths = write_assessment_outputs(result, out)
            if not as_json:
                for kind, path in paths.items():
                    typer.echo(f"  {kind:<16} -> {path}")
        if not as_json:
            typer.echo(f"[OK] Exports written to {out}")


@app.command("sample-profile")
def sample_profile(
    out: str = typer.Option(
        "sample_profile.json",
        "--out",
        help="Where to write the template profile.",
    ),
) -> None:
    """Write a template profile (fresh questionnaire answers) to edit and assess."""
    from finhealth.ingestion.profile_loader import write_sample_profile

    path = write_sample_profile(Path(out))
    typer.echo(f"[OK] Sample profile written to {path}")
    typer.echo(f"  Edit it, then run: finhealth assess {path}")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    w = config.scoring.weights

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(
        f"  Score weights:     investment={w.investment_strategy:.2f} "
        f"cost={w.cost_efficiency:.2f} tax={w.tax_optimization:.2f} "
        f"behavior={w.behavioral_health:.2f} goals={w.goal_coverage:.2f}"
    )
    typer.echo(
        f"  Stock target:      110 - age, clamped to "
        f"{config.scoring.min_stock_target}..{config.scoring.max_stock_target}"
    )
    typer.echo(f"  Market return:     {config.projection.market_return:.2%}")
    typer.echo(
        f"  Horizons:          fees {config.projection.cost_horizon_years}y, "
        f"behavior {config.projection.behavioral_horizon_years}y"
    )
    typer.echo(f"  Max actions:       {config.recommendations.max_recommendations}")
    typer.echo(f"  Output dir:        {config.output.output_dir}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config is valid.")


if __name__ == "__main__":
    app()
