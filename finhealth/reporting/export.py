"""
Export helpers for spreadsheets and manual analysis.

All writers create parent directories and return what they wrote.  They
accept plain ``dict`` / ``list[dict]`` data (or a result model converted with
``assessment_to_dict()``) to stay decoupled from the report shapes.

Files per assessed profile (see ``make_output_paths``)::

    assessment_<slug>.json        full result bundle
    recommendations_<slug>.csv    one row per recommendation, flat
    projection_<slug>.parquet     one row per year, both fee tracks

CSV exports are flat (no nested dicts) so they open directly in Excel.
"""

from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from finhealth.models.results import AssessmentResult, CostProjection

logger = logging.getLogger(__name__)

PROJECTION_PA_SCHEMA = pa.schema([
    pa.field("year",                        pa.int32(), nullable=False),
    pa.field("value_with_current_fees",     pa.int64(), nullable=False),
    pa.field("value_with_recommended_fees", pa.int64(), nullable=False),
    pa.field("fee_drag",                    pa.int64(), nullable=False),
])

RECOMMENDATION_COLUMNS = [
    "name", "generated_at", "overall_score", "rank", "id", "title", "category",
    "priority", "current_state", "recommended_state", "dollar_impact",
    "impact_description", "n_steps",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records and not fieldnames:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def assessment_to_dict(result: AssessmentResult) -> dict[str, Any]:
    """JSON-ready dict of the result, plus the derived display fields.

    Adds ``scores.label``, ``scores.percentile`` and
    ``behavior.behavioral_cost``, which are properties and not dumped by
    pydantic.
    """
    data = result.model_dump(mode="json")
    data["scores"]["label"] = result.scores.label
    data["scores"]["percentile"] = result.scores.percentile
    data["behavior"]["behavioral_cost"] = result.behavior.behavioral_cost
    data["profile"]["goals"] = sorted(data["profile"]["goals"])
    return data


def flatten_recommendations_for_export(assessment_json: dict) -> list[dict]:
    """Flatten an assessment JSON dict into one row per recommendation.

    Each row contains:
    - ``name``, ``generated_at``, ``overall_score`` (assessment metadata)
    - ``rank`` (1-based display position)
    - ``id``, ``title``, ``category``, ``priority``
    - ``current_state``, ``recommended_state``
    - ``dollar_impact``, ``impact_description``, ``n_steps``

    Args:
        assessment_json: Output of ``assessment_to_dict()`` or a parsed
                         ``assessment_<slug>.json``.

    Returns:
        List of flat row dicts (empty when there are no recommendations).
    """
    rows: list[dict] = []
    name          = assessment_json.get("profile", {}).get("name", "")
    generated_at  = assessment_json.get("generated_at", "")
    overall_score = assessment_json.get("scores", {}).get("overall", "")

    for rank, rec in enumerate(assessment_json.get("recommendations", []), start=1):
        rows.append(
            {
                "name":               name,
                "generated_at":       generated_at,
                "overall_score":      overall_score,
                "rank":               rank,
                "id":                 rec.get("id", ""),
                "title":              rec.get("title", ""),
                "category":           rec.get("category", ""),
                "priority":           rec.get("priority", ""),
                "current_state":      rec.get("current_state", ""),
                "recommended_state":  rec.get("recommended_state", ""),
                "dollar_impact":      rec.get("dollar_impact", 0),
                "impact_description": rec.get("impact_description", ""),
                "n_steps":            len(rec.get("steps", [])),
            }
        )

    return rows


def projection_rows(costs: CostProjection) -> list[dict[str, int]]:
    """One row per projected year with both fee tracks and their difference."""
    return [
        {
            "year":                        year,
            "value_with_current_fees":     cur,
            "value_with_recommended_fees": rec,
            "fee_drag":                    rec - cur,
        }
        for year, (cur, rec) in enumerate(
            zip(costs.projection_with_current_fees, costs.projection_with_recommended_fees)
        )
    ]


def write_projection_parquet(costs: CostProjection, path: Path) -> int:
    """Write the year-by-year fee projection to Parquet.

    Returns the number of rows written (``horizon_years + 1``).
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = projection_rows(costs)
    arrays = {
        field.name: pa.array([r[field.name] for r in rows], type=field.type)
        for field in PROJECTION_PA_SCHEMA
    }
    table = pa.table(arrays, schema=PROJECTION_PA_SCHEMA)
    pq.write_table(table, str(path), compression="snappy")
    logger.info("Projection Parquet written: %s (%d rows)", path.name, len(rows))
    return len(rows)


# ── Output path helpers ────────────────────────────────────────────────────────


def slugify(name: str) -> str:
    """Lowercase, hyphen-separated file-name slug (``"profile"`` if empty)."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "profile"


def make_output_paths(output_dir: Path, name: str) -> dict[str, Path]:
    """Export file paths for one profile, keyed by artifact."""
    slug = slugify(name)
    return {
        "assessment":      output_dir / f"assessment_{slug}.json",
        "recommendations": output_dir / f"recommendations_{slug}.csv",
        "projection":      output_dir / f"projection_{slug}.parquet",
    }


def write_assessment_outputs(result: AssessmentResult, output_dir: Path) -> dict[str, Path]:
    """Write all three export files for one assessment and return their paths."""
    paths = make_output_paths(output_dir, result.profile.name)
    data = assessment_to_dict(result)
    export_to_json(data, paths["assessment"])
    export_to_csv(
        flatten_recommendations_for_export(data),
        paths["recommendations"],
        fieldnames=RECOMMENDATION_COLUMNS,
    )
    write_projection_parquet(result.costs, paths["projection"])
    return paths
