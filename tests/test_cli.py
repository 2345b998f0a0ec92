"""
Tests for finhealth/cli.py via typer's CliRunner.

What we test
------------
- assess: text report, --json payload, --output-dir exports, batch summary.
- assess: missing file, invalid profile, non-list goals, non-UTF-8 file and
  empty array all print [ERROR] and exit with code 1.
- sample-profile writes a file that assess accepts.
- validate-config: default config, --full, missing config path.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from finhealth.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch):
    monkeypatch.setenv("FINHEALTH_LOG_LEVEL", "WARNING")


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "me.json"
    path.write_text(json.dumps({
        "name": "Pat Lee",
        "age": 55,
        "allocation": {"stocks": 80, "bonds": 5, "cash": 15, "other": 0},
        "expenseRatio": "over-1",
        "hasAdvisor": True,
        "advisorFee": "over-1.5",
        "tradingFrequency": "weekly",
    }), encoding="utf-8")
    return path


# ── assess ─────────────────────────────────────────────────────────────────────

class TestAssess:
    def test_text_report(self, profile_file):
        result = runner.invoke(app, ["assess", str(profile_file)])
        assert result.exit_code == 0, result.output
        assert "=== Financial Health Score ===" in result.stdout
        assert "Cut your investment costs" in result.stdout

    def test_json_output(self, profile_file):
        result = runner.invoke(app, ["assess", str(profile_file), "--json", "--seed", "3"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["profile"]["name"] == "Pat Lee"
        assert 0 <= data["scores"]["overall"] <= 100
        assert data["recommendations"][0]["id"] == "cut-costs"

    def test_output_dir(self, profile_file, tmp_path):
        out = tmp_path / "exports"
        result = runner.invoke(app, ["assess", str(profile_file), "--output-dir", str(out)])
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == [
            "assessment_pat-lee.json",
            "projection_pat-lee.parquet",
            "recommendations_pat-lee.csv",
        ]
        assert "[OK] Exports written" in result.stdout

    def test_batch_summary(self, tmp_path):
        path = tmp_path / "many.json"
        path.write_text(json.dumps([
            {"name": "One", "age": 30, "allocation": {"stocks": 80, "bonds": 20, "cash": 0, "other": 0}},
            {"name": "Two", "age": 60, "allocation": {"stocks": 50, "bonds": 40, "cash": 10, "other": 0}},
        ]), encoding="utf-8")
        result = runner.invoke(app, ["assess", str(path), "--json"])
        assert result.exit_code == 0, result.output
        assert [d["profile"]["name"] for d in json.loads(result.stdout)] == ["One", "Two"]

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["assess", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_invalid_profile(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"age": 12}), encoding="utf-8")
        result = runner.invoke(app, ["assess", str(path)])
        assert result.exit_code == 1
        assert "failed validation" in result.output

    def test_non_list_goals(self, tmp_path):
        path = tmp_path / "bad_goals.json"
        path.write_text(json.dumps({
            "name": "Pat", "age": 40, "goals": 5,
            "allocation": {"stocks": 60, "bonds": 30, "cash": 10, "other": 0},
        }), encoding="utf-8")
        result = runner.invoke(app, ["assess", str(path)])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output
        assert "goals must be a list" in result.output

    def test_file_not_utf8(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes(b"name,age,stocks,bonds,cash,other\n\xff\xfe,40,60,30,10,0\n")
        result = runner.invoke(app, ["assess", str(path)])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output
        assert "not valid UTF-8" in result.output

    def test_empty_array(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")
        result = runner.invoke(app, ["assess", str(path)])
        assert result.exit_code == 1
        assert "No profiles found" in result.output


# ── sample-profile ─────────────────────────────────────────────────────────────

def test_sample_profile_round_trip(tmp_path):
    out = tmp_path / "sample.json"
    result = runner.invoke(app, ["sample-profile", "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert out.exists()

    assessed = runner.invoke(app, ["assess", str(out), "--json"])
    assert assessed.exit_code == 0, assessed.output
    assert json.loads(assessed.stdout)["profile"]["name"] == "Sample User"


# ── validate-config ────────────────────────────────────────────────────────────

class TestValidateConfig:
    def test_default(self):
        result = runner.invoke(app, ["validate-config"])
        assert result.exit_code == 0, result.output
        assert "investment=0.20" in result.stdout
        assert "[OK] Config is valid." in result.stdout

    def test_full(self):
        result = runner.invoke(app, ["validate-config", "--full"])
        assert result.exit_code == 0, result.output
        assert "Full config (JSON):" in result.stdout
        assert '"max_recommendations": 5' in result.stdout

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "x.toml")])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output
