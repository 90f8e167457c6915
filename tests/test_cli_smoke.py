"""
Minimal smoke tests for the power-pro CLI.

Tests basic functionality:
- App runs without errors
- Calculators print the expected numbers
- Maxes and sets are stored
- Prescriptions and next-set decisions are produced
- Progressions update the stored max
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from powerpro.cli.main import app
from powerpro.core.engine.config_loader import clear_config_cache


runner = CliRunner()

PERCENT_85 = '{"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 85}'
FIXED_5X5 = '{"type": "FIXED", "sets": 5, "reps": 5}'
MRS_25 = '{"type": "MRS", "targetTotalReps": 25, "minRepsPerSet": 3}'


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep a real ~/.power-pro/model.yaml out of the CLI defaults."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def state_path(tmp_path) -> Path:
    return tmp_path / "state.json"


def _set_max(state_path: Path, lift: str = "squat", value: str = "300") -> None:
    result = runner.invoke(app, ["set-max", lift, value, "--state-path", str(state_path)])
    assert result.exit_code == 0, result.output


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "prescribe" in result.output

    def test_round(self):
        result = runner.invoke(app, ["round", "267.75"])
        assert result.exit_code == 0
        assert result.output.strip() == "270"

    def test_round_uses_user_config(self, tmp_path):
        cfg_dir = tmp_path / "home" / ".power-pro"
        cfg_dir.mkdir(parents=True)
        (cfg_dir / "model.yaml").write_text("rounding:\n  increment: 2.5\n  direction: DOWN\n")
        result = runner.invoke(app, ["round", "267.75"])
        assert result.exit_code == 0
        assert result.output.strip() == "267.5"

    def test_round_bad_direction(self):
        result = runner.invoke(app, ["round", "267.75", "--direction", "sideways"])
        assert result.exit_code == 1

    def test_e1rm(self):
        result = runner.invoke(app, ["e1rm", "365", "1", "8"])
        assert result.exit_code == 0
        assert "400" in result.output

    def test_e1rm_outside_chart(self):
        result = runner.invoke(app, ["e1rm", "365", "15", "8"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestMaxes:

    def test_set_max_creates_state(self, state_path):
        _set_max(state_path)
        data = json.loads(state_path.read_text())
        assert data["maxes"]["me"]["squat"]["TRAINING_MAX"][0]["value"] == 300.0

    def test_show_maxes(self, state_path):
        _set_max(state_path)
        result = runner.invoke(app, ["show-maxes", "squat", "--state-path", str(state_path)])
        assert result.exit_code == 0
        assert "300" in result.output

    def test_show_maxes_empty(self, state_path):
        result = runner.invoke(app, ["show-maxes", "bench", "--state-path", str(state_path)])
        assert result.exit_code == 0
        assert "No TRAINING_MAX" in result.output

    def test_bad_date(self, state_path):
        result = runner.invoke(app, [
            "set-max", "squat", "300", "--date", "03/14/2026", "--state-path", str(state_path),
        ])
        assert result.exit_code == 1


class TestPrescribe:

    def test_percent_of_fixed(self, state_path):
        _set_max(state_path)
        result = runner.invoke(app, [
            "prescribe", "squat", "-s", PERCENT_85, "-c", FIXED_5X5,
            "--json", "--state-path", str(state_path),
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        # 300 × 0.85 = 255
        assert data["baseWeight"] == 255.0
        assert len(data["sets"]) == 5
        assert all(s["targetReps"] == 5 for s in data["sets"])

    def test_table_output(self, state_path):
        _set_max(state_path)
        result = runner.invoke(app, [
            "prescribe", "squat", "-s", PERCENT_85, "-c", FIXED_5X5,
            "--state-path", str(state_path),
        ])
        assert result.exit_code == 0
        assert "255" in result.output

    def test_missing_max(self, state_path):
        result = runner.invoke(app, [
            "prescribe", "bench", "-s", PERCENT_85, "-c", FIXED_5X5,
            "--state-path", str(state_path),
        ])
        assert result.exit_code == 1

    def test_strategy_from_file(self, state_path, tmp_path):
        _set_max(state_path)
        strategy_file = tmp_path / "strategy.json"
        strategy_file.write_text(PERCENT_85)
        result = runner.invoke(app, [
            "prescribe", "squat", "-s", f"@{strategy_file}", "-c", FIXED_5X5,
            "--json", "--state-path", str(state_path),
        ])
        assert result.exit_code == 0
        assert json.loads(result.output)["baseWeight"] == 255.0

    def test_relative_to_logged_set(self, state_path):
        runner.invoke(app, ["log-set", "s1", "squat", "300x5@8", "--state-path", str(state_path)])
        strategy = '{"type": "RELATIVE_TO", "referenceSetIndex": 0, "percentage": 90}'
        result = runner.invoke(app, [
            "prescribe", "squat", "-s", strategy, "-c", FIXED_5X5,
            "--session", "s1", "--json", "--state-path", str(state_path),
        ])
        assert result.exit_code == 0, result.output
        # 300 × 0.9 = 270
        assert json.loads(result.output)["baseWeight"] == 270.0

    def test_unknown_strategy_type(self, state_path):
        result = runner.invoke(app, [
            "prescribe", "squat", "-s", '{"type": "GUESS"}', "-c", FIXED_5X5,
            "--state-path", str(state_path),
        ])
        assert result.exit_code == 1

    def test_malformed_scheme_is_reported(self, state_path):
        _set_max(state_path)
        result = runner.invoke(app, [
            "prescribe", "squat", "-s", PERCENT_85,
            "-c", '{"type": "FIXED", "sets": "five", "reps": 5}',
            "--state-path", str(state_path),
        ])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "invalid payload" in result.output


class TestNextSet:

    def test_from_logged_sets(self, state_path):
        for performed in ("300x10", "300x8"):
            result = runner.invoke(app, [
                "log-set", "s1", "squat", performed, "--state-path", str(state_path),
            ])
            assert result.exit_code == 0
        result = runner.invoke(app, [
            "next-set", "s1", "squat", "-c", MRS_25, "--state-path", str(state_path),
        ])
        assert result.exit_code == 0, result.output
        assert "Next set 3" in result.output

    def test_with_inline_sets(self, state_path):
        result = runner.invoke(app, [
            "next-set", "s1", "squat", "-c", MRS_25,
            "--set", "300x10", "--set", "300x10", "--set", "300x8",
            "--state-path", str(state_path),
        ])
        assert result.exit_code == 0
        assert "Target total reps reached (28/25)" in result.output

    def test_fixed_scheme_rejected(self, state_path):
        result = runner.invoke(app, [
            "next-set", "s1", "squat", "-c", FIXED_5X5, "--set", "300x5",
            "--state-path", str(state_path),
        ])
        assert result.exit_code == 1


class TestProgress:

    LINEAR = (
        '{"type": "LINEAR_PROGRESSION", "id": "lp", "name": "Linear", '
        '"maxType": "TRAINING_MAX", "increment": 5, "triggerType": "AFTER_SESSION"}'
    )

    def test_linear_save(self, state_path):
        _set_max(state_path)
        result = runner.invoke(app, [
            "progress", "squat", "-g", self.LINEAR, "--save", "--json",
            "--state-path", str(state_path),
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["applied"] is True
        assert data["newValue"] == 305.0

        data = json.loads(state_path.read_text())
        values = [m["value"] for m in data["maxes"]["me"]["squat"]["TRAINING_MAX"]]
        assert values == [300.0, 305.0]

    def test_without_save_leaves_max(self, state_path):
        _set_max(state_path)
        result = runner.invoke(app, [
            "progress", "squat", "-g", self.LINEAR, "--state-path", str(state_path),
        ])
        assert result.exit_code == 0
        assert "305" in result.output
        data = json.loads(state_path.read_text())
        assert len(data["maxes"]["me"]["squat"]["TRAINING_MAX"]) == 1

    def test_no_max(self, state_path):
        result = runner.invoke(app, [
            "progress", "squat", "-g", self.LINEAR, "--state-path", str(state_path),
        ])
        assert result.exit_code == 1

    def test_deload_after_failures(self, state_path):
        _set_max(state_path)
        deload = (
            '{"type": "DELOAD_ON_FAILURE", "id": "df", "name": "Deload", "maxType": "TRAINING_MAX", '
            '"failureThreshold": 2, "deloadType": "percent", "deloadPercent": 0.1}'
        )
        args = [
            "progress", "squat", "-g", deload, "--reps", "3", "--target-reps", "5",
            "--save", "--json", "--state-path", str(state_path),
        ]
        first = json.loads(runner.invoke(app, args).output)
        assert first["applied"] is False

        second = runner.invoke(app, args)
        assert second.exit_code == 0, second.output
        # 300 × 0.9 = 270
        assert json.loads(second.output)["newValue"] == pytest.approx(270.0)

        counters = json.loads(state_path.read_text())["failure_counters"]
        assert counters[0]["consecutive_failures"] == 0

    def test_stage_state_written_back(self, state_path, tmp_path):
        _set_max(state_path)
        prog_file = tmp_path / "t1.json"
        prog_file.write_text(json.dumps({
            "type": "STAGE_PROGRESSION",
            "id": "t1",
            "name": "T1",
            "maxType": "TRAINING_MAX",
            "stages": [
                {"name": "5x3", "sets": 5, "reps": 3},
                {"name": "6x2", "sets": 6, "reps": 2},
            ],
        }))
        result = runner.invoke(app, [
            "progress", "squat", "-g", f"@{prog_file}", "--save",
            "--state-path", str(state_path),
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(prog_file.read_text())["currentStage"] == 1

    def test_double_progression_ceiling(self, state_path):
        _set_max(state_path)
        double = (
            '{"type": "DOUBLE_PROGRESSION", "id": "dp", "name": "3x8-12", '
            '"maxType": "TRAINING_MAX", "weightIncrement": 5}'
        )
        base = ["progress", "squat", "-g", double, "--json", "--state-path", str(state_path)]

        below = json.loads(runner.invoke(app, base + ["--reps", "10", "--max-reps", "12"]).output)
        assert below["applied"] is False
        assert below["reason"] == "rep ceiling not reached: performed 10, need 12"

        result = runner.invoke(app, base + ["--reps", "12", "--max-reps", "12"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["newValue"] == 305.0
