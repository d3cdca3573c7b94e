from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from runform.__main__ import app


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("RUNFORM_CONFIG_FILE", str(path))
    return path


def test_analyze_json_output(runner, write_temp_json, real_user_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["--json", "analyze", str(path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["classification"] == "ELITE"
    assert set(payload["category_scores"]) >= {"arm_quality", "consistency"}
    assert "breakdown" not in payload


def test_analyze_breakdown_and_output_file(
    runner, write_temp_yaml, real_user_input: Dict[str, Any], tmp_path: Path
) -> None:
    path = write_temp_yaml("session.yaml", real_user_input)
    out = tmp_path / "out" / "analysis.json"
    result = runner.invoke(app, ["--json", "analyze", str(path), "--breakdown", "--output-file", str(out)])
    assert result.exit_code == 0
    assert "symmetry" in json.loads(result.stdout)["breakdown"]
    assert json.loads(out.read_text())["breakdown"]["consistency"]["cv_rating"] == "acceptable"


def test_analyze_plain_output(runner, write_temp_json, nominal_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", dict(nominal_input, weight_kg=70, height_cm=175))
    result = runner.invoke(app, ["--plain", "analyze", str(path)])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert "level\tELITE" in lines
    assert "bmi\t22.9" in lines
    assert "weight_category\tnormal" in lines
    assert "recommended_cadence\t180" in lines


def test_analyze_pretty_output(runner, write_temp_json, real_user_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["analyze", str(path)])
    assert result.exit_code == 0
    assert "Consistency" in result.stdout
    assert "Level: Elite" in result.stdout


def test_analyze_reads_stdin(runner, nominal_input: Dict[str, Any]) -> None:
    result = runner.invoke(app, ["--json", "analyze", "--stdin"], input=json.dumps(nominal_input))
    assert result.exit_code == 0
    assert json.loads(result.stdout)["composite_score"] == 96.9


def test_analyze_invalid_input_exits_two(runner, write_temp_json, nominal_input: Dict[str, Any]) -> None:
    payload = copy.deepcopy(nominal_input)
    payload["left_leg"]["knee_angle"]["std"] = -2
    path = write_temp_json("bad.json", payload)
    result = runner.invoke(app, ["--json", "analyze", str(path)])
    assert result.exit_code == 2
    assert "Validation error" in result.stdout
    assert "left_leg.knee_angle.std" in result.stdout


def test_analyze_missing_file_exits_two(runner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["analyze", str(tmp_path / "missing.json")])
    assert result.exit_code == 2
    assert "Input error" in result.stdout


def test_analyze_binary_file_exits_two(runner, tmp_path: Path) -> None:
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    result = runner.invoke(app, ["analyze", str(path)])
    assert result.exit_code == 2
    assert "Input error" in result.stdout


def test_verbose_logs_category_scores(runner, write_temp_json, nominal_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", nominal_input)
    result = runner.invoke(app, ["--verbose", "analyze", str(path)])
    assert result.exit_code == 0
    assert "Category scores" in result.stdout


def test_simple_command(runner, write_temp_json) -> None:
    path = write_temp_json("simple.json", {"left_arm_swing_mean": 150, "right_arm_swing_mean": 150, "height_cm": 190})
    result = runner.invoke(app, ["--json", "simple", str(path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["recommended_cadence"] == 176
    assert payload["bmi"] is None


def test_compare_command(runner, write_temp_json, real_user_input: Dict[str, Any], nominal_input: Dict[str, Any]) -> None:
    before = write_temp_json("before.json", real_user_input)
    after = write_temp_json("after.json", nominal_input)
    result = runner.invoke(app, ["--json", "compare", str(before), str(after)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["improvement_percentage"] > 0
    assert payload["classification_change"] == {"from_level": "ELITE", "to_level": "ELITE", "improved": False}

    plain = runner.invoke(app, ["--plain", "compare", str(before), str(after)])
    assert plain.exit_code == 0
    assert "to_level\tELITE" in plain.stdout.splitlines()


def test_errors_command(runner, write_temp_json, real_user_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["--json", "errors", str(path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["error_count"] == 2
    assert payload["highest_severity"] == "CRITICAL"
    assert payload["errors"][1]["error_type"] == "EXCESSIVE_VERTICAL_OSCILLATION"

    plain = runner.invoke(app, ["--plain", "errors", str(path)])
    lines = plain.stdout.splitlines()
    assert lines[0] == "type\tseverity\tconfidence\tname"
    assert lines[-1] == "total\t2"


def test_errors_command_clean_run(runner, write_temp_json, nominal_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", nominal_input)
    result = runner.invoke(app, ["errors", str(path)])
    assert result.exit_code == 0
    assert "No technique errors detected" in result.stdout


def test_recommend_command(runner, write_temp_json, real_user_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["--json", "recommend", str(path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["recommendations"][0]["focus_area"] == "Excessive vertical oscillation"
    assert len(payload["exercises"]) == 5
    assert payload["estimated_improvement_time"] == "1-2 months"

    beginner = runner.invoke(app, ["--json", "recommend", str(path), "--level", "beginner"])
    assert json.loads(beginner.stdout)["estimated_improvement_time"] == "3-6 months"


def test_recommend_rejects_unknown_level(runner, write_temp_json, real_user_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["recommend", str(path), "--level", "pro"])
    assert result.exit_code == 2


def test_recommend_uses_config_limits(
    runner, write_temp_json, real_user_input: Dict[str, Any], isolated_config: Path
) -> None:
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("[recommendations]\nmax_exercises = 2\n")
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["--json", "recommend", str(path)])
    assert result.exit_code == 0
    assert len(json.loads(result.stdout)["exercises"]) == 2


def test_focus_command(runner, write_temp_json, real_user_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["--plain", "focus", str(path)])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "1\tcategory\tMovement consistency"
    assert lines[1] == "2\terror\tExcessive vertical oscillation"
    assert lines[-1] == "estimated_improvement\t1-2 months"


def test_report_markdown_and_file(runner, write_temp_json, real_user_input: Dict[str, Any], tmp_path: Path) -> None:
    path = write_temp_json("session.json", real_user_input)
    out = tmp_path / "report.md"
    result = runner.invoke(app, ["--plain", "report", str(path), "--output-file", str(out)])
    assert result.exit_code == 0
    assert result.stdout.startswith("# Running Technique Report")
    assert out.read_text().startswith("# Running Technique Report")


def test_report_json_blocks(runner, write_temp_json, real_user_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["report", str(path), "--format", "json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert "first-message" in payload
    assert [block["id"] for block in payload["blocks"]] == ["technique", "focus", "errors", "exercises"]


def test_report_rejects_unknown_format(runner, write_temp_json, real_user_input: Dict[str, Any]) -> None:
    path = write_temp_json("session.json", real_user_input)
    result = runner.invoke(app, ["report", str(path), "--format", "pdf"])
    assert result.exit_code == 2


def test_config_init_and_show(runner, isolated_config: Path) -> None:
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 0
    assert isolated_config.exists()

    again = runner.invoke(app, ["config", "init"])
    assert again.exit_code == 1
    assert "already exists" in again.stdout

    forced = runner.invoke(app, ["--json", "config", "init", "--force"])
    assert json.loads(forced.stdout)["status"] == "created"

    shown = runner.invoke(app, ["--json", "config", "show"])
    assert shown.exit_code == 0
    assert json.loads(shown.stdout)["config"]["display"]["language"] == "en"


def test_config_output_format_json(runner, write_temp_json, nominal_input: Dict[str, Any], isolated_config: Path) -> None:
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text('[display]\noutput_format = "json"\n')
    path = write_temp_json("session.json", nominal_input)
    result = runner.invoke(app, ["analyze", str(path)])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["classification"] == "ELITE"


def test_bad_config_exits_two(runner, isolated_config: Path) -> None:
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text('[display]\nlanguage = "xx"\n')
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 2
    assert "Config error" in result.stdout
