from pathlib import Path

import pytest
from openpyxl import load_workbook
from typer.testing import CliRunner
from yaml import safe_load

from taskforce import configuration
from taskforce.terminal.app import app

runner = CliRunner()


@pytest.fixture
def invoke(dataset_path: Path):
    def _invoke(*args: str):
        return runner.invoke(app, ["--data", str(dataset_path), *args])

    return _invoke


def test_recommendations_list(invoke):
    result = invoke("recommendations")

    assert result.exit_code == 0, result.output
    for code in ("R01", "R02", "R03", "R10"):
        assert code in result.output
    assert "4 recommendations" in result.output


def test_aliases_resolve_to_commands(invoke):
    full = invoke("recommendations", "--status", "completed")
    alias = invoke("r", "-s", "completed")

    assert full.exit_code == 0
    assert alias.exit_code == 0
    assert "R03" in alias.output
    assert "R01" not in alias.output


def test_recommendations_filters(invoke):
    by_owner = invoke("recommendations", "--owner", "ONR")
    by_search = invoke("recommendations", "--search", "permitting")

    assert by_owner.exit_code == 0
    assert "R02" in by_owner.output and "R03" in by_owner.output
    assert "R01" not in by_owner.output
    assert by_search.exit_code == 0
    assert "1 recommendations" in by_search.output


def test_unknown_status_is_a_usage_error(invoke):
    result = invoke("recommendations", "--status", "finished")

    assert result.exit_code == 2


def test_single_recommendation_accepts_bare_number(invoke):
    result = invoke("recommendation", "2")

    assert result.exit_code == 0, result.output
    assert "R02" in result.output
    assert "Consultation delayed" in result.output


def test_single_recommendation_not_found(invoke):
    result = invoke("rec", "R99")

    assert result.exit_code == 1


@pytest.mark.parametrize(
    "args",
    [
        ["timeline"],
        ["tl", "--by", "recommendation", "--weeks-ahead", "2", "--weeks-back", "0"],
        ["timeline", "--owner", "ONR", "--left-width", "12"],
        ["departments", "--key-people"],
        ["deadlines", "--limit", "2"],
        ["updates", "--limit", "1"],
    ],
)
def test_report_commands_succeed(invoke, args):
    result = invoke(*args)

    assert result.exit_code == 0, result.output


def test_invalid_row_axis(invoke):
    result = invoke("timeline", "--by", "chapter")

    assert result.exit_code == 2


def test_no_header_option(dataset_path):
    with_header = runner.invoke(app, ["--data", str(dataset_path), "updates"])
    without_header = runner.invoke(
        app, ["--data", str(dataset_path), "--no-header", "updates"]
    )

    assert "data as of 14 Mar 2025" in with_header.output
    assert "data as of" not in without_header.output


def test_missing_dataset_exits_with_error(tmp_path):
    result = runner.invoke(
        app, ["--data", str(tmp_path / "absent.yaml"), "recommendations"]
    )

    assert result.exit_code == 1


def test_malformed_dataset_exits_with_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("recommendations:\n  - {id: 1, code: R1}\n")

    result = runner.invoke(app, ["--data", str(path), "timeline"])

    assert result.exit_code == 1


def test_export_csv_to_output(invoke, tmp_path):
    output = tmp_path / "updates.csv"

    result = invoke("export", "updates", "--output", str(output))

    assert result.exit_code == 0, result.output
    content = output.read_bytes().decode("utf-8")
    assert content.startswith("\ufeff")
    lines = content.lstrip("\ufeff").splitlines()
    assert lines[0].startswith("Date,Recommendation Code")
    assert len(lines) == 5


def test_export_xlsx_default_filename(invoke, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = invoke("x", "departments", "--format", "xlsx")

    assert result.exit_code == 0, result.output
    (exported,) = tmp_path.glob("taskforce-departments-*.xlsx")
    sheet = load_workbook(exported)["Departments"]
    assert sheet["A1"].value == "Owner/Department"


def test_export_rejects_unknown_kind(invoke):
    result = invoke("export", "owners")

    assert result.exit_code == 2


def test_config_set_and_view():
    result = runner.invoke(
        app,
        ["config", "set", "--weeks-ahead", "10", "--log-level", "info", "--no-show-header"],
    )

    assert result.exit_code == 0, result.output
    stored = safe_load(configuration.APP_CONFIG_PATH.read_text())
    assert stored["weeks_ahead"] == 10
    assert stored["log_level"] == "INFO"
    assert stored["show_header"] is False

    view = runner.invoke(app, ["c", "v"])
    assert view.exit_code == 0
    assert "weeks_ahead" in view.output


def test_config_rejects_unknown_log_level():
    result = runner.invoke(app, ["config", "set", "--log-level", "loud"])

    assert result.exit_code == 1
