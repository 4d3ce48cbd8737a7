from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from cli.app import app


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def test_average_command(runner: CliRunner, sample_file) -> None:
    result = runner.invoke(app, ["--data", str(sample_file), "average", "2000-01-01", "2000-01-03"])

    assert result.exit_code == 0
    assert "2000-01-01 average temperature: 0.42 degrees Celsius" in result.stdout
    assert "2000-01-03 average temperature: 2.78 degrees Celsius" in result.stdout


def test_missing_command_orders_lines(runner: CliRunner, sample_file) -> None:
    result = runner.invoke(app, ["-d", str(sample_file), "missing", "2000-01-01", "2000-01-03"])

    assert result.exit_code == 0
    output = result.stdout
    assert (
        output.index("2000-01-02 missing 1 values")
        < output.index("2000-01-03 missing 1 values")
        < output.index("2000-01-01 missing 0 values")
    )


def test_approved_command(runner: CliRunner, sample_file) -> None:
    result = runner.invoke(app, ["-d", str(sample_file), "approved", "2000-01-01", "2000-01-03"])

    assert result.exit_code == 0
    assert "Approved values between 2000-01-01 and 2000-01-03: 32.86 %" in result.stdout


def test_query_json_output(runner: CliRunner, sample_file) -> None:
    result = runner.invoke(
        app,
        ["--log-level", "ERROR", "-d", str(sample_file), "average", "2000-01-02", "2000-01-02", "--json"],
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload == {
        "query": "average",
        "date_from": "2000-01-02",
        "date_to": "2000-01-02",
        "lines": ["2000-01-02 average temperature: 2.26 degrees Celsius"],
    }


def test_data_path_from_environment(monkeypatch, runner: CliRunner, sample_file) -> None:
    monkeypatch.setenv("WEATHER_DATA_PATH", str(sample_file))

    result = runner.invoke(app, ["summary"])

    assert result.exit_code == 0
    assert "Record Store" in result.stdout
    assert "reading_count: 70" in result.stdout
    assert "date_count: 3" in result.stdout
    assert "first_date: 2000-01-01" in result.stdout


def test_summary_json(runner: CliRunner, sample_file) -> None:
    result = runner.invoke(app, ["--log-level", "ERROR", "-d", str(sample_file), "summary", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["reading_count"] == 70
    assert payload["last_date"] == "2000-01-03"


def test_missing_data_path_is_usage_error(runner: CliRunner) -> None:
    result = runner.invoke(app, ["average", "2000-01-01", "2000-01-03"])

    assert result.exit_code == 2
    assert "WEATHER_DATA_PATH" in result.output


def test_invalid_date_argument(runner: CliRunner, sample_file) -> None:
    result = runner.invoke(app, ["-d", str(sample_file), "average", "01/01/2000", "2000-01-03"])

    assert result.exit_code == 2


def test_parse_failure_exits_with_error(runner: CliRunner, tmp_path) -> None:
    path = tmp_path / "broken.csv"
    path.write_text("2000-01-01;00:00:00;1.0;G\n2000-01-01;00:00:00\n", encoding="utf-8")

    result = runner.invoke(app, ["-d", str(path), "approved", "2000-01-01", "2000-01-01"])

    assert result.exit_code == 1
    assert "line 2" in result.output
    assert "Approved values" not in result.output


def test_undecodable_file_exits_with_error(runner: CliRunner, tmp_path) -> None:
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"2000-01-01;00:00:00;1.0;G\n2000-01-01;01:00:00;2.0;\xff\n")

    result = runner.invoke(app, ["-d", str(path), "approved", "2000-01-01", "2000-01-01"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert "line 2: undecodable bytes" in result.output
    assert "Approved values" not in result.output
