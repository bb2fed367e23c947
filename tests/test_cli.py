"""Tests for the Typer CLI."""

from __future__ import annotations

import csv
import json

from typer.testing import CliRunner

from pax_presence import __version__
from pax_presence.cli import app

runner = CliRunner()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestSeriesCommand:
    def test_prints_table(self, sample_json_path):
        result = runner.invoke(app, ["series", str(sample_json_path), "LH401"])
        assert result.exit_code == 0
        assert "08:00" in result.output
        assert "11:00" in result.output

    def test_writes_json(self, sample_json_path, tmp_path):
        output = tmp_path / "series.json"
        result = runner.invoke(
            app, ["series", str(sample_json_path), "BA117", "-o", str(output)]
        )
        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data[0]["passenger_count"] == 50
        assert data[-1]["passenger_count"] == 0

    def test_unknown_flight_number(self, sample_json_path):
        result = runner.invoke(app, ["series", str(sample_json_path), "ZZ000"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unrecognized_type_is_notice(self, sample_json_path):
        result = runner.invoke(app, ["series", str(sample_json_path), "XX999"])
        assert result.exit_code == 0
        assert "No presence curve" in result.output

    def test_unrecognized_type_strict(self, sample_json_path):
        result = runner.invoke(app, ["series", str(sample_json_path), "XX999", "--strict"])
        assert result.exit_code == 1
        assert "cargo" in result.output


class TestGridCommand:
    def test_json_default(self, sample_json_path, tmp_path):
        output = tmp_path / "grid.json"
        result = runner.invoke(app, ["grid", str(sample_json_path), "-o", str(output)])
        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert [c["flight_number"] for c in data["columns"]] == ["BA117", "LH401"]
        assert "Peak presence" in result.output

    def test_csv_with_flight_filter(self, sample_csv_path, tmp_path):
        output = tmp_path / "grid.csv"
        result = runner.invoke(
            app,
            [
                "grid", str(sample_csv_path),
                "--flight", "LH401", "--flight", "AF023",
                "-f", "csv", "-o", str(output),
            ],
        )
        assert result.exit_code == 0
        with open(output, newline="") as f:
            header = next(csv.reader(f))
        assert header == ["time", "time_formatted", "LH401", "AF023", "total"]

    def test_markdown(self, sample_json_path, tmp_path):
        output = tmp_path / "grid.md"
        result = runner.invoke(
            app, ["grid", str(sample_json_path), "-f", "markdown", "-o", str(output)]
        )
        assert result.exit_code == 0
        assert "## Timeline" in output.read_text()

    def test_no_usable_flights(self, sample_json_path, tmp_path):
        output = tmp_path / "grid.json"
        result = runner.invoke(
            app, ["grid", str(sample_json_path), "--flight", "XX999", "-o", str(output)]
        )
        assert result.exit_code == 0
        assert "No flights" in result.output
        assert not output.exists()

    def test_strict_fails(self, sample_json_path, tmp_path):
        result = runner.invoke(
            app, ["grid", str(sample_json_path), "--strict", "-o", str(tmp_path / "g.json")]
        )
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["grid", str(tmp_path / "absent.json")])
        assert result.exit_code == 1
        assert "Could not load flights" in result.output


class TestEnvironmentSettings:
    def test_env_strict_applies_to_series(self, sample_json_path, monkeypatch):
        monkeypatch.setenv("PAX_PRESENCE_STRICT_FLIGHT_TYPES", "true")
        result = runner.invoke(app, ["series", str(sample_json_path), "XX999"])
        assert result.exit_code == 1
        assert "cargo" in result.output

    def test_env_strict_applies_to_grid(self, sample_json_path, tmp_path, monkeypatch):
        monkeypatch.setenv("PAX_PRESENCE_STRICT_FLIGHT_TYPES", "true")
        result = runner.invoke(
            app, ["grid", str(sample_json_path), "-o", str(tmp_path / "g.json")]
        )
        assert result.exit_code == 1

    def test_env_buffer_hours(self, sample_json_path, tmp_path, monkeypatch):
        monkeypatch.setenv("PAX_PRESENCE_GRID_BUFFER_HOURS", "0")
        output = tmp_path / "grid.json"
        result = runner.invoke(app, ["grid", str(sample_json_path), "-o", str(output)])
        assert result.exit_code == 0
        assert json.loads(output.read_text())["rows"][-1]["time_formatted"] == "11:30"

    def test_option_beats_env(self, sample_json_path, tmp_path, monkeypatch):
        monkeypatch.setenv("PAX_PRESENCE_GRID_BUFFER_HOURS", "0")
        output = tmp_path / "grid.json"
        result = runner.invoke(
            app,
            ["grid", str(sample_json_path), "--buffer-hours", "1", "-o", str(output)],
        )
        assert result.exit_code == 0
        assert json.loads(output.read_text())["rows"][-1]["time_formatted"] == "12:30"

    def test_env_output_file_and_format(self, sample_json_path, tmp_path, monkeypatch):
        output = tmp_path / "from_env.csv"
        monkeypatch.setenv("PAX_PRESENCE_OUTPUT_FILE", str(output))
        monkeypatch.setenv("PAX_PRESENCE_OUTPUT_FORMAT", "csv")
        result = runner.invoke(app, ["grid", str(sample_json_path)])
        assert result.exit_code == 0
        with open(output, newline="") as f:
            assert next(csv.reader(f))[-1] == "total"
