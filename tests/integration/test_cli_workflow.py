"""Integration tests for end-to-end CLI workflows.

Tests the full quoting pipeline: cylinders → quote → report → project.
"""

import json
import os
import tempfile

import pytest
from click.testing import CliRunner

from hydrolift.cli.main import cli

SCENARIO_A = [
    "--capacity", "1000",
    "--carcass-weight", "800",
    "--travel", "3000",
    "--speed", "0.5",
    "--suspension", "2:1",
    "--cylinders", "2",
    "--buffer", "300",
]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield d


def _quote(runner, out, *extra):
    return runner.invoke(cli, ["quote", *SCENARIO_A, "--cylinder", "90x10", "-o", out, *extra])


class TestCylinders:
    def test_lists_suitable(self, runner):
        result = runner.invoke(cli, ["cylinders", *SCENARIO_A])
        assert result.exit_code == 0, result.output
        assert "90x10" in result.output

    def test_no_fit_message(self, runner):
        result = runner.invoke(cli, [
            "cylinders", "--capacity", "20000", "--carcass-weight", "15000",
            "--travel", "3000", "--speed", "0.5", "--cylinders", "1",
        ])
        assert result.exit_code == 0, result.output
        assert "No suitable cylinder" in result.output

    def test_nan_rejected(self, runner):
        result = runner.invoke(cli, [
            "cylinders", "--capacity", "nan", "--carcass-weight", "800",
            "--travel", "3000", "--speed", "0.5",
        ])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_negative_speed_rejected(self, runner):
        result = runner.invoke(cli, [
            "cylinders", "--capacity", "1000", "--carcass-weight", "800",
            "--travel", "3000", "--speed", "-0.5",
        ])
        assert result.exit_code == 1

    def test_pressure_unit(self, runner):
        result = runner.invoke(cli, ["--pressure-unit", "psi", "cylinders", *SCENARIO_A])
        assert result.exit_code == 0, result.output
        assert "[psi]" in result.output
        assert "[kg]" in result.output

    def test_bad_pressure_unit(self, runner):
        result = runner.invoke(cli, ["--pressure-unit", "kg", "cylinders", *SCENARIO_A])
        assert result.exit_code != 0


class TestQuote:
    def test_quote_saves_json(self, runner, tmp_dir):
        out = os.path.join(tmp_dir, "quote.json")
        result = _quote(runner, out, "--customer", "ACME")
        assert result.exit_code == 0, result.output
        assert os.path.exists(out)

        with open(out) as f:
            data = json.load(f)
        assert data["meta"]["customer"] == "ACME"
        assert data["selection"]["pump"] == "kp210"
        assert data["selection"]["motor"] == "m14.7"
        assert data["selection"]["rupture_valve"] == "r10_100_dk"
        assert data["selection"]["power_unit"] == "gu60"
        assert data["cost"]["total"] == pytest.approx(
            sum(v for k, v in data["cost"].items() if k != "total")
        )
        assert data["thermal"]["needs_cooling"] is False

    def test_default_cylinder_is_smallest_suitable(self, runner, tmp_dir):
        out = os.path.join(tmp_dir, "quote.json")
        result = runner.invoke(cli, ["quote", *SCENARIO_A, "-o", out])
        assert result.exit_code == 0, result.output
        with open(out) as f:
            data = json.load(f)
        assert data["cylinder"]["valid"] is True

    def test_overrides(self, runner, tmp_dir):
        out = os.path.join(tmp_dir, "quote.json")
        result = _quote(
            runner, out,
            "--motor", "m18.4", "--rupture-valve", "none",
            "--with", "oil_cooler", "--without", "hand_pump",
        )
        assert result.exit_code == 0, result.output
        with open(out) as f:
            data = json.load(f)
        assert data["selection"]["motor"] == "m18.4"
        assert data["selection"]["rupture_valve"] is None
        assert data["cost"]["rupture_valve"] == 0.0
        assert "oil_cooler" in data["selection"]["accessories"]
        assert "hand_pump" not in data["selection"]["accessories"]

    def test_undersized_motor_warned(self, runner, tmp_dir):
        result = _quote(runner, os.path.join(tmp_dir, "quote.json"), "--motor", "m4.4")
        assert result.exit_code == 0, result.output
        assert "motor m4.4 is below the required" in result.output

    def test_recommended_motor_not_warned(self, runner, tmp_dir):
        result = _quote(runner, os.path.join(tmp_dir, "quote.json"))
        assert result.exit_code == 0, result.output
        assert "below the required" not in result.output

    def test_single_rupture_valve_on_two_cylinders_warned(self, runner, tmp_dir):
        result = _quote(runner, os.path.join(tmp_dir, "quote.json"), "--rupture-valve", "r10_100")
        assert result.exit_code == 0, result.output
        assert "rupture valve r10_100 is not offered" in result.output

    def test_invalid_cylinder_rejected(self, runner, tmp_dir):
        out = os.path.join(tmp_dir, "quote.json")
        result = runner.invoke(cli, ["quote", *SCENARIO_A, "--cylinder", "60x5", "-o", out])
        assert result.exit_code == 1
        assert not os.path.exists(out)

    def test_unknown_cylinder_rejected(self, runner):
        result = runner.invoke(cli, ["quote", *SCENARIO_A, "--cylinder", "999x9"])
        assert result.exit_code == 1


class TestThermal:
    def test_thermal(self, runner):
        result = runner.invoke(cli, [
            "thermal", "--motor-power", "14.7", "--travel", "3000", "--speed", "0.5",
            "--oil-volume", "52", "--building-type", "2",
        ])
        assert result.exit_code == 0, result.output
        assert "Natural cooling" in result.output

    def test_cooler_recommended(self, runner):
        result = runner.invoke(cli, [
            "thermal", "--motor-power", "36.8", "--travel", "20000", "--speed", "0.3",
            "--oil-volume", "30", "--trips", "60",
        ])
        assert result.exit_code == 0, result.output
        assert "cooler recommended" in result.output


class TestReport:
    def test_text_and_html(self, runner, tmp_dir):
        quote_file = os.path.join(tmp_dir, "quote.json")
        assert _quote(runner, quote_file).exit_code == 0

        out = os.path.join(tmp_dir, "report.txt")
        result = runner.invoke(cli, ["report", "--quote", quote_file, "--format", "both", "-o", out])
        assert result.exit_code == 0, result.output
        assert os.path.exists(os.path.join(tmp_dir, "report.txt"))
        assert os.path.exists(os.path.join(tmp_dir, "report.html"))


class TestCatalog:
    @pytest.mark.parametrize(
        "section",
        ["cylinders", "pumps", "motors", "power-units", "valves", "hoses", "accessories"],
    )
    def test_sections(self, runner, section):
        result = runner.invoke(cli, ["catalog", section])
        assert result.exit_code == 0, result.output

    def test_lowercase_units_in_headers(self, runner):
        result = runner.invoke(cli, ["catalog", "motors"])
        assert result.exit_code == 0, result.output
        assert "[kW]" in result.output


class TestProjectWorkflow:
    def test_save_update_produce(self, runner, tmp_dir):
        store = os.path.join(tmp_dir, "projects.json")
        first = os.path.join(tmp_dir, "q1.json")
        second = os.path.join(tmp_dir, "q2.json")
        assert _quote(runner, first, "--customer", "ACME").exit_code == 0
        assert _quote(runner, second, "--customer", "ACME", "--motor", "m18.4").exit_code == 0

        result = runner.invoke(cli, ["project", "--store", store, "--user", "ayse", "save", first])
        assert result.exit_code == 0, result.output
        with open(store) as f:
            number = json.load(f)["projects"][0]["number"]

        result = runner.invoke(cli, ["project", "--store", store, "update", number, second])
        assert result.exit_code == 0, result.output
        with open(store) as f:
            project = json.load(f)["projects"][0]
        assert project["revisions"][0]["changes"] == ["Motor: m14.7 → m18.4"]

        result = runner.invoke(cli, ["project", "--store", store, "produce", number])
        assert result.exit_code == 0, result.output
        with open(store) as f:
            data = json.load(f)
        assert data["projects"][0]["status"] == "production"
        assert [e["action"] for e in data["log"]] == ["save", "update", "production"]
        assert data["log"][0]["user"] == "ayse"

        for command in (["list"], ["show", number], ["log"]):
            result = runner.invoke(cli, ["project", "--store", store, *command])
            assert result.exit_code == 0, result.output

    def test_save_requires_customer(self, runner, tmp_dir):
        store = os.path.join(tmp_dir, "projects.json")
        quote_file = os.path.join(tmp_dir, "q.json")
        assert _quote(runner, quote_file).exit_code == 0
        result = runner.invoke(cli, ["project", "--store", store, "save", quote_file])
        assert result.exit_code == 1

    def test_delete(self, runner, tmp_dir):
        store = os.path.join(tmp_dir, "projects.json")
        quote_file = os.path.join(tmp_dir, "q.json")
        assert _quote(runner, quote_file).exit_code == 0
        runner.invoke(cli, ["project", "--store", store, "save", quote_file, "--customer", "X"])
        with open(store) as f:
            number = json.load(f)["projects"][0]["number"]

        result = runner.invoke(cli, ["project", "--store", store, "delete", number, "--yes"])
        assert result.exit_code == 0, result.output
        with open(store) as f:
            assert json.load(f)["projects"] == []

    def test_missing_project(self, runner, tmp_dir):
        store = os.path.join(tmp_dir, "projects.json")
        result = runner.invoke(cli, ["project", "--store", store, "show", "2000-0101"])
        assert result.exit_code == 1
        assert "not found" in result.output
