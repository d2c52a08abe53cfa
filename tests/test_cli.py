from __future__ import annotations

import csv
import json

from click.testing import CliRunner

from prepay_calc.main import build_inputs_from_options, cli

ANALYZE_ARGS = ["analyze", "-p", "25l", "-r", "8.5", "-t", "20", "-c", "5l"]


def test_analyze_prints_recommendation():
    result = CliRunner().invoke(cli, ANALYZE_ARGS)

    assert result.exit_code == 0, result.output
    assert "Original installment" in result.output
    assert "Recommendation" in result.output


def test_analyze_exports_json(tmp_path):
    path = tmp_path / "analysis.json"
    result = CliRunner().invoke(cli, ANALYZE_ARGS + ["--method", "reduce-installment", "--output", str(path)])

    assert result.exit_code == 0, result.output
    data = json.loads(path.read_text(encoding="utf-8"))
    assert round(data["original_installment"]) == 21696
    assert data["new_tenure_months"] == 240
    assert data["recommendation"] in {"Invest", "Prepay"}
    assert len(data["original_schedule"]) == 240
    assert len(data["yearly_series"]) == 20


def test_analyze_exports_yearly_series_csv(tmp_path):
    path = tmp_path / "series.csv"
    result = CliRunner().invoke(cli, ANALYZE_ARGS + ["--output", str(path)])

    assert result.exit_code == 0, result.output
    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Year", "Investment_Value", "Interest_Original", "Interest_Prepaid"]
    assert len(rows) == 21


def test_analyze_rejects_unknown_output_format(tmp_path):
    result = CliRunner().invoke(cli, ANALYZE_ARGS + ["--output", str(tmp_path / "out.txt")])
    assert result.exit_code != 0


def test_analyze_rejects_bad_amount():
    result = CliRunner().invoke(cli, ["analyze", "-p", "lots", "-r", "8.5", "-t", "20", "-c", "5l"])
    assert result.exit_code != 0
    assert "Invalid numeric value" in result.output


def test_schedule_command_prints_rows():
    result = CliRunner().invoke(cli, ["schedule", "-p", "100000", "-r", "12", "-t", "1"])

    assert result.exit_code == 0, result.output
    assert "Installment" in result.output
    assert "Month\tPayment" in result.output


def test_schedule_command_exports_json(tmp_path):
    path = tmp_path / "schedule.json"
    result = CliRunner().invoke(cli, ["schedule", "-p", "1cr", "-r", "9", "-t", "30", "--output", str(path)])

    assert result.exit_code == 0, result.output
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["summary"]["months"] == 360
    assert data["schedule"][-1]["balance"] == 0


def test_build_inputs_parses_shorthand_and_options():
    inputs = build_inputs_from_options("50l", "9%", 20, "5l", "12", "fd", "new", "30", "0", False, True, "reduce-installment")

    assert inputs.principal == 5000000
    assert inputs.extra_cash == 500000
    assert inputs.investment_type == "fixed_deposit"
    assert inputs.tax_regime == "new"
    assert inputs.self_occupied is False
    assert inputs.joint_loan is True
    assert inputs.prepayment_method == "reduce_installment"


def test_analyze_rejects_signalling_nan():
    result = CliRunner().invoke(cli, ["analyze", "-p", "snan", "-r", "8.5", "-t", "20", "-c", "5l"])
    assert result.exit_code == 2
    assert "Invalid numeric value" in result.output


def test_schedule_command_caps_tenure(tmp_path):
    path = tmp_path / "schedule.json"
    result = CliRunner().invoke(cli, ["schedule", "-p", "10l", "-r", "9", "-t", "1000000000", "--output", str(path)])

    assert result.exit_code == 0, result.output
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["summary"]["months"] == 600


def test_schedule_command_rejects_out_of_range_amount():
    result = CliRunner().invoke(cli, ["schedule", "-p", "1e999999", "-r", "9", "-t", "20"])
    assert result.exit_code == 2
