"""Command-line interface for the prepay-or-invest calculator.

This module uses the ``click`` library to implement a multi-command interface.
Users can analyse whether a lump sum should prepay a home loan or be
invested, or print the amortization schedule of a plain loan. Results can be
printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from .analysis import (
    bounded_amount,
    bounded_rate,
    bounded_tenure_years,
    normalize_inputs,
    recompute,
)
from .data_models import (
    EQUITY,
    OLD_REGIME,
    REDUCE_TENURE,
    AmortizationRow,
    ComparisonResult,
    ScenarioInputs,
    serialize_schedule,
)
from .engine import build_schedule, calculate_installment, total_interest
from .formatter import print_comparison, print_schedule, print_summary, print_yearly_series
from .utils import parse_amount, parse_percent

# Rows printed to the terminal before the schedule is truncated
MAX_ROWS = 120


def build_inputs_from_options(
    principal: Any,
    rate: Any,
    tenure: Any,
    extra_cash: Any,
    investment_return: Any,
    investment_type: str = EQUITY,
    regime: str = OLD_REGIME,
    slab: Any = "30",
    used_80c: Any = "150000",
    self_occupied: bool = True,
    joint_loan: bool = False,
    method: str = REDUCE_TENURE,
) -> ScenarioInputs:
    """Parse raw option values into normalized ``ScenarioInputs``.

    Amounts accept ``k``/``l``/``m``/``cr`` suffixes and percentages an
    optional ``%`` sign. Raises ``click.BadParameter`` for values that cannot
    be interpreted.
    """
    try:
        inputs = ScenarioInputs(
            principal=parse_amount(principal),
            annual_rate=parse_percent(rate),
            tenure_years=tenure,
            extra_cash=parse_amount(extra_cash),
            investment_return=parse_percent(investment_return),
            investment_type=investment_type,
            tax_regime=regime,
            tax_slab=parse_percent(slab),
            used_80c=parse_amount(used_80c),
            self_occupied=self_occupied,
            joint_loan=joint_loan,
            prepayment_method=method,
        )
        return normalize_inputs(inputs)
    except ValueError as exc:
        # ConfigurationError is a ValueError too
        raise click.BadParameter(str(exc))


def export_result_to_json(path: Path, result: ComparisonResult) -> None:
    """Export the full analysis to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2)


def export_series_to_csv(path: Path, result: ComparisonResult) -> None:
    """Export the yearly chart series to a CSV file."""
    header = ["Year", "Investment_Value", "Interest_Original", "Interest_Prepaid"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for point in result.yearly_series:
            writer.writerow(
                [
                    point.year,
                    float(point.investment_value),
                    float(point.interest_original),
                    float(point.interest_prepaid),
                ]
            )


def export_schedule_to_csv(path: Path, schedule: List[AmortizationRow]) -> None:
    """Export a schedule to a CSV file."""
    header = ["Month", "Payment", "Principal", "Interest", "Ending_Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in schedule:
            writer.writerow(
                [
                    row.month,
                    float(row.payment),
                    float(row.principal),
                    float(row.interest),
                    float(row.ending_balance),
                ]
            )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Decide whether to prepay a home loan or invest the extra cash."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Outstanding loan amount (e.g. 50l, 2.5m)")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--tenure", "-t", "tenure", required=True, type=int, help="Remaining tenure in years")
@click.option("--extra-cash", "-c", "extra_cash", required=True, help="Lump sum available")
@click.option("--return", "investment_return", default="12", show_default=True, help="Expected annual investment return (percent)")
@click.option(
    "--investment-type",
    "investment_type",
    type=click.Choice(["equity", "fd"]),
    default="equity",
    show_default=True,
    help="Tax treatment of the investment gain",
)
@click.option("--regime", "regime", type=click.Choice(["old", "new"]), default="old", show_default=True, help="Income tax regime")
@click.option("--slab", "slab", default="30", show_default=True, help="Marginal tax slab (percent)")
@click.option("--used-80c", "used_80c", default="150000", show_default=True, help="80C allowance already used elsewhere")
@click.option("--let-out", "let_out", is_flag=True, help="Property is let out rather than self-occupied")
@click.option("--joint", "joint", is_flag=True, help="Loan is held jointly")
@click.option(
    "--method",
    "method",
    type=click.Choice(["reduce-tenure", "reduce-installment"]),
    default="reduce-tenure",
    show_default=True,
    help="How the prepayment is applied",
)
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def analyze(
    principal: str,
    rate: str,
    tenure: int,
    extra_cash: str,
    investment_return: str,
    investment_type: str,
    regime: str,
    slab: str,
    used_80c: str,
    let_out: bool,
    joint: bool,
    method: str,
    output: Optional[str],
) -> None:
    """Compare prepaying the loan with investing the lump sum."""
    inputs = build_inputs_from_options(
        principal,
        rate,
        tenure,
        extra_cash,
        investment_return,
        investment_type,
        regime,
        slab,
        used_80c,
        not let_out,
        joint,
        method,
    )
    result = recompute(inputs)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_result_to_json(path, result)
        elif path.suffix.lower() == ".csv":
            export_series_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Analysis exported to {path}")
    else:
        print_summary(result)
        print_comparison(result)
        print_yearly_series(result.yearly_series)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--tenure", "-t", "tenure", required=True, type=int, help="Tenure in years")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(principal: str, rate: str, tenure: int, output: Optional[str]) -> None:
    """Compute and print the amortization schedule of a plain loan."""
    try:
        principal_value = bounded_amount("principal", parse_amount(principal))
        rate_value = bounded_rate("annual_rate", parse_percent(rate))
        months = bounded_tenure_years(tenure) * 12
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    installment = calculate_installment(principal_value, rate_value, months)
    rows = build_schedule(principal_value, rate_value, months, installment)
    summary: Dict[str, Any] = {
        "installment": float(installment),
        "months": len(rows),
        "total_interest": float(total_interest(rows)),
    }
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            with path.open("w", encoding="utf-8") as f:
                json.dump({"summary": summary, "schedule": serialize_schedule(rows)}, f, indent=2)
        elif path.suffix.lower() == ".csv":
            export_schedule_to_csv(path, rows)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
        return

    click.echo(f"Installment    : {summary['installment']:.2f}")
    click.echo(f"Total interest : {summary['total_interest']:.2f}")
    if len(rows) > MAX_ROWS:
        click.echo(f"Schedule has {len(rows)} rows; showing first {MAX_ROWS} rows.")
        print_schedule(rows[:MAX_ROWS])
    else:
        print_schedule(rows)


if __name__ == "__main__":
    cli()
