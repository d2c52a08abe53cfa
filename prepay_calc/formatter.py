"""Output helpers for the prepay-or-invest calculator.

This module provides simple functions to render the decision, amortization
schedules and the yearly chart series in a tabular text format. We rely only
on built-in printing and string formatting.
"""

from __future__ import annotations

from typing import Iterable

from .data_models import (
    STATUS_NEVER_AMORTIZES,
    STATUS_RETIRED,
    AmortizationRow,
    ComparisonResult,
    YearPoint,
)


def print_summary(result: ComparisonResult) -> None:
    """Print the loan side of the analysis in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Original installment : {result.original_installment:.2f}")
    print(f"Original tenure      : {result.original_tenure_months} months")
    print(f"Total interest       : {result.total_interest_original:.2f}")
    if result.prepaid_status == STATUS_RETIRED:
        print("After prepayment     : loan fully repaid by the lump sum")
    elif result.prepaid_status == STATUS_NEVER_AMORTIZES:
        print("After prepayment     : installment never repays the loan")
    else:
        print(f"New installment      : {result.new_installment:.2f}")
        print(
            f"New tenure           : {result.new_tenure_months} months"
            f" ({result.new_tenure_months / 12:.1f} yrs)"
        )
        print(f"Interest after prepay: {result.total_interest_prepaid:.2f}")
    if result.months_saved:
        print(f"Term reduction       : {int(result.months_saved)} months")
    print(f"Effective loan rate  : {result.effective_loan_rate:.2f}%")
    print("-" * 72)


def print_comparison(result: ComparisonResult) -> None:
    """Print both strategies side by side and the recommendation."""
    print("Comparison")
    print("=" * 72)
    print(f"{'Metric':24s} {'Invest':>15s} {'Prepay':>15s}")
    print(
        f"{'Investment gain (net)':24s} {result.investment.post_tax_gain:15.2f} {'':>15s}"
    )
    print(f"{'Interest saved':24s} {'':>15s} {result.interest_saved:15.2f}")
    print(
        f"{'Tax benefit':24s} {result.original_tax_benefit:15.2f}"
        f" {result.prepaid_tax_benefit:15.2f}"
    )
    print(
        f"{'Net benefit':24s} {result.net_benefit_investing:15.2f}"
        f" {result.net_benefit_prepaying:15.2f}"
    )
    print("=" * 72)
    print(f"Investment tax       : {result.investment.tax:.2f}")
    print(f"Recommendation       : {result.recommendation}")


def print_schedule(schedule: Iterable[AmortizationRow]) -> None:
    """Print an amortization schedule as a simple table."""
    headers = ["Month", "Payment", "Principal", "Interest", "EndBal"]
    print("\t".join(headers))
    for row in schedule:
        print(
            "\t".join(
                [
                    str(row.month),
                    f"{row.payment:.2f}",
                    f"{row.principal:.2f}",
                    f"{row.interest:.2f}",
                    f"{row.ending_balance:.2f}",
                ]
            )
        )


def print_yearly_series(series: Iterable[YearPoint]) -> None:
    print("\t".join(["Year", "Investment", "Interest(Orig)", "Interest(Prepaid)"]))
    for point in series:
        print(
            f"{point.year}\t{point.investment_value:.0f}"
            f"\t{point.interest_original:.0f}\t{point.interest_prepaid:.0f}"
        )
