"""Core amortization engine for the prepay-or-invest calculator.

This module implements the loan mechanics: the equated monthly installment
(EMI), month-by-month amortization schedules and the closed-form tenure
solver used when a prepayment keeps the installment and shortens the loan.
Degenerate inputs (non-positive principal, rate or term) yield zero
installments and empty schedules rather than errors.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_CEILING, Decimal, getcontext
from typing import Iterable, List, Union

from .data_models import AmortizationRow

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Balances below half a cent are treated as fully repaid
RESIDUAL_TOLERANCE = Decimal("0.005")

# Returned by ``solve_months`` when the installment cannot cover the interest
NEVER_AMORTIZES = math.inf

TENURE_PRECISION = Decimal("1e-9")


def monthly_rate(annual_rate: Decimal) -> Decimal:
    """Convert an annual percentage rate into a monthly decimal rate."""
    return (Decimal(annual_rate) / Decimal(100)) / Decimal(12)


def calculate_installment(principal: Decimal, annual_rate: Decimal, months: int) -> Decimal:
    """Return the equated monthly installment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. Returns zero when any of the inputs is
    not positive.
    """
    if principal <= 0 or annual_rate <= 0 or months <= 0:
        return ZERO
    rate = monthly_rate(annual_rate)
    factor = (1 + rate) ** int(months)
    return principal * (rate * factor) / (factor - 1)


def build_schedule(
    principal: Decimal, annual_rate: Decimal, months: int, installment: Decimal
) -> List[AmortizationRow]:
    """Build the month-by-month amortization schedule.

    Parameters
    ----------
    principal: Decimal
        Opening balance of the loan.
    annual_rate: Decimal
        Annual nominal interest rate in percent.
    months: int
        Upper bound on the number of rows produced.
    installment: Decimal
        Fixed monthly payment.

    Returns
    -------
    List[AmortizationRow]
        One row per month. The schedule stops as soon as the balance reaches
        zero, so it can be shorter than ``months``. When the installment does
        not even cover the interest the balance stays flat and the schedule
        runs for exactly ``months`` rows.
    """
    if principal <= 0 or installment <= 0 or months <= 0:
        return []

    rate = monthly_rate(annual_rate)
    balance = Decimal(principal)
    schedule: List[AmortizationRow] = []

    for month in range(1, int(months) + 1):
        interest = balance * rate
        principal_part = installment - interest
        if principal_part < 0:
            principal_part = ZERO
        if principal_part > balance:
            # last payment only needs to clear what is left
            principal_part = balance
        balance -= principal_part

        # Round very small residuals down to zero to prevent phantom extra periods.
        if balance < RESIDUAL_TOLERANCE:
            principal_part += balance
            balance = ZERO

        schedule.append(
            AmortizationRow(
                month=month,
                interest=interest,
                principal=principal_part,
                payment=interest + principal_part,
                ending_balance=balance,
            )
        )
        if balance == 0:
            break

    logger.debug(
        "Built schedule for %s at %s%% with %d of %d months, final balance %s",
        principal,
        annual_rate,
        len(schedule),
        months,
        balance,
    )
    return schedule


def total_interest(schedule: Iterable[AmortizationRow]) -> Decimal:
    """Sum the interest paid over a schedule."""
    return sum((row.interest for row in schedule), ZERO)


def covers_interest(principal: Decimal, installment: Decimal, annual_rate: Decimal) -> bool:
    """Whether ``installment`` is larger than the first month's interest on ``principal``."""
    return installment > principal * monthly_rate(annual_rate)


def solve_months(
    reduced_principal: Decimal, installment: Decimal, annual_rate: Decimal
) -> Union[int, float]:
    """Return the number of months needed to repay a loan with a fixed installment.

    Closed form:

        n = ceil( -ln(1 - P * i / I) / ln(1 + i) )

    Returns ``0`` for non-positive inputs and ``NEVER_AMORTIZES`` when the
    installment ``I`` is not larger than the monthly interest ``P * i``, in
    which case the loan would never be repaid.
    """
    if reduced_principal <= 0 or installment <= 0 or annual_rate <= 0:
        return 0
    if not covers_interest(reduced_principal, installment, annual_rate):
        return NEVER_AMORTIZES
    rate = monthly_rate(annual_rate)
    numerator = (1 - (reduced_principal * rate) / installment).ln()
    denominator = (1 + rate).ln()
    # drop rounding noise so an exact term does not round up to the next month
    months = (-numerator / denominator).quantize(TENURE_PRECISION)
    return int(months.to_integral_value(rounding=ROUND_CEILING))
