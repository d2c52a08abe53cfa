"""Home loan tax deductions.

Two deductions are modelled:

* Section 24(b): interest paid on a home loan, capped per year. The cap is
  doubled for a jointly held loan (each borrower claims separately). Interest
  on a let-out property is not capped by 24(b) itself, but the loss that can
  be set off against other income is limited to the same amount, so both
  cases share one ceiling.
* Section 80C: principal repaid, capped per year by whatever part of the 80C
  allowance is not already used by other investments.

Caps apply to each loan year independently; unused headroom never carries
over to the next year. Under the new tax regime no deduction is available.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence

from .data_models import NEW_REGIME, AmortizationRow, AnnualAggregate, ScenarioInputs

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class TaxRules:
    """Statutory limits used by the calculator.

    Attributes
    ----------
    interest_limit: Decimal
        Section 24(b) ceiling on yearly interest deductions.
    principal_limit: Decimal
        Section 80C ceiling on yearly principal deductions.
    ltcg_rate: Decimal
        Flat tax rate on equity long-term capital gains (fraction).
    ltcg_exemption: Decimal
        Equity gains below this amount are not taxed.
    """

    interest_limit: Decimal = Decimal("200000")
    principal_limit: Decimal = Decimal("150000")
    ltcg_rate: Decimal = Decimal("0.10")
    ltcg_exemption: Decimal = Decimal("100000")


DEFAULT_TAX_RULES = TaxRules()


def accrue_annual(schedule: Sequence[AmortizationRow]) -> List[AnnualAggregate]:
    """Group monthly rows into 12-month loan years.

    A trailing partial year is kept when the schedule length is not a
    multiple of twelve.
    """
    aggregates: List[AnnualAggregate] = []
    for index, row in enumerate(schedule):
        year = index // 12 + 1
        if len(aggregates) < year:
            aggregates.append(AnnualAggregate(year=year, interest=ZERO, principal=ZERO))
        aggregates[-1].interest += row.interest
        aggregates[-1].principal += row.principal
    return aggregates


def apply_deduction_caps(
    aggregates: Iterable[AnnualAggregate],
    interest_cap: Decimal,
    principal_cap: Decimal,
    slab_fraction: Decimal,
) -> Decimal:
    """Return the total tax saved across all years.

    For every year the interest deduction is ``min(interest, interest_cap)``
    and the principal deduction ``min(principal, principal_cap)``; their sum
    is multiplied by the marginal slab.
    """
    benefit = ZERO
    for year in aggregates:
        interest_deduction = min(year.interest, interest_cap)
        principal_deduction = min(year.principal, principal_cap)
        benefit += (interest_deduction + principal_deduction) * slab_fraction
    return benefit


def interest_cap_for(rules: TaxRules, joint_loan: bool) -> Decimal:
    """Yearly ceiling on the interest deduction.

    Self-occupied and let-out properties share the same ceiling (for a let-out
    property it is the limit on setting off the house property loss). A joint
    loan doubles it.
    """
    cap = rules.interest_limit
    if joint_loan:
        cap *= 2
    return cap


def remaining_principal_allowance(rules: TaxRules, used_80c: Decimal) -> Decimal:
    """Part of the 80C allowance still available for principal repayments."""
    return max(ZERO, rules.principal_limit - used_80c)


def tax_benefit(
    schedule: Sequence[AmortizationRow],
    inputs: ScenarioInputs,
    rules: TaxRules = DEFAULT_TAX_RULES,
) -> Decimal:
    """Total tax saved by the deductions on one loan schedule.

    Used for both the original and the prepaid loan. Always zero under the
    new tax regime.
    """
    if inputs.tax_regime == NEW_REGIME or not schedule:
        return ZERO
    aggregates = accrue_annual(schedule)
    benefit = apply_deduction_caps(
        aggregates,
        interest_cap_for(rules, inputs.joint_loan),
        remaining_principal_allowance(rules, inputs.used_80c),
        inputs.slab_fraction,
    )
    logger.debug("Tax benefit over %d loan years: %s", len(aggregates), benefit)
    return benefit
