"""Prepay-or-invest decision for a single scenario.

``recompute`` is the entry point: it normalizes the inputs, builds the
original and the prepaid loan schedules, accrues the tax benefit of each,
projects the invested lump sum and compares the two net benefits. Every call
is a pure function of its inputs, so the presentation layer simply calls it
again whenever an input changes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from decimal import Decimal
from typing import Any, List, Sequence, Tuple

from .data_models import (
    EQUITY,
    FIXED_DEPOSIT,
    INVEST,
    NEW_REGIME,
    OLD_REGIME,
    PREPAY,
    REDUCE_INSTALLMENT,
    REDUCE_TENURE,
    STATUS_ACTIVE,
    STATUS_NEVER_AMORTIZES,
    STATUS_RETIRED,
    AmortizationRow,
    ComparisonResult,
    ScenarioInputs,
    YearPoint,
)
from .engine import (
    NEVER_AMORTIZES,
    build_schedule,
    calculate_installment,
    covers_interest,
    solve_months,
    total_interest,
)
from .errors import ConfigurationError
from .investment import project_investment, value_at_year
from .tax import DEFAULT_TAX_RULES, TaxRules, tax_benefit
from .utils import clamp, decimal_from_str

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Upper bounds keep every run to a few hundred months of finite Decimal arithmetic
MAX_TENURE_YEARS = 50
MAX_RATE_PERCENT = HUNDRED
MAX_AMOUNT = Decimal("1e15")

INVESTMENT_TYPE_ALIASES = {
    "equity": EQUITY,
    "fd": FIXED_DEPOSIT,
    "fixeddeposit": FIXED_DEPOSIT,
    "fixed_deposit": FIXED_DEPOSIT,
}

TAX_REGIME_ALIASES = {
    "old": OLD_REGIME,
    "new": NEW_REGIME,
}

PREPAYMENT_METHOD_ALIASES = {
    "reducetenure": REDUCE_TENURE,
    "reduce_tenure": REDUCE_TENURE,
    "tenure": REDUCE_TENURE,
    "reduceemi": REDUCE_INSTALLMENT,
    "reduceinstallment": REDUCE_INSTALLMENT,
    "reduce_installment": REDUCE_INSTALLMENT,
    "installment": REDUCE_INSTALLMENT,
    "emi": REDUCE_INSTALLMENT,
}


def _number(name: str, value: Any) -> Decimal:
    try:
        number = decimal_from_str(value)
    except ValueError as exc:
        raise ConfigurationError(name, str(exc)) from exc
    return number


def bounded_amount(name: str, value: Any) -> Decimal:
    """Non-negative amount; raises ``ConfigurationError`` above ``MAX_AMOUNT``."""
    amount = clamp(_number(name, value), ZERO)
    if amount > MAX_AMOUNT:
        raise ConfigurationError(name, f"must not exceed {MAX_AMOUNT:,.0f}, got {value}")
    return amount


def bounded_rate(name: str, value: Any) -> Decimal:
    return clamp(_number(name, value), ZERO, MAX_RATE_PERCENT)


def bounded_tenure_years(value: Any) -> int:
    """Tenure in whole years, kept within 1 to ``MAX_TENURE_YEARS``."""
    tenure = clamp(_number("tenure_years", value), Decimal(1), Decimal(MAX_TENURE_YEARS))
    return int(tenure)


def _option(name: str, value: Any, aliases: dict) -> str:
    key = str(value).strip().lower().replace("-", "_")
    if key not in aliases:
        key = key.replace("_", "")
    if key not in aliases:
        raise ConfigurationError(name, f"unsupported value {value!r}")
    return aliases[key]


def normalize_inputs(inputs: ScenarioInputs) -> ScenarioInputs:
    """Coerce raw inputs into the ranges the engine expects.

    Amounts and rates below zero become zero, rates and the tax slab are
    kept within 0-100 % and the tenure within 1 to ``MAX_TENURE_YEARS``
    whole years. Amounts above ``MAX_AMOUNT`` are rejected. Option strings accept
    the camelCase spellings used by the web form. Raises
    ``ConfigurationError`` for values that cannot be interpreted at all.
    """
    return replace(
        inputs,
        principal=bounded_amount("principal", inputs.principal),
        annual_rate=bounded_rate("annual_rate", inputs.annual_rate),
        tenure_years=bounded_tenure_years(inputs.tenure_years),
        extra_cash=bounded_amount("extra_cash", inputs.extra_cash),
        investment_return=bounded_rate("investment_return", inputs.investment_return),
        investment_type=_option("investment_type", inputs.investment_type, INVESTMENT_TYPE_ALIASES),
        tax_regime=_option("tax_regime", inputs.tax_regime, TAX_REGIME_ALIASES),
        tax_slab=clamp(_number("tax_slab", inputs.tax_slab), ZERO, HUNDRED),
        used_80c=bounded_amount("used_80c", inputs.used_80c),
        self_occupied=bool(inputs.self_occupied),
        joint_loan=bool(inputs.joint_loan),
        prepayment_method=_option(
            "prepayment_method", inputs.prepayment_method, PREPAYMENT_METHOD_ALIASES
        ),
    )


def compare(
    post_tax_gain: Decimal,
    original_tax_benefit: Decimal,
    interest_saved: Decimal,
    prepaid_tax_benefit: Decimal,
) -> Tuple[Decimal, Decimal, str]:
    """Return ``(net_benefit_investing, net_benefit_prepaying, recommendation)``.

    Investing is recommended only when it is strictly better; a tie goes to
    prepaying.
    """
    net_investing = post_tax_gain + original_tax_benefit
    net_prepaying = interest_saved + prepaid_tax_benefit
    recommendation = INVEST if net_investing > net_prepaying else PREPAY
    return net_investing, net_prepaying, recommendation


def _cumulative_interest(schedule: Sequence[AmortizationRow], months: int) -> Decimal:
    return total_interest(schedule[:months])


def build_yearly_series(
    original: Sequence[AmortizationRow],
    prepaid: Sequence[AmortizationRow],
    extra_cash: Decimal,
    investment_return: Decimal,
) -> List[YearPoint]:
    """Chart data at every whole-year boundary of the longer schedule."""
    max_years = math.ceil(max(len(original), len(prepaid)) / 12)
    series: List[YearPoint] = []
    for year in range(1, max_years + 1):
        series.append(
            YearPoint(
                year=year,
                investment_value=value_at_year(extra_cash, investment_return, year),
                interest_original=_cumulative_interest(original, year * 12),
                interest_prepaid=_cumulative_interest(prepaid, year * 12),
            )
        )
    return series


def recompute(inputs: ScenarioInputs, rules: TaxRules = DEFAULT_TAX_RULES) -> ComparisonResult:
    """Run the full prepay-or-invest analysis for one scenario.

    Parameters
    ----------
    inputs: ScenarioInputs
        Raw scenario inputs; they are normalized first.
    rules: TaxRules
        Statutory limits used for deductions and equity gains.

    Returns
    -------
    ComparisonResult
        Installments, tenures, interest totals, tax benefits, the investment
        outcome, both net benefits, the recommendation, both schedules and the
        yearly chart series.
    """
    inputs = normalize_inputs(inputs)
    months = inputs.tenure_months

    # Scenario 1: keep the loan and invest the cash
    original_installment = calculate_installment(inputs.principal, inputs.annual_rate, months)
    original_schedule = build_schedule(
        inputs.principal, inputs.annual_rate, months, original_installment
    )
    interest_original = total_interest(original_schedule)
    original_benefit = tax_benefit(original_schedule, inputs, rules)

    investment = project_investment(
        inputs.extra_cash,
        inputs.investment_return,
        inputs.tenure_years,
        inputs.investment_type,
        inputs.slab_fraction,
        rules,
    )

    # Scenario 2: prepay the loan with the cash
    reduced_principal = inputs.principal - inputs.extra_cash
    prepaid_schedule: List[AmortizationRow] = []
    interest_prepaid = ZERO
    prepaid_benefit = ZERO

    if reduced_principal <= 0:
        status = STATUS_RETIRED
        new_installment = ZERO
        new_months = 0
        interest_saved = interest_original
    else:
        if inputs.prepayment_method == REDUCE_INSTALLMENT:
            new_installment = calculate_installment(reduced_principal, inputs.annual_rate, months)
            new_months = months
            if new_installment > 0 and not covers_interest(
                reduced_principal, new_installment, inputs.annual_rate
            ):
                new_months = NEVER_AMORTIZES
        else:
            new_installment = original_installment
            new_months = solve_months(reduced_principal, original_installment, inputs.annual_rate)

        if new_months == NEVER_AMORTIZES:
            logger.warning(
                "Installment %s never amortizes a balance of %s at %s%%",
                new_installment,
                reduced_principal,
                inputs.annual_rate,
            )
            status = STATUS_NEVER_AMORTIZES
            new_months = None
            interest_saved = ZERO
        else:
            status = STATUS_ACTIVE
            prepaid_schedule = build_schedule(
                reduced_principal, inputs.annual_rate, new_months, new_installment
            )
            interest_prepaid = total_interest(prepaid_schedule)
            interest_saved = interest_original - interest_prepaid
            prepaid_benefit = tax_benefit(prepaid_schedule, inputs, rules)

    net_investing, net_prepaying, recommendation = compare(
        investment.post_tax_gain, original_benefit, interest_saved, prepaid_benefit
    )

    if inputs.tax_regime == OLD_REGIME:
        effective_rate = inputs.annual_rate * (1 - inputs.slab_fraction)
    else:
        effective_rate = inputs.annual_rate

    logger.debug(
        "Invest %s vs prepay %s -> %s", net_investing, net_prepaying, recommendation
    )

    return ComparisonResult(
        original_installment=original_installment,
        new_installment=new_installment,
        original_tenure_months=months,
        new_tenure_months=new_months,
        months_saved=None if new_months is None else months - new_months,
        total_interest_original=interest_original,
        total_interest_prepaid=interest_prepaid,
        interest_saved=interest_saved,
        investment=investment,
        original_tax_benefit=original_benefit,
        prepaid_tax_benefit=prepaid_benefit,
        net_benefit_investing=net_investing,
        net_benefit_prepaying=net_prepaying,
        recommendation=recommendation,
        prepaid_status=status,
        effective_loan_rate=effective_rate,
        original_schedule=original_schedule,
        prepaid_schedule=prepaid_schedule,
        yearly_series=build_yearly_series(
            original_schedule, prepaid_schedule, inputs.extra_cash, inputs.investment_return
        ),
    )
