"""Projection of the lump sum when it is invested instead of prepaid.

Growth uses annual compounding over whole years. Equity gains are taxed as
long-term capital gains above an exemption threshold; fixed deposit interest
is taxed at the holder's marginal slab.
"""

from __future__ import annotations

from decimal import Decimal

from .data_models import EQUITY, FIXED_DEPOSIT, InvestmentOutcome
from .tax import DEFAULT_TAX_RULES, TaxRules

ZERO = Decimal("0")


def value_at_year(amount: Decimal, annual_return: Decimal, year: int) -> Decimal:
    """Value of ``amount`` after ``year`` whole years of annual compounding."""
    return amount * (1 + annual_return / Decimal(100)) ** int(year)


def project_investment(
    amount: Decimal,
    annual_return: Decimal,
    years: int,
    investment_type: str,
    slab_fraction: Decimal,
    rules: TaxRules = DEFAULT_TAX_RULES,
) -> InvestmentOutcome:
    future_value = value_at_year(amount, annual_return, years)
    gross_gain = future_value - amount

    if investment_type == EQUITY:
        taxable_gain = max(ZERO, gross_gain - rules.ltcg_exemption)
        tax = taxable_gain * rules.ltcg_rate
    elif investment_type == FIXED_DEPOSIT:
        tax = gross_gain * slab_fraction
    else:
        raise ValueError(f"Unknown investment type: {investment_type}")

    return InvestmentOutcome(
        future_value=future_value,
        gross_gain=gross_gain,
        tax=tax,
        post_tax_gain=gross_gain - tax,
    )
