from __future__ import annotations

from decimal import Decimal

import pytest

from prepay_calc.investment import project_investment, value_at_year

SLAB = Decimal("0.3")


def test_annual_compounding_over_whole_years():
    assert value_at_year(Decimal("1000"), Decimal("10"), 2) == Decimal("1210")
    assert value_at_year(Decimal("1000"), Decimal("10"), 0) == Decimal("1000")


def test_equity_gain_below_exemption_is_untaxed():
    outcome = project_investment(Decimal("100000"), Decimal("5"), 1, "equity", SLAB)

    assert outcome.gross_gain == Decimal("5000")
    assert outcome.tax == 0
    assert outcome.post_tax_gain == outcome.gross_gain


def test_equity_gain_above_exemption_taxed_at_flat_rate():
    outcome = project_investment(Decimal("500000"), Decimal("12"), 20, "equity", SLAB)

    assert outcome.future_value == Decimal("500000") * Decimal("1.12") ** 20
    assert outcome.tax == (outcome.gross_gain - Decimal("100000")) * Decimal("0.10")
    assert outcome.post_tax_gain == outcome.gross_gain - outcome.tax


def test_fixed_deposit_taxed_at_slab():
    outcome = project_investment(Decimal("100000"), Decimal("7"), 1, "fixed_deposit", SLAB)

    assert outcome.gross_gain == Decimal("7000")
    assert outcome.tax == Decimal("2100")
    assert outcome.post_tax_gain == Decimal("4900")


def test_zero_amount_has_no_gain():
    outcome = project_investment(Decimal("0"), Decimal("12"), 20, "equity", SLAB)
    assert outcome.gross_gain == 0
    assert outcome.post_tax_gain == 0


def test_unknown_investment_type():
    with pytest.raises(ValueError):
        project_investment(Decimal("1000"), Decimal("5"), 1, "crypto", SLAB)
