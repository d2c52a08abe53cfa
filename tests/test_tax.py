from __future__ import annotations

from decimal import Decimal

from prepay_calc.data_models import AmortizationRow, AnnualAggregate, ScenarioInputs
from prepay_calc.tax import (
    DEFAULT_TAX_RULES,
    TaxRules,
    accrue_annual,
    apply_deduction_caps,
    interest_cap_for,
    remaining_principal_allowance,
    tax_benefit,
)


def flat_schedule(months: int, interest: str = "20000", principal: str = "5000") -> list:
    return [
        AmortizationRow(
            month=month,
            interest=Decimal(interest),
            principal=Decimal(principal),
            payment=Decimal(interest) + Decimal(principal),
            ending_balance=Decimal("1000000"),
        )
        for month in range(1, months + 1)
    ]


def make_inputs(**overrides) -> ScenarioInputs:
    values = dict(
        principal=Decimal("2500000"),
        annual_rate=Decimal("8.5"),
        tenure_years=20,
        extra_cash=Decimal("500000"),
        investment_return=Decimal("12"),
        tax_slab=Decimal("30"),
        used_80c=Decimal("0"),
    )
    values.update(overrides)
    return ScenarioInputs(**values)


def test_accrue_annual_keeps_partial_trailing_year():
    aggregates = accrue_annual(flat_schedule(30))

    assert [a.year for a in aggregates] == [1, 2, 3]
    assert aggregates[0].interest == Decimal("240000")
    assert aggregates[1].principal == Decimal("60000")
    assert aggregates[2].interest == Decimal("120000")
    assert aggregates[2].principal == Decimal("30000")


def test_accrue_annual_empty_schedule():
    assert accrue_annual([]) == []


def test_caps_limit_each_deduction_exactly():
    aggregates = [AnnualAggregate(year=1, interest=Decimal("250000"), principal=Decimal("100000"))]
    benefit = apply_deduction_caps(aggregates, Decimal("200000"), Decimal("50000"), Decimal("0.3"))
    assert benefit == Decimal("75000")


def test_amounts_below_cap_are_deducted_in_full():
    aggregates = [AnnualAggregate(year=1, interest=Decimal("120000"), principal=Decimal("40000"))]
    benefit = apply_deduction_caps(aggregates, Decimal("200000"), Decimal("150000"), Decimal("0.2"))
    assert benefit == Decimal("32000")


def test_unused_headroom_does_not_roll_over():
    aggregates = [
        AnnualAggregate(year=1, interest=Decimal("100000"), principal=Decimal("0")),
        AnnualAggregate(year=2, interest=Decimal("300000"), principal=Decimal("0")),
    ]
    benefit = apply_deduction_caps(aggregates, Decimal("200000"), Decimal("0"), Decimal("0.3"))
    assert benefit == Decimal("90000")


def test_joint_loan_doubles_interest_ceiling():
    assert interest_cap_for(DEFAULT_TAX_RULES, False) == Decimal("200000")
    assert interest_cap_for(DEFAULT_TAX_RULES, True) == Decimal("400000")


def test_let_out_property_shares_the_interest_ceiling():
    # let-out property is limited by the loss set-off ceiling
    schedule = flat_schedule(24, interest="25000")
    let_out = tax_benefit(schedule, make_inputs(self_occupied=False))
    self_occupied = tax_benefit(schedule, make_inputs(self_occupied=True))
    assert let_out == self_occupied


def test_remaining_principal_allowance_never_negative():
    assert remaining_principal_allowance(DEFAULT_TAX_RULES, Decimal("50000")) == Decimal("100000")
    assert remaining_principal_allowance(DEFAULT_TAX_RULES, Decimal("200000")) == 0


def test_tax_benefit_on_schedule():
    # 12 months: 240000 interest (capped at 200000), 60000 principal (fully allowed)
    benefit = tax_benefit(flat_schedule(12), make_inputs())
    assert benefit == Decimal("78000")


def test_tax_benefit_respects_used_80c():
    benefit = tax_benefit(flat_schedule(12), make_inputs(used_80c=Decimal("150000")))
    assert benefit == Decimal("60000")


def test_new_regime_has_no_benefit():
    assert tax_benefit(flat_schedule(36), make_inputs(tax_regime="new")) == 0


def test_custom_rules_are_used():
    rules = TaxRules(interest_limit=Decimal("100000"), principal_limit=Decimal("0"))
    benefit = tax_benefit(flat_schedule(12), make_inputs(), rules)
    assert benefit == Decimal("30000")
