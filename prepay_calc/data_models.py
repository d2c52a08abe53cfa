"""Data models for the prepay-or-invest calculator.

This module defines dataclasses representing the entities used by the
calculator: the scenario inputs, individual amortization rows, yearly
aggregates used for tax deductions, the investment outcome and the final
comparison result. All of them are created fresh for every analysis.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

EQUITY = "equity"
FIXED_DEPOSIT = "fixed_deposit"

OLD_REGIME = "old"
NEW_REGIME = "new"

REDUCE_INSTALLMENT = "reduce_installment"
REDUCE_TENURE = "reduce_tenure"

INVEST = "Invest"
PREPAY = "Prepay"

# Status of the loan after the lump sum has been applied
STATUS_ACTIVE = "active"
STATUS_RETIRED = "retired"
STATUS_NEVER_AMORTIZES = "never_amortizes"


@dataclass(frozen=True)
class ScenarioInputs:
    """All user inputs for a single prepay-or-invest scenario.

    Attributes
    ----------
    principal: Decimal
        Outstanding loan amount.
    annual_rate: Decimal
        Annual nominal interest rate in percent (e.g. ``Decimal("8.5")``).
    tenure_years: int
        Remaining loan tenure in whole years.
    extra_cash: Decimal
        Lump sum available either to prepay or to invest.
    investment_return: Decimal
        Expected annual return on the investment, in percent.
    investment_type: str
        ``"equity"`` (long-term capital gains treatment) or
        ``"fixed_deposit"`` (gain taxed at the slab rate).
    tax_regime: str
        ``"old"`` allows home loan deductions, ``"new"`` does not.
    tax_slab: Decimal
        Marginal tax rate in percent.
    used_80c: Decimal
        Part of the 80C principal allowance already consumed by other
        investments.
    self_occupied: bool
        Whether the property is self-occupied (as opposed to let out).
    joint_loan: bool
        Whether the loan is held jointly, which doubles the interest ceiling.
    prepayment_method: str
        ``"reduce_tenure"`` keeps the installment and shortens the loan,
        ``"reduce_installment"`` keeps the tenure and lowers the installment.
    """

    principal: Decimal
    annual_rate: Decimal
    tenure_years: int
    extra_cash: Decimal
    investment_return: Decimal
    investment_type: str = EQUITY
    tax_regime: str = OLD_REGIME
    tax_slab: Decimal = Decimal("30")
    used_80c: Decimal = Decimal("150000")
    self_occupied: bool = True
    joint_loan: bool = False
    prepayment_method: str = REDUCE_TENURE

    @property
    def tenure_months(self) -> int:
        return self.tenure_years * 12

    @property
    def slab_fraction(self) -> Decimal:
        return self.tax_slab / Decimal(100)


@dataclass
class AmortizationRow:
    """One month of an amortization schedule.

    ``payment`` equals the installment for every row except possibly the
    last one, where the principal part is capped so that the balance never
    goes below zero.
    """

    month: int
    interest: Decimal
    principal: Decimal
    payment: Decimal
    ending_balance: Decimal


@dataclass
class AnnualAggregate:
    """Interest and principal paid during one (possibly partial) loan year."""

    year: int
    interest: Decimal
    principal: Decimal


@dataclass
class InvestmentOutcome:
    future_value: Decimal
    gross_gain: Decimal
    tax: Decimal
    post_tax_gain: Decimal


@dataclass
class YearPoint:
    """Chart point at a whole-year boundary."""

    year: int
    investment_value: Decimal
    interest_original: Decimal
    interest_prepaid: Decimal


@dataclass
class ComparisonResult:
    """Everything the presentation layer needs to show a decision.

    ``new_tenure_months`` is ``None`` when the prepaid loan can never be
    amortized with the chosen installment (``prepaid_status`` is then
    ``"never_amortizes"``).
    """

    original_installment: Decimal
    new_installment: Decimal
    original_tenure_months: int
    new_tenure_months: Optional[int]
    months_saved: Optional[int]
    total_interest_original: Decimal
    total_interest_prepaid: Decimal
    interest_saved: Decimal
    investment: InvestmentOutcome
    original_tax_benefit: Decimal
    prepaid_tax_benefit: Decimal
    net_benefit_investing: Decimal
    net_benefit_prepaying: Decimal
    recommendation: str
    prepaid_status: str
    effective_loan_rate: Decimal
    original_schedule: List[AmortizationRow] = field(default_factory=list)
    prepaid_schedule: List[AmortizationRow] = field(default_factory=list)
    yearly_series: List[YearPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result into a JSON-serialisable dictionary."""
        return {
            "original_installment": float(self.original_installment),
            "new_installment": float(self.new_installment),
            "original_tenure_months": self.original_tenure_months,
            "new_tenure_months": self.new_tenure_months,
            "months_saved": self.months_saved,
            "total_interest_original": float(self.total_interest_original),
            "total_interest_prepaid": float(self.total_interest_prepaid),
            "interest_saved": float(self.interest_saved),
            "investment": {
                "future_value": float(self.investment.future_value),
                "gross_gain": float(self.investment.gross_gain),
                "tax": float(self.investment.tax),
                "post_tax_gain": float(self.investment.post_tax_gain),
            },
            "original_tax_benefit": float(self.original_tax_benefit),
            "prepaid_tax_benefit": float(self.prepaid_tax_benefit),
            "net_benefit_investing": float(self.net_benefit_investing),
            "net_benefit_prepaying": float(self.net_benefit_prepaying),
            "recommendation": self.recommendation,
            "prepaid_status": self.prepaid_status,
            "effective_loan_rate": float(self.effective_loan_rate),
            "original_schedule": serialize_schedule(self.original_schedule),
            "prepaid_schedule": serialize_schedule(self.prepaid_schedule),
            "yearly_series": [
                {
                    "year": point.year,
                    "investment_value": round(float(point.investment_value)),
                    "interest_original": round(float(point.interest_original)),
                    "interest_prepaid": round(float(point.interest_prepaid)),
                }
                for point in self.yearly_series
            ],
        }


def serialize_schedule(schedule: List[AmortizationRow]) -> List[Dict[str, Any]]:
    """Convert schedule rows into JSON-serialisable dictionaries."""
    serialized = []
    for row in schedule:
        serialized.append(
            {
                "month": row.month,
                "interest": float(row.interest),
                "principal": float(row.principal),
                "payment": float(row.payment),
                "balance": float(row.ending_balance),
            }
        )
    return serialized
