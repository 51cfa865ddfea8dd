"""Equipment finance calculator - HP vs lease with capital allowance relief"""

from dataclasses import dataclass
from typing import List

from tradesman_finance.domain import products
from tradesman_finance.domain.amortization import amortize
from tradesman_finance.domain.models import ChartSlice, ComparisonContext, ProductComparison, TaxBenefit
from tradesman_finance.domain.policy import DEFAULT_POLICY, FinancePolicy
from tradesman_finance.domain.rates import equipment_rate
from tradesman_finance.utils.money import round_money


@dataclass(frozen=True)
class EquipmentFinanceInputs:
    equipment_value: float
    deposit_percent: float
    term_months: int
    vat_registered: bool = False


@dataclass(frozen=True)
class MonthlyPaymentPoint:
    month: int
    hp: float
    lease: float


@dataclass(frozen=True)
class EquipmentFinanceResult:
    equipment_value: float
    deposit_amount: float
    finance_amount: float
    term_months: int
    rate: float
    monthly_payment: float
    total_payable: float
    total_interest: float
    effective_annual_rate: float
    tax_benefit: TaxBenefit
    comparison: ProductComparison
    total_cost_of_ownership: float
    net_cost_after_tax: float
    breakdown: List[ChartSlice]
    monthly_comparison: List[MonthlyPaymentPoint]


def calculate_equipment_finance(
    inputs: EquipmentFinanceInputs,
    policy: FinancePolicy = DEFAULT_POLICY,
) -> EquipmentFinanceResult:
    deposit_amount = round_money(inputs.equipment_value * inputs.deposit_percent / 100)
    finance_amount = round_money(inputs.equipment_value - deposit_amount)
    rate = equipment_rate(inputs.equipment_value, inputs.term_months)

    loan = amortize(finance_amount, inputs.term_months, rate)
    relief = products.tax_benefit(inputs.equipment_value, policy)
    comparison = products.compare(
        finance_amount,
        inputs.term_months,
        rate,
        ComparisonContext(asset_value=inputs.equipment_value, vat_registered=inputs.vat_registered),
        policy,
    )

    total_cost_of_ownership = round_money(deposit_amount + loan.total_amount)
    net_cost_after_tax = round_money(total_cost_of_ownership - relief.tax_saving)

    breakdown = [
        ChartSlice("Deposit", deposit_amount, "#22c55e"),
        ChartSlice("Finance (Principal)", finance_amount, "#6366f1"),
        ChartSlice("Interest", loan.total_interest, "#f97316"),
    ]

    monthly_comparison = [
        MonthlyPaymentPoint(month=month, hp=comparison.hp.monthly_payment, lease=comparison.lease.monthly_payment)
        for month in range(1, inputs.term_months + 1)
    ]

    return EquipmentFinanceResult(
        equipment_value=inputs.equipment_value,
        deposit_amount=deposit_amount,
        finance_amount=finance_amount,
        term_months=inputs.term_months,
        rate=rate,
        monthly_payment=loan.monthly_payment,
        total_payable=loan.total_amount,
        total_interest=loan.total_interest,
        effective_annual_rate=loan.effective_annual_rate,
        tax_benefit=relief,
        comparison=comparison,
        total_cost_of_ownership=total_cost_of_ownership,
        net_cost_after_tax=net_cost_after_tax,
        breakdown=breakdown,
        monthly_comparison=monthly_comparison,
    )
