"""Vehicle finance calculator - HP, finance lease and contract hire side by side"""

from dataclasses import dataclass
from typing import List, Union

from tradesman_finance.domain import products
from tradesman_finance.domain.models import (
    ComparisonContext,
    MileageBand,
    ProductKind,
    ProductOption,
    VehicleType,
)
from tradesman_finance.domain.policy import DEFAULT_POLICY, FinancePolicy
from tradesman_finance.domain.rates import vehicle_rate
from tradesman_finance.utils.money import round_money


@dataclass(frozen=True)
class VehicleFinanceInputs:
    vehicle_type: VehicleType
    vehicle_value: float
    deposit_percent: float
    term_months: int
    annual_mileage: MileageBand
    vat_registered: bool = True


@dataclass(frozen=True)
class ComparisonRow:
    """One row of the side-by-side table"""

    metric: str
    hp: Union[str, float]
    lease: Union[str, float]
    contract: Union[str, float]


@dataclass(frozen=True)
class MonthlyOptionPoint:
    month: int
    hp: float
    lease: float
    contract: float


@dataclass(frozen=True)
class VehicleFinanceResult:
    vehicle_value: float
    deposit_amount: float
    finance_amount: float
    term_months: int
    base_rate: float
    hp: ProductOption
    lease: ProductOption
    contract: ProductOption
    recommendation: ProductKind
    recommendation_reason: str
    comparison_table: List[ComparisonRow]
    monthly_comparison: List[MonthlyOptionPoint]


def mileage_label(band: MileageBand) -> str:
    """'15k' -> '15,000 miles/year'"""
    return f"{band.value.replace('k', ',000')} miles/year"


def calculate_vehicle_finance(
    inputs: VehicleFinanceInputs,
    policy: FinancePolicy = DEFAULT_POLICY,
) -> VehicleFinanceResult:
    deposit_amount = round_money(inputs.vehicle_value * inputs.deposit_percent / 100)
    finance_amount = round_money(inputs.vehicle_value - deposit_amount)
    rate = vehicle_rate(inputs.vehicle_type, inputs.vehicle_value, policy)

    comparison = products.compare(
        finance_amount,
        inputs.term_months,
        rate,
        ComparisonContext(
            asset_value=inputs.vehicle_value,
            vat_registered=inputs.vat_registered,
            mileage_band=inputs.annual_mileage,
        ),
        policy,
    )
    hp, lease, contract = comparison.hp, comparison.lease, comparison.contract_hire

    comparison_table = [
        ComparisonRow("Monthly Payment", hp.monthly_payment, lease.monthly_payment, contract.monthly_payment),
        ComparisonRow("Total Payable", hp.total_payable, lease.total_payable, contract.total_payable),
        ComparisonRow("Own at End", "Yes", "No", "No"),
        ComparisonRow(
            "VAT Recovery",
            hp.vat_recovery_description,
            lease.vat_recovery_description,
            contract.vat_recovery_description,
        ),
        ComparisonRow("Maintenance", "Your cost", "Your cost", "Often included"),
        ComparisonRow("Mileage Limit", "None", "None", mileage_label(inputs.annual_mileage)),
    ]

    monthly_comparison = [
        MonthlyOptionPoint(
            month=month,
            hp=hp.monthly_payment,
            lease=lease.monthly_payment,
            contract=contract.monthly_payment,
        )
        for month in range(1, inputs.term_months + 1)
    ]

    return VehicleFinanceResult(
        vehicle_value=inputs.vehicle_value,
        deposit_amount=deposit_amount,
        finance_amount=finance_amount,
        term_months=inputs.term_months,
        base_rate=rate,
        hp=hp,
        lease=lease,
        contract=contract,
        recommendation=comparison.recommended,
        recommendation_reason=comparison.reason,
        comparison_table=comparison_table,
        monthly_comparison=monthly_comparison,
    )
