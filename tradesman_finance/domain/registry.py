"""Calculator registry - maps calculator keys to input types, engines and storage keys"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from tradesman_finance.domain import affordability, input_ranges
from tradesman_finance.domain.calculators.business_loan import BusinessLoanInputs, calculate_business_loan
from tradesman_finance.domain.calculators.equipment import EquipmentFinanceInputs, calculate_equipment_finance
from tradesman_finance.domain.calculators.invoice import InvoiceFinanceInputs, calculate_invoice_finance
from tradesman_finance.domain.calculators.vehicle import VehicleFinanceInputs, calculate_vehicle_finance
from tradesman_finance.domain.exceptions import UnknownCalculatorError
from tradesman_finance.domain.models import AffordabilityInputs
from tradesman_finance.domain.policy import FinancePolicy

STORAGE_KEY_PREFIX = "tradesman-calculator-"


@dataclass(frozen=True)
class CalculationSummary:
    """Headline figures of a stored result, for quotes and metrics"""

    finance_type: str
    amount: float
    monthly_payment: float
    tier: Optional[str] = None
    recommended_product: Optional[str] = None


@dataclass(frozen=True)
class CalculatorSpec:
    key: str
    title: str
    inputs_type: type
    ranges: Mapping[str, input_ranges.FieldRange]
    calculate: Callable[[Any, FinancePolicy], Any]
    summarize: Callable[[Dict[str, Any]], CalculationSummary]

    @property
    def storage_key(self) -> str:
        return f"{STORAGE_KEY_PREFIX}{self.key.replace('_', '-')}"


def _summarize_business_loan(results: Dict[str, Any]) -> CalculationSummary:
    return CalculationSummary(
        finance_type="business-loan",
        amount=results["loan_amount"],
        monthly_payment=results["monthly_payment"],
        tier=results["eligibility"]["tier"],
    )


def _summarize_affordability(results: Dict[str, Any]) -> CalculationSummary:
    return CalculationSummary(
        finance_type="affordability",
        amount=results["business_loan"]["max_amount"],
        monthly_payment=results["max_comfortable_payment"],
        tier=results["tier"],
    )


def _summarize_equipment(results: Dict[str, Any]) -> CalculationSummary:
    return CalculationSummary(
        finance_type="equipment-finance",
        amount=results["finance_amount"],
        monthly_payment=results["monthly_payment"],
        recommended_product=results["comparison"]["recommended"],
    )


def _summarize_vehicle(results: Dict[str, Any]) -> CalculationSummary:
    recommended = results["recommendation"]
    return CalculationSummary(
        finance_type="vehicle-finance",
        amount=results["finance_amount"],
        monthly_payment=results[recommended]["monthly_payment"],
        recommended_product=recommended,
    )


def _summarize_invoice(results: Dict[str, Any]) -> CalculationSummary:
    return CalculationSummary(
        finance_type="invoice-finance",
        amount=results["invoice_value"],
        monthly_payment=results["facility"]["monthly_fees"],
    )


CALCULATORS: Dict[str, CalculatorSpec] = {
    spec.key: spec
    for spec in (
        CalculatorSpec(
            key="business_loan",
            title="Business Loan Repayment Calculator",
            inputs_type=BusinessLoanInputs,
            ranges=input_ranges.BUSINESS_LOAN_RANGES,
            calculate=calculate_business_loan,
            summarize=_summarize_business_loan,
        ),
        CalculatorSpec(
            key="affordability",
            title="Affordability Calculator",
            inputs_type=AffordabilityInputs,
            ranges=input_ranges.AFFORDABILITY_RANGES,
            calculate=affordability.analyze,
            summarize=_summarize_affordability,
        ),
        CalculatorSpec(
            key="equipment_finance",
            title="Equipment Finance Calculator",
            inputs_type=EquipmentFinanceInputs,
            ranges=input_ranges.EQUIPMENT_FINANCE_RANGES,
            calculate=calculate_equipment_finance,
            summarize=_summarize_equipment,
        ),
        CalculatorSpec(
            key="vehicle_finance",
            title="Vehicle Finance Comparison Calculator",
            inputs_type=VehicleFinanceInputs,
            ranges=input_ranges.VEHICLE_FINANCE_RANGES,
            calculate=calculate_vehicle_finance,
            summarize=_summarize_vehicle,
        ),
        CalculatorSpec(
            key="invoice_finance",
            title="Invoice Finance Calculator",
            inputs_type=InvoiceFinanceInputs,
            ranges=input_ranges.INVOICE_FINANCE_RANGES,
            # Fee-based pricing, no rate policy involved
            calculate=lambda inputs, _policy: calculate_invoice_finance(inputs),
            summarize=_summarize_invoice,
        ),
    )
}


def get_calculator(key: str) -> CalculatorSpec:
    try:
        return CALCULATORS[key]
    except KeyError:
        raise UnknownCalculatorError(f"Unknown calculator: {key}") from None


def calculator_keys() -> List[str]:
    return list(CALCULATORS)
