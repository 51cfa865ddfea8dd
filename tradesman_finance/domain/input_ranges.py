"""Per-calculator input ranges - the authoritative domain of every slider and select"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from tradesman_finance.domain.models import (
    AnnualTurnover,
    BusinessAge,
    CreditProfile,
    InvoiceMode,
    MileageBand,
    VehicleType,
)

Number = Union[int, float]


@dataclass(frozen=True)
class FieldOption:
    value: Union[str, int]
    label: str


@dataclass(frozen=True)
class FieldRange:
    """
    Bounds for one input field.

    Numeric fields carry min/max/step; enumerated fields carry options.
    Some numeric fields (term lengths) also list preset options.
    """

    label: str
    default: Any
    min: Optional[Number] = None
    max: Optional[Number] = None
    step: Optional[Number] = None
    unit: Optional[str] = None
    options: List[FieldOption] = field(default_factory=list)

    @property
    def is_numeric(self) -> bool:
        return self.min is not None and self.max is not None

    def clamp(self, value: Number) -> Number:
        if not self.is_numeric:
            return value
        return max(self.min, min(self.max, value))


def _months(*values: int, years: bool = False) -> List[FieldOption]:
    if years:
        return [FieldOption(v, f"{v} months ({v // 12} years)") for v in values]
    return [FieldOption(v, f"{v} months") for v in values]


BUSINESS_LOAN_RANGES: Dict[str, FieldRange] = {
    "loan_amount": FieldRange("Loan Amount", 50_000, min=5_000, max=500_000, step=1_000),
    "term_months": FieldRange("Loan Term", 36, min=12, max=60, step=6, options=_months(12, 24, 36, 48, 60)),
    "business_age": FieldRange(
        "Business Age",
        BusinessAge.TWO_TO_FIVE.value,
        options=[
            FieldOption(BusinessAge.UNDER_1.value, "Under 1 year"),
            FieldOption(BusinessAge.ONE_TO_TWO.value, "1-2 years"),
            FieldOption(BusinessAge.TWO_TO_FIVE.value, "2-5 years"),
            FieldOption(BusinessAge.OVER_5.value, "5+ years"),
        ],
    ),
    "annual_turnover": FieldRange(
        "Annual Turnover",
        AnnualTurnover.FROM_100K_TO_500K.value,
        options=[
            FieldOption(AnnualTurnover.UNDER_50K.value, "Under £50,000"),
            FieldOption(AnnualTurnover.FROM_50K_TO_100K.value, "£50,000 - £100,000"),
            FieldOption(AnnualTurnover.FROM_100K_TO_500K.value, "£100,000 - £500,000"),
            FieldOption(AnnualTurnover.OVER_500K.value, "Over £500,000"),
        ],
    ),
}

AFFORDABILITY_RANGES: Dict[str, FieldRange] = {
    "monthly_revenue": FieldRange("Monthly Revenue", 10_000, min=1_000, max=100_000, step=500),
    "monthly_expenses": FieldRange("Monthly Expenses", 6_000, min=500, max=80_000, step=500),
    "existing_debt_payments": FieldRange("Existing Debt Payments", 500, min=0, max=10_000, step=100),
    "business_age": FieldRange(
        "Business Age",
        BusinessAge.TWO_TO_FIVE.value,
        options=[
            FieldOption(BusinessAge.UNDER_1.value, "Less than 1 year"),
            FieldOption(BusinessAge.ONE_TO_TWO.value, "1-2 years"),
            FieldOption(BusinessAge.TWO_TO_FIVE.value, "2-5 years"),
            FieldOption(BusinessAge.OVER_5.value, "5+ years"),
        ],
    ),
    "credit_profile": FieldRange(
        "Credit Profile",
        CreditProfile.GOOD.value,
        options=[
            FieldOption(CreditProfile.EXCELLENT.value, "Excellent (680+)"),
            FieldOption(CreditProfile.GOOD.value, "Good (600-679)"),
            FieldOption(CreditProfile.FAIR.value, "Fair (500-599)"),
            FieldOption(CreditProfile.CHALLENGED.value, "Challenged (<500)"),
        ],
    ),
}

EQUIPMENT_FINANCE_RANGES: Dict[str, FieldRange] = {
    "equipment_value": FieldRange("Equipment Value", 15_000, min=500, max=100_000, step=500),
    "deposit_percent": FieldRange("Deposit", 10, min=0, max=50, step=5, unit="%"),
    "term_months": FieldRange("Finance Term", 36, min=12, max=60, step=6, options=_months(12, 24, 36, 48, 60)),
    "vat_registered": FieldRange("VAT Registered", False),
}

VEHICLE_FINANCE_RANGES: Dict[str, FieldRange] = {
    "vehicle_type": FieldRange(
        "Vehicle Type",
        VehicleType.VAN.value,
        options=[
            FieldOption(VehicleType.VAN.value, "Van (Transit, Sprinter, etc.)"),
            FieldOption(VehicleType.PICKUP.value, "Pickup (Ranger, Hilux, etc.)"),
            FieldOption(VehicleType.TRUCK.value, "Truck (7.5t+)"),
        ],
    ),
    "vehicle_value": FieldRange("Vehicle Value", 30_000, min=10_000, max=80_000, step=1_000),
    "deposit_percent": FieldRange("Deposit", 10, min=0, max=30, step=5, unit="%"),
    "term_months": FieldRange(
        "Agreement Term", 48, min=24, max=60, step=12, options=_months(24, 36, 48, 60, years=True)
    ),
    "annual_mileage": FieldRange(
        "Annual Mileage",
        MileageBand.MILES_15K.value,
        options=[
            FieldOption(MileageBand.MILES_10K.value, "10,000 miles/year"),
            FieldOption(MileageBand.MILES_15K.value, "15,000 miles/year"),
            FieldOption(MileageBand.MILES_20K.value, "20,000 miles/year"),
            FieldOption(MileageBand.MILES_25K.value, "25,000+ miles/year"),
        ],
    ),
    "vat_registered": FieldRange("VAT Registered", True),
}

INVOICE_FINANCE_RANGES: Dict[str, FieldRange] = {
    "mode": FieldRange(
        "Calculator Mode",
        InvoiceMode.SINGLE.value,
        options=[
            FieldOption(InvoiceMode.SINGLE.value, "Single Invoice"),
            FieldOption(InvoiceMode.FACILITY.value, "Facility"),
        ],
    ),
    "invoice_value": FieldRange("Invoice Value", 25_000, min=1_000, max=500_000, step=1_000),
    "monthly_turnover": FieldRange("Monthly Invoice Turnover", 100_000, min=5_000, max=2_000_000, step=5_000),
    "invoices_per_month": FieldRange("Invoices Per Month", 10, min=1, max=100, step=1),
    "advance_rate": FieldRange("Advance Rate", 85, min=70, max=95, step=1, unit="%"),
    "service_fee_rate": FieldRange("Service Fee", 1.5, min=0.5, max=3, step=0.1, unit="%"),
    "discount_fee_rate": FieldRange("Discount Fee", 2.5, min=1, max=5, step=0.1, unit="% per month"),
    "payment_days": FieldRange(
        "Average Payment Time",
        30,
        min=14,
        max=90,
        options=[FieldOption(d, f"{d} days") for d in (14, 30, 60, 90)],
    ),
}


def clamp_inputs(ranges: Mapping[str, FieldRange], raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Clamp numeric fields into their configured bounds.

    Fields without a range, and non-numeric values, pass through unchanged.
    """
    clamped = dict(raw)
    for name, value in raw.items():
        spec = ranges.get(name)
        if spec is None or isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        clamped[name] = spec.clamp(value)
    return clamped
