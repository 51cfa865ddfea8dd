"""Pydantic schemas for API request/response validation"""

from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, Field

from tradesman_finance.domain.models import (
    AnnualTurnover,
    BusinessAge,
    CreditProfile,
    InvoiceMode,
    MileageBand,
    VehicleType,
)


class BusinessLoanRequest(BaseModel):
    """Request body for POST /v1/calculators/business_loan"""

    loan_amount: float = Field(50_000, description="Amount to borrow in pounds")
    term_months: int = Field(36, description="Repayment term in months")
    business_age: BusinessAge = BusinessAge.TWO_TO_FIVE
    annual_turnover: AnnualTurnover = AnnualTurnover.FROM_100K_TO_500K


class AffordabilityRequest(BaseModel):
    """Request body for POST /v1/calculators/affordability"""

    monthly_revenue: float = Field(10_000, description="Average monthly revenue in pounds")
    monthly_expenses: float = Field(6_000, description="Average monthly operating expenses in pounds")
    existing_debt_payments: float = Field(500, description="Current monthly debt repayments in pounds")
    business_age: BusinessAge = BusinessAge.TWO_TO_FIVE
    credit_profile: CreditProfile = CreditProfile.GOOD


class EquipmentFinanceRequest(BaseModel):
    """Request body for POST /v1/calculators/equipment_finance"""

    equipment_value: float = Field(15_000, description="Equipment price in pounds")
    deposit_percent: float = Field(10, description="Deposit as a percentage of the price")
    term_months: int = 36
    vat_registered: bool = False


class VehicleFinanceRequest(BaseModel):
    """Request body for POST /v1/calculators/vehicle_finance"""

    vehicle_type: VehicleType = VehicleType.VAN
    vehicle_value: float = Field(30_000, description="Vehicle price in pounds")
    deposit_percent: float = 10
    term_months: int = 48
    annual_mileage: MileageBand = MileageBand.MILES_15K
    vat_registered: bool = True


class InvoiceFinanceRequest(BaseModel):
    """Request body for POST /v1/calculators/invoice_finance"""

    mode: InvoiceMode = InvoiceMode.SINGLE
    invoice_value: float = 25_000
    monthly_turnover: float = 100_000
    invoices_per_month: int = 10
    advance_rate: float = Field(85, description="Percentage of invoice value advanced")
    service_fee_rate: float = Field(1.5, description="Service fee as a percentage of invoice value")
    discount_fee_rate: float = Field(2.5, description="Discount fee percentage per 30 days")
    payment_days: int = Field(30, description="Average days for customers to pay")


REQUEST_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "business_loan": BusinessLoanRequest,
    "affordability": AffordabilityRequest,
    "equipment_finance": EquipmentFinanceRequest,
    "vehicle_finance": VehicleFinanceRequest,
    "invoice_finance": InvoiceFinanceRequest,
}


class CalculationResponse(BaseModel):
    """Response for POST /v1/calculators/{key} and GET /v1/sessions/{session_id}/calculators/{key}"""

    calculator: str
    session_id: str
    inputs: Dict[str, Any]
    results: Dict[str, Any]


class CalculatorListItem(BaseModel):
    key: str
    title: str
    storage_key: str


class CalculatorListResponse(BaseModel):
    """Response for GET /v1/calculators"""

    calculators: List[CalculatorListItem]


class FieldOptionSchema(BaseModel):
    value: Union[str, int]
    label: str


class FieldRangeSchema(BaseModel):
    """Bounds and presets for one input field"""

    label: str
    default: Any
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    step: Optional[Union[int, float]] = None
    unit: Optional[str] = None
    options: List[FieldOptionSchema] = []


class CalculatorConfigResponse(BaseModel):
    """Response for GET /v1/calculators/{key}/config"""

    calculator: str
    title: str
    fields: Dict[str, FieldRangeSchema]


class SessionResponse(BaseModel):
    """Response for GET /v1/sessions/{session_id}"""

    session_id: str
    calculators: List[str]


class SessionClearedResponse(BaseModel):
    """Response for DELETE /v1/sessions/{session_id}"""

    session_id: str
    cleared: bool


class QuoteRequest(BaseModel):
    """Request body for POST /v1/quotes"""

    calculator: str = Field(..., min_length=1, description="Calculator the quote was requested from")
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: Optional[str] = None
    business_name: Optional[str] = None
    trade_type: Optional[str] = None
    message: Optional[str] = None
    page_url: Optional[str] = None


class QuoteSummary(BaseModel):
    finance_type: str
    amount: float
    monthly_payment: float
    tier: Optional[str] = None
    recommended_product: Optional[str] = None


class QuoteResponse(BaseModel):
    """Response for POST /v1/quotes"""

    calculator: str
    session_id: str
    summary: Optional[QuoteSummary] = None
    lead_forwarding: str  # scheduled | disabled
