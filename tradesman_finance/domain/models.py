"""Domain models - pure Python dataclasses and enums for calculator inputs and results"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class BusinessAge(str, Enum):
    UNDER_1 = "under-1"
    ONE_TO_TWO = "1-2"
    TWO_TO_FIVE = "2-5"
    OVER_5 = "over-5"


class AnnualTurnover(str, Enum):
    UNDER_50K = "under-50k"
    FROM_50K_TO_100K = "50k-100k"
    FROM_100K_TO_500K = "100k-500k"
    OVER_500K = "over-500k"


class CreditProfile(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    CHALLENGED = "challenged"


class VehicleType(str, Enum):
    VAN = "van"
    PICKUP = "pickup"
    TRUCK = "truck"


class MileageBand(str, Enum):
    MILES_10K = "10k"
    MILES_15K = "15k"
    MILES_20K = "20k"
    MILES_25K = "25k"


class EligibilityTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProductKind(str, Enum):
    HP = "hp"
    LEASE = "lease"
    CONTRACT = "contract"


class InvoiceMode(str, Enum):
    SINGLE = "single"
    FACILITY = "facility"


# --- Amortization ---


@dataclass(frozen=True)
class LoanRequest:
    """Principal, term and annual rate for a fully amortizing loan"""

    principal: float
    term_months: int
    annual_rate_percent: float


@dataclass(frozen=True)
class LoanResult:
    """Payment summary for a loan, money rounded to the penny"""

    monthly_payment: float
    total_interest: float
    total_amount: float
    effective_annual_rate: float


@dataclass(frozen=True)
class AmortizationRow:
    """Single month in a repayment schedule"""

    month: int
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float


@dataclass(frozen=True)
class YearSummary:
    """Yearly principal/interest totals for charts (whole pounds)"""

    year: int
    principal: int
    interest: int
    end_balance: int


# --- Profiles and scoring ---


@dataclass(frozen=True)
class BorrowerProfile:
    """Band-level description of the borrowing business"""

    business_age: BusinessAge
    turnover: Optional[AnnualTurnover] = None
    credit: Optional[CreditProfile] = None


@dataclass(frozen=True)
class Factor:
    """Human-readable explanation attached to a scoring rule"""

    label: str
    positive: bool


@dataclass(frozen=True)
class ScoreRule:
    """Points awarded by a band, and the factor it explains itself with"""

    points: float
    factor: Optional[Factor] = None


@dataclass(frozen=True)
class RateAdjustment:
    base_rate: float
    adjustment: float
    adjusted_rate: float


@dataclass(frozen=True)
class EligibilityResult:
    """Output of eligibility scoring"""

    score: int
    tier: EligibilityTier
    message: str
    positive_factors: List[str]
    negative_factors: List[str]


@dataclass(frozen=True)
class ChartSlice:
    """Categorical chart entry"""

    label: str
    value: float
    color: str


# --- Affordability ---


@dataclass(frozen=True)
class AffordabilityInputs:
    monthly_revenue: float
    monthly_expenses: float
    existing_debt_payments: float
    business_age: BusinessAge
    credit_profile: CreditProfile


@dataclass(frozen=True)
class ProductBorrowingPower:
    """Maximum borrowable amount for one product"""

    product_name: str
    max_amount: int
    typical_term_months: int
    monthly_payment: float
    description: str


@dataclass(frozen=True)
class BorrowingPowerPoint:
    product: str
    amount: int


@dataclass(frozen=True)
class AffordabilityResult:
    """Affordability assessment and borrowing power by product"""

    monthly_revenue: float
    monthly_expenses: float
    existing_debt_payments: float
    free_cash_flow: float
    net_profit: float
    profit_margin_percent: float
    max_comfortable_payment: int
    debt_service_coverage_ratio: float
    tier: EligibilityTier
    score: int
    recommendation: str
    business_loan: ProductBorrowingPower
    equipment_finance: ProductBorrowingPower
    vehicle_finance: ProductBorrowingPower
    invoice_finance: ProductBorrowingPower
    per_product_max_amount: Dict[str, int]
    positive_factors: List[str]
    negative_factors: List[str]
    cashflow_breakdown: List[ChartSlice]
    borrowing_power_chart: List[BorrowingPowerPoint]


# --- Product comparison ---


@dataclass(frozen=True)
class ProductOption:
    """One financing structure priced for a given amount and term"""

    kind: ProductKind
    name: str
    monthly_payment: float
    total_payable: float
    effective_rate: float
    owns_asset_at_end: bool
    vat_recovery_description: str
    vat_recovery_percent: int
    maintenance: str
    best_for: str
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ComparisonContext:
    """
    Asset details the comparator needs beyond amount and term.

    Contract hire is only priced when a mileage band is supplied.
    """

    asset_value: float
    vat_registered: bool = False
    mileage_band: Optional[MileageBand] = None


@dataclass(frozen=True)
class ProductComparison:
    hp: ProductOption
    lease: ProductOption
    contract_hire: Optional[ProductOption]
    recommended: ProductKind
    reason: str


@dataclass(frozen=True)
class TaxBenefit:
    """Annual Investment Allowance relief on an equipment purchase"""

    capital_allowance: float
    tax_saving: float
    effective_net_cost: float
    savings_percentage: float
