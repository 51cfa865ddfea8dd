"""Finance policy - business constants passed explicitly into every calculator"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RateBand:
    """Inclusive bounds an adjusted annual rate is clamped into"""

    floor: float
    ceiling: float

    def clamp(self, rate: float) -> float:
        return max(self.floor, min(self.ceiling, rate))


@dataclass(frozen=True)
class ProductTerms:
    """Typical term, rate offset and payment scaling for a borrowing-power product"""

    name: str
    term_months: int
    rate_offset: float
    payment_scale: float
    quote_cap: float
    description: str


@dataclass(frozen=True)
class FinancePolicy:
    """
    Policy and jurisdictional constants.

    Lease residual and contract-hire cost ratios are empirically chosen and
    still awaiting confirmation from the business owner.
    """

    # Rate clamping
    business_loan_base_rate: float = 9.9
    business_loan_band: RateBand = field(default_factory=lambda: RateBand(4.9, 24.9))
    vehicle_band: RateBand = field(default_factory=lambda: RateBand(4.9, 24.9))
    credit_band: RateBand = field(default_factory=lambda: RateBand(4.9, 24.9))

    # Affordability
    comfortable_payment_ratio: float = 0.40
    invoice_facility_ratio: float = 0.80
    business_loan_terms: ProductTerms = field(
        default_factory=lambda: ProductTerms(
            "Business Loan", 36, 0.0, 1.0, 100_000, "Flexible funding for any business purpose"
        )
    )
    equipment_terms: ProductTerms = field(
        default_factory=lambda: ProductTerms(
            "Equipment Finance", 48, -1.0, 0.8, 75_000, "Finance tools, machinery and equipment"
        )
    )
    vehicle_terms: ProductTerms = field(
        default_factory=lambda: ProductTerms(
            "Vehicle Finance", 48, 0.0, 0.9, 60_000, "Vans, pickups and commercial vehicles"
        )
    )

    # Finance lease
    lease_residual_ratio: float = 0.15
    lease_rate_discount: float = 0.5

    # Contract hire (annual ratios of vehicle value)
    contract_hire_depreciation_ratio: float = 0.20
    contract_hire_service_ratio: float = 0.015
    contract_hire_margin_ratio: float = 0.02

    # Recommendation
    ownership_term_months: int = 48
    lease_max_term_months: int = 36
    lease_payment_advantage: float = 0.9

    # Tax (UK small-company corporation tax and Annual Investment Allowance)
    aia_cap: float = 1_000_000
    corporation_tax_rate: float = 0.25


DEFAULT_POLICY = FinancePolicy()
