"""Product comparator - hire purchase vs finance lease vs contract hire"""

from typing import Mapping

from tradesman_finance.domain.amortization import amortize
from tradesman_finance.domain.models import (
    ComparisonContext,
    MileageBand,
    ProductComparison,
    ProductKind,
    ProductOption,
    TaxBenefit,
)
from tradesman_finance.domain.policy import DEFAULT_POLICY, FinancePolicy
from tradesman_finance.domain.tables import band_table
from tradesman_finance.utils.money import round_money, round_to

MILEAGE_MULTIPLIERS: Mapping[MileageBand, float] = band_table(
    MileageBand,
    {
        MileageBand.MILES_10K: 0.95,
        MileageBand.MILES_15K: 1.0,
        MileageBand.MILES_20K: 1.08,
        MileageBand.MILES_25K: 1.18,
    },
)

RECOMMENDATION_REASONS: Mapping[ProductKind, str] = band_table(
    ProductKind,
    {
        ProductKind.HP: "Hire Purchase gives you full ownership and no mileage restrictions.",
        ProductKind.LEASE: "Finance Lease offers lower monthly costs and tax deductible rentals.",
        ProductKind.CONTRACT: "Contract Hire provides fixed monthly costs with maintenance often included.",
    },
)

OWNERSHIP_REASON = "Hire Purchase is best for long-term ownership - you'll own the asset outright."
NOT_APPLICABLE = "N/A"


def hire_purchase(
    finance_amount: float,
    term_months: int,
    rate: float,
    vat_registered: bool,
) -> ProductOption:
    """Straight amortizing loan; the asset is yours after the last payment"""
    loan = amortize(finance_amount, term_months, rate)

    return ProductOption(
        kind=ProductKind.HP,
        name="Hire Purchase",
        monthly_payment=loan.monthly_payment,
        total_payable=loan.total_amount,
        effective_rate=rate,
        owns_asset_at_end=True,
        vat_recovery_description="100% on payments" if vat_registered else NOT_APPLICABLE,
        vat_recovery_percent=100 if vat_registered else 0,
        maintenance="Your responsibility",
        best_for="Long-term ownership",
        pros=[
            "Own the asset at the end",
            "100% VAT recovery on finance",
            "No mileage restrictions",
            "Can modify or sell freely",
        ],
        cons=[
            "Higher monthly payments",
            "Responsible for maintenance",
            "Asset depreciates on your books",
        ],
    )


def finance_lease(
    finance_amount: float,
    term_months: int,
    rate: float,
    vat_registered: bool,
    policy: FinancePolicy = DEFAULT_POLICY,
) -> ProductOption:
    """
    Residual portion spread straight-line, the rest amortized at a discounted rate.

    monthly = payment(amount * (1 - residual), lease rate) + residual / term
    """
    lease_rate = round_to(rate - policy.lease_rate_discount, 2)

    if finance_amount > 0 and term_months > 0:
        residual = finance_amount * policy.lease_residual_ratio
        loan = amortize(finance_amount - residual, term_months, lease_rate)
        monthly_payment = round_money(loan.monthly_payment + residual / term_months)
    else:
        monthly_payment = 0.0

    return ProductOption(
        kind=ProductKind.LEASE,
        name="Finance Lease",
        monthly_payment=monthly_payment,
        total_payable=round_money(monthly_payment * max(term_months, 0)),
        effective_rate=lease_rate,
        owns_asset_at_end=False,
        vat_recovery_description="50% on rentals" if vat_registered else NOT_APPLICABLE,
        vat_recovery_percent=50 if vat_registered else 0,
        maintenance="Your responsibility",
        best_for="Tax efficiency",
        pros=[
            "Lower monthly payments than HP",
            "Off-balance sheet (usually)",
            "Flexible end options",
            "Rentals are tax deductible",
        ],
        cons=[
            "Only 50% VAT recovery",
            "Don't own the asset",
            "End of term options vary",
        ],
    )


def contract_hire(
    asset_value: float,
    term_months: int,
    mileage_band: MileageBand,
    vat_registered: bool,
    policy: FinancePolicy = DEFAULT_POLICY,
) -> ProductOption:
    """Cost-plus rental: depreciation, servicing and margin, scaled by mileage"""
    monthly_depreciation = asset_value * policy.contract_hire_depreciation_ratio / 12
    monthly_service = asset_value * policy.contract_hire_service_ratio / 12
    monthly_margin = asset_value * policy.contract_hire_margin_ratio / 12

    monthly_payment = round_money(
        (monthly_depreciation + monthly_service + monthly_margin) * MILEAGE_MULTIPLIERS[mileage_band]
    )

    return ProductOption(
        kind=ProductKind.CONTRACT,
        name="Contract Hire",
        monthly_payment=monthly_payment,
        total_payable=round_money(monthly_payment * max(term_months, 0)),
        effective_rate=0.0,
        owns_asset_at_end=False,
        vat_recovery_description="50% on rentals" if vat_registered else NOT_APPLICABLE,
        vat_recovery_percent=50 if vat_registered else 0,
        maintenance="Often included",
        best_for="Fixed budgeting",
        pros=[
            "Fixed monthly costs",
            "Maintenance often included",
            "No depreciation risk",
            "Easy to upgrade regularly",
        ],
        cons=[
            "Mileage limits apply",
            "Early termination costly",
            "Don't build equity",
            "Fair wear guidelines",
        ],
    )


def recommend(
    hp: ProductOption,
    lease: ProductOption,
    contract: ProductOption | None,
    term_months: int,
    vat_registered: bool,
    policy: FinancePolicy = DEFAULT_POLICY,
) -> tuple[ProductKind, str]:
    """
    Pick a structure.

    Rules, in order:
    - ownership horizon (term >= 48 months): HP
    - VAT-registered, term <= 36 months and lease under 90% of HP monthly: lease
    - contract hire when it is the cheapest monthly option (ties included)
    - otherwise HP

    Lease is only ever chosen through the VAT rule.
    """
    if term_months >= policy.ownership_term_months:
        return ProductKind.HP, OWNERSHIP_REASON

    if (
        vat_registered
        and term_months <= policy.lease_max_term_months
        and lease.monthly_payment < hp.monthly_payment * policy.lease_payment_advantage
    ):
        return ProductKind.LEASE, RECOMMENDATION_REASONS[ProductKind.LEASE]

    if (
        contract is not None
        and contract.monthly_payment <= hp.monthly_payment
        and contract.monthly_payment <= lease.monthly_payment
    ):
        return ProductKind.CONTRACT, RECOMMENDATION_REASONS[ProductKind.CONTRACT]

    return ProductKind.HP, RECOMMENDATION_REASONS[ProductKind.HP]


def compare(
    finance_amount: float,
    term_months: int,
    base_rate: float,
    context: ComparisonContext,
    policy: FinancePolicy = DEFAULT_POLICY,
) -> ProductComparison:
    """Price every applicable structure for the same amount and term and recommend one"""
    hp = hire_purchase(finance_amount, term_months, base_rate, context.vat_registered)
    lease = finance_lease(finance_amount, term_months, base_rate, context.vat_registered, policy)

    contract = None
    if context.mileage_band is not None:
        contract = contract_hire(context.asset_value, term_months, context.mileage_band, context.vat_registered, policy)

    recommended, reason = recommend(hp, lease, contract, term_months, context.vat_registered, policy)

    return ProductComparison(
        hp=hp,
        lease=lease,
        contract_hire=contract,
        recommended=recommended,
        reason=reason,
    )


def tax_benefit(asset_value: float, policy: FinancePolicy = DEFAULT_POLICY) -> TaxBenefit:
    """Annual Investment Allowance relief at the small-company corporation tax rate"""
    capital_allowance = max(0.0, min(asset_value, policy.aia_cap))
    tax_saving = capital_allowance * policy.corporation_tax_rate
    savings_percentage = tax_saving / asset_value * 100 if asset_value > 0 else 0.0

    return TaxBenefit(
        capital_allowance=round_money(capital_allowance),
        tax_saving=round_money(tax_saving),
        effective_net_cost=round_money(asset_value - tax_saving),
        savings_percentage=round_to(savings_percentage, 2),
    )
