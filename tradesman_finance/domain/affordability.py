"""Affordability analyzer - free cash flow, comfortable payment and borrowing power per product"""

from typing import List, Mapping

from tradesman_finance.domain.amortization import amortize, max_principal_for_payment
from tradesman_finance.domain.eligibility import clamp_score, split_factors, tier_for
from tradesman_finance.domain.models import (
    AffordabilityInputs,
    AffordabilityResult,
    BorrowingPowerPoint,
    BusinessAge,
    ChartSlice,
    CreditProfile,
    EligibilityTier,
    Factor,
    ProductBorrowingPower,
    ScoreRule,
)
from tradesman_finance.domain.policy import DEFAULT_POLICY, FinancePolicy, ProductTerms
from tradesman_finance.domain.rates import credit_base_rate
from tradesman_finance.domain.tables import band_table
from tradesman_finance.utils.money import round_pounds, round_to

BASE_POINTS = 50
MAX_CASHFLOW_POINTS = 20
CASHFLOW_POINTS_PER_RATIO = 50

AGE_MULTIPLIERS: Mapping[BusinessAge, float] = band_table(
    BusinessAge,
    {
        BusinessAge.UNDER_1: 0.6,
        BusinessAge.ONE_TO_TWO: 0.8,
        BusinessAge.TWO_TO_FIVE: 1.0,
        BusinessAge.OVER_5: 1.15,
    },
)

CREDIT_MULTIPLIERS: Mapping[CreditProfile, float] = band_table(
    CreditProfile,
    {
        CreditProfile.EXCELLENT: 1.2,
        CreditProfile.GOOD: 1.0,
        CreditProfile.FAIR: 0.75,
        CreditProfile.CHALLENGED: 0.5,
    },
)

AGE_RULES: Mapping[BusinessAge, ScoreRule] = band_table(
    BusinessAge,
    {
        BusinessAge.UNDER_1: ScoreRule(0, Factor("Less than 1 year trading history", positive=False)),
        BusinessAge.ONE_TO_TWO: ScoreRule(5),
        BusinessAge.TWO_TO_FIVE: ScoreRule(10, Factor("Established business (2-5 years)", positive=True)),
        BusinessAge.OVER_5: ScoreRule(15, Factor("5+ years trading history", positive=True)),
    },
)

CREDIT_RULES: Mapping[CreditProfile, ScoreRule] = band_table(
    CreditProfile,
    {
        CreditProfile.EXCELLENT: ScoreRule(15, Factor("Excellent credit profile", positive=True)),
        CreditProfile.GOOD: ScoreRule(10, Factor("Good credit history", positive=True)),
        CreditProfile.FAIR: ScoreRule(5, Factor("Credit profile may affect rates", positive=False)),
        CreditProfile.CHALLENGED: ScoreRule(0, Factor("Credit challenges may limit options", positive=False)),
    },
)

STRONG_MARGIN = Factor("Strong profit margin over 30%", positive=True)
WEAK_MARGIN = Factor("Low profit margin limits borrowing capacity", positive=False)
HEALTHY_REVENUE = Factor("Healthy monthly revenue", positive=True)
LOW_REVENUE = Factor("Lower revenue may limit options", positive=False)
NO_DEBT = Factor("No existing debt payments", positive=True)
LOW_DEBT = Factor("Low existing debt burden", positive=True)
HIGH_DEBT = Factor("High existing debt may reduce approval chances", positive=False)

MEDIUM_CASHFLOW_FLOOR = 500
LOW_CASHFLOW_FLOOR = 200

CHART_COLORS = {
    "expenses": "#ef4444",
    "debt": "#f97316",
    "available": "#22c55e",
    "remaining": "#0ea5a5",
}


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def combined_multiplier(business_age: BusinessAge, credit: CreditProfile) -> float:
    return AGE_MULTIPLIERS[business_age] * CREDIT_MULTIPLIERS[credit]


def debt_ratio_rule(existing_debt_payments: float, monthly_revenue: float) -> ScoreRule:
    """Points and factor for the existing debt burden relative to revenue"""
    if existing_debt_payments == 0:
        return ScoreRule(10, NO_DEBT)

    debt_ratio = _ratio(existing_debt_payments, monthly_revenue)
    if debt_ratio < 0.1:
        return ScoreRule(10, LOW_DEBT)
    if debt_ratio < 0.2:
        return ScoreRule(5)
    if debt_ratio > 0.4:
        return ScoreRule(-20, HIGH_DEBT)
    if debt_ratio > 0.3:
        return ScoreRule(-10, HIGH_DEBT)
    return ScoreRule(0)


def affordability_score(inputs: AffordabilityInputs, free_cash_flow: float) -> int:
    """Additive point score out of 100, from cash flow, debt, age and credit"""
    cashflow_ratio = _ratio(free_cash_flow, inputs.monthly_revenue)

    points = BASE_POINTS + min(MAX_CASHFLOW_POINTS, cashflow_ratio * CASHFLOW_POINTS_PER_RATIO)
    points += debt_ratio_rule(inputs.existing_debt_payments, inputs.monthly_revenue).points
    points += AGE_RULES[inputs.business_age].points
    points += CREDIT_RULES[inputs.credit_profile].points

    return clamp_score(points)


def recommendation_for(
    tier: EligibilityTier,
    free_cash_flow: float,
    business_age: BusinessAge,
    credit: CreditProfile,
) -> str:
    if tier is EligibilityTier.HIGH:
        if credit is CreditProfile.EXCELLENT and business_age is BusinessAge.OVER_5:
            return (
                "Your business is in an excellent position to borrow. "
                "You may qualify for the best rates and higher limits."
            )
        return "Your business shows strong affordability. You're likely to be approved for most finance products."

    if tier is EligibilityTier.MEDIUM:
        if free_cash_flow < MEDIUM_CASHFLOW_FLOOR:
            return "Your affordability is moderate. Consider reducing expenses to improve cashflow before borrowing."
        if business_age is BusinessAge.UNDER_1:
            return (
                "Building more trading history will improve your borrowing power. "
                "Consider starting with smaller amounts."
            )
        return "You have reasonable borrowing capacity. We can likely find suitable options for your business."

    if credit is CreditProfile.CHALLENGED:
        return "We work with all credit profiles. Speak to us about specialist lenders who may be able to help."
    if free_cash_flow < LOW_CASHFLOW_FLOOR:
        return (
            "Your current cashflow limits borrowing options. "
            "Focus on improving profitability before taking on new debt."
        )
    return (
        "Your borrowing capacity is limited. "
        "Consider invoice finance to improve cashflow without fixed monthly payments."
    )


def _financial_factors(inputs: AffordabilityInputs, free_cash_flow: float) -> List[Factor]:
    factors = []

    cashflow_ratio = _ratio(free_cash_flow, inputs.monthly_revenue)
    if cashflow_ratio > 0.3:
        factors.append(STRONG_MARGIN)
    elif cashflow_ratio < 0.1:
        factors.append(WEAK_MARGIN)

    if inputs.monthly_revenue > 20_000:
        factors.append(HEALTHY_REVENUE)
    elif inputs.monthly_revenue < 5_000:
        factors.append(LOW_REVENUE)

    return factors


def analyze_factors(inputs: AffordabilityInputs, free_cash_flow: float) -> tuple[List[str], List[str]]:
    rules = [ScoreRule(0, factor) for factor in _financial_factors(inputs, free_cash_flow)]
    rules.append(debt_ratio_rule(inputs.existing_debt_payments, inputs.monthly_revenue))
    rules.append(AGE_RULES[inputs.business_age])
    rules.append(CREDIT_RULES[inputs.credit_profile])
    return split_factors(rules)


def _borrowing_power(
    terms: ProductTerms,
    adjusted_payment: float,
    base_rate: float,
) -> ProductBorrowingPower:
    rate = base_rate + terms.rate_offset
    max_amount = max_principal_for_payment(adjusted_payment * terms.payment_scale, terms.term_months, rate)
    quote = amortize(min(max_amount, terms.quote_cap), terms.term_months, rate)

    return ProductBorrowingPower(
        product_name=terms.name,
        max_amount=max_amount,
        typical_term_months=terms.term_months,
        monthly_payment=quote.monthly_payment,
        description=terms.description,
    )


def analyze(inputs: AffordabilityInputs, policy: FinancePolicy = DEFAULT_POLICY) -> AffordabilityResult:
    """
    Assess how much the business can comfortably borrow.

    Free cash flow may be negative; the comfortable payment derived from it
    is floored at zero. Ratios with a zero denominator are reported as 0.
    """
    net_profit = inputs.monthly_revenue - inputs.monthly_expenses
    free_cash_flow = net_profit - inputs.existing_debt_payments
    profit_margin = _ratio(net_profit, inputs.monthly_revenue) * 100

    max_comfortable_payment = max(0, round_pounds(free_cash_flow * policy.comfortable_payment_ratio))

    total_debt_service = inputs.existing_debt_payments + max_comfortable_payment
    dscr = round_to(_ratio(net_profit, total_debt_service), 2)

    multiplier = combined_multiplier(inputs.business_age, inputs.credit_profile)
    adjusted_payment = max_comfortable_payment * multiplier
    base_rate = credit_base_rate(inputs.credit_profile, policy)

    business_loan = _borrowing_power(policy.business_loan_terms, adjusted_payment, base_rate)
    equipment = _borrowing_power(policy.equipment_terms, adjusted_payment, base_rate)
    vehicle = _borrowing_power(policy.vehicle_terms, adjusted_payment, base_rate)

    # Revolving facility sized from turnover, not from a repayment
    invoice_facility = max(0, round_pounds(inputs.monthly_revenue * policy.invoice_facility_ratio * multiplier))
    invoice = ProductBorrowingPower(
        product_name="Invoice Finance",
        max_amount=invoice_facility,
        typical_term_months=0,
        monthly_payment=0.0,
        description="Release cash from unpaid invoices",
    )

    score = affordability_score(inputs, free_cash_flow)
    tier = tier_for(score)
    positive, negative = analyze_factors(inputs, free_cash_flow)

    cashflow_breakdown = [
        ChartSlice("Operating Expenses", inputs.monthly_expenses, CHART_COLORS["expenses"]),
        ChartSlice("Existing Debt", inputs.existing_debt_payments, CHART_COLORS["debt"]),
        ChartSlice("Available for Borrowing", max_comfortable_payment, CHART_COLORS["available"]),
        ChartSlice(
            "Remaining Profit",
            max(0, free_cash_flow - max_comfortable_payment),
            CHART_COLORS["remaining"],
        ),
    ]

    borrowing_power_chart = [
        BorrowingPowerPoint("Business Loan", business_loan.max_amount),
        BorrowingPowerPoint("Equipment", equipment.max_amount),
        BorrowingPowerPoint("Vehicle", vehicle.max_amount),
        BorrowingPowerPoint("Invoice Facility", invoice.max_amount),
    ]

    return AffordabilityResult(
        monthly_revenue=inputs.monthly_revenue,
        monthly_expenses=inputs.monthly_expenses,
        existing_debt_payments=inputs.existing_debt_payments,
        free_cash_flow=free_cash_flow,
        net_profit=net_profit,
        profit_margin_percent=round_to(profit_margin, 1),
        max_comfortable_payment=max_comfortable_payment,
        debt_service_coverage_ratio=dscr,
        tier=tier,
        score=score,
        recommendation=recommendation_for(tier, free_cash_flow, inputs.business_age, inputs.credit_profile),
        business_loan=business_loan,
        equipment_finance=equipment,
        vehicle_finance=vehicle,
        invoice_finance=invoice,
        per_product_max_amount={
            "business_loan": business_loan.max_amount,
            "equipment_finance": equipment.max_amount,
            "vehicle_finance": vehicle.max_amount,
            "invoice_finance": invoice.max_amount,
        },
        positive_factors=positive,
        negative_factors=negative,
        cashflow_breakdown=cashflow_breakdown,
        borrowing_power_chart=borrowing_power_chart,
    )
