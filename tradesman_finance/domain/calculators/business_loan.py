"""Business loan calculator - profile-adjusted rate, schedule and eligibility"""

from dataclasses import dataclass
from typing import List

from tradesman_finance.domain import amortization, eligibility
from tradesman_finance.domain.models import (
    AmortizationRow,
    AnnualTurnover,
    BorrowerProfile,
    BusinessAge,
    ChartSlice,
    EligibilityResult,
    YearSummary,
)
from tradesman_finance.domain.policy import DEFAULT_POLICY, FinancePolicy
from tradesman_finance.domain.rates import business_loan_rate


@dataclass(frozen=True)
class BusinessLoanInputs:
    loan_amount: float
    term_months: int
    business_age: BusinessAge
    annual_turnover: AnnualTurnover


@dataclass(frozen=True)
class FundingIdea:
    """Something a loan of this size typically pays for"""

    title: str
    description: str
    icon: str


@dataclass(frozen=True)
class BusinessLoanResult:
    loan_amount: float
    term_months: int
    base_rate: float
    adjusted_rate: float
    rate_adjustment: float
    monthly_payment: float
    total_interest: float
    total_amount: float
    effective_annual_rate: float
    eligibility: EligibilityResult
    schedule: List[AmortizationRow]
    yearly_breakdown: List[YearSummary]
    funding_ideas: List[FundingIdea]
    breakdown: List[ChartSlice]


# (min amount, max amount, idea); None leaves that side open
FUNDING_IDEAS = [
    (10_000, 50_000, FundingIdea("New Work Van", "Ford Transit Custom or Mercedes Sprinter", "truck")),
    (5_000, 25_000, FundingIdea("Complete Tool Kit", "Professional-grade power tools and equipment", "wrench")),
    (15_000, None, FundingIdea("Staff Expansion", "Hire and train a new team member", "users")),
    (25_000, None, FundingIdea("Workshop Upgrade", "Expand or improve your premises", "building")),
    (50_000, None, FundingIdea("Major Equipment", "Excavators, scaffolding, or plant machinery", "cog")),
    (None, 15_000, FundingIdea("Marketing Push", "Website, signage, and advertising campaign", "megaphone")),
]
MAX_FUNDING_IDEAS = 3


def funding_ideas(loan_amount: float) -> List[FundingIdea]:
    matches = [
        idea
        for low, high, idea in FUNDING_IDEAS
        if (low is None or loan_amount >= low) and (high is None or loan_amount <= high)
    ]
    return matches[:MAX_FUNDING_IDEAS]


def calculate_business_loan(inputs: BusinessLoanInputs, policy: FinancePolicy = DEFAULT_POLICY) -> BusinessLoanResult:
    rate = business_loan_rate(inputs.business_age, inputs.annual_turnover, policy)

    loan = amortization.amortize(inputs.loan_amount, inputs.term_months, rate.adjusted_rate)
    rows = amortization.schedule(inputs.loan_amount, inputs.term_months, rate.adjusted_rate)

    profile = BorrowerProfile(business_age=inputs.business_age, turnover=inputs.annual_turnover)
    assessment = eligibility.score(
        profile,
        inputs.loan_amount,
        eligibility.reference_amount_for(inputs.annual_turnover),
    )

    breakdown = [
        ChartSlice("Principal", inputs.loan_amount, "#22c55e"),
        ChartSlice("Interest", loan.total_interest, "#f97316"),
    ]

    return BusinessLoanResult(
        loan_amount=inputs.loan_amount,
        term_months=inputs.term_months,
        base_rate=rate.base_rate,
        adjusted_rate=rate.adjusted_rate,
        rate_adjustment=rate.adjustment,
        monthly_payment=loan.monthly_payment,
        total_interest=loan.total_interest,
        total_amount=loan.total_amount,
        effective_annual_rate=loan.effective_annual_rate,
        eligibility=assessment,
        schedule=rows,
        yearly_breakdown=amortization.yearly_breakdown(rows, inputs.loan_amount),
        funding_ideas=funding_ideas(inputs.loan_amount),
        breakdown=breakdown,
    )
