"""Amortization core - annuity payments, repayment schedules and inverse annuity"""

import math
from typing import Iterator, List

from tradesman_finance.domain.models import AmortizationRow, LoanRequest, LoanResult, YearSummary
from tradesman_finance.utils.money import round_money, round_pounds

ZERO_RESULT = LoanResult(monthly_payment=0.0, total_interest=0.0, total_amount=0.0, effective_annual_rate=0.0)


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def compound_growth(r: float, periods: int) -> float:
    """(1+r)^n - 1, accurate for rates too small to register in 1 + r"""
    if r <= 0:
        return 0.0
    return math.expm1(periods * math.log1p(r))


def _raw_payment(principal: float, term_months: int, annual_rate_percent: float) -> float:
    """Unrounded monthly payment; callers guarantee principal > 0 and term > 0"""
    r = monthly_rate(annual_rate_percent)
    growth = compound_growth(r, term_months)
    if growth == 0:
        return principal / term_months

    return principal * r * (1 + growth) / growth


def amortize(principal: float, term_months: int, annual_rate_percent: float) -> LoanResult:
    """
    Calculate repayment using the standard annuity formula.

    M = P * [r(1+r)^n] / [(1+r)^n - 1], with r the monthly rate.

    Non-positive principal or term returns an all-zero result rather than
    raising; a zero rate repays in equal straight-line instalments.
    Rounding to the penny happens only here, at the point of return.
    """
    if principal <= 0 or term_months <= 0:
        return ZERO_RESULT

    if annual_rate_percent == 0:
        return LoanResult(
            monthly_payment=round_money(principal / term_months),
            total_interest=0.0,
            total_amount=round_money(principal),
            effective_annual_rate=0.0,
        )

    payment = _raw_payment(principal, term_months, annual_rate_percent)
    total_amount = payment * term_months
    total_interest = total_amount - principal
    effective_rate = compound_growth(monthly_rate(annual_rate_percent), 12) * 100

    return LoanResult(
        monthly_payment=round_money(payment),
        total_interest=round_money(total_interest),
        total_amount=round_money(total_amount),
        effective_annual_rate=round_money(effective_rate),
    )


def amortize_request(request: LoanRequest) -> LoanResult:
    return amortize(request.principal, request.term_months, request.annual_rate_percent)


def iter_schedule(principal: float, term_months: int, annual_rate_percent: float) -> Iterator[AmortizationRow]:
    """
    Yield one row per month. Each call starts a fresh walk from month 1.

    The balance is floored at zero so float drift never produces a negative
    remaining balance on the final rows.
    """
    if principal <= 0 or term_months <= 0:
        return

    payment = _raw_payment(principal, term_months, annual_rate_percent)
    r = monthly_rate(annual_rate_percent)
    balance = float(principal)

    for month in range(1, term_months + 1):
        interest = balance * r
        principal_portion = payment - interest
        balance = max(0.0, balance - principal_portion)

        yield AmortizationRow(
            month=month,
            payment=round_money(payment),
            principal_portion=round_money(principal_portion),
            interest_portion=round_money(interest),
            remaining_balance=round_money(balance),
        )


def schedule(principal: float, term_months: int, annual_rate_percent: float) -> List[AmortizationRow]:
    """Full amortization schedule, one row per month"""
    return list(iter_schedule(principal, term_months, annual_rate_percent))


def yearly_breakdown(rows: List[AmortizationRow], principal: float) -> List[YearSummary]:
    """Aggregate a schedule into calendar-agnostic 12-month buckets"""
    years = math.ceil(len(rows) / 12)
    summaries = []

    for year in range(1, years + 1):
        bucket = rows[(year - 1) * 12 : year * 12]
        end_balance = bucket[-1].remaining_balance if bucket else principal
        summaries.append(
            YearSummary(
                year=year,
                principal=round_pounds(sum(row.principal_portion for row in bucket)),
                interest=round_pounds(sum(row.interest_portion for row in bucket)),
                end_balance=round_pounds(end_balance),
            )
        )

    return summaries


def max_principal_for_payment(payment: float, term_months: int, annual_rate_percent: float) -> int:
    """
    Inverse annuity: the largest principal a monthly payment can service.

    maxLoan = payment * [1 - (1+r)^-n] / r, or payment * n at a zero rate.
    """
    if payment <= 0 or term_months <= 0:
        return 0

    r = monthly_rate(annual_rate_percent)
    # 1 - (1+r)^-n
    discount = -math.expm1(-term_months * math.log1p(r)) if r > 0 else 0.0
    if discount == 0:
        return round_pounds(payment * term_months)

    return round_pounds(payment * discount / r)
