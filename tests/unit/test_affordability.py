"""Unit tests for affordability analysis"""

import pytest
from dataclasses import replace
from tradesman_finance.domain.affordability import (
    affordability_score,
    analyze,
    combined_multiplier,
    debt_ratio_rule,
    recommendation_for,
)
from tradesman_finance.domain.amortization import amortize
from tradesman_finance.domain.models import AffordabilityInputs, BusinessAge, CreditProfile, EligibilityTier


def test_cash_flow_and_comfortable_payment(typical_affordability):
    result = analyze(typical_affordability)

    assert result.net_profit == 4000
    assert result.free_cash_flow == 3500
    assert result.max_comfortable_payment == 1400
    assert result.profit_margin_percent == 40.0
    # 4000 / (500 + 1400)
    assert result.debt_service_coverage_ratio == pytest.approx(2.11, abs=0.01)


def test_score_and_tier(typical_affordability):
    result = analyze(typical_affordability)

    # 50 + 17.5 cash flow + 10 debt + 10 age + 10 credit
    assert result.score == 98
    assert result.tier == EligibilityTier.HIGH
    assert result.positive_factors == [
        "Strong profit margin over 30%",
        "Low existing debt burden",
        "Established business (2-5 years)",
        "Good credit history",
    ]
    assert result.negative_factors == []


def test_borrowing_power_per_product(typical_affordability):
    result = analyze(typical_affordability)

    assert result.business_loan.typical_term_months == 36
    assert result.equipment_finance.typical_term_months == 48
    assert result.vehicle_finance.typical_term_months == 48
    # Business loan capacity is the principal the full comfortable payment services at 9.9%
    assert amortize(result.business_loan.max_amount, 36, 9.9).monthly_payment == pytest.approx(1400, abs=1)
    assert result.invoice_finance.max_amount == 8000
    assert result.per_product_max_amount == {
        "business_loan": result.business_loan.max_amount,
        "equipment_finance": result.equipment_finance.max_amount,
        "vehicle_finance": result.vehicle_finance.max_amount,
        "invoice_finance": 8000,
    }


def test_quote_capped_at_product_limit():
    """Monthly quote is priced on the lesser of capacity and the product cap"""
    strong = analyze(
        replace(
            _inputs(),
            monthly_revenue=100_000,
            monthly_expenses=20_000,
            existing_debt_payments=0,
        )
    )
    assert strong.business_loan.max_amount > 100_000
    assert strong.business_loan.monthly_payment == amortize(100_000, 36, 9.9).monthly_payment


def test_negative_free_cash_flow_floors_payment():
    result = analyze(replace(_inputs(), monthly_revenue=5_000, monthly_expenses=6_000, existing_debt_payments=500))

    assert result.free_cash_flow == -1500
    assert result.max_comfortable_payment == 0
    assert result.business_loan.max_amount == 0
    assert result.business_loan.monthly_payment == 0


def test_zero_revenue_guards():
    result = analyze(replace(_inputs(), monthly_revenue=0, monthly_expenses=0, existing_debt_payments=0))

    assert result.profit_margin_percent == 0
    assert result.debt_service_coverage_ratio == 0
    assert 0 <= result.score <= 100


def test_multiplier_scales_capacity():
    assert combined_multiplier(BusinessAge.OVER_5, CreditProfile.EXCELLENT) == pytest.approx(1.38)
    assert combined_multiplier(BusinessAge.UNDER_1, CreditProfile.CHALLENGED) == pytest.approx(0.3)

    weak = analyze(replace(_inputs(), business_age=BusinessAge.UNDER_1, credit_profile=CreditProfile.CHALLENGED))
    base = analyze(_inputs())
    assert weak.business_loan.max_amount < base.business_loan.max_amount


def test_heavy_debt_lowers_score():
    light = affordability_score(_inputs(), 3500)
    heavy = affordability_score(replace(_inputs(), existing_debt_payments=4_500), -500)
    assert heavy < light


def test_recommendation_messages():
    assert "excellent position" in recommendation_for(
        EligibilityTier.HIGH, 5_000, BusinessAge.OVER_5, CreditProfile.EXCELLENT
    )
    assert "reducing expenses" in recommendation_for(
        EligibilityTier.MEDIUM, 300, BusinessAge.TWO_TO_FIVE, CreditProfile.GOOD
    )
    assert "trading history" in recommendation_for(
        EligibilityTier.MEDIUM, 2_000, BusinessAge.UNDER_1, CreditProfile.GOOD
    )
    assert "specialist lenders" in recommendation_for(
        EligibilityTier.LOW, 2_000, BusinessAge.TWO_TO_FIVE, CreditProfile.CHALLENGED
    )
    assert "invoice finance" in recommendation_for(
        EligibilityTier.LOW, 2_000, BusinessAge.TWO_TO_FIVE, CreditProfile.FAIR
    )


def test_chart_series(typical_affordability):
    result = analyze(typical_affordability)

    labels = [s.label for s in result.cashflow_breakdown]
    assert labels == ["Operating Expenses", "Existing Debt", "Available for Borrowing", "Remaining Profit"]
    assert result.cashflow_breakdown[-1].value == 2100
    assert [p.product for p in result.borrowing_power_chart] == [
        "Business Loan",
        "Equipment",
        "Vehicle",
        "Invoice Facility",
    ]


def _inputs() -> AffordabilityInputs:
    return AffordabilityInputs(
        monthly_revenue=10_000,
        monthly_expenses=6_000,
        existing_debt_payments=500,
        business_age=BusinessAge.TWO_TO_FIVE,
        credit_profile=CreditProfile.GOOD,
    )


@pytest.mark.parametrize(
    "debt,points,factor",
    [
        (0, 10, "No existing debt payments"),
        (500, 10, "Low existing debt burden"),
        (1_500, 5, None),
        (2_500, 0, None),
        (3_500, -10, "High existing debt may reduce approval chances"),
        (4_500, -20, "High existing debt may reduce approval chances"),
    ],
)
def test_debt_rule_points_and_factor(debt, points, factor):
    rule = debt_ratio_rule(debt, 10_000)

    assert rule.points == points
    assert (rule.factor.label if rule.factor else None) == factor


@pytest.mark.parametrize("debt", [0, 500, 1_500, 3_500, 4_500])
def test_debt_factor_reported_with_its_points(debt):
    """The debt factor in the result is the one the score was built from"""
    result = analyze(replace(_inputs(), existing_debt_payments=debt))
    rule = debt_ratio_rule(debt, 10_000)
    reported = result.positive_factors + result.negative_factors

    debt_labels = {
        "No existing debt payments",
        "Low existing debt burden",
        "High existing debt may reduce approval chances",
    }
    assert [label for label in reported if label in debt_labels] == ([rule.factor.label] if rule.factor else [])
