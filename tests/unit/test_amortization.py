"""Unit tests for the amortization core"""

import pytest
from tradesman_finance.domain.amortization import (
    amortize,
    amortize_request,
    iter_schedule,
    max_principal_for_payment,
    schedule,
    yearly_breakdown,
)
from tradesman_finance.domain.models import LoanRequest


def test_amortize_standard_loan():
    """£50k over 36 months at 9.9%"""
    result = amortize(50_000, 36, 9.9)

    assert result.monthly_payment == pytest.approx(1611.01, abs=0.01)
    assert result.total_amount == pytest.approx(57996.46, abs=0.01)
    assert result.total_interest == pytest.approx(7996.46, abs=0.01)
    assert result.effective_annual_rate == pytest.approx(10.36, abs=0.01)


def test_amortize_zero_rate_is_straight_line():
    result = amortize(10_000, 10, 0)

    assert result.monthly_payment == 1000.00
    assert result.total_interest == 0
    assert result.total_amount == 10_000
    assert result.effective_annual_rate == 0


@pytest.mark.parametrize("principal,term", [(0, 36), (-500, 36), (10_000, 0), (10_000, -12)])
def test_amortize_non_positive_inputs_return_zeros(principal, term):
    result = amortize(principal, term, 9.9)

    assert result.monthly_payment == 0
    assert result.total_interest == 0
    assert result.total_amount == 0
    assert result.effective_annual_rate == 0


def test_amortize_request_matches_amortize():
    request = LoanRequest(principal=25_000, term_months=48, annual_rate_percent=8.4)
    assert amortize_request(request) == amortize(25_000, 48, 8.4)


def test_totals_consistent_with_monthly_payment():
    """total ≈ monthly × term, interest = total - principal"""
    result = amortize(73_500, 60, 12.4)

    assert result.total_amount == pytest.approx(result.monthly_payment * 60, abs=60 * 0.005 + 0.01)
    assert result.total_interest == pytest.approx(result.total_amount - 73_500, abs=0.01)


def test_schedule_principal_sums_to_loan():
    rows = schedule(50_000, 36, 9.9)

    assert len(rows) == 36
    assert [row.month for row in rows] == list(range(1, 37))
    # Per-row penny rounding may drift by at most a penny per row
    assert sum(row.principal_portion for row in rows) == pytest.approx(50_000, abs=0.36)


def test_schedule_balance_non_increasing_and_ends_at_zero():
    rows = schedule(18_250, 48, 11.9)

    balances = [row.remaining_balance for row in rows]
    assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))
    assert balances[-1] == 0
    assert min(balances) >= 0


def test_schedule_interest_decreases_over_time():
    rows = schedule(50_000, 36, 9.9)

    assert rows[0].interest_portion == pytest.approx(412.50, abs=0.01)
    assert rows[-1].interest_portion < rows[0].interest_portion
    assert rows[-1].principal_portion > rows[0].principal_portion


def test_schedule_zero_rate():
    rows = schedule(12_000, 12, 0)

    assert all(row.interest_portion == 0 for row in rows)
    assert all(row.principal_portion == 1000 for row in rows)
    assert rows[-1].remaining_balance == 0


def test_schedule_empty_for_invalid_inputs():
    assert schedule(0, 36, 9.9) == []
    assert schedule(10_000, 0, 9.9) == []


def test_iter_schedule_restarts_on_each_call():
    first = list(iter_schedule(5_000, 12, 9.9))
    second = list(iter_schedule(5_000, 12, 9.9))
    assert first == second


def test_yearly_breakdown_buckets_by_twelve_months():
    rows = schedule(50_000, 30, 9.9)
    years = yearly_breakdown(rows, 50_000)

    assert [y.year for y in years] == [1, 2, 3]
    assert years[-1].end_balance == 0
    assert sum(y.principal for y in years) == pytest.approx(50_000, abs=3)
    assert all(isinstance(y.interest, int) for y in years)


def test_max_principal_inverts_amortize():
    payment = amortize(40_000, 36, 9.9).monthly_payment
    assert max_principal_for_payment(payment, 36, 9.9) == pytest.approx(40_000, abs=1)


def test_max_principal_zero_rate_and_invalid_inputs():
    assert max_principal_for_payment(500, 24, 0) == 12_000
    assert max_principal_for_payment(0, 24, 9.9) == 0
    assert max_principal_for_payment(-100, 24, 9.9) == 0
    assert max_principal_for_payment(500, 0, 9.9) == 0


def test_amortize_tiny_positive_rate_is_effectively_straight_line():
    """A rate too small to register in 1 + r still yields a payment"""
    result = amortize(10_000, 12, 1e-14)

    assert result.monthly_payment == pytest.approx(833.33, abs=0.01)
    assert result.total_amount == pytest.approx(10_000, abs=0.01)
    assert result.total_interest == pytest.approx(0, abs=0.01)


def test_schedule_tiny_positive_rate():
    rows = schedule(10_000, 12, 1e-14)

    assert len(rows) == 12
    assert rows[0].payment == pytest.approx(833.33, abs=0.01)
    assert rows[-1].remaining_balance == 0


def test_max_principal_tiny_positive_rate():
    assert max_principal_for_payment(500, 24, 1e-14) == 12_000
