"""Unit tests for the five calculators"""

import pytest
from tradesman_finance.domain.calculators.business_loan import (
    BusinessLoanInputs,
    calculate_business_loan,
    funding_ideas,
)
from tradesman_finance.domain.calculators.equipment import EquipmentFinanceInputs, calculate_equipment_finance
from tradesman_finance.domain.calculators.invoice import InvoiceFinanceInputs, calculate_invoice_finance
from tradesman_finance.domain.calculators.vehicle import (
    VehicleFinanceInputs,
    calculate_vehicle_finance,
    mileage_label,
)
from tradesman_finance.domain.models import (
    AnnualTurnover,
    BusinessAge,
    EligibilityTier,
    InvoiceMode,
    MileageBand,
    ProductKind,
    VehicleType,
)


def test_business_loan_default_form():
    result = calculate_business_loan(
        BusinessLoanInputs(
            loan_amount=50_000,
            term_months=36,
            business_age=BusinessAge.TWO_TO_FIVE,
            annual_turnover=AnnualTurnover.FROM_100K_TO_500K,
        )
    )

    assert result.adjusted_rate == 9.9
    assert result.monthly_payment == pytest.approx(1611.01, abs=0.01)
    assert result.eligibility.score == 95
    assert result.eligibility.tier == EligibilityTier.HIGH
    assert len(result.schedule) == 36
    assert len(result.yearly_breakdown) == 3
    assert [s.label for s in result.breakdown] == ["Principal", "Interest"]


def test_business_loan_invalid_amount_gives_zeros():
    result = calculate_business_loan(
        BusinessLoanInputs(
            loan_amount=0,
            term_months=36,
            business_age=BusinessAge.OVER_5,
            annual_turnover=AnnualTurnover.OVER_500K,
        )
    )

    assert result.monthly_payment == 0
    assert result.schedule == []
    assert result.yearly_breakdown == []


def test_funding_ideas_limited_to_three():
    ideas = funding_ideas(20_000)

    assert len(ideas) == 3
    assert [i.title for i in ideas] == ["New Work Van", "Complete Tool Kit", "Staff Expansion"]
    assert [i.title for i in funding_ideas(8_000)] == ["Complete Tool Kit", "Marketing Push"]


def test_equipment_finance_default_form():
    result = calculate_equipment_finance(
        EquipmentFinanceInputs(equipment_value=15_000, deposit_percent=10, term_months=36)
    )

    assert result.deposit_amount == 1_500
    assert result.finance_amount == 13_500
    assert result.rate == 9.9
    assert result.tax_benefit.tax_saving == 3_750
    assert result.total_cost_of_ownership == pytest.approx(1_500 + result.total_payable, abs=0.01)
    assert result.net_cost_after_tax == pytest.approx(result.total_cost_of_ownership - 3_750, abs=0.01)
    assert result.comparison.contract_hire is None
    assert len(result.monthly_comparison) == 36


def test_vehicle_finance_long_term_recommends_hp():
    result = calculate_vehicle_finance(
        VehicleFinanceInputs(
            vehicle_type=VehicleType.VAN,
            vehicle_value=30_000,
            deposit_percent=10,
            term_months=48,
            annual_mileage=MileageBand.MILES_15K,
            vat_registered=True,
        )
    )

    assert result.base_rate == 8.4
    assert result.finance_amount == 27_000
    assert result.recommendation == ProductKind.HP
    assert result.contract.monthly_payment == 587.50
    assert [row.metric for row in result.comparison_table][0] == "Monthly Payment"
    assert result.comparison_table[-1].contract == "15,000 miles/year"
    assert len(result.monthly_comparison) == 48


def test_vehicle_finance_short_term_recommends_contract_hire():
    result = calculate_vehicle_finance(
        VehicleFinanceInputs(
            vehicle_type=VehicleType.VAN,
            vehicle_value=30_000,
            deposit_percent=10,
            term_months=24,
            annual_mileage=MileageBand.MILES_15K,
            vat_registered=True,
        )
    )
    assert result.recommendation == ProductKind.CONTRACT


def test_mileage_label():
    assert mileage_label(MileageBand.MILES_10K) == "10,000 miles/year"


def _invoice(**overrides) -> InvoiceFinanceInputs:
    values = dict(
        mode=InvoiceMode.SINGLE,
        invoice_value=25_000,
        monthly_turnover=100_000,
        invoices_per_month=10,
        advance_rate=85,
        service_fee_rate=1.5,
        discount_fee_rate=2.5,
        payment_days=30,
    )
    values.update(overrides)
    return InvoiceFinanceInputs(**values)


def test_invoice_finance_single_invoice():
    result = calculate_invoice_finance(_invoice())

    assert result.advance_amount == 21_250
    assert result.reserve_amount == 3_750
    assert result.service_fee == 375
    assert result.discount_fee == 531.25
    assert result.total_fees == 906.25
    assert result.net_received == 20_343.75
    assert result.cost_per_invoice == 3.63
    assert [s.percentage for s in result.breakdown[1:3]] == [1.5, 2.13]
    assert result.effective_annual_cost == 54.2
    assert result.facility.invoices_per_month == 1


def test_invoice_finance_facility_uses_average_invoice():
    result = calculate_invoice_finance(_invoice(mode=InvoiceMode.FACILITY))

    assert result.invoice_value == 10_000
    assert result.facility.monthly_advance == 85_000
    assert result.facility.monthly_fees == pytest.approx(result.total_fees * 10, abs=0.01)
    # £100k turnover outstanding for 30 days at 85% advance
    assert result.facility.facility_limit == 85_000


def test_invoice_finance_breakdown_sums_to_invoice():
    result = calculate_invoice_finance(_invoice())

    # Net advance + fees + reserve reconstitutes the invoice
    assert sum(s.value for s in result.breakdown) == pytest.approx(25_000, abs=0.02)
    assert sum(s.percentage for s in result.breakdown) == pytest.approx(100, abs=0.05)


def test_invoice_finance_zero_value():
    result = calculate_invoice_finance(_invoice(invoice_value=0))

    assert result.total_fees == 0
    assert result.breakdown == []


def test_vehicle_finance_defaults_to_vat_registered():
    inputs = VehicleFinanceInputs(
        vehicle_type=VehicleType.VAN,
        vehicle_value=30_000,
        deposit_percent=10,
        term_months=36,
        annual_mileage=MileageBand.MILES_15K,
    )

    assert inputs.vat_registered is True
    assert calculate_vehicle_finance(inputs).hp.vat_recovery_percent == 100
