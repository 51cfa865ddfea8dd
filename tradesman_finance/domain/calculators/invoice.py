"""Invoice finance calculator - fee-based advance pricing for single invoices or a facility"""

from dataclasses import dataclass
from typing import List

from tradesman_finance.domain.models import InvoiceMode
from tradesman_finance.utils.money import round_money, round_to

DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class InvoiceFinanceInputs:
    """
    Rates are percentages: advance_rate 85 means 85% of invoice value,
    discount_fee_rate is charged per 30 days on the advanced amount.
    """

    mode: InvoiceMode
    invoice_value: float
    monthly_turnover: float
    invoices_per_month: int
    advance_rate: float
    service_fee_rate: float
    discount_fee_rate: float
    payment_days: int


@dataclass(frozen=True)
class FacilitySummary:
    monthly_turnover: float
    invoices_per_month: int
    monthly_advance: float
    monthly_fees: float
    monthly_net_received: float
    annual_fees: float
    facility_limit: float


@dataclass(frozen=True)
class InvoiceSlice:
    label: str
    value: float
    color: str
    percentage: float


@dataclass(frozen=True)
class InvoiceFinanceResult:
    mode: InvoiceMode
    invoice_value: float
    advance_amount: float
    reserve_amount: float
    service_fee: float
    discount_fee: float
    total_fees: float
    net_received: float
    facility: FacilitySummary
    effective_annual_cost: float
    cost_per_invoice: float
    breakdown: List[InvoiceSlice]


def empty_result(mode: InvoiceMode) -> InvoiceFinanceResult:
    return InvoiceFinanceResult(
        mode=mode,
        invoice_value=0.0,
        advance_amount=0.0,
        reserve_amount=0.0,
        service_fee=0.0,
        discount_fee=0.0,
        total_fees=0.0,
        net_received=0.0,
        facility=FacilitySummary(0.0, 0, 0.0, 0.0, 0.0, 0.0, 0.0),
        effective_annual_cost=0.0,
        cost_per_invoice=0.0,
        breakdown=[],
    )


def average_invoice_value(inputs: InvoiceFinanceInputs) -> float:
    if inputs.mode is InvoiceMode.SINGLE:
        return inputs.invoice_value
    if inputs.invoices_per_month > 0:
        return inputs.monthly_turnover / inputs.invoices_per_month
    return 0.0


def calculate_invoice_finance(inputs: InvoiceFinanceInputs) -> InvoiceFinanceResult:
    """
    Price invoice finance per invoice (or per average invoice for a facility).

    A non-positive invoice value produces an all-zero result.
    """
    invoice_value = average_invoice_value(inputs)
    if invoice_value <= 0:
        return empty_result(inputs.mode)

    advance_amount = invoice_value * inputs.advance_rate / 100
    reserve_amount = invoice_value - advance_amount

    service_fee = invoice_value * inputs.service_fee_rate / 100
    discount_fee = advance_amount * inputs.discount_fee_rate / 100 * inputs.payment_days / DAYS_PER_MONTH
    total_fees = service_fee + discount_fee
    net_received = advance_amount - total_fees

    if inputs.mode is InvoiceMode.FACILITY:
        invoices_per_month = inputs.invoices_per_month
        monthly_turnover = inputs.monthly_turnover
    else:
        invoices_per_month = 1
        monthly_turnover = invoice_value

    facility = FacilitySummary(
        monthly_turnover=monthly_turnover,
        invoices_per_month=invoices_per_month,
        monthly_advance=round_money(advance_amount * invoices_per_month),
        monthly_fees=round_money(total_fees * invoices_per_month),
        monthly_net_received=round_money(net_received * invoices_per_month),
        annual_fees=round_money(total_fees * invoices_per_month * 12),
        # Outstanding ledger at any time is turnover * payment days / 30
        facility_limit=round_money(
            monthly_turnover * inputs.payment_days / DAYS_PER_MONTH * inputs.advance_rate / 100
        ),
    )

    if inputs.payment_days > 0 and net_received > 0:
        effective_annual_cost = total_fees / net_received * DAYS_PER_YEAR / inputs.payment_days * 100
    else:
        effective_annual_cost = 0.0

    def _slice(label: str, value: float, color: str) -> InvoiceSlice:
        return InvoiceSlice(label, round_money(value), color, round_to(value * 100 / invoice_value, 2))

    breakdown = [
        _slice("Net Advance", net_received, "#22c55e"),
        _slice("Service Fee", service_fee, "#f97316"),
        _slice("Discount Fee", discount_fee, "#ef4444"),
        _slice("Reserve (Held)", reserve_amount, "#6b7280"),
    ]

    return InvoiceFinanceResult(
        mode=inputs.mode,
        invoice_value=round_money(invoice_value),
        advance_amount=round_money(advance_amount),
        reserve_amount=round_money(reserve_amount),
        service_fee=round_money(service_fee),
        discount_fee=round_money(discount_fee),
        total_fees=round_money(total_fees),
        net_received=round_money(net_received),
        facility=facility,
        effective_annual_cost=round_to(effective_annual_cost, 1),
        cost_per_invoice=round_to(total_fees * 100 / invoice_value, 2),
        breakdown=breakdown,
    )
