"""Rounding helpers for GBP amounts"""

from decimal import Decimal, ROUND_HALF_UP


def round_to(value: float, places: int = 2) -> float:
    """Round half away from zero to a fixed number of decimal places"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_money(value: float) -> float:
    """Round to the nearest penny"""
    return round_to(value, 2)


def round_pounds(value: float) -> int:
    """Round to the nearest whole pound"""
    return int(round_to(value, 0))
