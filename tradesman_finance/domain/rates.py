"""Rate adjuster - maps borrower and asset profiles onto clamped annual rates"""

from typing import Mapping

from tradesman_finance.domain.models import (
    AnnualTurnover,
    BorrowerProfile,
    BusinessAge,
    CreditProfile,
    RateAdjustment,
    VehicleType,
)
from tradesman_finance.domain.policy import DEFAULT_POLICY, FinancePolicy, RateBand
from tradesman_finance.domain.tables import band_table
from tradesman_finance.utils.money import round_to

# Percentage-point adjustments, summed across independent factors
AGE_RATE_ADJUSTMENTS: Mapping[BusinessAge, float] = band_table(
    BusinessAge,
    {
        BusinessAge.UNDER_1: 4.0,
        BusinessAge.ONE_TO_TWO: 2.0,
        BusinessAge.TWO_TO_FIVE: 0.5,
        BusinessAge.OVER_5: -0.5,
    },
)

TURNOVER_RATE_ADJUSTMENTS: Mapping[AnnualTurnover, float] = band_table(
    AnnualTurnover,
    {
        AnnualTurnover.UNDER_50K: 2.0,
        AnnualTurnover.FROM_50K_TO_100K: 0.5,
        AnnualTurnover.FROM_100K_TO_500K: -0.5,
        AnnualTurnover.OVER_500K: -1.0,
    },
)

# Relative to the 9.9% headline rate: 6.9 / 9.9 / 14.9 / 19.9
CREDIT_RATE_ADJUSTMENTS: Mapping[CreditProfile, float] = band_table(
    CreditProfile,
    {
        CreditProfile.EXCELLENT: -3.0,
        CreditProfile.GOOD: 0.0,
        CreditProfile.FAIR: 5.0,
        CreditProfile.CHALLENGED: 10.0,
    },
)

VEHICLE_BASE_RATES: Mapping[VehicleType, float] = band_table(
    VehicleType,
    {
        VehicleType.VAN: 8.9,
        VehicleType.PICKUP: 9.5,
        VehicleType.TRUCK: 10.5,
    },
)


def profile_adjustment(profile: BorrowerProfile) -> float:
    """Sum of every band adjustment that applies to the profile"""
    adjustment = AGE_RATE_ADJUSTMENTS[profile.business_age]
    if profile.turnover is not None:
        adjustment += TURNOVER_RATE_ADJUSTMENTS[profile.turnover]
    if profile.credit is not None:
        adjustment += CREDIT_RATE_ADJUSTMENTS[profile.credit]
    return adjustment


def adjust_rate(base_rate_percent: float, profile: BorrowerProfile, band: RateBand) -> RateAdjustment:
    """Apply additive profile adjustments to a base rate, clamping once at the end"""
    adjustment = round_to(profile_adjustment(profile), 2)
    adjusted = band.clamp(round_to(base_rate_percent + adjustment, 2))
    return RateAdjustment(base_rate=base_rate_percent, adjustment=adjustment, adjusted_rate=adjusted)


def business_loan_rate(
    business_age: BusinessAge,
    turnover: AnnualTurnover,
    policy: FinancePolicy = DEFAULT_POLICY,
) -> RateAdjustment:
    profile = BorrowerProfile(business_age=business_age, turnover=turnover)
    return adjust_rate(policy.business_loan_base_rate, profile, policy.business_loan_band)


def credit_base_rate(credit: CreditProfile, policy: FinancePolicy = DEFAULT_POLICY) -> float:
    """Headline rate offered to a credit profile, before product offsets"""
    rate = policy.business_loan_base_rate + CREDIT_RATE_ADJUSTMENTS[credit]
    return policy.credit_band.clamp(round_to(rate, 2))


def equipment_rate(equipment_value: float, term_months: int) -> float:
    """Larger equipment values get cheaper money; short terms a little cheaper still"""
    if equipment_value >= 50_000:
        rate = 7.9
    elif equipment_value >= 25_000:
        rate = 8.9
    elif equipment_value >= 10_000:
        rate = 9.9
    else:
        rate = 11.9

    if term_months <= 24:
        rate -= 0.5
    elif term_months >= 48:
        rate += 0.5

    return round_to(rate, 2)


def vehicle_rate(
    vehicle_type: VehicleType,
    vehicle_value: float,
    policy: FinancePolicy = DEFAULT_POLICY,
) -> float:
    rate = VEHICLE_BASE_RATES[vehicle_type]

    if vehicle_value >= 50_000:
        rate -= 1.0
    elif vehicle_value >= 30_000:
        rate -= 0.5

    return policy.vehicle_band.clamp(round_to(rate, 2))
