"""Eligibility scorer - 0-100 score, tier and explanatory factors for a loan request"""

from typing import List, Mapping

from tradesman_finance.domain.models import (
    AnnualTurnover,
    BorrowerProfile,
    BusinessAge,
    EligibilityResult,
    EligibilityTier,
    Factor,
    ScoreRule,
)
from tradesman_finance.domain.tables import band_table
from tradesman_finance.utils.money import round_pounds

BASE_SCORE = 50
HIGH_TIER_THRESHOLD = 70
MEDIUM_TIER_THRESHOLD = 40

CONSERVATIVE_RATIO = 0.25
STRETCHED_RATIO = 0.75

AGE_SCORE_RULES: Mapping[BusinessAge, ScoreRule] = band_table(
    BusinessAge,
    {
        BusinessAge.UNDER_1: ScoreRule(-15, Factor("Trading less than 1 year", positive=False)),
        BusinessAge.ONE_TO_TWO: ScoreRule(5, Factor("1-2 years trading history", positive=True)),
        BusinessAge.TWO_TO_FIVE: ScoreRule(15, Factor("Established trading history", positive=True)),
        BusinessAge.OVER_5: ScoreRule(25, Factor("Long trading history", positive=True)),
    },
)

TURNOVER_SCORE_RULES: Mapping[AnnualTurnover, ScoreRule] = band_table(
    AnnualTurnover,
    {
        AnnualTurnover.UNDER_50K: ScoreRule(-10, Factor("Lower annual turnover", positive=False)),
        AnnualTurnover.FROM_50K_TO_100K: ScoreRule(10, Factor("Solid turnover", positive=True)),
        AnnualTurnover.FROM_100K_TO_500K: ScoreRule(20, Factor("Strong turnover", positive=True)),
        AnnualTurnover.OVER_500K: ScoreRule(30, Factor("Excellent turnover", positive=True)),
    },
)

# Representative annual turnover per band, used for the loan-to-turnover ratio
TURNOVER_REFERENCE_AMOUNTS: Mapping[AnnualTurnover, float] = band_table(
    AnnualTurnover,
    {
        AnnualTurnover.UNDER_50K: 40_000,
        AnnualTurnover.FROM_50K_TO_100K: 75_000,
        AnnualTurnover.FROM_100K_TO_500K: 250_000,
        AnnualTurnover.OVER_500K: 750_000,
    },
)

CONSERVATIVE_AMOUNT_RULE = ScoreRule(10, Factor("Conservative loan amount", positive=True))
STRETCHED_AMOUNT_RULE = ScoreRule(-10, Factor("High loan-to-turnover ratio", positive=False))

TIER_MESSAGES: Mapping[EligibilityTier, str] = band_table(
    EligibilityTier,
    {
        EligibilityTier.HIGH: "Strong eligibility - You have a good chance of approval",
        EligibilityTier.MEDIUM: "Moderate eligibility - Additional documentation may be required",
        EligibilityTier.LOW: "Lower eligibility - Specialist lenders may still be available",
    },
)


def reference_amount_for(turnover: AnnualTurnover) -> float:
    return TURNOVER_REFERENCE_AMOUNTS[turnover]


def loan_ratio_rule(requested_amount: float, reference_amount: float) -> ScoreRule | None:
    """Ratio adjustment; a non-positive reference amount counts as a zero ratio"""
    ratio = requested_amount / reference_amount if reference_amount > 0 else 0.0

    if ratio < CONSERVATIVE_RATIO:
        return CONSERVATIVE_AMOUNT_RULE
    if ratio > STRETCHED_RATIO:
        return STRETCHED_AMOUNT_RULE
    return None


def tier_for(score: float) -> EligibilityTier:
    if score >= HIGH_TIER_THRESHOLD:
        return EligibilityTier.HIGH
    if score >= MEDIUM_TIER_THRESHOLD:
        return EligibilityTier.MEDIUM
    return EligibilityTier.LOW


def clamp_score(points: float) -> int:
    return max(0, min(100, round_pounds(points)))


def split_factors(rules: List[ScoreRule]) -> tuple[List[str], List[str]]:
    """Partition the factors of matched rules into (positive, negative) labels, keeping order"""
    positive = [r.factor.label for r in rules if r.factor is not None and r.factor.positive]
    negative = [r.factor.label for r in rules if r.factor is not None and not r.factor.positive]
    return positive, negative


def matched_rules(profile: BorrowerProfile, requested_amount: float, reference_amount: float) -> List[ScoreRule]:
    """Every rule that applies to the request, in evaluation order"""
    rules = [AGE_SCORE_RULES[profile.business_age]]
    if profile.turnover is not None:
        rules.append(TURNOVER_SCORE_RULES[profile.turnover])

    ratio_rule = loan_ratio_rule(requested_amount, reference_amount)
    if ratio_rule is not None:
        rules.append(ratio_rule)

    return rules


def score(profile: BorrowerProfile, requested_amount: float, reference_amount: float) -> EligibilityResult:
    """
    Score a loan request out of 100.

    The score and the factor lists come from the same matched rules, so a
    band can never move the number without also explaining itself.
    """
    rules = matched_rules(profile, requested_amount, reference_amount)
    total = clamp_score(BASE_SCORE + sum(rule.points for rule in rules))
    tier = tier_for(total)
    positive, negative = split_factors(rules)

    return EligibilityResult(
        score=total,
        tier=tier,
        message=TIER_MESSAGES[tier],
        positive_factors=positive,
        negative_factors=negative,
    )
