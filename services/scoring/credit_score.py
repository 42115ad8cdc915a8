from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from domain.models import FactorScore, RiskLevel, ScoreResult
from domain.value_objects import BusinessProfile

BASE_SCORE = 600
MIN_SCORE = 300
MAX_SCORE = 850

STABLE_BUSINESS_TYPES = frozenset({"trading", "manufacturing", "services"})

# Display weights for the factor breakdown. They are NOT used to compute the
# score; the UI draws one progress bar per factor with them.
FACTOR_WEIGHTS: dict[str, float] = {
    "businessAge": 0.20,
    "revenue": 0.30,
    "employeeCount": 0.20,
    "businessType": 0.15,
    "verification": 0.15,
}


def risk_level_for(score: int) -> RiskLevel:
    if score >= 750:
        return RiskLevel.LOW
    if score >= 650:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def _age_points(profile: BusinessProfile, current_year: int) -> int:
    age = current_year - (profile.established_year or current_year)
    return min(age * 20, 100)


def _revenue_points(revenue: Decimal) -> int:
    if revenue > 100000:
        return 100
    if revenue > 50000:
        return 50
    if revenue > 20000:
        return 25
    return 0


def _employee_points(count: Decimal) -> int:
    if count > 50:
        return 50
    if count > 10:
        return 25
    if count > 5:
        return 10
    return 0


def _is_stable_type(business_type: str | None) -> bool:
    return (business_type or "").lower() in STABLE_BUSINESS_TYPES


def _factors(profile: BusinessProfile, current_year: int) -> dict[str, FactorScore]:
    revenue = profile.monthly_revenue.amount
    employees = profile.employee_count
    # revenue and headcount use their own buckets here, see DESIGN.md
    sub_scores = {
        "businessAge": _age_points(profile, current_year),
        "revenue": 50 if revenue > 50000 else 25,
        "employeeCount": 50 if employees > 50 else 25 if employees > 10 else 10,
        "businessType": 30 if _is_stable_type(profile.business_type) else 0,
        "verification": 50 if profile.is_verified else 0,
    }
    return {
        name: FactorScore(score=sub_scores[name], weight=weight)
        for name, weight in FACTOR_WEIGHTS.items()
    }


def compute_credit_score(
    profile: BusinessProfile | Mapping[str, Any] | None,
    current_year: int | None = None,
) -> ScoreResult:
    """
    Score a business profile on the 300-850 scale.

    Pure and total: no I/O, no randomness, and missing or malformed numeric
    fields count as zero instead of raising. Every threshold is a strict ">",
    so a value sitting exactly on a threshold lands in the lower bucket.

    The returned ``factors`` are an explanation only. Their weights are fixed
    display metadata and do not add up to ``score``; do not turn the score
    into a weighted sum of them.
    """
    if not isinstance(profile, BusinessProfile):
        profile = BusinessProfile.from_mapping(profile)
    year = current_year if current_year is not None else date.today().year

    score = BASE_SCORE
    score += _age_points(profile, year)
    score += _revenue_points(profile.monthly_revenue.amount)
    score += _employee_points(profile.employee_count)
    if _is_stable_type(profile.business_type):
        score += 30

    score = min(max(score, MIN_SCORE), MAX_SCORE)

    return ScoreResult(
        score=score,
        factors=_factors(profile, year),
        risk_level=risk_level_for(score),
    )
