"""
Loan policy applied on top of a credit score: pricing, routing and sizing.
Thresholds are kept next to each other so they move together.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from core.config import settings
from domain.models import AIAssessment, ApplicationStatus, ScoreResult
from domain.value_objects import Money

REVIEW_MIN_SCORE = 600
HIGH_CONFIDENCE_MIN_SCORE = 650

# (minimum score, annual rate in percent), checked top-down
INTEREST_RATE_BANDS: list[tuple[int, Decimal]] = [
    (750, Decimal("8.5")),
    (650, Decimal("12.0")),
]
DEFAULT_INTEREST_RATE = Decimal("15.5")


def status_for(score: int) -> ApplicationStatus:
    return ApplicationStatus.REVIEWING if score >= REVIEW_MIN_SCORE else ApplicationStatus.REJECTED


def interest_rate_for(score: int) -> Decimal:
    for min_score, rate in INTEREST_RATE_BANDS:
        if score >= min_score:
            return rate
    return DEFAULT_INTEREST_RATE


def confidence_for(score: int) -> str:
    return "high" if score >= HIGH_CONFIDENCE_MIN_SCORE else "medium"


def recommended_amount(
    requested: Money, monthly_revenue: Money, months: int | None = None
) -> Money:
    """Never lend more than N months of revenue (6 by default)."""
    months = settings.RECOMMENDED_REVENUE_MONTHS if months is None else months
    cap = monthly_revenue.amount * months
    return Money(min(requested.amount, cap), requested.currency)


def assessment_valid_until(now: datetime, days: int | None = None) -> datetime:
    days = settings.ASSESSMENT_VALIDITY_DAYS if days is None else days
    return now + timedelta(days=days)


def build_ai_assessment(
    result: ScoreResult, requested: Money, monthly_revenue: Money
) -> AIAssessment:
    return AIAssessment(
        credit_score=result.score,
        risk_level=result.risk_level,
        recommended_amount=recommended_amount(requested, monthly_revenue).amount,
        factors=result.factors,
        confidence=confidence_for(result.score),
    )
