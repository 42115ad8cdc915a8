from __future__ import annotations

from decimal import Decimal

from domain.models import User
from domain.value_objects import BusinessProfile, Money


def extract_profile(user: User) -> BusinessProfile:
    """
    Scoring inputs from a stored user. Keep this the only place that knows
    which user columns feed the scorer.
    """
    return BusinessProfile(
        established_year=user.established_year,
        monthly_revenue=Money.parse(user.monthly_revenue),
        employee_count=Decimal(user.employee_count or 0),
        business_type=user.business_type,
        is_verified=bool(user.is_verified),
    )
