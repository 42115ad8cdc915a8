from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

ZERO = Decimal("0")


def parse_amount(raw: Any) -> Decimal:
    """
    Lenient money parser: None, "", garbage, NaN and infinities all become 0.
    Floats go through str() so 0.1 stays 0.1 and not its binary expansion.
    """
    if raw is None or isinstance(raw, bool):
        return ZERO
    if isinstance(raw, Decimal):
        value = raw
    else:
        try:
            value = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not value.is_finite():
        return ZERO
    return value


# counts and years outside this range are nonsense; clamping keeps int() cheap
COUNT_LIMIT = 10**9


def parse_count(raw: Any) -> int:
    """Whole-number parser on top of parse_amount; truncates and clamps to +/-1e9."""
    value = parse_amount(raw)
    value = min(max(value, Decimal(-COUNT_LIMIT)), Decimal(COUNT_LIMIT))
    return int(value)


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str = "AED"

    @classmethod
    def parse(cls, raw: Any, currency: str = "AED") -> "Money":
        return cls(parse_amount(raw), currency)


@dataclass(frozen=True)
class BusinessProfile:
    """Subset of a business' data the credit scorer looks at."""

    established_year: int | None = None
    monthly_revenue: Money = Money(ZERO)
    # kept as a Decimal so 5.5 employees still clears the "> 5" bucket
    employee_count: Decimal = ZERO
    business_type: str | None = None
    is_verified: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "BusinessProfile":
        """
        Build a profile from loosely typed input (request bodies, DB rows).
        Accepts camelCase or snake_case keys; never raises on bad values.
        """
        data = data or {}

        def pick(camel: str, snake: str) -> Any:
            return data[camel] if camel in data else data.get(snake)

        year = parse_count(pick("establishedYear", "established_year")) or None
        business_type = pick("businessType", "business_type")
        return cls(
            established_year=year,
            monthly_revenue=Money.parse(pick("monthlyRevenue", "monthly_revenue")),
            employee_count=parse_amount(pick("employeeCount", "employee_count")),
            business_type=business_type if isinstance(business_type, str) else None,
            is_verified=bool(pick("isVerified", "is_verified")),
        )
