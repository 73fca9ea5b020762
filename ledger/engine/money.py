"""Decimal helpers shared by the engine.

Every monetary rounding rounds up to whole currency units (lender bias).
"""

from decimal import Decimal, ROUND_CEILING

ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value) -> Decimal:
    """Coerce int/str/float/Decimal/None to Decimal without binary float noise."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def ceil_units(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_CEILING)
