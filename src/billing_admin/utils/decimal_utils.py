"""Helpers for Decimal normalization."""

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation


ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from a JSON payload or a caller.

    Returns:
        Decimal: Normalized numeric value. ``None`` and empty strings map
        to zero.

    Raises:
        ValueError: If the value is not numeric, or is NaN or infinite.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Non-finite numeric value: {value!r}")
        return value
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not a valid amount: {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Non-finite numeric value: {value!r}")
    return result


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """Return the Decimal sum of values, zero for an empty iterable."""
    return sum(values, start=ZERO)


__all__ = ["ZERO", "coerce_decimal", "sum_decimals"]
