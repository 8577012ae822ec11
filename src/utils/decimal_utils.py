"""Helpers for Decimal normalization."""

from decimal import ROUND_FLOOR, Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Strings are stripped before parsing. Values that cannot be parsed, as well
    as NaN and infinities, are treated as zero.

    Args:
        value: Raw numeric value from the API, SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return result if result.is_finite() else Decimal("0")


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves going toward positive infinity.

    Args:
        value: Value to round.

    Returns:
        int: Rounded value (``2.5 -> 3``, ``-2.5 -> -2``).
    """
    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


__all__ = ["coerce_decimal", "round_half_up"]
