"""Date helpers shared by the dashboard builders."""

from datetime import date

from src.domain.constants import MONTH_ABBREVIATIONS, NO_DATE_RANGE_LABEL


def format_month_label(value: date) -> str:
    """Return the ``"Mar 2024"`` label for a date's month."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def format_date_range(start: date | None, end: date | None) -> str:
    """Format a date span at month granularity.

    Args:
        start: First date of the span.
        end: Last date of the span.

    Returns:
        str: ``"No date range"`` when either bound is missing, a single
        ``"Mon YYYY"`` when both fall in the same month, otherwise
        ``"Mon YYYY - Mon YYYY"``.
    """
    if start is None or end is None:
        return NO_DATE_RANGE_LABEL
    start_label = format_month_label(start)
    end_label = format_month_label(end)
    if start_label == end_label:
        return start_label
    return f"{start_label} - {end_label}"


def earliest(current: date | None, candidate: date | None) -> date | None:
    """Return the earlier date, ignoring missing values."""
    if candidate is None:
        return current
    if current is None or candidate < current:
        return candidate
    return current


def latest(current: date | None, candidate: date | None) -> date | None:
    """Return the later date, ignoring missing values."""
    if candidate is None:
        return current
    if current is None or candidate > current:
        return candidate
    return current


__all__ = ["format_month_label", "format_date_range", "earliest", "latest"]
