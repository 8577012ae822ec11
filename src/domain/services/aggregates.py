"""Time-bucketed aggregates for the dashboard charts.

All figures come from a single pass over the records in the order the data
source returned them. The revenue change metric depends on that order: the
"latest" month is the greatest month key seen so far, and revenue is only
credited to it while it is the latest. A record from an older month arriving
after a newer one is counted in its bucket and in the totals but not in the
latest/previous comparison.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
import logging
from logging import Logger

from src.domain.constants import (
    DEFAULT_AGGREGATE_CATEGORY,
    EXPENSE_CATEGORY_SUFFIX,
    TOP_CATEGORY_COUNT,
)
from src.domain.models.records import (
    CategoryAggregate,
    DashboardAggregates,
    MetricsSummary,
    MonthlyBucket,
    QuarterAggregate,
    RawRecord,
)
from src.domain.services.dates import (
    earliest,
    format_date_range,
    format_month_label,
    latest,
)
from src.utils.decimal_utils import coerce_decimal, round_half_up


@dataclass
class _MonthAccumulator:
    label: str
    year: int
    month: int
    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")


def build_dashboard_aggregates(
    records: Sequence[RawRecord],
    logger: Logger | None = None,
) -> DashboardAggregates:
    """Compute monthly, category, quarterly and headline figures.

    Args:
        records: Records in the order returned by the data source.
        logger: Logger used to report malformed input.

    Returns:
        DashboardAggregates: Chart series and metrics, or the empty form when
        there are no records or they cannot be processed.
    """
    resolved_logger = logger or logging.getLogger(__name__)
    try:
        if not records:
            return DashboardAggregates.empty()
        return _build(records)
    except Exception as exc:
        resolved_logger.error(f"Failed to build dashboard aggregates: {exc}")
        return DashboardAggregates.empty()


def _build(records: Sequence[RawRecord]) -> DashboardAggregates:
    overall_start: date | None = None
    overall_end: date | None = None
    months: dict[tuple[int, int], _MonthAccumulator] = {}
    category_amounts: dict[str, Decimal] = {}
    category_bounds: dict[str, tuple[date | None, date | None]] = {}
    total_revenue = Decimal("0")
    total_expenses = Decimal("0")
    latest_key: tuple[int, int] | None = None
    latest_revenue = Decimal("0")
    previous_revenue = Decimal("0")

    for record in records:
        amount = coerce_decimal(record.amount)
        category = record.category or DEFAULT_AGGREGATE_CATEGORY
        from_date = record.from_date
        to_date = record.to_date or from_date

        overall_start = earliest(overall_start, from_date)
        overall_end = latest(overall_end, to_date)

        start, end = category_bounds.get(category, (None, None))
        category_bounds[category] = (
            earliest(start, from_date),
            latest(end, to_date),
        )

        if from_date is not None:
            key = (from_date.year, from_date.month)
            if latest_key is None or key > latest_key:
                previous_revenue = latest_revenue
                latest_key = key
                latest_revenue = Decimal("0")

            bucket = months.get(key)
            if bucket is None:
                bucket = _MonthAccumulator(
                    label=format_month_label(from_date),
                    year=from_date.year,
                    month=from_date.month,
                )
                months[key] = bucket

            if amount >= 0:
                bucket.revenue += amount
                total_revenue += amount
                if key == latest_key:
                    latest_revenue += amount
            else:
                bucket.expenses += abs(amount)
                total_expenses += abs(amount)

        category_key = (
            category if amount >= 0 else f"{category}{EXPENSE_CATEGORY_SUFFIX}"
        )
        category_amounts[category_key] = (
            category_amounts.get(category_key, Decimal("0")) + abs(amount)
        )

    monthly = tuple(
        MonthlyBucket(
            month_label=bucket.label,
            year=bucket.year,
            month=bucket.month,
            revenue=bucket.revenue,
            expenses=bucket.expenses,
        )
        for _, bucket in sorted(months.items())
    )
    profit = total_revenue - total_expenses
    metrics = MetricsSummary(
        total_revenue=total_revenue,
        monthly_profit=profit,
        profit_margin=(
            round_half_up(profit / total_revenue * 100)
            if total_revenue > 0
            else 0
        ),
        net_assets=profit,
        revenue_change_percent=_revenue_change(
            latest_revenue,
            previous_revenue,
        ),
        date_range_label=format_date_range(overall_start, overall_end),
        most_recent_record_date=_most_recent_date(records),
    )
    return DashboardAggregates(
        monthly=monthly,
        categories=_top_categories(category_amounts, category_bounds),
        quarters=_quarters(monthly),
        metrics=metrics,
    )


def _revenue_change(latest_revenue: Decimal, previous_revenue: Decimal) -> int:
    if previous_revenue <= 0:
        return 0
    change = (latest_revenue - previous_revenue) / previous_revenue * 100
    return round_half_up(change)


def _top_categories(
    amounts: dict[str, Decimal],
    bounds: dict[str, tuple[date | None, date | None]],
) -> tuple[CategoryAggregate, ...]:
    ranked = sorted(amounts.items(), key=lambda item: item[1], reverse=True)
    categories: list[CategoryAggregate] = []
    for index, (key, value) in enumerate(ranked[:TOP_CATEGORY_COUNT]):
        label = key.removesuffix(EXPENSE_CATEGORY_SUFFIX)
        date_range = None
        if label in bounds:
            date_range = format_date_range(*bounds[label])
        categories.append(
            CategoryAggregate(
                label=label,
                value=value,
                color_index=index,
                date_range=date_range,
            )
        )
    return tuple(categories)


def _quarters(monthly: Sequence[MonthlyBucket]) -> tuple[QuarterAggregate, ...]:
    profits: dict[tuple[int, int], Decimal] = {}
    for bucket in monthly:
        key = (bucket.year, (bucket.month - 1) // 3 + 1)
        profits[key] = profits.get(key, Decimal("0")) + (
            bucket.revenue - bucket.expenses
        )
    return tuple(
        QuarterAggregate(
            period_label=f"Q{quarter}-{year}",
            year=year,
            quarter=quarter,
            profit=profit,
        )
        for (year, quarter), profit in sorted(profits.items())
    )


def _most_recent_date(records: Sequence[RawRecord]) -> date | None:
    dates = [
        record.to_date or record.from_date
        for record in records
        if record.to_date or record.from_date
    ]
    return max(dates) if dates else None


__all__ = ["build_dashboard_aggregates"]
