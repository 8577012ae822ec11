"""Domain models for financial records and their derived views."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from src.domain.constants import CATEGORY_PALETTE, EMPTY_DATE_RANGE_LABEL


@dataclass(frozen=True)
class RawRecord:
    """One raw financial line item produced by an ETL run.

    Attributes:
        id: Identifier assigned by the data source, when any.
        amount: Signed amount. Kept raw so builders can coerce malformed
            values to zero.
        category: Top-level category name.
        subcategory: Optional second-level grouping.
        line_item_name: Optional line item label.
        source_name: Name of the data source the record came from.
        from_date: Start of the period covered by the record.
        to_date: End of the period covered by the record.
        depth: Nesting depth reported by the source (``metadata.depth``).
            Kept raw and compared numerically by the hierarchy builder.
    """

    id: str | None = None
    amount: Any = Decimal("0")
    category: str | None = None
    subcategory: str | None = None
    line_item_name: str | None = None
    source_name: str | None = None
    from_date: date | None = None
    to_date: date | None = None
    depth: Any = None


class NodeKind(str, Enum):
    """Classification of a hierarchy node."""

    REVENUE = "revenue"
    EXPENSE = "expense"
    ASSET = "asset"
    LIABILITY = "liability"


@dataclass(frozen=True)
class HierarchyNode:
    """Node of the category -> subcategory -> line item tree."""

    id: str
    label: str
    amount: Decimal
    kind: NodeKind
    from_date: date | None = None
    to_date: date | None = None
    has_duplicates: bool = False
    source: str | None = None
    children: tuple["HierarchyNode", ...] = ()


@dataclass(frozen=True)
class MonthlyBucket:
    """Revenue and expenses for one calendar month."""

    month_label: str
    year: int
    month: int
    revenue: Decimal
    expenses: Decimal


@dataclass(frozen=True)
class CategoryAggregate:
    """Magnitude of one of the top categories."""

    label: str
    value: Decimal
    color_index: int
    date_range: str | None = None

    @property
    def color(self) -> str:
        """Return the palette color assigned to this category."""
        return CATEGORY_PALETTE[self.color_index % len(CATEGORY_PALETTE)]


@dataclass(frozen=True)
class QuarterAggregate:
    """Profit summed over the months of one quarter."""

    period_label: str
    year: int
    quarter: int
    profit: Decimal


@dataclass(frozen=True)
class MetricsSummary:
    """Headline figures displayed above the dashboard charts."""

    total_revenue: Decimal
    monthly_profit: Decimal
    profit_margin: int
    net_assets: Decimal
    revenue_change_percent: int
    date_range_label: str
    most_recent_record_date: date | None = None


@dataclass(frozen=True)
class DashboardAggregates:
    """Time-bucketed aggregates feeding the dashboard charts."""

    monthly: tuple[MonthlyBucket, ...] = ()
    categories: tuple[CategoryAggregate, ...] = ()
    quarters: tuple[QuarterAggregate, ...] = ()
    metrics: MetricsSummary = field(
        default_factory=lambda: MetricsSummary(
            total_revenue=Decimal("0"),
            monthly_profit=Decimal("0"),
            profit_margin=0,
            net_assets=Decimal("0"),
            revenue_change_percent=0,
            date_range_label=EMPTY_DATE_RANGE_LABEL,
        )
    )

    @classmethod
    def empty(cls) -> "DashboardAggregates":
        """Return the aggregates shown when no data is available."""
        return cls()


__all__ = [
    "RawRecord",
    "NodeKind",
    "HierarchyNode",
    "MonthlyBucket",
    "CategoryAggregate",
    "QuarterAggregate",
    "MetricsSummary",
    "DashboardAggregates",
]
