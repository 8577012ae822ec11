"""Domain package for business rules and core models."""

from .models import (
    CategoryAggregate,
    Company,
    DashboardAggregates,
    DataSourceConfig,
    EtlJob,
    HierarchyNode,
    JobState,
    MetricsSummary,
    MonthlyBucket,
    NodeKind,
    QuarterAggregate,
    RawRecord,
)
from .services import (
    build_dashboard_aggregates,
    build_financial_hierarchy,
    determine_node_kind,
    format_date_range,
    normalize_job_status,
)

__all__ = [
    "CategoryAggregate",
    "Company",
    "DashboardAggregates",
    "DataSourceConfig",
    "EtlJob",
    "HierarchyNode",
    "JobState",
    "MetricsSummary",
    "MonthlyBucket",
    "NodeKind",
    "QuarterAggregate",
    "RawRecord",
    "build_dashboard_aggregates",
    "build_financial_hierarchy",
    "determine_node_kind",
    "format_date_range",
    "normalize_job_status",
]
