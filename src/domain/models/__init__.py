"""Domain models package."""

from .jobs import Company, DataSourceConfig, EtlJob, JobState
from .records import (
    CategoryAggregate,
    DashboardAggregates,
    HierarchyNode,
    MetricsSummary,
    MonthlyBucket,
    NodeKind,
    QuarterAggregate,
    RawRecord,
)

__all__ = [
    "Company",
    "DataSourceConfig",
    "EtlJob",
    "JobState",
    "RawRecord",
    "NodeKind",
    "HierarchyNode",
    "MonthlyBucket",
    "CategoryAggregate",
    "QuarterAggregate",
    "MetricsSummary",
    "DashboardAggregates",
]
