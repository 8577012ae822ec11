"""Domain constants for financial dashboards."""

DEFAULT_HIERARCHY_CATEGORY = "Uncategorized"
DEFAULT_AGGREGATE_CATEGORY = "Other"
DEFAULT_LINE_ITEM_LABEL = "Line Item"
EXPENSE_CATEGORY_SUFFIX = " (Expense)"

NO_DATE_RANGE_LABEL = "No date range"
EMPTY_DATE_RANGE_LABEL = "No data available"

TOP_CATEGORY_COUNT = 5

SOURCE_TYPES = ("api", "database", "file")
DEFAULT_SOURCE_TYPE = "api"

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

CATEGORY_PALETTE = (
    "#3b82f6",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#14b8a6",
    "#f43f5e",
    "#6366f1",
)

# Keywords are matched case-insensitively, first match wins.
NODE_KIND_KEYWORDS = (
    ("revenue", ("revenue", "income")),
    ("expense", ("expense", "cost")),
    ("asset", ("asset",)),
    ("liability", ("liability", "debt")),
)


__all__ = [
    "DEFAULT_HIERARCHY_CATEGORY",
    "DEFAULT_AGGREGATE_CATEGORY",
    "DEFAULT_LINE_ITEM_LABEL",
    "EXPENSE_CATEGORY_SUFFIX",
    "NO_DATE_RANGE_LABEL",
    "EMPTY_DATE_RANGE_LABEL",
    "TOP_CATEGORY_COUNT",
    "SOURCE_TYPES",
    "DEFAULT_SOURCE_TYPE",
    "MONTH_ABBREVIATIONS",
    "CATEGORY_PALETTE",
    "NODE_KIND_KEYWORDS",
]
