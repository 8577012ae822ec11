"""Domain services package."""

from .aggregates import build_dashboard_aggregates
from .dates import format_date_range, format_month_label
from .hierarchy import build_financial_hierarchy, determine_node_kind
from .normalization import (
    normalize_job_status,
    parse_company,
    parse_etl_job,
    parse_financial_payload,
    parse_record_date,
)
from .validation import (
    CompanyValidationError,
    normalize_source_settings,
    validate_company_name,
    validate_config_name,
)

__all__ = [
    "CompanyValidationError",
    "build_dashboard_aggregates",
    "build_financial_hierarchy",
    "determine_node_kind",
    "format_date_range",
    "format_month_label",
    "normalize_job_status",
    "parse_company",
    "parse_etl_job",
    "parse_financial_payload",
    "parse_record_date",
    "normalize_source_settings",
    "validate_company_name",
    "validate_config_name",
]
