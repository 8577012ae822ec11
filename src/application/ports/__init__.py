"""Application ports package."""

from .database import DatabaseEnginePort
from .finance_api import (
    CompaniesPort,
    EtlJobsPort,
    FinancialApiError,
    FinancialRecordsPort,
)

__all__ = [
    "CompaniesPort",
    "DatabaseEnginePort",
    "EtlJobsPort",
    "FinancialApiError",
    "FinancialRecordsPort",
]
