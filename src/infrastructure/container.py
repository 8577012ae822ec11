"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.finance_api import (
    CompaniesPort,
    EtlJobsPort,
    FinancialRecordsPort,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.finance_api_client import HttpFinanceApiClient
from src.infrastructure.financial_records_repository import (
    SqlAlchemyFinancialRecordsRepository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import FinanceDashboardSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_finance_api_client(
    settings: FinanceDashboardSettings | None = None,
) -> HttpFinanceApiClient:
    """Return the HTTP client for the finance API."""
    resolved = settings or FinanceDashboardSettings.from_env()
    return HttpFinanceApiClient(
        resolved.api_base_url,
        timeout_seconds=resolved.request_timeout_seconds,
        logger=get_app_logger(),
    )


def build_financial_records_source(
    settings: FinanceDashboardSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> FinancialRecordsPort:
    """Return the configured financial records adapter."""
    resolved = settings or FinanceDashboardSettings.from_env()
    if resolved.records_backend == "sqlalchemy":
        return SqlAlchemyFinancialRecordsRepository(
            db_port or build_database_adapter(),
            logger=get_app_logger(),
        )
    return build_finance_api_client(resolved)


def build_companies_source(
    settings: FinanceDashboardSettings | None = None,
) -> CompaniesPort:
    """Return the companies adapter."""
    return build_finance_api_client(settings)


def build_etl_jobs_port(
    settings: FinanceDashboardSettings | None = None,
) -> EtlJobsPort:
    """Return the ETL jobs adapter."""
    return build_finance_api_client(settings)


__all__ = [
    "build_database_adapter",
    "build_finance_api_client",
    "build_financial_records_source",
    "build_companies_source",
    "build_etl_jobs_port",
]
