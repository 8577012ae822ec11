"""Ports for the external finance API (records, companies, ETL jobs)."""

from typing import Protocol

from src.domain.models import Company, DataSourceConfig, EtlJob, RawRecord


class FinancialApiError(RuntimeError):
    """Raised when the finance API cannot be reached or answers badly."""


class FinancialRecordsPort(Protocol):
    """Port returning the ETL output for a company."""

    def fetch_financial_records(self, company_id: str) -> list[RawRecord]:
        """Return one atomically fetched snapshot of the company records.

        Raises:
            FinancialApiError: If the records cannot be fetched.
        """


class CompaniesPort(Protocol):
    """Port managing companies and their data source configurations."""

    def fetch_companies(self) -> list[Company]:
        """Return every configured company."""

    def create_company(self, name: str, description: str | None) -> Company:
        """Create a company and return it as stored."""

    def update_company(
        self,
        company_id: str,
        name: str,
        description: str | None,
    ) -> Company:
        """Rename or redescribe a company and return it as stored."""

    def delete_company(self, company_id: str) -> None:
        """Delete a company with its data sources."""

    def create_config(
        self,
        company_id: str,
        name: str,
        source_type: str,
        api_endpoint: str | None,
    ) -> DataSourceConfig:
        """Add a data source to a company and return it as stored."""

    def update_config(
        self,
        company_id: str,
        config_id: str,
        name: str,
        source_type: str,
        api_endpoint: str | None,
    ) -> DataSourceConfig:
        """Update a data source and return it as stored."""

    def delete_config(self, company_id: str, config_id: str) -> None:
        """Remove a data source from a company."""


class EtlJobsPort(Protocol):
    """Port driving ETL synchronization jobs."""

    def start_sync(self, company_id: str) -> str:
        """Start an ETL sync for the company and return the job id."""

    def fetch_job(self, job_id: str) -> EtlJob:
        """Return the current state of a job."""

    def fetch_company_jobs(self, company_id: str) -> list[EtlJob]:
        """Return every job recorded for a company."""


__all__ = [
    "FinancialApiError",
    "FinancialRecordsPort",
    "CompaniesPort",
    "EtlJobsPort",
]
