"""Use case to create, edit and remove companies and their data sources."""

from src.application.ports.finance_api import CompaniesPort
from src.domain.models import Company, DataSourceConfig
from src.domain.services.validation import (
    normalize_source_settings,
    validate_company_name,
    validate_config_name,
)
from src.infrastructure.logging.logger import get_app_logger

COMPANY_CREATE_FAILED = "Failed to create company. Please try again."
COMPANY_UPDATE_FAILED = "Failed to update company. Please try again."
COMPANY_DELETE_FAILED = "Failed to delete company. Please try again."
CONFIG_CREATE_FAILED = "Failed to add configuration. Please try again."
CONFIG_UPDATE_FAILED = "Failed to update configuration. Please try again."
CONFIG_DELETE_FAILED = "Failed to delete configuration. Please try again."


class ManageCompaniesUseCase:
    """Validate company edits and forward them to the companies port.

    Validation failures raise CompanyValidationError before any request is
    sent. FinancialApiError from the port propagates to the caller.
    """

    def __init__(self, companies_port: CompaniesPort, logger=None) -> None:
        """Initialize the use case with its required dependencies."""
        self._companies_port = companies_port
        self._logger = logger or get_app_logger()

    def create_company(self, name: str, description: str | None = None) -> Company:
        """Create a company after checking its name."""
        cleaned = validate_company_name(name)
        company = self._companies_port.create_company(
            cleaned, _clean_description(description)
        )
        self._logger.info(f"Company {company.id} created as '{company.name}'")
        return company

    def update_company(
        self,
        company_id: str,
        name: str,
        description: str | None = None,
    ) -> Company:
        """Rename or redescribe an existing company."""
        cleaned = validate_company_name(name)
        company = self._companies_port.update_company(
            company_id, cleaned, _clean_description(description)
        )
        self._logger.info(f"Company {company_id} updated")
        return company

    def delete_company(self, company_id: str) -> None:
        self._companies_port.delete_company(company_id)
        self._logger.info(f"Company {company_id} deleted")

    def add_config(
        self,
        company_id: str,
        name: str,
        source_type: str | None = None,
        api_endpoint: str | None = None,
    ) -> DataSourceConfig:
        """Attach a new data source to a company.

        Args:
            company_id: Owning company.
            name: Display name of the data source.
            source_type: One of ``api``, ``database`` or ``file``.
            api_endpoint: Endpoint used by ``api`` sources only.

        Returns:
            DataSourceConfig: The configuration returned by the API.
        """
        cleaned = validate_config_name(name)
        resolved_type, endpoint = normalize_source_settings(
            source_type, api_endpoint
        )
        config = self._companies_port.create_config(
            company_id, cleaned, resolved_type, endpoint
        )
        self._logger.info(
            f"Data source '{config.name}' ({resolved_type}) added to company "
            f"{company_id}"
        )
        return config

    def update_config(
        self,
        company_id: str,
        config_id: str,
        name: str,
        source_type: str | None = None,
        api_endpoint: str | None = None,
    ) -> DataSourceConfig:
        cleaned = validate_config_name(name)
        resolved_type, endpoint = normalize_source_settings(
            source_type, api_endpoint
        )
        config = self._companies_port.update_config(
            company_id, config_id, cleaned, resolved_type, endpoint
        )
        self._logger.info(f"Data source {config_id} of company {company_id} updated")
        return config

    def delete_config(self, company_id: str, config_id: str) -> None:
        self._companies_port.delete_config(company_id, config_id)
        self._logger.info(f"Data source {config_id} of company {company_id} deleted")


def _clean_description(description: str | None) -> str | None:
    cleaned = (description or "").strip()
    return cleaned or None


__all__ = [
    "ManageCompaniesUseCase",
    "COMPANY_CREATE_FAILED",
    "COMPANY_UPDATE_FAILED",
    "COMPANY_DELETE_FAILED",
    "CONFIG_CREATE_FAILED",
    "CONFIG_UPDATE_FAILED",
    "CONFIG_DELETE_FAILED",
]
