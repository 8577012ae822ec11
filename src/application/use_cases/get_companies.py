"""Use case to list companies and resolve the active selection."""

from dataclasses import dataclass

from src.application.ports.finance_api import CompaniesPort
from src.domain.models import Company
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class CompanySelection:
    """Companies available to the dashboard and the one selected."""

    companies: tuple[Company, ...]
    selected: Company | None


class GetCompaniesUseCase:
    """Fetch companies and keep the current selection when possible."""

    def __init__(self, companies_port: CompaniesPort, logger=None) -> None:
        """Initialize the use case with its required dependencies."""
        self._companies_port = companies_port
        self._logger = logger or get_app_logger()

    def execute(self, current_id: str | None = None) -> CompanySelection:
        """Return the companies with the resolved selection.

        Args:
            current_id: Id of the currently selected company, if any.

        Returns:
            CompanySelection: The refreshed copy of the current company when
            it still exists, otherwise the first company, or None when
            there are no companies.
        """
        companies = tuple(self._companies_port.fetch_companies())
        self._logger.info(f"Fetched {len(companies)} companies")
        return CompanySelection(
            companies=companies,
            selected=resolve_selected_company(companies, current_id),
        )


def resolve_selected_company(
    companies: tuple[Company, ...],
    current_id: str | None,
) -> Company | None:
    """Return the company matching current_id, else the first company."""
    if not companies:
        return None
    if current_id:
        for company in companies:
            if company.id == current_id:
                return company
    return companies[0]


__all__ = [
    "GetCompaniesUseCase",
    "CompanySelection",
    "resolve_selected_company",
]
