"""Use case loading one record snapshot and deriving both dashboard views."""

from dataclasses import dataclass, field

from src.application.ports.finance_api import (
    FinancialApiError,
    FinancialRecordsPort,
)
from src.domain.models import DashboardAggregates, HierarchyNode
from src.domain.services.aggregates import build_dashboard_aggregates
from src.domain.services.hierarchy import build_financial_hierarchy
from src.infrastructure.logging.logger import get_app_logger

LOAD_ERROR_MESSAGE = "Failed to load financial data"


@dataclass(frozen=True)
class FinancialDataView:
    """Hierarchy and aggregates derived from the same record snapshot.

    Attributes:
        company_id: Company the view was built for.
        hierarchy: Category tree for the data table.
        aggregates: Chart series and headline metrics.
        record_count: Number of records in the snapshot.
        error_message: User-facing message when the fetch failed.
    """

    company_id: str | None = None
    hierarchy: tuple[HierarchyNode, ...] = ()
    aggregates: DashboardAggregates = field(
        default_factory=DashboardAggregates.empty
    )
    record_count: int = 0
    error_message: str | None = None


class LoadFinancialDataUseCase:
    """Fetch a company's records once and build the table and charts."""

    def __init__(self, records_port: FinancialRecordsPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            records_port: Port returning the company's financial records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._records_port = records_port
        self._logger = logger or get_app_logger()

    def execute(self, company_id: str | None) -> FinancialDataView:
        """Return the dashboard views for the selected company.

        Args:
            company_id: Selected company, None when nothing is selected.

        Returns:
            FinancialDataView: Fresh views, or the empty view (with an error
            message when the fetch failed).
        """
        if not company_id:
            return FinancialDataView()
        try:
            records = self._records_port.fetch_financial_records(company_id)
        except FinancialApiError as exc:
            self._logger.error(
                f"Error fetching financial data for {company_id}: {exc}"
            )
            return FinancialDataView(
                company_id=company_id,
                error_message=LOAD_ERROR_MESSAGE,
            )

        snapshot = tuple(records)
        return FinancialDataView(
            company_id=company_id,
            hierarchy=build_financial_hierarchy(snapshot, self._logger),
            aggregates=build_dashboard_aggregates(snapshot, self._logger),
            record_count=len(snapshot),
        )


__all__ = [
    "LoadFinancialDataUseCase",
    "FinancialDataView",
    "LOAD_ERROR_MESSAGE",
]
