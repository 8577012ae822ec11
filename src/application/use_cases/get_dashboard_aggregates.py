"""Use case to compute the dashboard chart aggregates."""

from src.application.ports.finance_api import FinancialRecordsPort
from src.domain.models import DashboardAggregates
from src.domain.services.aggregates import build_dashboard_aggregates
from src.infrastructure.logging.logger import get_app_logger


class GetDashboardAggregatesUseCase:
    """Fetch records and bucket them by month, category and quarter."""

    def __init__(self, records_port: FinancialRecordsPort, logger=None) -> None:
        """Initialize the use case with its required dependencies."""
        self._records_port = records_port
        self._logger = logger or get_app_logger()

    def execute(self, company_id: str) -> DashboardAggregates:
        """Return chart series and metrics for the company."""
        records = self._records_port.fetch_financial_records(company_id)
        aggregates = build_dashboard_aggregates(records, self._logger)
        self._logger.info(
            f"Aggregated {len(records)} records into "
            f"{len(aggregates.monthly)} months"
        )
        return aggregates


__all__ = ["GetDashboardAggregatesUseCase"]
