"""Use case to build the financial data table hierarchy."""

from src.application.ports.finance_api import FinancialRecordsPort
from src.domain.models import HierarchyNode
from src.domain.services.hierarchy import build_financial_hierarchy
from src.infrastructure.logging.logger import get_app_logger


class GetFinancialHierarchyUseCase:
    """Fetch records and group them by category and subcategory."""

    def __init__(self, records_port: FinancialRecordsPort, logger=None) -> None:
        """Initialize the use case with its required dependencies."""
        self._records_port = records_port
        self._logger = logger or get_app_logger()

    def execute(self, company_id: str) -> tuple[HierarchyNode, ...]:
        """Return the sorted category tree for the company."""
        records = self._records_port.fetch_financial_records(company_id)
        hierarchy = build_financial_hierarchy(records, self._logger)
        self._logger.info(
            f"Built {len(hierarchy)} categories from {len(records)} records"
        )
        return hierarchy


__all__ = ["GetFinancialHierarchyUseCase"]
