"""Analytics-backed repository reading ETL output rows."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.finance_api import (
    FinancialApiError,
    FinancialRecordsPort,
)
from src.domain.models import RawRecord
from src.domain.services.normalization import (
    normalize_text,
    parse_record_date,
    raw_label,
)
from src.infrastructure.logging.logger import get_app_logger


class SqlAlchemyFinancialRecordsRepository(FinancialRecordsPort):
    """Repository reading the ``financial_data`` table written by ETL jobs."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        logger=None,
        table_name: str = "financial_data",
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the analytics engine.
            logger: Optional logger compatible with logging.Logger-like API.
            table_name: Table holding the ETL output rows.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._table_name = table_name

    def fetch_financial_records(self, company_id: str) -> list[RawRecord]:
        query = text(
            f"""
            SELECT id,
                   amount,
                   category,
                   subcategory,
                   line_item_name,
                   source_name,
                   from_date,
                   to_date,
                   depth
            FROM {self._table_name}
            WHERE company_id = :company_id
            ORDER BY row_order
            """
        )
        engine = self._db_port.get_analytics_engine()
        try:
            with engine.connect() as conn:
                rows = conn.execute(query, {"company_id": company_id}).all()
        except SQLAlchemyError as exc:
            raise FinancialApiError(
                f"Failed to read financial records for {company_id}: {exc}"
            ) from exc

        records = [self._to_record(row) for row in rows]
        self._logger.info(
            f"Read {len(records)} financial records for company {company_id}"
        )
        return records

    def _to_record(self, row) -> RawRecord:
        return RawRecord(
            id=normalize_text(row.id),
            amount=row.amount,
            category=raw_label(row.category),
            subcategory=raw_label(row.subcategory),
            line_item_name=raw_label(row.line_item_name),
            source_name=raw_label(row.source_name),
            from_date=self._parse_date(row.from_date),
            to_date=self._parse_date(row.to_date),
            depth=row.depth,
        )

    def _parse_date(self, value):
        try:
            return parse_record_date(value)
        except (TypeError, ValueError):
            self._logger.warning(f"Ignoring unparsable record date: {value!r}")
            return None


__all__ = ["SqlAlchemyFinancialRecordsRepository"]
