"""CLI adapter to run an ETL sync for a company and summarize its data.

This module wires the RunEtlSyncUseCase and the financial data use case to
the configured adapters. The company id comes from the first argument or the
``ETL_COMPANY_ID`` environment variable.
"""

import os
import sys

from src.application.use_cases.load_financial_data import (
    LoadFinancialDataUseCase,
)
from src.application.use_cases.run_etl_sync import RunEtlSyncUseCase
from src.domain.models import JobState
from src.infrastructure.container import (
    build_companies_source,
    build_etl_jobs_port,
    build_financial_records_source,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import FinanceDashboardSettings


def main(argv: list[str] | None = None) -> int:
    """Run the sync and print the resulting dashboard metrics.

    Args:
        argv: Command-line arguments, defaults to ``sys.argv[1:]``.

    Returns:
        int: Process exit code (0 on success).
    """
    logger = get_app_logger()
    args = sys.argv[1:] if argv is None else argv
    company_id = args[0] if args else os.getenv("ETL_COMPANY_ID")
    if not company_id:
        logger.warning("Missing company id; pass it or set ETL_COMPANY_ID.")
        return 2

    settings = FinanceDashboardSettings.from_env()
    use_case = RunEtlSyncUseCase(
        jobs_port=build_etl_jobs_port(settings),
        companies_port=build_companies_source(settings),
        logger=logger,
        poll_interval=settings.poll_interval_seconds,
    )
    result = use_case.execute(company_id)
    print(f"ETL job {result.job_id or '-'}: {result.state.value} - {result.message}")
    if result.state is not JobState.SUCCESS:
        return 1

    view = LoadFinancialDataUseCase(
        records_port=build_financial_records_source(settings),
        logger=logger,
    ).execute(company_id)
    if view.error_message:
        print(view.error_message)
        return 1

    metrics = view.aggregates.metrics
    print(
        f"Loaded {view.record_count} records in "
        f"{len(view.hierarchy)} categories ({metrics.date_range_label})"
    )
    print(
        f"Revenue={metrics.total_revenue}, profit={metrics.monthly_profit}, "
        f"margin={metrics.profit_margin}%, "
        f"revenue change={metrics.revenue_change_percent}%"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
