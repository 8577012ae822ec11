"""Use case to read the most recent ETL job of a company."""

from datetime import datetime, timezone

from src.application.ports.finance_api import EtlJobsPort
from src.domain.models import EtlJob
from src.infrastructure.logging.logger import get_app_logger

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class GetLatestEtlJobUseCase:
    """Return the newest ETL job recorded for a company."""

    def __init__(self, jobs_port: EtlJobsPort, logger=None) -> None:
        """Initialize the use case with its required dependencies."""
        self._jobs_port = jobs_port
        self._logger = logger or get_app_logger()

    def execute(self, company_id: str) -> EtlJob | None:
        """Return the job with the latest creation time, None if none."""
        jobs = self._jobs_port.fetch_company_jobs(company_id)
        if not jobs:
            return None
        return max(jobs, key=_created_at_key)


def _created_at_key(job: EtlJob) -> datetime:
    created_at = job.created_at
    if created_at is None:
        return _OLDEST
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


__all__ = ["GetLatestEtlJobUseCase"]
