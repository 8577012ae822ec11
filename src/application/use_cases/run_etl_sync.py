"""Use case to start an ETL sync and follow it until it finishes.

Polling runs on a fixed interval and stops as soon as the job reaches a
terminal state, when ``cancel`` is called, or on the first failed poll. A
failed poll is not retried.
"""

from dataclasses import dataclass
import threading
from typing import Literal

from src.application.ports.finance_api import (
    CompaniesPort,
    EtlJobsPort,
    FinancialApiError,
)
from src.domain.models import Company, EtlJob, JobState
from src.infrastructure.logging.logger import get_app_logger

START_FAILED_MESSAGE = "Failed to start ETL process"
POLL_FAILED_MESSAGE = "Failed to get ETL status updates"
CANCELLED_MESSAGE = "ETL status polling cancelled"

FailureKind = Literal["transport", "job"]


@dataclass(frozen=True)
class EtlSyncResult:
    """Outcome of an ETL sync run.

    Attributes:
        company_id: Company the sync was started for.
        state: Last known job state.
        message: Job message, or a transport error message.
        job_id: Identifier of the started job, None if it never started.
        job: Last job payload observed.
        failure: ``"job"`` when the job itself failed, ``"transport"`` when
            the API could not be reached, None otherwise.
        cancelled: True when polling was stopped before a terminal state.
        company: Refreshed company after a successful sync.
    """

    company_id: str
    state: JobState
    message: str
    job_id: str | None = None
    job: EtlJob | None = None
    failure: FailureKind | None = None
    cancelled: bool = False
    company: Company | None = None


class RunEtlSyncUseCase:
    """Start an ETL job for a company and poll its status."""

    def __init__(
        self,
        jobs_port: EtlJobsPort,
        companies_port: CompaniesPort | None = None,
        logger=None,
        poll_interval: float = 2.0,
    ) -> None:
        """Initialize the use case.

        Args:
            jobs_port: Port used to start and read ETL jobs.
            companies_port: Optional port used to refresh the company after
                a successful sync.
            logger: Optional logger compatible with logging.Logger-like API.
            poll_interval: Seconds between two job status polls.
        """
        self._jobs_port = jobs_port
        self._companies_port = companies_port
        self._logger = logger or get_app_logger()
        self._poll_interval = poll_interval
        self._stop = threading.Event()

    def cancel(self) -> None:
        """Stop polling; the running ``execute`` returns immediately."""
        self._stop.set()

    def execute(self, company_id: str) -> EtlSyncResult:
        """Start a sync and wait for the job to finish.

        Args:
            company_id: Company whose data sources should be synchronized.

        Returns:
            EtlSyncResult: Final state of the job.
        """
        self._stop.clear()
        try:
            job_id = self._jobs_port.start_sync(company_id)
        except FinancialApiError as exc:
            self._logger.error(f"Error starting ETL process: {exc}")
            return EtlSyncResult(
                company_id=company_id,
                state=JobState.ERROR,
                message=START_FAILED_MESSAGE,
                failure="transport",
            )
        return self.poll(company_id, job_id)

    def poll(self, company_id: str, job_id: str) -> EtlSyncResult:
        """Poll a started job until it ends, fails to answer, or is cancelled.

        Args:
            company_id: Company the job belongs to.
            job_id: Job to follow.

        Returns:
            EtlSyncResult: Final or last observed state of the job.
        """
        last_job: EtlJob | None = None
        while not self._stop.wait(self._poll_interval):
            try:
                job = self._jobs_port.fetch_job(job_id)
            except FinancialApiError as exc:
                self._logger.error(f"Error polling job status {job_id}: {exc}")
                return EtlSyncResult(
                    company_id=company_id,
                    state=JobState.ERROR,
                    message=POLL_FAILED_MESSAGE,
                    job_id=job_id,
                    job=last_job,
                    failure="transport",
                )

            last_job = job
            state = job.state
            self._logger.info(
                f"ETL job {job_id}: {job.status} ({job.progress}%)"
            )
            if state is JobState.SUCCESS:
                return EtlSyncResult(
                    company_id=company_id,
                    state=state,
                    message=job.message,
                    job_id=job_id,
                    job=job,
                    company=self._refresh_company(company_id),
                )
            if state is JobState.ERROR:
                self._logger.warning(f"ETL job {job_id} failed: {job.message}")
                return EtlSyncResult(
                    company_id=company_id,
                    state=state,
                    message=job.message,
                    job_id=job_id,
                    job=job,
                    failure="job",
                )

        self._logger.info(f"Stopped polling ETL job {job_id}")
        return EtlSyncResult(
            company_id=company_id,
            state=last_job.state if last_job else JobState.RUNNING,
            message=CANCELLED_MESSAGE,
            job_id=job_id,
            job=last_job,
            cancelled=True,
        )

    def _refresh_company(self, company_id: str) -> Company | None:
        if self._companies_port is None:
            return None
        try:
            companies = self._companies_port.fetch_companies()
        except FinancialApiError as exc:
            self._logger.error(f"Error refetching company data: {exc}")
            return None
        for company in companies:
            if company.id == company_id:
                return company
        return None


__all__ = [
    "RunEtlSyncUseCase",
    "EtlSyncResult",
    "START_FAILED_MESSAGE",
    "POLL_FAILED_MESSAGE",
    "CANCELLED_MESSAGE",
]
