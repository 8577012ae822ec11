"""Domain models for companies and ETL jobs."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class JobState(str, Enum):
    """Normalized lifecycle state of an ETL job."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """Return True once polling should stop."""
        return self in (JobState.SUCCESS, JobState.ERROR)

    @classmethod
    def from_status(cls, status: str | None) -> "JobState":
        """Map a raw API status string to a JobState.

        Args:
            status: Status reported by the ETL API.

        Returns:
            JobState: ``success`` for completed jobs, ``error`` for failed
            ones, ``running`` while processing, ``idle`` otherwise.
        """
        normalized = (status or "").strip().lower()
        if normalized == "completed":
            return cls.SUCCESS
        if normalized == "failed":
            return cls.ERROR
        if normalized in ("processing", "running"):
            return cls.RUNNING
        return cls.IDLE


@dataclass(frozen=True)
class EtlJob:
    """ETL job as reported by the job API."""

    id: str
    status: str
    message: str = ""
    progress: int = 0
    company_id: str | None = None
    source_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def state(self) -> JobState:
        """Return the normalized job state."""
        return JobState.from_status(self.status)


@dataclass(frozen=True)
class DataSourceConfig:
    """Data source configured for a company."""

    id: str
    name: str
    source_type: str | None = None
    api_endpoint: str | None = None


@dataclass(frozen=True)
class Company:
    """Company whose data sources feed the dashboard."""

    id: str
    name: str
    description: str | None = None
    configs: tuple[DataSourceConfig, ...] = ()


__all__ = ["JobState", "EtlJob", "DataSourceConfig", "Company"]
