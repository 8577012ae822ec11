"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.infrastructure.logging.logger import get_app_logger

SUPPORTED_BACKENDS = ("api", "sqlalchemy")


@dataclass(frozen=True)
class FinanceDashboardSettings:
    """Settings for reaching the finance API and the records backend.

    Attributes:
        api_base_url: Base URL of the finance API, without trailing slash.
        records_backend: Source of financial records (api or sqlalchemy).
        poll_interval_seconds: Delay between two ETL job status polls.
        request_timeout_seconds: Timeout applied to every API request.
    """

    api_base_url: str = "http://localhost:5000"
    records_backend: str = "api"
    poll_interval_seconds: float = 2.0
    request_timeout_seconds: float = 15.0

    @classmethod
    def from_env(cls) -> "FinanceDashboardSettings":
        """Build settings from environment variables.

        Returns:
            FinanceDashboardSettings: Settings sourced from the environment.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        api_base_url = (
            os.getenv("FINANCE_API_URL", cls.api_base_url).strip().rstrip("/")
        )
        backend = os.getenv("FINANCIAL_DATA_BACKEND", "api").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown FINANCIAL_DATA_BACKEND '{backend}', using 'api'"
            )
            backend = "api"
        return cls(
            api_base_url=api_base_url or cls.api_base_url,
            records_backend=backend,
            poll_interval_seconds=cls._read_seconds(
                "ETL_POLL_INTERVAL_SECONDS",
                cls.poll_interval_seconds,
                logger,
            ),
            request_timeout_seconds=cls._read_seconds(
                "FINANCE_API_TIMEOUT_SECONDS",
                cls.request_timeout_seconds,
                logger,
            ),
        )

    @staticmethod
    def _read_seconds(name: str, default: float, logger) -> float:
        """Read a positive duration from the environment.

        Args:
            name: Environment variable to read.
            default: Value used when the variable is missing or invalid.
            logger: Logger used for warnings.

        Returns:
            float: Duration in seconds.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError:
            logger.warning(f"Invalid {name} '{raw}', using {default}")
            return default
        if value < 0:
            logger.warning(f"Negative {name} '{raw}', using {default}")
            return default
        return value


__all__ = ["FinanceDashboardSettings", "SUPPORTED_BACKENDS"]
