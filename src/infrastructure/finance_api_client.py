"""HTTP adapter for the finance API."""

from typing import Any

import httpx

from src.application.ports.finance_api import (
    CompaniesPort,
    EtlJobsPort,
    FinancialApiError,
    FinancialRecordsPort,
)
from src.domain.models import Company, DataSourceConfig, EtlJob, RawRecord
from src.domain.services.normalization import (
    parse_company,
    parse_data_source_config,
    parse_etl_job,
    parse_financial_payload,
)
from src.infrastructure.logging.logger import get_app_logger


class HttpFinanceApiClient(FinancialRecordsPort, CompaniesPort, EtlJobsPort):
    """Finance API client covering records, companies and ETL jobs."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 15.0,
        client: httpx.Client | None = None,
        logger=None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the API (``/api`` routes are appended).
            timeout_seconds: Timeout applied to every request.
            client: Optional preconfigured httpx client.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._logger = logger or get_app_logger()

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self._client.close()

    def fetch_financial_records(self, company_id: str) -> list[RawRecord]:
        payload = self._request(
            "GET",
            f"/api/etl/financial-data/{company_id}",
        )
        records = parse_financial_payload(payload, self._logger)
        self._logger.info(
            f"Fetched {len(records)} financial records for company {company_id}"
        )
        return records

    def fetch_companies(self) -> list[Company]:
        payload = self._request("GET", "/api/companies")
        if not isinstance(payload, list):
            raise FinancialApiError("Companies response is not a list")
        return [parse_company(item) for item in payload if isinstance(item, dict)]

    def create_company(self, name: str, description: str | None) -> Company:
        payload = self._request(
            "POST",
            "/api/companies",
            {"name": name, "description": description or ""},
        )
        company = parse_company(self._expect_object(payload, "Company"))
        self._logger.info(f"Created company {company.id} ({company.name})")
        return company

    def update_company(
        self,
        company_id: str,
        name: str,
        description: str | None,
    ) -> Company:
        payload = self._request(
            "PUT",
            f"/api/companies/{company_id}",
            {"name": name, "description": description or ""},
        )
        return parse_company(self._expect_object(payload, "Company"))

    def delete_company(self, company_id: str) -> None:
        self._send("DELETE", f"/api/companies/{company_id}")
        self._logger.info(f"Deleted company {company_id}")

    def create_config(
        self,
        company_id: str,
        name: str,
        source_type: str,
        api_endpoint: str | None,
    ) -> DataSourceConfig:
        payload = self._request(
            "POST",
            f"/api/companies/{company_id}/config",
            {
                "name": name,
                "sourceType": source_type,
                "apiEndpoint": api_endpoint or "",
                "fieldMappings": {},
            },
        )
        return parse_data_source_config(
            self._expect_object(payload, "Configuration")
        )

    def update_config(
        self,
        company_id: str,
        config_id: str,
        name: str,
        source_type: str,
        api_endpoint: str | None,
    ) -> DataSourceConfig:
        payload = self._request(
            "PUT",
            f"/api/companies/{company_id}/config/{config_id}",
            {
                "id": config_id,
                "name": name,
                "sourceType": source_type,
                "apiEndpoint": api_endpoint or "",
            },
        )
        return parse_data_source_config(
            self._expect_object(payload, "Configuration")
        )

    def delete_config(self, company_id: str, config_id: str) -> None:
        self._send("DELETE", f"/api/companies/{company_id}/config/{config_id}")
        self._logger.info(
            f"Deleted data source {config_id} of company {company_id}"
        )

    def start_sync(self, company_id: str) -> str:
        payload = self._request("POST", f"/api/etl/sync/{company_id}")
        job_id = None
        if isinstance(payload, dict):
            job_id = payload.get("jobId") or payload.get("id")
        if not job_id:
            raise FinancialApiError("ETL sync response did not include a job id")
        self._logger.info(f"Started ETL job {job_id} for company {company_id}")
        return str(job_id)

    def fetch_job(self, job_id: str) -> EtlJob:
        payload = self._request("GET", f"/api/etl/job/{job_id}")
        if not isinstance(payload, dict):
            raise FinancialApiError("Job response is not an object")
        return parse_etl_job(payload)

    def fetch_company_jobs(self, company_id: str) -> list[EtlJob]:
        payload = self._request("GET", f"/api/etl/jobs/company/{company_id}")
        if not isinstance(payload, list):
            raise FinancialApiError("Jobs response is not a list")
        return [parse_etl_job(item) for item in payload if isinstance(item, dict)]

    def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode its JSON body.

        Args:
            method: HTTP method.
            path: Path appended to the base URL.
            body: Optional JSON body.

        Returns:
            Any: Decoded JSON payload.

        Raises:
            FinancialApiError: On network failures, error statuses or
                invalid JSON.
        """
        response = self._send(method, path, body)
        try:
            return response.json()
        except ValueError as exc:
            raise FinancialApiError(
                f"Finance API returned invalid JSON for {method} {path}"
            ) from exc

    def _send(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request without decoding the response body."""
        url = f"{self._base_url}{path}"
        try:
            response = self._client.request(
                method,
                url,
                headers={"Content-Type": "application/json"},
                json=body,
            )
        except httpx.HTTPError as exc:
            raise FinancialApiError(
                f"Failed to reach finance API at {url}: {exc}"
            ) from exc

        if response.status_code >= 400:
            raise FinancialApiError(
                f"Finance API error {response.status_code} for {method} {path}"
            )
        return response

    @staticmethod
    def _expect_object(payload: Any, label: str) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise FinancialApiError(f"{label} response is not an object")
        return payload


__all__ = ["HttpFinanceApiClient"]
