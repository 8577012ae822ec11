"""Domain normalization helpers for finance API payloads."""

from collections.abc import Mapping
from datetime import date, datetime
from logging import Logger

from src.domain.models.jobs import Company, DataSourceConfig, EtlJob, JobState
from src.domain.models.records import RawRecord


def normalize_job_status(status: str | None) -> JobState:
    """Normalize a raw job status string.

    Args:
        status: Raw status value from the job API.

    Returns:
        JobState: Normalized state.
    """
    return JobState.from_status(status)


def normalize_text(value) -> str | None:
    """Return a stripped string, or None for missing and blank values."""
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def parse_record_date(value) -> date | None:
    """Parse a date, datetime or ISO string into a date.

    Args:
        value: Raw date value.

    Returns:
        date | None: Parsed calendar date, None when missing.

    Raises:
        ValueError: If the value is present but not a recognizable date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    if len(raw) == 10:
        return date.fromisoformat(raw)
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw).date()


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO timestamp, returning None when missing or invalid."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    raw = str(value).strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def parse_financial_payload(payload, logger: Logger) -> list[RawRecord]:
    """Convert the ``{"data": [...]}`` envelope into raw records.

    Envelopes of the wrong shape yield no records rather than an error.

    Args:
        payload: Decoded JSON body of the financial data endpoint.
        logger: Logger used for warnings about skipped values.

    Returns:
        list[RawRecord]: Records in payload order.
    """
    if not isinstance(payload, Mapping):
        logger.warning(
            f"Ignoring financial payload of type {type(payload).__name__}"
        )
        return []
    items = payload.get("data")
    if items is None:
        return []
    if not isinstance(items, list):
        logger.warning(
            f"Ignoring financial data of type {type(items).__name__}, "
            "expected a list"
        )
        return []
    records: list[RawRecord] = []
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            logger.warning(
                f"Skipping financial record at position {position}: "
                f"expected an object, got {type(item).__name__}"
            )
            continue
        records.append(parse_raw_record(item, logger))
    return records


def raw_label(value) -> str | None:
    """Return a record label exactly as the source wrote it.

    Whitespace is preserved, so ``" Sales"`` and ``"Sales"`` stay distinct
    categories. Non-string values are converted with ``str``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def parse_raw_record(item: Mapping, logger: Logger) -> RawRecord:
    """Build a RawRecord from one API item (camelCase or snake_case keys)."""
    metadata = item.get("metadata")
    depth = metadata.get("depth") if isinstance(metadata, Mapping) else None
    if depth is None:
        depth = item.get("depth")
    return RawRecord(
        id=normalize_text(item.get("id")),
        amount=item.get("amount"),
        category=raw_label(item.get("category")),
        subcategory=raw_label(item.get("subcategory")),
        line_item_name=raw_label(
            _first_present(item, "lineItemName", "line_item_name")
        ),
        source_name=raw_label(_first_present(item, "sourceName", "source_name")),
        from_date=_safe_date(
            _first_present(item, "fromDate", "from_date"),
            logger,
        ),
        to_date=_safe_date(_first_present(item, "toDate", "to_date"), logger),
        depth=depth,
    )


def parse_etl_job(item: Mapping) -> EtlJob:
    """Build an EtlJob from a job API payload."""
    return EtlJob(
        id=str(item.get("id") or item.get("jobId") or ""),
        status=str(item.get("status") or ""),
        message=str(item.get("message") or ""),
        progress=_coerce_progress(item.get("progress")),
        company_id=normalize_text(
            _first_present(item, "companyId", "company_id")
        ),
        source_id=normalize_text(_first_present(item, "sourceId", "source_id")),
        created_at=parse_timestamp(
            _first_present(item, "createdAt", "created_at")
        ),
        updated_at=parse_timestamp(
            _first_present(item, "updatedAt", "updated_at")
        ),
    )


def parse_data_source_config(item: Mapping) -> DataSourceConfig:
    """Build a DataSourceConfig from a config payload."""
    return DataSourceConfig(
        id=str(item.get("id") or ""),
        name=str(item.get("name") or ""),
        source_type=normalize_text(
            _first_present(item, "sourceType", "type", "source_type")
        ),
        api_endpoint=normalize_text(
            _first_present(item, "apiEndpoint", "api_endpoint")
        ),
    )


def parse_company(item: Mapping) -> Company:
    """Build a Company (with its data source configs) from a payload.

    A ``configs`` value that is not a list is read as no configs.
    """
    configs = item.get("configs")
    if not isinstance(configs, list):
        configs = []
    return Company(
        id=str(item.get("id") or ""),
        name=str(item.get("name") or ""),
        description=normalize_text(item.get("description")),
        configs=tuple(
            parse_data_source_config(config)
            for config in configs
            if isinstance(config, Mapping)
        ),
    )


def _first_present(item: Mapping, *keys: str):
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def _safe_date(value, logger: Logger) -> date | None:
    try:
        return parse_record_date(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparsable record date: {value!r}")
        return None


def _coerce_progress(value) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


__all__ = [
    "normalize_job_status",
    "normalize_text",
    "raw_label",
    "parse_record_date",
    "parse_timestamp",
    "parse_financial_payload",
    "parse_raw_record",
    "parse_etl_job",
    "parse_data_source_config",
    "parse_company",
]
