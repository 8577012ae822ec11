"""Validation of company and data source edits before they reach the API."""

from src.domain.constants import DEFAULT_SOURCE_TYPE, SOURCE_TYPES

COMPANY_NAME_REQUIRED = "Company name is required"
CONFIG_NAME_REQUIRED = "Configuration name is required"


class CompanyValidationError(ValueError):
    """Raised when a company or data source edit is incomplete."""


def validate_company_name(name: str | None) -> str:
    """Return the stripped company name.

    Raises:
        CompanyValidationError: If the name is missing or blank.
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise CompanyValidationError(COMPANY_NAME_REQUIRED)
    return cleaned


def validate_config_name(name: str | None) -> str:
    """Return the stripped data source name.

    Raises:
        CompanyValidationError: If the name is missing or blank.
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise CompanyValidationError(CONFIG_NAME_REQUIRED)
    return cleaned


def normalize_source_settings(
    source_type: str | None,
    api_endpoint: str | None,
) -> tuple[str, str | None]:
    """Resolve the source type and the endpoint that goes with it.

    Only ``api`` sources keep an endpoint; switching a source to ``database``
    or ``file`` drops it.

    Args:
        source_type: Requested source type, defaults to ``api``.
        api_endpoint: Endpoint typed by the user.

    Returns:
        tuple[str, str | None]: Source type and endpoint to send.

    Raises:
        CompanyValidationError: If the source type is not supported.
    """
    resolved = (source_type or DEFAULT_SOURCE_TYPE).strip().lower()
    if resolved not in SOURCE_TYPES:
        raise CompanyValidationError(f"Unsupported source type: {source_type}")
    if resolved != "api":
        return resolved, None
    endpoint = (api_endpoint or "").strip()
    return resolved, endpoint or None


__all__ = [
    "CompanyValidationError",
    "COMPANY_NAME_REQUIRED",
    "CONFIG_NAME_REQUIRED",
    "validate_company_name",
    "validate_config_name",
    "normalize_source_settings",
]
