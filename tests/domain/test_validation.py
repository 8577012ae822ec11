"""Tests for company and data source validation."""

import pytest

from src.domain.services.validation import (
    CompanyValidationError,
    normalize_source_settings,
    validate_company_name,
    validate_config_name,
)


def test_validate_company_name_strips_whitespace() -> None:
    """Valid names come back trimmed."""
    assert validate_company_name("  Acme  ") == "Acme"


def test_validate_names_reject_blank_values() -> None:
    """Missing names raise with the user-facing message."""
    with pytest.raises(CompanyValidationError, match="Company name is required"):
        validate_company_name(None)
    with pytest.raises(
        CompanyValidationError,
        match="Configuration name is required",
    ):
        validate_config_name(" \t ")


def test_normalize_source_settings_keeps_api_endpoint() -> None:
    """Api sources keep a trimmed endpoint and blank endpoints become None."""
    assert normalize_source_settings(None, " https://a.test ") == (
        "api",
        "https://a.test",
    )
    assert normalize_source_settings("api", "  ") == ("api", None)


def test_normalize_source_settings_drops_endpoint_for_other_types() -> None:
    """Database and file sources never carry an endpoint."""
    assert normalize_source_settings("Database", "https://a.test") == (
        "database",
        None,
    )
    assert normalize_source_settings("file", None) == ("file", None)


def test_normalize_source_settings_rejects_unknown_type() -> None:
    """Unsupported source types are refused."""
    with pytest.raises(CompanyValidationError, match="Unsupported source type"):
        normalize_source_settings("ftp", None)
