"""Tests for the etl_sync_cli adapter."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters import etl_sync_cli
from src.application.use_cases.load_financial_data import FinancialDataView
from src.application.use_cases.run_etl_sync import EtlSyncResult
from src.domain.models import DashboardAggregates, JobState, MetricsSummary


def _patch_wiring(monkeypatch, sync_result, view=None):
    fake_logger = MagicMock()
    settings = SimpleNamespace(poll_interval_seconds=0)
    sync_use_case = MagicMock()
    sync_use_case.execute.return_value = sync_result
    load_use_case = MagicMock()
    load_use_case.execute.return_value = view

    monkeypatch.setattr(etl_sync_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        etl_sync_cli.FinanceDashboardSettings,
        "from_env",
        classmethod(lambda cls: settings),
    )
    monkeypatch.setattr(etl_sync_cli, "build_etl_jobs_port", lambda s: "jobs")
    monkeypatch.setattr(
        etl_sync_cli,
        "build_companies_source",
        lambda s: "companies",
    )
    monkeypatch.setattr(
        etl_sync_cli,
        "build_financial_records_source",
        lambda s: "records",
    )

    def _fake_sync(jobs_port, companies_port, logger, poll_interval):
        assert jobs_port == "jobs"
        assert companies_port == "companies"
        assert logger is fake_logger
        assert poll_interval == 0
        return sync_use_case

    monkeypatch.setattr(etl_sync_cli, "RunEtlSyncUseCase", _fake_sync)
    monkeypatch.setattr(
        etl_sync_cli,
        "LoadFinancialDataUseCase",
        lambda records_port, logger: load_use_case,
    )
    return sync_use_case, load_use_case


def test_main_runs_sync_and_prints_metrics(monkeypatch, capsys):
    """A successful sync prints the job and the refreshed metrics."""
    metrics = MetricsSummary(
        total_revenue=Decimal("1500"),
        monthly_profit=Decimal("1200"),
        profit_margin=80,
        net_assets=Decimal("1200"),
        revenue_change_percent=-50,
        date_range_label="Jan 2024 - Feb 2024",
    )
    view = FinancialDataView(
        company_id="c-1",
        aggregates=DashboardAggregates(metrics=metrics),
        record_count=3,
    )
    sync_use_case, load_use_case = _patch_wiring(
        monkeypatch,
        EtlSyncResult(
            company_id="c-1",
            state=JobState.SUCCESS,
            message="Done",
            job_id="j-1",
        ),
        view,
    )

    exit_code = etl_sync_cli.main(["c-1"])

    assert exit_code == 0
    sync_use_case.execute.assert_called_once_with("c-1")
    load_use_case.execute.assert_called_once_with("c-1")
    output = capsys.readouterr().out
    assert "ETL job j-1: success - Done" in output
    assert "Loaded 3 records" in output
    assert "margin=80%" in output
    assert "revenue change=-50%" in output


def test_main_returns_error_code_when_sync_fails(monkeypatch, capsys):
    """A failed job should not load data and should exit with 1."""
    _, load_use_case = _patch_wiring(
        monkeypatch,
        EtlSyncResult(
            company_id="c-1",
            state=JobState.ERROR,
            message="Failed to start ETL process",
            failure="transport",
        ),
    )

    exit_code = etl_sync_cli.main(["c-1"])

    assert exit_code == 1
    load_use_case.execute.assert_not_called()
    assert "Failed to start ETL process" in capsys.readouterr().out


def test_main_reads_company_from_environment(monkeypatch):
    """ETL_COMPANY_ID is used when no argument is given."""
    sync_use_case, _ = _patch_wiring(
        monkeypatch,
        EtlSyncResult(company_id="env", state=JobState.ERROR, message="x"),
    )
    monkeypatch.setenv("ETL_COMPANY_ID", "env")

    etl_sync_cli.main([])

    sync_use_case.execute.assert_called_once_with("env")


def test_main_requires_company_id(monkeypatch):
    """Without an id the CLI exits with a usage error."""
    fake_logger = MagicMock()
    monkeypatch.setattr(etl_sync_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.delenv("ETL_COMPANY_ID", raising=False)

    assert etl_sync_cli.main([]) == 2
    fake_logger.warning.assert_called_once()
