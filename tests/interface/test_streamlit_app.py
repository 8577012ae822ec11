"""Tests for the Streamlit app module."""

from datetime import date
from decimal import Decimal
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters.interface.streamlit import app
from src.application.ports.finance_api import FinancialApiError
from src.application.use_cases.get_companies import CompanySelection
from src.application.use_cases.load_financial_data import FinancialDataView
from src.application.use_cases.run_etl_sync import EtlSyncResult
from src.domain.services.validation import CompanyValidationError
from src.domain.models import (
    Company,
    DataSourceConfig,
    HierarchyNode,
    JobState,
    NodeKind,
)


class _FakeSidebar:
    def __init__(self, page: str) -> None:
        self.page = page
        self.captions: list[str] = []

    def selectbox(self, label, options, index=0, format_func=None):
        if label == "Page":
            return self.page
        return options[index]

    def caption(self, text: str):
        self.captions.append(text)


class _FakeStreamlit:
    def __init__(self, page: str = "Data Table") -> None:
        self.session_state: dict = {}
        self.sidebar = _FakeSidebar(page)
        self.messages: list[tuple[str, str]] = []
        self.dataframe_payload = None

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_text = text

    def header(self, text: str):
        self.messages.append(("header", text))

    def subheader(self, text: str):
        self.messages.append(("subheader", text))

    def caption(self, text: str):
        self.messages.append(("caption", text))

    def markdown(self, text: str, **_kwargs):
        self.messages.append(("markdown", text))

    def info(self, text: str):
        self.messages.append(("info", text))

    def warning(self, text: str):
        self.messages.append(("warning", text))

    def error(self, text: str):
        self.messages.append(("error", text))

    def success(self, text: str):
        self.messages.append(("success", text))

    def button(self, _label: str):
        return False

    def multiselect(self, _label, options, format_func=None):
        return options

    def dataframe(self, data, **kwargs):
        self.dataframe_payload = (data, kwargs)

    def levels(self, level: str) -> list[str]:
        return [text for kind, text in self.messages if kind == level]


class _FakeLoader:
    """Stand-in for the cached loader, keyed like st.cache_data."""

    def __init__(self, views: dict) -> None:
        self.views = views
        self.calls: list[str] = []
        self.cache: dict = {}

    def __call__(self, company_id, refresh_token=0):
        key = (company_id, refresh_token)
        if key not in self.cache:
            self.calls.append(company_id)
            self.cache[key] = self.views[company_id].pop(0)
        return self.cache[key]

    def clear(self):
        self.cache.clear()


def _company() -> Company:
    return Company(
        id="c-1",
        name="Acme",
        configs=(
            DataSourceConfig(id="s-1", name="Books", source_type="quickbooks"),
        ),
    )


def _hierarchy() -> tuple[HierarchyNode, ...]:
    leaf = HierarchyNode(
        id="r1",
        label="Consulting",
        amount=Decimal("-300"),
        kind=NodeKind.EXPENSE,
        source="QuickBooks",
        from_date=date(2024, 1, 1),
        to_date=date(2024, 1, 31),
    )
    return (
        HierarchyNode(
            id="cat-Rent",
            label="Rent",
            amount=Decimal("-300"),
            kind=NodeKind.EXPENSE,
            children=(leaf,),
        ),
    )


def test_sync_notification_distinguishes_failures() -> None:
    """Job failures and transport failures read differently."""
    success = EtlSyncResult("c-1", JobState.SUCCESS, "Synced")
    job_failure = EtlSyncResult("c-1", JobState.ERROR, "Bad token", failure="job")
    transport = EtlSyncResult(
        "c-1",
        JobState.ERROR,
        "Failed to start ETL process",
        failure="transport",
    )
    cancelled = EtlSyncResult(
        "c-1",
        JobState.RUNNING,
        "ETL status polling cancelled",
        cancelled=True,
    )

    assert app._sync_notification(success) == (
        "success",
        "Integration Complete: Synced",
    )
    assert app._sync_notification(job_failure) == (
        "error",
        "Integration Failed: Bad token",
    )
    assert app._sync_notification(transport) == (
        "error",
        "ETL Process Failed: Failed to start ETL process",
    )
    assert app._sync_notification(cancelled)[0] == "info"


def test_data_sources_caption_pluralizes() -> None:
    """The badge reads 1 Data Source or N Data Sources."""
    assert app._data_sources_caption(_company()) == "1 Data Source"
    assert app._data_sources_caption(Company(id="c", name="C")) == (
        "0 Data Sources"
    )


def test_expandable_ids_lists_nodes_with_children() -> None:
    """Only categories and subcategories with children can expand."""
    assert app._expandable_ids(_hierarchy()) == {"cat-Rent": "Rent"}


def test_fetch_financial_data_invokes_use_case(monkeypatch) -> None:
    """_fetch_financial_data should wire the records source into the use case."""
    view = FinancialDataView(company_id="c-1")

    class _FakeUseCase:
        def __init__(self, records_port):
            assert records_port == "records"

        def execute(self, company_id):
            assert company_id == "c-1"
            return view

    monkeypatch.setattr(app, "build_financial_records_source", lambda: "records")
    monkeypatch.setattr(app, "LoadFinancialDataUseCase", _FakeUseCase)

    assert app._fetch_financial_data("c-1") is view


def test_main_reports_company_fetch_failure(monkeypatch) -> None:
    """A companies request failure shows an error and stops."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)

    def _fail(_current_id):
        raise FinancialApiError("down")

    monkeypatch.setattr(app, "_fetch_companies", _fail)

    app.main()

    assert fake_st.levels("error") == [
        "Failed to load companies. Please try again later."
    ]


def test_main_warns_without_companies(monkeypatch) -> None:
    """An empty company list still offers the create-company form."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    rendered = []
    monkeypatch.setattr(
        app,
        "_fetch_companies",
        lambda _current_id: CompanySelection(companies=(), selected=None),
    )
    monkeypatch.setattr(
        app,
        "_render_company_manager",
        lambda selection: rendered.append(selection.companies),
    )

    app.main()

    assert fake_st.levels("warning") == [
        "No companies found. Create a company first."
    ]
    assert rendered == [()]


def test_main_renders_financial_table(monkeypatch) -> None:
    """The data table page flattens the expanded hierarchy."""
    fake_st = _FakeStreamlit(page="Data Table")
    company = _company()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_fetch_companies",
        lambda _current_id: CompanySelection((company,), company),
    )
    monkeypatch.setattr(app, "_fetch_latest_job", lambda _company_id: None)
    monkeypatch.setattr(
        app,
        "_load_financial_data",
        _FakeLoader(
            {
                "c-1": [
                    FinancialDataView(
                        company_id="c-1",
                        hierarchy=_hierarchy(),
                        record_count=1,
                    )
                ]
            }
        ),
    )

    app.main()

    assert fake_st.session_state["company_id"] == "c-1"
    assert fake_st.sidebar.captions == ["1 Data Source"]
    assert "Ready to integrate data sources" in fake_st.levels("caption")
    table_data, kwargs = fake_st.dataframe_payload
    assert [row["Item"] for row in table_data] == ["Rent", "    Consulting"]
    assert table_data[0]["Amount"] == "-$300"
    assert table_data[1]["Period"] == "(Jan 2024)"
    assert table_data[1]["Source"] == "QuickBooks"
    assert kwargs["hide_index"] is True


def test_main_shows_load_errors(monkeypatch) -> None:
    """A failed records fetch shows the error instead of the page."""
    fake_st = _FakeStreamlit(page="Dashboard")
    company = _company()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_fetch_companies",
        lambda _current_id: CompanySelection((company,), company),
    )
    monkeypatch.setattr(
        app,
        "_fetch_latest_job",
        lambda _company_id: SimpleNamespace(
            message="Synced",
            state=JobState.SUCCESS,
            created_at=None,
        ),
    )
    monkeypatch.setattr(
        app,
        "_load_financial_data",
        _FakeLoader(
            {
                "c-1": [
                    FinancialDataView(
                        company_id="c-1",
                        error_message="Failed to load financial data",
                    )
                ]
            }
        ),
    )

    app.main()

    assert "Synced - Success" in fake_st.levels("caption")
    assert fake_st.levels("error") == ["Error: Failed to load financial data"]
    assert fake_st.levels("header") == []


def test_check_altair_dependencies(monkeypatch) -> None:
    """Charts are disabled when numpy or pandas imports are broken."""
    monkeypatch.setitem(sys.modules, "numpy", SimpleNamespace(ndarray=object))
    monkeypatch.setitem(sys.modules, "pandas", SimpleNamespace(Timestamp=object))
    assert app._check_altair_dependencies() == (True, None)

    monkeypatch.setitem(sys.modules, "pandas", SimpleNamespace())
    ok, message = app._check_altair_dependencies()
    assert ok is False
    assert "pandas" in message

    monkeypatch.setitem(sys.modules, "numpy", SimpleNamespace())
    ok, message = app._check_altair_dependencies()
    assert ok is False
    assert "numpy" in message


def test_render_charts_warns_when_dependencies_are_missing(monkeypatch) -> None:
    """The dashboard falls back to a warning instead of charts."""
    fake_st = _FakeStreamlit(page="Dashboard")
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_check_altair_dependencies",
        lambda: (False, "Altair charts unavailable: numpy import is incomplete."),
    )

    app._render_charts(FinancialDataView().aggregates)

    assert fake_st.levels("warning") == [
        "Altair charts unavailable: numpy import is incomplete."
    ]


def test_current_view_refetches_after_company_switch(monkeypatch) -> None:
    """Switching A -> B -> A fetches A again instead of reusing its snapshot."""
    fake_st = _FakeStreamlit()
    loader = _FakeLoader(
        {
            "A": [
                FinancialDataView(company_id="A", record_count=1),
                FinancialDataView(company_id="A", record_count=2),
            ],
            "B": [FinancialDataView(company_id="B")],
        }
    )
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_financial_data", loader)

    first = app._current_financial_view("A")
    app._current_financial_view("B")
    again = app._current_financial_view("A")

    assert loader.calls == ["A", "B", "A"]
    assert first.record_count == 1
    assert again.record_count == 2


def test_current_view_reuses_snapshot_for_same_company(monkeypatch) -> None:
    """Rerenders of the same company and refresh token hit the cache."""
    fake_st = _FakeStreamlit()
    loader = _FakeLoader({"A": [FinancialDataView(company_id="A")]})
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_financial_data", loader)

    app._current_financial_view("A")
    app._current_financial_view("A")

    assert loader.calls == ["A"]


def test_current_view_retries_after_error(monkeypatch) -> None:
    """An error view is not kept, so the next render fetches again."""
    fake_st = _FakeStreamlit()
    loader = _FakeLoader(
        {
            "A": [
                FinancialDataView(
                    company_id="A",
                    error_message="Failed to load financial data",
                ),
                FinancialDataView(company_id="A", record_count=3),
            ]
        }
    )
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_financial_data", loader)

    failed = app._current_financial_view("A")
    retried = app._current_financial_view("A")

    assert failed.error_message == "Failed to load financial data"
    assert retried.error_message is None
    assert retried.record_count == 3
    assert loader.calls == ["A", "A"]


def test_main_routes_companies_page(monkeypatch) -> None:
    """The Companies page renders the manager without loading records."""
    fake_st = _FakeStreamlit(page="Companies")
    company = _company()
    rendered = []
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_fetch_companies",
        lambda _current_id: CompanySelection((company,), company),
    )
    monkeypatch.setattr(
        app,
        "_render_company_manager",
        lambda selection: rendered.append(selection.selected),
    )
    monkeypatch.setattr(app, "_load_financial_data", _FakeLoader({}))

    app.main()

    assert rendered == [company]
    assert fake_st.levels("subheader") == []


def test_run_company_action_queues_success_notice(monkeypatch) -> None:
    """A successful edit stores its notice with the returned name."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)

    ok = app._run_company_action(
        lambda: Company(id="c-2", name="Globex"),
        "Company Created: {name} has been successfully created.",
        "Failed to create company. Please try again.",
    )

    assert ok is True
    assert fake_st.session_state["company_notice"] == (
        "Company Created: Globex has been successfully created."
    )


def test_run_company_action_reports_validation_errors(monkeypatch) -> None:
    """Validation errors show their own message."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)

    def _invalid():
        raise CompanyValidationError("Company name is required")

    ok = app._run_company_action(
        _invalid,
        "Company Created: {name} has been successfully created.",
        "Failed to create company. Please try again.",
    )

    assert ok is False
    assert fake_st.levels("error") == ["Company name is required"]
    assert "company_notice" not in fake_st.session_state


def test_run_company_action_reports_api_failures(monkeypatch) -> None:
    """API failures show the generic retry message."""
    fake_st = _FakeStreamlit()
    usage_logger = MagicMock()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: usage_logger)

    def _down():
        raise FinancialApiError("Finance API error 500")

    ok = app._run_company_action(
        _down,
        "Company Deleted: The company has been successfully deleted.",
        "Failed to delete company. Please try again.",
    )

    assert ok is False
    assert fake_st.levels("error") == [
        "Failed to delete company. Please try again."
    ]
    usage_logger.warning.assert_called_once()


def test_delete_company_drops_active_selection(monkeypatch) -> None:
    """Deleting the selected company lets the next render pick the first one."""
    fake_st = _FakeStreamlit()
    fake_st.session_state["company_id"] = "c-1"
    manager = MagicMock()
    monkeypatch.setattr(app, "st", fake_st)

    app._delete_company(manager, "c-2")
    assert fake_st.session_state["company_id"] == "c-1"

    app._delete_company(manager, "c-1")
    assert "company_id" not in fake_st.session_state
    assert [call.args for call in manager.delete_company.call_args_list] == [
        ("c-2",),
        ("c-1",),
    ]


def test_source_type_index_defaults_to_api() -> None:
    """Unknown source types preselect the api option."""
    assert app._source_type_index("file") == 2
    assert app._source_type_index("quickbooks") == 0
    assert app._source_type_index(None) == 0
