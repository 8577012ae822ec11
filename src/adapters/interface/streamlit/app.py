"""Streamlit dashboard entry point."""

from collections.abc import Callable, Sequence
from typing import Any

import streamlit as st

from src.adapters.interface.streamlit.dashboard_charts import (
    build_category_chart,
    build_monthly_chart,
    build_quarter_chart,
)
from src.adapters.interface.streamlit.financial_table import (
    flatten_hierarchy,
    format_currency,
)
from src.application.ports.finance_api import FinancialApiError
from src.application.use_cases.get_companies import (
    CompanySelection,
    GetCompaniesUseCase,
)
from src.application.use_cases.get_latest_etl_job import (
    GetLatestEtlJobUseCase,
)
from src.application.use_cases.load_financial_data import (
    FinancialDataView,
    LoadFinancialDataUseCase,
)
from src.application.use_cases.manage_companies import (
    COMPANY_CREATE_FAILED,
    COMPANY_DELETE_FAILED,
    COMPANY_UPDATE_FAILED,
    CONFIG_CREATE_FAILED,
    CONFIG_DELETE_FAILED,
    CONFIG_UPDATE_FAILED,
    ManageCompaniesUseCase,
)
from src.application.use_cases.run_etl_sync import (
    EtlSyncResult,
    RunEtlSyncUseCase,
)
from src.domain.constants import SOURCE_TYPES
from src.domain.models import (
    Company,
    DashboardAggregates,
    DataSourceConfig,
    EtlJob,
    HierarchyNode,
    JobState,
)
from src.domain.services.validation import CompanyValidationError
from src.infrastructure.container import (
    build_companies_source,
    build_etl_jobs_port,
    build_financial_records_source,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import FinanceDashboardSettings

STATUS_LABELS = {
    JobState.IDLE: "Idle",
    JobState.RUNNING: "Running",
    JobState.SUCCESS: "Success",
    JobState.ERROR: "Error",
}


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that numpy and pandas import cleanly for Altair rendering.

    Returns:
        Tuple of (ok, message) where message explains the broken import.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Altair charts unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "Altair charts unavailable: numpy import is incomplete."
    if not hasattr(pandas, "Timestamp"):
        return False, "Altair charts unavailable: pandas import is incomplete."
    return True, None


def _fetch_companies(current_id: str | None) -> CompanySelection:
    """Fetch companies and resolve the selected one."""
    use_case = GetCompaniesUseCase(companies_port=build_companies_source())
    return use_case.execute(current_id)


def _fetch_financial_data(company_id: str) -> FinancialDataView:
    """Fetch one record snapshot and build the table and chart views."""
    use_case = LoadFinancialDataUseCase(
        records_port=build_financial_records_source()
    )
    return use_case.execute(company_id)


@st.cache_data(show_spinner=False)
def _load_financial_data(
    company_id: str,
    refresh_token: int = 0,
) -> FinancialDataView:
    """Cached wrapper around _fetch_financial_data.

    ``refresh_token`` is bumped after each successful ETL run so the next
    render refetches the records. Callers go through
    _current_financial_view, which also controls when the cache is cleared.
    """
    _ = refresh_token
    return _fetch_financial_data(company_id)


def _current_financial_view(company_id: str) -> FinancialDataView:
    """Return the records view of the selected company.

    Switching companies clears every cached snapshot so coming back to a
    company refetches it. Error views are cleared right away so the next
    render retries the request.
    """
    if st.session_state.get("loaded_company_id") != company_id:
        _load_financial_data.clear()
        st.session_state["loaded_company_id"] = company_id
    view = _load_financial_data(
        company_id,
        st.session_state.get("refresh_token", 0),
    )
    if view.error_message:
        _load_financial_data.clear()
    return view


def _fetch_latest_job(company_id: str) -> EtlJob | None:
    """Fetch the most recent ETL job of the company."""
    use_case = GetLatestEtlJobUseCase(jobs_port=build_etl_jobs_port())
    return use_case.execute(company_id)


def _run_etl_sync(company_id: str) -> EtlSyncResult:
    """Start an ETL sync and block until the job finishes."""
    settings = FinanceDashboardSettings.from_env()
    use_case = RunEtlSyncUseCase(
        jobs_port=build_etl_jobs_port(settings),
        companies_port=build_companies_source(settings),
        poll_interval=settings.poll_interval_seconds,
    )
    return use_case.execute(company_id)


def _sync_notification(result: EtlSyncResult) -> tuple[str, str]:
    """Return the (level, text) notification for a finished sync.

    Job failures carry the job's own message; transport failures carry the
    client-side message.
    """
    if result.state is JobState.SUCCESS:
        return "success", f"Integration Complete: {result.message}"
    if result.failure == "job":
        return "error", f"Integration Failed: {result.message}"
    if result.failure == "transport":
        return "error", f"ETL Process Failed: {result.message}"
    return "info", result.message


def _data_sources_caption(company: Company) -> str:
    """Return the ``"2 Data Sources"`` badge text."""
    count = len(company.configs)
    noun = "Source" if count == 1 else "Sources"
    return f"{count} Data {noun}"


def _render_etl_controls(company: Company) -> None:
    """Render the ETL status and the integrate button."""
    st.subheader("ETL Integration Controls")
    try:
        latest_job = _fetch_latest_job(company.id)
    except FinancialApiError:
        latest_job = None
    if latest_job is None:
        st.caption("Ready to integrate data sources")
    else:
        st.caption(
            f"{latest_job.message or 'Last job'} - "
            f"{STATUS_LABELS[latest_job.state]}"
        )
        if latest_job.created_at:
            st.caption(f"Last run: {latest_job.created_at:%Y-%m-%d %H:%M}")

    if company.configs:
        for config in company.configs:
            st.markdown(f"- {config.name} ({config.source_type or 'unknown'})")
    else:
        st.caption(
            "No data sources configured. "
            "Add data sources on the Companies page."
        )

    if st.button("Integrate Data"):
        get_usage_logger().info(f"ETL sync requested for company {company.id}")
        with st.spinner("Integrating..."):
            result = _run_etl_sync(company.id)
        level, text = _sync_notification(result)
        getattr(st, level)(text)
        if result.state is JobState.SUCCESS:
            st.session_state["refresh_token"] = (
                st.session_state.get("refresh_token", 0) + 1
            )


def _render_metrics(aggregates: DashboardAggregates) -> None:
    """Render the headline metrics."""
    metrics = aggregates.metrics
    revenue_col, profit_col = st.columns(2)
    revenue_col.metric(
        "Total Revenue",
        format_currency(metrics.total_revenue),
        f"{metrics.revenue_change_percent}% from last period",
    )
    revenue_col.caption(metrics.date_range_label)
    profit_col.metric(
        "Monthly Profit",
        format_currency(metrics.monthly_profit),
        f"{metrics.profit_margin}% profit margin",
        delta_color="off",
    )
    if metrics.most_recent_record_date:
        st.caption(f"Last run: {metrics.most_recent_record_date:%Y-%m-%d}")


def _render_charts(aggregates: DashboardAggregates) -> None:
    """Render the monthly, category and quarterly charts."""
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        return
    st.subheader("Monthly Revenue vs. Expenses (All Periods)")
    if aggregates.monthly:
        st.altair_chart(build_monthly_chart(aggregates), width="stretch")
    else:
        st.info("No revenue data available")

    st.subheader("Revenue by Category")
    if aggregates.categories:
        chart_col, legend_col = st.columns(2)
        with chart_col:
            st.altair_chart(build_category_chart(aggregates))
        with legend_col:
            for category in aggregates.categories:
                st.markdown(
                    f"<span style='color:{category.color}'>&#9632;</span> "
                    f"**{category.label}** {format_currency(category.value)}"
                    f"  \n{category.date_range or ''}",
                    unsafe_allow_html=True,
                )
    else:
        st.info("No category data available")

    st.subheader("Quarterly Profit")
    if aggregates.quarters:
        st.altair_chart(build_quarter_chart(aggregates), width="stretch")


def _render_financial_table(hierarchy: Sequence[HierarchyNode]) -> None:
    """Render the expandable financial data table."""
    st.subheader("Financial Data")
    if not hierarchy:
        st.info("No financial data available. Run the ETL process first.")
        return
    expandable = _expandable_ids(hierarchy)
    expanded = st.multiselect(
        "Expand rows",
        options=list(expandable),
        format_func=lambda row_id: expandable[row_id],
    )
    rows = flatten_hierarchy(hierarchy, expanded)
    data = [
        {
            "Item": f"{'    ' * row.level}{row.label}",
            "Period": row.date_range or "",
            "Source": row.source or "",
            "Amount": (
                row.amount_label if row.trend == "up" else f"-{row.amount_label}"
            ),
        }
        for row in rows
    ]
    st.dataframe(data, width="stretch", hide_index=True)


def _expandable_ids(hierarchy: Sequence[HierarchyNode]) -> dict[str, str]:
    """Return id -> label for every node that has children."""
    expandable: dict[str, str] = {}
    for node in hierarchy:
        if node.children:
            expandable[node.id] = node.label
        for child in node.children:
            if child.children:
                expandable[child.id] = f"{node.label} / {child.label}"
    return expandable


def _manage_companies() -> ManageCompaniesUseCase:
    """Build the use case backing the Companies page."""
    return ManageCompaniesUseCase(companies_port=build_companies_source())


def _run_company_action(
    action: Callable[[], Any],
    success_message: str,
    failure_message: str,
) -> bool:
    """Run one company edit and queue its notification for the next render.

    ``success_message`` may reference ``{name}``, filled from the company or
    data source returned by the action.

    Returns:
        bool: True when the edit went through and the page should rerun.
    """
    try:
        result = action()
    except CompanyValidationError as exc:
        st.error(str(exc))
        return False
    except FinancialApiError as exc:
        get_usage_logger().warning(f"Company edit failed: {exc}")
        st.error(failure_message)
        return False
    name = getattr(result, "name", "")
    st.session_state["company_notice"] = success_message.format(name=name)
    return True


def _delete_company(manager: ManageCompaniesUseCase, company_id: str) -> None:
    """Delete a company and drop it from the selection if it was active."""
    manager.delete_company(company_id)
    if st.session_state.get("company_id") == company_id:
        st.session_state.pop("company_id", None)


def _source_type_index(source_type: str | None) -> int:
    if source_type in SOURCE_TYPES:
        return SOURCE_TYPES.index(source_type)
    return 0


def _render_company_manager(selection: CompanySelection) -> None:
    """Render the Companies page: company and data source editing."""
    st.header("Company Management")
    notice = st.session_state.pop("company_notice", None)
    if notice:
        st.success(notice)
    manager = _manage_companies()

    with st.expander("Add Company", expanded=not selection.companies):
        with st.form("create-company", clear_on_submit=True):
            name = st.text_input("Company Name", key="new-company-name")
            description = st.text_area(
                "Description", key="new-company-description"
            )
            submitted = st.form_submit_button("Create Company")
        if submitted and _run_company_action(
            lambda: manager.create_company(name, description),
            "Company Created: {name} has been successfully created.",
            COMPANY_CREATE_FAILED,
        ):
            st.rerun()

    for company in selection.companies:
        with st.expander(f"{company.name} - {_data_sources_caption(company)}"):
            _render_company_editor(manager, company)


def _render_company_editor(
    manager: ManageCompaniesUseCase,
    company: Company,
) -> None:
    with st.form(f"edit-company-{company.id}"):
        name = st.text_input(
            "Company Name", value=company.name, key=f"name-{company.id}"
        )
        description = st.text_area(
            "Description",
            value=company.description or "",
            key=f"description-{company.id}",
        )
        saved = st.form_submit_button("Save Company")
        removed = st.form_submit_button("Delete Company")
    if saved and _run_company_action(
        lambda: manager.update_company(company.id, name, description),
        "Company Updated: {name} has been successfully updated.",
        COMPANY_UPDATE_FAILED,
    ):
        st.rerun()
    if removed and _run_company_action(
        lambda: _delete_company(manager, company.id),
        "Company Deleted: The company has been successfully deleted.",
        COMPANY_DELETE_FAILED,
    ):
        st.rerun()

    st.subheader("Data Sources")
    if not company.configs:
        st.caption("No data sources configured yet.")
    for config in company.configs:
        _render_config_editor(manager, company, config)

    with st.form(f"add-config-{company.id}", clear_on_submit=True):
        config_name = st.text_input(
            "Configuration Name", key=f"new-config-name-{company.id}"
        )
        source_type = st.selectbox(
            "Source Type", SOURCE_TYPES, key=f"new-config-type-{company.id}"
        )
        endpoint = st.text_input(
            "API Endpoint", key=f"new-config-endpoint-{company.id}"
        )
        added = st.form_submit_button("Add Data Source")
    if added and _run_company_action(
        lambda: manager.add_config(
            company.id, config_name, source_type, endpoint
        ),
        "Configuration Added: {name} has been successfully added.",
        CONFIG_CREATE_FAILED,
    ):
        st.rerun()


def _render_config_editor(
    manager: ManageCompaniesUseCase,
    company: Company,
    config: DataSourceConfig,
) -> None:
    with st.form(f"edit-config-{config.id}"):
        name = st.text_input(
            "Configuration Name", value=config.name, key=f"config-{config.id}"
        )
        source_type = st.selectbox(
            "Source Type",
            SOURCE_TYPES,
            index=_source_type_index(config.source_type),
            key=f"config-type-{config.id}",
        )
        endpoint = st.text_input(
            "API Endpoint",
            value=config.api_endpoint or "",
            key=f"config-endpoint-{config.id}",
        )
        saved = st.form_submit_button("Update Data Source")
        removed = st.form_submit_button("Delete Data Source")
    if saved and _run_company_action(
        lambda: manager.update_config(
            company.id, config.id, name, source_type, endpoint
        ),
        "Configuration Updated: {name} has been successfully updated.",
        CONFIG_UPDATE_FAILED,
    ):
        st.rerun()
    if removed and _run_company_action(
        lambda: manager.delete_config(company.id, config.id),
        "Configuration Deleted: The data source configuration has been "
        "successfully deleted.",
        CONFIG_DELETE_FAILED,
    ):
        st.rerun()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Financial Dashboard", layout="wide")
    st.title("Financial Dashboard")

    try:
        selection = _fetch_companies(st.session_state.get("company_id"))
    except FinancialApiError:
        st.error("Failed to load companies. Please try again later.")
        return
    if selection.selected is None:
        st.warning("No companies found. Create a company first.")
        _render_company_manager(selection)
        return

    names = {company.id: company.name for company in selection.companies}
    company_ids = list(names)
    company_id = st.sidebar.selectbox(
        "Company",
        options=company_ids,
        index=company_ids.index(selection.selected.id),
        format_func=lambda value: names[value],
    )
    st.session_state["company_id"] = company_id
    company = next(c for c in selection.companies if c.id == company_id)
    st.sidebar.caption(_data_sources_caption(company))

    page = st.sidebar.selectbox("Page", ["Dashboard", "Data Table", "Companies"])
    if page == "Companies":
        _render_company_manager(selection)
        return
    _render_etl_controls(company)

    view = _current_financial_view(company.id)
    if view.error_message:
        st.error(f"Error: {view.error_message}")
        return

    if page == "Dashboard":
        st.header(f"{company.name} Dashboard Visualization")
        _render_metrics(view.aggregates)
        _render_charts(view.aggregates)
    else:
        _render_financial_table(view.hierarchy)


if __name__ == "__main__":  # pragma: no cover
    main()
