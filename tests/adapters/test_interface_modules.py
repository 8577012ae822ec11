"""Ensure adapter packages expose the expected metadata."""

from importlib import import_module


def test_adapter_packages_export_nothing() -> None:
    for name in (
        "src.adapters",
        "src.adapters.interface",
        "src.adapters.interface.streamlit",
    ):
        assert import_module(name).__all__ == []


def test_streamlit_modules_export_their_helpers() -> None:
    table = import_module("src.adapters.interface.streamlit.financial_table")
    charts = import_module("src.adapters.interface.streamlit.dashboard_charts")

    assert "flatten_hierarchy" in table.__all__
    assert "build_category_chart" in charts.__all__
