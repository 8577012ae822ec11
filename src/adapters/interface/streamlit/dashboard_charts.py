"""Chart data preparation and Altair charts for the dashboard page."""

from __future__ import annotations

import altair as alt

from src.adapters.interface.streamlit.financial_table import format_currency
from src.domain.models import DashboardAggregates

REVENUE_COLOR = "#10b981"
EXPENSES_COLOR = "#ef4444"
PROFIT_COLOR = "#3b82f6"


def prepare_monthly_chart_data(
    aggregates: DashboardAggregates,
) -> list[dict[str, str | float | int]]:
    """Return long-form rows (one per month and series) for grouped bars.

    The ``order`` field keeps the months chronological on the x axis.
    """
    data: list[dict[str, str | float | int]] = []
    for order, bucket in enumerate(aggregates.monthly):
        for series, amount in (
            ("Revenue", bucket.revenue),
            ("Expenses", bucket.expenses),
        ):
            data.append(
                {
                    "month": bucket.month_label,
                    "order": order,
                    "series": series,
                    "amount": float(amount),
                    "amount_label": format_currency(amount),
                }
            )
    return data


def prepare_category_chart_data(
    aggregates: DashboardAggregates,
) -> list[dict[str, str | float]]:
    """Return donut rows for the top categories, colors included."""
    return [
        {
            "category": category.label,
            "amount": float(category.value),
            "amount_label": format_currency(category.value),
            "color": category.color,
            "date_range": category.date_range or "",
        }
        for category in aggregates.categories
    ]


def prepare_quarter_chart_data(
    aggregates: DashboardAggregates,
) -> list[dict[str, str | float]]:
    """Return one row per quarter for the profit trend."""
    return [
        {
            "period": quarter.period_label,
            "profit": float(quarter.profit),
            "profit_label": format_currency(quarter.profit),
        }
        for quarter in aggregates.quarters
    ]


def build_monthly_chart(aggregates: DashboardAggregates) -> alt.Chart:
    """Grouped bar chart of monthly revenue against expenses."""
    data = prepare_monthly_chart_data(aggregates)
    return alt.Chart(alt.Data(values=data)).mark_bar().encode(
        x=alt.X(
            "month:N",
            sort=alt.EncodingSortField(field="order", order="ascending"),
            axis=alt.Axis(labelAngle=-45, title=None),
        ),
        xOffset="series:N",
        y=alt.Y("amount:Q", title=None),
        color=alt.Color(
            "series:N",
            scale=alt.Scale(
                domain=["Revenue", "Expenses"],
                range=[REVENUE_COLOR, EXPENSES_COLOR],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("series:N"),
            alt.Tooltip("amount_label:N"),
        ],
    ).properties(height=500)


def build_category_chart(
    aggregates: DashboardAggregates,
    chart_size: int = 350,
) -> alt.Chart:
    """Donut chart of the top categories with their assigned colors."""
    data = prepare_category_chart_data(aggregates)
    return alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.25,
        stroke="#0f1115",
        strokeWidth=1,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color("color:N", scale=None),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("date_range:N"),
        ],
    ).properties(width=chart_size, height=chart_size)


def build_quarter_chart(aggregates: DashboardAggregates) -> alt.Chart:
    """Line chart of quarterly profit."""
    data = prepare_quarter_chart_data(aggregates)
    return alt.Chart(alt.Data(values=data)).mark_line(
        point=True,
        color=PROFIT_COLOR,
    ).encode(
        x=alt.X("period:N", sort=None, title=None),
        y=alt.Y("profit:Q", title=None),
        tooltip=[alt.Tooltip("period:N"), alt.Tooltip("profit_label:N")],
    ).properties(height=300)


__all__ = [
    "prepare_monthly_chart_data",
    "prepare_category_chart_data",
    "prepare_quarter_chart_data",
    "build_monthly_chart",
    "build_category_chart",
    "build_quarter_chart",
]
