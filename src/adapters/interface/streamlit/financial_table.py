"""Hierarchical financial table presentation logic for the Streamlit UI.

Pure transformations from the ``HierarchyNode`` tree built by the domain to
flat, display-ready rows. The UI keeps the set of expanded row ids in
``st.session_state`` and re-flattens the tree whenever it changes; children
are only emitted below expanded rows.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from src.domain.models import HierarchyNode
from src.domain.services.dates import format_month_label


@dataclass(frozen=True)
class TableRow:
    """One visible row of the financial table."""

    id: str
    label: str
    level: int
    amount: Decimal
    amount_label: str
    trend: Literal["up", "down"]
    date_range: str | None
    source: str | None
    has_children: bool
    expanded: bool


def format_currency(value: Decimal, absolute: bool = False) -> str:
    """Format an amount as whole US dollars.

    Args:
        value: Amount to format.
        absolute: Drop the sign (the table shows the sign as a trend icon).

    Returns:
        str: Value such as ``"$1,500"`` or ``"-$300"``.
    """
    rounded = value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 and not absolute else ""
    return f"{sign}${abs(rounded):,.0f}"


def format_node_date_range(node: HierarchyNode, level: int) -> str | None:
    """Return the parenthesized period shown next to a row label.

    Top-level rows only show it when the category holds several records.
    Both bounds are required.
    """
    if not (node.has_duplicates or level > 0):
        return None
    if node.from_date is None or node.to_date is None:
        return None
    start = format_month_label(node.from_date)
    end = format_month_label(node.to_date)
    if start == end:
        return f"({start})"
    return f"({start} - {end})"


def flatten_hierarchy(
    nodes: Sequence[HierarchyNode],
    expanded_ids: Iterable[str] = (),
) -> list[TableRow]:
    """Flatten the tree into visible rows, depth first.

    Args:
        nodes: Top-level category nodes.
        expanded_ids: Ids of rows whose children are visible.

    Returns:
        list[TableRow]: Rows in display order.
    """
    expanded = set(expanded_ids)
    rows: list[TableRow] = []
    _append_rows(rows, nodes, 0, expanded)
    return rows


def toggle_row(expanded_ids: Iterable[str], row_id: str) -> frozenset[str]:
    """Return the expanded ids with row_id toggled."""
    updated = set(expanded_ids)
    if row_id in updated:
        updated.remove(row_id)
    else:
        updated.add(row_id)
    return frozenset(updated)


def _append_rows(
    rows: list[TableRow],
    nodes: Sequence[HierarchyNode],
    level: int,
    expanded: set[str],
) -> None:
    for node in nodes:
        is_expanded = node.id in expanded
        rows.append(
            TableRow(
                id=node.id,
                label=node.label,
                level=level,
                amount=node.amount,
                amount_label=format_currency(node.amount, absolute=True),
                trend="up" if node.amount >= 0 else "down",
                date_range=format_node_date_range(node, level),
                source=node.source if level > 0 else None,
                has_children=bool(node.children),
                expanded=is_expanded,
            )
        )
        if node.children and is_expanded:
            _append_rows(rows, node.children, level + 1, expanded)


__all__ = [
    "TableRow",
    "format_currency",
    "format_node_date_range",
    "flatten_hierarchy",
    "toggle_row",
]
