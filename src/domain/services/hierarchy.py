"""Build the category -> subcategory -> line item tree for the data table."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
import hashlib
import logging
from logging import Logger

from src.domain.constants import (
    DEFAULT_HIERARCHY_CATEGORY,
    DEFAULT_LINE_ITEM_LABEL,
    NODE_KIND_KEYWORDS,
)
from src.domain.models.records import HierarchyNode, NodeKind, RawRecord
from src.domain.services.dates import earliest, latest
from src.utils.decimal_utils import coerce_decimal


@dataclass
class _NodeBuilder:
    """Mutable node used while records are folded into the tree."""

    id: str
    label: str
    kind: NodeKind
    amount: Decimal = Decimal("0")
    from_date: date | None = None
    to_date: date | None = None
    has_duplicates: bool = False
    source: str | None = None
    children: list["_NodeBuilder"] = field(default_factory=list)
    child_index: dict[str, "_NodeBuilder"] = field(default_factory=dict)

    def add(
        self,
        amount: Decimal,
        from_date: date | None,
        to_date: date | None,
    ) -> None:
        self.amount += amount
        self.from_date = earliest(self.from_date, from_date)
        self.to_date = latest(self.to_date, to_date)

    def freeze(self) -> HierarchyNode:
        """Return an immutable copy with children sorted by magnitude."""
        return HierarchyNode(
            id=self.id,
            label=self.label,
            amount=self.amount,
            kind=self.kind,
            from_date=self.from_date,
            to_date=self.to_date,
            has_duplicates=self.has_duplicates,
            source=self.source,
            children=tuple(
                child.freeze() for child in _sort_by_magnitude(self.children)
            ),
        )


def determine_node_kind(category: str | None, amount) -> NodeKind:
    """Classify a record from its category name, falling back on its sign.

    Args:
        category: Raw category of the record.
        amount: Raw amount of the record.

    Returns:
        NodeKind: The first kind whose keywords appear in the category,
        otherwise revenue for non-negative amounts and expense for negative.
    """
    if category:
        lowered = category.lower()
        for kind, keywords in NODE_KIND_KEYWORDS:
            if any(keyword in lowered for keyword in keywords):
                return NodeKind(kind)
    if coerce_decimal(amount) >= 0:
        return NodeKind.REVENUE
    return NodeKind.EXPENSE


def build_financial_hierarchy(
    records: Sequence[RawRecord],
    logger: Logger | None = None,
) -> tuple[HierarchyNode, ...]:
    """Group flat records into a sorted three level tree.

    Categories aggregate every record they hold. Records with a subcategory
    are summed into a subcategory node and, when they name a distinct line
    item (or come from a nested source row), also listed as a leaf under it.
    Records without a subcategory are listed as leaves of the category.
    Every level is ordered by descending absolute amount.

    Args:
        records: Records in the order returned by the data source.
        logger: Logger used to report malformed input.

    Returns:
        tuple[HierarchyNode, ...]: Category nodes, or an empty tuple when the
        records cannot be processed.
    """
    resolved_logger = logger or logging.getLogger(__name__)
    try:
        return _build(records)
    except Exception as exc:
        resolved_logger.error(f"Failed to build financial hierarchy: {exc}")
        return ()


def _build(records: Sequence[RawRecord]) -> tuple[HierarchyNode, ...]:
    category_counts = Counter(
        record.category or DEFAULT_HIERARCHY_CATEGORY for record in records
    )
    categories: dict[str, _NodeBuilder] = {}

    for index, record in enumerate(records):
        category = record.category or DEFAULT_HIERARCHY_CATEGORY
        amount = coerce_decimal(record.amount)
        kind = determine_node_kind(record.category, record.amount)

        category_node = categories.get(category)
        if category_node is None:
            category_node = _NodeBuilder(
                id=f"cat-{category}",
                label=category,
                kind=kind,
                has_duplicates=category_counts[category] > 1,
            )
            categories[category] = category_node
        category_node.add(amount, record.from_date, record.to_date)

        subcategory = record.subcategory
        if subcategory:
            sub_node = category_node.child_index.get(subcategory)
            if sub_node is None:
                sub_node = _NodeBuilder(
                    id=f"subcat-{category}-{subcategory}",
                    label=subcategory,
                    kind=kind,
                )
                category_node.child_index[subcategory] = sub_node
                category_node.children.append(sub_node)
            sub_node.add(amount, record.from_date, record.to_date)
            if _is_distinct_line_item(record):
                sub_node.children.append(
                    _leaf(record, category, index, kind, amount)
                )
        else:
            category_node.children.append(
                _leaf(record, category, index, kind, amount)
            )

    return tuple(
        node.freeze() for node in _sort_by_magnitude(categories.values())
    )


def _is_distinct_line_item(record: RawRecord) -> bool:
    if not record.line_item_name:
        return False
    if record.line_item_name != record.subcategory:
        return True
    return coerce_decimal(record.depth) > 1


def _leaf(
    record: RawRecord,
    category: str,
    index: int,
    kind: NodeKind,
    amount: Decimal,
) -> _NodeBuilder:
    return _NodeBuilder(
        id=record.id or _fallback_id(category, record.subcategory, index),
        label=record.line_item_name or DEFAULT_LINE_ITEM_LABEL,
        kind=kind,
        amount=amount,
        from_date=record.from_date,
        to_date=record.to_date,
        source=record.source_name,
    )


def _fallback_id(category: str, subcategory: str | None, index: int) -> str:
    digest = hashlib.sha1(
        f"{category}|{subcategory or ''}|{index}".encode("utf-8")
    ).hexdigest()
    return f"line-{digest[:12]}"


def _sort_by_magnitude(nodes) -> list[_NodeBuilder]:
    # sorted() is stable, ties keep insertion order.
    return sorted(nodes, key=lambda node: abs(node.amount), reverse=True)


__all__ = ["build_financial_hierarchy", "determine_node_kind"]
