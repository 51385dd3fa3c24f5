"""Hierarchy builder: nested trees from flat parent-pointer records.

Used for the folder tree, collection nesting, folder-scoped media queries
and cascading deletes. All walks are iterative and visited-set guarded, so
malformed parent links surface as HierarchyCycleException instead of
unbounded recursion. Inputs are never mutated.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from medialib.application.services.query_engine import field_value
from medialib.domain.exceptions import HierarchyCycleException

logger = logging.getLogger(__name__)


def _node(record: Any) -> dict[str, Any]:
    """Return a new dict holding the record's fields (lists and dicts copied)."""
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    if isinstance(record, Mapping):
        return {k: (list(v) if isinstance(v, list) else v) for k, v in record.items()}
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def children_index(
    records: Iterable[Any], parent_field: str = "parent"
) -> dict[str | None, list[Any]]:
    """Group records by parent id, keeping input order within each group."""
    index: dict[str | None, list[Any]] = {}
    for record in records:
        index.setdefault(field_value(record, parent_field), []).append(record)
    return index


def descendant_ids(
    records: Sequence[Any], root_id: str, parent_field: str = "parent"
) -> list[str]:
    """Return ids of all transitive descendants of ``root_id`` (depth-first, pre-order).

    ``root_id`` itself is not included. No id is ever visited twice.

    Raises:
        HierarchyCycleException: If the walk reaches an id it has already seen.
    """
    index = children_index(records, parent_field)
    visited = {root_id}
    result: list[str] = []
    stack = list(reversed(index.get(root_id, [])))
    while stack:
        record = stack.pop()
        record_id = field_value(record, "id")
        if record_id in visited:
            raise HierarchyCycleException(record_id, parent_field)
        visited.add(record_id)
        result.append(record_id)
        stack.extend(reversed(index.get(record_id, [])))
    return result


def ancestor_ids(
    records: Sequence[Any], record_id: str, parent_field: str = "parent"
) -> list[str]:
    """Return ids on the parent chain of ``record_id``, nearest first.

    Stops at a root or at a parent id that does not resolve.

    Raises:
        HierarchyCycleException: If the chain loops.
    """
    by_id = {field_value(r, "id"): r for r in records}
    chain: list[str] = []
    seen = {record_id}
    current = by_id.get(record_id)
    while current is not None:
        parent_id = field_value(current, parent_field)
        if parent_id is None:
            break
        if parent_id in seen:
            raise HierarchyCycleException(parent_id, parent_field)
        seen.add(parent_id)
        chain.append(parent_id)
        current = by_id.get(parent_id)
    return chain


def would_create_cycle(
    records: Sequence[Any],
    record_id: str,
    new_parent_id: str | None,
    parent_field: str = "parent",
) -> bool:
    """Return whether pointing ``record_id`` at ``new_parent_id`` would close a loop."""
    if new_parent_id is None:
        return False
    if new_parent_id == record_id:
        return True
    return record_id in ancestor_ids(records, new_parent_id, parent_field)


def build_forest(
    records: Sequence[Any], parent_field: str = "parent"
) -> list[dict[str, Any]]:
    """Build the nested forest: each root (null parent) gets ``children`` recursively.

    Output nodes are new dicts (record fields plus ``children``); the source
    records are not modified. Records whose parent does not resolve are left
    out of the forest and logged.

    Raises:
        HierarchyCycleException: If any records form a parent-pointer cycle.
    """
    index = children_index(records, parent_field)
    forest: list[dict[str, Any]] = []
    visited: set[str] = set()
    stack: list[tuple[Any, list[dict[str, Any]]]] = [
        (root, forest) for root in reversed(index.get(None, []))
    ]
    while stack:
        record, siblings = stack.pop()
        record_id = field_value(record, "id")
        if record_id in visited:
            raise HierarchyCycleException(record_id, parent_field)
        visited.add(record_id)
        node = _node(record)
        node["children"] = []
        siblings.append(node)
        for child in reversed(index.get(record_id, [])):
            stack.append((child, node["children"]))

    unreached = [r for r in records if field_value(r, "id") not in visited]
    for record in unreached:
        # Raises when the record sits on (or hangs below) a loop.
        ancestor_ids(records, field_value(record, "id"), parent_field)
    if unreached:
        logger.warning(
            "Hierarchy has %d record(s) with unresolved %s; omitted from tree: %s",
            len(unreached),
            parent_field,
            [field_value(r, "id") for r in unreached],
        )
    return forest
