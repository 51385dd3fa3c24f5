"""Tests for tree building and descendant walks over parent-pointer records."""

import copy

import pytest

from medialib.application.services.hierarchy import (
    ancestor_ids,
    build_forest,
    descendant_ids,
    would_create_cycle,
)
from medialib.domain.exceptions import HierarchyCycleException


def _records() -> list[dict]:
    return [
        {"id": "1", "name": "root", "parent": None},
        {"id": "2", "name": "a", "parent": "1"},
        {"id": "3", "name": "b", "parent": "1"},
        {"id": "4", "name": "a1", "parent": "2"},
        {"id": "5", "name": "other root", "parent": None},
    ]


def test_build_forest_nests_children_in_input_order() -> None:
    forest = build_forest(_records())
    assert [n["id"] for n in forest] == ["1", "5"]
    root = forest[0]
    assert [c["id"] for c in root["children"]] == ["2", "3"]
    assert [c["id"] for c in root["children"][0]["children"]] == ["4"]
    assert forest[1]["children"] == []


def test_build_forest_does_not_mutate_input() -> None:
    records = _records()
    snapshot = copy.deepcopy(records)
    build_forest(records)
    assert records == snapshot
    assert all("children" not in r for r in records)


def test_build_forest_omits_orphans() -> None:
    records = _records() + [{"id": "9", "name": "orphan", "parent": "missing"}]
    forest = build_forest(records)
    ids = []
    stack = list(forest)
    while stack:
        node = stack.pop()
        ids.append(node["id"])
        stack.extend(node["children"])
    assert "9" not in ids
    assert len(ids) == 5


def test_build_forest_supports_other_parent_fields() -> None:
    records = [
        {"id": "c1", "parent_id": None},
        {"id": "c2", "parent_id": "c1"},
    ]
    forest = build_forest(records, parent_field="parent_id")
    assert forest[0]["children"][0]["id"] == "c2"


def test_build_forest_raises_on_cycle() -> None:
    records = _records() + [
        {"id": "x", "parent": "y"},
        {"id": "y", "parent": "x"},
    ]
    with pytest.raises(HierarchyCycleException) as exc_info:
        build_forest(records)
    assert exc_info.value.error_code == "hierarchy_cycle"


def test_descendant_ids_depth_first_without_root() -> None:
    assert descendant_ids(_records(), "1") == ["2", "4", "3"]
    assert descendant_ids(_records(), "4") == []
    assert descendant_ids(_records(), "unknown") == []


def test_descendant_ids_terminates_on_cycle() -> None:
    records = [
        {"id": "a", "parent": "c"},
        {"id": "b", "parent": "a"},
        {"id": "c", "parent": "b"},
    ]
    with pytest.raises(HierarchyCycleException):
        descendant_ids(records, "a")


def test_descendant_ids_never_repeats_ids() -> None:
    records = [{"id": str(i), "parent": str(i - 1) if i else None} for i in range(200)]
    result = descendant_ids(records, "0")
    assert len(result) == len(set(result)) == 199


def test_ancestor_ids_nearest_first() -> None:
    assert ancestor_ids(_records(), "4") == ["2", "1"]
    assert ancestor_ids(_records(), "1") == []


def test_would_create_cycle() -> None:
    records = _records()
    assert would_create_cycle(records, "1", "4") is True
    assert would_create_cycle(records, "2", "2") is True
    assert would_create_cycle(records, "4", "3") is False
    assert would_create_cycle(records, "4", None) is False
