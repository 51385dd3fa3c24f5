"""Application services: query engine, hierarchy builder, integrity rules."""

from medialib.application.services.hierarchy import (
    ancestor_ids,
    build_forest,
    descendant_ids,
    would_create_cycle,
)
from medialib.application.services.integrity import IntegrityCoordinator
from medialib.application.services.query_engine import (
    Criterion,
    Page,
    PageMeta,
    SortKind,
    SortSpec,
    filter_records,
    paginate,
    run_query,
    sort_records,
)

__all__ = [
    "Criterion",
    "IntegrityCoordinator",
    "Page",
    "PageMeta",
    "SortKind",
    "SortSpec",
    "ancestor_ids",
    "build_forest",
    "descendant_ids",
    "filter_records",
    "paginate",
    "run_query",
    "sort_records",
    "would_create_cycle",
]
