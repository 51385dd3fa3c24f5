"""Generic filter / sort / paginate over any record table.

Records may be dataclass instances or mappings; fields are read by name.
Every function here is pure: inputs are never mutated and results are new
lists holding the same record objects.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from medialib.domain.exceptions import ValidationException
from medialib.shared.utils.datetime import parse_datetime

T = TypeVar("T")

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})

# "2.4 MB", "950 KB", "120", "1.5GB"
_SIZE_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*([kmgt]?i?b)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {"": 1, "b": 1, "kb": 1024, "mb": 1024**2, "gb": 1024**3, "tb": 1024**4}


class MatchKind(str, Enum):
    """How a criterion compares its value against a record field."""

    SEARCH = "search"
    ANY_OF = "any_of"
    EQUALS = "equals"
    DATE_RANGE = "date_range"


class SortKind(str, Enum):
    """How a sort field is normalized before comparison."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    AUTO = "auto"


@dataclass(frozen=True)
class Criterion:
    """One declarative filter: a field (or fields for SEARCH), a value and a match kind.

    Criteria with an unset value (None, empty string, empty list, or an open
    date range) are inactive and match every record.
    """

    kind: MatchKind
    fields: tuple[str, ...]
    value: Any

    @classmethod
    def search(cls, term: str | None, *fields: str) -> Criterion:
        """Case-insensitive substring match across ``fields`` (list fields match any element)."""
        return cls(MatchKind.SEARCH, tuple(fields), term)

    @classmethod
    def any_of(cls, field: str, values: Iterable[Any] | None) -> Criterion:
        """Set intersection for list fields; membership for scalar fields."""
        return cls(MatchKind.ANY_OF, (field,), list(values) if values is not None else None)

    @classmethod
    def equals(cls, field: str, value: Any) -> Criterion:
        """Exact equality; boolean fields accept 'true'/'false' strings."""
        return cls(MatchKind.EQUALS, (field,), value)

    @classmethod
    def date_range(cls, field: str, date_from: Any = None, date_to: Any = None) -> Criterion:
        """Inclusive range on a date field; either bound may be None."""
        return cls(MatchKind.DATE_RANGE, (field,), (date_from, date_to))

    @property
    def is_active(self) -> bool:
        if self.kind == MatchKind.DATE_RANGE:
            return any(bound not in (None, "") for bound in self.value)
        if self.value is None:
            return False
        if isinstance(self.value, (str, list, tuple, set, frozenset)) and len(self.value) == 0:
            return False
        return True


@dataclass(frozen=True)
class SortSpec:
    """Sort by ``field`` normalized per ``kind``; stable, missing values last."""

    field: str
    kind: SortKind = SortKind.AUTO
    descending: bool = False


@dataclass(frozen=True)
class PageMeta:
    """Pagination metadata for one page of results."""

    page: int
    page_size: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of items plus metadata."""

    items: list[T]
    meta: PageMeta


def field_value(record: Any, name: str) -> Any:
    """Return field ``name`` from a mapping or attribute-bearing record (None if absent)."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def coerce_bool(value: Any, field: str | None = None) -> bool:
    """Normalize boolean filter input: ``'true'`` and ``True`` are equivalent.

    Raises:
        ValidationException: If the value is not a recognizable boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValidationException(f"Invalid boolean value: {value!r}", field=field)


def parse_numeric(value: Any) -> float | None:
    """Parse numbers and size strings ('2.4 MB') to a float; None when not numeric.

    Size units are binary multiples of bytes, so '1 MB' > '900 KB'.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _SIZE_RE.match(value)
        if not match:
            return None
        unit = (match.group(2) or "").lower().replace("i", "")
        return float(match.group(1)) * _SIZE_UNITS.get(unit, 1)
    return None


def _parse_bound(value: Any, field: str) -> datetime | None:
    try:
        return parse_datetime(value)
    except (TypeError, ValueError) as e:
        raise ValidationException(f"Invalid date: {value!r}", field=field) from e


def _contains_term(value: Any, term: str) -> bool:
    if isinstance(value, str):
        return term in value.casefold()
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(isinstance(v, str) and term in v.casefold() for v in value)
    return False


def matches(record: Any, criterion: Criterion) -> bool:
    """Return whether ``record`` satisfies ``criterion`` (inactive criteria always match)."""
    if not criterion.is_active:
        return True
    kind = criterion.kind
    if kind == MatchKind.SEARCH:
        term = str(criterion.value).casefold()
        return any(_contains_term(field_value(record, f), term) for f in criterion.fields)

    name = criterion.fields[0]
    actual = field_value(record, name)
    if kind == MatchKind.ANY_OF:
        wanted = set(criterion.value)
        if isinstance(actual, (list, tuple, set, frozenset)):
            return not wanted.isdisjoint(actual)
        return actual in wanted
    if kind == MatchKind.EQUALS:
        expected = criterion.value
        if isinstance(actual, bool) or isinstance(expected, bool):
            if actual is None:
                return False
            return coerce_bool(actual, name) == coerce_bool(expected, name)
        return actual == expected
    if kind == MatchKind.DATE_RANGE:
        date_from = _parse_bound(criterion.value[0], "dateFrom")
        date_to = _parse_bound(criterion.value[1], "dateTo")
        moment = _parse_bound(actual, name)
        if moment is None:
            return False
        if date_from is not None and moment < date_from:
            return False
        if date_to is not None and moment > date_to:
            return False
        return True
    raise ValueError(f"Unknown match kind: {kind}")


def filter_records(records: Iterable[T], criteria: Iterable[Criterion]) -> list[T]:
    """Return records satisfying every active criterion, in input order."""
    active = [c for c in criteria if c.is_active]
    # Bad date bounds are rejected even when the table is empty.
    for c in active:
        if c.kind == MatchKind.DATE_RANGE:
            _parse_bound(c.value[0], "dateFrom")
            _parse_bound(c.value[1], "dateTo")
    return [r for r in records if all(matches(r, c) for c in active)]


def _sort_key(value: Any, kind: SortKind) -> Any:
    """Return the normalized comparison key, or None when the value is missing."""
    if value is None:
        return None
    if kind == SortKind.AUTO:
        if isinstance(value, str):
            kind = SortKind.TEXT
        elif isinstance(value, datetime):
            kind = SortKind.DATE
        elif isinstance(value, (int, float)):
            kind = SortKind.NUMBER
        else:
            return value
    if kind == SortKind.TEXT:
        return str(value).casefold()
    if kind == SortKind.NUMBER:
        return parse_numeric(value)
    if kind == SortKind.DATE:
        try:
            return parse_datetime(value)
        except (TypeError, ValueError):
            return None
    return value


def sort_records(records: Iterable[T], sort: SortSpec) -> list[T]:
    """Stable sort by ``sort``; records with a missing key keep input order at the end.

    Descending order reverses the comparison only: equal keys keep their
    input order in both directions.
    """
    keyed: list[tuple[Any, T]] = []
    missing: list[T] = []
    for record in records:
        key = _sort_key(field_value(record, sort.field), sort.kind)
        if key is None:
            missing.append(record)
        else:
            keyed.append((key, record))
    keyed.sort(key=lambda pair: pair[0], reverse=sort.descending)
    return [record for _, record in keyed] + missing


def paginate(items: Sequence[T], page: int = 1, page_size: int = 20) -> Page[T]:
    """Slice ``items`` to 1-based ``page`` of ``page_size``.

    Pages past the end return no items with correct metadata.

    Raises:
        ValidationException: If page or page_size is below 1.
    """
    if page < 1:
        raise ValidationException("page must be >= 1", field="page")
    if page_size < 1:
        raise ValidationException("pageSize must be >= 1", field="pageSize")
    total = len(items)
    start = (page - 1) * page_size
    end = start + page_size
    return Page(
        items=list(items[start:end]),
        meta=PageMeta(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=math.ceil(total / page_size),
            has_next_page=end < total,
            has_previous_page=page > 1,
        ),
    )


def run_query(
    records: Iterable[T],
    criteria: Iterable[Criterion] = (),
    sort: SortSpec | None = None,
    page: int = 1,
    page_size: int = 20,
) -> Page[T]:
    """Filter, then sort (when ``sort`` is given), then paginate."""
    result = filter_records(records, criteria)
    if sort is not None:
        result = sort_records(result, sort)
    return paginate(result, page, page_size)
