"""In-memory record store: one ordered table per entity type.

The store is the only writer of record. Rows are deep-copied on the way in
and on the way out, so callers may mutate whatever they read without
corrupting the stored table; changes land only through insert/replace/remove.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import TYPE_CHECKING, Generic, Iterable, Protocol, TypeVar

if TYPE_CHECKING:
    from medialib.infrastructure.persistence.seed import SeedSnapshot

logger = logging.getLogger(__name__)


class _HasId(Protocol):
    id: str


R = TypeVar("R", bound=_HasId)


class RecordTable(Generic[R]):
    """Ordered table of records keyed by ``id`` (implements IRecordTable)."""

    def __init__(self, name: str, records: Iterable[R] = ()) -> None:
        self.name = name
        self._rows: list[R] = []
        for record in records:
            self.insert(record)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, record_id: object) -> bool:
        return isinstance(record_id, str) and self._position(record_id) is not None

    def _position(self, record_id: str) -> int | None:
        for i, row in enumerate(self._rows):
            if row.id == record_id:
                return i
        return None

    def all(self) -> list[R]:
        """Return copies of all rows in table order."""
        return copy.deepcopy(self._rows)

    def ids(self) -> list[str]:
        """Return row ids in table order."""
        return [row.id for row in self._rows]

    def get(self, record_id: str) -> R | None:
        """Return a copy of the row with ``record_id``, or None."""
        pos = self._position(record_id)
        if pos is None:
            return None
        return copy.deepcopy(self._rows[pos])

    def exists(self, record_id: str) -> bool:
        return self._position(record_id) is not None

    def missing(self, record_ids: Iterable[str]) -> list[str]:
        """Return the ids (in input order, deduplicated) that do not resolve."""
        known = set(self.ids())
        seen: set[str] = set()
        result = []
        for record_id in record_ids:
            if record_id not in known and record_id not in seen:
                result.append(record_id)
            seen.add(record_id)
        return result

    def insert(self, record: R) -> R:
        """Append a row at the end.

        Raises:
            ValueError: If a row with the same id already exists.
        """
        if self._position(record.id) is not None:
            raise ValueError(f"Duplicate id '{record.id}' in table {self.name}")
        self._rows.append(copy.deepcopy(record))
        return copy.deepcopy(record)

    def replace(self, record: R) -> R:
        """Replace the row with the same id in place (keeps its position).

        Raises:
            KeyError: If no row has that id.
        """
        pos = self._position(record.id)
        if pos is None:
            raise KeyError(f"No row '{record.id}' in table {self.name}")
        self._rows[pos] = copy.deepcopy(record)
        return copy.deepcopy(record)

    def remove(self, record_id: str) -> R:
        """Remove and return the row with ``record_id``.

        Raises:
            KeyError: If no row has that id.
        """
        pos = self._position(record_id)
        if pos is None:
            raise KeyError(f"No row '{record_id}' in table {self.name}")
        return self._rows.pop(pos)

    def remove_many(self, record_ids: Iterable[str]) -> list[R]:
        """Remove every row whose id is in ``record_ids``; unknown ids are ignored."""
        doomed = set(record_ids)
        removed = [row for row in self._rows if row.id in doomed]
        self._rows = [row for row in self._rows if row.id not in doomed]
        return removed


class RecordStore:
    """Explicitly owned store holding every entity table (implements IRecordStore).

    Lifecycle: ``RecordStore.from_seed(seed)`` → operations → optional
    ``reset()`` back to the seed. Create a fresh store per test for isolation.

    ``lock`` is held by mutating services across their whole check-and-write
    span; with a single event loop it is uncontended.
    """

    def __init__(self, seed: SeedSnapshot) -> None:
        self._seed = seed
        self.lock = threading.RLock()
        self._load(seed)

    @classmethod
    def from_seed(cls, seed: SeedSnapshot | None = None, path_separator: str = "/") -> RecordStore:
        """Build a store from ``seed``, or the default snapshot with paths joined by ``path_separator``."""
        if seed is None:
            from medialib.infrastructure.persistence.seed import default_seed

            seed = default_seed(path_separator)
        return cls(seed)

    def _load(self, seed: SeedSnapshot) -> None:
        self.folders = RecordTable("folders", seed.folders)
        self.media = RecordTable("media", seed.media)
        self.collections = RecordTable("collections", seed.collections)
        self.tags = RecordTable("tags", seed.tags)
        self.tag_categories = RecordTable("tag_categories", seed.tag_categories)
        self.users = RecordTable("users", seed.users)

    def reset(self) -> None:
        """Discard all changes and reload every table from the seed snapshot."""
        with self.lock:
            self._load(self._seed)
        logger.info("Record store reset to seed snapshot")

    def counts(self) -> dict[str, int]:
        """Return row counts per table (used by the health endpoint)."""
        return {
            "folders": len(self.folders),
            "media": len(self.media),
            "collections": len(self.collections),
            "tags": len(self.tags),
            "tagCategories": len(self.tag_categories),
            "users": len(self.users),
        }
