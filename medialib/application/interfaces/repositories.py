"""Record store interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Iterable, Protocol, TypeVar

if TYPE_CHECKING:
    from medialib.domain.entities import (
        CollectionEntity,
        FolderEntity,
        MediaItemEntity,
        TagCategoryEntity,
        TagEntity,
        UserEntity,
    )

T = TypeVar("T")


class IRecordTable(Protocol[T]):
    """Protocol for one ordered in-memory table of records keyed by ``id``.

    Reads return copies; only insert/replace/remove change stored rows.
    """

    name: str

    def __len__(self) -> int:
        """Return number of rows."""

    def all(self) -> list[T]:
        """Return copies of all rows in table order."""

    def get(self, record_id: str) -> T | None:
        """Return a copy of the row with ``record_id``, or None."""

    def exists(self, record_id: str) -> bool:
        """Return whether a row with ``record_id`` exists."""

    def missing(self, record_ids: Iterable[str]) -> list[str]:
        """Return the ids (in input order, deduplicated) that do not resolve."""

    def insert(self, record: T) -> T:
        """Append a row at the end; returns a copy of the stored row."""

    def replace(self, record: T) -> T:
        """Replace the row with the same id in place; returns a copy."""

    def remove(self, record_id: str) -> T:
        """Remove and return the row with ``record_id``."""

    def remove_many(self, record_ids: Iterable[str]) -> list[T]:
        """Remove every row whose id is in ``record_ids``; returns removed rows."""


class IRecordStore(Protocol):
    """Protocol for the process-wide record store (one table per entity type)."""

    folders: IRecordTable[FolderEntity]
    media: IRecordTable[MediaItemEntity]
    collections: IRecordTable[CollectionEntity]
    tags: IRecordTable[TagEntity]
    tag_categories: IRecordTable[TagCategoryEntity]
    users: IRecordTable[UserEntity]
    lock: threading.RLock

    def reset(self) -> None:
        """Discard all changes and reload every table from the seed snapshot."""
