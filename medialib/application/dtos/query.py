"""DTOs for list/query use cases (declarative options, camelCase mapped by the API)."""

from dataclasses import dataclass, field
from typing import Any

from medialib.domain.enums import SortOrder


@dataclass(frozen=True)
class MediaQuery:
    """Options for listing media. Unset values do not filter."""

    folder: str | None = None
    recursive: bool = True
    collection: str | None = None
    search: str | None = None
    types: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    status: list[str] = field(default_factory=list)
    used: Any = None
    starred: Any = None
    favorited: Any = None
    date_from: str | None = None
    date_to: str | None = None
    sort_by: str = "name"
    sort_order: SortOrder = SortOrder.ASC
    page: int = 1
    page_size: int = 20


@dataclass(frozen=True)
class CollectionQuery:
    """Options for listing collections."""

    created_by: str | None = None
    is_shared: Any = None
    parent_id: str | None = None
    recursive: bool = False
    search: str | None = None
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.ASC
    page: int = 1
    page_size: int = 20
