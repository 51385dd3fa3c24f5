"""Result DTOs returned by use cases (read-models, no transport dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from medialib.application.services.query_engine import Page
from medialib.domain.entities import (
    CollectionEntity,
    FolderEntity,
    MediaItemEntity,
    TagEntity,
    UserEntity,
)


@dataclass(frozen=True)
class BatchFailure:
    """Per-item failure inside a batch operation."""

    id: str
    reason: str
    message: str | None = None


@dataclass(frozen=True)
class BatchUpdateResult:
    """Outcome of a per-item batch update (media update, move)."""

    updated: list[MediaItemEntity]
    failed: list[BatchFailure]

    @property
    def total_updated(self) -> int:
        return len(self.updated)

    @property
    def total_failed(self) -> int:
        return len(self.failed)


@dataclass(frozen=True)
class BatchDeleteResult:
    """Outcome of a per-item batch delete."""

    deleted: list[MediaItemEntity]
    failed: list[BatchFailure]

    @property
    def total_deleted(self) -> int:
        return len(self.deleted)

    @property
    def total_failed(self) -> int:
        return len(self.failed)


@dataclass(frozen=True)
class BatchCopyResult:
    """Outcome of copying media items into another folder."""

    copied: list[MediaItemEntity]
    failed: list[BatchFailure]


@dataclass(frozen=True)
class TagBatchResult:
    """Outcome of adding/removing tags on many media items."""

    updated_ids: list[str]
    failed: list[BatchFailure]
    added: list[str]
    removed: list[str]

    @property
    def updated_count(self) -> int:
        return len(self.updated_ids)


@dataclass(frozen=True)
class FolderDeleteResult:
    """Rows removed by a folder delete (the folder, descendants, contained media)."""

    folder_ids: list[str]
    media_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FolderContents:
    folder: FolderEntity
    contents: Page[MediaItemEntity]


@dataclass(frozen=True)
class CollectionContents:
    collection: CollectionEntity
    contents: Page[MediaItemEntity]


@dataclass(frozen=True)
class ChildCollections:
    parent: CollectionEntity
    children: Page[CollectionEntity]


@dataclass(frozen=True)
class CollectionDeleteResult:
    collection_ids: list[str]


@dataclass(frozen=True)
class TagMedia:
    tag: TagEntity
    media: Page[MediaItemEntity]


@dataclass(frozen=True)
class MediaStats:
    """Aggregate numbers over the media table."""

    total_count: int
    type_count: dict[str, int]
    used_count: int
    unused_count: int
    total_size: str
    latest_upload: MediaItemEntity | None


@dataclass(frozen=True)
class LoginResult:
    """Successful login: sanitized user, bearer token and its lifetime in seconds."""

    user: UserEntity
    token: str
    expires_in: int
    token_type: str = "bearer"


@dataclass(frozen=True)
class RecentItems:
    """Updated recent list after visiting a folder or file."""

    kind: str
    items: list[str]

    def as_dict(self) -> dict[str, Any]:
        key = "recentFolders" if self.kind == "folders" else "recentFiles"
        return {key: list(self.items)}
