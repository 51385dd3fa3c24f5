"""Integrity coordinator: cross-table existence checks, guards and cascades.

Entity use cases call these helpers so every rule lives in one place:
"must resolve" checks run before any write (atomic), cascades rewrite
dependent rows through the store, and tag usage counters are adjusted
incrementally whenever a media item's tag set changes.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from medialib.application.services.hierarchy import descendant_ids
from medialib.core.constants import COLOR_PALETTE
from medialib.domain.entities import (
    CollectionEntity,
    FolderEntity,
    MediaItemEntity,
    TagCategoryEntity,
    TagEntity,
    UserEntity,
)
from medialib.domain.enums import RecentKind
from medialib.domain.exceptions import (
    ConflictException,
    InvalidReferencesException,
    ResourceNotFoundException,
    ValidationException,
)
from medialib.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from medialib.application.interfaces.repositories import IRecordStore

logger = logging.getLogger(__name__)


def dedupe(values: Iterable[str]) -> list[str]:
    """Return values without duplicates, keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def require_ids(ids: Sequence[str] | None, message: str) -> list[str]:
    """Return ``ids`` as a list, or raise invalid_request when empty or not a list."""
    if not ids or isinstance(ids, str):
        raise ValidationException(message)
    return list(ids)


class IntegrityCoordinator:
    """Shared integrity rules over one record store."""

    def __init__(self, store: IRecordStore, path_separator: str = "/") -> None:
        self.store = store
        self.path_separator = path_separator

    # ---- lookups ----

    def require_folder(self, folder_id: str, error_code: str = "not_found") -> FolderEntity:
        folder = self.store.folders.get(folder_id)
        if folder is None:
            label = "Parent folder" if error_code == "parent_not_found" else "Folder"
            raise ResourceNotFoundException(label, folder_id, error_code)
        return folder

    def require_media(self, media_id: str) -> MediaItemEntity:
        item = self.store.media.get(media_id)
        if item is None:
            raise ResourceNotFoundException("Media item", media_id)
        return item

    def require_collection(
        self, collection_id: str, error_code: str = "not_found"
    ) -> CollectionEntity:
        collection = self.store.collections.get(collection_id)
        if collection is None:
            label = "Parent collection" if error_code == "parent_not_found" else "Collection"
            raise ResourceNotFoundException(label, collection_id, error_code)
        return collection

    def require_tag(self, tag_id: str) -> TagEntity:
        tag = self.store.tags.get(tag_id)
        if tag is None:
            raise ResourceNotFoundException("Tag", tag_id)
        return tag

    def require_category(self, category_id: str) -> TagCategoryEntity:
        category = self.store.tag_categories.get(category_id)
        if category is None:
            raise ResourceNotFoundException("Tag category", category_id)
        return category

    def require_user(self, user_id: str) -> UserEntity:
        user = self.store.users.get(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        return user

    # ---- reference validation (all-or-nothing) ----

    def ensure_media_ids(self, media_ids: Iterable[str]) -> None:
        invalid = self.store.media.missing(media_ids)
        if invalid:
            raise InvalidReferencesException("invalid_media_ids", "media item IDs", invalid)

    def ensure_user_ids(self, user_ids: Iterable[str]) -> None:
        invalid = self.store.users.missing(user_ids)
        if invalid:
            raise InvalidReferencesException("invalid_user_ids", "user IDs", invalid)

    def resolve_tag_names(self, names: Iterable[str]) -> list[str]:
        """Map names to existing tags' canonical names (case-insensitive), deduplicated.

        Raises:
            InvalidReferencesException: 'invalid_tags' listing names with no tag.
        """
        by_key = {tag.name.casefold(): tag.name for tag in self.store.tags.all()}
        resolved: list[str] = []
        invalid: list[str] = []
        for name in names:
            canonical = by_key.get(str(name).casefold())
            if canonical is None:
                invalid.append(name)
            else:
                resolved.append(canonical)
        if invalid:
            raise InvalidReferencesException("invalid_tags", "tags", dedupe(invalid))
        return dedupe(resolved)

    def ensure_unique_tag_name(self, name: str, exclude_id: str | None = None) -> None:
        for tag in self.store.tags.all():
            if tag.id != exclude_id and tag.matches_name(name):
                raise ConflictException(
                    "Tag with this name already exists",
                    "tag_exists",
                    {"name": name, "existing_id": tag.id},
                )

    def ensure_unique_category_name(self, name: str, exclude_id: str | None = None) -> None:
        for category in self.store.tag_categories.all():
            if category.id != exclude_id and category.matches_name(name):
                raise ConflictException(
                    "Tag category with this name already exists",
                    "category_exists",
                    {"name": name, "existing_id": category.id},
                )

    def collections_using(self, media_id: str) -> list[CollectionEntity]:
        return [c for c in self.store.collections.all() if c.contains(media_id)]

    def ensure_not_in_use(self, media_id: str) -> None:
        """Raise item_in_use (409) when any collection lists the media item."""
        using = self.collections_using(media_id)
        if using:
            raise ConflictException(
                f"Cannot delete item that is used in {len(using)} collection(s)",
                "item_in_use",
                {"media_id": media_id, "collection_ids": [c.id for c in using]},
            )

    # ---- derived values ----

    @staticmethod
    def pick_color(color: str | None) -> str:
        """Return ``color`` or a palette color when unspecified."""
        return color or random.choice(COLOR_PALETTE)

    def media_path(self, folder_id: str, name: str) -> str:
        folder = self.store.folders.get(folder_id)
        prefix = folder.path if folder else None
        return FolderEntity.derive_path(name, prefix, self.path_separator)

    # ---- cascades ----

    def adjust_tag_counts(self, before: Iterable[str], after: Iterable[str]) -> None:
        """Apply +1 per newly present tag name and -1 per removed one (floored at 0)."""
        old, new = set(before), set(after)
        added, removed = new - old, old - new
        if not added and not removed:
            return
        for tag in self.store.tags.all():
            if tag.name in added:
                tag.adjust_count(1)
            elif tag.name in removed:
                tag.adjust_count(-1)
            else:
                continue
            self.store.tags.replace(tag)

    def rename_media_tag(self, old_name: str, new_name: str) -> int:
        """Rewrite ``old_name`` to ``new_name`` on every media item; returns rows touched."""
        touched = 0
        for item in self.store.media.all():
            if not item.has_tag(old_name):
                continue
            item.tags = dedupe(new_name if t == old_name else t for t in item.tags)
            self.store.media.replace(item)
            touched += 1
        return touched

    def strip_media_tag(self, name: str) -> int:
        """Remove ``name`` from every media item's tags; returns rows touched."""
        touched = 0
        for item in self.store.media.all():
            if not item.has_tag(name):
                continue
            item.tags = [t for t in item.tags if t != name]
            self.store.media.replace(item)
            touched += 1
        return touched

    def refresh_folder_paths(self, folder_id: str) -> None:
        """Recompute ``path`` for the folder, its descendants and the media inside them.

        The folder row must already carry its new name/parent.
        """
        folders = self.store.folders.all()
        by_id = {f.id: f for f in folders}
        order = [folder_id] + descendant_ids(folders, folder_id)
        for fid in order:
            folder = by_id[fid]
            parent = by_id.get(folder.parent) if folder.parent else None
            folder.path = FolderEntity.derive_path(
                folder.name, parent.path if parent else None, self.path_separator
            )
            self.store.folders.replace(folder)
        affected = set(order)
        for item in self.store.media.all():
            if item.folder in affected:
                item.path = FolderEntity.derive_path(
                    item.name, by_id[item.folder].path, self.path_separator
                )
                self.store.media.replace(item)

    def remove_media_rows(self, media_ids: Iterable[str]) -> list[MediaItemEntity]:
        """Delete media rows, release their tag counts and drop them from recent files."""
        ids = list(media_ids)
        removed = self.store.media.remove_many(ids)
        for item in removed:
            self.adjust_tag_counts(item.tags, ())
        self.forget_recent(RecentKind.FILES, ids)
        return removed

    def forget_recent(self, kind: RecentKind, ids: Iterable[str]) -> None:
        """Drop deleted ids from every user's recent list of ``kind``."""
        doomed = set(ids)
        if not doomed:
            return
        for user in self.store.users.all():
            current = user.recent(kind)
            kept = [i for i in current if i not in doomed]
            if len(kept) == len(current):
                continue
            if kind == RecentKind.FOLDERS:
                user.recent_folders = kept
            else:
                user.recent_files = kept
            self.store.users.replace(user)

    def touch(self, entity: MediaItemEntity | CollectionEntity) -> None:
        """Set ``modified`` to now."""
        entity.modified = utc_now()
