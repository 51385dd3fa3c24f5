"""Media use cases: query, CRUD, batch update/delete, move/copy, tag batches, stats."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from medialib.application.dtos.query import MediaQuery
from medialib.application.dtos.results import (
    BatchCopyResult,
    BatchDeleteResult,
    BatchFailure,
    BatchUpdateResult,
    MediaStats,
    TagBatchResult,
)
from medialib.application.services.hierarchy import descendant_ids
from medialib.application.services.integrity import (
    IntegrityCoordinator,
    dedupe,
    require_ids,
)
from medialib.application.services.query_engine import (
    Criterion,
    Page,
    SortKind,
    SortSpec,
    coerce_bool,
    parse_numeric,
    run_query,
)
from medialib.core.constants import DEFAULT_MEDIA_STATUS
from medialib.domain.entities import MediaItemEntity
from medialib.domain.enums import SortOrder
from medialib.domain.exceptions import (
    MediaLibraryException,
    ValidationException,
)
from medialib.shared.utils.datetime import utc_now
from medialib.shared.utils.generators import generate_cuid

if TYPE_CHECKING:
    from medialib.application.interfaces.repositories import IRecordStore

logger = logging.getLogger(__name__)

# sortBy value -> (field, kind); unknown values fall back to name.
MEDIA_SORT_FIELDS: dict[str, tuple[str, SortKind]] = {
    "name": ("name", SortKind.TEXT),
    "size": ("size", SortKind.NUMBER),
    "date": ("modified", SortKind.DATE),
    "modified": ("modified", SortKind.DATE),
    "created": ("created", SortKind.DATE),
    "type": ("type", SortKind.TEXT),
    "status": ("status", SortKind.TEXT),
}

_SEARCH_FIELDS = ("name", "path", "tags", "ai_tags")
_PROTECTED_FIELDS = frozenset({"id", "created", "modified", "path"})
_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "type",
        "folder",
        "size",
        "status",
        "tags",
        "ai_tags",
        "used",
        "starred",
        "favorited",
        "used_in",
        "dimensions",
        "url",
        "thumbnail",
        "description",
    }
)
_BOOLEAN_FIELDS = ("used", "starred", "favorited")


def _optional_bool(value: Any, field: str) -> bool | None:
    if value is None or value == "":
        return None
    return coerce_bool(value, field)


class MediaService:
    """Media operations; every tag-set change keeps Tag.count in step."""

    def __init__(self, store: IRecordStore, path_separator: str = "/") -> None:
        self.store = store
        self.integrity = IntegrityCoordinator(store, path_separator)

    # ---- reads ----

    def query_media(self, query: MediaQuery) -> Page[MediaItemEntity]:
        """Filter, sort and paginate media.

        ``folder`` scopes to the folder and, when ``recursive``, every
        descendant folder. ``folder='all'`` or empty means no folder filter.
        """
        records = self.store.media.all()
        criteria: list[Criterion] = []

        if query.folder and query.folder != "all":
            scope = [query.folder]
            if query.recursive:
                scope += descendant_ids(self.store.folders.all(), query.folder, parent_field="parent")
            criteria.append(Criterion.any_of("folder", scope))

        if query.collection:
            collection = self.store.collections.get(query.collection)
            members = set(collection.items) if collection else set()
            records = [r for r in records if r.id in members]

        criteria += [
            Criterion.search(query.search, *_SEARCH_FIELDS),
            Criterion.any_of("type", query.types),
            Criterion.any_of("tags", query.tags),
            Criterion.any_of("status", query.status),
            Criterion.equals("used", _optional_bool(query.used, "used")),
            Criterion.equals("starred", _optional_bool(query.starred, "starred")),
            Criterion.equals("favorited", _optional_bool(query.favorited, "favorited")),
            Criterion.date_range("modified", query.date_from, query.date_to),
        ]

        field, kind = MEDIA_SORT_FIELDS.get(query.sort_by, MEDIA_SORT_FIELDS["name"])
        sort = SortSpec(field, kind, descending=SortOrder(query.sort_order) == SortOrder.DESC)
        return run_query(records, criteria, sort=sort, page=query.page, page_size=query.page_size)

    def get_media(self, media_id: str) -> MediaItemEntity:
        return self.integrity.require_media(media_id)

    def get_media_stats(self) -> MediaStats:
        """Return counts by type and usage, total size in MB, and the newest upload."""
        items = self.store.media.all()
        type_count = dict(Counter(item.type for item in items))
        used_count = sum(1 for item in items if item.used)
        total_bytes = sum(parse_numeric(item.size) or 0.0 for item in items)
        latest = max(items, key=lambda item: item.created, default=None)
        return MediaStats(
            total_count=len(items),
            type_count=type_count,
            used_count=used_count,
            unused_count=len(items) - used_count,
            total_size=f"{total_bytes / 1024**2:.1f} MB",
            latest_upload=latest,
        )

    # ---- writes ----

    def create_media(self, data: Mapping[str, Any]) -> MediaItemEntity:
        """Create a media item.

        Requires name, type and folder; the folder must exist and every tag must
        exist. Defaults: status 'draft', flags false, empty tags.

        Raises:
            ValidationException: Missing fields or unknown tags ('invalid_tags').
            ResourceNotFoundException: Folder does not exist.
        """
        missing = [f for f in ("name", "type", "folder") if not data.get(f)]
        if missing:
            raise ValidationException(
                f"Missing required fields: {', '.join(missing)}",
                details={"fields": missing},
            )
        with self.store.lock:
            self.integrity.require_folder(data["folder"])
            tags = self.integrity.resolve_tag_names(data.get("tags") or [])
            now = utc_now()
            values = {k: v for k, v in data.items() if k in _UPDATABLE_FIELDS}
            for flag in _BOOLEAN_FIELDS:
                values[flag] = bool(_optional_bool(values.get(flag), flag))
            values["tags"] = tags
            values["status"] = values.get("status") or DEFAULT_MEDIA_STATUS
            item = MediaItemEntity(
                id=generate_cuid(),
                created=now,
                modified=now,
                path=self.integrity.media_path(data["folder"], data["name"]),
                **values,
            )
            created = self.store.media.insert(item)
            self.integrity.adjust_tag_counts((), created.tags)
        logger.info("Created media item %s in folder %s", created.id, created.folder)
        return created

    def _apply_update(self, item: MediaItemEntity, changes: Mapping[str, Any]) -> MediaItemEntity:
        """Validate and apply ``changes`` to ``item``, write it, and adjust tag counts.

        Caller holds the store lock. Protected fields are ignored.
        """
        updates = {
            k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS and k not in _PROTECTED_FIELDS
        }
        if "folder" in updates:
            self.integrity.require_folder(updates["folder"])
        if "tags" in updates:
            updates["tags"] = self.integrity.resolve_tag_names(updates["tags"] or [])
        for flag in _BOOLEAN_FIELDS:
            if flag in updates:
                updates[flag] = coerce_bool(updates[flag], flag)
        before_tags = list(item.tags)
        for key, value in updates.items():
            setattr(item, key, value)
        item.validate()
        if "folder" in updates or "name" in updates:
            item.path = self.integrity.media_path(item.folder, item.name)
        self.integrity.touch(item)
        stored = self.store.media.replace(item)
        self.integrity.adjust_tag_counts(before_tags, stored.tags)
        return stored

    def update_media(self, media_id: str, changes: Mapping[str, Any]) -> MediaItemEntity:
        """Update one media item (id and created are never changed; modified is bumped)."""
        with self.store.lock:
            item = self.integrity.require_media(media_id)
            return self._apply_update(item, changes)

    def delete_media(self, media_id: str) -> MediaItemEntity:
        """Delete a media item that no collection references.

        Raises:
            ConflictException: item_in_use when a collection lists the item.
        """
        with self.store.lock:
            self.integrity.require_media(media_id)
            self.integrity.ensure_not_in_use(media_id)
            (removed,) = self.integrity.remove_media_rows([media_id])
        logger.info("Deleted media item %s", media_id)
        return removed

    def batch_update_media(
        self, media_ids: Sequence[str] | None, changes: Mapping[str, Any]
    ) -> BatchUpdateResult:
        """Apply the same changes to each item; unknown or invalid items are reported, not fatal."""
        ids = require_ids(media_ids, "No media items specified")
        updated: list[MediaItemEntity] = []
        failed: list[BatchFailure] = []
        with self.store.lock:
            for media_id in ids:
                item = self.store.media.get(media_id)
                if item is None:
                    failed.append(BatchFailure(id=media_id, reason="not_found"))
                    continue
                try:
                    updated.append(self._apply_update(item, changes))
                except MediaLibraryException as e:
                    failed.append(BatchFailure(id=media_id, reason=e.error_code, message=e.message))
        return BatchUpdateResult(updated=updated, failed=failed)

    def batch_delete_media(self, media_ids: Sequence[str] | None) -> BatchDeleteResult:
        """Delete each item that exists and is not used in a collection."""
        ids = require_ids(media_ids, "No media items specified")
        deleted: list[MediaItemEntity] = []
        failed: list[BatchFailure] = []
        with self.store.lock:
            for media_id in ids:
                if not self.store.media.exists(media_id):
                    failed.append(BatchFailure(id=media_id, reason="not_found"))
                    continue
                using = self.integrity.collections_using(media_id)
                if using:
                    failed.append(
                        BatchFailure(
                            id=media_id,
                            reason="item_in_use",
                            message=f"Used in {len(using)} collection(s)",
                        )
                    )
                    continue
                deleted += self.integrity.remove_media_rows([media_id])
        logger.info("Batch delete: %d deleted, %d failed", len(deleted), len(failed))
        return BatchDeleteResult(deleted=deleted, failed=failed)

    def move_media(self, media_ids: Sequence[str] | None, target_folder_id: str) -> BatchUpdateResult:
        """Move items into an existing folder (per-item results)."""
        ids = require_ids(media_ids, "No media items specified")
        self.integrity.require_folder(target_folder_id)
        return self.batch_update_media(ids, {"folder": target_folder_id})

    def copy_media(self, media_ids: Sequence[str] | None, target_folder_id: str) -> BatchCopyResult:
        """Duplicate items into an existing folder with new ids and fresh timestamps.

        Copies start unused and outside every collection; their tags count as new usages.
        """
        ids = require_ids(media_ids, "No media items specified")
        copied: list[MediaItemEntity] = []
        failed: list[BatchFailure] = []
        with self.store.lock:
            self.integrity.require_folder(target_folder_id)
            for media_id in dedupe(ids):
                source = self.store.media.get(media_id)
                if source is None:
                    failed.append(BatchFailure(id=media_id, reason="not_found"))
                    continue
                now = utc_now()
                source.id = generate_cuid()
                source.folder = target_folder_id
                source.path = self.integrity.media_path(target_folder_id, source.name)
                source.created = now
                source.modified = now
                source.used = False
                source.used_in = []
                copy = self.store.media.insert(source)
                self.integrity.adjust_tag_counts((), copy.tags)
                copied.append(copy)
        return BatchCopyResult(copied=copied, failed=failed)

    def batch_update_tags(
        self,
        media_ids: Sequence[str] | None,
        add: Sequence[str] | None = None,
        remove: Sequence[str] | None = None,
    ) -> TagBatchResult:
        """Add and/or remove tag names on many media items.

        Every name in ``add`` must be an existing tag (checked before any
        change) and names in ``remove`` match case-insensitively. Unknown
        media ids are reported and skipped. Adding a tag an item already has,
        or removing one it lacks, is a no-op for that item;
        each effective add/remove moves that tag's count by one.

        Raises:
            ValidationException: Empty id list, or no tags to add or remove.
            InvalidReferencesException: invalid_tags for unknown names in ``add``.
        """
        ids = require_ids(media_ids, "No media items specified")
        add = list(add or [])
        remove = list(remove or [])
        if not add and not remove:
            raise ValidationException("No tags to add or remove specified")
        with self.store.lock:
            to_add = self.integrity.resolve_tag_names(add)
            to_remove = dedupe(remove)
            remove_keys = {str(name).casefold() for name in to_remove}
            updated_ids: list[str] = []
            failed: list[BatchFailure] = []
            for media_id in dedupe(ids):
                item = self.store.media.get(media_id)
                if item is None:
                    failed.append(BatchFailure(id=media_id, reason="not_found"))
                    continue
                before = list(item.tags)
                tags = [t for t in before if t.casefold() not in remove_keys]
                tags += [t for t in to_add if t not in tags]
                if tags == before:
                    continue
                item.tags = tags
                self.integrity.touch(item)
                self.store.media.replace(item)
                self.integrity.adjust_tag_counts(before, tags)
                updated_ids.append(media_id)
        logger.info(
            "Batch tag update: %d updated, %d failed (add=%s, remove=%s)",
            len(updated_ids),
            len(failed),
            to_add,
            to_remove,
        )
        return TagBatchResult(updated_ids=updated_ids, failed=failed, added=to_add, removed=to_remove)
