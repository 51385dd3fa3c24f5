"""Tag and tag category use cases.

Media items reference tags by name, so renames and deletes rewrite every
media row that carries the name.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from medialib.application.dtos.results import TagMedia
from medialib.application.services.integrity import IntegrityCoordinator
from medialib.application.services.query_engine import (
    Criterion,
    SortKind,
    SortSpec,
    run_query,
    sort_records,
)
from medialib.core.constants import DEFAULT_POPULAR_TAGS_LIMIT
from medialib.domain.entities import TagCategoryEntity, TagEntity
from medialib.domain.exceptions import ConflictException, ValidationException
from medialib.shared.utils.generators import generate_cuid

if TYPE_CHECKING:
    from medialib.application.interfaces.repositories import IRecordStore

logger = logging.getLogger(__name__)

_TAG_UPDATABLE_FIELDS = frozenset({"name", "color", "category_id"})
_CATEGORY_UPDATABLE_FIELDS = frozenset({"name", "description"})


def _require_name(name: Any, label: str) -> str:
    if not name or not str(name).strip():
        raise ValidationException(f"{label} name is required", field="name")
    return str(name).strip()


class TagService:
    """Tag and tag-category operations."""

    def __init__(self, store: IRecordStore) -> None:
        self.store = store
        self.integrity = IntegrityCoordinator(store)

    # ---- tags: reads ----

    def list_tags(
        self,
        sort_by: str | None = None,
        limit: int | None = None,
        category_id: str | None = None,
        search: str | None = None,
    ) -> list[TagEntity]:
        """Return tags sorted by name (ascending) or count (descending), optionally limited."""
        if limit is not None and limit < 0:
            raise ValidationException("limit must be >= 0", field="limit")
        tags = self.store.tags.all()
        if category_id:
            tags = [t for t in tags if t.category_id == category_id]
        if search:
            term = search.casefold()
            tags = [t for t in tags if term in t.name.casefold()]
        if sort_by == "count":
            tags = sort_records(tags, SortSpec("count", SortKind.NUMBER, descending=True))
        elif sort_by == "name":
            tags = sort_records(tags, SortSpec("name", SortKind.TEXT))
        return tags[:limit] if limit is not None else tags

    def get_tag(self, tag_id: str) -> TagEntity:
        return self.integrity.require_tag(tag_id)

    def get_media_with_tag(self, tag_id: str, page: int = 1, page_size: int = 20) -> TagMedia:
        """Return the tag and a page of media carrying its name, sorted by name."""
        tag = self.integrity.require_tag(tag_id)
        media = run_query(
            self.store.media.all(),
            [Criterion.any_of("tags", [tag.name])],
            sort=SortSpec("name", SortKind.TEXT),
            page=page,
            page_size=page_size,
        )
        return TagMedia(tag=tag, media=media)

    def get_popular_tags(self, limit: int = DEFAULT_POPULAR_TAGS_LIMIT) -> list[TagEntity]:
        return self.list_tags(sort_by="count", limit=limit)

    # ---- tags: writes ----

    def create_tag(
        self, name: str | None, color: str | None = None, category_id: str | None = None
    ) -> TagEntity:
        """Create a tag with count 0.

        Raises:
            ValidationException: Missing name.
            ConflictException: tag_exists (case-insensitive).
            ResourceNotFoundException: Unknown category.
        """
        name = _require_name(name, "Tag")
        with self.store.lock:
            self.integrity.ensure_unique_tag_name(name)
            if category_id:
                self.integrity.require_category(category_id)
            tag = TagEntity(
                id=generate_cuid(),
                name=name,
                color=self.integrity.pick_color(color),
                count=0,
                category_id=category_id or None,
            )
            created = self.store.tags.insert(tag)
        logger.info("Created tag %s (%s)", created.id, created.name)
        return created

    def update_tag(self, tag_id: str, changes: Mapping[str, Any]) -> TagEntity:
        """Update name, color or category; ``count`` is never set directly.

        A name change is a rename and rewrites the name on every media item.
        """
        updates = {k: v for k, v in changes.items() if k in _TAG_UPDATABLE_FIELDS}
        with self.store.lock:
            tag = self.integrity.require_tag(tag_id)
            if "name" in updates:
                updates["name"] = _require_name(updates["name"], "Tag")
                self.integrity.ensure_unique_tag_name(updates["name"], exclude_id=tag_id)
            if updates.get("category_id"):
                self.integrity.require_category(updates["category_id"])
            elif "category_id" in updates:
                updates["category_id"] = None
            old_name = tag.name
            for key, value in updates.items():
                setattr(tag, key, value)
            tag.validate()
            updated = self.store.tags.replace(tag)
            if updated.name != old_name:
                touched = self.integrity.rename_media_tag(old_name, updated.name)
                logger.info(
                    "Renamed tag %s: '%s' -> '%s' on %d media item(s)",
                    tag_id,
                    old_name,
                    updated.name,
                    touched,
                )
            return updated

    def rename_tag(self, tag_id: str, new_name: str | None) -> TagEntity:
        return self.update_tag(tag_id, {"name": new_name})

    def delete_tag(self, tag_id: str) -> TagEntity:
        """Delete a tag and remove its name from every media item."""
        with self.store.lock:
            tag = self.integrity.require_tag(tag_id)
            touched = self.integrity.strip_media_tag(tag.name)
            removed = self.store.tags.remove(tag_id)
        logger.info("Deleted tag %s (%s), stripped from %d media item(s)", tag_id, tag.name, touched)
        return removed

    # ---- categories ----

    def list_categories(self) -> list[TagCategoryEntity]:
        return sort_records(self.store.tag_categories.all(), SortSpec("name", SortKind.TEXT))

    def get_category(self, category_id: str) -> TagCategoryEntity:
        return self.integrity.require_category(category_id)

    def create_category(self, name: str | None, description: str | None = None) -> TagCategoryEntity:
        name = _require_name(name, "Tag category")
        with self.store.lock:
            self.integrity.ensure_unique_category_name(name)
            category = TagCategoryEntity(id=generate_cuid(), name=name, description=description)
            created = self.store.tag_categories.insert(category)
        logger.info("Created tag category %s (%s)", created.id, created.name)
        return created

    def update_category(self, category_id: str, changes: Mapping[str, Any]) -> TagCategoryEntity:
        updates = {k: v for k, v in changes.items() if k in _CATEGORY_UPDATABLE_FIELDS}
        with self.store.lock:
            category = self.integrity.require_category(category_id)
            if "name" in updates:
                updates["name"] = _require_name(updates["name"], "Tag category")
                self.integrity.ensure_unique_category_name(updates["name"], exclude_id=category_id)
            for key, value in updates.items():
                setattr(category, key, value)
            return self.store.tag_categories.replace(category)

    def delete_category(self, category_id: str, force: bool = False) -> TagCategoryEntity:
        """Delete a category.

        Raises:
            ConflictException: category_has_tags when tags reference it and
                ``force`` is false. With ``force`` those tags become uncategorized.
        """
        with self.store.lock:
            self.integrity.require_category(category_id)
            tags = [t for t in self.store.tags.all() if t.category_id == category_id]
            if tags and not force:
                raise ConflictException(
                    f"Cannot delete category used by {len(tags)} tag(s). Use force=true to delete anyway.",
                    "category_has_tags",
                    {"category_id": category_id, "tag_ids": [t.id for t in tags]},
                )
            for tag in tags:
                tag.category_id = None
                self.store.tags.replace(tag)
            removed = self.store.tag_categories.remove(category_id)
        logger.info("Deleted tag category %s (%d tag(s) uncategorized)", category_id, len(tags))
        return removed
