"""Collection use cases: nested collections, membership and sharing."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from medialib.application.dtos.query import CollectionQuery
from medialib.application.dtos.results import (
    ChildCollections,
    CollectionContents,
    CollectionDeleteResult,
)
from medialib.application.services.hierarchy import (
    build_forest,
    descendant_ids,
    would_create_cycle,
)
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
    paginate,
    run_query,
)
from medialib.domain.entities import CollectionEntity
from medialib.domain.enums import SortOrder
from medialib.domain.exceptions import ConflictException, ValidationException
from medialib.shared.utils.datetime import utc_now
from medialib.shared.utils.generators import generate_cuid

if TYPE_CHECKING:
    from medialib.application.interfaces.repositories import IRecordStore

logger = logging.getLogger(__name__)

COLLECTION_SORT_FIELDS: dict[str, tuple[str, SortKind]] = {
    "name": ("name", SortKind.TEXT),
    "created": ("created", SortKind.DATE),
    "modified": ("modified", SortKind.DATE),
    "date": ("modified", SortKind.DATE),
}

_UPDATABLE_FIELDS = frozenset(
    {"name", "description", "items", "color", "is_shared", "shared_with", "parent_id"}
)


class CollectionService:
    """Collection operations; membership changes are validated against the media table."""

    def __init__(self, store: IRecordStore) -> None:
        self.store = store
        self.integrity = IntegrityCoordinator(store)

    # ---- reads ----

    def list_collections(self, query: CollectionQuery) -> Page[CollectionEntity]:
        """Filter, optionally sort, and paginate collections.

        With ``parent_id`` set, ``recursive`` widens the result from direct
        children to every descendant. Without a ``sort_by`` collections keep
        store order.
        """
        records = self.store.collections.all()
        if query.parent_id:
            if query.recursive:
                scope = descendant_ids(records, query.parent_id, parent_field="parent_id")
            else:
                scope = [c.id for c in records if c.parent_id == query.parent_id]
            wanted = set(scope)
            records = [c for c in records if c.id in wanted]

        is_shared = None
        if query.is_shared is not None and query.is_shared != "":
            is_shared = coerce_bool(query.is_shared, "isShared")
        criteria = [
            Criterion.equals("created_by", query.created_by or None),
            Criterion.equals("is_shared", is_shared),
            Criterion.search(query.search, "name", "description"),
        ]
        sort = None
        if query.sort_by in COLLECTION_SORT_FIELDS:
            field, kind = COLLECTION_SORT_FIELDS[query.sort_by]
            sort = SortSpec(field, kind, descending=SortOrder(query.sort_order) == SortOrder.DESC)
        return run_query(records, criteria, sort=sort, page=query.page, page_size=query.page_size)

    def get_collection(self, collection_id: str) -> CollectionEntity:
        return self.integrity.require_collection(collection_id)

    def get_child_collections(
        self, collection_id: str, page: int = 1, page_size: int = 20
    ) -> ChildCollections:
        parent = self.integrity.require_collection(collection_id)
        children = [c for c in self.store.collections.all() if c.parent_id == collection_id]
        return ChildCollections(parent=parent, children=paginate(children, page, page_size))

    def get_collection_contents(
        self,
        collection_id: str,
        page: int = 1,
        page_size: int = 20,
        include_child_collections: bool = False,
    ) -> CollectionContents:
        """Return a page of the media in a collection, optionally including nested collections.

        Items keep collection order (parent first, then descendants in
        depth-first order); ids that no longer resolve are skipped.
        """
        collection = self.integrity.require_collection(collection_id)
        member_ids = list(collection.items)
        if include_child_collections:
            collections = self.store.collections.all()
            by_id = {c.id: c for c in collections}
            for child_id in descendant_ids(collections, collection_id, parent_field="parent_id"):
                member_ids += by_id[child_id].items
        media = [m for m in (self.store.media.get(i) for i in dedupe(member_ids)) if m is not None]
        return CollectionContents(collection=collection, contents=paginate(media, page, page_size))

    def get_collection_tree(self) -> list[dict[str, Any]]:
        return build_forest(self.store.collections.all(), parent_field="parent_id")

    # ---- writes ----

    def _check_parent(self, collection_id: str | None, parent_id: str | None) -> None:
        if parent_id is None:
            return
        if collection_id is not None and parent_id == collection_id:
            raise ValidationException(
                "Collection cannot be its own parent",
                field="parentId",
                error_code="invalid_parent",
            )
        self.integrity.require_collection(parent_id, "parent_not_found")
        if collection_id is not None and would_create_cycle(
            self.store.collections.all(), collection_id, parent_id, parent_field="parent_id"
        ):
            raise ValidationException(
                "Collection cannot be nested inside one of its own descendants",
                field="parentId",
                error_code="circular_reference",
            )

    def create_collection(self, data: Mapping[str, Any], created_by: str | None = None) -> CollectionEntity:
        """Create a collection.

        Raises:
            ValidationException: Missing name, or unknown media/user ids.
            ResourceNotFoundException: 'parent_not_found' for an unknown parentId.
        """
        name = data.get("name")
        if not name or not str(name).strip():
            raise ValidationException("Collection name is required", field="name")
        with self.store.lock:
            items = dedupe(data.get("items") or [])
            shared_with = dedupe(data.get("shared_with") or [])
            self.integrity.ensure_media_ids(items)
            self.integrity.ensure_user_ids(shared_with)
            parent_id = data.get("parent_id") or None
            self._check_parent(None, parent_id)
            is_shared = data.get("is_shared")
            now = utc_now()
            collection = CollectionEntity(
                id=generate_cuid(),
                name=name,
                created=now,
                modified=now,
                description=data.get("description"),
                items=items,
                color=self.integrity.pick_color(data.get("color")),
                created_by=data.get("created_by") or created_by,
                is_shared=coerce_bool(is_shared, "isShared") if is_shared is not None else bool(shared_with),
                shared_with=shared_with,
                parent_id=parent_id,
            )
            created = self.store.collections.insert(collection)
        logger.info("Created collection %s (%d items)", created.id, len(created.items))
        return created

    def update_collection(self, collection_id: str, changes: Mapping[str, Any]) -> CollectionEntity:
        """Update name, description, color, items, sharing or parent.

        Raises:
            ValidationException: invalid_parent, circular_reference, invalid ids.
            ResourceNotFoundException: Collection or parent not found.
        """
        updates = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
        with self.store.lock:
            collection = self.integrity.require_collection(collection_id)
            if "parent_id" in updates:
                updates["parent_id"] = updates["parent_id"] or None
                self._check_parent(collection_id, updates["parent_id"])
            if "items" in updates:
                updates["items"] = dedupe(updates["items"] or [])
                self.integrity.ensure_media_ids(updates["items"])
            if "shared_with" in updates:
                updates["shared_with"] = dedupe(updates["shared_with"] or [])
                self.integrity.ensure_user_ids(updates["shared_with"])
            if "is_shared" in updates:
                updates["is_shared"] = coerce_bool(updates["is_shared"], "isShared")
            for key, value in updates.items():
                setattr(collection, key, value)
            collection.validate()
            self.integrity.touch(collection)
            return self.store.collections.replace(collection)

    def delete_collection(self, collection_id: str, delete_children: bool = False) -> CollectionDeleteResult:
        """Delete a collection; with ``delete_children`` its whole subtree goes too.

        Member media items are never deleted.

        Raises:
            ConflictException: has_children when nested collections exist and
                ``delete_children`` is false.
        """
        with self.store.lock:
            self.integrity.require_collection(collection_id)
            collections = self.store.collections.all()
            descendants = descendant_ids(collections, collection_id, parent_field="parent_id")
            if descendants and not delete_children:
                raise ConflictException(
                    "Collection has child collections. Use deleteChildren=true to delete them too.",
                    "has_children",
                    {"collection_id": collection_id, "child_count": len(descendants)},
                )
            doomed = [collection_id] + descendants
            self.store.collections.remove_many(doomed)
        logger.info("Deleted collection %s (%d total)", collection_id, len(doomed))
        return CollectionDeleteResult(collection_ids=doomed)

    def add_items(self, collection_id: str, media_ids: Sequence[str] | None) -> CollectionEntity:
        """Add media ids (union, no duplicates). All ids must resolve or nothing changes."""
        ids = require_ids(media_ids, "No items specified")
        with self.store.lock:
            collection = self.integrity.require_collection(collection_id)
            self.integrity.ensure_media_ids(ids)
            collection.items = dedupe(collection.items + ids)
            self.integrity.touch(collection)
            updated = self.store.collections.replace(collection)
        logger.info("Added %d item(s) to collection %s", len(ids), collection_id)
        return updated

    def remove_items(self, collection_id: str, media_ids: Sequence[str] | None) -> CollectionEntity:
        """Remove media ids (set difference); ids not in the collection are ignored."""
        ids = require_ids(media_ids, "No items specified")
        with self.store.lock:
            collection = self.integrity.require_collection(collection_id)
            doomed = set(ids)
            collection.items = [i for i in collection.items if i not in doomed]
            self.integrity.touch(collection)
            return self.store.collections.replace(collection)

    def share_collection(self, collection_id: str, user_ids: Sequence[str] | None) -> CollectionEntity:
        """Share with users (union) and mark the collection shared. All users must resolve."""
        ids = require_ids(user_ids, "No users specified")
        with self.store.lock:
            collection = self.integrity.require_collection(collection_id)
            self.integrity.ensure_user_ids(ids)
            collection.shared_with = dedupe(collection.shared_with + ids)
            collection.is_shared = True
            self.integrity.touch(collection)
            return self.store.collections.replace(collection)
