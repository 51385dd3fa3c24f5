"""Folder use cases: browse, tree, create, update (rename/reparent), guarded delete."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from medialib.application.dtos.results import FolderContents, FolderDeleteResult
from medialib.application.services.hierarchy import (
    build_forest,
    descendant_ids,
    would_create_cycle,
)
from medialib.application.services.integrity import IntegrityCoordinator
from medialib.application.services.query_engine import (
    Criterion,
    SortKind,
    SortSpec,
    run_query,
)
from medialib.domain.entities import FolderEntity
from medialib.domain.enums import RecentKind
from medialib.domain.exceptions import ConflictException, ValidationException
from medialib.shared.utils.generators import generate_cuid

if TYPE_CHECKING:
    from medialib.application.interfaces.repositories import IRecordStore

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"name", "color", "parent"})


class FolderService:
    """Folder operations over the record store, enforcing path and delete rules."""

    def __init__(self, store: IRecordStore, path_separator: str = "/") -> None:
        self.store = store
        self.integrity = IntegrityCoordinator(store, path_separator)
        self.path_separator = path_separator

    def list_folders(self, parent: str | None = None) -> list[FolderEntity]:
        """Return direct children of ``parent``; root folders when parent is None."""
        return [f for f in self.store.folders.all() if f.parent == parent]

    def get_folder(self, folder_id: str) -> FolderEntity:
        return self.integrity.require_folder(folder_id)

    def get_folder_tree(self) -> list[dict[str, Any]]:
        """Return the folder forest; each node carries a ``children`` list."""
        return build_forest(self.store.folders.all(), parent_field="parent")

    def get_folder_contents(
        self,
        folder_id: str,
        page: int = 1,
        page_size: int = 20,
        recursive: bool = True,
    ) -> FolderContents:
        """Return the folder and a page of media inside it (and its subfolders by default)."""
        folder = self.integrity.require_folder(folder_id)
        scope = [folder_id]
        if recursive:
            scope += descendant_ids(self.store.folders.all(), folder_id, parent_field="parent")
        page_result = run_query(
            self.store.media.all(),
            [Criterion.any_of("folder", scope)],
            sort=SortSpec("name", SortKind.TEXT),
            page=page,
            page_size=page_size,
        )
        return FolderContents(folder=folder, contents=page_result)

    def create_folder(
        self, name: str | None, parent: str | None = None, color: str | None = None
    ) -> FolderEntity:
        """Create a folder under ``parent`` (or at the root); path is derived.

        Raises:
            ValidationException: If name is missing.
            ResourceNotFoundException: 'parent_not_found' if parent does not exist.
        """
        if not name or not name.strip():
            raise ValidationException("Folder name is required", field="name")
        with self.store.lock:
            parent_path = None
            if parent:
                parent_path = self.integrity.require_folder(parent, "parent_not_found").path
            folder = FolderEntity(
                id=generate_cuid(),
                name=name,
                parent=parent or None,
                path=FolderEntity.derive_path(name, parent_path, self.path_separator),
                color=self.integrity.pick_color(color),
            )
            created = self.store.folders.insert(folder)
        logger.info("Created folder %s at %s", created.id, created.path)
        return created

    def update_folder(self, folder_id: str, changes: Mapping[str, Any]) -> FolderEntity:
        """Apply name/color/parent changes.

        A parent that does not exist is dropped silently (the rest of the update
        still applies). ``parent=None`` moves the folder to the root. A parent
        that is the folder itself or one of its descendants is rejected.
        Renames and moves recompute the path of the folder, its descendants and
        their media.
        """
        updates = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
        with self.store.lock:
            folder = self.integrity.require_folder(folder_id)
            if "parent" in updates:
                new_parent = updates["parent"]
                if new_parent is not None and not self.store.folders.exists(new_parent):
                    logger.info(
                        "Parent %s not found, ignoring parent change for folder %s",
                        new_parent,
                        folder_id,
                    )
                    del updates["parent"]
                elif would_create_cycle(
                    self.store.folders.all(), folder_id, new_parent, parent_field="parent"
                ):
                    raise ValidationException(
                        "Folder cannot be moved into itself or one of its subfolders",
                        field="parent",
                        error_code="circular_reference",
                    )
            if "name" in updates and (not updates["name"] or not str(updates["name"]).strip()):
                raise ValidationException("Folder name is required", field="name")

            structural = ("parent" in updates and updates["parent"] != folder.parent) or (
                "name" in updates and updates["name"] != folder.name
            )
            for key, value in updates.items():
                setattr(folder, key, value)
            folder.validate()
            self.store.folders.replace(folder)
            if structural:
                self.integrity.refresh_folder_paths(folder_id)
            return self.integrity.require_folder(folder_id)

    def delete_folder(self, folder_id: str, force: bool = False) -> FolderDeleteResult:
        """Delete a folder.

        Without ``force`` the folder must have no subfolders and no media. With
        ``force`` the folder, all descendant folders and the media inside any of
        them are removed; if one of those media items belongs to a collection the
        whole delete is rejected with item_in_use and nothing changes.

        Raises:
            ConflictException: folder_has_children, folder_has_media or item_in_use.
        """
        with self.store.lock:
            self.integrity.require_folder(folder_id)
            folders = self.store.folders.all()
            media = self.store.media.all()
            has_children = any(f.parent == folder_id for f in folders)
            if has_children and not force:
                raise ConflictException(
                    "Cannot delete folder with subfolders. Use force=true to delete anyway.",
                    "folder_has_children",
                    {"folder_id": folder_id},
                )
            direct_media = [m.id for m in media if m.folder == folder_id]
            if direct_media and not force:
                raise ConflictException(
                    f"Cannot delete folder containing {len(direct_media)} media items. "
                    "Use force=true to delete anyway.",
                    "folder_has_media",
                    {"folder_id": folder_id, "media_count": len(direct_media)},
                )

            doomed_folders = [folder_id] + descendant_ids(folders, folder_id, parent_field="parent")
            scope = set(doomed_folders)
            doomed_media = [m.id for m in media if m.folder in scope]
            for media_id in doomed_media:
                self.integrity.ensure_not_in_use(media_id)

            self.integrity.remove_media_rows(doomed_media)
            self.store.folders.remove_many(doomed_folders)
            self.integrity.forget_recent(RecentKind.FOLDERS, doomed_folders)
        logger.info(
            "Deleted folder %s (%d folders, %d media items, force=%s)",
            folder_id,
            len(doomed_folders),
            len(doomed_media),
            force,
        )
        return FolderDeleteResult(folder_ids=doomed_folders, media_ids=doomed_media)
