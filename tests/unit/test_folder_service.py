"""FolderService tests against a fresh seeded store."""

import pytest

from medialib.application.use_cases import FolderService
from medialib.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from medialib.infrastructure.persistence import RecordStore


def test_list_folders_by_parent(folder_service: FolderService) -> None:
    roots = folder_service.list_folders()
    assert [f.name for f in roots] == ["Images", "Documents", "Videos"]
    assert [f.id for f in folder_service.list_folders("10")] == ["12", "13", "14"]


def test_folder_tree(folder_service: FolderService) -> None:
    tree = folder_service.get_folder_tree()
    assert [n["name"] for n in tree] == ["Images", "Documents", "Videos"]
    images = tree[0]
    assert [c["id"] for c in images["children"]] == ["4", "5", "6", "10", "11"]


def test_folder_contents_recursive_by_default(folder_service: FolderService) -> None:
    result = folder_service.get_folder_contents("10", page=1, page_size=50)
    assert {m.id for m in result.contents.items} == {"1", "8", "10", "14"}
    direct = folder_service.get_folder_contents("10", recursive=False)
    assert [m.id for m in direct.contents.items] == ["10"]


def test_create_folder_derives_path_and_color(folder_service: FolderService, store: RecordStore) -> None:
    folder = folder_service.create_folder("Print", parent="13")
    assert folder.path == "Images/Web Assets/Banners/Print"
    assert folder.color
    assert store.folders.get(folder.id).parent == "13"


def test_custom_separator_matches_seeded_paths() -> None:
    store = RecordStore.from_seed(path_separator=" > ")
    service = FolderService(store, path_separator=" > ")
    folder = service.create_folder("Deep", parent="12")
    assert folder.path == "Images > Web Assets > Icons > Deep"


def test_create_root_folder(folder_service: FolderService) -> None:
    folder = folder_service.create_folder("Audio")
    assert folder.parent is None
    assert folder.path == "Audio"


def test_create_folder_requires_name(folder_service: FolderService) -> None:
    with pytest.raises(ValidationException):
        folder_service.create_folder("  ")


def test_create_folder_unknown_parent(folder_service: FolderService) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        folder_service.create_folder("x", parent="nope")
    assert exc_info.value.error_code == "parent_not_found"


def test_rename_propagates_paths_to_descendants_and_media(
    folder_service: FolderService, store: RecordStore
) -> None:
    folder_service.update_folder("10", {"name": "Web"})
    assert store.folders.get("10").path == "Images/Web"
    assert store.folders.get("12").path == "Images/Web/Icons"
    assert store.media.get("14").path == "Images/Web/Icons/ui-icon-set.svg"


def test_reparent_to_root(folder_service: FolderService, store: RecordStore) -> None:
    folder = folder_service.update_folder("10", {"parent": None})
    assert folder.parent is None
    assert folder.path == "Web Assets"
    assert store.folders.get("13").path == "Web Assets/Banners"


def test_reparent_to_unknown_folder_is_ignored(folder_service: FolderService) -> None:
    folder = folder_service.update_folder("12", {"parent": "missing", "color": "#000000"})
    assert folder.parent == "10"
    assert folder.color == "#000000"


def test_reparent_into_descendant_is_rejected(folder_service: FolderService, store: RecordStore) -> None:
    with pytest.raises(ValidationException) as exc_info:
        folder_service.update_folder("1", {"parent": "12"})
    assert exc_info.value.error_code == "circular_reference"
    assert store.folders.get("1").parent is None


def test_delete_folder_with_children_requires_force(
    folder_service: FolderService, store: RecordStore
) -> None:
    parent = folder_service.create_folder("F")
    child = folder_service.create_folder("F child", parent=parent.id)

    with pytest.raises(ConflictException) as exc_info:
        folder_service.delete_folder(parent.id)
    assert exc_info.value.error_code == "folder_has_children"
    assert store.folders.exists(parent.id)

    result = folder_service.delete_folder(parent.id, force=True)
    assert result.folder_ids == [parent.id, child.id]
    assert not store.folders.exists(parent.id)
    assert not store.folders.exists(child.id)


def test_delete_folder_with_media_requires_force(folder_service: FolderService) -> None:
    with pytest.raises(ConflictException) as exc_info:
        folder_service.delete_folder("9")
    assert exc_info.value.error_code == "folder_has_media"


def test_force_delete_removes_contained_media_and_releases_tags(
    folder_service: FolderService, store: RecordStore
) -> None:
    tutorial_count = store.tags.get("9").count
    result = folder_service.delete_folder("9", force=True)
    assert result.media_ids == ["9"]
    assert not store.media.exists("9")
    assert store.tags.get("9").count == tutorial_count - 1


def test_force_delete_rejected_when_media_is_in_a_collection(
    folder_service: FolderService, store: RecordStore
) -> None:
    with pytest.raises(ConflictException) as exc_info:
        folder_service.delete_folder("10", force=True)
    assert exc_info.value.error_code == "item_in_use"
    assert store.folders.exists("10")
    assert store.folders.exists("12")
    assert store.media.exists("14")


def test_delete_forgets_recent_folders(folder_service: FolderService, store: RecordStore) -> None:
    folder_service.delete_folder("9", force=True)
    assert "9" not in store.users.get("user4").recent_folders


def test_delete_unknown_folder(folder_service: FolderService) -> None:
    with pytest.raises(ResourceNotFoundException):
        folder_service.delete_folder("missing")
