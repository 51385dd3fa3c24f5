"""MediaService tests: queries, CRUD, batches, move/copy, tag batches, stats."""

import pytest

from medialib.application.dtos.query import MediaQuery
from medialib.application.use_cases import CollectionService, MediaService, TagService
from medialib.domain.enums import SortOrder
from medialib.domain.exceptions import (
    ConflictException,
    InvalidReferencesException,
    ResourceNotFoundException,
    ValidationException,
)
from medialib.infrastructure.persistence import RecordStore


def _ids(page) -> list[str]:
    return [m.id for m in page.items]


def test_query_folder_is_recursive_by_default(media_service: MediaService) -> None:
    page = media_service.query_media(MediaQuery(folder="11", page_size=50))
    assert set(_ids(page)) == {"5", "15", "16"}
    flat = media_service.query_media(MediaQuery(folder="11", recursive=False, page_size=50))
    assert _ids(flat) == []


def test_query_folder_all_means_no_scope(media_service: MediaService) -> None:
    page = media_service.query_media(MediaQuery(folder="all", page_size=50))
    assert page.meta.total == 20


def test_query_collection(media_service: MediaService) -> None:
    page = media_service.query_media(MediaQuery(collection="3"))
    assert _ids(page) == ["4", "7"]
    assert media_service.query_media(MediaQuery(collection="missing")).meta.total == 0


def test_query_collection_sorted_by_name(media_service: MediaService) -> None:
    page = media_service.query_media(MediaQuery(collection="3"))
    assert [m.name for m in page.items] == ["annual-report-2024.pdf", "vendor-contract.pdf"]


def test_query_search_covers_tags(media_service: MediaService) -> None:
    page = media_service.query_media(MediaQuery(search="PHOTOGRAPHY"))
    assert set(_ids(page)) == {"12", "17"}


def test_query_filters_combine(media_service: MediaService) -> None:
    page = media_service.query_media(
        MediaQuery(types=["image"], tags=["social"], used="true", page_size=50)
    )
    assert set(_ids(page)) == {"15", "16"}


def test_query_bool_string_and_bool_agree(media_service: MediaService) -> None:
    as_str = media_service.query_media(MediaQuery(starred="true", page_size=50))
    as_bool = media_service.query_media(MediaQuery(starred=True, page_size=50))
    assert _ids(as_str) == _ids(as_bool)
    assert set(_ids(as_bool)) == {"1", "3", "6", "8", "12", "18"}


def test_query_invalid_bool(media_service: MediaService) -> None:
    with pytest.raises(ValidationException):
        media_service.query_media(MediaQuery(used="sometimes"))


def test_query_date_range_on_modified(media_service: MediaService) -> None:
    page = media_service.query_media(
        MediaQuery(date_from="2025-03-20", date_to="2025-03-22T23:59:59Z", page_size=50)
    )
    assert set(_ids(page)) == {"6", "15", "16"}


def test_query_sort_by_size_desc_puts_missing_last(media_service: MediaService) -> None:
    page = media_service.query_media(
        MediaQuery(sort_by="size", sort_order=SortOrder.DESC, page_size=50)
    )
    ids = _ids(page)
    assert ids[0] == "11"  # 210 MB
    assert ids[-1] == "20"  # no size


def test_query_unknown_sort_falls_back_to_name(media_service: MediaService) -> None:
    by_name = media_service.query_media(MediaQuery(sort_by="name", page_size=50))
    unknown = media_service.query_media(MediaQuery(sort_by="bogus", page_size=50))
    assert _ids(by_name) == _ids(unknown)
    assert by_name.items[0].name == "annual-report-2024.pdf"


def test_query_pagination(media_service: MediaService) -> None:
    page = media_service.query_media(MediaQuery(page=3, page_size=8))
    assert len(page.items) == 4
    assert page.meta.total_pages == 3
    assert page.meta.has_next_page is False


def test_create_media_defaults_and_counts(media_service: MediaService, store: RecordStore) -> None:
    web_before = store.tags.get("12").count
    item = media_service.create_media(
        {"name": "new.png", "type": "image", "folder": "12", "tags": ["WEB"]}
    )
    assert item.status == "draft"
    assert item.used is False and item.starred is False and item.favorited is False
    assert item.tags == ["web"]
    assert item.path == "Images/Web Assets/Icons/new.png"
    assert item.created == item.modified
    assert store.tags.get("12").count == web_before + 1


def test_create_media_validates_folder_and_tags(media_service: MediaService, store: RecordStore) -> None:
    with pytest.raises(ResourceNotFoundException):
        media_service.create_media({"name": "x", "type": "image", "folder": "missing"})
    with pytest.raises(InvalidReferencesException) as exc_info:
        media_service.create_media({"name": "x", "type": "image", "folder": "1", "tags": ["nope"]})
    assert exc_info.value.error_code == "invalid_tags"
    with pytest.raises(ValidationException):
        media_service.create_media({"name": "x"})
    assert len(store.media) == 20


def test_update_media_protects_id_and_created(media_service: MediaService) -> None:
    before = media_service.get_media("1")
    updated = media_service.update_media(
        "1", {"id": "hacked", "created": "2000-01-01", "name": "hero.jpg", "starred": "false"}
    )
    assert updated.id == "1"
    assert updated.created == before.created
    assert updated.modified >= before.modified
    assert updated.name == "hero.jpg"
    assert updated.starred is False
    assert updated.path == "Images/Web Assets/Banners/hero.jpg"


def test_update_media_tags_adjust_counts(media_service: MediaService, store: RecordStore) -> None:
    hero = store.tags.get("2").count
    logo = store.tags.get("6").count
    media_service.update_media("1", {"tags": ["banner", "web", "logo"]})
    assert store.tags.get("2").count == hero - 1
    assert store.tags.get("6").count == logo + 1


def test_update_media_move_checks_folder(media_service: MediaService) -> None:
    with pytest.raises(ResourceNotFoundException):
        media_service.update_media("1", {"folder": "missing"})
    moved = media_service.update_media("1", {"folder": "2"})
    assert moved.path == "Documents/hero-banner.jpg"


def test_delete_media_in_collection_then_after_removal(
    media_service: MediaService,
    collection_service: CollectionService,
    store: RecordStore,
) -> None:
    with pytest.raises(ConflictException) as exc_info:
        media_service.delete_media("7")
    assert exc_info.value.error_code == "item_in_use"
    assert store.media.exists("7")

    collection_service.remove_items("3", ["7"])
    removed = media_service.delete_media("7")
    assert removed.id == "7"
    assert not store.media.exists("7")


def test_delete_media_releases_tags_and_recent_files(
    media_service: MediaService, store: RecordStore
) -> None:
    tutorial = store.tags.get("9").count
    media_service.delete_media("9")
    assert store.tags.get("9").count == tutorial - 1
    assert "9" not in store.users.get("user5").recent_files


def test_batch_update_reports_unknown_ids(media_service: MediaService) -> None:
    result = media_service.batch_update_media(["1", "missing", "2"], {"status": "archived"})
    assert [m.id for m in result.updated] == ["1", "2"]
    assert result.failed[0].id == "missing"
    assert result.failed[0].reason == "not_found"
    assert result.total_updated == 2 and result.total_failed == 1
    assert media_service.get_media("2").status == "archived"


def test_batch_update_requires_ids(media_service: MediaService) -> None:
    with pytest.raises(ValidationException):
        media_service.batch_update_media([], {"status": "x"})


def test_batch_delete_mixed(media_service: MediaService, store: RecordStore) -> None:
    result = media_service.batch_delete_media(["9", "1", "missing"])
    assert [m.id for m in result.deleted] == ["9"]
    reasons = {f.id: f.reason for f in result.failed}
    assert reasons == {"1": "item_in_use", "missing": "not_found"}
    assert result.total_deleted == 1 and result.total_failed == 2
    assert store.media.exists("1")


def test_move_media(media_service: MediaService, store: RecordStore) -> None:
    result = media_service.move_media(["9", "14"], "3")
    assert result.total_updated == 2
    assert store.media.get("14").folder == "3"
    assert store.media.get("14").path == "Videos/ui-icon-set.svg"
    with pytest.raises(ResourceNotFoundException):
        media_service.move_media(["9"], "missing")


def test_copy_media(media_service: MediaService, store: RecordStore) -> None:
    product = store.tags.get("1").count
    result = media_service.copy_media(["12", "missing"], "2")
    assert len(result.copied) == 1
    copy = result.copied[0]
    assert copy.id != "12"
    assert copy.folder == "2"
    assert copy.used is False
    assert store.media.exists("12")
    assert store.tags.get("1").count == product + 1
    assert [f.id for f in result.failed] == ["missing"]


def test_batch_tags_example(media_service: MediaService, tag_service: TagService, store: RecordStore) -> None:
    tag_service.create_tag("x")
    tag_service.create_tag("y")
    media_service.create_media({"name": "a.png", "type": "image", "folder": "1"})
    a = media_service.query_media(MediaQuery(search="a.png")).items[0]

    result = media_service.batch_update_tags([a.id, "b"], add=["x", "y"])

    assert result.updated_count == 1
    assert [f.id for f in result.failed] == ["b"]
    assert media_service.get_media(a.id).tags == ["x", "y"]
    counts = {t.name: t.count for t in store.tags.all() if t.name in ("x", "y")}
    assert counts == {"x": 1, "y": 1}


def test_batch_tags_add_is_idempotent_and_remove_floors(
    media_service: MediaService, store: RecordStore
) -> None:
    hero = store.tags.get("2").count
    first = media_service.batch_update_tags(["1"], add=["hero"])
    assert first.updated_count == 0
    assert store.tags.get("2").count == hero

    media_service.batch_update_tags(["1", "9"], remove=["hero"])
    assert "hero" not in media_service.get_media("1").tags
    assert store.tags.get("2").count == hero - 1


def test_batch_tags_remove_matches_case_insensitively(
    media_service: MediaService, store: RecordStore
) -> None:
    hero = store.tags.get("2").count
    result = media_service.batch_update_tags(["1"], remove=["HERO", "not-a-tag"])
    assert result.updated_count == 1
    assert media_service.get_media("1").tags == ["banner", "web"]
    assert store.tags.get("2").count == hero - 1


def test_batch_tags_unknown_add_is_atomic(media_service: MediaService) -> None:
    with pytest.raises(InvalidReferencesException) as exc_info:
        media_service.batch_update_tags(["1", "2"], add=["web", "nope"])
    assert exc_info.value.details == {"invalid": ["nope"]}
    assert "web" in media_service.get_media("1").tags
    assert "web" not in media_service.get_media("2").tags


def test_batch_tags_requires_something_to_do(media_service: MediaService) -> None:
    with pytest.raises(ValidationException):
        media_service.batch_update_tags(["1"])


def test_media_stats(media_service: MediaService) -> None:
    stats = media_service.get_media_stats()
    assert stats.total_count == 20
    assert stats.type_count == {"image": 14, "document": 3, "video": 3}
    assert stats.used_count + stats.unused_count == 20
    assert stats.used_count == 12
    assert stats.total_size.endswith(" MB")
    assert stats.latest_upload.id == "20"
