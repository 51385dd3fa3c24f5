"""TagService tests: tags, renames, deletes and categories."""

import pytest

from medialib.application.use_cases import MediaService, TagService
from medialib.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from medialib.infrastructure.persistence import RecordStore


def test_list_tags_sorting_and_limit(tag_service: TagService) -> None:
    assert len(tag_service.list_tags()) == 28
    by_count = tag_service.list_tags(sort_by="count", limit=3)
    assert [t.name for t in by_count] == ["social", "product", "web"]
    by_name = tag_service.list_tags(sort_by="name", limit=2)
    assert [t.name for t in by_name] == ["approved", "background"]
    with pytest.raises(ValidationException):
        tag_service.list_tags(limit=-1)


def test_list_tags_filters(tag_service: TagService) -> None:
    status_tags = tag_service.list_tags(category_id="cat5")
    assert [t.name for t in status_tags] == ["approved", "pending", "rejected"]
    assert [t.name for t in tag_service.list_tags(search="INTER")] == ["interior", "interface"]


def test_popular_tags(tag_service: TagService) -> None:
    popular = tag_service.get_popular_tags()
    assert len(popular) == 10
    assert popular[0].name == "social"
    counts = [t.count for t in popular]
    assert counts == sorted(counts, reverse=True)


def test_media_with_tag(tag_service: TagService) -> None:
    result = tag_service.get_media_with_tag("12")
    assert result.tag.name == "web"
    assert [m.id for m in result.media.items] == ["1", "10", "15"]
    assert result.media.meta.total == 3


def test_create_tag(tag_service: TagService) -> None:
    tag = tag_service.create_tag("Archive", category_id="cat5")
    assert tag.count == 0
    assert tag.category_id == "cat5"
    assert tag.color

    with pytest.raises(ConflictException) as exc_info:
        tag_service.create_tag("PRODUCT")
    assert exc_info.value.error_code == "tag_exists"
    with pytest.raises(ResourceNotFoundException):
        tag_service.create_tag("orphan", category_id="missing")
    with pytest.raises(ValidationException):
        tag_service.create_tag(" ")


def test_rename_propagates_to_media(
    tag_service: TagService, media_service: MediaService, store: RecordStore
) -> None:
    renamed = tag_service.rename_tag("2", "Hero Shot")
    assert renamed.name == "Hero Shot"
    assert renamed.count == 1
    tags = media_service.get_media("1").tags
    assert "Hero Shot" in tags
    assert "hero" not in tags
    assert not any("hero" in m.tags and "Hero Shot" in m.tags for m in store.media.all())


def test_rename_to_existing_name_conflicts(tag_service: TagService) -> None:
    with pytest.raises(ConflictException) as exc_info:
        tag_service.rename_tag("2", "BANNER")
    assert exc_info.value.error_code == "tag_exists"
    assert tag_service.get_tag("2").name == "hero"


def test_rename_case_only_is_allowed(tag_service: TagService, media_service: MediaService) -> None:
    tag_service.rename_tag("2", "Hero")
    assert "Hero" in media_service.get_media("1").tags


def test_update_tag_color_and_category(tag_service: TagService) -> None:
    updated = tag_service.update_tag("2", {"color": "#000000", "category_id": "", "count": 99})
    assert updated.color == "#000000"
    assert updated.category_id is None
    assert updated.count == 1


def test_delete_tag_strips_media(tag_service: TagService, store: RecordStore) -> None:
    removed = tag_service.delete_tag("12")
    assert removed.name == "web"
    assert not store.tags.exists("12")
    assert all("web" not in m.tags for m in store.media.all())
    assert store.media.get("1").tags == ["hero", "banner"]


def test_categories_crud(tag_service: TagService) -> None:
    names = [c.name for c in tag_service.list_categories()]
    assert names == ["Content Type", "Project", "Purpose", "Status", "Subject"]

    created = tag_service.create_category("Campaign", "Campaign tags")
    assert tag_service.get_category(created.id).description == "Campaign tags"

    with pytest.raises(ConflictException) as exc_info:
        tag_service.create_category("purpose")
    assert exc_info.value.error_code == "category_exists"

    renamed = tag_service.update_category(created.id, {"name": "Campaigns"})
    assert renamed.name == "Campaigns"
    tag_service.delete_category(created.id)
    with pytest.raises(ResourceNotFoundException):
        tag_service.get_category(created.id)


def test_delete_category_in_use(tag_service: TagService, store: RecordStore) -> None:
    with pytest.raises(ConflictException) as exc_info:
        tag_service.delete_category("cat5")
    assert exc_info.value.error_code == "category_has_tags"
    assert exc_info.value.details["tag_ids"] == ["26", "27", "28"]

    tag_service.delete_category("cat5", force=True)
    assert not store.tag_categories.exists("cat5")
    assert all(store.tags.get(t).category_id is None for t in ("26", "27", "28"))
