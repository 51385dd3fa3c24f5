"""Media endpoint tests."""

from httpx import AsyncClient


async def test_list_media_camel_case_and_pagination(client: AsyncClient) -> None:
    response = await client.get("/api/v1/media", params={"pageSize": 5, "page": 2})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["meta"] == {
        "page": 2,
        "pageSize": 5,
        "total": 20,
        "totalPages": 4,
        "hasNextPage": True,
        "hasPreviousPage": True,
    }
    item = data["items"][0]
    assert {"aiTags", "usedIn", "created", "modified"} <= set(item)


async def test_list_media_filters(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/media",
        params={"types": "image,video", "tags": "social", "used": "true", "sortBy": "name"},
    )
    names = [m["name"] for m in response.json()["data"]["items"]]
    assert names == ["facebook-cover.jpg", "product-teaser.mp4", "twitter-card.png"]


async def test_list_media_by_folder_and_collection(client: AsyncClient) -> None:
    in_folder = (await client.get("/api/v1/media", params={"folder": "10"})).json()["data"]
    assert {m["id"] for m in in_folder["items"]} == {"1", "8", "10", "14"}
    flat = (
        await client.get("/api/v1/media", params={"folder": "10", "recursive": "false"})
    ).json()["data"]
    assert [m["id"] for m in flat["items"]] == ["10"]
    in_collection = (await client.get("/api/v1/media", params={"collection": "3"})).json()["data"]
    assert [m["id"] for m in in_collection["items"]] == ["4", "7"]


async def test_list_media_rejects_bad_boolean_and_date(client: AsyncClient) -> None:
    bad_bool = await client.get("/api/v1/media", params={"starred": "maybe"})
    assert bad_bool.status_code == 400
    assert bad_bool.json()["code"] == "invalid_request"
    bad_date = await client.get("/api/v1/media", params={"dateFrom": "yesterday"})
    assert bad_date.status_code == 400


async def test_get_media_and_stats(client: AsyncClient) -> None:
    item = (await client.get("/api/v1/media/1")).json()["data"]
    assert item["path"] == "Images/Web Assets/Banners/hero-banner.jpg"
    assert item["created"] == "2025-03-01T10:00:00.000Z"
    stats = (await client.get("/api/v1/media/stats")).json()["data"]
    assert stats["totalCount"] == 20
    assert stats["typeCount"]["video"] == 3
    assert stats["latestUpload"]["id"] == "20"


async def test_create_update_delete(client: AsyncClient) -> None:
    created = await client.post(
        "/api/v1/media",
        json={"name": "poster.png", "type": "image", "folder": "4", "tags": ["marketing"]},
    )
    assert created.status_code == 201
    item = created.json()["data"]
    assert item["status"] == "draft"
    assert item["path"] == "Images/Marketing/poster.png"

    updated = await client.patch(f"/api/v1/media/{item['id']}", json={"starred": True})
    assert updated.json()["data"]["starred"] is True

    deleted = await client.delete(f"/api/v1/media/{item['id']}")
    assert deleted.status_code == 200
    assert (await client.get(f"/api/v1/media/{item['id']}")).status_code == 404


async def test_create_with_unknown_tag(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/media",
        json={"name": "x.png", "type": "image", "folder": "1", "tags": ["nope"]},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "invalid_tags"
    assert body["details"] == {"invalid": ["nope"]}


async def test_delete_item_in_collection(client: AsyncClient) -> None:
    response = await client.delete("/api/v1/media/1")
    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "item_in_use"
    assert body["details"]["collection_ids"] == ["1", "4"]


async def test_batch_update_and_delete(client: AsyncClient) -> None:
    updated = await client.post(
        "/api/v1/media/batch-update",
        json={"ids": ["2", "missing"], "updates": {"status": "archived"}},
    )
    data = updated.json()["data"]
    assert data["totalUpdated"] == 1
    assert data["failed"] == [{"id": "missing", "reason": "not_found", "message": None}]

    deleted = await client.post("/api/v1/media/batch-delete", json={"ids": ["9", "1"]})
    data = deleted.json()["data"]
    assert data["deleted"] == ["9"]
    assert data["failed"][0]["reason"] == "item_in_use"
    assert deleted.json()["message"] == "Deleted 1 items"


async def test_batch_requires_ids(client: AsyncClient) -> None:
    response = await client.post("/api/v1/media/batch-delete", json={"ids": []})
    assert response.status_code == 400


async def test_move_and_copy(client: AsyncClient) -> None:
    moved = await client.post("/api/v1/media/move", json={"ids": ["20"], "targetFolderId": "2"})
    assert moved.json()["data"]["updated"][0]["path"] == "Documents/draft-mockup.png"

    copied = await client.post("/api/v1/media/copy", json={"ids": ["20"], "targetFolderId": "3"})
    assert copied.status_code == 201
    copy = copied.json()["data"]["copied"][0]
    assert copy["id"] != "20"
    assert copy["folder"] == "3"

    missing = await client.post("/api/v1/media/move", json={"ids": ["20"], "targetFolderId": "nope"})
    assert missing.status_code == 404
