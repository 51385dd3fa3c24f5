"""Tag and tag category endpoint tests."""

from httpx import AsyncClient


async def test_list_sorted_and_popular(client: AsyncClient) -> None:
    by_count = (await client.get("/api/v1/tags", params={"sortBy": "count", "limit": 2})).json()
    assert [t["name"] for t in by_count["data"]] == ["social", "product"]
    popular = (await client.get("/api/v1/tags/popular", params={"limit": 1})).json()["data"]
    assert popular[0]["name"] == "social"
    assert popular[0]["categoryId"] == "cat2"


async def test_media_with_tag(client: AsyncClient) -> None:
    data = (await client.get("/api/v1/tags/9/media")).json()["data"]
    assert data["tag"]["name"] == "tutorial"
    assert [m["id"] for m in data["media"]["items"]] == ["9"]


async def test_create_duplicate_tag(client: AsyncClient) -> None:
    created = await client.post("/api/v1/tags", json={"name": "print", "categoryId": "cat2"})
    assert created.status_code == 201
    assert created.json()["data"]["count"] == 0

    duplicate = await client.post("/api/v1/tags", json={"name": "Print"})
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "tag_exists"


async def test_rename_propagates(client: AsyncClient) -> None:
    response = await client.post("/api/v1/tags/9/rename", json={"name": "how-to"})
    assert response.json()["data"]["name"] == "how-to"
    item = (await client.get("/api/v1/media/9")).json()["data"]
    assert item["tags"] == ["how-to"]


async def test_delete_strips_media(client: AsyncClient) -> None:
    response = await client.delete("/api/v1/tags/2")
    assert response.status_code == 200
    item = (await client.get("/api/v1/media/1")).json()["data"]
    assert "hero" not in item["tags"]
    assert (await client.get("/api/v1/tags/2")).status_code == 404


async def test_batch_tags(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/tags/batch",
        json={"mediaIds": ["9", "missing"], "add": ["featured"], "remove": ["tutorial"]},
    )
    data = response.json()["data"]
    assert data["updatedCount"] == 1
    assert data["updatedIds"] == ["9"]
    assert data["failed"][0]["id"] == "missing"
    assert (await client.get("/api/v1/media/9")).json()["data"]["tags"] == ["featured"]

    tag = (await client.get("/api/v1/tags/7")).json()["data"]
    assert tag["count"] == 3


async def test_batch_tags_unknown_tag(client: AsyncClient) -> None:
    response = await client.post("/api/v1/tags/batch", json={"mediaIds": ["9"], "add": ["nope"]})
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_tags"


async def test_categories(client: AsyncClient) -> None:
    listed = (await client.get("/api/v1/tag-categories")).json()["data"]
    assert listed[0]["name"] == "Content Type"

    created = await client.post(
        "/api/v1/tag-categories", json={"name": "Region", "description": "Market region"}
    )
    assert created.status_code == 201
    category_id = created.json()["data"]["id"]

    in_use = await client.delete("/api/v1/tag-categories/cat1")
    assert in_use.status_code == 409
    assert in_use.json()["code"] == "category_has_tags"

    forced = await client.delete("/api/v1/tag-categories/cat1", params={"force": "true"})
    assert forced.status_code == 200
    logo = (await client.get("/api/v1/tags/6")).json()["data"]
    assert logo["categoryId"] is None

    assert (await client.delete(f"/api/v1/tag-categories/{category_id}")).status_code == 200
