"""Smoke tests for health, envelope and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version")


async def test_readiness_reports_table_counts(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["records"] == {
        "folders": 17,
        "media": 20,
        "collections": 7,
        "tags": 28,
        "tagCategories": 5,
        "users": 6,
    }


async def test_root_returns_html(client: AsyncClient) -> None:
    """GET / returns HTML landing page."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers.get("content-type", "")


async def test_success_envelope_shape(client: AsyncClient) -> None:
    response = await client.get("/api/v1/folders/1")
    body = response.json()
    assert body["success"] is True
    assert body["requestId"].startswith("req_")
    assert response.headers["X-Request-ID"] == body["requestId"]
    assert body["timestamp"].endswith("Z")
    assert body["data"]["id"] == "1"


async def test_client_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/v1/folders", headers={"X-Request-ID": "trace-42"})
    assert response.json()["requestId"] == "trace-42"
    assert response.headers["X-Request-ID"] == "trace-42"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get("/api/v1/folders", headers={"X-Request-ID": "bad id\twith spaces"})
    assert response.json()["requestId"].startswith("req_")


async def test_error_envelope_shape(client: AsyncClient) -> None:
    response = await client.get("/api/v1/folders/missing")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["status"] == 404
    assert body["code"] == "not_found"
    assert body["message"] == "Folder not found: missing"
    assert body["requestId"].startswith("req_")


async def test_unknown_route_uses_error_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"
