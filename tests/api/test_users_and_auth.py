"""User and auth endpoint tests."""

from httpx import AsyncClient

from medialib.infrastructure.security.jwt import verify_token


async def test_login_success(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "jamie.smith@example.com", "password": "password"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["id"] == "current"
    assert data["tokenType"] == "bearer"
    assert data["expiresIn"] == 86400
    assert "password" not in data["user"]
    assert verify_token(data["token"])["sub"] == "current"


async def test_login_wrong_password_returns_401(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "jamie.smith@example.com", "password": "nope"},
    )
    assert response.status_code == 401
    assert response.json()["code"] == "authentication_failed"


async def test_login_invalid_email_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/login", json={"email": "jamie", "password": "x"})
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_request"


async def test_logout(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/logout")
    assert response.status_code == 200
    assert response.json()["data"] is None


async def test_logout_with_bearer_token(client: AsyncClient) -> None:
    login = await client.post(
        "/api/v1/auth/login",
        json={"email": "jamie.smith@example.com", "password": "password"},
    )
    token = login.json()["data"]["token"]
    response = await client.post("/api/v1/auth/logout", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200

    stale = await client.post("/api/v1/auth/logout", headers={"Authorization": "Bearer garbage"})
    assert stale.status_code == 200


async def test_list_users_by_role(client: AsyncClient) -> None:
    data = (await client.get("/api/v1/users", params={"role": "viewer"})).json()["data"]
    assert [u["id"] for u in data] == ["user4"]
    bad = await client.get("/api/v1/users", params={"role": "owner"})
    assert bad.status_code == 400


async def test_current_user_profile_and_preferences(client: AsyncClient) -> None:
    me = (await client.get("/api/v1/users/me")).json()["data"]
    assert me["name"] == "Jamie Smith"
    assert me["recentFolders"] == ["1", "5", "7"]

    profile = await client.patch("/api/v1/users/me", json={"name": "Jamie S."})
    assert profile.json()["data"]["name"] == "Jamie S."

    prefs = await client.patch("/api/v1/users/me/preferences", json={"theme": "dark"})
    preferences = prefs.json()["data"]["preferences"]
    assert preferences["theme"] == "dark"
    assert preferences["viewMode"] == "grid"


async def test_record_recent_items(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/me/recent", json={"type": "files", "id": "20"})
    assert response.json()["data"] == {"recentFiles": ["20", "1", "3", "10"]}

    unknown = await client.post("/api/v1/users/me/recent", json={"type": "folders", "id": "nope"})
    assert unknown.status_code == 404

    bad_kind = await client.post("/api/v1/users/me/recent", json={"type": "albums", "id": "1"})
    assert bad_kind.status_code == 400


async def test_get_user(client: AsyncClient) -> None:
    assert (await client.get("/api/v1/users/user2")).json()["data"]["role"] == "editor"
    assert (await client.get("/api/v1/users/ghost")).status_code == 404
