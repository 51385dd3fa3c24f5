"""Simulated latency and failures at the HTTP boundary."""

from httpx import ASGITransport, AsyncClient

from medialib.infrastructure.services import FaultInjector


async def test_simulated_outage_returns_503(app) -> None:
    app.state.fault_injector = FaultInjector(error_rate=1.0, delay_fixed_ms=0)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/v1/folders")
        health = await client.get("/api/v1/health")
    assert response.status_code == 503
    body = response.json()
    assert body["code"] == "service_unavailable"
    assert body["details"]["simulated_failure"] is True
    assert health.status_code == 200


async def test_simulated_login_failure_returns_401(app) -> None:
    app.state.fault_injector = FaultInjector(error_rate=1.0, delay_fixed_ms=0)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "jamie.smith@example.com", "password": "password"},
        )
    assert response.status_code == 401
    assert response.json()["code"] == "authentication_failed"
