"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the served surface."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("surface") == "web"
    assert data.get("actions") == 5


async def test_ready_without_database(client: AsyncClient) -> None:
    """GET /api/v1/health/ready is ready when no database is configured."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "not_configured"}


async def test_request_id_generated(client: AsyncClient) -> None:
    """Every response carries an X-Request-ID header."""
    response = await client.get("/api/v1/health")
    assert response.headers.get("X-Request-ID")


async def test_request_id_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-abc_123"})
    assert response.headers.get("X-Request-ID") == "req-abc_123"


async def test_unsafe_request_id_replaced(client: AsyncClient) -> None:
    """Ids with characters outside [A-Za-z0-9_-] are replaced to keep logs clean."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id;forged"})
    assert response.headers.get("X-Request-ID") != "bad id;forged"
    assert len(response.headers.get("X-Request-ID")) == 36
