"""Health endpoint tests."""

import pytest
from falcon.asgi import App
from falcon.testing import TestClient

from docflow.interfaces.api.resources.health import HealthResource


def _client(health: HealthResource) -> TestClient:
    app = App()
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    """Create test client with health endpoints."""
    return _client(HealthResource())


def test_health_liveness(client: TestClient) -> None:
    """GET /v1/health returns 200."""
    result = client.simulate_get("/v1/health")
    assert result.status_code == 200
    assert result.json["status"] == "ok"


def test_health_ready(client: TestClient) -> None:
    """GET /v1/health/ready returns 200."""
    result = client.simulate_get("/v1/health/ready")
    assert result.status_code == 200
    assert result.json["status"] == "ready"


def test_health_ready_when_database_down() -> None:
    """Readiness reports 503 when the check fails or raises."""

    async def down() -> bool:
        return False

    async def broken() -> bool:
        raise OSError("connection refused")

    for check in (down, broken):
        result = _client(HealthResource(check)).simulate_get("/v1/health/ready")
        assert result.status_code == 503
        assert result.json["status"] == "unavailable"
