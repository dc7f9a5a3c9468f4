"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from mealcart.main import app


def test_health_check() -> None:
    """Test basic health check endpoint."""
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "mealcart-api"}


def test_root_endpoint() -> None:
    """Test root endpoint returns API info."""
    client = TestClient(app)
    response = client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data["name"] == "Mealcart API"
    assert "version" in data
    assert data["docs"] == "/docs"


def test_request_id_echoed() -> None:
    """A caller-supplied request id is returned on the response."""
    client = TestClient(app)
    response = client.get("/health", headers={"X-Request-Id": "abc-123"})
    assert response.headers["X-Request-Id"] == "abc-123"


def test_request_id_generated() -> None:
    """Requests without an id get one assigned."""
    client = TestClient(app)
    assert client.get("/health").headers["X-Request-Id"]
