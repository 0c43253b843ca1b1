"""Health endpoint tests."""

from fastapi.testclient import TestClient

from botdesk.core.memory import MemoryStorage
from botdesk.main import create_app


class UnreachableStorage(MemoryStorage):
    async def ping(self) -> None:
        raise ConnectionError("connection refused")


def test_health_endpoint(client):
    """Test health check returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_root_endpoint(client):
    """Test root endpoint returns app info."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Chatbot Console"
    assert "version" in data


def test_api_health_reports_storage(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == {"connected": True, "type": "In-Memory", "error": None}
    assert data["environment"]
    assert data["timestamp"]


def test_api_health_reports_unreachable_storage():
    with TestClient(create_app(storage=UnreachableStorage())) as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    database = response.json()["database"]
    assert database["connected"] is False
    assert database["error"] == "connection refused"


def test_api_health_reports_sql_storage(sql_storage):
    with TestClient(create_app(storage=sql_storage)) as client:
        response = client.get("/api/health")

    database = response.json()["database"]
    assert database["connected"] is True
    assert database["type"] == "SQL (sqlite)"
