"""
Integration test for health endpoint.

The health route does not depend on the document store, so a plain
TestClient without lifespan (no MongoDB connection) is enough.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def sync_client():
    """Create FastAPI test client."""
    from todo_api.main import app

    return TestClient(app)


def test_health_endpoint_returns_200(sync_client: TestClient):
    response = sync_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "todo-api"
    assert data["version"]


def test_health_endpoint_uses_correct_content_type(sync_client: TestClient):
    response = sync_client.get("/health")

    assert "application/json" in response.headers["content-type"]
