"""Tests for health check endpoints."""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_basic(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_health_live(self, client):
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_health_ready_database_healthy(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "dependencies": {"database": {"status": "healthy"}},
        }

    def test_health_ready_database_unhealthy(self, client):
        """Readiness returns 503 with the database error when the ping fails."""
        failure = OperationalError("SELECT 1", {}, Exception("unable to open database file"))
        with patch("device_registry.main.ping", side_effect=failure):
            response = client.get("/health/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["dependencies"]["database"]["status"] == "unhealthy"
        assert "unable to open database file" in data["dependencies"]["database"]["error"]


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Device Registry API"
    assert data["docs"] == "/docs"
    assert "version" in data
