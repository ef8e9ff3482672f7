# =============================================================================
# tests/test_health.py - Health Endpoint Tests
# =============================================================================

from unittest.mock import AsyncMock, patch


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "development"
        assert body["version"] == "1.0.0"

    def test_live(self, client):
        assert client.get("/api/health/live").json()["status"] == "alive"

    def test_ready_when_database_answers(self, client):
        with patch("app.routers.health.MongoClient.ping", new=AsyncMock(return_value=True)):
            body = client.get("/api/health/ready").json()

        assert body["status"] == "ready"
        assert body["database"] == "healthy"

    def test_degraded_when_database_is_down(self, client):
        with patch("app.routers.health.MongoClient.ping", new=AsyncMock(return_value=False)):
            response = client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
