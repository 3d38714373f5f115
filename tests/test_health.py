"""
Tests for health endpoints.
"""


class TestHealth:

    def test_health_reports_database(self, client, intern):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"]["counts"] == {"profiles": 1, "activities": 0}
        assert "memory_percent" in data["system"] or data["system"]["status"] == "unknown"

    def test_live(self, client):
        assert client.get("/api/health/live").json()["status"] == "alive"

    def test_security_headers(self, client):
        response = client.get("/api/health/live")
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"
