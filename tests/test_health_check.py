from django.db import DatabaseError, connections


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert set(data["services"]) == {"database"}

    def test_health_check_reports_database_status(self, client):
        data = client.get("/health").json()
        assert data["services"]["database"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_health_check_is_public(self, api_client):
        assert api_client.get("/health").status_code == 200

    def test_database_down_returns_503(self, client, monkeypatch):
        def broken():
            raise DatabaseError("connection refused")

        monkeypatch.setattr(connections["default"], "ensure_connection", broken)
        response = client.get("/health")
        monkeypatch.undo()

        assert response.status_code == 503
        assert response.json()["services"]["database"]["status"] == "down"
