"""Tests for application-level behavior wired up in main.py."""

import re

from fastapi.testclient import TestClient

from core.correlation import CORRELATION_HEADER
from helpers.rate_limiter import GENERAL_LIMIT_MESSAGE
from models.config import settings


class TestHealthEndpoint:
    """Tests for GET /api/health."""

    def test_health_returns_ok(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert data["version"] == "1.0.0"
        assert "timestamp" in data

    def test_health_reports_response_time(self, client: TestClient):
        response = client.get("/api/health")
        assert response.headers["X-Response-Time"].endswith("s")


class TestCorrelationHeader:
    """Every response carries a correlation ID."""

    def test_generated_when_absent(self, client: TestClient):
        response = client.get("/api/health")
        assert re.match(r"^[0-9a-f]{8}$", response.headers[CORRELATION_HEADER])

    def test_echoes_safe_incoming_id(self, client: TestClient):
        response = client.get(
            "/api/health", headers={CORRELATION_HEADER: "frontend-123"}
        )
        assert response.headers[CORRELATION_HEADER] == "frontend-123"

    def test_error_body_matches_header(self, client: TestClient):
        response = client.get("/api/blog/no-such-post")

        assert response.status_code == 404
        assert response.json()["correlation_id"] == response.headers[CORRELATION_HEADER]


class TestErrorShape:
    """Framework errors use the same {detail, correlation_id} body."""

    def test_unknown_route(self, client: TestClient):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"] == "Route not found"
        assert "correlation_id" in response.json()

    def test_wrong_method(self, client: TestClient):
        response = client.delete("/api/health")
        assert response.status_code == 405

    def test_query_validation_is_400(self, client: TestClient):
        response = client.get("/api/projects?limit=abc")

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid request: query.limit")


class TestGeneralRateLimit:
    """One shared budget per address across public routes."""

    def test_budget_shared_across_routes(self, client: TestClient):
        """Requests to different routes draw from the same per-address bucket."""
        budget = int(settings.RATE_LIMIT_GENERAL.split("/")[0])
        paths = ["/api/health", "/api/blog", "/api/projects"]

        for i in range(budget):
            assert client.get(paths[i % len(paths)]).status_code == 200

        response = client.get("/api/blog")

        assert response.status_code == 429
        assert response.json()["detail"] == GENERAL_LIMIT_MESSAGE

    def test_other_address_has_own_bucket(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "TRUSTED_PROXIES", "testclient")
        budget = int(settings.RATE_LIMIT_GENERAL.split("/")[0])
        for _ in range(budget):
            client.get("/api/health")

        response = client.get("/api/health", headers={"X-Real-IP": "198.51.100.77"})

        assert response.status_code == 200

    def test_spoofed_address_shares_bucket(self, client: TestClient):
        budget = int(settings.RATE_LIMIT_GENERAL.split("/")[0])
        for i in range(budget):
            client.get("/api/health", headers={"X-Forwarded-For": f"10.1.{i // 250}.{i % 250}"})

        response = client.get("/api/health", headers={"X-Real-IP": "198.51.100.77"})

        assert response.status_code == 429


class TestLifespan:
    def test_startup_creates_upload_dir(self, tmp_path, monkeypatch):
        from main import app

        upload_dir = tmp_path / "nested" / "uploads"
        monkeypatch.setattr(settings, "UPLOAD_DIR", str(upload_dir))

        with TestClient(app):
            assert upload_dir.is_dir()
