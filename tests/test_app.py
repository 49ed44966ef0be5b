"""Tests for the FastAPI application factory, health check and error bodies."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from pm_web_svc.api.app import app as module_app, create_app
from pm_web_svc.database import Database


class TestCreateApp:
    """Test cases for create_app."""

    def test_module_level_app(self):
        assert isinstance(module_app, FastAPI)
        paths = {getattr(route, "path", None) for route in module_app.routes}
        assert "/health" in paths
        assert "/api/kanban/cards" in paths
        assert "/api/projects/kanban" in paths
        assert "/api/portfolios/{item_id}" in paths
        assert "/api/user/kanban/boards" in paths

    def test_provided_database_is_attached(self, database: Database):
        app = create_app(database)

        with TestClient(app):
            assert app.state.database is database

    def test_lifespan_creates_owned_database(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
        app = create_app()

        with TestClient(app) as client:
            assert isinstance(app.state.database, Database)
            assert client.get("/api/users").json() == []


class TestHealthCheck:
    """Test cases for GET /health."""

    def test_healthy(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}

    def test_unhealthy_when_database_unreachable(self, client: TestClient, database: Database, monkeypatch):
        monkeypatch.setattr(database, "check_connection", lambda: False)

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy", "database": "disconnected"}


class TestErrorBodies:
    """Every error response carries an ``error`` field."""

    def test_unknown_route(self, client: TestClient):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_malformed_json(self, client: TestClient):
        response = client.post(
            "/api/tasks", content="{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "error" in response.json()
