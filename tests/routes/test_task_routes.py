"""Tests for task-related API routes.

This module contains tests for the task management API endpoints including
creation, retrieval, filtering, updating, deletion and comments.
"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import pm_web_svc.routes.task_routes
from pm_web_svc.models import Task


class TestCreateTaskEndpoint:
    """Test cases for POST /api/tasks."""

    def test_create_task(self, client: TestClient, user):
        response = client.post("/api/tasks", json={"title": "Draft release plan", "created_by": user.id, "priority": "high"})

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Draft release plan"
        assert data["priority"] == "high"
        assert data["status"] == "not_started"

    def test_missing_title(self, client: TestClient, user):
        response = client.post("/api/tasks", json={"created_by": user.id})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields: title", "fields": ["title"]}

    def test_blank_title(self, client: TestClient, user):
        response = client.post("/api/tasks", json={"title": "   ", "created_by": user.id})

        assert response.status_code == 400
        assert response.json()["fields"] == ["title"]

    def test_invalid_progress(self, client: TestClient, user):
        response = client.post("/api/tasks", json={"title": "Draft", "created_by": user.id, "progress": 140})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid fields: progress"


class TestReadTaskEndpoints:
    """Test cases for GET /api/tasks and GET /api/tasks/{task_id}."""

    def test_list_filters_by_status(self, client: TestClient, user):
        client.post("/api/tasks", json={"title": "Open", "created_by": user.id})
        client.post("/api/tasks", json={"title": "Done", "created_by": user.id, "status": "completed"})

        response = client.get("/api/tasks", params={"status": "completed"})

        assert response.status_code == 200
        assert [task["title"] for task in response.json()] == ["Done"]

    def test_list_rejects_unknown_status(self, client: TestClient):
        response = client.get("/api/tasks", params={"status": "Done"})

        assert response.status_code == 400
        assert response.json()["fields"] == ["status"]

    def test_get_missing_task(self, client: TestClient):
        response = client.get("/api/tasks/t404")

        assert response.status_code == 404
        assert response.json() == {"error": "Task with ID t404 not found"}


class TestUpdateDeleteTaskEndpoints:
    """Test cases for PUT and DELETE /api/tasks/{task_id}."""

    def test_update_task(self, client: TestClient, user):
        task_id = client.post("/api/tasks", json={"title": "Draft", "created_by": user.id}).json()["id"]

        response = client.put(f"/api/tasks/{task_id}", json={"status": "in_progress", "progress": 20})

        assert response.status_code == 200
        assert response.json()["status"] == "in_progress"
        assert response.json()["title"] == "Draft"

    def test_delete_task(self, client: TestClient, db_session: Session, user):
        task_id = client.post("/api/tasks", json={"title": "Draft", "created_by": user.id}).json()["id"]

        response = client.delete(f"/api/tasks/{task_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Task deleted successfully"}
        assert db_session.get(Task, task_id) is None

    def test_delete_nonexistent_task_returns_404(self, client: TestClient):
        response = client.delete("/api/tasks/t404")

        assert response.status_code == 404

    def test_delete_endpoint_handles_database_errors(self, client: TestClient, monkeypatch):
        """Test that unexpected service failures become a 500."""
        def mock_delete_task(task_id, db):
            raise Exception("Database connection failed")

        monkeypatch.setattr(pm_web_svc.routes.task_routes, "delete_task", mock_delete_task)

        response = client.delete("/api/tasks/t1")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestCommentEndpoints:
    """Test cases for /api/tasks/{task_id}/comments."""

    def test_add_and_list_comments(self, client: TestClient, user):
        task_id = client.post("/api/tasks", json={"title": "Draft", "created_by": user.id}).json()["id"]

        response = client.post(f"/api/tasks/{task_id}/comments", json={"content": "On it", "created_by": user.id})
        assert response.status_code == 201
        assert response.json()["creator"]["name"] == "Ada Lovelace"

        comments = client.get(f"/api/tasks/{task_id}/comments").json()
        assert [comment["content"] for comment in comments] == ["On it"]

        task = client.get(f"/api/tasks/{task_id}").json()
        assert [comment["content"] for comment in task["comments"]] == ["On it"]

    def test_comment_on_missing_task(self, client: TestClient, user):
        response = client.post("/api/tasks/t404/comments", json={"content": "Hi", "created_by": user.id})

        assert response.status_code == 404
