"""Tests for the user and board template API routes."""

from fastapi.testclient import TestClient


class TestUserEndpoints:
    """Test cases for /api/users."""

    def test_create_and_list_users(self, client: TestClient):
        response = client.post("/api/users", json={"name": "Grace Hopper", "email": "grace@example.com"})

        assert response.status_code == 201
        assert response.json()["role"] == "Team Member"
        assert [u["email"] for u in client.get("/api/users").json()] == ["grace@example.com"]

    def test_duplicate_email(self, client: TestClient, user):
        response = client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Email ada@example.com is already registered"}

    def test_invalid_email(self, client: TestClient):
        response = client.post("/api/users", json={"name": "Ada", "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["fields"] == ["email"]


class TestBoardTemplateEndpoints:
    """Test cases for /api/board-templates."""

    def test_create_and_list(self, client: TestClient, user):
        response = client.post("/api/board-templates", json={
            "name": "Scrum",
            "category": "software",
            "is_public": True,
            "created_by": user.id,
            "columns": [{"name": "Backlog"}, {"name": "Sprint"}],
        })

        assert response.status_code == 201
        assert [c["order"] for c in response.json()["columns"]] == [0, 1]

        templates = client.get("/api/board-templates", params={"category": "software"}).json()
        assert [t["name"] for t in templates] == ["Scrum"]

    def test_template_requires_columns(self, client: TestClient, user):
        response = client.post("/api/board-templates", json={
            "name": "Empty",
            "category": "software",
            "created_by": user.id,
            "columns": [],
        })

        assert response.status_code == 400
        assert response.json()["fields"] == ["columns"]

    def test_board_from_template(self, client: TestClient, user):
        template_id = client.post("/api/board-templates", json={
            "name": "Scrum",
            "category": "software",
            "created_by": user.id,
            "columns": [{"name": "Backlog"}, {"name": "Sprint", "max_wip_limit": 4}],
        }).json()["id"]

        response = client.post("/api/kanban/boards", json={
            "name": "Team board",
            "created_by": user.id,
            "template_id": template_id,
        })

        assert response.status_code == 201
        assert [c["name"] for c in response.json()["columns"]] == ["Backlog", "Sprint"]
