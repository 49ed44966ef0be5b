"""Unit tests for the program and project service layer."""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from pm_web_svc.models import Portfolio, Priority, Program, Project, User, WorkStatus
from pm_web_svc.schemas.work_item import (
    PortfolioCreate, PortfolioUpdate, ProgramCreate, ProjectCreate, ProjectUpdate, WorkItemStatusMove
)
from pm_web_svc.services import work_item_service
from pm_web_svc.services.errors import NotFoundError, ValidationError


@pytest.fixture
def team(db_session: Session, user: User):
    members = [
        User(id="u2", name="Grace Hopper", email="grace@example.com"),
        User(id="u3", name="Alan Turing", email="alan@example.com"),
    ]
    db_session.add_all(members)
    db_session.commit()
    return members


def _create_project(db_session, name, **kwargs):
    payload = ProjectCreate(name=name, created_by="u1", **kwargs)
    return work_item_service.create_work_item(db_session, Project, payload)


class TestCreateWorkItem:
    """Test cases for creating programs and projects."""

    def test_create_program_with_defaults(self, db_session: Session, user: User):
        result = work_item_service.create_work_item(
            db_session, Program, ProgramCreate(name="Platform", created_by=user.id)
        )

        assert result["name"] == "Platform"
        assert result["methodology"] == "agile"
        assert result["status"] == "active"
        assert result["priority"] == "medium"
        assert result["progress"] == 0
        assert result["budget"] == 0.0
        assert result["tags"] == []
        assert result["team_members"] == []

    def test_create_project_with_team_and_program(self, db_session: Session, team):
        program = work_item_service.create_work_item(
            db_session, Program, ProgramCreate(name="Platform", created_by="u1")
        )

        result = _create_project(
            db_session,
            "Billing",
            program_id=program["id"],
            team_member_ids=["u2", "u3"],
            tags=["finance"],
            start_date=date(2024, 1, 1),
            due_date=date(2024, 6, 30),
        )

        assert result["program_id"] == program["id"]
        assert sorted(member["name"] for member in result["team_members"]) == ["Alan Turing", "Grace Hopper"]
        assert result["tags"] == ["finance"]
        assert result["due_date"] == "2024-06-30"

    def test_unknown_creator(self, db_session: Session):
        with pytest.raises(ValidationError, match="Invalid user ID"):
            work_item_service.create_work_item(
                db_session, Program, ProgramCreate(name="Platform", created_by="ghost")
            )

    def test_unknown_team_member(self, db_session: Session, user: User):
        with pytest.raises(ValidationError, match="Unknown team member IDs"):
            _create_project(db_session, "Billing", team_member_ids=["u9"])

    def test_unknown_program(self, db_session: Session, user: User):
        with pytest.raises(NotFoundError, match="Program with ID p404 not found"):
            _create_project(db_session, "Billing", program_id="p404")


class TestListAndUpdateWorkItems:
    """Test cases for listing, updating and deleting work items."""

    def test_list_filters(self, db_session: Session, user: User):
        _create_project(db_session, "Alpha", methodology="waterfall")
        _create_project(db_session, "Beta", status="blocked")

        names = lambda items: sorted(item["name"] for item in items)
        assert names(work_item_service.list_work_items(db_session, Project)) == ["Alpha", "Beta"]
        assert names(work_item_service.list_work_items(db_session, Project, methodology="waterfall")) == ["Alpha"]
        assert names(work_item_service.list_work_items(db_session, Project, status="blocked")) == ["Beta"]
        assert names(work_item_service.list_work_items(db_session, Project, status="all")) == ["Alpha", "Beta"]

    def test_methodology_takes_precedence_over_status(self, db_session: Session, user: User):
        _create_project(db_session, "Alpha", methodology="waterfall")

        result = work_item_service.list_work_items(
            db_session, Project, methodology="waterfall", status="blocked"
        )

        assert [item["name"] for item in result] == ["Alpha"]

    def test_invalid_filter_value(self, db_session: Session):
        with pytest.raises(ValidationError):
            work_item_service.list_work_items(db_session, Project, status="sleeping")

    def test_partial_update(self, db_session: Session, team):
        project = _create_project(db_session, "Billing", description="Invoices", team_member_ids=["u2"])

        result = work_item_service.update_work_item(
            db_session, Project, project["id"], ProjectUpdate(progress=40, team_member_ids=["u3"])
        )

        assert result["progress"] == 40
        assert result["description"] == "Invoices"
        assert [member["id"] for member in result["team_members"]] == ["u3"]

    def test_update_rejects_inverted_dates(self, db_session: Session, user: User):
        project = _create_project(db_session, "Billing", start_date=date(2024, 5, 1))

        with pytest.raises(ValidationError, match="due_date cannot be before start_date"):
            work_item_service.update_work_item(
                db_session, Project, project["id"], ProjectUpdate(due_date=date(2024, 4, 1))
            )

    def test_update_missing(self, db_session: Session):
        with pytest.raises(NotFoundError):
            work_item_service.update_work_item(db_session, Project, "p404", ProjectUpdate(name="X"))

    def test_delete(self, db_session: Session, user: User):
        project = _create_project(db_session, "Billing")

        work_item_service.delete_work_item(db_session, Project, project["id"])

        assert db_session.get(Project, project["id"]) is None
        with pytest.raises(NotFoundError):
            work_item_service.get_work_item(db_session, Project, project["id"])


class TestKanbanView:
    """Test cases for the status-column view of work items."""

    def test_groups_and_stats(self, db_session: Session, user: User):
        _create_project(db_session, "Kickoff", progress=5, budget=100.0)
        _create_project(db_session, "Build", progress=50, budget=200.0, priority="urgent")
        _create_project(db_session, "Paused", status="on_hold", methodology="hybrid")
        _create_project(db_session, "Shipped", status="completed", progress=100)

        view = work_item_service.build_kanban_view(db_session, Project)

        columns = view["columns"]
        assert [item["name"] for item in columns["planning"]] == ["Kickoff"]
        assert [item["name"] for item in columns["active"]] == ["Build"]
        assert [item["name"] for item in columns["on_hold"]] == ["Paused"]
        assert columns["blocked"] == []
        assert [item["name"] for item in columns["completed"]] == ["Shipped"]

        stats = view["stats"]
        assert stats["total"] == 4
        assert stats["planning"] == 1
        assert stats["total_budget"] == 300.0
        assert stats["avg_progress"] == 39
        assert stats["methodology_breakdown"] == {"agile": 3, "waterfall": 0, "hybrid": 1}
        assert view["items"][0]["name"] == "Build"

    def test_priority_rank_covers_every_level(self):
        ranked = sorted(Priority, key=work_item_service.PRIORITY_RANK.__getitem__)

        assert ranked == [Priority.URGENT, Priority.HIGH, Priority.MEDIUM, Priority.LOW]

    def test_move_to_completed_sets_full_progress(self, db_session: Session, user: User):
        project = _create_project(db_session, "Build", progress=50)

        result = work_item_service.move_work_item(
            db_session, Project, WorkItemStatusMove(id=project["id"], new_status="completed")
        )

        assert result["status"] == "completed"
        assert result["progress"] == 100

    def test_move_to_active_keeps_progress_past_planning(self, db_session: Session, user: User):
        project = _create_project(db_session, "Build", status="on_hold")

        result = work_item_service.move_work_item(
            db_session, Project, WorkItemStatusMove(id=project["id"], new_status="active", new_progress=0)
        )

        assert result["status"] == "active"
        assert result["progress"] == 10
        assert db_session.get(Project, project["id"]).status == WorkStatus.ACTIVE

    def test_move_missing(self, db_session: Session):
        with pytest.raises(NotFoundError):
            work_item_service.move_work_item(
                db_session, Program, WorkItemStatusMove(id="p404", new_status="blocked")
            )


class TestPortfolios:
    """Test cases for portfolios and the projects they group."""

    def test_create_with_projects(self, db_session: Session, user: User):
        alpha = _create_project(db_session, "Alpha")
        beta = _create_project(db_session, "Beta")

        result = work_item_service.create_work_item(
            db_session,
            Portfolio,
            PortfolioCreate(name="Growth", created_by=user.id, project_ids=[alpha["id"], beta["id"]], tags=["2025"]),
        )

        assert sorted(project["name"] for project in result["projects"]) == ["Alpha", "Beta"]
        assert result["tags"] == ["2025"]
        assert db_session.get(Project, alpha["id"]).portfolio_id == result["id"]

    def test_create_with_unknown_project(self, db_session: Session, user: User):
        with pytest.raises(NotFoundError, match="Project with ID p404 not found"):
            work_item_service.create_work_item(
                db_session, Portfolio, PortfolioCreate(name="Growth", created_by=user.id, project_ids=["p404"])
            )

        assert db_session.query(Portfolio).count() == 0

    def test_update_replaces_projects(self, db_session: Session, user: User):
        alpha = _create_project(db_session, "Alpha")
        beta = _create_project(db_session, "Beta")
        portfolio = work_item_service.create_work_item(
            db_session, Portfolio, PortfolioCreate(name="Growth", created_by=user.id, project_ids=[alpha["id"]])
        )

        result = work_item_service.update_work_item(
            db_session, Portfolio, portfolio["id"], PortfolioUpdate(project_ids=[beta["id"]], progress=30)
        )

        assert [project["id"] for project in result["projects"]] == [beta["id"]]
        assert result["progress"] == 30
        assert db_session.get(Project, alpha["id"]).portfolio_id is None

    def test_update_without_project_ids_keeps_projects(self, db_session: Session, user: User):
        alpha = _create_project(db_session, "Alpha")
        portfolio = work_item_service.create_work_item(
            db_session, Portfolio, PortfolioCreate(name="Growth", created_by=user.id, project_ids=[alpha["id"]])
        )

        result = work_item_service.update_work_item(
            db_session, Portfolio, portfolio["id"], PortfolioUpdate(name="Scale")
        )

        assert result["name"] == "Scale"
        assert [project["id"] for project in result["projects"]] == [alpha["id"]]

    def test_delete_detaches_projects(self, db_session: Session, user: User):
        alpha = _create_project(db_session, "Alpha")
        portfolio = work_item_service.create_work_item(
            db_session, Portfolio, PortfolioCreate(name="Growth", created_by=user.id, project_ids=[alpha["id"]])
        )

        work_item_service.delete_work_item(db_session, Portfolio, portfolio["id"])

        project = db_session.get(Project, alpha["id"])
        assert project is not None
        assert project.portfolio_id is None

    def test_project_with_unknown_portfolio(self, db_session: Session, user: User):
        with pytest.raises(NotFoundError, match="Portfolio with ID pf404 not found"):
            _create_project(db_session, "Alpha", portfolio_id="pf404")
