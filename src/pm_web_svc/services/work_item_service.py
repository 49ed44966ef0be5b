"""Service layer shared by portfolios, programs and projects.

All three entities have the same columns, so every function takes the ORM
model class (Portfolio, Program or Project) as its first argument.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.enums import Methodology, Priority, WorkStatus
from ..models.user import User
from ..models.work_item import Portfolio, Program, Project, WorkItemMixin
from ..schemas.work_item import WorkItemCreate, WorkItemStatusMove, WorkItemUpdate
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

KANBAN_GROUPS = ("planning", "active", "on_hold", "blocked", "completed")

# Most urgent first
PRIORITY_RANK = {priority: rank for rank, priority in enumerate(reversed(list(Priority)))}

# Active work below this progress shows up in the planning column
PLANNING_PROGRESS_THRESHOLD = 10


def _entity_name(model: Type[WorkItemMixin]) -> str:
    return model.__name__


def _resolve_users(db: Session, user_ids: List[str]) -> List[User]:
    """Load users by id, rejecting unknown ids."""
    if not user_ids:
        return []
    users = db.execute(select(User).where(User.id.in_(user_ids))).scalars().all()
    found = {user.id for user in users}
    missing = [user_id for user_id in user_ids if user_id not in found]
    if missing:
        raise ValidationError(f"Unknown team member IDs: {missing}")
    return list(users)


def _check_parent(db: Session, model: Type[WorkItemMixin], parent_id: Optional[str]) -> None:
    if parent_id is not None and db.get(model, parent_id) is None:
        raise NotFoundError(_entity_name(model), parent_id)


def _resolve_projects(db: Session, project_ids: List[str]) -> List[Project]:
    """Load projects by id; the first unknown id raises NotFoundError."""
    if not project_ids:
        return []
    projects = db.execute(select(Project).where(Project.id.in_(project_ids))).scalars().all()
    found = {project.id for project in projects}
    for project_id in project_ids:
        if project_id not in found:
            raise NotFoundError("Project", project_id)
    return list(projects)


def list_work_items(
    db: Session,
    model: Type[WorkItemMixin],
    methodology: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """List portfolios, programs or projects, most recently updated first.

    ``methodology`` takes precedence over ``status``; the value ``all`` (or
    an empty value) disables a filter.

    Raises:
        ValidationError: When a filter value is not a known enum value
    """
    logger.info(f"Listing {model.__tablename__} (methodology={methodology}, status={status})")

    stmt = select(model)
    try:
        if methodology and methodology != 'all':
            stmt = stmt.where(model.methodology == Methodology(methodology))
        elif status and status != 'all':
            stmt = stmt.where(model.status == WorkStatus(status))
    except ValueError as e:
        raise ValidationError(str(e)) from e

    stmt = stmt.order_by(model.updated_at.desc())
    items = db.execute(stmt).scalars().all()

    logger.info(f"Successfully retrieved {len(items)} {model.__tablename__}")
    return [item.to_dict() for item in items]


def get_work_item(db: Session, model: Type[WorkItemMixin], item_id: str) -> Dict[str, Any]:
    """Retrieve one portfolio, program or project.

    Raises:
        NotFoundError: When the record does not exist
    """
    item = db.get(model, item_id)
    if item is None:
        raise NotFoundError(_entity_name(model), item_id)
    return item.to_dict()


def create_work_item(db: Session, model: Type[WorkItemMixin], payload: WorkItemCreate) -> Dict[str, Any]:
    """Create a portfolio, program or project with its team.

    A portfolio takes over the projects named in ``project_ids``.

    Raises:
        ValidationError: When the creator or a team member does not exist
        NotFoundError: When a project references a missing program or
                       portfolio, or a portfolio names a missing project
    """
    logger.info(f"Creating {_entity_name(model)} with name: {payload.name}")

    try:
        if db.get(User, payload.created_by) is None:
            raise ValidationError(f"Invalid user ID: {payload.created_by}")

        fields = payload.model_dump(exclude={'team_member_ids', 'project_ids'})
        if model is Project:
            _check_parent(db, Program, fields.get('program_id'))
            _check_parent(db, Portfolio, fields.get('portfolio_id'))
        fields['tags'] = fields['tags'] or None

        item = model(**fields)
        item.team_members = _resolve_users(db, payload.team_member_ids)
        if model is Portfolio:
            item.projects = _resolve_projects(db, payload.project_ids)

        db.add(item)
        db.commit()
        db.refresh(item)
        logger.info(f"Successfully created {_entity_name(model)} with ID: {item.id}")

        return item.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def update_work_item(
    db: Session, model: Type[WorkItemMixin], item_id: str, payload: WorkItemUpdate
) -> Dict[str, Any]:
    """Apply a partial update; fields absent from the payload are left unchanged.

    Raises:
        NotFoundError: When the record, a referenced parent or an attached
                       project does not exist
        ValidationError: When a team member does not exist or dates are inverted
    """
    logger.info(f"Updating {_entity_name(model)} with ID: {item_id}")

    try:
        item = db.get(model, item_id)
        if item is None:
            raise NotFoundError(_entity_name(model), item_id)

        updates = payload.model_dump(exclude_unset=True)
        for field_name, value in updates.items():
            if field_name == 'team_member_ids':
                item.team_members = _resolve_users(db, value or [])
            elif field_name == 'tags':
                item.tags = value or None
            elif field_name == 'project_ids':
                item.projects = _resolve_projects(db, value or [])
            elif field_name == 'program_id':
                _check_parent(db, Program, value)
                item.program_id = value
            elif field_name == 'portfolio_id':
                _check_parent(db, Portfolio, value)
                item.portfolio_id = value
            elif field_name in ('name', 'methodology', 'status', 'priority', 'progress', 'budget'):
                # Non-nullable columns ignore explicit nulls
                if value is not None:
                    setattr(item, field_name, value)
            else:
                setattr(item, field_name, value)

        if item.start_date and item.due_date and item.due_date < item.start_date:
            raise ValidationError("due_date cannot be before start_date")

        db.commit()
        db.refresh(item)
        logger.info(f"Successfully updated {_entity_name(model)} with ID: {item.id}")

        return item.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def delete_work_item(db: Session, model: Type[WorkItemMixin], item_id: str) -> None:
    """Permanently delete a portfolio, program or project.

    Projects of a deleted portfolio or program are detached, not deleted.

    Raises:
        NotFoundError: When the record does not exist
    """
    logger.info(f"Deleting {_entity_name(model)} with ID: {item_id}")

    try:
        item = db.get(model, item_id)
        if item is None:
            raise NotFoundError(_entity_name(model), item_id)

        db.delete(item)
        db.commit()
        logger.info(f"Successfully deleted {_entity_name(model)} with ID: {item_id}")

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def _kanban_group(item: WorkItemMixin) -> str:
    if item.status == WorkStatus.ACTIVE:
        return "planning" if item.progress < PLANNING_PROGRESS_THRESHOLD else "active"
    return item.status.value


def build_kanban_view(db: Session, model: Type[WorkItemMixin]) -> Dict[str, Any]:
    """Group programs or projects into status columns and compute summary stats.

    Returns:
        Dictionary with ``columns`` (group name -> records), ``stats`` and the
        flat ``items`` list, ordered by priority then most recent update
    """
    logger.info(f"Building kanban view for {model.__tablename__}")

    items = db.execute(select(model).order_by(model.updated_at.desc())).scalars().all()
    items = sorted(items, key=lambda item: PRIORITY_RANK[item.priority])

    columns = {group: [] for group in KANBAN_GROUPS}
    for item in items:
        columns[_kanban_group(item)].append(item.to_dict())

    total = len(items)
    stats = {
        "total": total,
        **{group: len(records) for group, records in columns.items()},
        "total_budget": sum(item.budget for item in items),
        "avg_progress": round(sum(item.progress for item in items) / total) if total else 0,
        "methodology_breakdown": {
            methodology.value: sum(1 for item in items if item.methodology == methodology)
            for methodology in Methodology
        },
    }

    return {
        "columns": columns,
        "stats": stats,
        "items": [item.to_dict() for item in items],
    }


def move_work_item(db: Session, model: Type[WorkItemMixin], move: WorkItemStatusMove) -> Dict[str, Any]:
    """Move a program or project to a new status column.

    Completing an item forces its progress to 100. Moving to active with an
    explicit progress keeps that progress at or above the planning
    threshold. Any other explicit progress is applied as given.

    Raises:
        NotFoundError: When the record does not exist
    """
    logger.info(f"Moving {_entity_name(model)} {move.id} to status {move.new_status.value}")

    try:
        item = db.get(model, move.id)
        if item is None:
            raise NotFoundError(_entity_name(model), move.id)

        item.status = move.new_status
        if move.new_status == WorkStatus.COMPLETED:
            item.progress = 100
        elif move.new_status == WorkStatus.ACTIVE and move.new_progress is not None:
            item.progress = max(PLANNING_PROGRESS_THRESHOLD, move.new_progress)
        elif move.new_progress is not None:
            item.progress = move.new_progress

        db.commit()
        db.refresh(item)
        return item.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise
