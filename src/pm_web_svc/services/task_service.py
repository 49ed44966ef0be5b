"""Task service layer for business logic and data persistence.

This module implements task creation, retrieval, partial updates and
deletion, plus the comment thread attached to each task.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.task import Task, TaskComment
from ..models.user import User
from ..schemas.task import CommentCreate, TaskCreate, TaskFilterParams, TaskUpdate
from .errors import NotFoundError, ValidationError
from .references import check_references

logger = logging.getLogger(__name__)


def _check_references(db: Session, fields: Dict[str, Any], task_id: str | None = None) -> None:
    """Verify that referenced users, project and parent task exist.

    Raises:
        ValidationError: When a referenced user is unknown or a task would
                         become its own parent
        NotFoundError: When the project or parent task does not exist
    """
    check_references(db, fields)

    parent_task_id = fields.get('parent_task_id')
    if parent_task_id is not None:
        if parent_task_id == task_id:
            raise ValidationError("A task cannot be its own parent")
        if db.get(Task, parent_task_id) is None:
            raise NotFoundError("Task", parent_task_id)


def create_task(payload: TaskCreate, db: Session) -> Dict[str, Any]:
    """Create a new task with validation and database persistence.

    Args:
        payload: TaskCreate Pydantic model with validated input data
        db: SQLAlchemy database session

    Returns:
        Dictionary representation of the created task

    Raises:
        ValidationError: When the creator or assignee is not a known user
        NotFoundError: When the project or parent task does not exist
    """
    logger.info(f"Creating task with title: {payload.title}")

    try:
        fields = payload.model_dump()
        _check_references(db, fields)
        fields['tags'] = fields['tags'] or None

        task = Task(**fields)

        db.add(task)
        db.commit()
        db.refresh(task)
        logger.info(f"Successfully created task with ID: {task.id}")

        return task.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def get_task(db: Session, task_id: str) -> Dict[str, Any]:
    """Retrieve a task with its comments.

    Raises:
        NotFoundError: When the task does not exist
    """
    logger.info(f"Retrieving task with ID: {task_id}")

    task = db.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task", task_id)
    return task.to_dict(include_comments=True)


def list_tasks(db: Session, filters: TaskFilterParams) -> List[Dict[str, Any]]:
    """List tasks matching equality filters, most recently updated first."""
    logger.info(f"Listing tasks with filters: project_id={filters.project_id}, "
                f"assignee_id={filters.assignee_id}, status={filters.status}, "
                f"priority={filters.priority}")

    stmt = select(Task)

    conditions = []
    if filters.project_id is not None:
        conditions.append(Task.project_id == filters.project_id)
    if filters.assignee_id is not None:
        conditions.append(Task.assignee_id == filters.assignee_id)
    if filters.status is not None:
        conditions.append(Task.status == filters.status)
    if filters.priority is not None:
        conditions.append(Task.priority == filters.priority)

    if conditions:
        stmt = stmt.where(*conditions)

    stmt = stmt.order_by(Task.updated_at.desc(), Task.created_at.desc())
    tasks = db.execute(stmt).scalars().all()

    logger.info(f"Successfully retrieved {len(tasks)} tasks")
    return [task.to_dict() for task in tasks]


def update_task(task_id: str, payload: TaskUpdate, db: Session) -> Dict[str, Any]:
    """Update an existing task with partial field changes.

    Only fields present in the request are touched. ``title``, ``status``,
    ``priority`` and ``progress`` cannot be cleared; an explicit null for
    them is ignored. References (assignee, project, parent task) can be
    cleared with null.

    Raises:
        NotFoundError: When the task, project or parent task does not exist
        ValidationError: When a referenced user is unknown
    """
    logger.info(f"Updating task with ID: {task_id}")

    try:
        task = db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task", task_id)

        updates = payload.model_dump(exclude_unset=True)
        _check_references(db, updates, task_id=task_id)

        for field_name, value in updates.items():
            if field_name in ('title', 'status', 'priority', 'progress'):
                if value is not None:
                    setattr(task, field_name, value)
            elif field_name == 'tags':
                task.tags = value or None
            else:
                setattr(task, field_name, value)

        db.commit()  # The before_update event refreshes updated_at
        db.refresh(task)

        logger.info(f"Successfully updated task with ID: {task.id}")
        return task.to_dict()

    except Exception as e:
        db.rollback()
        logger.error(e, exc_info=True)
        raise


def delete_task(task_id: str, db: Session) -> None:
    """Delete a task and its comments.

    Raises:
        NotFoundError: When the task does not exist
    """
    logger.info(f"Deleting task with ID: {task_id}")

    try:
        task = db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task", task_id)

        db.delete(task)
        db.commit()
        logger.info(f"Successfully deleted task with ID: {task_id}")

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def list_comments(db: Session, task_id: str) -> List[Dict[str, Any]]:
    """List a task's comments, newest first."""
    logger.info(f"Listing comments for task {task_id}")

    stmt = (
        select(TaskComment)
        .where(TaskComment.task_id == task_id)
        .order_by(TaskComment.created_at.desc())
    )
    return [comment.to_dict() for comment in db.execute(stmt).scalars().all()]


def add_comment(task_id: str, payload: CommentCreate, db: Session) -> Dict[str, Any]:
    """Add a comment to a task.

    Raises:
        NotFoundError: When the task does not exist
        ValidationError: When the author is not a known user
    """
    logger.info(f"Adding comment to task {task_id}")

    try:
        if db.get(Task, task_id) is None:
            raise NotFoundError("Task", task_id)
        if db.get(User, payload.created_by) is None:
            raise ValidationError(f"Invalid user ID: {payload.created_by}")

        comment = TaskComment(task_id=task_id, content=payload.content, created_by=payload.created_by)
        db.add(comment)
        db.commit()
        db.refresh(comment)
        logger.info(f"Successfully created comment with ID: {comment.id}")

        return comment.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise
