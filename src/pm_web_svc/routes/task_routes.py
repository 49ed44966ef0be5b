"""FastAPI routes for task-related operations.

This module implements REST API endpoints for task management including
creation, retrieval, updating, deletion and task comments.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.enums import Priority, TaskStatus
from ..schemas.common import MessageResponse
from ..schemas.task import CommentCreate, TaskCreate, TaskFilterParams, TaskUpdate
from ..services.task_service import (
    add_comment, create_task, delete_task, get_task, list_comments, list_tasks, update_task
)
from .errors import to_http_exception

logger = logging.getLogger(__name__)

task_router = APIRouter(prefix="/tasks", tags=["tasks"])


@task_router.get("")
def list_tasks_endpoint(
    project_id: Optional[str] = None,
    assignee_id: Optional[str] = None,
    status: Optional[TaskStatus] = None,
    priority: Optional[Priority] = None,
    db: Session = Depends(get_db)
) -> List[Dict[str, Any]]:
    """List tasks filtered by simple equality on the given fields."""
    filters = TaskFilterParams(
        project_id=project_id, assignee_id=assignee_id, status=status, priority=priority
    )
    try:
        return list_tasks(db, filters)
    except Exception as e:
        raise to_http_exception(e)


@task_router.post("", status_code=201)
def create_task_endpoint(payload: TaskCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    logger.info(f"POST /tasks request - title: {payload.title}")
    try:
        return create_task(payload, db)
    except Exception as e:
        raise to_http_exception(e)


@task_router.get("/{task_id}")
def get_task_endpoint(task_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return get_task(db, task_id)
    except Exception as e:
        raise to_http_exception(e)


@task_router.put("/{task_id}")
def update_task_endpoint(task_id: str, payload: TaskUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    logger.info(f"PUT /tasks/{task_id} request")
    try:
        return update_task(task_id, payload, db)
    except Exception as e:
        raise to_http_exception(e)


@task_router.delete("/{task_id}", response_model=MessageResponse)
def delete_task_endpoint(task_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    """Delete a task by ID.

    Raises:
        HTTPException: 404 if task not found, 500 for server errors
    """
    logger.info(f"DELETE /tasks/{task_id} request")
    try:
        delete_task(task_id, db)
        return MessageResponse(message="Task deleted successfully")
    except Exception as e:
        raise to_http_exception(e)


@task_router.get("/{task_id}/comments")
def list_comments_endpoint(task_id: str, db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    try:
        return list_comments(db, task_id)
    except Exception as e:
        raise to_http_exception(e)


@task_router.post("/{task_id}/comments", status_code=201)
def add_comment_endpoint(task_id: str, payload: CommentCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    logger.info(f"POST /tasks/{task_id}/comments request")
    try:
        return add_comment(task_id, payload, db)
    except Exception as e:
        raise to_http_exception(e)
