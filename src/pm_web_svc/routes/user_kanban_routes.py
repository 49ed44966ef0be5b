"""FastAPI routes for personal kanban boards and columns.

Reads and deletes take the acting user from the ``user_id`` query parameter,
falling back to the configured default admin; writes carry it in the body.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..schemas.common import SuccessResponse
from ..schemas.user_kanban import (
    UserBoardCreate, UserBoardUpdate, UserColumnBatchUpdate, UserColumnCreate, UserColumnUpdate
)
from ..services import user_kanban_service
from .errors import to_http_exception

logger = logging.getLogger(__name__)

user_kanban_router = APIRouter(prefix="/user/kanban", tags=["user-kanban"])


def _acting_user(user_id: Optional[str]) -> str:
    return user_id or config.DEFAULT_ADMIN_USER_ID


@user_kanban_router.get("/boards")
def list_boards_endpoint(user_id: Optional[str] = None, db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    """List the user's boards, creating a default board for a user who has none."""
    try:
        return user_kanban_service.list_boards(db, _acting_user(user_id))
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.post("/boards", status_code=201)
def create_board_endpoint(payload: UserBoardCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    logger.info(f"POST /user/kanban/boards request - user: {payload.user_id}, name: {payload.name}")
    try:
        return user_kanban_service.create_board(payload, db)
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.get("/boards/{board_id}")
def get_board_endpoint(board_id: str, user_id: Optional[str] = None, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return user_kanban_service.get_board(db, board_id, _acting_user(user_id))
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.put("/boards/{board_id}")
def update_board_endpoint(board_id: str, payload: UserBoardUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return user_kanban_service.update_board(board_id, payload, db)
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.delete("/boards/{board_id}", response_model=SuccessResponse)
def delete_board_endpoint(board_id: str, user_id: Optional[str] = None, db: Session = Depends(get_db)) -> SuccessResponse:
    logger.info(f"DELETE /user/kanban/boards/{board_id} request")
    try:
        user_kanban_service.delete_board(board_id, _acting_user(user_id), db)
        return SuccessResponse()
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.post("/columns", status_code=201)
def create_column_endpoint(payload: UserColumnCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return user_kanban_service.create_column(payload, db)
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.put("/columns")
def update_columns_endpoint(payload: UserColumnBatchUpdate, db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    """Apply a batch of column edits, usually a reorder, all or nothing."""
    logger.info(f"PUT /user/kanban/columns request - {len(payload.columns)} columns")
    try:
        return user_kanban_service.update_columns(payload, db)
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.get("/columns/{column_id}")
def get_column_endpoint(column_id: str, user_id: Optional[str] = None, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return user_kanban_service.get_column(db, column_id, _acting_user(user_id))
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.put("/columns/{column_id}")
def update_column_endpoint(column_id: str, payload: UserColumnUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return user_kanban_service.update_column(column_id, payload, db)
    except Exception as e:
        raise to_http_exception(e)


@user_kanban_router.delete("/columns/{column_id}", response_model=SuccessResponse)
def delete_column_endpoint(column_id: str, user_id: Optional[str] = None, db: Session = Depends(get_db)) -> SuccessResponse:
    logger.info(f"DELETE /user/kanban/columns/{column_id} request")
    try:
        user_kanban_service.delete_column(column_id, _acting_user(user_id), db)
        return SuccessResponse()
    except Exception as e:
        raise to_http_exception(e)
