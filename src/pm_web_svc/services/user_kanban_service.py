"""Personal kanban board and column service layer.

Every lookup is scoped to the acting user: a board or column that exists
but belongs to someone else raises the same NotFoundError as a missing one.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from .. import config
from ..models.board_template import BoardTemplate
from ..models.user import User
from ..models.user_kanban import UserKanbanBoard, UserKanbanColumn
from ..schemas.user_kanban import (
    UserBoardCreate, UserBoardUpdate, UserColumnBatchUpdate, UserColumnCreate, UserColumnUpdate
)
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_COLOR = "#64748b"

DEFAULT_COLUMNS = [
    {"name": "Planning", "color": "#3b82f6", "icon": "📝", "order": 0, "status_mapping": "active"},
    {"name": "In Progress", "color": "#10b981", "icon": "⚡", "order": 1, "status_mapping": "active"},
    {"name": "Completed", "color": "#6366f1", "icon": "✅", "order": 2, "status_mapping": "completed"},
]

DEFAULT_BOARD_NAME = "My Project Board"
DEFAULT_BOARD_DESCRIPTION = "Personal project management board"

# Columns that reject an explicit null on update
NON_NULLABLE_COLUMN_FIELDS = ('name', 'color', 'order', 'is_collapsed')


def _board_query(user_id: str):
    return (
        select(UserKanbanBoard)
        .where(UserKanbanBoard.user_id == user_id)
        .options(selectinload(UserKanbanBoard.columns))
        .execution_options(populate_existing=True)
    )


def _owned_board(db: Session, board_id: str, user_id: str) -> UserKanbanBoard:
    board = db.execute(_board_query(user_id).where(UserKanbanBoard.id == board_id)).scalar_one_or_none()
    if board is None:
        raise NotFoundError("Board", board_id)
    return board


def _owned_column(db: Session, column_id: str, user_id: str) -> UserKanbanColumn:
    column = db.execute(
        select(UserKanbanColumn)
        .join(UserKanbanColumn.board)
        .where(UserKanbanColumn.id == column_id, UserKanbanBoard.user_id == user_id)
    ).scalar_one_or_none()
    if column is None:
        raise NotFoundError("Column", column_id)
    return column


def _template_columns(template: BoardTemplate) -> List[UserKanbanColumn]:
    columns = []
    for index, definition in enumerate(template.columns or []):
        columns.append(UserKanbanColumn(
            name=definition["name"],
            color=definition.get("color") or DEFAULT_COLUMN_COLOR,
            icon=definition.get("icon"),
            order=definition.get("order", index),
            status_mapping=definition.get("status_mapping"),
            max_wip_limit=definition.get("max_wip_limit"),
        ))
    return columns


def _apply_column_changes(column: UserKanbanColumn, changes: Dict[str, Any]) -> None:
    for field_name, value in changes.items():
        if field_name in NON_NULLABLE_COLUMN_FIELDS and value is None:
            continue
        setattr(column, field_name, value)


# Boards

def list_boards(db: Session, user_id: str) -> List[Dict[str, Any]]:
    """List a user's boards, default board first, then most recently updated.

    A known user without any board gets one created from the template named
    by DEFAULT_BOARD_TEMPLATE_ID, when that template exists.
    """
    logger.info(f"Listing personal boards for user {user_id}")

    stmt = _board_query(user_id).order_by(
        UserKanbanBoard.is_default.desc(), UserKanbanBoard.updated_at.desc()
    )
    boards = db.execute(stmt).scalars().all()
    if boards:
        return [board.to_dict() for board in boards]

    template = db.get(BoardTemplate, config.DEFAULT_BOARD_TEMPLATE_ID)
    if template is None or db.get(User, user_id) is None:
        return []

    try:
        board = UserKanbanBoard(
            user_id=user_id,
            name=DEFAULT_BOARD_NAME,
            description=DEFAULT_BOARD_DESCRIPTION,
            is_default=True,
            template_id=template.id,
            settings=template.settings,
        )
        board.columns = _template_columns(template)

        db.add(board)
        db.commit()
        db.refresh(board)
        logger.info(f"Created default board {board.id} for user {user_id}")

        return [board.to_dict()]

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def get_board(db: Session, board_id: str, user_id: str) -> Dict[str, Any]:
    return _owned_board(db, board_id, user_id).to_dict()


def create_board(payload: UserBoardCreate, db: Session) -> Dict[str, Any]:
    """Create a personal board with template or default columns.

    Raises:
        ValidationError: When the user does not exist
        NotFoundError: When the template does not exist
    """
    logger.info(f"Creating personal board '{payload.name}' for user {payload.user_id}")

    try:
        if db.get(User, payload.user_id) is None:
            raise ValidationError("Invalid user ID")

        template = None
        if payload.template_id is not None:
            template = db.get(BoardTemplate, payload.template_id)
            if template is None:
                raise NotFoundError("Board template", payload.template_id)

        board = UserKanbanBoard(
            user_id=payload.user_id,
            name=payload.name,
            description=payload.description,
            template_id=payload.template_id,
            settings=payload.settings or (template.settings if template else None),
        )
        if template is not None:
            board.columns = _template_columns(template)
        else:
            board.columns = [UserKanbanColumn(**definition) for definition in DEFAULT_COLUMNS]

        db.add(board)
        db.commit()
        db.refresh(board)
        logger.info(f"Successfully created personal board with ID: {board.id}")

        return board.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def update_board(board_id: str, payload: UserBoardUpdate, db: Session) -> Dict[str, Any]:
    logger.info(f"Updating personal board {board_id} for user {payload.user_id}")

    try:
        board = _owned_board(db, board_id, payload.user_id)
        for field_name, value in payload.model_dump(exclude_unset=True, exclude={'user_id'}).items():
            if field_name == 'name' and value is None:
                continue
            setattr(board, field_name, value)

        db.commit()
        db.refresh(board)
        return board.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def delete_board(board_id: str, user_id: str, db: Session) -> None:
    """Delete a personal board and its columns.

    Raises:
        NotFoundError: When the user has no such board
        ValidationError: When it is the user's only board and their default
    """
    logger.info(f"Deleting personal board {board_id} for user {user_id}")

    try:
        board = _owned_board(db, board_id, user_id)

        if board.is_default:
            board_count = db.execute(
                select(func.count(UserKanbanBoard.id)).where(UserKanbanBoard.user_id == user_id)
            ).scalar()
            if board_count <= 1:
                raise ValidationError("Cannot delete the last board. Create another board first.")

        db.delete(board)
        db.commit()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


# Columns

def get_column(db: Session, column_id: str, user_id: str) -> Dict[str, Any]:
    column = _owned_column(db, column_id, user_id)
    data = column.to_dict()
    data['board'] = {'id': column.board.id, 'name': column.board.name, 'user_id': column.board.user_id}
    return data


def create_column(payload: UserColumnCreate, db: Session) -> Dict[str, Any]:
    """Append a column after the board's last column."""
    logger.info(f"Creating personal column '{payload.name}' on board {payload.board_id}")

    try:
        board = _owned_board(db, payload.board_id, payload.user_id)
        next_order = max((column.order for column in board.columns), default=-1) + 1

        column = UserKanbanColumn(
            name=payload.name,
            color=payload.color or DEFAULT_COLUMN_COLOR,
            icon=payload.icon,
            order=next_order,
            status_mapping=payload.status_mapping,
            max_wip_limit=payload.max_wip_limit,
            settings=payload.settings,
        )
        board.columns.append(column)

        db.commit()
        db.refresh(column)
        logger.info(f"Successfully created personal column with ID: {column.id}")

        return column.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def update_column(column_id: str, payload: UserColumnUpdate, db: Session) -> Dict[str, Any]:
    logger.info(f"Updating personal column {column_id} for user {payload.user_id}")

    try:
        column = _owned_column(db, column_id, payload.user_id)
        _apply_column_changes(column, payload.model_dump(exclude_unset=True, exclude={'user_id'}))

        db.commit()
        db.refresh(column)
        return column.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def update_columns(payload: UserColumnBatchUpdate, db: Session) -> List[Dict[str, Any]]:
    """Apply several column edits in one transaction.

    Every column must belong to one of the user's boards; otherwise nothing
    is changed.

    Raises:
        NotFoundError: Naming the first column the user does not own
    """
    logger.info(f"Updating {len(payload.columns)} personal columns for user {payload.user_id}")

    try:
        column_ids = [item.id for item in payload.columns]
        owned = db.execute(
            select(UserKanbanColumn)
            .join(UserKanbanColumn.board)
            .where(UserKanbanColumn.id.in_(column_ids), UserKanbanBoard.user_id == payload.user_id)
        ).scalars().all()
        columns_by_id = {column.id: column for column in owned}

        for item in payload.columns:
            column = columns_by_id.get(item.id)
            if column is None:
                raise NotFoundError("Column", item.id)
            _apply_column_changes(column, item.model_dump(exclude_unset=True, exclude={'id'}))

        db.commit()
        logger.info(f"Successfully updated {len(payload.columns)} personal columns")

        return [columns_by_id[column_id].to_dict() for column_id in column_ids]

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def delete_column(column_id: str, user_id: str, db: Session) -> None:
    """Delete a column unless it is the last one on its board.

    Raises:
        NotFoundError: When the user has no such column
        ValidationError: When the column is the board's only column
    """
    logger.info(f"Deleting personal column {column_id} for user {user_id}")

    try:
        column = _owned_column(db, column_id, user_id)
        board = column.board
        if len(board.columns) <= 1:
            raise ValidationError("Cannot delete the last column. Add another column first.")

        board.columns.remove(column)
        db.commit()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise
