"""Kanban board, column and card service layer.

Boards are returned fully nested (columns by order, cards by position).
Card placement is delegated to position_service.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from .. import config
from ..models.board_template import BoardTemplate
from ..models.kanban import KanbanBoard, KanbanCard, KanbanColumn
from ..models.user import User
from ..schemas.kanban import (
    BoardCreate, BoardUpdate, CardCreate, CardUpdate, ColumnCreate, ColumnUpdate
)
from .errors import NotFoundError, ValidationError
from .position_service import allocate_position
from .references import check_references

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = [
    {"name": "To Do", "color": "#64748b", "order": 0},
    {"name": "In Progress", "color": "#3b82f6", "order": 1},
    {"name": "Review", "color": "#f59e0b", "order": 2},
    {"name": "Done", "color": "#10b981", "order": 3},
]


def _board_query():
    return (
        select(KanbanBoard)
        .options(selectinload(KanbanBoard.columns).selectinload(KanbanColumn.cards))
        .execution_options(populate_existing=True)
    )


def _get_or_raise(db: Session, model, record_id: str, entity: str):
    record = db.get(model, record_id)
    if record is None:
        raise NotFoundError(entity, record_id)
    return record


# Boards

def list_boards(db: Session, project_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """List boards, optionally restricted to one project, ordered by board order."""
    logger.info(f"Listing kanban boards (project_id={project_id})")

    stmt = _board_query().order_by(KanbanBoard.order, KanbanBoard.created_at)
    if project_id is not None:
        stmt = stmt.where(KanbanBoard.project_id == project_id)

    boards = db.execute(stmt).scalars().all()
    return [board.to_dict() for board in boards]


def get_board(db: Session, board_id: str) -> Dict[str, Any]:
    """Retrieve a board with its columns and cards.

    Raises:
        NotFoundError: When the board does not exist
    """
    board = db.execute(_board_query().where(KanbanBoard.id == board_id)).scalar_one_or_none()
    if board is None:
        raise NotFoundError("Board", board_id)
    return board.to_dict()


def _template_columns(db: Session, template_id: str) -> List[Dict[str, Any]]:
    template = db.get(BoardTemplate, template_id)
    if template is None:
        raise NotFoundError("Board template", template_id)

    columns = []
    for index, definition in enumerate(template.columns or []):
        columns.append({
            "name": definition["name"],
            "color": definition.get("color"),
            "order": definition.get("order", index),
            "max_wip_limit": definition.get("max_wip_limit"),
        })
    return columns


def create_board(payload: BoardCreate, db: Session) -> Dict[str, Any]:
    """Create a board together with its initial columns.

    Columns come from the referenced template when ``template_id`` is set,
    otherwise from DEFAULT_COLUMNS. A missing creator falls back to the
    configured default admin user.

    Raises:
        ValidationError: When the creator does not resolve to a user
        NotFoundError: When the template does not exist
    """
    created_by = payload.created_by or config.DEFAULT_ADMIN_USER_ID
    logger.info(f"Creating kanban board '{payload.name}' for user {created_by}")

    try:
        if db.get(User, created_by) is None:
            raise ValidationError("Invalid user ID")

        if payload.template_id is not None:
            column_specs = _template_columns(db, payload.template_id)
        else:
            column_specs = DEFAULT_COLUMNS

        board = KanbanBoard(
            name=payload.name,
            description=payload.description,
            project_id=payload.project_id,
            created_by=created_by,
            order=0,
        )
        board.columns = [KanbanColumn(**definition) for definition in column_specs]

        db.add(board)
        db.commit()
        db.refresh(board)
        logger.info(f"Successfully created kanban board with ID: {board.id}")

        return board.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def update_board(board_id: str, payload: BoardUpdate, db: Session) -> Dict[str, Any]:
    logger.info(f"Updating kanban board with ID: {board_id}")

    try:
        board = _get_or_raise(db, KanbanBoard, board_id, "Board")
        for field_name, value in payload.model_dump(exclude_unset=True).items():
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


def delete_board(board_id: str, db: Session) -> None:
    """Delete a board; its columns and cards are removed with it."""
    logger.info(f"Deleting kanban board with ID: {board_id}")

    try:
        board = _get_or_raise(db, KanbanBoard, board_id, "Board")
        db.delete(board)
        db.commit()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


# Columns

def create_column(payload: ColumnCreate, db: Session) -> Dict[str, Any]:
    """Add a column to a board, appending it after the last column when no order is given."""
    logger.info(f"Creating column '{payload.name}' on board {payload.board_id}")

    try:
        _get_or_raise(db, KanbanBoard, payload.board_id, "Board")

        order = payload.order
        if order is None:
            current_max = db.execute(
                select(func.max(KanbanColumn.order)).where(KanbanColumn.board_id == payload.board_id)
            ).scalar()
            order = 0 if current_max is None else current_max + 1

        column = KanbanColumn(
            board_id=payload.board_id,
            name=payload.name,
            color=payload.color,
            order=order,
            max_wip_limit=payload.max_wip_limit,
        )
        db.add(column)
        db.commit()
        db.refresh(column)
        logger.info(f"Successfully created column with ID: {column.id}")

        return column.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def update_column(column_id: str, payload: ColumnUpdate, db: Session) -> Dict[str, Any]:
    logger.info(f"Updating column with ID: {column_id}")

    try:
        column = _get_or_raise(db, KanbanColumn, column_id, "Column")
        for field_name, value in payload.model_dump(exclude_unset=True).items():
            if field_name in ('name', 'is_collapsed') and value is None:
                continue
            setattr(column, field_name, value)

        db.commit()
        db.refresh(column)
        return column.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def delete_column(column_id: str, db: Session) -> None:
    """Delete an empty column.

    Raises:
        NotFoundError: When the column does not exist
        ValidationError: When the column still holds cards
    """
    logger.info(f"Deleting column with ID: {column_id}")

    try:
        column = _get_or_raise(db, KanbanColumn, column_id, "Column")

        card_count = db.execute(
            select(func.count(KanbanCard.id)).where(KanbanCard.column_id == column_id)
        ).scalar()
        if card_count > 0:
            raise ValidationError("Cannot delete column with cards. Move cards first.")

        db.delete(column)
        db.commit()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


# Cards

def get_card(db: Session, card_id: str) -> Dict[str, Any]:
    card = _get_or_raise(db, KanbanCard, card_id, "Card")
    data = card.to_dict()
    data['column'] = {'id': card.column.id, 'name': card.column.name, 'color': card.column.color}
    return data


def create_card(payload: CardCreate, db: Session) -> Dict[str, Any]:
    """Create a card at an allocated or explicit position.

    Raises:
        NotFoundError: When the column or the referenced project does not exist
        ValidationError: When the assignee or creator is not a known user
        StoreError: When the column's current positions cannot be read
    """
    logger.info(f"Creating card '{payload.title}' in column {payload.column_id}")

    try:
        _get_or_raise(db, KanbanColumn, payload.column_id, "Column")
        check_references(db, payload.model_dump(include={'project_id', 'assignee_id', 'created_by'}))

        position = allocate_position(db, payload.column_id, payload.position)

        card = KanbanCard(
            column_id=payload.column_id,
            position=position,
            title=payload.title,
            description=payload.description,
            project_id=payload.project_id,
            assignee_id=payload.assignee_id,
            priority=payload.priority,
            due_date=payload.due_date,
            labels=payload.labels or None,
            cover_color=payload.cover_color,
            cover_image=payload.cover_image,
            created_by=payload.created_by,
        )
        db.add(card)
        db.commit()
        db.refresh(card)
        logger.info(f"Successfully created card with ID: {card.id} at position {card.position}")

        return card.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def update_card(card_id: str, payload: CardUpdate, db: Session) -> Dict[str, Any]:
    """Apply a partial update to a card's content fields.

    Raises:
        NotFoundError: When the card does not exist
        ValidationError: When the new assignee is not a known user
    """
    logger.info(f"Updating card with ID: {card_id}")

    try:
        card = _get_or_raise(db, KanbanCard, card_id, "Card")
        updates = payload.model_dump(exclude_unset=True)
        check_references(db, updates)

        for field_name in updates.keys():
            value = getattr(payload, field_name)
            if field_name == 'title' and value is None:
                continue
            if field_name == 'labels':
                value = value or None
            setattr(card, field_name, value)

        db.commit()
        db.refresh(card)
        return card.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise


def delete_card(card_id: str, db: Session) -> None:
    logger.info(f"Deleting card with ID: {card_id}")

    try:
        card = _get_or_raise(db, KanbanCard, card_id, "Card")
        db.delete(card)
        db.commit()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise
