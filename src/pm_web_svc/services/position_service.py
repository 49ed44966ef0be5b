"""Ordering of kanban cards and columns.

Cards are ranked inside a column by a numeric ``position``. New cards are
placed ``POSITION_GAP`` past the current maximum so later inserts between
two neighbours rarely need to renumber anything. Drag-and-drop sends a batch
of moves which is committed in a single transaction: either every card in
the batch lands in its new column and position, or none does.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.kanban import KanbanCard, KanbanColumn
from ..schemas.kanban import CardMove, ColumnOrder
from .errors import NotFoundError, ServiceError, StoreError

logger = logging.getLogger(__name__)

POSITION_GAP = 1000.0


def find_max_position(db: Session, column_id: str) -> Optional[float]:
    """Return the highest card position in a column, or None when it is empty.

    Raises:
        StoreError: When the query fails
    """
    try:
        stmt = select(func.max(KanbanCard.position)).where(KanbanCard.column_id == column_id)
        return db.execute(stmt).scalar()
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        raise StoreError(f"Failed to read positions for column {column_id}") from e


def allocate_position(db: Session, column_id: str, explicit_position: Optional[float] = None) -> float:
    """Compute the position of a card about to be inserted into a column.

    Args:
        db: SQLAlchemy database session
        column_id: ID of the destination column
        explicit_position: Caller-chosen position, returned unchanged when given

    Returns:
        ``explicit_position`` if provided, otherwise the column's current
        maximum position (0 for an empty column) plus ``POSITION_GAP``

    Raises:
        StoreError: When the current maximum cannot be read. The caller must
                    not create the card with a guessed position.
    """
    if explicit_position is not None:
        return float(explicit_position)

    current_max = find_max_position(db, column_id)
    position = (current_max or 0.0) + POSITION_GAP
    logger.debug(f"Allocated position {position} in column {column_id} (previous max: {current_max})")
    return position


def apply_card_moves(db: Session, moves: Sequence[CardMove]) -> int:
    """Atomically move a batch of cards to new columns and positions.

    Moves are applied in batch order, so a card listed twice ends up where
    its last move puts it. Nothing is written until every move has been
    validated, and the whole batch is committed together.

    Args:
        db: SQLAlchemy database session
        moves: Sequence of CardMove (card id, destination column id, position)

    Returns:
        Number of moves applied (0 for an empty batch, which never touches
        the database)

    Raises:
        NotFoundError: When a card or destination column does not exist; no
                       card is changed
        StoreError: When the transaction fails; no card is changed
    """
    if not moves:
        return 0

    logger.info(f"Applying {len(moves)} card moves")

    try:
        known_columns = set()
        for move in moves:
            card = db.get(KanbanCard, move.id)
            if card is None:
                raise NotFoundError("Card", move.id)

            if move.column_id not in known_columns:
                if db.get(KanbanColumn, move.column_id) is None:
                    raise NotFoundError("Column", move.column_id)
                known_columns.add(move.column_id)

            card.column_id = move.column_id
            card.position = float(move.position)

        db.commit()

    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise StoreError("Failed to update card positions") from e

    logger.info(f"Successfully applied {len(moves)} card moves")
    return len(moves)


def apply_column_orders(db: Session, orders: Sequence[ColumnOrder]) -> int:
    """Atomically rewrite the order of a batch of columns.

    Same all-or-nothing semantics as apply_card_moves.

    Raises:
        NotFoundError: When a column does not exist
        StoreError: When the transaction fails
    """
    if not orders:
        return 0

    logger.info(f"Reordering {len(orders)} columns")

    try:
        for item in orders:
            column = db.get(KanbanColumn, item.id)
            if column is None:
                raise NotFoundError("Column", item.id)
            column.order = item.order

        db.commit()

    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise StoreError("Failed to reorder columns") from e

    return len(orders)


def rebalance_column(db: Session, column_id: str) -> List[Dict[str, Any]]:
    """Renumber a column's cards to evenly spaced positions.

    Cards keep their current read order (position, then creation time, then
    id) and receive positions ``POSITION_GAP``, ``2 * POSITION_GAP``, ...
    This only runs when explicitly requested.

    Returns:
        The column's cards in order, after renumbering

    Raises:
        NotFoundError: When the column does not exist
        StoreError: When the transaction fails
    """
    logger.info(f"Rebalancing card positions in column {column_id}")

    try:
        if db.get(KanbanColumn, column_id) is None:
            raise NotFoundError("Column", column_id)

        stmt = (
            select(KanbanCard)
            .where(KanbanCard.column_id == column_id)
            .order_by(KanbanCard.position, KanbanCard.created_at, KanbanCard.id)
        )
        cards = db.execute(stmt).scalars().all()

        for index, card in enumerate(cards, start=1):
            card.position = index * POSITION_GAP

        db.commit()

    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise StoreError(f"Failed to rebalance column {column_id}") from e

    logger.info(f"Rebalanced {len(cards)} cards in column {column_id}")
    return [card.to_dict() for card in cards]
