"""FastAPI routes for kanban boards, columns and cards.

Card drag-and-drop is a single ``PUT /kanban/cards`` carrying every card
whose column or position changed; the batch is committed atomically.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.common import SuccessResponse
from ..schemas.kanban import (
    BoardCreate, BoardUpdate, CardCreate, CardMoveRequest, CardResponse, CardUpdate,
    ColumnCreate, ColumnReorderRequest, ColumnUpdate, ReorderResponse
)
from ..services import kanban_service
from ..services.position_service import apply_card_moves, apply_column_orders, rebalance_column
from .errors import to_http_exception

logger = logging.getLogger(__name__)

kanban_router = APIRouter(prefix="/kanban", tags=["kanban"])


@kanban_router.get("/boards")
def list_boards_endpoint(project_id: Optional[str] = None, db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    """List boards with nested columns and cards."""
    try:
        return kanban_service.list_boards(db, project_id=project_id)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.post("/boards", status_code=201)
def create_board_endpoint(payload: BoardCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    logger.info(f"POST /kanban/boards request - name: {payload.name}")
    try:
        return kanban_service.create_board(payload, db)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.get("/boards/{board_id}")
def get_board_endpoint(board_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return kanban_service.get_board(db, board_id)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.put("/boards/{board_id}")
def update_board_endpoint(board_id: str, payload: BoardUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return kanban_service.update_board(board_id, payload, db)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.delete("/boards/{board_id}", response_model=SuccessResponse)
def delete_board_endpoint(board_id: str, db: Session = Depends(get_db)) -> SuccessResponse:
    logger.info(f"DELETE /kanban/boards/{board_id} request")
    try:
        kanban_service.delete_board(board_id, db)
        return SuccessResponse()
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.post("/columns", status_code=201)
def create_column_endpoint(payload: ColumnCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return kanban_service.create_column(payload, db)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.put("/columns", response_model=ReorderResponse)
def reorder_columns_endpoint(payload: ColumnReorderRequest, db: Session = Depends(get_db)) -> ReorderResponse:
    """Rewrite the order of several columns in one transaction."""
    logger.info(f"PUT /kanban/columns request - {len(payload.columns)} columns")
    try:
        updated = apply_column_orders(db, payload.columns)
        return ReorderResponse(success=True, updated=updated)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.put("/columns/{column_id}")
def update_column_endpoint(column_id: str, payload: ColumnUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return kanban_service.update_column(column_id, payload, db)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.delete("/columns/{column_id}", response_model=SuccessResponse)
def delete_column_endpoint(column_id: str, db: Session = Depends(get_db)) -> SuccessResponse:
    logger.info(f"DELETE /kanban/columns/{column_id} request")
    try:
        kanban_service.delete_column(column_id, db)
        return SuccessResponse()
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.post("/columns/{column_id}/rebalance", response_model=List[CardResponse])
def rebalance_column_endpoint(column_id: str, db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    """Renumber the column's card positions without changing their order."""
    logger.info(f"POST /kanban/columns/{column_id}/rebalance request")
    try:
        return rebalance_column(db, column_id)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.post("/cards", status_code=201, response_model=CardResponse)
def create_card_endpoint(payload: CardCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Create a card, placing it after the column's last card unless a position is given."""
    logger.info(f"POST /kanban/cards request - column: {payload.column_id}, position: {payload.position}")
    try:
        return kanban_service.create_card(payload, db)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.put("/cards", response_model=ReorderResponse)
def move_cards_endpoint(payload: CardMoveRequest, db: Session = Depends(get_db)) -> ReorderResponse:
    """Apply a drag-and-drop batch of card moves.

    Either every move is committed or none is; on failure the client is
    expected to re-fetch the board.
    """
    logger.info(f"PUT /kanban/cards request - {len(payload.cards)} moves")
    try:
        updated = apply_card_moves(db, payload.cards)
        return ReorderResponse(success=True, updated=updated)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.get("/cards/{card_id}")
def get_card_endpoint(card_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return kanban_service.get_card(db, card_id)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.put("/cards/{card_id}", response_model=CardResponse)
def update_card_endpoint(card_id: str, payload: CardUpdate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    try:
        return kanban_service.update_card(card_id, payload, db)
    except Exception as e:
        raise to_http_exception(e)


@kanban_router.delete("/cards/{card_id}", response_model=SuccessResponse)
def delete_card_endpoint(card_id: str, db: Session = Depends(get_db)) -> SuccessResponse:
    logger.info(f"DELETE /kanban/cards/{card_id} request")
    try:
        kanban_service.delete_card(card_id, db)
        return SuccessResponse()
    except Exception as e:
        raise to_http_exception(e)
