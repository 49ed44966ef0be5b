"""FastAPI routes for board templates."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.board_template import BoardTemplateCreate
from ..services.board_template_service import create_template, list_templates
from .errors import to_http_exception

logger = logging.getLogger(__name__)

board_template_router = APIRouter(prefix="/board-templates", tags=["board-templates"])


@board_template_router.get("")
def list_templates_endpoint(
    category: Optional[str] = None,
    methodology: Optional[str] = None,
    db: Session = Depends(get_db)
) -> List[Dict[str, Any]]:
    """List public board templates."""
    try:
        return list_templates(db, category=category, methodology=methodology)
    except Exception as e:
        raise to_http_exception(e)


@board_template_router.post("", status_code=201)
def create_template_endpoint(payload: BoardTemplateCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    logger.info(f"POST /board-templates request - name: {payload.name}")
    try:
        return create_template(payload, db)
    except Exception as e:
        raise to_http_exception(e)
