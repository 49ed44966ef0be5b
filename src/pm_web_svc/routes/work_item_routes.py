"""FastAPI routes for portfolios, programs and projects.

All three resources expose the same endpoints, so their routers are built by one
factory parametrized with the ORM model and the input schemas.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.work_item import Portfolio, Program, Project, WorkItemMixin
from ..schemas.common import MessageResponse
from ..schemas.work_item import (
    PortfolioCreate, PortfolioUpdate, ProgramCreate, ProgramUpdate, ProjectCreate, ProjectUpdate,
    WorkItemStatusMove
)
from ..services import work_item_service
from .errors import to_http_exception

logger = logging.getLogger(__name__)


def create_work_item_router(
    model: Type[WorkItemMixin],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    path: str,
) -> APIRouter:
    """Build the CRUD and kanban router for one work item model."""
    router = APIRouter(prefix=f"/{path}", tags=[path])
    entity = model.__name__

    @router.get("")
    def list_endpoint(
        methodology: Optional[str] = None,
        status: Optional[str] = None,
        db: Session = Depends(get_db),
    ) -> List[Dict[str, Any]]:
        try:
            return work_item_service.list_work_items(db, model, methodology=methodology, status=status)
        except Exception as e:
            raise to_http_exception(e)

    @router.post("", status_code=201)
    def create_endpoint(payload: create_schema, db: Session = Depends(get_db)) -> Dict[str, Any]:
        logger.info(f"POST /{path} request - name: {payload.name}")
        try:
            return work_item_service.create_work_item(db, model, payload)
        except Exception as e:
            raise to_http_exception(e)

    # Registered before /{item_id} so "kanban" is not taken for an id
    @router.get("/kanban")
    def kanban_view_endpoint(db: Session = Depends(get_db)) -> Dict[str, Any]:
        try:
            return work_item_service.build_kanban_view(db, model)
        except Exception as e:
            raise to_http_exception(e)

    @router.put("/kanban")
    def kanban_move_endpoint(payload: WorkItemStatusMove, db: Session = Depends(get_db)) -> Dict[str, Any]:
        logger.info(f"PUT /{path}/kanban request - {payload.id} -> {payload.new_status.value}")
        try:
            return work_item_service.move_work_item(db, model, payload)
        except Exception as e:
            raise to_http_exception(e)

    @router.get("/{item_id}")
    def get_endpoint(item_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
        try:
            return work_item_service.get_work_item(db, model, item_id)
        except Exception as e:
            raise to_http_exception(e)

    @router.put("/{item_id}")
    def update_endpoint(item_id: str, payload: update_schema, db: Session = Depends(get_db)) -> Dict[str, Any]:
        logger.info(f"PUT /{path}/{item_id} request")
        try:
            return work_item_service.update_work_item(db, model, item_id, payload)
        except Exception as e:
            raise to_http_exception(e)

    @router.delete("/{item_id}", response_model=MessageResponse)
    def delete_endpoint(item_id: str, db: Session = Depends(get_db)) -> MessageResponse:
        logger.info(f"DELETE /{path}/{item_id} request")
        try:
            work_item_service.delete_work_item(db, model, item_id)
            return MessageResponse(message=f"{entity} deleted successfully")
        except Exception as e:
            raise to_http_exception(e)

    return router


portfolio_router = create_work_item_router(Portfolio, PortfolioCreate, PortfolioUpdate, "portfolios")
program_router = create_work_item_router(Program, ProgramCreate, ProgramUpdate, "programs")
project_router = create_work_item_router(Project, ProjectCreate, ProjectUpdate, "projects")
