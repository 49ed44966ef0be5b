"""FastAPI routes for users."""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.user import UserCreate
from ..services.user_service import create_user, list_users
from .errors import to_http_exception

logger = logging.getLogger(__name__)

user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.get("")
def list_users_endpoint(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    try:
        return list_users(db)
    except Exception as e:
        raise to_http_exception(e)


@user_router.post("", status_code=201)
def create_user_endpoint(payload: UserCreate, db: Session = Depends(get_db)) -> Dict[str, Any]:
    logger.info(f"POST /users request - email: {payload.email}")
    try:
        return create_user(payload, db)
    except Exception as e:
        raise to_http_exception(e)
