"""User service layer."""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.user import User
from ..schemas.user import UserCreate
from .errors import ValidationError

logger = logging.getLogger(__name__)


def list_users(db: Session) -> List[Dict[str, Any]]:
    """List all users ordered by name."""
    logger.info("Listing users")
    users = db.execute(select(User).order_by(User.name)).scalars().all()
    return [user.to_dict() for user in users]


def create_user(payload: UserCreate, db: Session) -> Dict[str, Any]:
    """Create a user.

    Raises:
        ValidationError: When the email address is already registered
    """
    logger.info(f"Creating user with email: {payload.email}")

    try:
        existing = db.execute(select(User).where(User.email == payload.email)).scalar_one_or_none()
        if existing is not None:
            raise ValidationError(f"Email {payload.email} is already registered")

        user = User(
            name=payload.name,
            email=payload.email,
            avatar=payload.avatar,
            role=payload.role or "Team Member",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Successfully created user with ID: {user.id}")

        return user.to_dict()

    except IntegrityError as e:
        # Unique constraint on email
        logger.error(e, exc_info=True)
        db.rollback()
        raise ValidationError(f"Email {payload.email} is already registered") from e
    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise
