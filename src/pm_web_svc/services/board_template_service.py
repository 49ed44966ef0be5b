"""Board template service layer."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.board_template import BoardTemplate
from ..models.user import User
from ..schemas.board_template import BoardTemplateCreate
from .errors import ValidationError

logger = logging.getLogger(__name__)


def list_templates(
    db: Session, category: Optional[str] = None, methodology: Optional[str] = None
) -> List[Dict[str, Any]]:
    """List public templates, ordered by category, methodology and name."""
    logger.info(f"Listing board templates (category={category}, methodology={methodology})")

    stmt = select(BoardTemplate).where(BoardTemplate.is_public.is_(True))
    if category:
        stmt = stmt.where(BoardTemplate.category == category)
    if methodology:
        stmt = stmt.where(BoardTemplate.methodology == methodology)

    stmt = stmt.order_by(BoardTemplate.category, BoardTemplate.methodology, BoardTemplate.name)
    return [template.to_dict() for template in db.execute(stmt).scalars().all()]


def create_template(payload: BoardTemplateCreate, db: Session) -> Dict[str, Any]:
    """Create a board template.

    Column definitions without an explicit order are numbered by their
    position in the list.

    Raises:
        ValidationError: When the creator is not a known user
    """
    logger.info(f"Creating board template '{payload.name}'")

    try:
        if db.get(User, payload.created_by) is None:
            raise ValidationError(f"Invalid user ID: {payload.created_by}")

        columns = []
        for index, column in enumerate(payload.columns):
            definition = column.model_dump(exclude_none=True)
            definition.setdefault('order', index)
            columns.append(definition)

        template = BoardTemplate(
            name=payload.name,
            description=payload.description,
            category=payload.category,
            methodology=payload.methodology,
            columns=columns,
            settings=payload.settings,
            preview_image=payload.preview_image,
            is_public=payload.is_public,
            created_by=payload.created_by,
        )
        db.add(template)
        db.commit()
        db.refresh(template)
        logger.info(f"Successfully created board template with ID: {template.id}")

        return template.to_dict()

    except Exception as e:
        logger.error(e, exc_info=True)
        db.rollback()
        raise
