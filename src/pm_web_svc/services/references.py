"""Existence checks for ids that a record points at."""

from typing import Any, Dict

from sqlalchemy.orm import Session

from ..models.user import User
from ..models.work_item import Project
from .errors import NotFoundError, ValidationError

USER_REFERENCE_FIELDS = ('created_by', 'assignee_id')


def check_references(db: Session, fields: Dict[str, Any]) -> None:
    """Verify that referenced users and project exist.

    Only keys present in ``fields`` with a non-None value are checked.

    Raises:
        ValidationError: When a referenced user is unknown
        NotFoundError: When the project does not exist
    """
    for user_field in USER_REFERENCE_FIELDS:
        user_id = fields.get(user_field)
        if user_id is not None and db.get(User, user_id) is None:
            raise ValidationError(f"Invalid user ID for {user_field}: {user_id}")

    project_id = fields.get('project_id')
    if project_id is not None and db.get(Project, project_id) is None:
        raise NotFoundError("Project", project_id)
