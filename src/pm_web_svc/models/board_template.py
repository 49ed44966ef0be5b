"""BoardTemplate SQLAlchemy ORM model."""

from typing import Any, Dict

from sqlalchemy import Column, String, Text, Boolean, JSON, ForeignKey, Index

from .base import Base, TimestampMixin, isoformat


class BoardTemplate(TimestampMixin, Base):
    """Reusable column layout a kanban board can be created from.

    ``columns`` holds a list of column definitions such as
    ``{"name": "Planning", "color": "#3b82f6", "order": 1}``.
    """
    __tablename__ = 'board_templates'

    __table_args__ = (
        Index('idx_board_template_category', 'category'),
    )

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False)
    methodology = Column(String, nullable=True)
    columns = Column(JSON, nullable=False)
    settings = Column(JSON, nullable=True)
    preview_image = Column(String, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)
    created_by = Column(String(64), ForeignKey('users.id'), nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'methodology': self.methodology,
            'columns': self.columns or [],
            'settings': self.settings,
            'preview_image': self.preview_image,
            'is_public': self.is_public,
            'created_by': self.created_by,
            'created_at': isoformat(self.created_at),
        }
