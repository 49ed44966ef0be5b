"""Portfolio, Program and Project SQLAlchemy ORM models.

Portfolios, programs and projects share one shape: a named body of work with a
methodology, a lifecycle status, a budget, a creator and a team.
"""

from typing import Any, Dict

from sqlalchemy import (
    Column, String, Text, Integer, Float, Date, JSON, ForeignKey, Table, Index
)
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, isoformat
from .enums import EnumValueType, Methodology, WorkStatus, Priority, enum_value
from .user import User


program_team_members = Table(
    'program_team_members',
    Base.metadata,
    Column('program_id', String(64), ForeignKey('programs.id', ondelete='CASCADE'), primary_key=True),
    Column('user_id', String(64), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
)

project_team_members = Table(
    'project_team_members',
    Base.metadata,
    Column('project_id', String(64), ForeignKey('projects.id', ondelete='CASCADE'), primary_key=True),
    Column('user_id', String(64), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
)


portfolio_team_members = Table(
    'portfolio_team_members',
    Base.metadata,
    Column('portfolio_id', String(64), ForeignKey('portfolios.id', ondelete='CASCADE'), primary_key=True),
    Column('user_id', String(64), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
)


class WorkItemMixin(TimestampMixin):
    """Columns and serialization shared by Portfolio, Program and Project."""

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    methodology = Column(EnumValueType(Methodology), nullable=False, default=Methodology.AGILE)
    status = Column(EnumValueType(WorkStatus), nullable=False, default=WorkStatus.ACTIVE)
    priority = Column(EnumValueType(Priority), nullable=False, default=Priority.MEDIUM)
    progress = Column(Integer, nullable=False, default=0)
    start_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    budget = Column(Float, nullable=False, default=0.0)
    tags = Column(JSON, nullable=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a dictionary for serialization.

        Enum values become their string values, dates and timestamps become
        ISO format strings, and the creator and team members are embedded as
        user summaries.
        """
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'methodology': enum_value(self.methodology),
            'status': enum_value(self.status),
            'priority': enum_value(self.priority),
            'progress': self.progress,
            'start_date': isoformat(self.start_date),
            'due_date': isoformat(self.due_date),
            'budget': self.budget,
            'tags': self.tags if self.tags else [],
            'created_by': self.created_by,
            'creator': self.creator.to_summary() if self.creator else None,
            'team_members': [member.to_summary() for member in self.team_members],
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, name='{self.name}')>"


class Portfolio(WorkItemMixin, Base):
    """A set of projects managed together."""
    __tablename__ = 'portfolios'

    __table_args__ = (
        Index('idx_portfolio_status', 'status'),
    )

    created_by = Column(String(64), ForeignKey('users.id'), nullable=False)

    creator = relationship(User, foreign_keys=[created_by])
    team_members = relationship(User, secondary=portfolio_team_members, order_by=User.name)
    projects = relationship('Project', back_populates='portfolio', order_by='Project.name')

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['projects'] = [
            {
                'id': project.id,
                'name': project.name,
                'status': enum_value(project.status),
                'progress': project.progress,
            }
            for project in self.projects
        ]
        return data


class Program(WorkItemMixin, Base):
    """A portfolio-level grouping of related projects."""
    __tablename__ = 'programs'

    __table_args__ = (
        Index('idx_program_status', 'status'),
        Index('idx_program_methodology', 'methodology'),
    )

    created_by = Column(String(64), ForeignKey('users.id'), nullable=False)

    creator = relationship(User, foreign_keys=[created_by])
    team_members = relationship(User, secondary=program_team_members, order_by=User.name)
    projects = relationship('Project', back_populates='program')


class Project(WorkItemMixin, Base):
    """A project, optionally part of a program and of a portfolio."""
    __tablename__ = 'projects'

    __table_args__ = (
        Index('idx_project_status', 'status'),
        Index('idx_project_methodology', 'methodology'),
    )

    created_by = Column(String(64), ForeignKey('users.id'), nullable=False)
    program_id = Column(String(64), ForeignKey('programs.id', ondelete='SET NULL'), nullable=True)
    portfolio_id = Column(String(64), ForeignKey('portfolios.id', ondelete='SET NULL'), nullable=True)

    creator = relationship(User, foreign_keys=[created_by])
    team_members = relationship(User, secondary=project_team_members, order_by=User.name)
    program = relationship(Program, back_populates='projects')
    portfolio = relationship(Portfolio, back_populates='projects')

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['program_id'] = self.program_id
        data['portfolio_id'] = self.portfolio_id
        return data
