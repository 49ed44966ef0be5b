"""initial schema

Revision ID: 0001
Revises:
Create Date: 2024-09-02 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns():
    return [
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def _work_item_columns():
    return [
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('methodology', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('priority', sa.String(), nullable=False),
        sa.Column('progress', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('budget', sa.Float(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('created_by', sa.String(length=64), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        *_record_columns(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('avatar', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'programs',
        *_record_columns(),
        *_work_item_columns(),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_program_status', 'programs', ['status'])
    op.create_index('idx_program_methodology', 'programs', ['methodology'])

    op.create_table(
        'program_team_members',
        sa.Column('program_id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('program_id', 'user_id'),
    )

    op.create_table(
        'projects',
        *_record_columns(),
        *_work_item_columns(),
        sa.Column('program_id', sa.String(length=64), nullable=True),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_project_status', 'projects', ['status'])
    op.create_index('idx_project_methodology', 'projects', ['methodology'])

    op.create_table(
        'project_team_members',
        sa.Column('project_id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('project_id', 'user_id'),
    )

    op.create_table(
        'tasks',
        *_record_columns(),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('priority', sa.String(), nullable=False),
        sa.Column('progress', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('estimated_hours', sa.Float(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('project_id', sa.String(length=64), nullable=True),
        sa.Column('assignee_id', sa.String(length=64), nullable=True),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.Column('parent_task_id', sa.String(length=64), nullable=True),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['assignee_id'], ['users.id']),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.ForeignKeyConstraint(['parent_task_id'], ['tasks.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_task_status', 'tasks', ['status'])
    op.create_index('idx_task_priority', 'tasks', ['priority'])
    op.create_index('idx_task_project', 'tasks', ['project_id'])
    op.create_index('idx_task_assignee', 'tasks', ['assignee_id'])

    op.create_table(
        'task_comments',
        *_record_columns(),
        sa.Column('task_id', sa.String(length=64), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['task_id'], ['tasks.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_task_comment_task', 'task_comments', ['task_id'])

    op.create_table(
        'board_templates',
        *_record_columns(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('methodology', sa.String(), nullable=True),
        sa.Column('columns', sa.JSON(), nullable=False),
        sa.Column('settings', sa.JSON(), nullable=True),
        sa.Column('preview_image', sa.String(), nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_board_template_category', 'board_templates', ['category'])

    op.create_table(
        'kanban_boards',
        *_record_columns(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('project_id', sa.String(length=64), nullable=True),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'kanban_columns',
        *_record_columns(),
        sa.Column('board_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('color', sa.String(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('max_wip_limit', sa.Integer(), nullable=True),
        sa.Column('is_collapsed', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['board_id'], ['kanban_boards.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_kanban_column_board', 'kanban_columns', ['board_id'])

    op.create_table(
        'kanban_cards',
        *_record_columns(),
        sa.Column('column_id', sa.String(length=64), nullable=False),
        sa.Column('position', sa.Float(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('project_id', sa.String(length=64), nullable=True),
        sa.Column('assignee_id', sa.String(length=64), nullable=True),
        sa.Column('priority', sa.String(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('labels', sa.JSON(), nullable=True),
        sa.Column('cover_color', sa.String(), nullable=True),
        sa.Column('cover_image', sa.String(), nullable=True),
        sa.Column('checklist', sa.JSON(), nullable=True),
        sa.Column('attachments', sa.JSON(), nullable=True),
        sa.Column('created_by', sa.String(length=64), nullable=True),
        sa.ForeignKeyConstraint(['column_id'], ['kanban_columns.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['assignee_id'], ['users.id']),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_kanban_card_column_position', 'kanban_cards', ['column_id', 'position'])


def downgrade() -> None:
    op.drop_index('idx_kanban_card_column_position', table_name='kanban_cards')
    op.drop_table('kanban_cards')
    op.drop_index('idx_kanban_column_board', table_name='kanban_columns')
    op.drop_table('kanban_columns')
    op.drop_table('kanban_boards')
    op.drop_index('idx_board_template_category', table_name='board_templates')
    op.drop_table('board_templates')
    op.drop_index('idx_task_comment_task', table_name='task_comments')
    op.drop_table('task_comments')
    op.drop_index('idx_task_assignee', table_name='tasks')
    op.drop_index('idx_task_project', table_name='tasks')
    op.drop_index('idx_task_priority', table_name='tasks')
    op.drop_index('idx_task_status', table_name='tasks')
    op.drop_table('tasks')
    op.drop_table('project_team_members')
    op.drop_index('idx_project_methodology', table_name='projects')
    op.drop_index('idx_project_status', table_name='projects')
    op.drop_table('projects')
    op.drop_table('program_team_members')
    op.drop_index('idx_program_methodology', table_name='programs')
    op.drop_index('idx_program_status', table_name='programs')
    op.drop_table('programs')
    op.drop_table('users')
