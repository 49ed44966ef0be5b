"""portfolios and personal boards

Revision ID: 0002
Revises: 0001
Create Date: 2024-10-14 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: Union[str, None] = '0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns():
    return [
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'portfolios',
        *_record_columns(),
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
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_portfolio_status', 'portfolios', ['status'])

    op.create_table(
        'portfolio_team_members',
        sa.Column('portfolio_id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['portfolio_id'], ['portfolios.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('portfolio_id', 'user_id'),
    )

    with op.batch_alter_table('projects') as batch_op:
        batch_op.add_column(sa.Column('portfolio_id', sa.String(length=64), nullable=True))
        batch_op.create_foreign_key(
            'fk_projects_portfolio_id', 'portfolios', ['portfolio_id'], ['id'], ondelete='SET NULL'
        )

    op.create_table(
        'user_kanban_boards',
        *_record_columns(),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('template_id', sa.String(length=64), nullable=True),
        sa.Column('settings', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['template_id'], ['board_templates.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_user_kanban_board_user', 'user_kanban_boards', ['user_id'])

    op.create_table(
        'user_kanban_columns',
        *_record_columns(),
        sa.Column('board_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('color', sa.String(), nullable=False),
        sa.Column('icon', sa.String(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('status_mapping', sa.String(), nullable=True),
        sa.Column('max_wip_limit', sa.Integer(), nullable=True),
        sa.Column('is_collapsed', sa.Boolean(), nullable=False),
        sa.Column('settings', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['board_id'], ['user_kanban_boards.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_user_kanban_column_board', 'user_kanban_columns', ['board_id'])


def downgrade() -> None:
    op.drop_index('idx_user_kanban_column_board', table_name='user_kanban_columns')
    op.drop_table('user_kanban_columns')
    op.drop_index('idx_user_kanban_board_user', table_name='user_kanban_boards')
    op.drop_table('user_kanban_boards')
    with op.batch_alter_table('projects') as batch_op:
        batch_op.drop_column('portfolio_id')
    op.drop_table('portfolio_team_members')
    op.drop_index('idx_portfolio_status', table_name='portfolios')
    op.drop_table('portfolios')
