"""create_group_and_category_tables

Revision ID: 4b7d2c9e1a05
Revises:
Create Date: 2026-10-19 10:02:11.418211

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b7d2c9e1a05'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create categories, groups and group_members tables."""
    op.create_table('categories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table('groups',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('max_members', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=False),
        sa.Column('created_by_name', sa.String(length=100), nullable=False),
        sa.Column('created_by_email', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('max_members >= 1', name='ck_groups_max_members_min'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_groups_category', 'groups', ['category'], unique=False)
    op.create_index('ix_groups_created_by_email', 'groups', ['created_by_email'], unique=False)
    op.create_index('ix_groups_created_at', 'groups', ['created_at'], unique=False)

    op.create_table('group_members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('group_id', 'email', name='uq_group_members_group_email'),
    )
    op.create_index('ix_group_members_group_id', 'group_members', ['group_id'], unique=False)
    op.create_index('ix_group_members_email', 'group_members', ['email'], unique=False)


def downgrade() -> None:
    """Drop group and category tables."""
    op.drop_index('ix_group_members_email', table_name='group_members')
    op.drop_index('ix_group_members_group_id', table_name='group_members')
    op.drop_table('group_members')
    op.drop_index('ix_groups_created_at', table_name='groups')
    op.drop_index('ix_groups_created_by_email', table_name='groups')
    op.drop_index('ix_groups_category', table_name='groups')
    op.drop_table('groups')
    op.drop_table('categories')
