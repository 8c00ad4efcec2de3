"""Initial schema: accounts, projects, weekly updates and media items

Revision ID: 4b2e9d71c0a3
Revises:
Create Date: 2025-12-02 10:14:07.318402

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b2e9d71c0a3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create accounts table
    op.create_table(
        'accounts',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('identifier', sa.String(255), nullable=False),
        sa.Column('secret_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(16), nullable=False, server_default='client'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_accounts_identifier', 'accounts', ['identifier'], unique=True)

    # Create projects table
    op.create_table(
        'projects',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False, server_default=''),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('thumbnail_url', sa.Text(), nullable=False, server_default=''),
        sa.Column('client_access_code', sa.String(255), nullable=False),
        sa.Column('status', sa.String(32), nullable=False, server_default='Planning'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )

    # Create weekly_updates table
    op.create_table(
        'weekly_updates',
        sa.Column('pk', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.String(64), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_weekly_updates_project_id', 'weekly_updates', ['project_id'])

    # Create media_items table
    op.create_table(
        'media_items',
        sa.Column('pk', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('update_pk', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('type', sa.String(32), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['update_pk'], ['weekly_updates.pk'], ondelete='CASCADE'),
    )
    op.create_index('ix_media_items_update_pk', 'media_items', ['update_pk'])


def downgrade() -> None:
    op.drop_index('ix_media_items_update_pk', table_name='media_items')
    op.drop_table('media_items')
    op.drop_index('ix_weekly_updates_project_id', table_name='weekly_updates')
    op.drop_table('weekly_updates')
    op.drop_table('projects')
    op.drop_index('ix_accounts_identifier', table_name='accounts')
    op.drop_table('accounts')
