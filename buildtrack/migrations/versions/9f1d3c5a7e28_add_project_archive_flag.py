"""add_project_archive_flag

Revision ID: 9f1d3c5a7e28
Revises: 4b2e9d71c0a3
Create Date: 2025-12-09 16:41:52.907113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9f1d3c5a7e28'
down_revision: Union[str, None] = '4b2e9d71c0a3'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Existing projects start out active
    op.add_column(
        'projects',
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index(op.f('ix_projects_is_archived'), 'projects', ['is_archived'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_projects_is_archived'), table_name='projects')
    with op.batch_alter_table('projects') as batch_op:
        batch_op.drop_column('is_archived')
