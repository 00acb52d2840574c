"""initial schema: options table

Revision ID: 000
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
# pylint: disable=no-member,invalid-name
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '000'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the key-value options table."""
    op.create_table(
        'options',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('option_name', sa.String(length=191), nullable=False),
        sa.Column('option_value', sa.JSON(), nullable=True),
        sa.Column('autoload', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('option_name'),
    )


def downgrade() -> None:
    """Drop the options table."""
    op.drop_table('options')
