"""business profile

Revision ID: 9c3f1a6e5d27
Revises: 4b7e2d91c0a3
Create Date: 2026-10-17 15:40:02.114830

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9c3f1a6e5d27'
down_revision: Union[str, Sequence[str], None] = '4b7e2d91c0a3'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'admin_settings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'),
            nullable=False, unique=True,
        ),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('business_name', sa.Text(), nullable=True),
        sa.Column('bank_account_name', sa.Text(), nullable=True),
        sa.Column('sort_code', sa.Text(), nullable=True),
        sa.Column('account_number', sa.Text(), nullable=True),
        sa.Column('home_address', sa.Text(), nullable=True),
        sa.Column('home_postcode', sa.Text(), nullable=True),
        sa.Column('currency', sa.Text(), server_default=sa.text("'GBP'"), nullable=False),
        sa.Column('google_maps_api_key', sa.Text(), nullable=True),
        sa.Column('postcode_resync_needed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=True),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('admin_settings')
