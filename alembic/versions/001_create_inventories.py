"""Create inventories table

Revision ID: 001_create_inventories
Revises:
Create Date: 2025-10-20 09:12:44.318201

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_inventories'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'inventories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), nullable=False),
        sa.Column('modified_at', sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.CheckConstraint('quantity >= 0', name='ck_inventories_quantity_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )

    # One live row per product; soft-deleted rows may repeat the product_id
    op.create_index(
        'uq_inventories_product_id_active',
        'inventories',
        ['product_id'],
        unique=True,
        postgresql_where=sa.text('deleted = false'),
        sqlite_where=sa.text('deleted = 0'),
    )


def downgrade() -> None:
    op.drop_index('uq_inventories_product_id_active', table_name='inventories')
    op.drop_table('inventories')
