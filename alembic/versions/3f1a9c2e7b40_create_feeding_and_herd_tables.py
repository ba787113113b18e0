"""Create feed_items, feed_consumptions and cuyes tables

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the feed ledger and herd registry tables."""

    # --- feed_items ---
    op.create_table(
        'feed_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('unit', sa.String(length=32), nullable=False),
        sa.Column('stock', sa.Numeric(precision=12, scale=3), nullable=False),
        sa.Column('unit_cost', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('stock >= 0', name=op.f('ck_feed_items_stock_non_negative')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_feed_items')),
    )

    # --- feed_consumptions ---
    op.create_table(
        'feed_consumptions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('shed', sa.String(length=128), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('feed_item_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=12, scale=3), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('quantity > 0', name=op.f('ck_feed_consumptions_quantity_positive')),
        sa.ForeignKeyConstraint(
            ['feed_item_id'],
            ['feed_items.id'],
            name=op.f('fk_feed_consumptions_feed_item_id_feed_items'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_feed_consumptions')),
    )
    op.create_index(
        op.f('ix_feed_consumptions_feed_item_id'), 'feed_consumptions', ['feed_item_id'], unique=False
    )
    op.create_index('ix_feed_consumptions_shed_date', 'feed_consumptions', ['shed', 'date'], unique=False)

    # --- cuyes ---
    op.create_table(
        'cuyes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('breed', sa.String(length=128), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('sex', sa.String(length=1), nullable=False),
        sa.Column('weight', sa.Numeric(precision=8, scale=3), nullable=False),
        sa.Column('shed', sa.String(length=128), nullable=False),
        sa.Column('cage', sa.String(length=128), nullable=False),
        sa.Column('status', sa.String(length=32), server_default='Activo', nullable=False),
        sa.Column('life_stage', sa.String(length=32), nullable=True),
        sa.Column('purpose', sa.String(length=32), nullable=True),
        sa.Column('last_evaluation', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_cuyes')),
    )
    op.create_index('ix_cuyes_shed_cage', 'cuyes', ['shed', 'cage'], unique=False)
    op.create_index('ix_cuyes_status', 'cuyes', ['status'], unique=False)


def downgrade() -> None:
    """Drop the herd registry and feed ledger tables."""
    op.drop_index('ix_cuyes_status', table_name='cuyes')
    op.drop_index('ix_cuyes_shed_cage', table_name='cuyes')
    op.drop_table('cuyes')
    op.drop_index('ix_feed_consumptions_shed_date', table_name='feed_consumptions')
    op.drop_index(op.f('ix_feed_consumptions_feed_item_id'), table_name='feed_consumptions')
    op.drop_table('feed_consumptions')
    op.drop_table('feed_items')
