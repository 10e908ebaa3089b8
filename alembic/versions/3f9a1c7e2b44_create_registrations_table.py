"""create registrations table

Revision ID: 3f9a1c7e2b44
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9a1c7e2b44'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'registrations',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('owner', sa.JSON(), nullable=False),
        sa.Column('animals', sa.JSON(), nullable=False),
        sa.Column('is_sample', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('synced', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Completed'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_registrations'),
    )
    op.create_index('ix_registrations_timestamp', 'registrations', ['timestamp'], unique=False)
    op.create_index('ix_registrations_sync_queue', 'registrations', ['synced', 'status'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_registrations_sync_queue', table_name='registrations')
    op.drop_index('ix_registrations_timestamp', table_name='registrations')
    op.drop_table('registrations')
