"""create stored_blobs

Revision ID: b3e1d2c4a5f6
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b3e1d2c4a5f6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'stored_blobs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', 'key', name='uq_stored_blobs_owner_key'),
    )
    op.create_index('ix_stored_blobs_owner_id', 'stored_blobs', ['owner_id'])


def downgrade():
    op.drop_index('ix_stored_blobs_owner_id', table_name='stored_blobs')
    op.drop_table('stored_blobs')
