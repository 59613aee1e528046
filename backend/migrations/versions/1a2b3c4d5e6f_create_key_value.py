"""create key_value table for best scores

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'key_value' in insp.get_table_names():
        return
    op.create_table(
        'key_value',
        sa.Column('key', sa.String(length=128), primary_key=True),
        sa.Column('value', sa.Text(), nullable=False),
    )


def downgrade():
    op.drop_table('key_value')
