"""create record table for the key-value store

Revision ID: 5c2a7e91d0b4
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a7e91d0b4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Stores bootstrapped with `db.create_all()` already have the table
    if 'record' in set(insp.get_table_names()):
        return

    op.create_table(
        'record',
        sa.Column(
            'key',
            sa.String(length=512)
            .with_variant(sa.String(length=512, collation='C'), 'postgresql')
            .with_variant(sa.String(length=512, collation='utf8mb4_bin'), 'mysql', 'mariadb'),
            nullable=False,
        ),
        sa.Column('value', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )


def downgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    if 'record' in set(insp.get_table_names()):
        op.drop_table('record')
