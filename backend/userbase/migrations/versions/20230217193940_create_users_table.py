"""create_users_table

Revision ID: 20230217193940
Revises:
Create Date: 2023-02-17 19:39:40.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20230217193940'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # A users table created before versioning started is adopted as is.
    if sa.inspect(op.get_bind()).has_table('users'):
        return
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('username'),
        sqlite_autoincrement=True,
    )


def downgrade():
    if not sa.inspect(op.get_bind()).has_table('users'):
        return
    op.drop_table('users')
