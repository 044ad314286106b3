"""create_scheduling_tables

Revision ID: c4e1a9b27d10
Revises:
Create Date: 2025-10-14 09:12:44.510237

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c4e1a9b27d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Skip tables that create_all() already built in development databases
    from sqlalchemy import inspect
    conn = op.get_bind()
    existing_tables = inspect(conn).get_table_names()

    if 'users' not in existing_tables:
        op.create_table(
            'users',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('username', sa.String(length=100), nullable=False),
            sa.Column('role', sa.String(length=20), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.Column('department', sa.String(length=100), nullable=True),
            sa.Column('section', sa.String(length=100), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('username')
        )
        op.create_index('idx_users_active', 'users', ['is_active'])
        op.create_index('idx_users_role', 'users', ['role'])

    if 'conventions' not in existing_tables:
        op.create_table(
            'conventions',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('title', sa.String(length=200), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('type', sa.String(length=20), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.Column('created_by_id', sa.String(length=36), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['created_by_id'], ['users.id']),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_conventions_active', 'conventions', ['is_active'])
        op.create_index('idx_conventions_type', 'conventions', ['type'])

    if 'user_conventions' not in existing_tables:
        op.create_table(
            'user_conventions',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(length=36), nullable=False),
            sa.Column('convention_id', sa.String(length=36), nullable=False),
            sa.Column('selection_type', sa.String(length=20), nullable=False),
            sa.Column('assigned_by_id', sa.String(length=36), nullable=True),
            sa.Column('assigned_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
            sa.ForeignKeyConstraint(['convention_id'], ['conventions.id']),
            sa.ForeignKeyConstraint(['assigned_by_id'], ['users.id']),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('user_id', 'convention_id', name='unique_user_convention')
        )
        op.create_index('idx_user_conventions_user', 'user_conventions', ['user_id'])

    if 'shifts' not in existing_tables:
        op.create_table(
            'shifts',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('title', sa.String(length=200), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('start_time', sa.DateTime(), nullable=False),
            sa.Column('end_time', sa.DateTime(), nullable=False),
            sa.Column('shift_type', sa.String(length=20), nullable=False),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )

    if 'shift_assignments' not in existing_tables:
        op.create_table(
            'shift_assignments',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(length=36), nullable=False),
            sa.Column('shift_id', sa.String(length=36), nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('created_by_id', sa.String(length=36), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
            sa.ForeignKeyConstraint(['shift_id'], ['shifts.id']),
            sa.ForeignKeyConstraint(['created_by_id'], ['users.id']),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('user_id', 'shift_id', 'date', name='unique_user_shift_date')
        )
        op.create_index('idx_shift_assignments_user_date', 'shift_assignments', ['user_id', 'date'])


def downgrade():
    op.drop_index('idx_shift_assignments_user_date', table_name='shift_assignments')
    op.drop_table('shift_assignments')
    op.drop_table('shifts')
    op.drop_index('idx_user_conventions_user', table_name='user_conventions')
    op.drop_table('user_conventions')
    op.drop_index('idx_conventions_type', table_name='conventions')
    op.drop_index('idx_conventions_active', table_name='conventions')
    op.drop_table('conventions')
    op.drop_index('idx_users_role', table_name='users')
    op.drop_index('idx_users_active', table_name='users')
    op.drop_table('users')
