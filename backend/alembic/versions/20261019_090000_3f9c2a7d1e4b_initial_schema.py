"""initial schema

Revision ID: 3f9c2a7d1e4b
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1e4b'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('default_unit', sa.String(length=20), nullable=False),
        sa.Column('water_orders_enabled', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_tenants_id'), 'tenants', ['id'], unique=False)
    op.create_index(op.f('ix_tenants_name'), 'tenants', ['name'], unique=True)

    op.create_table(
        'tenant_members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'user_id', name='uq_tenant_member'),
    )
    op.create_index(op.f('ix_tenant_members_id'), 'tenant_members', ['id'], unique=False)
    op.create_index(op.f('ix_tenant_members_tenant_id'), 'tenant_members', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_tenant_members_user_id'), 'tenant_members', ['user_id'], unique=False)

    op.create_table(
        'availability_windows',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('gallons', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('end_time > start_time', name='check_window_times'),
        sa.CheckConstraint('gallons >= 0', name='check_window_gallons_non_negative'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_availability_windows_id'), 'availability_windows', ['id'], unique=False)
    op.create_index(op.f('ix_availability_windows_tenant_id'), 'availability_windows', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_availability_windows_start_time'), 'availability_windows', ['start_time'], unique=False)
    op.create_index(op.f('ix_availability_windows_end_time'), 'availability_windows', ['end_time'], unique=False)

    op.create_table(
        'water_orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('total_gallons', sa.Float(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('reviewed_by', sa.String(length=128), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.CheckConstraint('end_time > start_time', name='check_order_times'),
        sa.CheckConstraint('total_gallons >= 0', name='check_order_gallons_non_negative'),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'completed')",
            name='check_order_status',
        ),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_water_orders_id'), 'water_orders', ['id'], unique=False)
    op.create_index(op.f('ix_water_orders_tenant_id'), 'water_orders', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_water_orders_user_id'), 'water_orders', ['user_id'], unique=False)
    op.create_index(op.f('ix_water_orders_start_time'), 'water_orders', ['start_time'], unique=False)
    op.create_index(op.f('ix_water_orders_end_time'), 'water_orders', ['end_time'], unique=False)
    op.create_index(op.f('ix_water_orders_status'), 'water_orders', ['status'], unique=False)

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('message', sa.String(length=500), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('link', sa.String(length=500), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_notifications_id'), 'notifications', ['id'], unique=False)
    op.create_index(op.f('ix_notifications_tenant_id'), 'notifications', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'], unique=False)
    op.create_index(op.f('ix_notifications_created_at'), 'notifications', ['created_at'], unique=False)

    op.create_table(
        'usage_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('gallons', sa.Float(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'user_id', 'date', name='uq_usage_user_day'),
    )
    op.create_index(op.f('ix_usage_entries_id'), 'usage_entries', ['id'], unique=False)
    op.create_index(op.f('ix_usage_entries_tenant_id'), 'usage_entries', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_usage_entries_user_id'), 'usage_entries', ['user_id'], unique=False)
    op.create_index(op.f('ix_usage_entries_date'), 'usage_entries', ['date'], unique=False)


def downgrade() -> None:
    op.drop_table('usage_entries')
    op.drop_table('notifications')
    op.drop_table('water_orders')
    op.drop_table('availability_windows')
    op.drop_table('tenant_members')
    op.drop_table('tenants')
