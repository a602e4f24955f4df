"""Initial PG Manager schema

Revision ID: 20261017_000001
Revises: None
Create Date: 2026-10-17

Creates users, rooms, room_edit_history, tenants, payments, rent_records,
meters, meter_readings and complaints.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUM_NAMES = (
    'user_role', 'room_status', 'tenant_status', 'deposit_return_status',
    'payment_method', 'complaint_priority', 'complaint_status',
)


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column(
            'role',
            sa.Enum('admin', 'tenant', name='user_role', create_constraint=True),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('room_number', sa.String(length=50), nullable=False),
        sa.Column('room_type', sa.String(length=50), nullable=False),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('floor', sa.Integer(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('occupied', 'vacant', 'under_maintenance', name='room_status', create_constraint=True),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('owner_id', 'room_number', name='uq_rooms_owner_room_number'),
    )
    op.create_index('ix_rooms_owner_id', 'rooms', ['owner_id'])
    op.create_index('ix_rooms_status', 'rooms', ['status'])

    op.create_table(
        'room_edit_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=False),
        sa.Column('field_name', sa.String(length=50), nullable=False),
        sa.Column('old_value', sa.Text(), nullable=True),
        sa.Column('new_value', sa.Text(), nullable=True),
        sa.Column('edited_by', sa.Integer(), nullable=False),
        sa.Column('edited_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['edited_by'], ['users.id']),
    )
    op.create_index('ix_room_edit_history_room_id', 'room_edit_history', ['room_id'])

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('room_id', sa.Integer(), nullable=True),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('join_date', sa.Date(), nullable=False),
        sa.Column('check_in_date', sa.Date(), nullable=True),
        sa.Column('check_out_date', sa.Date(), nullable=True),
        sa.Column('checked_out_by', sa.Integer(), nullable=True),
        sa.Column(
            'status',
            sa.Enum(
                'active', 'notice_period', 'inactive', 'checked_out',
                name='tenant_status', create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('deposit_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('deposit_return_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column(
            'deposit_return_status',
            sa.Enum('pending', 'full', 'partial', 'none', name='deposit_return_status', create_constraint=True),
            nullable=True,
        ),
        sa.Column('id_proof_url', sa.String(length=500), nullable=True),
        sa.Column('agreement_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['checked_out_by'], ['users.id']),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_tenants_owner_id', 'tenants', ['owner_id'])
    op.create_index('ix_tenants_room_id', 'tenants', ['room_id'])
    op.create_index('ix_tenants_status', 'tenants', ['status'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('payment_month', sa.Date(), nullable=False),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('deposit_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('other_charges', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'payment_method',
            sa.Enum(
                'cash', 'upi', 'bank_transfer', 'card', 'cheque',
                name='payment_method', create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('tenant_id', 'payment_month', name='uq_payments_tenant_month'),
    )
    op.create_index('ix_payments_tenant_id', 'payments', ['tenant_id'])
    op.create_index('ix_payments_owner_id', 'payments', ['owner_id'])
    op.create_index('ix_payments_payment_month', 'payments', ['payment_month'])

    op.create_table(
        'rent_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('paid_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('tenant_id', 'due_date', name='uq_rent_records_tenant_due_date'),
    )
    op.create_index('ix_rent_records_tenant_id', 'rent_records', ['tenant_id'])
    op.create_index('ix_rent_records_owner_id', 'rent_records', ['owner_id'])
    op.create_index('ix_rent_records_due_date', 'rent_records', ['due_date'])

    op.create_table(
        'meters',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=False),
        sa.Column('meter_number', sa.String(length=50), nullable=False),
        sa.Column('starting_reading', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('room_id'),
    )
    op.create_index('ix_meters_owner_id', 'meters', ['owner_id'])

    op.create_table(
        'meter_readings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('meter_id', sa.Integer(), nullable=False),
        sa.Column('reading_value', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('reading_date', sa.Date(), nullable=False),
        sa.Column('units_consumed', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('bill_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('recorded_by', sa.Integer(), nullable=True),
        sa.Column('recorded_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['meter_id'], ['meters.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recorded_by'], ['users.id']),
    )
    op.create_index('ix_meter_readings_meter_id', 'meter_readings', ['meter_id'])

    op.create_table(
        'complaints',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=True),
        sa.Column('room_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column(
            'priority',
            sa.Enum('low', 'medium', 'high', name='complaint_priority', create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            'status',
            sa.Enum('open', 'in_progress', 'resolved', name='complaint_status', create_constraint=True),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_complaints_owner_id', 'complaints', ['owner_id'])
    op.create_index('ix_complaints_tenant_id', 'complaints', ['tenant_id'])
    op.create_index('ix_complaints_status', 'complaints', ['status'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table('complaints')
    op.drop_table('meter_readings')
    op.drop_table('meters')
    op.drop_table('rent_records')
    op.drop_table('payments')
    op.drop_table('tenants')
    op.drop_table('room_edit_history')
    op.drop_table('rooms')
    op.drop_table('users')

    if op.get_bind().dialect.name == 'postgresql':
        for name in ENUM_NAMES:
            op.execute(f"DROP TYPE IF EXISTS {name}")
