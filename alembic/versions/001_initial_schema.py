"""Accounts, warehouses and shipment references

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Accounts table
    op.create_table(
        'accounts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # Warehouses table
    op.create_table(
        'warehouses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.String(36), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('registered_name', sa.String(255), nullable=True),
        sa.Column('contact_person', sa.JSON(), nullable=False),
        sa.Column('address', sa.JSON(), nullable=False),
        sa.Column('return_address', sa.JSON(), nullable=True),
        sa.Column('gstin', sa.String(15), nullable=True),
        sa.Column('support_contact', sa.JSON(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('code', name='uq_warehouses_code'),
        sa.UniqueConstraint('account_id', 'name', name='uq_warehouse_account_name'),
    )
    op.create_index('ix_warehouses_account_id', 'warehouses', ['account_id'])
    op.create_index('ix_warehouse_account_active', 'warehouses', ['account_id', 'is_active'])
    # One default per account, enforced by the database
    op.create_index(
        'ix_warehouse_account_default',
        'warehouses',
        ['account_id'],
        unique=True,
        postgresql_where=sa.text('is_default'),
        sqlite_where=sa.text('is_default'),
    )

    # Shipments table (only the columns the directory reads)
    op.create_table(
        'shipments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.String(36), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('warehouse_id', sa.String(36), sa.ForeignKey('warehouses.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('awb_number', sa.String(100), nullable=True),
        sa.Column(
            'status',
            sa.Enum('CREATED', 'PICKUP_SCHEDULED', 'IN_TRANSIT', 'DELIVERED', 'RTO', 'CANCELLED', name='shipmentstatus'),
            nullable=False,
            server_default='CREATED',
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_shipments_account_id', 'shipments', ['account_id'])
    op.create_index('ix_shipments_warehouse_id', 'shipments', ['warehouse_id'])
    op.create_index('ix_shipment_awb', 'shipments', ['awb_number'])


def downgrade() -> None:
    op.drop_table('shipments')
    op.drop_index('ix_warehouse_account_default', table_name='warehouses')
    op.drop_table('warehouses')
    op.drop_table('accounts')
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TYPE IF EXISTS shipmentstatus")
