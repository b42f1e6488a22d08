"""Baseline migration - tenant, contact and task tables

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates organizations, users, addresses, clients, providers, couriers,
tasks, task_photos and task_history. Constraint names match the models
because the services classify integrity errors by them.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    # ==========================================================================
    # Tenants and accounts
    # ==========================================================================
    op.create_table(
        'organizations',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(120), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('name', name='uq_organizations_name'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'organization_id',
            sa.Uuid(),
            sa.ForeignKey('organizations.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), server_default=sa.text("'COURIER'"), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('TRUE'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('idx_users_org', 'users', ['organization_id'])

    # ==========================================================================
    # Addresses and contact parties
    # ==========================================================================
    op.create_table(
        'addresses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('street', sa.String(200), nullable=True),
        sa.Column('street_number', sa.String(20), nullable=True),
        sa.Column('complement', sa.String(100), nullable=True),
        sa.Column('city', sa.String(80), nullable=True),
        sa.Column('province', sa.String(80), nullable=True),
        sa.Column('postal_code', sa.String(20), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'clients',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'organization_id',
            sa.Uuid(),
            sa.ForeignKey('organizations.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column(
            'address_id',
            sa.Uuid(),
            sa.ForeignKey('addresses.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('phone_number', sa.String(40), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('TRUE'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('organization_id', 'name', name='uq_clients_org_name'),
    )

    op.create_table(
        'providers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'organization_id',
            sa.Uuid(),
            sa.ForeignKey('organizations.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column(
            'address_id',
            sa.Uuid(),
            sa.ForeignKey('addresses.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('contact_name', sa.String(120), nullable=True),
        sa.Column('contact_phone', sa.String(40), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('TRUE'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('organization_id', 'name', name='uq_providers_org_name'),
    )

    op.create_table(
        'couriers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'organization_id',
            sa.Uuid(),
            sa.ForeignKey('organizations.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column(
            'user_id',
            sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('phone_number', sa.String(40), nullable=False),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('vehicle_type', sa.String(50), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('TRUE'), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_couriers_org_active', 'couriers', ['organization_id', 'is_active'])
    op.create_index('idx_couriers_user', 'couriers', ['user_id'])

    # ==========================================================================
    # Tasks
    # ==========================================================================
    op.create_table(
        'tasks',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'organization_id',
            sa.Uuid(),
            sa.ForeignKey('organizations.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('reference_number', sa.String(50), nullable=True),
        sa.Column('client_id', sa.Uuid(), sa.ForeignKey('clients.id', ondelete='SET NULL'), nullable=True),
        sa.Column('provider_id', sa.Uuid(), sa.ForeignKey('providers.id', ondelete='SET NULL'), nullable=True),
        sa.Column(
            'address_override_id',
            sa.Uuid(),
            sa.ForeignKey('addresses.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('contact', sa.String(120), nullable=True),
        sa.Column('courier_id', sa.Uuid(), sa.ForeignKey('couriers.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', sa.String(30), server_default=sa.text("'PENDING'"), nullable=False),
        sa.Column('priority', sa.String(10), server_default=sa.text("'NORMAL'"), nullable=False),
        sa.Column('scheduled_date', sa.String(10), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('courier_notes', sa.Text(), nullable=True),
        sa.Column('mbl', sa.String(50), nullable=True),
        sa.Column('hbl', sa.String(50), nullable=True),
        sa.Column('freight_cert', sa.Boolean(), server_default=sa.text('FALSE'), nullable=False),
        sa.Column('fo_cert', sa.Boolean(), server_default=sa.text('FALSE'), nullable=False),
        sa.Column('bunker_cert', sa.Boolean(), server_default=sa.text('FALSE'), nullable=False),
        sa.Column('linked_task_id', sa.Uuid(), sa.ForeignKey('tasks.id', ondelete='SET NULL'), nullable=True),
        sa.Column('receipt_photo_url', sa.String(500), nullable=True),
        sa.Column('photo_required', sa.Boolean(), server_default=sa.text('FALSE'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('organization_id', 'reference_number', name='uq_tasks_org_reference_number'),
        sa.CheckConstraint('client_id IS NULL OR provider_id IS NULL', name='ck_tasks_single_contact_party'),
    )
    op.create_index('idx_tasks_org_created', 'tasks', ['organization_id', 'created_at'])
    op.create_index('idx_tasks_org_status', 'tasks', ['organization_id', 'status'])
    op.create_index('idx_tasks_courier', 'tasks', ['courier_id'])

    op.create_table(
        'task_photos',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('task_id', sa.Uuid(), sa.ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('photo_url', sa.String(500), nullable=False),
        sa.Column('photo_type', sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_task_photos_task', 'task_photos', ['task_id'])

    op.create_table(
        'task_history',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('task_id', sa.Uuid(), sa.ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('previous_status', sa.String(30), nullable=True),
        sa.Column('new_status', sa.String(30), nullable=True),
        sa.Column('changed_by', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('changed_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_task_history_task_changed', 'task_history', ['task_id', 'changed_at'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        'task_history',
        'task_photos',
        'tasks',
        'couriers',
        'providers',
        'clients',
        'addresses',
        'users',
        'organizations',
    ):
        op.drop_table(table)
