"""initial schema

Revision ID: 4b7e2d91c0a3
Revises:
Create Date: 2026-10-17 09:12:44.381205

"""
import json
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b7e2d91c0a3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


subscription_status_enum = sa.Enum(
    'trialing', 'active', 'cancelled', 'past_due',
    name='subscription_status', native_enum=False,
)
billing_cycle_enum = sa.Enum('monthly', 'yearly', name='billing_cycle', native_enum=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def _owner() -> sa.Column:
    return sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=150), nullable=False, unique=True),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('is_super_admin', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    plans = op.create_table(
        'subscription_plans',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('display_name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price_monthly', sa.Numeric(10, 2), nullable=False, server_default=sa.text('0')),
        sa.Column('price_yearly', sa.Numeric(10, 2), nullable=False, server_default=sa.text('0')),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default=sa.text("'GBP'")),
        sa.Column('max_appointments', sa.Integer(), nullable=False, server_default=sa.text('-1')),
        sa.Column('max_locations', sa.Integer(), nullable=False, server_default=sa.text('-1')),
        sa.Column('max_services', sa.Integer(), nullable=False, server_default=sa.text('-1')),
        sa.Column('features', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default=sa.text('0')),
        *_timestamps(),
    )

    op.create_table(
        'user_subscriptions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('plan_id', sa.Integer(), sa.ForeignKey('subscription_plans.id'), nullable=False),
        sa.Column('status', subscription_status_enum, nullable=False, server_default=sa.text("'active'")),
        sa.Column('billing_cycle', billing_cycle_enum, nullable=False, server_default=sa.text("'monthly'")),
        sa.Column('current_period_start', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('current_period_end', sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'address_data',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        _owner(),
        sa.Column('location_name', sa.Text(), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city_town', sa.Text(), nullable=True),
        sa.Column('post_code', sa.Text(), nullable=True),
        sa.Column('distance', sa.Float(), nullable=True),
        sa.Column('contact_name', sa.Text(), nullable=True),
        sa.Column('email_address', sa.Text(), nullable=True),
        sa.Column('contact_details', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.UniqueConstraint('user_id', 'location_name', name='uq_location_user_name'),
    )
    op.create_index('ix_address_data_user_id', 'address_data', ['user_id'])

    op.create_table(
        'services',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        _owner(),
        sa.Column('service_name', sa.Text(), nullable=False),
        sa.Column('type', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.UniqueConstraint('user_id', 'service_name', name='uq_service_user_name'),
    )
    op.create_index('ix_services_user_id', 'services', ['user_id'])

    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        _owner(),
        sa.Column('client_name', sa.Text(), nullable=False),
        sa.Column('service', sa.Text(), nullable=False),
        sa.Column('type', sa.Text(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('location', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('paid', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('distance', sa.Float(), nullable=True),
        sa.Column('payment_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_appointments_user_id', 'appointments', ['user_id'])
    op.create_index('ix_appointments_date', 'appointments', ['date'])
    op.create_index('ix_appointments_user_date_id', 'appointments', ['user_id', 'date', 'id'])

    op.bulk_insert(
        plans,
        [
            {
                'name': 'free',
                'display_name': 'Free',
                'description': 'Get started with basic features',
                'price_monthly': 0,
                'price_yearly': 0,
                'max_appointments': 50,
                'max_locations': 2,
                'max_services': 10,
                'features': json.dumps(['Basic appointment tracking', '2 locations', '10 services', 'Email support']),
                'sort_order': 1,
            },
            {
                'name': 'starter',
                'display_name': 'Starter',
                'description': 'Perfect for small businesses',
                'price_monthly': 3.99,
                'price_yearly': 0,
                'max_appointments': 500,
                'max_locations': 5,
                'max_services': 25,
                'features': json.dumps(['Up to 500 appointments/month', '5 locations', '25 services', 'Invoice generation', 'Priority email support']),
                'sort_order': 2,
            },
            {
                'name': 'professional',
                'display_name': 'Professional',
                'description': 'For growing businesses',
                'price_monthly': 9.99,
                'price_yearly': 0,
                'max_appointments': -1,
                'max_locations': -1,
                'max_services': -1,
                'features': json.dumps(['Unlimited appointments', 'Unlimited locations', 'Unlimited services', 'Invoice generation', 'Financial reports', 'Priority support', 'Data export']),
                'sort_order': 3,
            },
        ],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_appointments_user_date_id', table_name='appointments')
    op.drop_index('ix_appointments_date', table_name='appointments')
    op.drop_index('ix_appointments_user_id', table_name='appointments')
    op.drop_table('appointments')
    op.drop_index('ix_services_user_id', table_name='services')
    op.drop_table('services')
    op.drop_index('ix_address_data_user_id', table_name='address_data')
    op.drop_table('address_data')
    op.drop_table('user_subscriptions')
    op.drop_table('subscription_plans')
    op.drop_table('users')
