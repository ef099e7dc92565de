"""create_accounts_vehicles_bookings

Revision ID: 3f1c2a9d8e47
Revises:
Create Date: 2026-10-19 10:12:31.418205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d8e47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

accountrole_enum = sa.Enum('standard', 'admin', name='accountrole')
vehicletype_enum = sa.Enum(
    'sedan', 'suv', 'hatchback', 'truck', 'van', 'sports', 'electric',
    name='vehicletype',
)
fueltype_enum = sa.Enum('petrol', 'diesel', 'electric', 'hybrid', name='fueltype')
transmission_enum = sa.Enum('manual', 'automatic', name='transmission')
bookingstatus_enum = sa.Enum(
    'pending', 'confirmed', 'active', 'completed', 'cancelled',
    name='bookingstatus',
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'accounts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('password_hash', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('role', accountrole_enum, nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False),
        sa.Column('verification_code_hash', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('verification_code_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reset_code_hash', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('reset_code_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('username', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('contact_info', sa.JSON(), nullable=False),
        sa.Column('emergency_contacts', sa.JSON(), nullable=False),
        sa.Column('notification_preferences', sa.JSON(), nullable=False),
        sa.Column('documents', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_accounts_email'), 'accounts', ['email'], unique=True)
    op.create_index(op.f('ix_accounts_reset_code_hash'), 'accounts', ['reset_code_hash'], unique=False)
    op.create_index(op.f('ix_accounts_created_at'), 'accounts', ['created_at'], unique=False)

    op.create_table(
        'vehicles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=120), nullable=False),
        sa.Column('brand', sqlmodel.sql.sqltypes.AutoString(length=80), nullable=False),
        sa.Column('model', sqlmodel.sql.sqltypes.AutoString(length=80), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('type', vehicletype_enum, nullable=False),
        sa.Column('fuel_type', fueltype_enum, nullable=False),
        sa.Column('transmission', transmission_enum, nullable=False),
        sa.Column('seats', sa.Integer(), nullable=False),
        sa.Column('price_per_day', sa.Float(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('specifications', sa.JSON(), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('location', sqlmodel.sql.sqltypes.AutoString(length=120), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('total_reviews', sa.Integer(), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_vehicles_type'), 'vehicles', ['type'], unique=False)
    op.create_index(op.f('ix_vehicles_fuel_type'), 'vehicles', ['fuel_type'], unique=False)
    op.create_index(op.f('ix_vehicles_transmission'), 'vehicles', ['transmission'], unique=False)
    op.create_index(op.f('ix_vehicles_price_per_day'), 'vehicles', ['price_per_day'], unique=False)
    op.create_index(op.f('ix_vehicles_is_available'), 'vehicles', ['is_available'], unique=False)
    op.create_index(op.f('ix_vehicles_created_at'), 'vehicles', ['created_at'], unique=False)

    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('account_id', sa.Uuid(), nullable=False),
        sa.Column('vehicle_id', sa.Uuid(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.Column('status', bookingstatus_enum, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['vehicle_id'], ['vehicles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_bookings_account_id'), 'bookings', ['account_id'], unique=False)
    op.create_index(op.f('ix_bookings_created_at'), 'bookings', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_bookings_created_at'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_account_id'), table_name='bookings')
    op.drop_table('bookings')

    for column in (
        'created_at', 'is_available', 'price_per_day', 'transmission', 'fuel_type', 'type'
    ):
        op.drop_index(op.f(f'ix_vehicles_{column}'), table_name='vehicles')
    op.drop_table('vehicles')

    op.drop_index(op.f('ix_accounts_created_at'), table_name='accounts')
    op.drop_index(op.f('ix_accounts_reset_code_hash'), table_name='accounts')
    op.drop_index(op.f('ix_accounts_email'), table_name='accounts')
    op.drop_table('accounts')

    # Enum types (PostgreSQL)
    bind = op.get_bind()
    for enum in (
        bookingstatus_enum,
        transmission_enum,
        fueltype_enum,
        vehicletype_enum,
        accountrole_enum,
    ):
        enum.drop(bind, checkfirst=True)
