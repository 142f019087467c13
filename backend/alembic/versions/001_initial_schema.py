"""Initial hydroponic monitor schema

Revision ID: 001
Create Date: 2025-05-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # User profiles (id shared with the identity service)
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)

    # Plant tolerance profiles
    op.create_table(
        'plant_profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('ph_min', sa.Float(), nullable=False),
        sa.Column('ph_max', sa.Float(), nullable=False),
        sa.Column('ec_min', sa.Float(), nullable=False),
        sa.Column('ec_max', sa.Float(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.CheckConstraint('ph_min <= ph_max', name='ck_plant_profiles_ph_range'),
        sa.CheckConstraint('ec_min <= ec_max', name='ck_plant_profiles_ec_range'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_plant_profiles_name', 'plant_profiles', ['name'])

    # Single derived Multiplant row, upserted by name
    op.create_table(
        'multiplant_profile',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('ph_min', sa.Float(), nullable=False),
        sa.Column('ph_max', sa.Float(), nullable=False),
        sa.Column('ec_min', sa.Float(), nullable=False),
        sa.Column('ec_max', sa.Float(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_multiplant_profile_name')
    )

    # Sensor readings (append-only)
    op.create_table(
        'sensor_data',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('ph', sa.Float(), nullable=True),
        sa.Column('ec', sa.Float(), nullable=True),
        sa.Column('water_temperature', sa.Float(), nullable=True),
        sa.Column('pump1', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('pump2', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('pump3', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('pump4', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('plant_name', sa.String(100), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_sensor_data_created_at', 'sensor_data', ['created_at'])
    op.create_index('ix_sensor_data_plant_name', 'sensor_data', ['plant_name'])

    # Active profile singleton; may reference either profile table
    op.create_table(
        'system_config',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('selected_plant_id', sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.execute("INSERT INTO system_config (selected_plant_id) VALUES (NULL)")


def downgrade() -> None:
    op.drop_table('system_config')
    op.drop_table('sensor_data')
    op.drop_table('multiplant_profile')
    op.drop_table('plant_profiles')
    op.drop_table('profiles')
