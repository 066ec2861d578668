"""Initial schema

Revision ID: 0001
Revises: 
Create Date: 2026-10-16 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def audit_columns():
    return [
        sa.Column('creator', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('create_date', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updater', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('update_date', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # Domain tables
    op.create_table(
        'instrument_type',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'parameter',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'unit',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('abbreviation', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('abbreviation')
    )
    op.create_table(
        'status',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'role',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'office',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('symbol', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'profile',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('edipi', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('edipi'),
        sa.UniqueConstraint('username')
    )

    op.create_table(
        'project',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('federal_id', sa.String(), nullable=True),
        sa.Column('office_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        *audit_columns(),
        sa.ForeignKeyConstraint(['office_id'], ['office.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )

    op.create_table(
        'profile_project_roles',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('profile_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('project_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('role_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profile.id'], ),
        sa.ForeignKeyConstraint(['project_id'], ['project.id'], ),
        sa.ForeignKeyConstraint(['role_id'], ['role.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id', 'project_id', 'role_id', name='unique_profile_project_role')
    )

    op.create_table(
        'instrument',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('type_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('project_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('geometry', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('station', sa.Integer(), nullable=True),
        sa.Column('offset', sa.Integer(), nullable=True),
        *audit_columns(),
        sa.ForeignKeyConstraint(['type_id'], ['instrument_type.id'], ),
        sa.ForeignKeyConstraint(['project_id'], ['project.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )

    op.create_table(
        'instrument_group',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('project_id', postgresql.UUID(as_uuid=True), nullable=True),
        *audit_columns(),
        sa.ForeignKeyConstraint(['project_id'], ['project.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_table(
        'instrument_group_instruments',
        sa.Column('instrument_group_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('instrument_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['instrument_group_id'], ['instrument_group.id'], ),
        sa.ForeignKeyConstraint(['instrument_id'], ['instrument.id'], ),
        sa.PrimaryKeyConstraint('instrument_group_id', 'instrument_id', name='instrument_group_unique_instrument')
    )

    op.create_table(
        'instrument_note',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('instrument_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('body', sa.String(), nullable=False, server_default=''),
        sa.Column('time', sa.DateTime(timezone=True), nullable=False),
        *audit_columns(),
        sa.ForeignKeyConstraint(['instrument_id'], ['instrument.id'], ),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'instrument_status',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('instrument_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('time', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['instrument_id'], ['instrument.id'], ),
        sa.ForeignKeyConstraint(['status_id'], ['status.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('instrument_id', 'time', name='instrument_unique_status_in_time')
    )

    op.create_table(
        'timeseries',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('instrument_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('parameter_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('unit_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['instrument_id'], ['instrument.id'], ),
        sa.ForeignKeyConstraint(['parameter_id'], ['parameter.id'], ),
        sa.ForeignKeyConstraint(['unit_id'], ['unit.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_table(
        'timeseries_measurement',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('timeseries_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['timeseries_id'], ['timeseries.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('timeseries_id', 'time', name='timeseries_unique_time')
    )
    op.create_table(
        'project_timeseries',
        sa.Column('project_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('timeseries_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['project.id'], ),
        sa.ForeignKeyConstraint(['timeseries_id'], ['timeseries.id'], ),
        sa.PrimaryKeyConstraint('project_id', 'timeseries_id', name='project_unique_timeseries')
    )

    op.create_table(
        'plot_configuration',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('project_id', postgresql.UUID(as_uuid=True), nullable=False),
        *audit_columns(),
        sa.ForeignKeyConstraint(['project_id'], ['project.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_table(
        'plot_configuration_timeseries',
        sa.Column('plot_configuration_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('timeseries_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['plot_configuration_id'], ['plot_configuration.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['timeseries_id'], ['timeseries.id'], ),
        sa.PrimaryKeyConstraint('plot_configuration_id', 'timeseries_id', name='plot_configuration_unique_timeseries')
    )

    # AWARE telemetry
    op.create_table(
        'aware_parameter',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('parameter_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('unit_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['parameter_id'], ['parameter.id'], ),
        sa.ForeignKeyConstraint(['unit_id'], ['unit.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key')
    )
    op.create_table(
        'aware_platform',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('aware_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('instrument_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.ForeignKeyConstraint(['instrument_id'], ['instrument.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('aware_id')
    )
    op.create_table(
        'aware_platform_parameter_enabled',
        sa.Column('aware_platform_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('aware_parameter_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['aware_platform_id'], ['aware_platform.id'], ),
        sa.ForeignKeyConstraint(['aware_parameter_id'], ['aware_parameter.id'], ),
        sa.PrimaryKeyConstraint('aware_platform_id', 'aware_parameter_id', name='aware_platform_unique_parameter')
    )


def downgrade() -> None:
    op.drop_table('aware_platform_parameter_enabled')
    op.drop_table('aware_platform')
    op.drop_table('aware_parameter')
    op.drop_table('plot_configuration_timeseries')
    op.drop_table('plot_configuration')
    op.drop_table('project_timeseries')
    op.drop_table('timeseries_measurement')
    op.drop_table('timeseries')
    op.drop_table('instrument_status')
    op.drop_table('instrument_note')
    op.drop_table('instrument_group_instruments')
    op.drop_table('instrument_group')
    op.drop_table('instrument')
    op.drop_table('profile_project_roles')
    op.drop_table('project')
    op.drop_table('profile')
    op.drop_table('office')
    op.drop_table('role')
    op.drop_table('status')
    op.drop_table('unit')
    op.drop_table('parameter')
    op.drop_table('instrument_type')
