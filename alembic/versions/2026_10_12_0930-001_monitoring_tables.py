"""Add roster, session, wellness and load tables

Revision ID: 001
Revises:
Create Date: 2026-10-12 09:30:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create monitoring tables."""
    op.create_table('athletes', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('full_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('state', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False, server_default='active'),
        sa.Column('injured', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('medical_restriction', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('suspended_until', sa.Date(), nullable=True),
        sa.Column('load_restricted', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('last_injury_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_athletes_team_id'), 'athletes', ['team_id'], unique=False)

    op.create_table('training_sessions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('scheduled_start', sa.DateTime(), nullable=False),
        sa.Column('planned_duration_minutes', sa.Integer(), nullable=False, server_default='90'),
        sa.Column('actual_duration_minutes', sa.Integer(), nullable=True),
        sa.Column('session_type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False,
                  server_default='training'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_training_sessions_team_id'), 'training_sessions', ['team_id'], unique=False)
    op.create_index(op.f('ix_training_sessions_scheduled_start'), 'training_sessions', ['scheduled_start'],
                    unique=False)

    op.create_table('attendance_records', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('presence_status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['athlete_id'], ['athletes.id'], ),
        sa.ForeignKeyConstraint(['session_id'], ['training_sessions.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('athlete_id', 'session_id', name='uq_attendance_athlete_session'))
    op.create_index(op.f('ix_attendance_records_athlete_id'), 'attendance_records', ['athlete_id'], unique=False)
    op.create_index(op.f('ix_attendance_records_session_id'), 'attendance_records', ['session_id'], unique=False)

    op.create_table('wellness_submissions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('kind', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('ratings', sa.JSON(), nullable=False),
        sa.Column('minutes_effective', sa.Integer(), nullable=True),
        sa.Column('internal_load', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['athlete_id'], ['athletes.id'], ),
        sa.ForeignKeyConstraint(['session_id'], ['training_sessions.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('athlete_id', 'session_id', 'kind', name='uq_wellness_athlete_session_kind'))
    op.create_index(op.f('ix_wellness_submissions_athlete_id'), 'wellness_submissions', ['athlete_id'],
                    unique=False)
    op.create_index(op.f('ix_wellness_submissions_session_id'), 'wellness_submissions', ['session_id'],
                    unique=False)

    op.create_table('wellness_unlocks', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('kind', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('state', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('reason', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('requested_at', sa.DateTime(), nullable=True),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
        sa.Column('resolved_by', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.ForeignKeyConstraint(['athlete_id'], ['athletes.id'], ),
        sa.ForeignKeyConstraint(['session_id'], ['training_sessions.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('athlete_id', 'session_id', 'kind', name='uq_unlock_athlete_session_kind'))
    op.create_index(op.f('ix_wellness_unlocks_athlete_id'), 'wellness_unlocks', ['athlete_id'], unique=False)
    op.create_index(op.f('ix_wellness_unlocks_session_id'), 'wellness_unlocks', ['session_id'], unique=False)

    op.create_table('load_samples', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('internal_load', sa.Float(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['athlete_id'], ['athletes.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('athlete_id', 'date', name='uq_load_athlete_date'))
    op.create_index(op.f('ix_load_samples_athlete_id'), 'load_samples', ['athlete_id'], unique=False)
    op.create_index(op.f('ix_load_samples_date'), 'load_samples', ['date'], unique=False)


def downgrade() -> None:
    """Drop monitoring tables."""
    for table in ('load_samples', 'wellness_unlocks', 'wellness_submissions', 'attendance_records'):
        op.drop_table(table)
    op.drop_index(op.f('ix_training_sessions_scheduled_start'), table_name='training_sessions')
    op.drop_index(op.f('ix_training_sessions_team_id'), table_name='training_sessions')
    op.drop_table('training_sessions')
    op.drop_index(op.f('ix_athletes_team_id'), table_name='athletes')
    op.drop_table('athletes')
