"""initial fitness schema: users, catalog, templates, workouts, fasting, water

Revision ID: 4b1e9d2c7a10
Revises:
Create Date: 2026-10-17 10:12:03.114201

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# define the enum type once so we can create/drop it explicitly
fasting_status = postgresql.ENUM('ONGOING', 'COMPLETED', 'CANCELLED', name='fasting_status', create_type=False)


# revision identifiers, used by Alembic.
revision: str = '4b1e9d2c7a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _stamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True, index=True),
    ]


def upgrade() -> None:
    fasting_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('external_uid', sa.String(length=128), nullable=False, unique=True, index=True),
        sa.Column('email', sa.String(length=255), nullable=True, index=True),
        sa.Column('name', sa.String(length=120), nullable=False, server_default=''),
        sa.Column('height', sa.Float(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('goals', sa.Text(), nullable=True),
        sa.Column('settings', sa.Text(), nullable=True),
        *_stamps(),
    )

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False, index=True),
        sa.Column('muscle_groups', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('equipment', sa.String(length=120), nullable=False, server_default=''),
        sa.Column('instructions', sa.Text(), nullable=False, server_default=''),
        sa.Column('is_custom', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_by_user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True),
        *_stamps(),
    )

    op.create_table(
        'workout_templates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', sa.String(length=60), nullable=False, server_default='', index=True),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_stamps(),
    )

    op.create_table(
        'template_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('workout_templates.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id'), nullable=False, index=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('target_sets', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('target_reps', sa.String(length=40), nullable=False, server_default=''),
        sa.Column('target_weight', sa.Numeric(10, 2), nullable=True),
        sa.Column('rest_seconds', sa.Integer(), nullable=False, server_default='0'),
        *_stamps(),
    )

    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('workout_templates.id'), nullable=True, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_stamps(),
    )

    op.create_table(
        'session_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id'), nullable=False, index=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_stamps(),
    )

    op.create_table(
        'exercise_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_exercise_id', sa.Integer(), sa.ForeignKey('session_exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('weight', sa.Numeric(10, 2), nullable=True),
        sa.Column('duration_seconds', sa.Integer(), nullable=True),
        sa.Column('distance_meters', sa.Numeric(10, 2), nullable=True),
        sa.Column('rpe', sa.Integer(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=False),
        *_stamps(),
        sa.CheckConstraint('rpe IS NULL OR (rpe >= 1 AND rpe <= 10)', name='ck_exercise_sets_rpe'),
    )

    op.create_table(
        'fast_types',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('target_hours', sa.Integer(), nullable=False),
        sa.Column('is_custom', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
        *_stamps(),
    )

    op.create_table(
        'fast_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('fast_type_id', sa.Integer(), sa.ForeignKey('fast_types.id'), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('target_minutes', sa.Integer(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('status', fasting_status, nullable=False, server_default='ONGOING'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_stamps(),
    )

    op.create_table(
        'water_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('logged_at', sa.DateTime(timezone=True), nullable=False, index=True),
        *_stamps(),
    )


def downgrade() -> None:
    for table in (
        'water_logs', 'fast_sessions', 'fast_types', 'exercise_sets', 'session_exercises',
        'workout_sessions', 'template_exercises', 'workout_templates', 'exercises', 'users',
    ):
        op.drop_table(table)
    fasting_status.drop(op.get_bind(), checkfirst=True)
