"""create_attendance_tables

Revision ID: a7c3e91d0b42
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a7c3e91d0b42'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'attendance_users',
        sa.Column('user_id', sa.String(length=255), primary_key=True),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='attendee'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("role IN ('admin', 'attendee')", name='ck_attendance_users_role'),
    )

    op.create_table(
        'attendance_sessions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('token', sa.String(length=64), nullable=False, unique=True),
        sa.Column('created_by', sa.String(length=255), sa.ForeignKey('attendance_users.user_id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_attendance_sessions_expires', 'attendance_sessions', ['expires_at'])

    # Check-ins keep their parent session forever; deleting a referenced session must fail
    op.create_table(
        'attendance_checkins',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column(
            'session_id',
            sa.Integer(),
            sa.ForeignKey('attendance_sessions.id', ondelete='RESTRICT'),
            nullable=False,
        ),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('checkin_day', sa.Date(), nullable=False),
        sa.UniqueConstraint('user_id', 'checkin_day', name='uq_checkin_user_day'),
    )
    op.create_index('idx_checkins_session', 'attendance_checkins', ['session_id'])
    op.create_index('idx_checkins_checked_in_at', 'attendance_checkins', ['checked_in_at'])

    op.create_table(
        'attendance_name_change_logs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=255), sa.ForeignKey('attendance_users.user_id'), nullable=False),
        sa.Column('previous_name', sa.String(length=200), nullable=True),
        sa.Column('new_name', sa.String(length=200), nullable=False),
        sa.Column('ip_address', sa.String(length=64), nullable=False, server_default='unknown'),
        sa.Column('user_agent', sa.String(length=512), nullable=False, server_default='unknown'),
        sa.Column('changed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_name_change_logs_user', 'attendance_name_change_logs', ['user_id'])


def downgrade():
    op.drop_index('idx_name_change_logs_user', table_name='attendance_name_change_logs')
    op.drop_table('attendance_name_change_logs')
    op.drop_index('idx_checkins_checked_in_at', table_name='attendance_checkins')
    op.drop_index('idx_checkins_session', table_name='attendance_checkins')
    op.drop_table('attendance_checkins')
    op.drop_index('idx_attendance_sessions_expires', table_name='attendance_sessions')
    op.drop_table('attendance_sessions')
    op.drop_table('attendance_users')
