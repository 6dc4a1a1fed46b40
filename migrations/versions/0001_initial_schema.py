"""initial operations portal schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-11-03 09:00:00

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


ID_TYPE = sa.BigInteger().with_variant(sa.Integer(), 'sqlite')
JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def _id():
    return sa.Column('id', ID_TYPE, primary_key=True, autoincrement=True)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _enum(name, *values):
    return sa.Enum(*values, name=name, native_enum=False, length=32)


def upgrade():
    op.create_table(
        'admin_user',
        _id(),
        *_timestamps(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_admin_user_email', 'admin_user', ['email'], unique=True)

    op.create_table(
        'staff_user',
        _id(),
        *_timestamps(),
        sa.Column('username', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=150), nullable=False, server_default=''),
        sa.Column('last_name', sa.String(length=150), nullable=False, server_default=''),
        sa.Column('phone', sa.String(length=32), nullable=False, server_default=''),
        sa.Column('department', sa.String(length=128), nullable=False, server_default=''),
        sa.Column('role', sa.String(length=32), nullable=False, server_default='employee'),
        sa.Column('employee_id', sa.String(length=64), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_staff', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_superuser', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('date_joined', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_staff_user_email', 'staff_user', ['email'], unique=True)

    op.create_table(
        'checkin_record',
        _id(),
        *_timestamps(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('company', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('reason', sa.Text(), nullable=False, server_default=''),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('check_out_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', _enum('checkin_status', 'checked_in', 'checked_out'), nullable=False,
                  server_default='checked_in'),
    )
    op.create_index('ix_checkin_record_check_in_time', 'checkin_record', ['check_in_time'], unique=False)

    op.create_table(
        'news_article',
        _id(),
        *_timestamps(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False, server_default=''),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', sa.String(length=64), nullable=False, server_default='general'),
        sa.Column('priority', sa.String(length=32), nullable=False, server_default='normal'),
        sa.Column('author', sa.String(length=255), nullable=False, server_default='Admin'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'news_item',
        _id(),
        *_timestamps(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_data', sa.Text(), nullable=True),
        sa.Column('avatar_data', sa.Text(), nullable=True),
        sa.Column('news_link', sa.String(length=1024), nullable=True),
        sa.Column('poster_name', sa.String(length=255), nullable=True),
        sa.Column('poster_title', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        'safety_alert',
        _id(),
        *_timestamps(),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('thumbnail_data', sa.Text(), nullable=True),
        sa.Column('pdf_data', sa.Text(), nullable=True),
        sa.Column('pdf_filename', sa.String(length=255), nullable=True),
        sa.Column('pdf_files', JSON_TYPE, nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint('week_number', 'year', name='uq_safety_alert_week_year'),
    )

    op.create_table(
        'operation_schedule',
        _id(),
        *_timestamps(),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('excel_data', sa.Text(), nullable=True),
        sa.Column('excel_filename', sa.String(length=255), nullable=True),
        sa.Column('schedule_type', _enum('schedule_type', 'this_week', 'next_week'), nullable=False),
        sa.Column('team_type', _enum('team_type', 'operations', 'maintenance'), nullable=False,
                  server_default='operations'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_operation_schedule_year_week', 'operation_schedule', ['year', 'week_number'], unique=False)
    op.create_index(
        'uq_operation_schedule_active_bucket',
        'operation_schedule',
        ['schedule_type', 'team_type'],
        unique=True,
        postgresql_where=sa.text('is_active'),
        sqlite_where=sa.text('is_active = 1'),
    )

    op.create_table(
        'realtime_schedule_link',
        _id(),
        *_timestamps(),
        sa.Column('team_type', _enum('link_team_type', 'operations', 'maintenance'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('link_url', sa.String(length=1024), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint('team_type', name='uq_realtime_schedule_link_team_type'),
    )

    op.create_table(
        'depot_induction_video',
        _id(),
        *_timestamps(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('youtube_url', sa.String(length=1024), nullable=False),
        sa.Column('youtube_id', sa.String(length=32), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        'channel_video',
        _id(),
        *_timestamps(),
        sa.Column('video_id', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('thumbnail_url', sa.String(length=1024), nullable=False, server_default=''),
        sa.Column('video_url', sa.String(length=1024), nullable=False, server_default=''),
        sa.Column('duration', sa.String(length=16), nullable=False, server_default='0:00'),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('like_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('channel_title', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('fetched_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_channel_video_video_id', 'channel_video', ['video_id'], unique=True)
    op.create_index('ix_channel_video_published_at', 'channel_video', ['published_at'], unique=False)

    op.create_table(
        'document',
        _id(),
        *_timestamps(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', sa.String(length=64), nullable=False, server_default='general'),
        sa.Column('document_type', sa.String(length=32), nullable=False, server_default='pdf'),
        sa.Column('file', sa.Text(), nullable=False, server_default=''),
        sa.Column('file_size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('download_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('uploaded_by', sa.String(length=255), nullable=False, server_default='Admin'),
    )

    op.create_table(
        'training_content',
        _id(),
        *_timestamps(),
        sa.Column('content_type', _enum('training_content_type', 'training_videos', 'work_instructions', 'documents'),
                  nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('link_url', sa.String(length=1024), nullable=True),
        sa.Column('pdf_data', sa.Text(), nullable=True),
        sa.Column('pdf_filename', sa.String(length=255), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_training_content_type_order', 'training_content', ['content_type', 'display_order'],
                    unique=False)

    op.create_table(
        'api_key',
        _id(),
        *_timestamps(),
        sa.Column('key_name', sa.String(length=128), nullable=False),
        sa.Column('key_value', sa.Text(), nullable=False),
        sa.Column('channel_id', sa.String(length=128), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_api_key_key_name', 'api_key', ['key_name'], unique=True)


def downgrade():
    op.drop_index('ix_api_key_key_name', table_name='api_key')
    op.drop_table('api_key')
    op.drop_index('ix_training_content_type_order', table_name='training_content')
    op.drop_table('training_content')
    op.drop_table('document')
    op.drop_index('ix_channel_video_published_at', table_name='channel_video')
    op.drop_index('ix_channel_video_video_id', table_name='channel_video')
    op.drop_table('channel_video')
    op.drop_table('depot_induction_video')
    op.drop_table('realtime_schedule_link')
    op.drop_index('uq_operation_schedule_active_bucket', table_name='operation_schedule')
    op.drop_index('ix_operation_schedule_year_week', table_name='operation_schedule')
    op.drop_table('operation_schedule')
    op.drop_table('safety_alert')
    op.drop_table('news_item')
    op.drop_table('news_article')
    op.drop_index('ix_checkin_record_check_in_time', table_name='checkin_record')
    op.drop_table('checkin_record')
    op.drop_index('ix_staff_user_email', table_name='staff_user')
    op.drop_table('staff_user')
    op.drop_index('ix_admin_user_email', table_name='admin_user')
    op.drop_table('admin_user')
