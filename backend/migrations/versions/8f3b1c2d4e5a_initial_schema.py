"""initial showcase schema

Revision ID: 8f3b1c2d4e5a
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '8f3b1c2d4e5a'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=16), nullable=True),
        sa.Column('first_name', sa.String(length=100)),
        sa.Column('last_name', sa.String(length=100)),
        sa.Column('profile_image', sa.String(length=500)),
        sa.Column('bio', sa.Text()),
        sa.Column('website', sa.String(length=500)),
        sa.Column('github', sa.String(length=100)),
        sa.Column('twitter', sa.String(length=100)),
        sa.Column('role', sa.Enum('USER', 'ADMIN', name='user_role', create_constraint=True), nullable=False),
        sa.Column('username_last_changed', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('github_url', sa.String(length=500)),
        sa.Column('demo_url', sa.String(length=500)),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('DEVELOPMENT', 'PUBLISHED', 'ARCHIVED', name='project_status', create_constraint=True),
            nullable=False,
        ),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'title', name='uq_projects_user_title'),
    )
    op.create_index('ix_projects_public_featured', 'projects', ['is_public', 'is_featured'])

    op.create_table(
        'project_tags',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=40), nullable=False),
        sa.UniqueConstraint('project_id', 'name', name='uq_project_tags_project_name'),
    )
    op.create_index('ix_project_tags_name', 'project_tags', ['name'])

    op.create_table(
        'media',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=False),
        sa.Column('public_id', sa.String(length=255)),
        sa.Column('alt_text', sa.String(length=255)),
        sa.Column('media_type', sa.String(length=20), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_media_project_id', 'media', ['project_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_comments_project_created', 'comments', ['project_id', 'created_at'])

    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reporter_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'reason',
            sa.Enum('SPAM', 'INAPPROPRIATE', 'COPYRIGHT', 'OTHER', name='report_reason', create_constraint=True),
            nullable=False,
        ),
        sa.Column('details', sa.Text()),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'REVIEWED', 'IGNORED', 'RESOLVED', name='report_status', create_constraint=True),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index('ix_reports_status', 'reports', ['status'])
    op.create_index('ix_reports_project_reporter', 'reports', ['project_id', 'reporter_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column(
            'type',
            sa.Enum('REPORT', 'PROJECT', 'GENERAL', name='notification_type', create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            'status',
            sa.Enum('UNREAD', 'READ', name='notification_status', create_constraint=True),
            nullable=False,
        ),
        sa.Column('link', sa.String(length=500)),
        *_timestamps(),
    )
    op.create_index('ix_notifications_user_status', 'notifications', ['user_id', 'status'])


def downgrade():
    op.drop_table('notifications')
    op.drop_table('reports')
    op.drop_table('comments')
    op.drop_table('media')
    op.drop_table('project_tags')
    op.drop_table('projects')
    op.drop_table('users')
    for enum_name in (
        'notification_status',
        'notification_type',
        'report_status',
        'report_reason',
        'project_status',
        'user_role',
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
