"""create initial schema

Revision ID: 3c9a1f2e7b10
Revises:
Create Date: 2026-10-17 10:12:44

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9a1f2e7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role = sa.Enum(
    'admin', 'president', 'vice_president', 'secretary',
    'holdings_write', 'holdings_read', 'user',
    name='user_role',
)
admin_action = sa.Enum('SET_ROLE', 'SET_STATUS', 'DELETE_USER', name='admin_action')


def _content_columns():
    return [
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('profile_picture', sa.String(length=1024), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('google_id', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('google_id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'admin_action_logs',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('actor_id', sa.UUID(), nullable=True),
        sa.Column('target_user_id', sa.UUID(), nullable=True),
        sa.Column('target_email', sa.String(length=255), nullable=True),
        sa.Column('action', admin_action, nullable=False),
        sa.Column('before', sa.String(length=20), nullable=True),
        sa.Column('after', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['target_user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'home_sections',
        *_content_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(length=1024), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'about_sections',
        *_content_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'gallery_images',
        *_content_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('image_url', sa.String(length=1024), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('alt', sa.String(length=300), nullable=True),
        sa.Column('date', sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'pitches',
        *_content_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('symbol', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'newsletter_posts',
        *_content_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('author', sa.String(length=100), nullable=True),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'events',
        *_content_columns(),
        sa.Column('speaker_name', sa.String(length=100), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'notes',
        *_content_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('author', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'holdings',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('company_name', sa.String(length=200), nullable=False),
        sa.Column('ticker', sa.String(length=20), nullable=False),
        sa.Column('sector', sa.String(length=100), nullable=True),
        sa.Column('share_count', sa.Integer(), nullable=False),
        sa.Column('cost_basis', sa.Numeric(14, 2), nullable=False),
        sa.Column('current_price', sa.Numeric(14, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_holdings_ticker', 'holdings', ['ticker'])

    op.create_table(
        'portfolio',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cash_balance', sa.Numeric(14, 2), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('portfolio')
    op.drop_index('ix_holdings_ticker', table_name='holdings')
    op.drop_table('holdings')
    for table in ('notes', 'events', 'newsletter_posts', 'pitches', 'gallery_images', 'about_sections', 'home_sections'):
        op.drop_table(table)
    op.drop_table('admin_action_logs')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    admin_action.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
