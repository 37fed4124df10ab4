"""Initial schema

Revision ID: 3b7e1c9d2a40
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel.sql.sqltypes

# revision identifiers, used by Alembic.
revision: str = '3b7e1c9d2a40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('password_hash', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('balance', sa.Integer(), nullable=False),
        sa.Column('plan_type', sa.Enum('FREE', 'PREMIUM', name='plantype'), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False),
        sa.Column('onboarding_completed', sa.Boolean(), nullable=False),
        sa.Column('commitment', sa.Enum('COMMITTED', 'CURIOUS', name='commitment'), nullable=True),
        sa.Column('income_range', sa.Enum('LOW', 'MEDIUM', 'HIGH', 'UNEMPLOYED', name='incomerange'), nullable=True),
        sa.Column('profile_image', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('fraud_score', sa.Integer(), nullable=False),
        sa.Column('is_suspended', sa.Boolean(), nullable=False),
        sa.Column('suspended_reason', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_login_ip', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_plan_type'), 'users', ['plan_type'], unique=False)

    op.create_table(
        'books',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('author', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('genre', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('synopsis', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('content', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('cover_image', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('base_reward_money', sa.Integer(), nullable=False),
        sa.Column('reward_points', sa.Integer(), nullable=False),
        sa.Column('premium_multiplier', sa.Float(), nullable=False),
        sa.Column('word_count', sa.Integer(), nullable=False),
        sa.Column('page_count', sa.Integer(), nullable=False),
        sa.Column('estimated_read_time', sa.Integer(), nullable=False),
        sa.Column('required_level', sa.Integer(), nullable=False),
        sa.Column('is_initial_book', sa.Boolean(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('reviews_count', sa.Integer(), nullable=False),
        sa.Column('ratings_sum', sa.Integer(), nullable=False),
        sa.Column('average_rating', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_required_level'), 'books', ['required_level'], unique=False)
    op.create_index(op.f('ix_books_active'), 'books', ['active'], unique=False)

    op.create_table(
        'reading_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('book_id', sa.Uuid(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('total_time', sa.Integer(), nullable=False),
        sa.Column('active_time', sa.Integer(), nullable=False),
        sa.Column('is_valid', sa.Boolean(), nullable=False),
        sa.Column('fraud_score', sa.Integer(), nullable=False),
        sa.Column('decision', sa.Enum('APPROVED', 'REJECTED', name='sessiondecision'), nullable=True),
        sa.Column('can_receive_reward', sa.Boolean(), nullable=False),
        sa.Column('reward_processed', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['books.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reading_sessions_user_id'), 'reading_sessions', ['user_id'], unique=False)
    op.create_index(op.f('ix_reading_sessions_book_id'), 'reading_sessions', ['book_id'], unique=False)
    op.create_index(op.f('ix_reading_sessions_end_time'), 'reading_sessions', ['end_time'], unique=False)

    op.create_table(
        'user_book_rewards',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('book_id', sa.Uuid(), nullable=False),
        sa.Column('has_received_reward', sa.Boolean(), nullable=False),
        sa.Column('reading_attempts', sa.Integer(), nullable=False),
        sa.Column('fraud_attempts', sa.Integer(), nullable=False),
        sa.Column('first_reading_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('valid_reading_date', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['book_id'], ['books.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'book_id', name='uq_user_book_rewards_user_book'),
    )
    op.create_index(op.f('ix_user_book_rewards_user_id'), 'user_book_rewards', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_book_rewards_book_id'), 'user_book_rewards', ['book_id'], unique=False)

    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('book_id', sa.Uuid(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('donation_amount', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['books.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reviews_user_id'), 'reviews', ['user_id'], unique=False)
    op.create_index(op.f('ix_reviews_book_id'), 'reviews', ['book_id'], unique=False)
    op.create_index(op.f('ix_reviews_created_at'), 'reviews', ['created_at'], unique=False)

    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.Enum('EARNING', 'WITHDRAWAL', name='transactiontype'), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('PENDING', 'COMPLETED', 'FAILED', name='transactionstatus'), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('source_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('source_type', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_transactions_user_id'), 'transactions', ['user_id'], unique=False)
    op.create_index(op.f('ix_transactions_type'), 'transactions', ['type'], unique=False)
    op.create_index(op.f('ix_transactions_status'), 'transactions', ['status'], unique=False)
    op.create_index(op.f('ix_transactions_source_id'), 'transactions', ['source_id'], unique=False)
    op.create_index(op.f('ix_transactions_created_at'), 'transactions', ['created_at'], unique=False)

    op.create_table(
        'withdrawals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('pix_key', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('pix_key_type', sa.Enum('CPF', 'EMAIL', 'PHONE', 'RANDOM', name='pixkeytype'), nullable=False),
        sa.Column('status', sa.Enum('PENDING', 'COMPLETED', 'FAILED', name='withdrawalstatus'), nullable=False),
        sa.Column('requested_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('failure_reason', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('external_transaction_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('transaction_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['transaction_id'], ['transactions.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_withdrawals_user_id'), 'withdrawals', ['user_id'], unique=False)
    op.create_index(op.f('ix_withdrawals_status'), 'withdrawals', ['status'], unique=False)
    op.create_index(op.f('ix_withdrawals_requested_at'), 'withdrawals', ['requested_at'], unique=False)


def downgrade() -> None:
    op.drop_table('withdrawals')
    op.drop_table('transactions')
    op.drop_table('reviews')
    op.drop_table('user_book_rewards')
    op.drop_table('reading_sessions')
    op.drop_table('books')
    op.drop_table('users')
    for enum_name in (
        'pixkeytype',
        'withdrawalstatus',
        'transactionstatus',
        'transactiontype',
        'sessiondecision',
        'incomerange',
        'commitment',
        'plantype',
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
