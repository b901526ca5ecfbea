"""Create family budget tables

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-16 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'budget_years',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('end_date > start_date', name='ck_budget_year_dates'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_budget_years_user_active', 'budget_years', ['user_id', 'is_active'])
    op.create_index('idx_budget_years_user_start', 'budget_years', ['user_id', 'start_date'])

    op.create_table(
        'funds',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('type', sa.Enum('monthly', 'annual', 'savings', name='fund_type', native_enum=False), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('include_in_budget', sa.Boolean(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('level BETWEEN 1 AND 3', name='ck_fund_level'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'name', name='uq_fund_user_name'),
    )
    op.create_index('idx_funds_user_order', 'funds', ['user_id', 'display_order'])

    op.create_table(
        'fund_budgets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('fund_id', sa.Integer(), nullable=False),
        sa.Column('budget_year_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('amount_given', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('spent', sa.DECIMAL(precision=12, scale=2), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('amount >= 0', name='ck_fund_budget_amount'),
        sa.CheckConstraint('amount_given >= 0', name='ck_fund_budget_amount_given'),
        sa.CheckConstraint('spent >= 0', name='ck_fund_budget_spent'),
        sa.ForeignKeyConstraint(['budget_year_id'], ['budget_years.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['fund_id'], ['funds.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('fund_id', 'budget_year_id', name='uq_fund_budget_year'),
    )
    op.create_index('idx_fund_budgets_year', 'fund_budgets', ['budget_year_id'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('fund_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('color_class', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['fund_id'], ['funds.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'name', name='uq_category_user_name'),
    )
    op.create_index('idx_categories_fund', 'categories', ['fund_id'])

    op.create_table(
        'incomes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('budget_year_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('source', sa.String(length=255), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name='ck_income_amount'),
        sa.CheckConstraint('month BETWEEN 1 AND 12', name='ck_income_month'),
        sa.ForeignKeyConstraint(['budget_year_id'], ['budget_years.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_incomes_user_date', 'incomes', ['user_id', 'date'])
    op.create_index('idx_incomes_budget_year', 'incomes', ['budget_year_id'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('budget_year_id', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('fund_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name='ck_expense_amount'),
        sa.ForeignKeyConstraint(['budget_year_id'], ['budget_years.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['fund_id'], ['funds.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_expenses_user_date', 'expenses', ['user_id', 'date'])
    op.create_index('idx_expenses_budget_year', 'expenses', ['budget_year_id'])
    op.create_index('idx_expenses_fund', 'expenses', ['fund_id'])

    op.create_table(
        'tithes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name='ck_tithe_amount'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_tithes_user_date', 'tithes', ['user_id', 'date'])

    op.create_table(
        'debts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('type', sa.Enum('owed_to_me', 'i_owe', name='debt_type', native_enum=False), nullable=False),
        sa.Column('is_paid', sa.Boolean(), nullable=False),
        sa.Column('paid_date', sa.Date(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name='ck_debt_amount'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_debts_user_type', 'debts', ['user_id', 'type'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('important', sa.Boolean(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_tasks_user_completed', 'tasks', ['user_id', 'completed'])

    op.create_table(
        'notes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notes_user_created', 'notes', ['user_id', 'created_at'])

    op.create_table(
        'asset_snapshots',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_asset_snapshots_user_date', 'asset_snapshots', ['user_id', 'date'])

    op.create_table(
        'asset_details',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('snapshot_id', sa.Integer(), nullable=False),
        sa.Column('asset_type', sa.String(length=100), nullable=False),
        sa.Column('asset_name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.DECIMAL(precision=14, scale=2), nullable=False),
        sa.Column('category', sa.Enum('asset', 'liability', name='asset_category', native_enum=False), nullable=False),
        sa.CheckConstraint('amount >= 0', name='ck_asset_detail_amount'),
        sa.ForeignKeyConstraint(['snapshot_id'], ['asset_snapshots.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('snapshot_id', 'asset_type', name='uq_asset_detail_snapshot_type'),
    )

    op.create_table(
        'system_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('setting_key', sa.String(length=100), nullable=False),
        sa.Column('setting_value', sa.Text(), nullable=True),
        sa.Column('data_type', sa.Enum('string', 'number', 'boolean', 'json', name='setting_data_type', native_enum=False), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'setting_key', name='uq_system_setting_user_key'),
    )

    op.create_table(
        'cash_envelope_transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('fund_id', sa.Integer(), nullable=False),
        sa.Column('budget_year_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('amount', sa.DECIMAL(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name='ck_cash_envelope_amount'),
        sa.CheckConstraint('month BETWEEN 1 AND 12', name='ck_cash_envelope_month'),
        sa.ForeignKeyConstraint(['budget_year_id'], ['budget_years.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['fund_id'], ['funds.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_cash_envelope_year_month', 'cash_envelope_transactions', ['user_id', 'budget_year_id', 'month'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_cash_envelope_year_month', table_name='cash_envelope_transactions')
    op.drop_table('cash_envelope_transactions')
    op.drop_table('system_settings')
    op.drop_table('asset_details')
    op.drop_index('idx_asset_snapshots_user_date', table_name='asset_snapshots')
    op.drop_table('asset_snapshots')
    op.drop_index('idx_notes_user_created', table_name='notes')
    op.drop_table('notes')
    op.drop_index('idx_tasks_user_completed', table_name='tasks')
    op.drop_table('tasks')
    op.drop_index('idx_debts_user_type', table_name='debts')
    op.drop_table('debts')
    op.drop_index('idx_tithes_user_date', table_name='tithes')
    op.drop_table('tithes')
    op.drop_index('idx_expenses_fund', table_name='expenses')
    op.drop_index('idx_expenses_budget_year', table_name='expenses')
    op.drop_index('idx_expenses_user_date', table_name='expenses')
    op.drop_table('expenses')
    op.drop_index('idx_incomes_budget_year', table_name='incomes')
    op.drop_index('idx_incomes_user_date', table_name='incomes')
    op.drop_table('incomes')
    op.drop_index('idx_categories_fund', table_name='categories')
    op.drop_table('categories')
    op.drop_index('idx_fund_budgets_year', table_name='fund_budgets')
    op.drop_table('fund_budgets')
    op.drop_index('idx_funds_user_order', table_name='funds')
    op.drop_table('funds')
    op.drop_index('idx_budget_years_user_start', table_name='budget_years')
    op.drop_index('idx_budget_years_user_active', table_name='budget_years')
    op.drop_table('budget_years')
