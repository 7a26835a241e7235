"""create accounting tables

Revision ID: 3c1f7a2e9b40
Revises:
Create Date: 2026-10-17 10:12:05.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f7a2e9b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('connected_banks',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('user_id', sa.String(), nullable=False),
    sa.Column('item_id', sa.String(), nullable=False),
    sa.Column('access_token', sa.String(), nullable=False),
    sa.Column('institution_name', sa.String(), nullable=False),
    sa.Column('last_sync', sa.DateTime(timezone=True), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('user_id', 'institution_name', name='uix_user_institution')
    )
    op.create_index(op.f('ix_connected_banks_user_id'), 'connected_banks', ['user_id'], unique=False)
    op.create_index(op.f('ix_connected_banks_item_id'), 'connected_banks', ['item_id'], unique=False)

    op.create_table('plaid_accounts',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('connected_bank_id', sa.String(length=36), nullable=False),
    sa.Column('user_id', sa.String(), nullable=False),
    sa.Column('plaid_account_id', sa.String(), nullable=False),
    sa.Column('plaid_item_id', sa.String(), nullable=False),
    sa.Column('name', sa.String(), nullable=False),
    sa.Column('official_name', sa.String(), nullable=True),
    sa.Column('type', sa.String(), nullable=True),
    sa.Column('subtype', sa.String(), nullable=True),
    sa.Column('mask', sa.String(), nullable=True),
    sa.Column('current_balance', sa.Numeric(precision=15, scale=2), nullable=True),
    sa.Column('available_balance', sa.Numeric(precision=15, scale=2), nullable=True),
    sa.Column('credit_limit', sa.Numeric(precision=15, scale=2), nullable=True),
    sa.Column('currency_code', sa.String(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=True),
    sa.Column('last_balance_update', sa.DateTime(timezone=True), nullable=True),
    sa.Column('last_plaid_sync', sa.DateTime(timezone=True), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    sa.ForeignKeyConstraint(['connected_bank_id'], ['connected_banks.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('plaid_account_id', 'connected_bank_id', name='uix_plaid_account_bank')
    )
    op.create_index(op.f('ix_plaid_accounts_user_id'), 'plaid_accounts', ['user_id'], unique=False)
    op.create_index(op.f('ix_plaid_accounts_plaid_account_id'), 'plaid_accounts', ['plaid_account_id'], unique=False)

    op.create_table('bank_transactions',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('user_id', sa.String(), nullable=False),
    sa.Column('plaid_transaction_id', sa.String(), nullable=False),
    sa.Column('plaid_account_id', sa.String(), nullable=False),
    sa.Column('plaid_item_id', sa.String(), nullable=True),
    sa.Column('date', sa.Date(), nullable=False),
    sa.Column('authorized_date', sa.Date(), nullable=True),
    sa.Column('description', sa.String(), nullable=True),
    sa.Column('merchant_name', sa.String(), nullable=True),
    sa.Column('original_description', sa.String(), nullable=True),
    sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
    sa.Column('category_primary', sa.String(), nullable=True),
    sa.Column('category_detailed', sa.String(), nullable=True),
    sa.Column('payment_channel', sa.String(), nullable=True),
    sa.Column('pending', sa.Boolean(), nullable=True),
    sa.Column('pending_transaction_id', sa.String(), nullable=True),
    sa.Column('iso_currency_code', sa.String(), nullable=True),
    sa.Column('location_address', sa.String(), nullable=True),
    sa.Column('location_city', sa.String(), nullable=True),
    sa.Column('location_region', sa.String(), nullable=True),
    sa.Column('location_postal_code', sa.String(), nullable=True),
    sa.Column('location_country', sa.String(), nullable=True),
    sa.Column('bank_name', sa.String(), nullable=True),
    sa.Column('account_number', sa.String(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('user_id', 'plaid_transaction_id', name='uix_user_plaid_transaction')
    )
    op.create_index(op.f('ix_bank_transactions_user_id'), 'bank_transactions', ['user_id'], unique=False)
    op.create_index(op.f('ix_bank_transactions_plaid_account_id'), 'bank_transactions', ['plaid_account_id'], unique=False)

    op.create_table('ledger_accounts',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('user_id', sa.String(), nullable=False),
    sa.Column('account_name', sa.String(), nullable=False),
    sa.Column('account_type', sa.String(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ledger_accounts_user_id'), 'ledger_accounts', ['user_id'], unique=False)

    op.create_table('accounting_settings',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('user_id', sa.String(), nullable=False),
    sa.Column('base_currency', sa.String(), nullable=False),
    sa.Column('accounting_method', sa.String(), nullable=False),
    sa.Column('time_zone', sa.String(), nullable=False),
    sa.Column('company_legal_name', sa.String(), nullable=False),
    sa.Column('sales_revenue_account', sa.Integer(), nullable=True),
    sa.Column('purchases_account', sa.Integer(), nullable=True),
    sa.Column('discounts_account', sa.Integer(), nullable=True),
    sa.Column('accounts_receivable_account', sa.Integer(), nullable=True),
    sa.Column('accounts_payable_account', sa.Integer(), nullable=True),
    sa.Column('taxes_payable_account', sa.Integer(), nullable=True),
    sa.Column('retained_earnings_account', sa.Integer(), nullable=True),
    sa.Column('bank_name', sa.String(), nullable=False),
    sa.Column('branch_name', sa.String(), nullable=False),
    sa.Column('account_number', sa.String(), nullable=False),
    sa.Column('is_default_bank', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    sa.ForeignKeyConstraint(['sales_revenue_account'], ['ledger_accounts.id']),
    sa.ForeignKeyConstraint(['purchases_account'], ['ledger_accounts.id']),
    sa.ForeignKeyConstraint(['discounts_account'], ['ledger_accounts.id']),
    sa.ForeignKeyConstraint(['accounts_receivable_account'], ['ledger_accounts.id']),
    sa.ForeignKeyConstraint(['accounts_payable_account'], ['ledger_accounts.id']),
    sa.ForeignKeyConstraint(['taxes_payable_account'], ['ledger_accounts.id']),
    sa.ForeignKeyConstraint(['retained_earnings_account'], ['ledger_accounts.id']),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_accounting_settings_user_id'), 'accounting_settings', ['user_id'], unique=True)

    op.create_table('users',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('auth_id', sa.String(), nullable=False),
    sa.Column('full_name', sa.String(), nullable=True),
    sa.Column('email', sa.String(), nullable=True),
    sa.Column('phone', sa.String(), nullable=True),
    sa.Column('address', sa.String(), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_auth_id'), 'users', ['auth_id'], unique=True)

    op.create_table('vendor_bills',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('user_id', sa.String(), nullable=False),
    sa.Column('date', sa.Date(), nullable=False),
    sa.Column('vendor_name', sa.String(), nullable=False),
    sa.Column('description', sa.String(), nullable=True),
    sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
    sa.Column('status', sa.String(), nullable=False),
    sa.Column('attachment_path', sa.String(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_vendor_bills_user_id'), 'vendor_bills', ['user_id'], unique=False)

    op.create_table('ai_config',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('api_key', sa.String(), nullable=True),
    sa.Column('model_provider', sa.String(), nullable=False),
    sa.Column('model_name', sa.String(), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('ai_config')
    op.drop_index(op.f('ix_vendor_bills_user_id'), table_name='vendor_bills')
    op.drop_table('vendor_bills')
    op.drop_index(op.f('ix_users_auth_id'), table_name='users')
    op.drop_table('users')
    op.drop_index(op.f('ix_accounting_settings_user_id'), table_name='accounting_settings')
    op.drop_table('accounting_settings')
    op.drop_index(op.f('ix_ledger_accounts_user_id'), table_name='ledger_accounts')
    op.drop_table('ledger_accounts')
    op.drop_index(op.f('ix_bank_transactions_plaid_account_id'), table_name='bank_transactions')
    op.drop_index(op.f('ix_bank_transactions_user_id'), table_name='bank_transactions')
    op.drop_table('bank_transactions')
    op.drop_index(op.f('ix_plaid_accounts_plaid_account_id'), table_name='plaid_accounts')
    op.drop_index(op.f('ix_plaid_accounts_user_id'), table_name='plaid_accounts')
    op.drop_table('plaid_accounts')
    op.drop_index(op.f('ix_connected_banks_item_id'), table_name='connected_banks')
    op.drop_index(op.f('ix_connected_banks_user_id'), table_name='connected_banks')
    op.drop_table('connected_banks')
