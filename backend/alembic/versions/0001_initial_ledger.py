"""Initial ledger schema - users, wallets, assets, positions, transactions

Revision ID: 0001_initial_ledger
Revises: None
Create Date: 2026-10-19

Creates the complete CryptoLedger schema on a fresh database.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '0001_initial_ledger'
down_revision = None
branch_labels = None
depends_on = None


WALLET_TYPES = ('BITCOIN', 'ETHEREUM', 'BINANCE_SMART_CHAIN', 'POLYGON')
TRANSACTION_TYPES = ('BUY', 'SELL', 'TRANSFER_IN', 'TRANSFER_OUT')
TRANSACTION_STATUSES = ('PENDING', 'COMPLETED', 'FAILED', 'CANCELLED')


def upgrade() -> None:
    """Create all tables."""

    # ===========================================
    # 1. USERS TABLE
    # ===========================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('email', sa.String(255), unique=True, index=True, nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    # ===========================================
    # 2. CRYPTO_ASSETS TABLE
    # ===========================================
    op.create_table(
        'crypto_assets',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('symbol', sa.String(20), unique=True, index=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('current_price', sa.Numeric(18, 8), nullable=False),
        sa.Column('price_change_24h', sa.Numeric(18, 8), nullable=False),
        sa.Column('price_change_percentage_24h', sa.Numeric(8, 4), nullable=False),
        sa.Column('market_cap', sa.Numeric(20, 2), nullable=False),
        sa.Column('volume_24h', sa.Numeric(20, 2), nullable=False),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    # ===========================================
    # 3. WALLETS TABLE
    # ===========================================
    op.create_table(
        'wallets',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('wallet_address', sa.String(128), unique=True, nullable=False),
        sa.Column('wallet_type', sa.Enum(*WALLET_TYPES, name='wallettype'), nullable=False),
        sa.Column('balance', sa.Numeric(18, 8), nullable=False, server_default='0'),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('balance >= 0', name='ck_wallets_balance_non_negative'),
    )

    # ===========================================
    # 4. PORTFOLIO_POSITIONS TABLE
    # ===========================================
    op.create_table(
        'portfolio_positions',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('asset_symbol', sa.String(20), sa.ForeignKey('crypto_assets.symbol'), nullable=False),
        sa.Column('amount', sa.Numeric(18, 8), nullable=False),
        sa.Column('average_buy_price', sa.Numeric(18, 8), nullable=False),
        sa.Column('current_value', sa.Numeric(18, 2), nullable=False, server_default='0'),
        sa.Column('profit_loss', sa.Numeric(18, 2), nullable=False, server_default='0'),
        sa.Column('profit_loss_percentage', sa.Numeric(8, 4), nullable=False, server_default='0'),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'asset_symbol', name='uq_positions_user_asset'),
        sa.CheckConstraint('amount > 0', name='ck_positions_amount_positive'),
    )

    # ===========================================
    # 5. TRANSACTIONS TABLE
    # ===========================================
    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('wallet_id', sa.Integer(), sa.ForeignKey('wallets.id'), nullable=False, index=True),
        sa.Column('transaction_type', sa.Enum(*TRANSACTION_TYPES, name='transactiontype'), nullable=False),
        sa.Column('asset_symbol', sa.String(20), sa.ForeignKey('crypto_assets.symbol'), nullable=False, index=True),
        sa.Column('amount', sa.Numeric(18, 8), nullable=False),
        sa.Column('price_per_unit', sa.Numeric(18, 8), nullable=False),
        sa.Column('total_value', sa.Numeric(18, 8), nullable=False),
        sa.Column('fee', sa.Numeric(18, 8), nullable=False, server_default='0'),
        sa.Column('status', sa.Enum(*TRANSACTION_STATUSES, name='transactionstatus'), nullable=False),
        sa.Column('transaction_hash', sa.String(66), nullable=True),
        sa.Column('client_order_id', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False, index=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'client_order_id', name='uq_transactions_user_client_order'),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('transactions')
    op.drop_table('portfolio_positions')
    op.drop_table('wallets')
    op.drop_table('crypto_assets')
    op.drop_table('users')

    sa.Enum(name='transactionstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='transactiontype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='wallettype').drop(op.get_bind(), checkfirst=True)
