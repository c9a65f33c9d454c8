"""
CryptoLedger - Test Configuration
Shared fixtures and test configuration.
"""
import os
import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio

# Add backend to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment before any cryptoledger import reads it
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_TO_FILE"] = "false"

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession  # noqa: E402

from cryptoledger.core.trading.execution import OrderExecutionEngine  # noqa: E402
from cryptoledger.core.trading.locks import OrderLockRegistry  # noqa: E402
from cryptoledger.db.database import build_engine, build_session_maker, init_db  # noqa: E402
from cryptoledger.db.models.wallet import WalletType  # noqa: E402
from cryptoledger.db.repositories import (  # noqa: E402
    AssetRepository,
    PositionRepository,
    UserRepository,
    WalletRepository,
)


BTC_PRICE = Decimal("43250.80000000")
ETH_PRICE = Decimal("2650.45000000")


@dataclass
class LedgerSeed:
    """Ids of the rows created by the ``seeded`` fixture."""
    user_id: int
    wallet_id: int
    other_user_id: int
    other_wallet_id: int


# =========================
# Database Fixtures
# =========================

@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Fresh SQLite file database per test.

    A file (not :memory:) so that every session gets its own connection,
    like it would against PostgreSQL.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return build_session_maker(db_engine)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def lock_registry() -> OrderLockRegistry:
    return OrderLockRegistry()


@pytest.fixture
def execution_engine(db_session, lock_registry) -> OrderExecutionEngine:
    return OrderExecutionEngine(db_session, fee_rate=Decimal("0.001"), lock_registry=lock_registry)


# =========================
# Seed Data
# =========================

@pytest_asyncio.fixture
async def seeded(session_maker) -> LedgerSeed:
    """
    Two users, one funded wallet each, and BTC/ETH/SOL price snapshots.

    The first user's wallet holds 10000.00000000.
    """
    async with session_maker() as session:
        users = UserRepository(session)
        wallets = WalletRepository(session)
        assets = AssetRepository(session)

        trader = await users.create(email="trader@example.com", full_name="Test Trader", is_verified=True)
        other = await users.create(email="other@example.com", full_name="Other Trader")

        wallet = await wallets.create(
            user_id=trader.id,
            wallet_address="0x1111111111111111111111111111111111111111",
            wallet_type=WalletType.ETHEREUM,
            is_primary=True,
            balance=Decimal("10000"),
        )
        other_wallet = await wallets.create(
            user_id=other.id,
            wallet_address="0x2222222222222222222222222222222222222222",
            wallet_type=WalletType.ETHEREUM,
            is_primary=True,
            balance=Decimal("5000"),
        )

        await assets.upsert(
            symbol="BTC",
            name="Bitcoin",
            current_price=BTC_PRICE,
            price_change_24h=Decimal("1250.30"),
            price_change_percentage_24h=Decimal("2.9800"),
            market_cap=Decimal("847000000000.00"),
            volume_24h=Decimal("28500000000.00"),
        )
        await assets.upsert(
            symbol="ETH",
            name="Ethereum",
            current_price=ETH_PRICE,
            market_cap=Decimal("318000000000.00"),
            volume_24h=Decimal("15200000000.00"),
        )
        await assets.upsert(
            symbol="SOL",
            name="Solana",
            current_price=Decimal("98.75"),
            market_cap=Decimal("42000000000.00"),
        )
        await session.commit()

        return LedgerSeed(
            user_id=trader.id,
            wallet_id=wallet.id,
            other_user_id=other.id,
            other_wallet_id=other_wallet.id,
        )


@pytest.fixture
def seed_position(session_maker):
    """Insert a position directly, bypassing the engine."""
    async def _seed(user_id: int, symbol: str, amount: str, average_buy_price: str) -> int:
        async with session_maker() as session:
            position = await PositionRepository(session).upsert(
                user_id=user_id,
                asset_symbol=symbol,
                amount=Decimal(amount),
                average_buy_price=Decimal(average_buy_price),
                current_value=Decimal("0"),
                profit_loss=Decimal("0"),
                profit_loss_percentage=Decimal("0"),
            )
            await session.commit()
            return position.id
    return _seed


@pytest.fixture
def set_price(session_maker):
    """Move an asset's current price."""
    async def _set(symbol: str, price: str) -> None:
        async with session_maker() as session:
            asset = await AssetRepository(session).get_by_symbol(symbol)
            asset.current_price = Decimal(price)
            await session.commit()
    return _set
