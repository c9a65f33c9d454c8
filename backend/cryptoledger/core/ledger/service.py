"""
CryptoLedger - Ledger Service
Catalogue and account operations around the trading core
"""
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from cryptoledger.core.trading.execution import parse_crypto
from cryptoledger.db.models.asset import CryptoAsset
from cryptoledger.db.models.transaction import Transaction
from cryptoledger.db.models.wallet import Wallet, WalletType
from cryptoledger.db.repositories.asset import AssetRepository
from cryptoledger.db.repositories.transaction import TransactionRepository
from cryptoledger.db.repositories.user import UserRepository
from cryptoledger.db.repositories.wallet import WalletRepository
from cryptoledger.utils.exceptions import (
    FailedPreconditionError,
    InvalidArgumentError,
    UserNotFoundError,
)


class LedgerService:
    """Service for asset, wallet and transaction-history operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.wallets = WalletRepository(db)
        self.assets = AssetRepository(db)
        self.transactions = TransactionRepository(db)

    # ==================== Assets ====================

    async def list_assets(self) -> list[CryptoAsset]:
        """All assets, largest market cap first."""
        return await self.assets.list_by_market_cap()

    async def upsert_asset(
        self,
        symbol: str,
        name: str,
        current_price: Decimal,
        price_change_24h: Decimal = Decimal("0"),
        price_change_percentage_24h: Decimal = Decimal("0"),
        market_cap: Decimal = Decimal("0"),
        volume_24h: Decimal = Decimal("0"),
    ) -> CryptoAsset:
        """Write a price snapshot from the price feed."""
        current_price = parse_crypto(current_price, "Price")

        asset = await self.assets.upsert(
            symbol=symbol,
            name=name,
            current_price=current_price,
            price_change_24h=price_change_24h,
            price_change_percentage_24h=price_change_percentage_24h,
            market_cap=market_cap,
            volume_24h=volume_24h,
        )
        await self.db.commit()
        logger.info(f"Price snapshot {asset.symbol} = {asset.current_price}")
        return asset

    # ==================== Wallets ====================

    async def list_user_wallets(self, user_id: int) -> list[Wallet]:
        return await self.wallets.list_by_user(user_id)

    async def register_wallet(
        self,
        user_id: int,
        wallet_address: str,
        wallet_type: WalletType,
        is_primary: bool = False,
    ) -> Wallet:
        """
        Store a wallet whose address was issued elsewhere.

        New wallets start with a zero balance. Registering a primary wallet
        demotes the user's previous primary.
        """
        if await self.users.get_by_id(user_id) is None:
            raise UserNotFoundError()

        try:
            wallet = await self.wallets.create(
                user_id=user_id,
                wallet_address=wallet_address,
                wallet_type=WalletType(wallet_type),
                is_primary=is_primary,
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise FailedPreconditionError(
                "Wallet address already registered",
                code="WALLET_EXISTS",
                details={"wallet_address": wallet_address},
            )
        return wallet

    # ==================== Transactions ====================

    async def list_user_transactions(
        self,
        user_id: int,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """Newest first; ``limit=0`` returns nothing."""
        if limit is not None and limit < 0:
            raise InvalidArgumentError("Limit must not be negative")
        return await self.transactions.list_by_user(user_id, limit=limit)
