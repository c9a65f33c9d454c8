"""
Wallet Repository

Wallet reads and balance writes. All writes flush without committing so
callers can compose them into a single transaction.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_, desc
from loguru import logger

from cryptoledger.db.models.wallet import Wallet, WalletType


class WalletRepository:
    """
    Repository for Wallet database operations.

    Lookups are always scoped to the owning user: a wallet id that belongs
    to somebody else resolves to None exactly like a missing id.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_user(
        self,
        wallet_id: int,
        user_id: int,
        for_update: bool = False,
    ) -> Optional[Wallet]:
        """
        Get a wallet by id and owner.

        Args:
            wallet_id: Wallet ID
            user_id: Owner user ID
            for_update: Take a row lock (SELECT ... FOR UPDATE) and refresh the cached row

        Returns:
            Wallet or None when no row matches both keys
        """
        query = select(Wallet).where(
            and_(
                Wallet.id == wallet_id,
                Wallet.user_id == user_id,
            )
        )
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: int) -> list[Wallet]:
        """Get a user's wallets, primary first, then newest first."""
        result = await self.db.execute(
            select(Wallet)
            .where(Wallet.user_id == user_id)
            .order_by(desc(Wallet.is_primary), desc(Wallet.created_at), desc(Wallet.id))
        )
        return list(result.scalars().all())

    async def create(
        self,
        user_id: int,
        wallet_address: str,
        wallet_type: WalletType,
        is_primary: bool = False,
        balance: Decimal = Decimal("0"),
    ) -> Wallet:
        """
        Register an externally issued wallet.

        When the new wallet is primary, every other wallet of the user
        loses the primary flag in the same unit of work.
        """
        if is_primary:
            await self.db.execute(
                update(Wallet)
                .where(Wallet.user_id == user_id)
                .values(is_primary=False, updated_at=datetime.utcnow())
            )

        wallet = Wallet(
            user_id=user_id,
            wallet_address=wallet_address,
            wallet_type=wallet_type,
            balance=balance,
            is_primary=is_primary,
        )
        self.db.add(wallet)
        await self.db.flush()

        logger.info(f"Registered {wallet_type.value} wallet {wallet.id} for user {user_id} (primary={is_primary})")
        return wallet

    async def update_balance(self, wallet: Wallet, new_balance: Decimal) -> Wallet:
        """Set a wallet balance (flush only)."""
        if new_balance < 0:
            raise ValueError(f"Wallet {wallet.id} balance cannot go negative")
        wallet.balance = new_balance
        wallet.updated_at = datetime.utcnow()
        await self.db.flush()
        return wallet
