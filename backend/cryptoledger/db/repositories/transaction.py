"""
Transaction Repository

Append-only access to the transactions table: insert and read, no update
or delete.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from cryptoledger.db.models.transaction import Transaction, TransactionType, TransactionStatus


class TransactionRepository:
    """
    Transaction Repository

    Handles database operations for settlement records:
    - Insert
    - Idempotency-key lookup
    - History retrieval
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # ==================== CREATE ====================

    async def insert(
        self,
        user_id: int,
        wallet_id: int,
        transaction_type: TransactionType,
        asset_symbol: str,
        amount: Decimal,
        price_per_unit: Decimal,
        total_value: Decimal,
        fee: Decimal,
        status: TransactionStatus = TransactionStatus.COMPLETED,
        transaction_hash: Optional[str] = None,
        client_order_id: Optional[str] = None,
    ) -> Transaction:
        """Append a transaction record (flush only)."""
        now = datetime.utcnow()
        transaction = Transaction(
            user_id=user_id,
            wallet_id=wallet_id,
            transaction_type=transaction_type,
            asset_symbol=asset_symbol.upper(),
            amount=amount,
            price_per_unit=price_per_unit,
            total_value=total_value,
            fee=fee,
            status=status,
            transaction_hash=transaction_hash,
            client_order_id=client_order_id,
            created_at=now,
            completed_at=now if status == TransactionStatus.COMPLETED else None,
        )
        self.db.add(transaction)
        await self.db.flush()
        return transaction

    # ==================== READ ====================

    async def get_by_client_order_id(
        self,
        user_id: int,
        client_order_id: str,
    ) -> Optional[Transaction]:
        """Find the settlement previously recorded for an idempotency key."""
        result = await self.db.execute(
            select(Transaction).where(
                Transaction.user_id == user_id,
                Transaction.client_order_id == client_order_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_by_user(
        self,
        user_id: int,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """
        Get a user's transactions, newest first.

        ``limit=0`` yields an empty list; ``None`` means no limit.
        """
        query = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(desc(Transaction.created_at), desc(Transaction.id))
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())
