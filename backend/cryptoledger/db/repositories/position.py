"""
Position Repository

Database operations for portfolio positions. Every write flushes without
committing; the order execution engine owns the transaction.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from loguru import logger

from cryptoledger.db.models.position import Position


class PositionRepository:
    """
    Repository for Position database operations.

    Provides low-level primitives for positions.
    For cost-basis logic, use OrderExecutionEngine instead.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(
        self,
        user_id: int,
        asset_symbol: str,
        for_update: bool = False,
    ) -> Optional[Position]:
        """Get position by user and asset symbol."""
        query = select(Position).where(
            and_(
                Position.user_id == user_id,
                Position.asset_symbol == asset_symbol.upper(),
            )
        )
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: int) -> list[Position]:
        """Get all positions for a user in arrival order."""
        result = await self.db.execute(
            select(Position)
            .where(Position.user_id == user_id)
            .order_by(Position.id)
        )
        return list(result.scalars().all())

    async def upsert(
        self,
        user_id: int,
        asset_symbol: str,
        amount: Decimal,
        average_buy_price: Decimal,
        current_value: Decimal,
        profit_loss: Decimal,
        profit_loss_percentage: Decimal,
        position: Optional[Position] = None,
    ) -> Position:
        """
        Create the position or overwrite its holding and snapshot.

        Pass the already-locked ``position`` when the caller has one to
        avoid a second lookup.
        """
        if position is None:
            position = await self.get(user_id, asset_symbol)

        if position is None:
            position = Position(
                user_id=user_id,
                asset_symbol=asset_symbol.upper(),
            )
            self.db.add(position)

        position.amount = amount
        position.average_buy_price = average_buy_price
        position.current_value = current_value
        position.profit_loss = profit_loss
        position.profit_loss_percentage = profit_loss_percentage
        position.last_updated = datetime.utcnow()

        await self.db.flush()
        return position

    async def delete(self, position: Position) -> None:
        """Delete a position row (flush only)."""
        await self.db.delete(position)
        await self.db.flush()
        logger.info(f"Closed position {position.asset_symbol} for user {position.user_id}")
