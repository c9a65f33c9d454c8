"""
Asset Repository

Access to the crypto_assets price snapshot table.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from cryptoledger.db.models.asset import CryptoAsset


class AssetRepository:
    """Repository for CryptoAsset database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_symbol(self, symbol: str) -> Optional[CryptoAsset]:
        """Get asset by symbol (case-insensitive)."""
        result = await self.db.execute(
            select(CryptoAsset).where(CryptoAsset.symbol == symbol.upper())
        )
        return result.scalar_one_or_none()

    async def get_prices(self, symbols: list[str]) -> dict[str, Decimal]:
        """Map symbol -> current price for the requested symbols."""
        if not symbols:
            return {}
        result = await self.db.execute(
            select(CryptoAsset.symbol, CryptoAsset.current_price)
            .where(CryptoAsset.symbol.in_([s.upper() for s in symbols]))
        )
        return {symbol: price for symbol, price in result.all()}

    async def list_by_market_cap(self, limit: Optional[int] = None) -> list[CryptoAsset]:
        """Get assets ordered by market cap, largest first."""
        query = select(CryptoAsset).order_by(desc(CryptoAsset.market_cap), CryptoAsset.id)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def upsert(
        self,
        symbol: str,
        name: str,
        current_price: Decimal,
        price_change_24h: Decimal = Decimal("0"),
        price_change_percentage_24h: Decimal = Decimal("0"),
        market_cap: Decimal = Decimal("0"),
        volume_24h: Decimal = Decimal("0"),
    ) -> CryptoAsset:
        """Insert or refresh a price snapshot (flush only)."""
        asset = await self.get_by_symbol(symbol)
        if asset is None:
            asset = CryptoAsset(symbol=symbol.upper())
            self.db.add(asset)

        asset.name = name
        asset.current_price = current_price
        asset.price_change_24h = price_change_24h
        asset.price_change_percentage_24h = price_change_percentage_24h
        asset.market_cap = market_cap
        asset.volume_24h = volume_24h
        asset.last_updated = datetime.utcnow()

        await self.db.flush()
        return asset
