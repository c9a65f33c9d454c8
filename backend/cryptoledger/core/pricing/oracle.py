"""
CryptoLedger - Price Oracle

Current-price lookups for order execution and valuation. The default
implementation reads the crypto_assets snapshot table; any object with the
same two coroutines can be injected instead.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cryptoledger.db.models.asset import CryptoAsset
from cryptoledger.db.repositories.asset import AssetRepository


class PriceOracle(ABC):
    """Source of current asset prices."""

    @abstractmethod
    async def lookup_asset(self, symbol: str) -> Optional[CryptoAsset]:
        """Return the asset snapshot for ``symbol`` or None when unknown."""

    @abstractmethod
    async def get_prices(self, symbols: Iterable[str]) -> Dict[str, Decimal]:
        """Map each known symbol to its current price; unknown symbols are omitted."""


class DatabasePriceOracle(PriceOracle):
    """Price oracle backed by the ledger's own asset table."""

    def __init__(self, db: AsyncSession):
        self.assets = AssetRepository(db)

    async def lookup_asset(self, symbol: str) -> Optional[CryptoAsset]:
        return await self.assets.get_by_symbol(symbol)

    async def get_prices(self, symbols: Iterable[str]) -> Dict[str, Decimal]:
        return await self.assets.get_prices(list(symbols))
