"""
CryptoLedger - Portfolio Valuation

Mark-to-market of positions against live prices. The arithmetic lives in
plain functions so the engine (snapshot on trade) and the read path
(recompute on every request) share one definition.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from cryptoledger.core.pricing.oracle import PriceOracle, DatabasePriceOracle
from cryptoledger.db.repositories.position import PositionRepository


FIAT_QUANT = Decimal("0.01")
PERCENT_QUANT = Decimal("0.0001")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _round(value: Decimal, quantum: Decimal) -> Decimal:
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    # Never render "-0.00"
    return rounded.copy_abs() if rounded.is_zero() else rounded


@dataclass
class PositionValuation:
    """A position marked to a live price."""
    asset_symbol: str
    amount: Decimal
    average_buy_price: Decimal
    current_price: Decimal
    current_value: Decimal
    invested: Decimal
    profit_loss: Decimal
    profit_loss_percentage: Decimal


@dataclass
class PortfolioSummary:
    """Aggregate view over a user's valuated positions."""
    total_value: Decimal = ZERO
    total_investment: Decimal = ZERO
    total_profit_loss: Decimal = ZERO
    total_profit_loss_percentage: Decimal = ZERO
    position_count: int = 0
    top_performing_asset: Optional[str] = None
    worst_performing_asset: Optional[str] = None


def value_position(
    amount: Decimal,
    average_buy_price: Decimal,
    live_price: Decimal,
    asset_symbol: str = "",
) -> PositionValuation:
    """
    Value one holding.

    Fiat figures are rounded to cents and the percentage to four places,
    each computed from unrounded intermediates. A zero cost basis yields
    a zero percentage.
    """
    current_value = amount * live_price
    invested = amount * average_buy_price
    profit_loss = current_value - invested

    if invested > 0:
        percentage = profit_loss / invested * HUNDRED
    else:
        percentage = ZERO

    return PositionValuation(
        asset_symbol=asset_symbol,
        amount=amount,
        average_buy_price=average_buy_price,
        current_price=live_price,
        current_value=_round(current_value, FIAT_QUANT),
        invested=_round(invested, FIAT_QUANT),
        profit_loss=_round(profit_loss, FIAT_QUANT),
        profit_loss_percentage=_round(percentage, PERCENT_QUANT),
    )


def aggregate(valuations: Iterable[PositionValuation]) -> PortfolioSummary:
    """
    Sum valuated positions into a portfolio summary.

    Best and worst performers are picked from a stable descending sort on
    profit_loss_percentage, so among equal percentages the best is the
    earliest position and the worst is the latest.
    """
    valuations = list(valuations)
    if not valuations:
        return PortfolioSummary()

    total_value = sum((v.current_value for v in valuations), ZERO)
    total_profit_loss = sum((v.profit_loss for v in valuations), ZERO)
    total_investment = total_value - total_profit_loss

    if total_investment != 0:
        total_percentage = total_profit_loss / total_investment * HUNDRED
    else:
        total_percentage = ZERO

    ranked = sorted(valuations, key=lambda v: v.profit_loss_percentage, reverse=True)

    return PortfolioSummary(
        total_value=_round(total_value, FIAT_QUANT),
        total_investment=_round(total_investment, FIAT_QUANT),
        total_profit_loss=_round(total_profit_loss, FIAT_QUANT),
        total_profit_loss_percentage=_round(total_percentage, FIAT_QUANT),
        position_count=len(valuations),
        top_performing_asset=ranked[0].asset_symbol,
        worst_performing_asset=ranked[-1].asset_symbol,
    )


class PortfolioValuator:
    """
    Read-side portfolio valuation.

    Never writes: the persisted snapshot on each position is ignored and
    every figure is recomputed from the current price.
    """

    def __init__(self, db: AsyncSession, price_oracle: Optional[PriceOracle] = None):
        self.db = db
        self.price_oracle = price_oracle or DatabasePriceOracle(db)
        self.positions = PositionRepository(db)

    async def get_portfolio(self, user_id: int) -> List[PositionValuation]:
        """Valuate every position of the user in arrival order."""
        positions = await self.positions.list_by_user(user_id)
        if not positions:
            return []

        prices = await self.price_oracle.get_prices({p.asset_symbol for p in positions})

        valuations = []
        for position in positions:
            price = prices.get(position.asset_symbol)
            if price is None:
                logger.debug(f"Skipping position {position.id}: no price for {position.asset_symbol}")
                continue
            valuations.append(
                value_position(
                    position.amount,
                    position.average_buy_price,
                    price,
                    asset_symbol=position.asset_symbol,
                )
            )
        return valuations

    async def get_summary(self, user_id: int) -> PortfolioSummary:
        return aggregate(await self.get_portfolio(user_id))
