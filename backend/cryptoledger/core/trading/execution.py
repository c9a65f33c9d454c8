"""
CryptoLedger - Order Execution Engine

Settles market and limit orders against a user's wallet. One call is one
database transaction: the wallet balance, the position and the appended
transaction record change together or not at all.

Fee model:
- A proportional fee (TRADING_FEE_RATE, 0.1% by default) on the notional
- BUY charges notional + fee; the record's total_value is fee-inclusive
- SELL credits notional - fee; the record's total_value is the notional

Limit orders settle immediately at the caller's limit price. There is no
resting order book.
"""
import secrets
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from cryptoledger.config import settings
from cryptoledger.core.portfolio.valuation import value_position
from cryptoledger.core.pricing.oracle import PriceOracle, DatabasePriceOracle
from cryptoledger.core.trading.locks import (
    OrderLockRegistry,
    order_locks,
    position_key,
    wallet_key,
)
from cryptoledger.db.models.transaction import (
    OrderType,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from cryptoledger.db.models.wallet import Wallet
from cryptoledger.db.repositories.position import PositionRepository
from cryptoledger.db.repositories.transaction import TransactionRepository
from cryptoledger.db.repositories.wallet import WalletRepository
from cryptoledger.utils.exceptions import (
    AssetNotFoundError,
    InsufficientBalanceError,
    InsufficientHoldingsError,
    InternalError,
    InvalidArgumentError,
    LedgerError,
    NoPositionError,
    WalletNotFoundError,
)


CRYPTO_QUANT = Decimal("0.00000001")
# NUMERIC(18, 8) leaves ten integer digits
CRYPTO_LIMIT = Decimal("1e10")


def quantize_crypto(value: Decimal) -> Decimal:
    """Round to the ledger's 8 fractional digits."""
    return value.quantize(CRYPTO_QUANT, rounding=ROUND_HALF_UP)


def parse_crypto(value, field_name: str) -> Decimal:
    """
    Coerce ``value`` to a Decimal on the ledger scale.

    Raises InvalidArgumentError for non-numeric input, for values that
    round to zero or below and for values too large for the ledger columns.
    """
    try:
        parsed = quantize_crypto(Decimal(str(value)))
    except InvalidOperation:
        raise InvalidArgumentError(f"{field_name} is not a valid amount") from None
    if not parsed.is_finite() or parsed >= CRYPTO_LIMIT:
        raise InvalidArgumentError(f"{field_name} exceeds the ledger limit of {CRYPTO_LIMIT:f}")
    if parsed <= 0:
        raise InvalidArgumentError(f"{field_name} must be positive")
    return parsed


def settlement_hash() -> str:
    """Mock on-chain reference: 0x followed by 64 hex digits."""
    return "0x" + secrets.token_hex(32)


@dataclass
class OrderRequest:
    """Order submitted to the engine."""
    user_id: int
    wallet_id: int
    asset_symbol: str
    amount: Decimal
    order_type: OrderType = OrderType.MARKET
    limit_price: Optional[Decimal] = None
    client_order_id: Optional[str] = None

    def __post_init__(self):
        self.asset_symbol = self.asset_symbol.strip().upper()
        self.order_type = OrderType(self.order_type)
        self.amount = parse_crypto(self.amount, "Amount")
        if self.limit_price is not None:
            self.limit_price = parse_crypto(self.limit_price, "Limit price")


@dataclass
class OrderQuote:
    """Priced order before settlement."""
    price_per_unit: Decimal
    live_price: Decimal
    subtotal: Decimal
    fee: Decimal


class OrderExecutionEngine:
    """
    Order Execution Engine

    Responsible for:
    - Wallet ownership and price resolution
    - Fee calculation
    - Atomic settlement of balance, position and transaction record
    - Idempotent replay of orders carrying a client_order_id

    The engine commits or rolls back the session it is given, so pass it
    a session dedicated to the order.
    """

    def __init__(
        self,
        db: AsyncSession,
        price_oracle: Optional[PriceOracle] = None,
        fee_rate: Optional[Decimal] = None,
        lock_registry: Optional[OrderLockRegistry] = None,
    ):
        self.db = db
        self.price_oracle = price_oracle or DatabasePriceOracle(db)
        self.fee_rate = Decimal(str(fee_rate)) if fee_rate is not None else settings.TRADING_FEE_RATE
        self.locks = lock_registry or order_locks

        self.wallets = WalletRepository(db)
        self.positions = PositionRepository(db)
        self.transactions = TransactionRepository(db)

    # ==================== PUBLIC API ====================

    async def execute_buy(self, order: OrderRequest) -> Transaction:
        """Buy ``order.amount`` of the asset, debiting notional plus fee."""
        return await self._execute(TransactionType.BUY, order)

    async def execute_sell(self, order: OrderRequest) -> Transaction:
        """Sell ``order.amount`` of a held asset, crediting notional minus fee."""
        return await self._execute(TransactionType.SELL, order)

    def calculate_fee(self, subtotal: Decimal) -> Decimal:
        return quantize_crypto(subtotal * self.fee_rate)

    # ==================== SETTLEMENT ====================

    async def _execute(self, side: TransactionType, order: OrderRequest) -> Transaction:
        keys = (wallet_key(order.wallet_id), position_key(order.user_id, order.asset_symbol))

        async with self.locks.hold(*keys):
            try:
                transaction, replayed = await self._settle(side, order)
                await self.db.commit()
            except LedgerError as e:
                await self.db.rollback()
                logger.warning(
                    f"Rejected {side.value} {order.amount} {order.asset_symbol} "
                    f"for user {order.user_id}: {e.code} {e.message}"
                )
                raise
            except IntegrityError as e:
                await self.db.rollback()
                transaction = await self._replay_after_conflict(order)
                if transaction is None:
                    logger.error(f"Integrity error settling {side.value} for user {order.user_id}: {e}")
                    raise InternalError("Ledger store rejected the order") from e
                replayed = True
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error(f"Database error settling {side.value} for user {order.user_id}: {e}")
                raise InternalError("Ledger store unavailable") from e
            except Exception:
                await self.db.rollback()
                raise

        if replayed:
            logger.info(
                f"Replayed order {order.client_order_id} for user {order.user_id} "
                f"-> transaction {transaction.id}"
            )
        else:
            logger.info(
                f"Settled {side.value} {transaction.amount} {transaction.asset_symbol} "
                f"@ {transaction.price_per_unit} for user {order.user_id} "
                f"(total={transaction.total_value}, fee={transaction.fee}, tx={transaction.id})"
            )
        return transaction

    async def _settle(self, side: TransactionType, order: OrderRequest) -> Tuple[Transaction, bool]:
        if order.client_order_id:
            existing = await self.transactions.get_by_client_order_id(order.user_id, order.client_order_id)
            if existing is not None:
                return existing, True

        wallet = await self._resolve_wallet(order)
        quote = await self._quote(order)

        if side == TransactionType.BUY:
            transaction = await self._settle_buy(order, wallet, quote)
        else:
            transaction = await self._settle_sell(order, wallet, quote)
        return transaction, False

    async def _replay_after_conflict(self, order: OrderRequest) -> Optional[Transaction]:
        """A concurrent request with the same client_order_id won the insert."""
        if not order.client_order_id:
            return None
        existing = await self.transactions.get_by_client_order_id(order.user_id, order.client_order_id)
        await self.db.commit()
        return existing

    async def _resolve_wallet(self, order: OrderRequest) -> Wallet:
        wallet = await self.wallets.get_for_user(order.wallet_id, order.user_id, for_update=True)
        if wallet is None:
            raise WalletNotFoundError()
        return wallet

    async def _quote(self, order: OrderRequest) -> OrderQuote:
        if order.order_type == OrderType.LIMIT:
            if order.limit_price is None:
                raise InvalidArgumentError("Limit price is required for limit orders")

        asset = await self.price_oracle.lookup_asset(order.asset_symbol)
        if asset is None:
            raise AssetNotFoundError(order.asset_symbol)

        if order.order_type == OrderType.LIMIT:
            price = order.limit_price
        else:
            price = asset.current_price

        subtotal = quantize_crypto(order.amount * price)
        if subtotal >= CRYPTO_LIMIT:
            raise InvalidArgumentError(f"Order value exceeds the ledger limit of {CRYPTO_LIMIT:f}")
        return OrderQuote(
            price_per_unit=price,
            live_price=asset.current_price,
            subtotal=subtotal,
            fee=self.calculate_fee(subtotal),
        )

    async def _settle_buy(self, order: OrderRequest, wallet: Wallet, quote: OrderQuote) -> Transaction:
        total_cost = quote.subtotal + quote.fee
        if wallet.balance < total_cost:
            raise InsufficientBalanceError(required=total_cost, available=wallet.balance)

        position = await self.positions.get(order.user_id, order.asset_symbol, for_update=True)
        if position is None:
            new_amount = order.amount
            new_average = quote.price_per_unit
        else:
            new_amount = position.amount + order.amount
            cost_basis = position.amount * position.average_buy_price + order.amount * quote.price_per_unit
            new_average = quantize_crypto(cost_basis / new_amount)

        transaction = await self.transactions.insert(
            user_id=order.user_id,
            wallet_id=wallet.id,
            transaction_type=TransactionType.BUY,
            asset_symbol=order.asset_symbol,
            amount=order.amount,
            price_per_unit=quote.price_per_unit,
            total_value=total_cost,
            fee=quote.fee,
            status=TransactionStatus.COMPLETED,
            transaction_hash=settlement_hash(),
            client_order_id=order.client_order_id,
        )

        await self.wallets.update_balance(wallet, wallet.balance - total_cost)

        snapshot = value_position(new_amount, new_average, quote.price_per_unit)
        await self.positions.upsert(
            user_id=order.user_id,
            asset_symbol=order.asset_symbol,
            amount=new_amount,
            average_buy_price=new_average,
            current_value=snapshot.current_value,
            profit_loss=snapshot.profit_loss,
            profit_loss_percentage=snapshot.profit_loss_percentage,
            position=position,
        )
        return transaction

    async def _settle_sell(self, order: OrderRequest, wallet: Wallet, quote: OrderQuote) -> Transaction:
        position = await self.positions.get(order.user_id, order.asset_symbol, for_update=True)
        if position is None:
            raise NoPositionError(order.asset_symbol)
        if position.amount < order.amount:
            raise InsufficientHoldingsError(requested=order.amount, held=position.amount)

        net_proceeds = quote.subtotal - quote.fee
        remaining = position.amount - order.amount

        transaction = await self.transactions.insert(
            user_id=order.user_id,
            wallet_id=wallet.id,
            transaction_type=TransactionType.SELL,
            asset_symbol=order.asset_symbol,
            amount=order.amount,
            price_per_unit=quote.price_per_unit,
            total_value=quote.subtotal,
            fee=quote.fee,
            status=TransactionStatus.COMPLETED,
            transaction_hash=settlement_hash(),
            client_order_id=order.client_order_id,
        )

        await self.wallets.update_balance(wallet, wallet.balance + net_proceeds)

        if remaining > 0:
            snapshot = value_position(remaining, position.average_buy_price, quote.live_price)
            await self.positions.upsert(
                user_id=order.user_id,
                asset_symbol=order.asset_symbol,
                amount=remaining,
                average_buy_price=position.average_buy_price,
                current_value=snapshot.current_value,
                profit_loss=snapshot.profit_loss,
                profit_loss_percentage=snapshot.profit_loss_percentage,
                position=position,
            )
        else:
            await self.positions.delete(position)
        return transaction
