"""
CryptoLedger - Transaction Model

Append-only settlement record. Once a row is COMPLETED its numeric
fields are frozen; the before_update listener below enforces it.
"""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Enum as SQLEnum, event
from sqlalchemy.orm import relationship
from sqlalchemy.orm.attributes import get_history
import enum

from cryptoledger.db.database import Base
from cryptoledger.db.types import FixedDecimal


class TransactionType(str, enum.Enum):
    """Kind of value movement."""
    BUY = "BUY"
    SELL = "SELL"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"


class TransactionStatus(str, enum.Enum):
    """Settlement status."""
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class OrderType(str, enum.Enum):
    """Order pricing mode."""
    MARKET = "MARKET"
    LIMIT = "LIMIT"


FROZEN_FIELDS = ("amount", "price_per_unit", "total_value", "fee", "status")


class Transaction(Base):
    """Ledger transaction model."""

    __tablename__ = "transactions"
    __table_args__ = (
        UniqueConstraint("user_id", "client_order_id", name="uq_transactions_user_client_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    wallet_id = Column(Integer, ForeignKey("wallets.id"), nullable=False, index=True)

    transaction_type = Column(SQLEnum(TransactionType), nullable=False)
    asset_symbol = Column(String(20), ForeignKey("crypto_assets.symbol"), nullable=False, index=True)

    # Amounts
    amount = Column(FixedDecimal(18, 8), nullable=False)
    price_per_unit = Column(FixedDecimal(18, 8), nullable=False)
    total_value = Column(FixedDecimal(18, 8), nullable=False)
    fee = Column(FixedDecimal(18, 8), default=Decimal("0"), nullable=False)

    status = Column(SQLEnum(TransactionStatus), default=TransactionStatus.PENDING, nullable=False)
    transaction_hash = Column(String(66), nullable=True)

    # Caller-supplied idempotency key
    client_order_id = Column(String(64), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    completed_at = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="transactions")
    wallet = relationship("Wallet", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction {self.id} {self.transaction_type.value} {self.amount} {self.asset_symbol}>"


@event.listens_for(Transaction, "before_update")
def _reject_completed_mutation(mapper, connection, target):
    """Refuse to flush changes to the frozen fields of a completed transaction."""
    status_history = get_history(target, "status")
    previous_status = status_history.deleted[0] if status_history.deleted else target.status
    if previous_status != TransactionStatus.COMPLETED:
        return
    for field_name in FROZEN_FIELDS:
        if get_history(target, field_name).has_changes():
            raise ValueError(f"Transaction {target.id} is completed; '{field_name}' is immutable")
