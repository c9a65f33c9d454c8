"""
CryptoLedger - Wallet Model

Custodial balance for one user on one network. Balance is stored with
8 fractional digits and is mutated only by the order execution engine.
"""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from cryptoledger.db.database import Base
from cryptoledger.db.types import FixedDecimal


class WalletType(str, enum.Enum):
    """Chain / asset network the wallet lives on."""
    BITCOIN = "BITCOIN"
    ETHEREUM = "ETHEREUM"
    BINANCE_SMART_CHAIN = "BINANCE_SMART_CHAIN"
    POLYGON = "POLYGON"


class Wallet(Base):
    """Custodial wallet model."""

    __tablename__ = "wallets"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_wallets_balance_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    wallet_address = Column(String(128), unique=True, nullable=False)
    wallet_type = Column(SQLEnum(WalletType), nullable=False)
    balance = Column(FixedDecimal(18, 8), default=Decimal("0"), nullable=False)
    is_primary = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="wallets")
    transactions = relationship("Transaction", back_populates="wallet")

    def __repr__(self):
        return f"<Wallet {self.id} {self.wallet_type.value} balance={self.balance}>"
