"""
CryptoLedger - Position Model

One row per (user, asset). amount and average_buy_price are authoritative;
current_value, profit_loss and profit_loss_percentage are a snapshot
refreshed on every trade and recomputed from live prices on read.
A position whose amount reaches zero is deleted, never kept at zero.
"""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from cryptoledger.db.database import Base
from cryptoledger.db.types import FixedDecimal


class Position(Base):
    """Portfolio entry model."""

    __tablename__ = "portfolio_positions"
    __table_args__ = (
        UniqueConstraint("user_id", "asset_symbol", name="uq_positions_user_asset"),
        CheckConstraint("amount > 0", name="ck_positions_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    asset_symbol = Column(String(20), ForeignKey("crypto_assets.symbol"), nullable=False)

    # Holding and cost basis
    amount = Column(FixedDecimal(18, 8), nullable=False)
    average_buy_price = Column(FixedDecimal(18, 8), nullable=False)

    # Valuation snapshot
    current_value = Column(FixedDecimal(18, 2), default=Decimal("0"), nullable=False)
    profit_loss = Column(FixedDecimal(18, 2), default=Decimal("0"), nullable=False)
    profit_loss_percentage = Column(FixedDecimal(8, 4), default=Decimal("0"), nullable=False)

    last_updated = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="positions")
    asset = relationship("CryptoAsset", back_populates="positions")

    def __repr__(self):
        return f"<Position {self.asset_symbol} amount={self.amount}>"
