"""
CryptoLedger - Crypto Asset Model

Price snapshot owned by the price feed. Read-only for order execution.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from cryptoledger.db.database import Base
from cryptoledger.db.types import FixedDecimal


class CryptoAsset(Base):
    """Tradable symbol with its latest quote."""

    __tablename__ = "crypto_assets"

    id = Column(Integer, primary_key=True, index=True)
    symbol = Column(String(20), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)

    # Quote snapshot
    current_price = Column(FixedDecimal(18, 8), nullable=False)
    price_change_24h = Column(FixedDecimal(18, 8), nullable=False)
    price_change_percentage_24h = Column(FixedDecimal(8, 4), nullable=False)
    market_cap = Column(FixedDecimal(20, 2), nullable=False)
    volume_24h = Column(FixedDecimal(20, 2), nullable=False)

    last_updated = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    positions = relationship("Position", back_populates="asset")

    def __repr__(self):
        return f"<CryptoAsset {self.symbol} @ {self.current_price}>"
