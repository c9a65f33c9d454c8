"""
CryptoLedger - Price Oracle
"""
from cryptoledger.core.pricing.oracle import PriceOracle, DatabasePriceOracle

__all__ = ["PriceOracle", "DatabasePriceOracle"]
