"""
CryptoLedger - Ledger Service
"""
from cryptoledger.core.ledger.service import LedgerService

__all__ = ["LedgerService"]
