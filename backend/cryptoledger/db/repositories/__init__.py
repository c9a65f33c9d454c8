"""
CryptoLedger - Data Repositories

Repository pattern implementations for ledger store operations.
"""
from cryptoledger.db.repositories.user import UserRepository
from cryptoledger.db.repositories.wallet import WalletRepository
from cryptoledger.db.repositories.asset import AssetRepository
from cryptoledger.db.repositories.position import PositionRepository
from cryptoledger.db.repositories.transaction import TransactionRepository

__all__ = [
    "UserRepository",
    "WalletRepository",
    "AssetRepository",
    "PositionRepository",
    "TransactionRepository",
]
