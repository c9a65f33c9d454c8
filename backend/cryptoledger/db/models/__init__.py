"""
CryptoLedger - Database Models
"""
from cryptoledger.db.models.user import User
from cryptoledger.db.models.wallet import Wallet, WalletType
from cryptoledger.db.models.asset import CryptoAsset
from cryptoledger.db.models.position import Position
from cryptoledger.db.models.transaction import (
    Transaction,
    TransactionType,
    TransactionStatus,
    OrderType,
)

__all__ = [
    "User",
    "Wallet",
    "WalletType",
    "CryptoAsset",
    "Position",
    "Transaction",
    "TransactionType",
    "TransactionStatus",
    "OrderType",
]
