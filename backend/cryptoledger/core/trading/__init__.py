"""
CryptoLedger - Trading Module

Order execution and the locks that serialize it.
"""
from cryptoledger.core.trading.execution import (
    OrderExecutionEngine,
    OrderRequest,
    OrderQuote,
    quantize_crypto,
)
from cryptoledger.core.trading.locks import (
    OrderLockRegistry,
    order_locks,
    wallet_key,
    position_key,
)

__all__ = [
    "OrderExecutionEngine",
    "OrderRequest",
    "OrderQuote",
    "quantize_crypto",
    "OrderLockRegistry",
    "order_locks",
    "wallet_key",
    "position_key",
]
