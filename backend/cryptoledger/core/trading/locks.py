"""
CryptoLedger - Order Locks

Keyed asyncio locks that serialize orders touching the same wallet or the
same (user, asset) position inside one process. Row locks taken by the
engine cover the cross-process case.
"""
import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Tuple


def wallet_key(wallet_id: int) -> str:
    return f"wallet:{wallet_id}"


def position_key(user_id: int, asset_symbol: str) -> str:
    return f"position:{user_id}:{asset_symbol.upper()}"


class OrderLockRegistry:
    """
    Registry of named locks.

    Locks are held weakly: a key's lock disappears once no coroutine is
    holding or waiting on it, so the registry does not grow with the
    number of wallets ever traded.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def is_locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, *keys: str) -> AsyncIterator[Tuple[str, ...]]:
        """
        Acquire every lock in ``keys`` for the duration of the block.

        Keys are de-duplicated and taken in sorted order so two orders
        sharing a subset of keys can never deadlock.
        """
        ordered = tuple(sorted(set(keys)))
        locks = [self._lock_for(key) for key in ordered]
        acquired = []
        try:
            for lock in locks:
                await lock.acquire()
                acquired.append(lock)
            yield ordered
        finally:
            for lock in reversed(acquired):
                lock.release()


# Shared by every engine instance in this process
order_locks = OrderLockRegistry()
