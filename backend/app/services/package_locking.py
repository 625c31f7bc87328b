"""
Per-package locking for status updates.

Serializes concurrent writers on the same package inside this process so a
state update and its history append always run as an uninterrupted pair.
"""

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator


class PackageLockRegistry:
    """
    Hands out one asyncio.Lock per package id.

    Locks are held weakly and disappear once no coroutine references them,
    so the registry does not grow with the number of packages ever touched.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def lock_for(self, package_id: str) -> asyncio.Lock:
        lock = self._locks.get(package_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[package_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, package_id: str) -> AsyncIterator[None]:
        """
        Hold the lock for a package for the duration of the block.

        Args:
            package_id: Package to lock
        """
        lock = self.lock_for(package_id)
        async with lock:
            yield

    def is_locked(self, package_id: str) -> bool:
        lock = self._locks.get(package_id)
        return lock is not None and lock.locked()


package_locks = PackageLockRegistry()
