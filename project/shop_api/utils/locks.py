# shop_api/utils/locks.py

import asyncio
from contextlib import asynccontextmanager


class KeyedLocks:
    """
    asyncio.Lock на каждый ключ (id клиента).
    Действует только внутри одного процесса.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str):
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                # последний ожидающий: замок больше не нужен
                del self._waiters[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
