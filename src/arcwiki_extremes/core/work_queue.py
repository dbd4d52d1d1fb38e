# ABOUTME: Fixed, ordered work list with an atomic claim-next operation
# ABOUTME: Shared by reference between pool workers for the lifetime of one run

import asyncio
from collections.abc import Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class WorkQueue(Generic[T]):
    """Ordered items plus a counter of the next unclaimed one.

    ``claim`` reads and advances the counter under a lock, so no two
    workers ever receive the same item and items go out in list order.
    """

    def __init__(self, items: Iterable[T]):
        self._items: list[T] = list(items)
        self._next = 0
        self._lock = asyncio.Lock()

    async def claim(self) -> T | None:
        """Return the next unclaimed item, or None once the list is exhausted."""
        async with self._lock:
            if self._next >= len(self._items):
                return None
            item = self._items[self._next]
            self._next += 1
            return item

    @property
    def claimed(self) -> int:
        return self._next

    @property
    def remaining(self) -> int:
        return len(self._items) - self._next

    @property
    def exhausted(self) -> bool:
        return self._next >= len(self._items)

    def __len__(self) -> int:
        return len(self._items)
