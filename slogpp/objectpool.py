"""A thread-safe pool of reusable objects."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, List, TypeVar

T = TypeVar("T")


class ObjectPool(Generic[T]):
    """Hands out objects built by ``factory`` and takes them back for reuse."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._objects: List[T] = []
        self._available: List[T] = []

    def _create(self) -> None:
        obj = self._factory()
        self._objects.append(obj)
        self._available.append(obj)

    def reserve(self, capacity: int) -> None:
        """Create objects until the pool holds at least ``capacity`` of them."""
        with self._lock:
            while len(self._objects) < capacity:
                self._create()

    @contextmanager
    def get(self) -> Iterator[T]:
        """Borrow an object for the duration of a ``with`` block."""
        with self._lock:
            if not self._available:
                self._create()
            obj = self._available.pop()
        try:
            yield obj
        finally:
            with self._lock:
                self._available.append(obj)

    def available(self) -> int:
        """Number of objects not currently borrowed."""
        with self._lock:
            return len(self._available)

    def capacity(self) -> int:
        """Number of objects the pool has created."""
        with self._lock:
            return len(self._objects)