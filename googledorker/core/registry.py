"""Thread-safe collection of discovered hostnames."""

from __future__ import annotations

import threading
from typing import List, Set


class SubdomainRegistry:
    """Deduplicating hostname set whose snapshots are always sorted.

    One registry is owned by each domain search, but every operation takes
    the internal lock so an instance can also be shared between threads.

    Example::

        registry = SubdomainRegistry()
        registry.add("www.example.com")
        registry.add("api.example.com")
        registry.snapshot()  # ['api.example.com', 'www.example.com']
    """

    def __init__(self) -> None:
        self._items: Set[str] = set()
        self._lock = threading.Lock()

    def add(self, hostname: str) -> None:
        """Insert *hostname*; repeated inserts are no-ops."""
        with self._lock:
            self._items.add(hostname)

    def snapshot(self) -> List[str]:
        """Return every distinct hostname added so far, sorted ascending."""
        with self._lock:
            return sorted(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, hostname: object) -> bool:
        with self._lock:
            return hostname in self._items

    def __repr__(self) -> str:
        return f"<SubdomainRegistry {len(self)} hosts>"
