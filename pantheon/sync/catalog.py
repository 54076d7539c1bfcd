"""
pantheon/sync/catalog.py

In-memory god catalog with idempotent upsert keyed by name.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone


class GodCatalog:
    """
    Thread-safe set of known god names, remembering when each was first seen.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._first_seen: dict[str, datetime] = {}

    def upsert(self, name: str) -> bool:
        """
        Insert ``name`` (stripped) if absent. Returns True when it was new.

        Raises ValueError for a blank name.
        """

        key = (name or "").strip()
        if not key:
            raise ValueError("God name must not be blank.")
        with self._lock:
            if key in self._first_seen:
                return False
            self._first_seen[key] = datetime.now(timezone.utc)
            return True

    def exists(self, name: str) -> bool:
        with self._lock:
            return (name or "").strip() in self._first_seen

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._first_seen)

    def first_seen(self, name: str) -> datetime | None:
        with self._lock:
            return self._first_seen.get((name or "").strip())

    def count(self) -> int:
        with self._lock:
            return len(self._first_seen)
