"""Abstract cache in front of catalog reads.

The cache is never authoritative. Any component may flush it; the
only cost is extra misses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CatalogCache(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None on a miss.

        Raises CacheError when the backend itself fails.
        """

    @abstractmethod
    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store *value* under *key* for *ttl_seconds*."""

    @abstractmethod
    def flush(self) -> None:
        """Drop every entry."""
