"""Redis-backed implementation of CatalogCache.

All entries live under one key prefix, so ``flush()`` clears the whole
catalog cache without touching anything else stored in the same Redis
database.
"""

from __future__ import annotations

import logging

import redis
from redis.exceptions import RedisError

from storefront.domain.exceptions import CacheError
from storefront.domain.repository.catalog_cache import CatalogCache

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "storefront:"
FLUSH_BATCH_SIZE = 500


class RedisCatalogCache(CatalogCache):

    def __init__(self, client: redis.Redis, prefix: str = DEFAULT_PREFIX) -> None:
        self._client = client
        self._prefix = prefix

    # --- CatalogCache interface -----------------------------------------------

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(self._build_key(key))
        except RedisError as exc:
            raise CacheError(f"Redis error getting key {key}: {exc}") from exc
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            self._client.set(self._build_key(key), value, ex=ttl_seconds)
        except RedisError as exc:
            raise CacheError(f"Redis error setting key {key}: {exc}") from exc
        logger.debug("Cached %s for %ss", key, ttl_seconds)

    def flush(self) -> None:
        removed = 0
        batch: list = []
        try:
            for cache_key in self._client.scan_iter(match=f"{self._prefix}*", count=FLUSH_BATCH_SIZE):
                batch.append(cache_key)
                if len(batch) >= FLUSH_BATCH_SIZE:
                    removed += self._client.delete(*batch)
                    batch.clear()
            if batch:
                removed += self._client.delete(*batch)
        except RedisError as exc:
            raise CacheError(f"Redis error flushing catalog cache: {exc}") from exc
        logger.info("Catalog cache flushed (%d entries)", removed)

    # --- Internal helpers -----------------------------------------------------

    def _build_key(self, key: str) -> str:
        return f"{self._prefix}{key}"
