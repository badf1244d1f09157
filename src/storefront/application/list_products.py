"""Application service: List Products use case (cache-aside query).

The cache is consulted first under a key derived from the applied query.
A miss, an unreadable snapshot or a cache outage all fall through to the
product repository; the fresh page is then written back best-effort.
The cache can make this query faster, never make it fail.
"""

from __future__ import annotations

import logging
from typing import Any

from storefront.application.catalog_cache_keys import (
    CatalogQuery,
    decode_snapshot,
    encode_snapshot,
)
from storefront.application.dto import CatalogPageDTO, to_product_dto
from storefront.domain.exceptions import CacheError
from storefront.domain.repository.catalog_cache import CatalogCache
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

CATALOG_CACHE_TTL_SECONDS = 600


class ListProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        cache: CatalogCache,
        ttl_seconds: int = CATALOG_CACHE_TTL_SECONDS,
    ) -> None:
        self._product_repo = product_repo
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def handle(
        self,
        page: Any = None,
        limit: Any = None,
        search: Any = None,
    ) -> CatalogPageDTO:
        """Return one page of products matching *search*, newest first."""
        query = CatalogQuery.from_raw(page=page, limit=limit, search=search)
        key = query.cache_key()

        cached = self._read_cache(key)
        if cached is not None:
            return cached

        products = self._product_repo.find_page(query.search, query.skip, query.limit)
        total = self._product_repo.count(query.search)
        result = CatalogPageDTO(
            products=[to_product_dto(p) for p in products],
            page=query.page,
            page_size=len(products),
            total_count=total,
        )

        self._write_cache(key, result)
        return result

    # --- Cache helpers ----------------------------------------------------

    def _read_cache(self, key: str) -> CatalogPageDTO | None:
        try:
            raw = self._cache.get(key)
        except CacheError:
            logger.warning("Catalog cache read failed for %s; using store", key, exc_info=True)
            return None

        if raw is None:
            logger.debug("Catalog cache miss for %s", key)
            return None

        try:
            snapshot = decode_snapshot(raw)
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding unreadable catalog snapshot for %s", key, exc_info=True)
            return None

        logger.debug("Catalog cache hit for %s", key)
        return snapshot

    def _write_cache(self, key: str, page: CatalogPageDTO) -> None:
        try:
            self._cache.set(key, encode_snapshot(page), self._ttl_seconds)
        except CacheError:
            logger.warning("Catalog cache write failed for %s", key, exc_info=True)
