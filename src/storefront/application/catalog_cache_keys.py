"""Query normalisation, cache keys, snapshots and invalidation for the catalog cache.

A cache key is derived from the *applied* query parameters, so
``listProducts()`` and ``listProducts(page=1, limit=10)`` share an entry.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from storefront.application.dto import CatalogPageDTO, ProductDTO
from storefront.domain.exceptions import CacheError
from storefront.domain.repository.catalog_cache import CatalogCache

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "products:"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# Upper bounds keep skip and limit well inside the store's 64-bit integers.
MAX_PAGE = 1_000_000
MAX_LIMIT = 100


def _positive_int(value: Any, default: int, maximum: int) -> int:
    """Coerce a page/limit parameter, falling back to *default*, capped at *maximum*."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value.isdecimal():
            return default
        if len(value.lstrip("0")) > len(str(maximum)):
            return maximum
        value = int(value)
    if not isinstance(value, int) or value < 1:
        return default
    return min(value, maximum)


@dataclass(frozen=True)
class CatalogQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    search: str | None = None

    @classmethod
    def from_raw(cls, page: Any = None, limit: Any = None, search: Any = None) -> CatalogQuery:
        if search is not None:
            search = str(search).strip() or None
        return cls(
            page=_positive_int(page, DEFAULT_PAGE, MAX_PAGE),
            limit=_positive_int(limit, DEFAULT_LIMIT, MAX_LIMIT),
            search=search,
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def cache_key(self) -> str:
        params = {"page": self.page, "limit": self.limit, "search": self.search}
        return CACHE_KEY_PREFIX + json.dumps(params, sort_keys=True, separators=(",", ":"))


# --- Snapshot encoding ------------------------------------------------------
#
# Stored shape: {"products": [...], "page": n, "count": n, "totalProducts": n}


def encode_snapshot(page: CatalogPageDTO) -> str:
    return json.dumps(
        {
            "products": [p.to_dict() for p in page.products],
            "page": page.page,
            "count": page.page_size,
            "totalProducts": page.total_count,
        }
    )


def decode_snapshot(raw: str | bytes) -> CatalogPageDTO:
    """Rebuild a cached page.

    Raises ValueError (JSONDecodeError included) or KeyError/TypeError
    when the stored value does not have the expected shape.
    """
    data = json.loads(raw)
    products = [ProductDTO.from_dict(p) for p in data["products"]]
    return CatalogPageDTO(
        products=products,
        page=int(data["page"]),
        page_size=int(data["count"]),
        total_count=int(data["totalProducts"]),
        served_from_cache=True,
    )


# --- Invalidation -----------------------------------------------------------


def invalidate_catalog(cache: CatalogCache) -> None:
    """Flush every cached listing after a catalog write.

    A failed flush is logged and swallowed: the write has already been
    committed, and entries expire on their own after the TTL.
    """
    try:
        cache.flush()
    except CacheError:
        logger.warning("Catalog cache flush failed; listings may be stale until expiry", exc_info=True)
