"""Application service: Delete Product use case.

Orders that reference the product keep their line items; they only
store the product id.
"""

from __future__ import annotations

import logging

from storefront.application.catalog_cache_keys import invalidate_catalog
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.catalog_cache import CatalogCache
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository, cache: CatalogCache) -> None:
        self._product_repo = product_repo
        self._cache = cache

    def handle(self, product_id: str) -> None:
        if not self._product_repo.delete(product_id):
            raise EntityNotFoundError(f"Product with id {product_id} not found")
        invalidate_catalog(self._cache)
        logger.info("Product %s removed", product_id)
