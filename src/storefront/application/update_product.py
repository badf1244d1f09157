"""Application service: Update Product use case.

Price changes do not touch existing orders: their totals were fixed
when they were placed.
"""

from __future__ import annotations

import logging
from typing import Any

from storefront.application.catalog_cache_keys import invalidate_catalog
from storefront.application.dto import ProductDTO, to_product_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.repository.catalog_cache import CatalogCache
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository, cache: CatalogCache) -> None:
        self._product_repo = product_repo
        self._cache = cache

    def handle(self, product_id: str, user_id: str, changes: dict[str, Any]) -> ProductDTO:
        """Apply *changes* (name, price, description, category, stock)."""
        if not changes:
            raise ValidationError("No product changes provided")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with id {product_id} not found")

        product.apply_changes(changes, updated_by=user_id)
        self._product_repo.save(product, fields=changes.keys())
        invalidate_catalog(self._cache)

        logger.info(
            "Product %s updated by user %s (%s)",
            product_id, user_id, ", ".join(sorted(changes)),
        )
        return to_product_dto(product)
