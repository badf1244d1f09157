"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.application.catalog_cache_keys import invalidate_catalog
from storefront.application.dto import ProductDTO, to_product_dto
from storefront.domain.model.product import Category, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_cache import CatalogCache
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, cache: CatalogCache) -> None:
        self._product_repo = product_repo
        self._cache = cache

    def handle(
        self,
        user_id: str,
        name: str,
        price: str | int | float,
        description: str,
        category: str | Category,
        stock: int = 0,
    ) -> ProductDTO:
        """Add a new product to the catalog, owned and last updated by *user_id*."""
        product = Product.create(
            owner_id=user_id,
            name=name,
            price=Money.of(price),
            description=description,
            category=category,
            stock=stock,
        )
        product = self._product_repo.add(product)
        invalidate_catalog(self._cache)

        logger.info("Product %s (%s) added by user %s", product.id, product.name, user_id)
        return to_product_dto(product)
