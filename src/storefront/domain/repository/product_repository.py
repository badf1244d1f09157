"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (MongoDB, in-memory)
live in the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from storefront.domain.model.product import Product
from storefront.domain.repository.unit_of_work import UnitOfWork


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str, uow: UnitOfWork | None = None) -> Product | None:
        """Return a product by its ID, or None if not found.

        Ids that cannot exist in the store (wrong format) also yield None.
        """

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int, uow: UnitOfWork) -> bool:
        """Lower stock by *quantity* only where stock >= quantity.

        Returns False when nothing matched, i.e. the product vanished or
        its stock no longer covers the request.
        """

    @abstractmethod
    def find_page(self, search: str | None, skip: int, limit: int) -> list[Product]:
        """Return products whose name contains *search*, newest first."""

    @abstractmethod
    def count(self, search: str | None) -> int:
        """Count products whose name contains *search*."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product and assign its ID."""

    @abstractmethod
    def save(self, product: Product, fields: Iterable[str]) -> None:
        """Persist the listed editable *fields* plus the audit stamps.

        Fields that were not edited are left as stored, so a concurrent
        stock decrement survives a name or price change.
        """

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product. Returns False if it did not exist."""
