"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order
from storefront.domain.repository.unit_of_work import UnitOfWork


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order, uow: UnitOfWork) -> Order:
        """Insert a new order inside *uow* and assign its ID."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return every order owned by *user_id*, in insertion order."""
