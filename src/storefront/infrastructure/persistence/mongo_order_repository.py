"""MongoDB-backed implementation of OrderRepository."""

from __future__ import annotations

from typing import Any

from bson import Decimal128
from pymongo import ASCENDING
from pymongo.collection import Collection

from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.mongo_support import (
    as_utc,
    storage_errors,
    to_decimal,
    to_ref,
)
from storefront.infrastructure.persistence.mongo_unit_of_work import session_of


class MongoOrderRepository(OrderRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        with storage_errors("create order indexes"):
            self._collection.create_index([("user", ASCENDING), ("_id", ASCENDING)])

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order, uow: UnitOfWork) -> Order:
        with storage_errors("insert order"):
            result = self._collection.insert_one(
                self._to_raw(order), session=session_of(uow)
            )
        order.id = str(result.inserted_id)
        return order

    def list_by_user(self, user_id: str) -> list[Order]:
        with storage_errors(f"list orders of user {user_id}"):
            cursor = self._collection.find({"user": to_ref(user_id)}).sort("_id", ASCENDING)
            return [self._to_domain(raw) for raw in cursor]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict[str, Any]:
        raw: dict[str, Any] = {
            "user": to_ref(order.user_id),
            "products": [
                {
                    "product": to_ref(item.product_id),
                    "quantity": item.quantity.value,
                }
                for item in order.items
            ],
            "totalPrice": Decimal128(order.total_price.amount),
            "status": order.status.value,
            "createdAt": order.created_at,
            "updatedAt": order.updated_at,
        }
        if order.description is not None:
            raw["description"] = order.description
        return raw

    @staticmethod
    def _to_domain(raw: dict[str, Any]) -> Order:
        return Order(
            id=str(raw["_id"]),
            user_id=str(raw["user"]),
            items=tuple(
                OrderLineItem(product_id=str(i["product"]), quantity=Quantity(int(i["quantity"])))
                for i in raw["products"]
            ),
            total_price=Money(to_decimal(raw["totalPrice"])),
            status=OrderStatus(raw.get("status", OrderStatus.PENDING.value)),
            description=raw.get("description"),
            created_at=as_utc(raw["createdAt"]),
            updated_at=as_utc(raw.get("updatedAt", raw["createdAt"])),
        )
