"""MongoDB-backed implementation of ProductRepository."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from bson import Decimal128, ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import EDITABLE_FIELDS, Category, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.mongo_support import (
    as_utc,
    storage_errors,
    to_decimal,
    to_ref,
)
from storefront.infrastructure.persistence.mongo_unit_of_work import session_of

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


class MongoProductRepository(ProductRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        with storage_errors("create product indexes"):
            self._collection.create_index(NEWEST_FIRST)
            self._collection.create_index([("name", ASCENDING)])

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str, uow: UnitOfWork | None = None) -> Product | None:
        oid = _object_id(product_id)
        if oid is None:
            return None
        with storage_errors(f"load product {product_id}"):
            raw = self._collection.find_one({"_id": oid}, session=session_of(uow))
        return self._to_domain(raw) if raw is not None else None

    def decrement_stock(self, product_id: str, quantity: int, uow: UnitOfWork) -> bool:
        oid = _object_id(product_id)
        if oid is None:
            return False
        with storage_errors(f"decrement stock of product {product_id}"):
            result = self._collection.update_one(
                {"_id": oid, "stock": {"$gte": quantity}},
                {
                    "$inc": {"stock": -quantity},
                    "$set": {"updatedAt": datetime.now(timezone.utc)},
                },
                session=session_of(uow),
            )
        return result.modified_count == 1

    def find_page(self, search: str | None, skip: int, limit: int) -> list[Product]:
        with storage_errors("list products"):
            cursor = (
                self._collection.find(_name_filter(search))
                .sort(NEWEST_FIRST)
                .skip(skip)
                .limit(limit)
            )
            return [self._to_domain(raw) for raw in cursor]

    def count(self, search: str | None) -> int:
        with storage_errors("count products"):
            return self._collection.count_documents(_name_filter(search))

    def add(self, product: Product) -> Product:
        with storage_errors("insert product"):
            result = self._collection.insert_one(self._to_raw(product))
        product.id = str(result.inserted_id)
        return product

    def save(self, product: Product, fields: Iterable[str]) -> None:
        oid = _object_id(product.id)
        if oid is None:
            raise EntityNotFoundError(f"Product with id {product.id} not found")
        fields = set(fields)
        unknown = fields - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")

        raw = self._to_raw(product)
        # Editable fields share their names with the stored document.
        changes = {name: raw[name] for name in fields}
        changes.update(updatedBy=raw["updatedBy"], updatedAt=raw["updatedAt"])
        with storage_errors(f"update product {product.id}"):
            result = self._collection.update_one({"_id": oid}, {"$set": changes})
        if result.matched_count == 0:
            raise EntityNotFoundError(f"Product with id {product.id} not found")

    def delete(self, product_id: str) -> bool:
        oid = _object_id(product_id)
        if oid is None:
            return False
        with storage_errors(f"delete product {product_id}"):
            result = self._collection.delete_one({"_id": oid})
        return result.deleted_count == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict[str, Any]:
        return {
            "name": product.name,
            "price": Decimal128(product.price.amount),
            "description": product.description,
            "category": product.category.value,
            "stock": product.stock,
            "user": to_ref(product.owner_id),
            "updatedBy": to_ref(product.updated_by),
            "createdAt": product.created_at,
            "updatedAt": product.updated_at,
        }

    @staticmethod
    def _to_domain(raw: dict[str, Any]) -> Product:
        return Product(
            id=str(raw["_id"]),
            name=raw["name"],
            price=Money(to_decimal(raw["price"])),
            description=raw.get("description", ""),
            category=Category(raw["category"]),
            stock=int(raw.get("stock", 0)),
            owner_id=str(raw["user"]),
            updated_by=str(raw.get("updatedBy", raw["user"])),
            created_at=as_utc(raw["createdAt"]),
            updated_at=as_utc(raw.get("updatedAt", raw["createdAt"])),
        )


# --- Helpers ----------------------------------------------------------------


def _object_id(value: str | None) -> ObjectId | None:
    if value is None or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def _name_filter(search: str | None) -> dict[str, Any]:
    if not search:
        return {}
    return {"name": {"$regex": re.escape(search), "$options": "i"}}
