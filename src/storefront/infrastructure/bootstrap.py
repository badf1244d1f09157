"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Clients are created
lazily and shared per process.
"""

from __future__ import annotations

from functools import lru_cache

import redis
from pymongo import MongoClient
from pymongo.database import Database

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.list_my_orders import ListMyOrdersHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.cache.redis_catalog_cache import RedisCatalogCache
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.persistence.mongo_order_repository import (
    MongoOrderRepository,
)
from storefront.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from storefront.infrastructure.persistence.mongo_unit_of_work import MongoUnitOfWork

PRODUCTS_COLLECTION = "products"
ORDERS_COLLECTION = "orders"


# --- Clients ----------------------------------------------------------------


@lru_cache()
def mongo_client() -> MongoClient:
    settings = get_settings()
    return MongoClient(
        settings.MONGO_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
    )


def database() -> Database:
    return mongo_client()[get_settings().MONGO_DATABASE]


@lru_cache()
def redis_client() -> redis.Redis:
    settings = get_settings()
    return redis.Redis.from_url(
        settings.REDIS_URI,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
        decode_responses=True,
    )


# --- Ports ------------------------------------------------------------------


def product_repository() -> MongoProductRepository:
    return MongoProductRepository(database()[PRODUCTS_COLLECTION])


def order_repository() -> MongoOrderRepository:
    return MongoOrderRepository(database()[ORDERS_COLLECTION])


def unit_of_work() -> UnitOfWork:
    return MongoUnitOfWork(mongo_client())


def catalog_cache() -> RedisCatalogCache:
    return RedisCatalogCache(redis_client())


def ensure_indexes() -> None:
    product_repository().ensure_indexes()
    order_repository().ensure_indexes()


# --- Use cases --------------------------------------------------------------


def place_order_handler() -> PlaceOrderHandler:
    return PlaceOrderHandler(
        product_repo=product_repository(),
        order_repo=order_repository(),
        uow_factory=unit_of_work,
    )


def list_my_orders_handler() -> ListMyOrdersHandler:
    return ListMyOrdersHandler(order_repo=order_repository())


def list_products_handler() -> ListProductsHandler:
    return ListProductsHandler(
        product_repo=product_repository(),
        cache=catalog_cache(),
        ttl_seconds=get_settings().CATALOG_CACHE_TTL,
    )


def show_product_handler() -> ShowProductHandler:
    return ShowProductHandler(product_repo=product_repository())


def add_product_handler() -> AddProductHandler:
    return AddProductHandler(product_repo=product_repository(), cache=catalog_cache())


def update_product_handler() -> UpdateProductHandler:
    return UpdateProductHandler(product_repo=product_repository(), cache=catalog_cache())


def delete_product_handler() -> DeleteProductHandler:
    return DeleteProductHandler(product_repo=product_repository(), cache=catalog_cache())
