"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the boundary layer (CLI, HTTP handlers) and the
application layer without exposing domain internals.  Product DTOs are
also the unit stored in catalog cache snapshots, so they round-trip
through plain dicts.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order."""

    id: str
    user_id: str
    status: str
    items: list[OrderLineItemDTO]
    total_price: str  # plain amount, e.g. "2400.00"
    description: str | None
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductDTO:
    """Output: a catalog product."""

    id: str
    name: str
    price: str
    description: str
    category: str
    stock: int
    owner_id: str
    updated_by: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ProductDTO:
        return cls(**raw)


@dataclass(frozen=True)
class CatalogPageDTO:
    """Output: one page of the product listing."""

    products: list[ProductDTO]
    page: int
    page_size: int
    total_count: int
    served_from_cache: bool = False


# --- Mapping --------------------------------------------------------------


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(product_id=item.product_id, quantity=item.quantity.value)
            for item in order.items
        ],
        total_price=order.total_price.to_plain(),
        description=order.description,
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
    )


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        price=product.price.to_plain(),
        description=product.description,
        category=product.category.value,
        stock=product.stock,
        owner_id=product.owner_id,
        updated_by=product.updated_by,
        created_at=product.created_at.isoformat(),
        updated_at=product.updated_at.isoformat(),
    )
