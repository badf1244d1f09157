"""Order aggregate.

An order is written exactly once, by order placement.  Its line items
are frozen at that point; only ``status`` may change afterwards, and
that transition is owned by payment and fulfilment outside this core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    FAILED = "failed"
    PAID = "paid"
    DELIVERED = "delivered"
    CANCELED = "canceled"


@dataclass(frozen=True)
class OrderLineItem:
    """Product reference plus quantity.

    No price is kept per line; the order total is computed from the
    prices read while the order was being placed.
    """

    product_id: str
    quantity: Quantity


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders.  The ``__init__``
    is intentionally simple so the repository can reconstitute
    persisted orders without re-validating.
    """

    id: str | None
    user_id: str
    items: tuple[OrderLineItem, ...]
    total_price: Money
    status: OrderStatus = OrderStatus.PENDING
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderLineItem],
        total_price: Money,
        description: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not user_id:
            raise ValidationError("Order owner is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        now = datetime.now(timezone.utc)
        return Order(
            id=None,
            user_id=user_id,
            items=tuple(items),
            total_price=total_price,
            status=OrderStatus.PENDING,
            description=description,
            created_at=now,
            updated_at=now,
        )
