"""Application service: Place Order use case.

Stock checks, stock decrements and the order insert all run inside one
unit of work.  Either every decrement and the order become visible on
commit, or the unit of work is aborted and nothing changes.

Decrements are conditional ("only where stock >= quantity"), so two
orders racing for the same stock cannot both succeed even when the
store's isolation would let both read the same pre-decrement value.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from storefront.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    StorageError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)

# Attempts per order when the store reports a transient transaction conflict.
MAX_TRANSACTION_ATTEMPTS = 3


class PlaceOrderHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        uow_factory: UnitOfWorkFactory,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._uow_factory = uow_factory

    def handle(
        self,
        user_id: str,
        item_specs: Sequence[OrderItemSpec],
        description: str | None = None,
    ) -> OrderDTO:
        """Place an order for *user_id*.

        Steps:
        1. Validate the input without touching the store.
        2. Inside a unit of work, for each item in submission order:
           read the product, check stock, conditionally decrement it and
           add ``price * quantity`` to the total.
        3. Insert the pending order in the same unit of work and commit.

        A transient conflict with a concurrent order re-runs steps 2-3 in a
        fresh unit of work, up to MAX_TRANSACTION_ATTEMPTS times in total.

        Raises ValidationError, EntityNotFoundError, InsufficientStockError
        (naming the first product that cannot be served) or StorageError.
        """
        line_items = self._validate(user_id, item_specs)

        attempt = 1
        while True:
            try:
                order = self._place_once(user_id, line_items, description)
                break
            except (EntityNotFoundError, InsufficientStockError) as exc:
                logger.warning("Order for user %s rejected: %s", user_id, exc)
                raise
            except StorageError as exc:
                if exc.transient and attempt < MAX_TRANSACTION_ATTEMPTS:
                    # A competing order touched the same stock; start over so
                    # the stock checks see what it committed.
                    logger.info(
                        "Order for user %s hit a transient conflict (attempt %d); retrying",
                        user_id, attempt,
                    )
                    attempt += 1
                    continue
                logger.exception("Order for user %s aborted by storage failure", user_id)
                raise

        logger.info(
            "Order %s placed for user %s (%d line items, total %s)",
            order.id, user_id, len(order.items), order.total_price,
        )
        return to_order_dto(order)

    def _place_once(
        self,
        user_id: str,
        line_items: list[OrderLineItem],
        description: str | None,
    ) -> Order:
        """Run one unit of work; any exception leaves it aborted."""
        with self._uow_factory() as uow:
            total = Money.zero()
            for item in line_items:
                qty = item.quantity.value
                product = self._product_repo.get_by_id(item.product_id, uow)
                if product is None:
                    raise EntityNotFoundError(
                        f"Product with id {item.product_id} not found"
                    )
                if not product.has_stock_for(qty):
                    raise InsufficientStockError(product.name)
                if not self._product_repo.decrement_stock(product.id, qty, uow):
                    # Another order took the stock after our read.
                    raise InsufficientStockError(product.name)
                total = total + product.price * qty

            order = Order.create(
                user_id=user_id,
                items=line_items,
                total_price=total,
                description=description,
            )
            self._order_repo.add(order, uow)
            uow.commit()
        return order

    # --- Input validation -------------------------------------------------

    @staticmethod
    def _validate(user_id: str, item_specs: Sequence[OrderItemSpec]) -> list[OrderLineItem]:
        if not user_id:
            raise ValidationError("User id is required")

        if not isinstance(item_specs, (list, tuple)) or not item_specs:
            raise ValidationError("No order items provided")

        line_items: list[OrderLineItem] = []
        for position, spec in enumerate(item_specs, start=1):
            if not isinstance(spec, OrderItemSpec):
                raise ValidationError(f"Order item #{position} is malformed")
            if not spec.product_id or not isinstance(spec.product_id, str):
                raise ValidationError(f"Order item #{position} has no product id")
            try:
                quantity = Quantity(spec.quantity)
            except ValidationError as exc:
                raise ValidationError(
                    f"Order item #{position} ({spec.product_id}): {exc}"
                ) from exc
            line_items.append(OrderLineItem(product_id=spec.product_id, quantity=quantity))
        return line_items
