"""Unit tests for the Order aggregate."""

import dataclasses

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity


def _make_item(product_id: str = "p-1", qty: int = 1) -> OrderLineItem:
    return OrderLineItem(product_id=product_id, quantity=Quantity(qty))


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(
            user_id="user-1",
            items=[_make_item(qty=2)],
            total_price=Money.of("2400"),
            description="Birthday present",
        )
        assert order.user_id == "user-1"
        assert order.status == OrderStatus.PENDING
        assert order.total_price == Money.of("2400")
        assert order.description == "Birthday present"
        assert len(order.items) == 1

    def test_id_is_none_for_new_orders(self):
        order = Order.create("user-1", [_make_item()], Money.of("10"))
        assert order.id is None  # assigned by repository

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("user-1", [], Money.zero())

    def test_user_required(self):
        with pytest.raises(ValidationError, match="owner is required"):
            Order.create("", [_make_item()], Money.of("10"))


class TestOrderLineItemsImmutable:

    def test_items_are_a_tuple(self):
        items = [_make_item("p-1"), _make_item("p-2")]
        order = Order.create("user-1", items, Money.of("20"))
        items.append(_make_item("p-3"))
        assert isinstance(order.items, tuple)
        assert len(order.items) == 2

    def test_line_item_is_frozen(self):
        item = _make_item()
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.quantity = Quantity(5)


class TestOrderStatus:

    def test_status_values(self):
        assert [s.value for s in OrderStatus] == [
            "pending", "failed", "paid", "delivered", "canceled",
        ]
