"""Application service: List My Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.repository.order_repository import OrderRepository


class ListMyOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str) -> list[OrderDTO]:
        if not user_id:
            raise ValidationError("User id is required")
        return [to_order_dto(order) for order in self._order_repo.list_by_user(user_id)]
