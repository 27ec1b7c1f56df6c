"""Application service: Update Order Status use case.

Cancelling an order puts its quantities back into stock.  Totals are
never touched; they stay as frozen at checkout.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO
from storefront.application.mappers import order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_allocation_service import StockAllocationService

logger = logging.getLogger(__name__)


def parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown status '{raw}' (expected one of {allowed})") from exc


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: int, status: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        new_status = parse_status(status)
        order.update_status(new_status)
        if new_status == OrderStatus.CANCELLED:
            StockAllocationService(self._product_repo).release(order.items)

        self._order_repo.save(order)
        logger.info("Order #%s marked %s", order.id, order.status.value)
        return order_to_dto(order)
