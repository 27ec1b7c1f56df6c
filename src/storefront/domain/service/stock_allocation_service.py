"""Domain service: Stock allocation.

Coordinates the cross-aggregate stock changes of a checkout.  Each
line is taken with the repository's conditional decrement; if any line
cannot be taken, every line already taken by this call is put back so
a failed checkout never leaves stock partially allocated.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import OutOfStockError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import OrderLineItem
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_available(self, lines: list[CartLine]) -> None:
        """Fail fast, before any mutation, if a line exceeds current stock."""
        for line in lines:
            product = self._product_repo.get_by_id(line.product_id)
            available = product.stock if product is not None else 0
            if line.quantity.value > available:
                raise OutOfStockError(line.title, line.quantity.value, available)

    def allocate(self, lines: list[CartLine]) -> None:
        """Take stock for every line, all or nothing."""
        taken: list[CartLine] = []
        for line in lines:
            if self._product_repo.decrement_stock(line.product_id, line.quantity.value):
                taken.append(line)
                continue

            self.release(taken)
            product = self._product_repo.get_by_id(line.product_id)
            available = product.stock if product is not None else 0
            logger.warning(
                "Stock allocation failed for %s (requested %d, available %d); "
                "released %d line(s)",
                line.product_id, line.quantity.value, available, len(taken),
            )
            raise OutOfStockError(line.title, line.quantity.value, available)

    def release(self, lines: list[CartLine] | list[OrderLineItem]) -> None:
        """Put the quantities of *lines* back into stock."""
        for line in lines:
            self._product_repo.restock(line.product_id, line.quantity.value)
