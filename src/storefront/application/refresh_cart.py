"""Application service: Refresh Cart use case.

Re-fetches every line from the catalog: prices are re-snapshotted,
lines for products that vanished or were deactivated are dropped and
quantities above the current stock are reduced to it.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CartLineDTO
from storefront.application.mappers import cart_line_to_dto
from storefront.application.session import Clock, CustomerSession, utc_now
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class RefreshCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._clock = clock

    def handle(self, session: CustomerSession) -> list[CartLineDTO]:
        cart = self._cart_repo.get_for_customer(session.customer_id)
        now = self._clock()

        refreshed: list[CartLine] = []
        for line in cart.lines:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None or not product.is_active or product.stock == 0:
                logger.info("Dropping %s from cart of %s", line.product_id, cart.customer_id)
                continue
            refreshed.append(
                CartLine(
                    product_id=product.id,
                    title=product.title,
                    quantity=Quantity(min(line.quantity.value, product.stock)),
                    unit_price=product.final_price(now),
                    original_price=product.base_price,
                )
            )

        cart.lines = refreshed
        self._cart_repo.save(cart)
        return [cart_line_to_dto(line) for line in refreshed]
