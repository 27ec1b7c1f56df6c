"""Application service: Update Cart Quantity use case.

A quantity of zero (or less) removes the line instead of keeping a
zero-quantity line.  Raising the quantity of a product that is no
longer sold is refused.  The line's price snapshot is left alone.
"""

from __future__ import annotations

from storefront.application.add_to_cart import require_active_product
from storefront.application.dto import CartLineDTO
from storefront.application.mappers import cart_line_to_dto
from storefront.application.session import CustomerSession
from storefront.domain.exceptions import OutOfStockError
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


class UpdateCartQuantityHandler:

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(
        self, session: CustomerSession, product_id: str, quantity: int
    ) -> CartLineDTO | None:
        """Return the updated line, or None if it was removed."""
        cart = self._cart_repo.get_for_customer(session.customer_id)

        if quantity > 0:
            product = require_active_product(self._product_repo, product_id)
            if quantity > product.stock:
                raise OutOfStockError(product.title, quantity, product.stock)

        cart.set_quantity(product_id, quantity)
        self._cart_repo.save(cart)

        line = cart.find_line(product_id)
        return cart_line_to_dto(line) if line is not None else None
