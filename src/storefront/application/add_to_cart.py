"""Application service: Add To Cart use case.

Takes a price snapshot of the product when it first enters the cart.
Adding a product that is already in the cart merges the quantities;
the stock check applies to the merged quantity.
"""

from __future__ import annotations

from storefront.application.dto import CartLineDTO
from storefront.application.mappers import cart_line_to_dto
from storefront.application.session import Clock, CustomerSession, utc_now
from storefront.domain.exceptions import EntityNotFoundError, OutOfStockError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


def require_active_product(product_repo: ProductRepository, product_id: str) -> Product:
    product = product_repo.get_by_id(product_id)
    if product is None or not product.is_active:
        raise EntityNotFoundError(f"Product {product_id} not found or inactive")
    return product


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._clock = clock

    def handle(self, session: CustomerSession, product_id: str, quantity: int = 1) -> CartLineDTO:
        requested = Quantity(quantity)
        product = require_active_product(self._product_repo, product_id)
        cart = self._cart_repo.get_for_customer(session.customer_id)

        line = cart.find_line(product.id)
        total = requested.value + (line.quantity.value if line is not None else 0)
        if total > product.stock:
            raise OutOfStockError(product.title, total, product.stock)

        if line is not None:
            cart.set_quantity(product.id, total)
        else:
            line = CartLine(
                product_id=product.id,
                title=product.title,
                quantity=requested,
                unit_price=product.final_price(self._clock()),  # <-- price snapshot
                original_price=product.base_price,
            )
            cart.add_line(line)

        self._cart_repo.save(cart)
        return cart_line_to_dto(line)
