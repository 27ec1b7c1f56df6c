"""Application service: Remove From Cart use case."""

from __future__ import annotations

from storefront.application.session import CustomerSession
from storefront.domain.repository.cart_repository import CartRepository


class RemoveFromCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, session: CustomerSession, product_id: str) -> None:
        cart = self._cart_repo.get_for_customer(session.customer_id)
        cart.remove(product_id)
        self._cart_repo.save(cart)
