"""Application service: Remove Coupon use case."""

from __future__ import annotations

from storefront.application.session import CustomerSession
from storefront.domain.repository.cart_repository import CartRepository


class RemoveCouponHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, session: CustomerSession) -> None:
        cart = self._cart_repo.get_for_customer(session.customer_id)
        cart.remove_coupon()
        self._cart_repo.save(cart)
