"""Application service: Apply Coupon use case.

The coupon is validated against the cart's current subtotal.  Only the
normalized code is stored on the cart; the discount itself is derived
again whenever totals are needed.  A failed validation leaves the cart
exactly as it was.
"""

from __future__ import annotations

import logging

from storefront.application.dto import AppliedCouponDTO
from storefront.application.session import Clock, CustomerSession, utc_now
from storefront.domain.exceptions import EmptyCartError
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.domain.service.coupon_validator import CouponValidator
from storefront.domain.service.pricing import aggregate_cart

logger = logging.getLogger(__name__)


class ApplyCouponHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        coupon_repo: CouponRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._coupon_repo = coupon_repo
        self._clock = clock

    def handle(self, session: CustomerSession, code: str) -> AppliedCouponDTO:
        cart = self._cart_repo.get_for_customer(session.customer_id)
        if cart.is_empty:
            raise EmptyCartError()

        subtotal = aggregate_cart(cart.lines).subtotal
        applied = CouponValidator(self._coupon_repo).validate(code, subtotal, self._clock())

        cart.apply_coupon(applied.code)
        self._cart_repo.save(cart)
        logger.info(
            "Coupon %s applied to cart of %s (discount %s)",
            applied.code, session.customer_id, applied.discount,
        )
        return AppliedCouponDTO(code=applied.code, discount=str(applied.discount))
