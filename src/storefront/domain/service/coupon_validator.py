"""Domain service: Coupon validation.

Looks a coupon up by its normalized code and checks it against the
current subtotal.  Nothing is cached: every call recomputes the
discount, so a cart that changed since the coupon was applied is
always priced against its new subtotal.
"""

from __future__ import annotations

from datetime import datetime

from storefront.domain.exceptions import CouponNotFoundError
from storefront.domain.model.coupon import Coupon, normalize_code
from storefront.domain.model.order import AppliedCoupon
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.domain.service.pricing import compute_coupon_discount


class CouponValidator:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def lookup(self, code: str) -> Coupon:
        normalized = normalize_code(code)
        coupon = self._coupon_repo.get_by_code(normalized) if normalized else None
        if coupon is None:
            raise CouponNotFoundError(normalized or code)
        return coupon

    def validate(self, code: str, subtotal: Money, now: datetime) -> AppliedCoupon:
        """Return the applicable discount or raise a CouponError subclass."""
        coupon = self.lookup(code)
        discount = compute_coupon_discount(coupon, subtotal, now)
        return AppliedCoupon(code=coupon.code, discount=discount)
