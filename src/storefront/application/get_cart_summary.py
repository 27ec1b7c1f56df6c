"""Application service: Get Cart Summary use case (query).

All totals are recomputed from the cart lines on every call.  If the
applied coupon no longer validates against the current subtotal (the
cart shrank below its minimum, it expired, ...) the summary carries a
zero coupon discount together with the reason, and keeps the code so
the customer can see what happened.
"""

from __future__ import annotations

from storefront.application.dto import CartSummaryDTO
from storefront.application.mappers import cart_line_to_dto
from storefront.application.session import Clock, CustomerSession, utc_now
from storefront.domain.exceptions import CouponError
from storefront.domain.model.order import OrderTotals
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.domain.service.coupon_validator import CouponValidator
from storefront.domain.service.pricing import aggregate_cart


class GetCartSummaryHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        coupon_repo: CouponRepository,
        settings_repo: SettingsRepository | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._coupon_repo = coupon_repo
        self._settings_repo = settings_repo
        self._clock = clock

    def handle(self, session: CustomerSession) -> CartSummaryDTO:
        cart = self._cart_repo.get_for_customer(session.customer_id)
        cart_totals = aggregate_cart(cart.lines)

        coupon_discount = Money.zero()
        coupon_error: str | None = None
        if cart.coupon_code is not None:
            try:
                applied = CouponValidator(self._coupon_repo).validate(
                    cart.coupon_code, cart_totals.subtotal, self._clock()
                )
                coupon_discount = applied.discount
            except CouponError as exc:
                coupon_error = str(exc)

        totals = OrderTotals.compute(cart_totals, coupon_discount)
        display_total = None
        if self._settings_repo is not None:
            settings = self._settings_repo.get()
            if settings.currency_code != totals.final_total.currency:
                display_total = settings.format(totals.final_total)

        return CartSummaryDTO(
            customer_id=cart.customer_id,
            lines=[cart_line_to_dto(line) for line in cart.lines],
            subtotal=str(totals.subtotal),
            product_discount_savings=str(totals.product_discount_savings),
            coupon_code=cart.coupon_code,
            coupon_discount=str(totals.coupon_discount),
            coupon_error=coupon_error,
            final_total=str(totals.final_total),
            display_total=display_total,
        )
