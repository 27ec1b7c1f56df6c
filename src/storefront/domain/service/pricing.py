"""Domain service: pricing.

Pure functions that turn catalog prices, cart snapshots and coupon
rules into money amounts.  Nothing here touches a repository; the
application handlers feed these functions and persist the results.

Flow at checkout::

    resolve_unit_price  ->  CartLine.unit_price snapshot
    aggregate_cart      ->  subtotal, product-discount savings
    compute_coupon_discount(subtotal)
    finalize_total(subtotal, coupon discount)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from storefront.domain.exceptions import (
    CouponBelowMinimumError,
    CouponExhaustedError,
    CouponExpiredError,
    CouponInactiveError,
)
from storefront.domain.model.cart import CartLine
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.discount import DiscountKind, ProductDiscount
from storefront.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Product discounts
# ---------------------------------------------------------------------------


def resolve_unit_price(
    base_price: Money,
    discount: ProductDiscount | None,
    now: datetime,
) -> Money:
    """Return the effective unit price of a product at *now*.

    A descriptor that cannot be applied (no kind, non-positive value,
    outside its active window) leaves the base price unchanged.  The
    result always satisfies ``0 <= price <= base_price``.
    """
    if discount is None:
        return base_price
    if not discount.usable_at(now):
        logger.debug("Ignoring discount %r at %s", discount, now.isoformat())
        return base_price

    if discount.kind is DiscountKind.PERCENTAGE:
        reduction = base_price.percent(discount.value)
        if discount.max_discount is not None and reduction > discount.max_discount:
            reduction = discount.max_discount
    else:
        reduction = Money(discount.value, base_price.currency)

    return base_price.minus_floor(reduction.min(base_price))


# ---------------------------------------------------------------------------
# Cart aggregation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CartTotals:

    subtotal: Money
    product_discount_savings: Money


def aggregate_cart(lines: list[CartLine]) -> CartTotals:
    """Sum line totals and product-level savings over a cart snapshot."""
    subtotal = Money.zero()
    savings = Money.zero()
    for line in lines:
        subtotal = subtotal + line.line_total
        savings = savings + line.savings
    return CartTotals(subtotal=subtotal, product_discount_savings=savings)


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------


def compute_coupon_discount(coupon: Coupon, subtotal: Money, now: datetime) -> Money:
    """Check *coupon* against the cart and return the discount it grants.

    Checks run in a fixed order so the reported reason is deterministic:
    inactive, expired, exhausted, below minimum.  The returned amount is
    always between zero and *subtotal*.
    """
    if not coupon.is_active:
        raise CouponInactiveError(coupon.code)
    if coupon.is_expired(now):
        raise CouponExpiredError(coupon.code)
    if coupon.is_exhausted:
        raise CouponExhaustedError(coupon.code)
    if coupon.min_amount is not None and subtotal < coupon.min_amount:
        raise CouponBelowMinimumError(coupon.code, coupon.min_amount)

    if coupon.kind is DiscountKind.PERCENTAGE:
        discount = subtotal.percent(coupon.value)
        if coupon.max_discount is not None and discount > coupon.max_discount:
            discount = coupon.max_discount
    else:
        discount = Money(coupon.value, subtotal.currency)

    return discount.min(subtotal)


# ---------------------------------------------------------------------------
# Order totals
# ---------------------------------------------------------------------------


def finalize_total(subtotal: Money, coupon_discount: Money) -> Money:
    """Amount charged: subtotal minus coupon discount, floored at zero."""
    return subtotal.minus_floor(coupon_discount)
