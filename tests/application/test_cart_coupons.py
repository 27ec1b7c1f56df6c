"""Integration tests for applying coupons and summarising the cart."""

from datetime import timedelta
from decimal import Decimal

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.apply_coupon import ApplyCouponHandler
from storefront.application.get_cart_summary import GetCartSummaryHandler
from storefront.application.remove_coupon import RemoveCouponHandler
from storefront.application.session import CustomerSession
from storefront.application.update_cart_quantity import UpdateCartQuantityHandler
from storefront.domain.exceptions import (
    CouponBelowMinimumError,
    CouponExhaustedError,
    CouponNotFoundError,
    EmptyCartError,
)
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.discount import DiscountKind, ProductDiscount
from storefront.domain.model.product import Product
from storefront.domain.model.settings import StoreSettings
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    NOW,
    FakeCartRepository,
    FakeCouponRepository,
    FakeProductRepository,
    FakeSettingsRepository,
    fixed_clock,
)

ALICE = CustomerSession("alice")


def _setup(*coupons: Coupon):
    product_repo = FakeProductRepository([
        Product(id="1", title="Headphones", base_price=Money.of("100"), stock=10,
                discount=ProductDiscount(DiscountKind.PERCENTAGE, Decimal("20"))),
    ])
    cart_repo = FakeCartRepository()
    coupon_repo = FakeCouponRepository(list(coupons))
    AddToCartHandler(cart_repo, product_repo, fixed_clock()).handle(ALICE, "1", 2)
    return cart_repo, product_repo, coupon_repo


class TestApplyCoupon:

    def test_apply_fixed_coupon(self):
        coupon = Coupon.create("SAVE15", DiscountKind.FIXED, Decimal("15"),
                               min_amount=Money.of("50"))
        cart_repo, _, coupon_repo = _setup(coupon)

        dto = ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "save15 ")

        assert dto.code == "SAVE15"
        assert dto.discount == "$15.00"
        assert cart_repo.get_for_customer("alice").coupon_code == "SAVE15"

    def test_failed_validation_leaves_cart_untouched(self):
        coupon = Coupon.create("BIG", DiscountKind.FIXED, Decimal("15"),
                               min_amount=Money.of("200"))
        cart_repo, _, coupon_repo = _setup(coupon)

        with pytest.raises(CouponBelowMinimumError):
            ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "BIG")
        assert cart_repo.get_for_customer("alice").coupon_code is None

    def test_unknown_code(self):
        cart_repo, _, coupon_repo = _setup()
        with pytest.raises(CouponNotFoundError):
            ApplyCouponHandler(cart_repo, coupon_repo).handle(ALICE, "NOPE")

    def test_exhausted_coupon(self):
        coupon = Coupon.create("ONCE", DiscountKind.FIXED, Decimal("5"), usage_limit=1)
        coupon.used_count = 1
        cart_repo, _, coupon_repo = _setup(coupon)
        with pytest.raises(CouponExhaustedError):
            ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "ONCE")

    def test_empty_cart_rejected(self):
        coupon_repo = FakeCouponRepository(
            [Coupon.create("SAVE15", DiscountKind.FIXED, Decimal("15"))]
        )
        with pytest.raises(EmptyCartError):
            ApplyCouponHandler(FakeCartRepository(), coupon_repo).handle(ALICE, "SAVE15")

    def test_remove_coupon(self):
        coupon = Coupon.create("SAVE15", DiscountKind.FIXED, Decimal("15"))
        cart_repo, _, coupon_repo = _setup(coupon)
        ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "SAVE15")

        RemoveCouponHandler(cart_repo).handle(ALICE)
        assert cart_repo.get_for_customer("alice").coupon_code is None


class TestCartSummary:

    def test_totals_with_coupon(self):
        coupon = Coupon.create("SAVE15", DiscountKind.FIXED, Decimal("15"),
                               min_amount=Money.of("50"))
        cart_repo, _, coupon_repo = _setup(coupon)
        ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "SAVE15")

        summary = GetCartSummaryHandler(cart_repo, coupon_repo, clock=fixed_clock()).handle(ALICE)

        assert summary.subtotal == "$160.00"
        assert summary.product_discount_savings == "$40.00"
        assert summary.coupon_code == "SAVE15"
        assert summary.coupon_discount == "$15.00"
        assert summary.coupon_error is None
        assert summary.final_total == "$145.00"
        assert summary.display_total is None

    def test_coupon_recomputed_after_cart_shrinks(self):
        coupon = Coupon.create("SAVE15", DiscountKind.FIXED, Decimal("15"),
                               min_amount=Money.of("150"))
        cart_repo, product_repo, coupon_repo = _setup(coupon)
        ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "SAVE15")
        UpdateCartQuantityHandler(cart_repo, product_repo).handle(ALICE, "1", 1)

        summary = GetCartSummaryHandler(cart_repo, coupon_repo, clock=fixed_clock()).handle(ALICE)

        assert summary.subtotal == "$80.00"
        assert summary.coupon_code == "SAVE15"
        assert summary.coupon_discount == "$0.00"
        assert "Minimum order amount" in summary.coupon_error
        assert summary.final_total == "$80.00"

    def test_coupon_expired_since_apply(self):
        coupon = Coupon.create("SOON", DiscountKind.FIXED, Decimal("10"),
                               expiry_date=NOW + timedelta(hours=1))
        cart_repo, _, coupon_repo = _setup(coupon)
        ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "SOON")

        later = fixed_clock(NOW + timedelta(days=1))
        summary = GetCartSummaryHandler(cart_repo, coupon_repo, clock=later).handle(ALICE)

        assert summary.coupon_error == "Coupon 'SOON' has expired"
        assert summary.final_total == "$160.00"

    def test_empty_cart_summary(self):
        summary = GetCartSummaryHandler(FakeCartRepository(), FakeCouponRepository()).handle(ALICE)
        assert summary.lines == []
        assert summary.final_total == "$0.00"

    def test_display_total_in_store_currency(self):
        cart_repo, _, coupon_repo = _setup()
        settings = StoreSettings()
        settings.set_currency("EUR")

        summary = GetCartSummaryHandler(
            cart_repo, coupon_repo, FakeSettingsRepository(settings), fixed_clock()
        ).handle(ALICE)

        assert summary.final_total == "$160.00"
        assert summary.display_total == "€136.00"
