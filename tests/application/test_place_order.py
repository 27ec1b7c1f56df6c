"""Integration tests for the PlaceOrder use case."""

from decimal import Decimal

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.apply_coupon import ApplyCouponHandler
from storefront.application.dto import AddressSpec, CustomerInfoSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.session import CustomerSession
from storefront.domain.exceptions import (
    CouponExhaustedError,
    CouponExpiredError,
    EmptyCartError,
    EntityNotFoundError,
    MissingCustomerFieldError,
    OutOfStockError,
)
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.discount import DiscountKind, ProductDiscount
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    NOW,
    FakeCartRepository,
    FakeCouponRepository,
    FakeOrderRepository,
    FakeProductRepository,
    fixed_clock,
)

ALICE = CustomerSession("alice")
BOB = CustomerSession("bob")

CUSTOMER = CustomerInfoSpec(
    name="Alice",
    email="ALICE@example.com",
    phone="555-0100",
    address=AddressSpec(street="1 Main St", city="Springfield", state="IL", zip_code="62701"),
)


def _setup(*coupons: Coupon):
    product_repo = FakeProductRepository([
        Product(id="1", title="Headphones", base_price=Money.of("100"), stock=10,
                discount=ProductDiscount(DiscountKind.PERCENTAGE, Decimal("20"))),
        Product(id="2", title="Cable", base_price=Money.of("10"), stock=1),
    ])
    cart_repo = FakeCartRepository()
    coupon_repo = FakeCouponRepository(list(coupons))
    order_repo = FakeOrderRepository()
    handler = PlaceOrderHandler(cart_repo, product_repo, coupon_repo, order_repo, fixed_clock())
    return cart_repo, product_repo, coupon_repo, order_repo, handler


def _add(cart_repo, product_repo, session, product_id, qty):
    AddToCartHandler(cart_repo, product_repo, fixed_clock()).handle(session, product_id, qty)


class TestPlaceOrderHappyPath:

    def test_place_order_with_coupon(self):
        coupon = Coupon.create("SAVE15", DiscountKind.FIXED, Decimal("15"),
                               min_amount=Money.of("50"), usage_limit=5)
        cart_repo, product_repo, coupon_repo, order_repo, handler = _setup(coupon)
        _add(cart_repo, product_repo, ALICE, "1", 2)
        ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "SAVE15")

        dto = handler.handle(ALICE, CUSTOMER)

        assert dto.id == 1
        assert dto.subtotal == "$160.00"
        assert dto.product_discount_savings == "$40.00"
        assert dto.coupon_code == "SAVE15"
        assert dto.coupon_discount == "$15.00"
        assert dto.total == "$145.00"
        assert dto.status == "pending"
        assert dto.payment_status == "completed"
        assert dto.customer_email == "alice@example.com"
        assert dto.shipping_address == "1 Main St, Springfield, IL, 62701, USA"

        assert product_repo.get_by_id("1").stock == 8
        assert coupon_repo.get_by_code("SAVE15").used_count == 1
        cart = cart_repo.get_for_customer("alice")
        assert cart.is_empty
        assert cart.coupon_code is None

    def test_order_keeps_cart_snapshot_price(self):
        cart_repo, product_repo, _, order_repo, handler = _setup()
        _add(cart_repo, product_repo, ALICE, "1", 1)
        product_repo.get_by_id("1").update_price(Money.of("500"))

        dto = handler.handle(ALICE, CUSTOMER)

        assert dto.items[0].unit_price == "$80.00"
        order = order_repo.get_by_id(dto.id)
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.COMPLETED

    def test_order_is_not_changed_by_later_catalog_edits(self):
        cart_repo, product_repo, _, order_repo, handler = _setup()
        _add(cart_repo, product_repo, ALICE, "1", 1)
        dto = handler.handle(ALICE, CUSTOMER)

        product_repo.get_by_id("1").set_discount(None)
        assert order_repo.get_by_id(dto.id).total == Money.of("80")


class TestPlaceOrderValidation:

    def test_empty_cart(self):
        *_, handler = _setup()
        with pytest.raises(EmptyCartError):
            handler.handle(ALICE, CUSTOMER)

    def test_missing_customer_field(self):
        cart_repo, product_repo, _, order_repo, handler = _setup()
        _add(cart_repo, product_repo, ALICE, "1", 1)
        spec = CustomerInfoSpec(name="Alice", email="", phone="1",
                                address=AddressSpec(street="x", city="y"))

        with pytest.raises(MissingCustomerFieldError, match="Customer email is required"):
            handler.handle(ALICE, spec)
        assert order_repo.list_all() == []
        assert product_repo.get_by_id("1").stock == 10

    def test_deactivated_product(self):
        cart_repo, product_repo, _, _, handler = _setup()
        _add(cart_repo, product_repo, ALICE, "1", 1)
        product_repo.get_by_id("1").deactivate()

        with pytest.raises(EntityNotFoundError, match="not found or inactive"):
            handler.handle(ALICE, CUSTOMER)
        assert not cart_repo.get_for_customer("alice").is_empty

    def test_coupon_invalid_at_checkout_leaves_everything(self):
        coupon = Coupon.create("SAVE15", DiscountKind.FIXED, Decimal("15"))
        cart_repo, product_repo, coupon_repo, order_repo, handler = _setup(coupon)
        _add(cart_repo, product_repo, ALICE, "1", 1)
        ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "SAVE15")
        coupon_repo.get_by_code("SAVE15").expiry_date = NOW.replace(year=2020)

        with pytest.raises(CouponExpiredError):
            handler.handle(ALICE, CUSTOMER)
        assert product_repo.get_by_id("1").stock == 10
        assert coupon_repo.get_by_code("SAVE15").used_count == 0
        assert cart_repo.get_for_customer("alice").coupon_code == "SAVE15"
        assert order_repo.list_all() == []


class TestPlaceOrderConcurrency:

    def test_second_checkout_for_last_unit_fails(self):
        cart_repo, product_repo, _, order_repo, handler = _setup()
        _add(cart_repo, product_repo, ALICE, "2", 1)
        _add(cart_repo, product_repo, BOB, "2", 1)

        handler.handle(ALICE, CUSTOMER)
        with pytest.raises(OutOfStockError, match="available 0"):
            handler.handle(BOB, CUSTOMER)

        assert product_repo.get_by_id("2").stock == 0
        assert len(order_repo.list_all()) == 1

    def test_stock_taken_between_check_and_commit_rolls_back(self):
        cart_repo, product_repo, _, order_repo, handler = _setup()
        _add(cart_repo, product_repo, ALICE, "1", 2)
        _add(cart_repo, product_repo, ALICE, "2", 1)

        original = product_repo.decrement_stock

        def racing_decrement(product_id, quantity):
            if product_id == "2":
                # Another checkout grabbed the last cable first.
                product_repo.get_by_id("2").stock = 0
            return original(product_id, quantity)

        product_repo.decrement_stock = racing_decrement

        with pytest.raises(OutOfStockError):
            handler.handle(ALICE, CUSTOMER)
        assert product_repo.get_by_id("1").stock == 10
        assert order_repo.list_all() == []
        assert len(cart_repo.get_for_customer("alice").lines) == 2

    def test_coupon_used_up_between_check_and_commit_releases_stock(self):
        coupon = Coupon.create("LAST", DiscountKind.FIXED, Decimal("5"), usage_limit=1)
        cart_repo, product_repo, coupon_repo, order_repo, handler = _setup(coupon)
        _add(cart_repo, product_repo, ALICE, "1", 1)
        ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "LAST")

        coupon_repo.increment_usage = lambda code: False

        with pytest.raises(CouponExhaustedError):
            handler.handle(ALICE, CUSTOMER)
        assert product_repo.get_by_id("1").stock == 10
        assert order_repo.list_all() == []

    def test_single_use_coupon_only_works_once(self):
        coupon = Coupon.create("ONCE", DiscountKind.FIXED, Decimal("5"), usage_limit=1)
        cart_repo, product_repo, coupon_repo, _, handler = _setup(coupon)
        apply = ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock())
        _add(cart_repo, product_repo, ALICE, "1", 1)
        _add(cart_repo, product_repo, BOB, "1", 1)
        apply.handle(ALICE, "ONCE")
        apply.handle(BOB, "ONCE")

        handler.handle(ALICE, CUSTOMER)
        with pytest.raises(CouponExhaustedError):
            handler.handle(BOB, CUSTOMER)
        assert coupon_repo.get_by_code("ONCE").used_count == 1
        assert product_repo.get_by_id("1").stock == 9

    def test_failed_order_save_gives_back_stock_and_coupon_use(self):
        coupon = Coupon.create("ONCE", DiscountKind.FIXED, Decimal("5"), usage_limit=1)
        cart_repo, product_repo, coupon_repo, order_repo, handler = _setup(coupon)
        _add(cart_repo, product_repo, ALICE, "1", 2)
        ApplyCouponHandler(cart_repo, coupon_repo, fixed_clock()).handle(ALICE, "ONCE")

        def failing_save(order):
            raise OSError("disk full")

        order_repo.save = failing_save

        with pytest.raises(OSError, match="disk full"):
            handler.handle(ALICE, CUSTOMER)
        assert product_repo.get_by_id("1").stock == 10
        assert coupon_repo.get_by_code("ONCE").used_count == 0
        assert len(cart_repo.get_for_customer("alice").lines) == 1
