"""Integration tests for order queries, status updates and sales reporting."""

from datetime import timedelta
from decimal import Decimal

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.dto import AddressSpec, CustomerInfoSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.sales_summary import SalesSummaryHandler
from storefront.application.session import CustomerSession
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_settings import SetCurrencyHandler, ShowSettingsHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    NOW,
    FakeCartRepository,
    FakeCouponRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeSettingsRepository,
    fixed_clock,
)

CUSTOMER = CustomerInfoSpec(
    name="Alice", email="alice@example.com", phone="555-0100",
    address=AddressSpec(street="1 Main St", city="Springfield"),
)


def _setup():
    product_repo = FakeProductRepository([
        Product(id="1", title="Mug", base_price=Money.of("10"), stock=50),
        Product(id="2", title="Lamp", base_price=Money.of("40"), stock=50),
    ])
    return FakeCartRepository(), product_repo, FakeOrderRepository()


def _place(cart_repo, product_repo, order_repo, customer, items):
    session = CustomerSession(customer)
    add = AddToCartHandler(cart_repo, product_repo, fixed_clock())
    for product_id, qty in items:
        add.handle(session, product_id, qty)
    handler = PlaceOrderHandler(
        cart_repo, product_repo, FakeCouponRepository(), order_repo, fixed_clock()
    )
    return handler.handle(session, CUSTOMER)


class TestShowAndListOrders:

    def test_show(self):
        cart_repo, product_repo, order_repo = _setup()
        placed = _place(cart_repo, product_repo, order_repo, "alice", [("1", 2), ("2", 1)])
        dto = ShowOrderHandler(order_repo).handle(placed.id)
        assert dto.total == "$60.00"
        assert dto.item_count == 3

    def test_show_unknown(self):
        with pytest.raises(EntityNotFoundError, match="Order #7 not found"):
            ShowOrderHandler(FakeOrderRepository()).handle(7)

    def test_list_newest_first_and_filtered(self):
        cart_repo, product_repo, order_repo = _setup()
        first = _place(cart_repo, product_repo, order_repo, "alice", [("1", 1)])
        second = _place(cart_repo, product_repo, order_repo, "bob", [("2", 1)])
        third = _place(cart_repo, product_repo, order_repo, "alice", [("2", 1)])
        order_repo.get_by_id(first.id).created_at = NOW - timedelta(days=2)
        order_repo.get_by_id(second.id).created_at = NOW - timedelta(days=1)
        order_repo.get_by_id(third.id).created_at = NOW

        assert [o.id for o in ListOrdersHandler(order_repo).handle()] == [3, 2, 1]
        assert [o.id for o in ListOrdersHandler(order_repo).handle("alice")] == [3, 1]


class TestUpdateOrderStatus:

    def test_ship(self):
        cart_repo, product_repo, order_repo = _setup()
        placed = _place(cart_repo, product_repo, order_repo, "alice", [("1", 1)])
        dto = UpdateOrderStatusHandler(order_repo, product_repo).handle(placed.id, "Shipped")
        assert dto.status == "shipped"
        assert dto.payment_status == "pending"

    def test_cancel_restocks(self):
        cart_repo, product_repo, order_repo = _setup()
        placed = _place(cart_repo, product_repo, order_repo, "alice", [("1", 5)])
        assert product_repo.get_by_id("1").stock == 45

        dto = UpdateOrderStatusHandler(order_repo, product_repo).handle(placed.id, "cancelled")

        assert dto.payment_status == "cancelled"
        assert dto.total == "$50.00"
        assert product_repo.get_by_id("1").stock == 50

    def test_cancelled_order_cannot_be_cancelled_twice(self):
        cart_repo, product_repo, order_repo = _setup()
        placed = _place(cart_repo, product_repo, order_repo, "alice", [("1", 5)])
        handler = UpdateOrderStatusHandler(order_repo, product_repo)
        handler.handle(placed.id, "cancelled")

        with pytest.raises(ValidationError, match="Cannot change order"):
            handler.handle(placed.id, "cancelled")
        assert product_repo.get_by_id("1").stock == 50

    def test_unknown_status(self):
        cart_repo, product_repo, order_repo = _setup()
        placed = _place(cart_repo, product_repo, order_repo, "alice", [("1", 1)])
        with pytest.raises(ValidationError, match="Unknown status 'lost'"):
            UpdateOrderStatusHandler(order_repo, product_repo).handle(placed.id, "lost")

    def test_unknown_order(self):
        _, product_repo, order_repo = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateOrderStatusHandler(order_repo, product_repo).handle(42, "shipped")


class TestSalesSummary:

    def test_summary(self):
        cart_repo, product_repo, order_repo = _setup()
        status = UpdateOrderStatusHandler(order_repo, product_repo)
        a = _place(cart_repo, product_repo, order_repo, "alice", [("1", 3)])
        b = _place(cart_repo, product_repo, order_repo, "bob", [("1", 1), ("2", 1)])
        c = _place(cart_repo, product_repo, order_repo, "carol", [("2", 4)])
        _place(cart_repo, product_repo, order_repo, "dave", [("1", 1)])
        status.handle(a.id, "shipped")
        status.handle(b.id, "delivered")
        status.handle(c.id, "cancelled")

        summary = SalesSummaryHandler(order_repo).handle()

        assert summary.total_sales == "$80.00"
        assert summary.completed_orders == 2
        assert summary.pending_orders == 1
        assert summary.average_order_value == "$40.00"
        assert summary.total_coupon_discount == "$0.00"
        assert [(p.title, p.quantity) for p in summary.top_products] == [
            ("Mug", 5), ("Lamp", 1),
        ]

    def test_empty_store(self):
        summary = SalesSummaryHandler(FakeOrderRepository()).handle()
        assert summary.total_sales == "$0.00"
        assert summary.average_order_value == "$0.00"
        assert summary.top_products == []


class TestSettings:

    def test_set_currency_with_rate(self):
        repo = FakeSettingsRepository()
        SetCurrencyHandler(repo).handle("cad", rate="1.4")

        settings = ShowSettingsHandler(repo).handle()
        assert settings.currency_code == "CAD"
        assert settings.rate == Decimal("1.4")

    def test_unsupported_currency_not_saved(self):
        repo = FakeSettingsRepository()
        with pytest.raises(ValidationError, match="Unsupported currency"):
            SetCurrencyHandler(repo).handle("XYZ")
        assert ShowSettingsHandler(repo).handle().currency_code == "USD"
