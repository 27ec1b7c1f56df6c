"""Unit tests for the Order aggregate."""

import pytest

from storefront.domain.exceptions import (
    EmptyCartError,
    MissingCustomerFieldError,
    ValidationError,
)
from storefront.domain.model.order import (
    Address,
    CustomerInfo,
    Order,
    OrderLineItem,
    OrderStatus,
    OrderTotals,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.pricing import CartTotals


def _customer(**overrides) -> CustomerInfo:
    fields = dict(
        name="Alice",
        email="Alice@Example.com ",
        phone="555-0100",
        address=Address(street="1 Main St", city="Springfield"),
    )
    fields.update(overrides)
    return CustomerInfo(**fields)


def _order() -> Order:
    totals = OrderTotals.compute(
        CartTotals(subtotal=Money.of("40"), product_discount_savings=Money.zero()),
        Money.of("5"),
    )
    return Order.place(
        customer_id="alice",
        items=[OrderLineItem("1", "Mug", Quantity(2), Money.of("20"))],
        customer_info=_customer(),
        totals=totals,
    )


class TestCustomerInfo:

    @pytest.mark.parametrize("field_name", ["name", "email", "phone"])
    def test_missing_contact_field(self, field_name):
        with pytest.raises(MissingCustomerFieldError, match=f"Customer {field_name} is required"):
            _customer(**{field_name: "  "}).require_complete()

    def test_missing_street(self):
        info = _customer(address=Address(city="Springfield"))
        with pytest.raises(MissingCustomerFieldError, match="street"):
            info.require_complete()

    def test_normalized(self):
        info = _customer(address=Address(street=" 1 Main St ", city="X", country=" "))
        normalized = info.normalized()
        assert normalized.email == "alice@example.com"
        assert normalized.address.street == "1 Main St"
        assert normalized.address.country == "USA"


class TestOrderPlace:

    def test_place_sets_defaults(self):
        order = _order()
        assert order.id is None
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.COMPLETED
        assert order.total == Money.of("35")
        assert order.item_count == 2
        assert order.customer_info.email == "alice@example.com"

    def test_place_without_items(self):
        with pytest.raises(EmptyCartError):
            Order.place(
                customer_id="alice",
                items=[],
                customer_info=_customer(),
                totals=OrderTotals.compute(
                    CartTotals(Money.zero(), Money.zero()), Money.zero()
                ),
            )


class TestOrderStatus:

    def test_processing_marks_payment_pending(self):
        order = _order()
        order.update_status(OrderStatus.PROCESSING)
        assert order.payment_status == PaymentStatus.PENDING

    def test_delivered_completes_payment(self):
        order = _order()
        order.update_status(OrderStatus.SHIPPED)
        order.update_status(OrderStatus.DELIVERED)
        assert order.payment_status == PaymentStatus.COMPLETED

    def test_cancel(self):
        order = _order()
        order.update_status(OrderStatus.CANCELLED)
        assert order.status == OrderStatus.CANCELLED
        assert order.payment_status == PaymentStatus.CANCELLED

    def test_final_status_is_locked(self):
        order = _order()
        order.update_status(OrderStatus.CANCELLED)
        with pytest.raises(ValidationError, match="Cannot change order in cancelled status"):
            order.update_status(OrderStatus.PROCESSING)

    def test_same_status_rejected(self):
        with pytest.raises(ValidationError, match="already pending"):
            _order().update_status(OrderStatus.PENDING)
