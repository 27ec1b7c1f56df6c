"""Order aggregate.

An order is created once at checkout from a cart snapshot.  Its line
prices and totals are frozen at that moment; later changes to products
or coupons never reach a placed order.  After placement only the
fulfilment status moves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    EmptyCartError,
    MissingCustomerFieldError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.pricing import CartTotals, finalize_total


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


FINAL_STATUSES = (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


@dataclass(frozen=True)
class Address:

    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "USA"


@dataclass(frozen=True)
class CustomerInfo:

    name: str = ""
    email: str = ""
    phone: str = ""
    address: Address = field(default_factory=Address)

    def require_complete(self) -> None:
        """Raise for the first missing contact or address field."""
        required = (
            ("name", self.name),
            ("email", self.email),
            ("phone", self.phone),
            ("street", self.address.street),
            ("city", self.address.city),
        )
        for label, value in required:
            if not value or not value.strip():
                raise MissingCustomerFieldError(label)

    def normalized(self) -> CustomerInfo:
        return CustomerInfo(
            name=self.name.strip(),
            email=self.email.strip().lower(),
            phone=self.phone.strip(),
            address=Address(
                street=self.address.street.strip(),
                city=self.address.city.strip(),
                state=self.address.state.strip(),
                zip_code=self.address.zip_code.strip(),
                country=self.address.country.strip() or "USA",
            ),
        )


@dataclass
class OrderLineItem:
    """Captures the price a customer paid per unit (price lock)."""

    product_id: str
    title: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class AppliedCoupon:

    code: str
    discount: Money


@dataclass(frozen=True)
class OrderTotals:
    """Frozen money snapshot of an order.

    ``product_discount_savings`` is informational; it is already folded
    into ``subtotal`` through the line prices.
    """

    subtotal: Money
    product_discount_savings: Money
    coupon_discount: Money
    final_total: Money

    @staticmethod
    def compute(cart_totals: CartTotals, coupon_discount: Money) -> OrderTotals:
        return OrderTotals(
            subtotal=cart_totals.subtotal,
            product_discount_savings=cart_totals.product_discount_savings,
            coupon_discount=coupon_discount,
            final_total=finalize_total(cart_totals.subtotal, coupon_discount),
        )


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders.  The ``__init__`` stays plain
    so the repository can reconstitute persisted orders as they were.
    """

    id: int | None
    customer_id: str
    items: list[OrderLineItem]
    customer_info: CustomerInfo
    totals: OrderTotals
    coupon: AppliedCoupon | None = None
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.COMPLETED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        customer_id: str,
        items: list[OrderLineItem],
        customer_info: CustomerInfo,
        totals: OrderTotals,
        coupon: AppliedCoupon | None = None,
        created_at: datetime | None = None,
    ) -> Order:
        if not items:
            raise EmptyCartError()
        customer_info.require_complete()
        return Order(
            id=None,
            customer_id=customer_id,
            items=list(items),
            customer_info=customer_info.normalized(),
            totals=totals,
            coupon=coupon,
            created_at=created_at or datetime.now(timezone.utc),
        )

    # --- State transitions ----------------------------------------------------

    def update_status(self, new_status: OrderStatus) -> None:
        """Move the order to *new_status*; delivered and cancelled are final."""
        if self.status in FINAL_STATUSES:
            raise ValidationError(
                f"Cannot change order in {self.status.value} status"
            )
        if new_status == self.status:
            raise ValidationError(f"Order is already {self.status.value}")

        self.status = new_status
        if new_status == OrderStatus.DELIVERED:
            self.payment_status = PaymentStatus.COMPLETED
        elif new_status == OrderStatus.CANCELLED:
            self.payment_status = PaymentStatus.CANCELLED
        else:
            self.payment_status = PaymentStatus.PENDING

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        return self.totals.final_total

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
