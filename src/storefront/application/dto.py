"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money values are
pre-formatted strings (e.g. "$15.00").
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class DiscountSpec:
    """Input: a product discount as entered by the admin."""

    kind: str  # "percentage" or "fixed"
    value: str
    max_discount: str | None = None
    active_from: datetime | None = None
    active_until: datetime | None = None


@dataclass(frozen=True)
class CouponSpec:
    """Input: a coupon as entered by the admin."""

    code: str
    kind: str
    value: str
    min_amount: str | None = None
    max_discount: str | None = None
    expiry_date: datetime | None = None
    usage_limit: int | None = None


@dataclass(frozen=True)
class AddressSpec:

    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""


@dataclass(frozen=True)
class CustomerInfoSpec:
    """Input: contact and shipping details given at checkout."""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: AddressSpec = field(default_factory=AddressSpec)


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class ProductDTO:

    id: str
    title: str
    category: str
    base_price: str
    final_price: str
    stock: int
    is_active: bool
    discount_label: str | None  # e.g. "20% OFF", None when not active
    discount_percentage: int
    display_price: str | None = None  # final price in the store display currency


@dataclass(frozen=True)
class CouponDTO:

    code: str
    kind: str
    value: str
    description: str
    min_amount: str | None
    max_discount: str | None
    expiry_date: str | None
    usage: str  # e.g. "3/10" or "3/∞"
    is_active: bool


@dataclass(frozen=True)
class AppliedCouponDTO:

    code: str
    discount: str


@dataclass(frozen=True)
class CartLineDTO:

    product_id: str
    title: str
    quantity: int
    unit_price: str
    original_price: str
    line_total: str
    discounted: bool


@dataclass(frozen=True)
class CartSummaryDTO:
    """Output: the cart with every total recomputed from its lines."""

    customer_id: str
    lines: list[CartLineDTO]
    subtotal: str
    product_discount_savings: str
    coupon_code: str | None
    coupon_discount: str
    coupon_error: str | None
    final_total: str
    display_total: str | None = None  # final total in the store display currency


@dataclass(frozen=True)
class OrderLineItemDTO:

    product_id: str
    title: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a placed order as displayed to the user."""

    id: int
    customer_id: str
    customer_name: str
    customer_email: str
    shipping_address: str
    status: str
    payment_status: str
    items: list[OrderLineItemDTO]
    item_count: int
    coupon_code: str | None
    subtotal: str
    product_discount_savings: str
    coupon_discount: str
    total: str
    created_at: str
