"""Cart aggregate, one per customer session.

A cart line keeps a snapshot of the product's resolved price taken when
the line was added.  Later catalog changes are only picked up when the
cart is refreshed.  The applied coupon is stored by code only; its
discount is derived from the current subtotal every time it is needed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity

MAX_CART_LINES = 50


@dataclass
class CartLine:

    product_id: str
    title: str
    quantity: Quantity
    unit_price: Money  # resolved final price at snapshot time
    original_price: Money  # base price at snapshot time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def savings(self) -> Money:
        return (self.original_price - self.unit_price) * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for a customer's cart.

    Stock limits are enforced by the application handlers that mutate
    the cart, since they need the catalog to know the current stock.
    """

    customer_id: str
    lines: list[CartLine] = field(default_factory=list)
    coupon_code: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find_line(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def add_line(self, line: CartLine) -> None:
        if self.find_line(line.product_id) is not None:
            raise ValidationError(f"Product '{line.title}' is already in the cart")
        if len(self.lines) >= MAX_CART_LINES:
            raise ValidationError(f"Maximum {MAX_CART_LINES} products per cart")
        self.lines.append(line)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        line = self._get_line(product_id)
        if quantity <= 0:
            self.remove(product_id)
            return
        line.quantity = Quantity(quantity)

    def remove(self, product_id: str) -> None:
        line = self._get_line(product_id)
        self.lines.remove(line)

    def clear(self) -> None:
        self.lines.clear()
        self.coupon_code = None

    # --- Coupon ---------------------------------------------------------------

    def apply_coupon(self, code: str) -> None:
        self.coupon_code = code

    def remove_coupon(self) -> None:
        self.coupon_code = None

    # --- Internal helpers -----------------------------------------------------

    def _get_line(self, product_id: str) -> CartLine:
        line = self.find_line(product_id)
        if line is None:
            raise ValidationError(f"Product ID '{product_id}' is not in the cart")
        return line
