"""Product aggregate.

Products live independently of carts and orders.  Prices and discounts
change over time; carts and orders keep their own price snapshots, so
those changes never reach back into them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.discount import ProductDiscount
from storefront.domain.model.value_objects import Money
from storefront.domain.service.pricing import resolve_unit_price

CATEGORIES = ("electronics", "clothing", "home", "sports", "books", "beauty", "other")


@dataclass
class Product:
    """A product in the catalog.

    Aggregate root for catalog operations.  Stock is changed through the
    repository's conditional operations at checkout; ``set_stock`` is the
    admin's direct override.
    """

    id: str
    title: str
    base_price: Money
    stock: int = 0
    discount: ProductDiscount | None = None
    category: str = "other"
    is_active: bool = True

    # --- Pricing --------------------------------------------------------------

    def final_price(self, now: datetime) -> Money:
        return resolve_unit_price(self.base_price, self.discount, now)

    def discount_amount(self, now: datetime) -> Money:
        return self.base_price - self.final_price(now)

    def discount_percentage(self, now: datetime) -> int:
        """Whole-number percentage saved, for display."""
        if self.base_price.is_zero:
            return 0
        ratio = self.discount_amount(now).amount / self.base_price.amount * 100
        return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def has_active_discount(self, now: datetime) -> bool:
        return self.final_price(now) < self.base_price

    # --- Admin mutations ------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the base price.

        Existing cart lines and orders are not affected; they captured a
        price snapshot.
        """
        self.base_price = new_price

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = quantity

    def set_discount(self, discount: ProductDiscount | None) -> None:
        if discount is not None:
            discount.validate()
        self.discount = discount

    def deactivate(self) -> None:
        self.is_active = False
