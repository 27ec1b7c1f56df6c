"""Product-level discount descriptor.

A discount is attached to a product by the admin and is read-only from
the pricing side.  Descriptors coming back from storage are never
trusted blindly: ``usable_at()`` answers whether the resolver should
apply the discount at all, while ``validate()`` is the strict check
run when the admin saves one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import InvalidDiscountConfigError
from storefront.domain.model.value_objects import Money


class DiscountKind(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class ProductDiscount:

    kind: DiscountKind | None
    value: Decimal
    max_discount: Money | None = None
    active_from: datetime | None = None
    active_until: datetime | None = None

    def validate(self) -> None:
        """Reject a descriptor that would be silently ignored when pricing."""
        if self.kind is None:
            raise InvalidDiscountConfigError("Discount type is required")
        if self.value <= 0:
            raise InvalidDiscountConfigError("Discount value must be greater than zero")
        if self.kind is DiscountKind.PERCENTAGE and self.value > 100:
            raise InvalidDiscountConfigError("Percentage discount cannot exceed 100")
        if self.max_discount is not None and self.kind is DiscountKind.FIXED:
            raise InvalidDiscountConfigError(
                "A maximum discount only applies to percentage discounts"
            )
        if (
            self.active_from is not None
            and self.active_until is not None
            and self.active_from > self.active_until
        ):
            raise InvalidDiscountConfigError("Discount start date is after its end date")

    def is_active(self, now: datetime) -> bool:
        """True when *now* falls inside the optional active window."""
        if self.active_from is not None and now < self.active_from:
            return False
        if self.active_until is not None and now > self.active_until:
            return False
        return True

    def usable_at(self, now: datetime) -> bool:
        return self.kind is not None and self.value > 0 and self.is_active(now)

    def describe(self) -> str:
        if self.kind is DiscountKind.PERCENTAGE:
            return f"{self.value.normalize():f}% OFF"
        return f"{Money(self.value)} OFF"
