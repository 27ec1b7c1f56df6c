"""Coupon aggregate.

Coupon codes are case-insensitive.  Every code is passed through
``normalize_code()`` before it is stored or looked up, so the rest of
the code base only ever compares normalized keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.discount import DiscountKind
from storefront.domain.model.value_objects import Money


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


@dataclass
class Coupon:
    """A checkout-wide discount code.

    Invariants:
    - ``code`` is normalized
    - ``max_discount`` is only kept for percentage coupons
    """

    code: str
    kind: DiscountKind
    value: Decimal
    min_amount: Money | None = None
    max_discount: Money | None = None
    expiry_date: datetime | None = None
    usage_limit: int | None = None
    used_count: int = 0
    is_active: bool = True

    # --- Factory (used for NEW coupons only) ----------------------------------

    @staticmethod
    def create(
        code: str,
        kind: DiscountKind,
        value: Decimal,
        min_amount: Money | None = None,
        max_discount: Money | None = None,
        expiry_date: datetime | None = None,
        usage_limit: int | None = None,
    ) -> Coupon:
        """Create a new coupon, enforcing the admin-side rules."""
        normalized = normalize_code(code)
        if not normalized:
            raise ValidationError("Coupon code is required")

        coupon = Coupon(code=normalized, kind=kind, value=value)
        coupon.reconfigure(
            kind=kind,
            value=value,
            min_amount=min_amount,
            max_discount=max_discount,
            expiry_date=expiry_date,
            usage_limit=usage_limit,
        )
        return coupon

    # --- Admin mutations ------------------------------------------------------

    def reconfigure(
        self,
        kind: DiscountKind,
        value: Decimal,
        min_amount: Money | None = None,
        max_discount: Money | None = None,
        expiry_date: datetime | None = None,
        usage_limit: int | None = None,
    ) -> None:
        if value <= 0:
            raise ValidationError("Coupon value must be greater than zero")
        if kind is DiscountKind.PERCENTAGE and value > 100:
            raise ValidationError("Percentage coupon cannot exceed 100")
        if usage_limit is not None and usage_limit < 0:
            raise ValidationError("Usage limit cannot be negative")

        self.kind = kind
        self.value = value
        self.min_amount = None if min_amount is None or min_amount.is_zero else min_amount
        self.max_discount = max_discount if kind is DiscountKind.PERCENTAGE else None
        self.expiry_date = expiry_date
        # A limit of zero has always meant "unlimited" in the admin form.
        self.usage_limit = usage_limit or None

    def rename(self, code: str) -> None:
        normalized = normalize_code(code)
        if not normalized:
            raise ValidationError("Coupon code is required")
        self.code = normalized

    def toggle(self) -> None:
        self.is_active = not self.is_active

    # --- Queries --------------------------------------------------------------

    def is_expired(self, now: datetime) -> bool:
        return self.expiry_date is not None and now > self.expiry_date

    @property
    def is_exhausted(self) -> bool:
        return self.usage_limit is not None and self.used_count >= self.usage_limit

    def describe(self) -> str:
        if self.kind is DiscountKind.PERCENTAGE:
            text = f"{self.value.normalize():f}% off"
            if self.max_discount is not None:
                text += f" (max {self.max_discount})"
            return text
        return f"{Money(self.value)} off"
