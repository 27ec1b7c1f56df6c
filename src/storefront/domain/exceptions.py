"""Domain-level exceptions.

Every business rule violation is a subclass of DomainException so the
CLI layer can catch them uniformly and show the message to the user.
Coupon failures share a CouponError base because checkout treats them
alike: the cart is left untouched and the reason is reported.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidDiscountConfigError(ValidationError):
    """A product discount descriptor cannot be saved as given."""


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------


class CouponError(ValidationError):
    """A coupon cannot be applied to the current cart."""


class CouponNotFoundError(CouponError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Coupon '{code}' not found")
        self.code = code


class CouponInactiveError(CouponError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Coupon '{code}' is not active")
        self.code = code


class CouponExpiredError(CouponError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Coupon '{code}' has expired")
        self.code = code


class CouponExhaustedError(CouponError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Coupon '{code}' usage limit exceeded")
        self.code = code


class CouponBelowMinimumError(CouponError):
    def __init__(self, code: str, minimum: object) -> None:
        super().__init__(f"Minimum order amount {minimum} required for coupon '{code}'")
        self.code = code
        self.minimum = minimum


# ---------------------------------------------------------------------------
# Cart and checkout
# ---------------------------------------------------------------------------


class OutOfStockError(ValidationError):
    def __init__(self, product_title: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_title} "
            f"(requested {requested}, available {available})"
        )
        self.product_title = product_title
        self.requested = requested
        self.available = available


class MissingCustomerFieldError(ValidationError):
    def __init__(self, field_name: str) -> None:
        super().__init__(f"Customer {field_name} is required")
        self.field_name = field_name


class EmptyCartError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Cart is empty")


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


class StorageError(DomainException):
    """Stored data could not be read or locked."""
