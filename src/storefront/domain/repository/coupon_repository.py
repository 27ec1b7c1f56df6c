"""Abstract repository for Coupon aggregate.

Codes passed to this interface are already normalized; see
``storefront.domain.model.coupon.normalize_code``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.coupon import Coupon


class CouponRepository(ABC):

    @abstractmethod
    def get_by_code(self, code: str) -> Coupon | None:
        """Return the coupon stored under a normalized code, or None."""

    @abstractmethod
    def list_all(self) -> list[Coupon]:
        """Return every coupon."""

    @abstractmethod
    def save(self, coupon: Coupon, previous_code: str | None = None) -> None:
        """Persist a new or updated coupon.

        *previous_code* is given when the coupon was renamed so the old
        record can be replaced.  The stored ``used_count`` of an existing
        coupon is kept; only checkout moves it.
        """

    @abstractmethod
    def delete(self, code: str) -> bool:
        """Remove a coupon; False if it did not exist."""

    @abstractmethod
    def increment_usage(self, code: str) -> bool:
        """Atomically record one use if the usage limit still allows it.

        Returns False, leaving the counter unchanged, when the coupon is
        missing or already at its limit.
        """

    @abstractmethod
    def decrement_usage(self, code: str) -> None:
        """Atomically give back one recorded use, never going below zero."""
