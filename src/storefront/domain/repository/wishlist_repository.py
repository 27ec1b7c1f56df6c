"""Abstract repository for Wishlist aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.wishlist import Wishlist


class WishlistRepository(ABC):

    @abstractmethod
    def get_for_customer(self, customer_id: str) -> Wishlist:
        """Return the customer's wishlist, or a new empty one."""

    @abstractmethod
    def save(self, wishlist: Wishlist) -> None:
        """Persist the wishlist (an empty wishlist may be dropped)."""
