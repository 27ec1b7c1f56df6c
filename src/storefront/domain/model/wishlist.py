"""Wishlist aggregate, one per customer.

A wishlist only remembers which products a customer saved and when.
Prices and availability are always read from the catalog when the list
is shown, so nothing here goes stale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from storefront.domain.exceptions import EntityNotFoundError, ValidationError


@dataclass(frozen=True)
class WishlistEntry:

    product_id: str
    added_at: datetime


@dataclass
class Wishlist:

    customer_id: str
    entries: list[WishlistEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def contains(self, product_id: str) -> bool:
        return any(e.product_id == product_id for e in self.entries)

    def add(self, product_id: str, added_at: datetime) -> WishlistEntry:
        """Save a product; each product can be saved once."""
        if self.contains(product_id):
            raise ValidationError("Product already in wishlist")
        entry = WishlistEntry(product_id=product_id, added_at=added_at)
        self.entries.append(entry)
        return entry

    def remove(self, product_id: str) -> None:
        for entry in self.entries:
            if entry.product_id == product_id:
                self.entries.remove(entry)
                return
        raise EntityNotFoundError("Item not found in wishlist")

    def newest_first(self) -> list[WishlistEntry]:
        return sorted(self.entries, key=lambda e: e.added_at, reverse=True)
