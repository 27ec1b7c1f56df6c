"""JSON-file-backed implementation of WishlistRepository.

Wishlists are stored as one object keyed by customer ID, like carts.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.model.wishlist import Wishlist, WishlistEntry
from storefront.domain.repository.wishlist_repository import WishlistRepository
from storefront.infrastructure.persistence.json_store import JsonFile


class JsonWishlistRepository(WishlistRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty={})

    def get_for_customer(self, customer_id: str) -> Wishlist:
        raw = self._file.load().get(customer_id, [])
        return Wishlist(
            customer_id=customer_id,
            entries=[
                WishlistEntry(
                    product_id=item["product_id"],
                    added_at=datetime.fromisoformat(item["added_at"]),
                )
                for item in raw
            ],
        )

    def save(self, wishlist: Wishlist) -> None:
        with self._file.transaction() as wishlists:
            if wishlist.is_empty:
                wishlists.pop(wishlist.customer_id, None)
            else:
                wishlists[wishlist.customer_id] = [
                    {"product_id": e.product_id, "added_at": e.added_at.isoformat()}
                    for e in wishlist.entries
                ]
