"""Application service: Remove From Wishlist use case."""

from __future__ import annotations

from storefront.application.session import CustomerSession
from storefront.domain.repository.wishlist_repository import WishlistRepository


class RemoveFromWishlistHandler:

    def __init__(self, wishlist_repo: WishlistRepository) -> None:
        self._wishlist_repo = wishlist_repo

    def handle(self, session: CustomerSession, product_id: str) -> None:
        wishlist = self._wishlist_repo.get_for_customer(session.customer_id)
        wishlist.remove(product_id)
        self._wishlist_repo.save(wishlist)
