"""Application service: Add To Wishlist use case."""

from __future__ import annotations

from storefront.application.add_to_cart import require_active_product
from storefront.application.dto import ProductDTO
from storefront.application.mappers import product_to_dto
from storefront.application.session import Clock, CustomerSession, utc_now
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.wishlist_repository import WishlistRepository


class AddToWishlistHandler:

    def __init__(
        self,
        wishlist_repo: WishlistRepository,
        product_repo: ProductRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._wishlist_repo = wishlist_repo
        self._product_repo = product_repo
        self._clock = clock

    def handle(self, session: CustomerSession, product_id: str) -> ProductDTO:
        product = require_active_product(self._product_repo, product_id)
        wishlist = self._wishlist_repo.get_for_customer(session.customer_id)

        now = self._clock()
        wishlist.add(product.id, now)
        self._wishlist_repo.save(wishlist)
        return product_to_dto(product, now)
