"""Application service: List Wishlist use case (query).

Saved products are priced from the current catalog, newest first.
Products that were deleted or deactivated since they were saved are
left out of the listing but kept in the stored wishlist, so they come
back if the product is offered again.
"""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.application.mappers import product_to_dto
from storefront.application.session import Clock, CustomerSession, utc_now
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.domain.repository.wishlist_repository import WishlistRepository


class ListWishlistHandler:

    def __init__(
        self,
        wishlist_repo: WishlistRepository,
        product_repo: ProductRepository,
        settings_repo: SettingsRepository | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._wishlist_repo = wishlist_repo
        self._product_repo = product_repo
        self._settings_repo = settings_repo
        self._clock = clock

    def handle(self, session: CustomerSession) -> list[ProductDTO]:
        wishlist = self._wishlist_repo.get_for_customer(session.customer_id)
        now = self._clock()
        settings = self._settings_repo.get() if self._settings_repo is not None else None

        result = []
        for entry in wishlist.newest_first():
            product = self._product_repo.get_by_id(entry.product_id)
            if product is None or not product.is_active:
                continue
            result.append(product_to_dto(product, now, settings))
        return result
