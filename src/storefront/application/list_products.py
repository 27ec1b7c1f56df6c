"""Application service: List Products use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.application.mappers import product_to_dto
from storefront.application.session import Clock, utc_now
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.settings_repository import SettingsRepository


class ListProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        settings_repo: SettingsRepository | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._product_repo = product_repo
        self._settings_repo = settings_repo
        self._clock = clock

    def handle(self, include_inactive: bool = False) -> list[ProductDTO]:
        now = self._clock()
        settings = self._settings_repo.get() if self._settings_repo is not None else None
        return [
            product_to_dto(p, now, settings)
            for p in self._product_repo.list_all()
            if include_inactive or p.is_active
        ]
