"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.application.mappers import product_to_dto
from storefront.application.session import Clock, utc_now
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository, clock: Clock = utc_now) -> None:
        self._product_repo = product_repo
        self._clock = clock

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        stock: int | None = None,
        deactivate: bool = False,
    ) -> ProductDTO:
        """Update a product's price, stock level or availability.

        Carts and orders that already hold this product keep their
        price snapshot.  ``save()`` keeps the stored stock, so a new
        stock level is written through ``set_stock``.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if new_price is not None:
            product.update_price(Money.of(new_price))
        if stock is not None:
            product.set_stock(stock)
        if deactivate:
            product.deactivate()

        self._product_repo.save(product)
        if stock is not None:
            self._product_repo.set_stock(product.id, product.stock)
        stored = self._product_repo.get_by_id(product_id) or product
        return product_to_dto(stored, self._clock())
