"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.application.dto import DiscountSpec, ProductDTO
from storefront.application.mappers import product_to_dto
from storefront.application.session import Clock, utc_now
from storefront.application.set_product_discount import build_discount
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import CATEGORIES, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, clock: Clock = utc_now) -> None:
        self._product_repo = product_repo
        self._clock = clock

    def handle(
        self,
        title: str,
        price: str,
        stock: int = 0,
        category: str = "other",
        discount: DiscountSpec | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if not title or not title.strip():
            raise ValidationError("Product title is required")
        if category not in CATEGORIES:
            raise ValidationError(
                f"Unknown category '{category}' (expected one of {', '.join(CATEGORIES)})"
            )

        existing = self._product_repo.get_by_title(title.strip())
        if existing is not None:
            raise ValidationError(f"Product '{title.strip()}' already exists")

        product = Product(
            id=self._product_repo.next_id(),
            title=title.strip(),
            base_price=Money.of(price),
            category=category,
        )
        product.set_stock(stock)
        if discount is not None:
            product.set_discount(build_discount(discount))

        self._product_repo.save(product)
        return product_to_dto(product, self._clock())
