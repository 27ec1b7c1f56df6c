"""Application service: Set Product Discount use case.

Discount descriptors are validated here, when the admin saves them,
instead of being silently ignored later by the price resolver.
"""

from __future__ import annotations

import logging

from storefront.application.dto import DiscountSpec, ProductDTO
from storefront.application.mappers import product_to_dto
from storefront.application.session import Clock, utc_now
from storefront.domain.exceptions import EntityNotFoundError, InvalidDiscountConfigError
from storefront.domain.model.discount import DiscountKind, ProductDiscount
from storefront.domain.model.value_objects import Money, parse_decimal
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def parse_kind(raw: str) -> DiscountKind:
    try:
        return DiscountKind(raw.strip().lower())
    except ValueError as exc:
        raise InvalidDiscountConfigError(
            f"Discount type must be 'percentage' or 'fixed', got {raw!r}"
        ) from exc


def build_discount(spec: DiscountSpec) -> ProductDiscount:
    """Turn admin input into a validated ProductDiscount."""
    value = parse_decimal(spec.value, "discount value")
    max_discount = None
    if spec.max_discount:
        cap = parse_decimal(spec.max_discount, "maximum discount")
        if cap < 0:
            raise InvalidDiscountConfigError("Maximum discount cannot be negative")
        max_discount = Money(cap)
    discount = ProductDiscount(
        kind=parse_kind(spec.kind),
        value=value,
        max_discount=max_discount,
        active_from=spec.active_from,
        active_until=spec.active_until,
    )
    discount.validate()
    return discount


class SetProductDiscountHandler:

    def __init__(self, product_repo: ProductRepository, clock: Clock = utc_now) -> None:
        self._product_repo = product_repo
        self._clock = clock

    def handle(self, product_id: str, spec: DiscountSpec | None) -> ProductDTO:
        """Attach *spec* to the product, or remove its discount when None."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.set_discount(build_discount(spec) if spec is not None else None)
        self._product_repo.save(product)
        logger.info("Discount for product %s set to %r", product.id, product.discount)
        return product_to_dto(product, self._clock())
