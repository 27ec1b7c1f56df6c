"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.discount import DiscountKind, ProductDiscount
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_store import (
    JsonFile,
    dump_datetime,
    load_datetime,
)

logger = logging.getLogger(__name__)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        records = self._file.load()
        if not records:
            return "1"
        return str(max(int(r["id"]) for r in records) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_title(self, title: str) -> Product | None:
        for raw in self._file.load():
            if raw["title"].lower() == title.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    # stock only moves through the conditional operations
                    records[i] = {**self._to_raw(product), "stock": raw.get("stock", 0)}
                    break
            else:
                records.append(self._to_raw(product))

    def set_stock(self, product_id: str, quantity: int) -> bool:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == product_id:
                    raw["stock"] = quantity
                    return True
        return False

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == product_id and raw["stock"] >= quantity:
                    raw["stock"] -= quantity
                    return True
        return False

    def restock(self, product_id: str, quantity: int) -> None:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == product_id:
                    raw["stock"] += quantity
                    return
        logger.warning("Cannot restock missing product %s", product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        discount = product.discount
        return {
            "id": product.id,
            "title": product.title,
            "price": str(product.base_price.amount),
            "currency": product.base_price.currency,
            "stock": product.stock,
            "category": product.category,
            "is_active": product.is_active,
            "discount": None if discount is None else {
                "type": discount.kind.value if discount.kind else None,
                "value": str(discount.value),
                "max_discount": (
                    str(discount.max_discount.amount) if discount.max_discount else None
                ),
                "start_date": dump_datetime(discount.active_from),
                "end_date": dump_datetime(discount.active_until),
            },
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            title=raw["title"],
            base_price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw.get("stock", 0),
            discount=JsonProductRepository._discount_to_domain(raw.get("discount")),
            category=raw.get("category", "other"),
            is_active=raw.get("is_active", True),
        )

    @staticmethod
    def _discount_to_domain(raw: dict | None) -> ProductDiscount | None:
        """Rebuild a stored discount without rejecting odd legacy data.

        Unknown types and unparsable numbers become an unusable
        descriptor, which the price resolver ignores.
        """
        if not raw:
            return None
        try:
            kind = DiscountKind(raw.get("type"))
        except ValueError:
            kind = None
        try:
            value = Decimal(str(raw.get("value") or "0"))
            cap = raw.get("max_discount")
            max_discount = Money(Decimal(str(cap))) if cap else None
        except (InvalidOperation, ValueError, ValidationError):
            logger.debug("Unparsable discount %r", raw)
            return ProductDiscount(kind=None, value=Decimal("0"))
        return ProductDiscount(
            kind=kind,
            value=value,
            max_discount=max_discount,
            active_from=load_datetime(raw.get("start_date")),
            active_until=load_datetime(raw.get("end_date")),
        )
