"""JSON-file-backed implementation of CartRepository.

Carts are stored as one object keyed by customer ID.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_store import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty={})

    def get_for_customer(self, customer_id: str) -> Cart:
        raw = self._file.load().get(customer_id)
        if raw is None:
            return Cart(customer_id=customer_id)
        return self._to_domain(customer_id, raw)

    def save(self, cart: Cart) -> None:
        with self._file.transaction() as carts:
            if cart.is_empty and cart.coupon_code is None:
                carts.pop(cart.customer_id, None)
            else:
                carts[cart.customer_id] = self._to_raw(cart)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "coupon_code": cart.coupon_code,
            "lines": [
                {
                    "product_id": line.product_id,
                    "title": line.title,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "original_price": str(line.original_price.amount),
                }
                for line in cart.lines
            ],
        }

    @staticmethod
    def _to_domain(customer_id: str, raw: dict) -> Cart:
        return Cart(
            customer_id=customer_id,
            coupon_code=raw.get("coupon_code"),
            lines=[
                CartLine(
                    product_id=line["product_id"],
                    title=line["title"],
                    quantity=Quantity(line["quantity"]),
                    unit_price=Money(Decimal(line["unit_price"])),
                    original_price=Money(Decimal(line["original_price"])),
                )
                for line in raw.get("lines", [])
            ],
        )
