"""JSON-file-backed implementation of OrderRepository.

The record layout follows the storefront's order document:
``products``, ``customer_info``, ``coupon``, ``subtotal``, ``discount``,
``total_price``, ``status`` and ``created_at``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import (
    Address,
    AppliedCoupon,
    CustomerInfo,
    Order,
    OrderLineItem,
    OrderStatus,
    OrderTotals,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_store import JsonFile


def _money(raw: str) -> Money:
    return Money(Decimal(raw))


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        with self._file.transaction() as orders:
            if order.id is None:
                order.id = self.next_id()

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        info = order.customer_info
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "products": [
                {
                    "product_id": item.product_id,
                    "title": item.title,
                    "price": str(item.unit_price.amount),
                    "quantity": item.quantity.value,
                }
                for item in order.items
            ],
            "customer_info": {
                "name": info.name,
                "email": info.email,
                "phone": info.phone,
                "address": {
                    "street": info.address.street,
                    "city": info.address.city,
                    "state": info.address.state,
                    "zip_code": info.address.zip_code,
                    "country": info.address.country,
                },
            },
            "coupon": None if order.coupon is None else {
                "code": order.coupon.code,
                "discount": str(order.coupon.discount.amount),
            },
            "subtotal": str(order.totals.subtotal.amount),
            "product_discount_savings": str(order.totals.product_discount_savings.amount),
            "discount": str(order.totals.coupon_discount.amount),
            "total_price": str(order.totals.final_total.amount),
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        info = raw["customer_info"]
        address = info.get("address", {})
        coupon = raw.get("coupon")
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            items=[
                OrderLineItem(
                    product_id=p["product_id"],
                    title=p["title"],
                    quantity=Quantity(p["quantity"]),
                    unit_price=_money(p["price"]),
                )
                for p in raw["products"]
            ],
            customer_info=CustomerInfo(
                name=info.get("name", ""),
                email=info.get("email", ""),
                phone=info.get("phone", ""),
                address=Address(
                    street=address.get("street", ""),
                    city=address.get("city", ""),
                    state=address.get("state", ""),
                    zip_code=address.get("zip_code", ""),
                    country=address.get("country", "USA"),
                ),
            ),
            totals=OrderTotals(
                subtotal=_money(raw["subtotal"]),
                product_discount_savings=_money(raw.get("product_discount_savings", "0")),
                coupon_discount=_money(raw["discount"]),
                final_total=_money(raw["total_price"]),
            ),
            coupon=None if coupon is None else AppliedCoupon(
                code=coupon["code"], discount=_money(coupon["discount"])
            ),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw.get("payment_status", "completed")),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
