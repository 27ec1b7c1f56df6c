"""Application service: Sales Summary use case (query).

Revenue only counts orders that have left the warehouse (shipped or
delivered).  Top products rank by units across every order that was
not cancelled.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository

REVENUE_STATUSES = (OrderStatus.SHIPPED, OrderStatus.DELIVERED)
TOP_PRODUCTS_LIMIT = 5


@dataclass(frozen=True)
class TopProductDTO:
    title: str
    quantity: int
    revenue: str


@dataclass(frozen=True)
class SalesSummaryDTO:
    total_sales: str
    completed_orders: int
    pending_orders: int
    average_order_value: str
    total_coupon_discount: str
    top_products: list[TopProductDTO]


class SalesSummaryHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> SalesSummaryDTO:
        orders = self._order_repo.list_all()

        total_sales = Money.zero()
        coupon_total = Money.zero()
        completed = 0
        pending = 0
        quantities: dict[str, int] = defaultdict(int)
        revenues: dict[str, Money] = defaultdict(Money.zero)
        titles: dict[str, str] = {}

        for order in orders:
            if order.status == OrderStatus.PENDING:
                pending += 1
            if order.status in REVENUE_STATUSES:
                completed += 1
                total_sales = total_sales + order.totals.final_total
                coupon_total = coupon_total + order.totals.coupon_discount
            if order.status == OrderStatus.CANCELLED:
                continue
            for item in order.items:
                quantities[item.product_id] += item.quantity.value
                revenues[item.product_id] = revenues[item.product_id] + item.line_total
                titles[item.product_id] = item.title

        average = (
            Money(total_sales.amount / Decimal(completed)).quantize()
            if completed
            else Money.zero()
        )
        ranked = sorted(quantities, key=lambda pid: quantities[pid], reverse=True)
        return SalesSummaryDTO(
            total_sales=str(total_sales),
            completed_orders=completed,
            pending_orders=pending,
            average_order_value=str(average),
            total_coupon_discount=str(coupon_total),
            top_products=[
                TopProductDTO(
                    title=titles[pid],
                    quantity=quantities[pid],
                    revenue=str(revenues[pid]),
                )
                for pid in ranked[:TOP_PRODUCTS_LIMIT]
            ],
        )
