"""Domain -> DTO mapping shared by several handlers."""

from __future__ import annotations

from datetime import datetime

from storefront.application.dto import (
    CartLineDTO,
    CouponDTO,
    OrderDTO,
    OrderLineItemDTO,
    ProductDTO,
)
from storefront.domain.model.cart import CartLine
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.settings import StoreSettings


def product_to_dto(
    product: Product, now: datetime, settings: StoreSettings | None = None
) -> ProductDTO:
    active = product.has_active_discount(now)
    final_price = product.final_price(now)
    display_price = None
    if settings is not None and settings.currency_code != final_price.currency:
        display_price = settings.format(final_price)
    return ProductDTO(
        id=product.id,
        title=product.title,
        category=product.category,
        base_price=str(product.base_price),
        final_price=str(final_price),
        stock=product.stock,
        is_active=product.is_active,
        discount_label=product.discount.describe() if active and product.discount else None,
        discount_percentage=product.discount_percentage(now),
        display_price=display_price,
    )


def coupon_to_dto(coupon: Coupon) -> CouponDTO:
    limit = str(coupon.usage_limit) if coupon.usage_limit is not None else "∞"
    return CouponDTO(
        code=coupon.code,
        kind=coupon.kind.value,
        value=f"{coupon.value.normalize():f}",
        description=coupon.describe(),
        min_amount=str(coupon.min_amount) if coupon.min_amount is not None else None,
        max_discount=str(coupon.max_discount) if coupon.max_discount is not None else None,
        expiry_date=coupon.expiry_date.strftime("%Y-%m-%d") if coupon.expiry_date else None,
        usage=f"{coupon.used_count}/{limit}",
        is_active=coupon.is_active,
    )


def order_to_dto(order: Order) -> OrderDTO:
    address = order.customer_info.address
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        customer_name=order.customer_info.name,
        customer_email=order.customer_info.email,
        shipping_address=", ".join(
            part for part in (
                address.street, address.city, address.state,
                address.zip_code, address.country,
            ) if part
        ),
        status=order.status.value,
        payment_status=order.payment_status.value,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                title=item.title,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        item_count=order.item_count,
        coupon_code=order.coupon.code if order.coupon else None,
        subtotal=str(order.totals.subtotal),
        product_discount_savings=str(order.totals.product_discount_savings),
        coupon_discount=str(order.totals.coupon_discount),
        total=str(order.totals.final_total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def cart_line_to_dto(line: CartLine) -> CartLineDTO:
    return CartLineDTO(
        product_id=line.product_id,
        title=line.title,
        quantity=line.quantity.value,
        unit_price=str(line.unit_price),
        original_price=str(line.original_price),
        line_total=str(line.line_total),
        discounted=line.unit_price < line.original_price,
    )
