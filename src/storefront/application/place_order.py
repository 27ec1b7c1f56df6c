"""Application service: Place Order use case.

Turns the customer's cart into an order.  Validation happens before
anything is mutated; the commit then takes stock and coupon usage
through conditional repository updates so two checkouts racing for the
last unit (or the last coupon use) cannot both succeed.
"""

from __future__ import annotations

import logging

from storefront.application.add_to_cart import require_active_product
from storefront.application.dto import CustomerInfoSpec, OrderDTO
from storefront.application.mappers import order_to_dto
from storefront.application.session import Clock, CustomerSession, utc_now
from storefront.domain.exceptions import CouponExhaustedError, EmptyCartError
from storefront.domain.model.order import (
    Address,
    AppliedCoupon,
    CustomerInfo,
    Order,
    OrderLineItem,
    OrderTotals,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.coupon_validator import CouponValidator
from storefront.domain.service.pricing import aggregate_cart
from storefront.domain.service.stock_allocation_service import StockAllocationService

logger = logging.getLogger(__name__)


def to_customer_info(spec: CustomerInfoSpec) -> CustomerInfo:
    return CustomerInfo(
        name=spec.name,
        email=spec.email,
        phone=spec.phone,
        address=Address(
            street=spec.address.street,
            city=spec.address.city,
            state=spec.address.state,
            zip_code=spec.address.zip_code,
            country=spec.address.country,
        ),
    )


class PlaceOrderHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        coupon_repo: CouponRepository,
        order_repo: OrderRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._coupon_repo = coupon_repo
        self._order_repo = order_repo
        self._clock = clock

    def handle(self, session: CustomerSession, customer_spec: CustomerInfoSpec) -> OrderDTO:
        """Place an order for everything in the session's cart.

        Steps:
        1. Reject an empty cart and incomplete customer details.
        2. Check every product is still sold and in stock.
        3. Price the cart snapshot and revalidate the applied coupon.
        4. Build the order from the snapshot.
        5. Commit stock, then coupon usage (rolling stock back on failure).
        6. Persist the order, giving stock and coupon usage back if that
           fails, and empty the cart.
        """
        cart = self._cart_repo.get_for_customer(session.customer_id)
        if cart.is_empty:
            raise EmptyCartError()

        customer_info = to_customer_info(customer_spec)
        customer_info.require_complete()

        for line in cart.lines:
            require_active_product(self._product_repo, line.product_id)
        stock = StockAllocationService(self._product_repo)
        stock.check_available(cart.lines)

        cart_totals = aggregate_cart(cart.lines)
        coupon: AppliedCoupon | None = None
        if cart.coupon_code is not None:
            coupon = CouponValidator(self._coupon_repo).validate(
                cart.coupon_code, cart_totals.subtotal, self._clock()
            )

        order = Order.place(
            customer_id=session.customer_id,
            items=[
                OrderLineItem(
                    product_id=line.product_id,
                    title=line.title,
                    quantity=line.quantity,
                    unit_price=line.unit_price,  # price the customer saw
                )
                for line in cart.lines
            ],
            customer_info=customer_info,
            totals=OrderTotals.compute(
                cart_totals, coupon.discount if coupon is not None else Money.zero()
            ),
            coupon=coupon,
            created_at=self._clock(),
        )

        # --- Commit -----------------------------------------------------------
        stock.allocate(cart.lines)
        if coupon is not None and not self._coupon_repo.increment_usage(coupon.code):
            stock.release(cart.lines)
            logger.warning(
                "Coupon %s ran out during checkout of %s; stock released",
                coupon.code, session.customer_id,
            )
            raise CouponExhaustedError(coupon.code)

        try:
            self._order_repo.save(order)
        except Exception:
            stock.release(cart.lines)
            if coupon is not None:
                self._coupon_repo.decrement_usage(coupon.code)
            logger.exception(
                "Could not record the order of %s; stock and coupon usage released",
                session.customer_id,
            )
            raise

        cart.clear()
        self._cart_repo.save(cart)

        logger.info(
            "Order #%s placed by %s: subtotal %s, coupon %s, total %s",
            order.id, session.customer_id, order.totals.subtotal,
            order.totals.coupon_discount, order.totals.final_total,
        )
        return order_to_dto(order)
