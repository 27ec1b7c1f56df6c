"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import AddressSpec, CustomerInfoSpec, OrderDTO
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import (
    cart_repository,
    coupon_repository,
    order_repository,
    product_repository,
)
from storefront.infrastructure.cli.options import customer_option, session_for


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.title:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    if dto.coupon_code:
        click.echo(f"  {'Coupon ' + dto.coupon_code:<27} {'-' + dto.coupon_discount:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("place")
@customer_option
@click.option("--name", required=True, help="Customer full name.")
@click.option("--email", required=True)
@click.option("--phone", required=True)
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", default="")
@click.option("--zip", "zip_code", default="")
@click.option("--country", default="")
def order_place(
    customer: str,
    name: str,
    email: str,
    phone: str,
    street: str,
    city: str,
    state: str,
    zip_code: str,
    country: str,
) -> None:
    """Check out the customer's cart."""
    spec = CustomerInfoSpec(
        name=name,
        email=email,
        phone=phone,
        address=AddressSpec(
            street=street, city=city, state=state, zip_code=zip_code, country=country
        ),
    )
    handler = PlaceOrderHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        coupon_repo=coupon_repository(),
        order_repo=order_repository(),
    )

    try:
        dto = handler.handle(session_for(customer), spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order placed successfully! Thank you for your purchase.")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", default=None, help="Only this customer's orders.")
def order_list(customer: str | None) -> None:
    """List orders, newest first."""
    orders = ListOrdersHandler(order_repo=order_repository()).handle(customer)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<16} {'Status':<11} {'Items':>6} {'Total':>10}  Created")
    click.echo("-" * 72)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.customer_id:<16} {o.status:<11} {o.item_count:>6} {o.total:>10}  {o.created_at}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.argument("status", type=click.Choice([s.value for s in OrderStatus]))
def order_status(order_id: int, status: str) -> None:
    """Move an order to STATUS."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(), product_repo=product_repository()
    )

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} status updated to {dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel an order (returns its items to stock)."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(), product_repo=product_repository()
    )

    try:
        handler.handle(order_id, OrderStatus.CANCELLED.value)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")
