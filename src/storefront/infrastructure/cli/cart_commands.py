"""CLI commands for the Cart aggregate.

Every command acts on behalf of one customer, named with ``--customer``
(or ``STOREFRONT_CUSTOMER``); that is turned into an explicit session.
"""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.apply_coupon import ApplyCouponHandler
from storefront.application.dto import CartSummaryDTO
from storefront.application.get_cart_summary import GetCartSummaryHandler
from storefront.application.refresh_cart import RefreshCartHandler
from storefront.application.remove_coupon import RemoveCouponHandler
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.update_cart_quantity import UpdateCartQuantityHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    coupon_repository,
    product_repository,
    settings_repository,
)
from storefront.infrastructure.cli.options import customer_option, session_for


def display_cart(dto: CartSummaryDTO) -> None:
    """Shared formatting for a cart summary."""
    if not dto.lines:
        click.echo(f"Cart of {dto.customer_id} is empty.")
        return

    click.echo(f"Cart of {dto.customer_id}")
    click.echo()
    click.echo(f"  {'ID':<5} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*53}")
    for line in dto.lines:
        price = line.unit_price + ("*" if line.discounted else " ")
        click.echo(
            f"  {line.product_id:<5} {line.title:<20} {line.quantity:>5} {price:>11} {line.line_total:>9}"
        )
    click.echo(f"  {'-'*53}")
    click.echo(f"  {'Subtotal':<33} {dto.subtotal:>20}")
    if dto.product_discount_savings != "$0.00":
        click.echo(f"  {'  (product savings)':<33} {dto.product_discount_savings:>20}")
    if dto.coupon_code:
        click.echo(f"  {'Coupon ' + dto.coupon_code:<33} {'-' + dto.coupon_discount:>20}")
        if dto.coupon_error:
            click.echo(f"  ! {dto.coupon_error}")
    click.echo(f"  {'Total':<33} {dto.final_total:>20}")
    if dto.display_total:
        click.echo(f"  {'':<33} {'≈ ' + dto.display_total:>20}")


def _show(customer: str) -> None:
    handler = GetCartSummaryHandler(
        cart_repo=cart_repository(),
        coupon_repo=coupon_repository(),
        settings_repo=settings_repository(),
    )
    display_cart(handler.handle(session_for(customer)))


@click.command("show")
@customer_option
def cart_show(customer: str) -> None:
    """Show the cart with current totals."""
    _show(customer)


@click.command("add")
@customer_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", default=1, type=int, show_default=True)
def cart_add(customer: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart."""
    handler = AddToCartHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        line = handler.handle(session_for(customer), product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{line.title} x{line.quantity} in cart at {line.unit_price} each.")


@click.command("update")
@customer_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_update(customer: str, product_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartQuantityHandler(
        cart_repo=cart_repository(), product_repo=product_repository()
    )

    try:
        line = handler.handle(session_for(customer), product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if line is None:
        click.echo(f"Product {product_id} removed from cart.")
    else:
        click.echo(f"{line.title} quantity set to {line.quantity}.")


@click.command("remove")
@customer_option
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(customer: str, product_id: str) -> None:
    """Remove a product from the cart."""
    handler = RemoveFromCartHandler(cart_repo=cart_repository())

    try:
        handler.handle(session_for(customer), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} removed from cart.")


@click.command("refresh")
@customer_option
def cart_refresh(customer: str) -> None:
    """Re-price the cart from the current catalog."""
    handler = RefreshCartHandler(cart_repo=cart_repository(), product_repo=product_repository())
    handler.handle(session_for(customer))
    _show(customer)


@click.command("apply-coupon")
@customer_option
@click.argument("code")
def cart_apply_coupon(customer: str, code: str) -> None:
    """Apply a coupon code to the cart."""
    handler = ApplyCouponHandler(cart_repo=cart_repository(), coupon_repo=coupon_repository())

    try:
        applied = handler.handle(session_for(customer), code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Coupon {applied.code} applied! You save {applied.discount}.")


@click.command("remove-coupon")
@customer_option
def cart_remove_coupon(customer: str) -> None:
    """Remove the applied coupon."""
    RemoveCouponHandler(cart_repo=cart_repository()).handle(session_for(customer))
    click.echo("Coupon removed.")
