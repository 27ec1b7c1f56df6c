"""CLI commands for the Wishlist aggregate."""

from __future__ import annotations

import click

from storefront.application.add_to_wishlist import AddToWishlistHandler
from storefront.application.list_wishlist import ListWishlistHandler
from storefront.application.remove_from_wishlist import RemoveFromWishlistHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    product_repository,
    settings_repository,
    wishlist_repository,
)
from storefront.infrastructure.cli.options import customer_option, session_for


@click.command("show")
@customer_option
def wishlist_show(customer: str) -> None:
    """Show saved products, newest first."""
    handler = ListWishlistHandler(
        wishlist_repo=wishlist_repository(),
        product_repo=product_repository(),
        settings_repo=settings_repository(),
    )
    products = handler.handle(session_for(customer))

    if not products:
        click.echo(f"Wishlist of {customer} is empty.")
        return

    click.echo(f"{'ID':<6} {'Title':<24} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 50)
    for p in products:
        price = p.display_price or p.final_price
        click.echo(f"{p.id:<6} {p.title:<24} {price:>10} {p.stock:>7}")


@click.command("add")
@customer_option
@click.option("--product", "product_id", required=True, help="Product ID.")
def wishlist_add(customer: str, product_id: str) -> None:
    """Save a product to the wishlist."""
    handler = AddToWishlistHandler(
        wishlist_repo=wishlist_repository(), product_repo=product_repository()
    )

    try:
        dto = handler.handle(session_for(customer), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.title} added to wishlist.")


@click.command("remove")
@customer_option
@click.option("--product", "product_id", required=True, help="Product ID.")
def wishlist_remove(customer: str, product_id: str) -> None:
    """Remove a product from the wishlist."""
    handler = RemoveFromWishlistHandler(wishlist_repo=wishlist_repository())

    try:
        handler.handle(session_for(customer), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} removed from wishlist.")
