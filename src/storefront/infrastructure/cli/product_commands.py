"""CLI commands for the Product aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.dto import DiscountSpec, ProductDTO
from storefront.application.list_products import ListProductsHandler
from storefront.application.set_product_discount import SetProductDiscountHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import CATEGORIES
from storefront.infrastructure.bootstrap import product_repository, settings_repository
from storefront.infrastructure.cli.options import as_utc


def _echo_product(dto: ProductDTO) -> None:
    price = dto.final_price
    if dto.discount_label:
        price = f"{dto.final_price} (was {dto.base_price}, {dto.discount_label})"
    click.echo(f"Product #{dto.id} '{dto.title}' at {price}, {dto.stock} in stock")


@click.command("add")
@click.option("--title", required=True, help="Product title.")
@click.option("--price", required=True, help="Base price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Units in stock.")
@click.option("--category", type=click.Choice(CATEGORIES), default="other", show_default=True)
def product_add(title: str, price: str, stock: int, category: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(title=title, price=price, stock=stock, category=category)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_product(dto)


@click.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include inactive products.")
def product_list(include_inactive: bool) -> None:
    """List products with their current prices."""
    handler = ListProductsHandler(
        product_repo=product_repository(), settings_repo=settings_repository()
    )
    products = handler.handle(include_inactive=include_inactive)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Title':<24} {'Price':>10} {'Final':>10} {'Stock':>7}  Discount")
    click.echo("-" * 72)
    for p in products:
        label = p.discount_label or ""
        if not p.is_active:
            label = "(inactive)"
        if p.display_price:
            label = f"{label} (≈ {p.display_price})".strip()
        click.echo(
            f"{p.id:<6} {p.title:<24} {p.base_price:>10} {p.final_price:>10} {p.stock:>7}  {label}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New base price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--deactivate", is_flag=True, help="Stop selling the product.")
def product_update(product_id: str, price: str | None, stock: int | None, deactivate: bool) -> None:
    """Update a product's price, stock or availability."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id, new_price=price, stock=stock, deactivate=deactivate)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_product(dto)


@click.command("discount")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--type", "kind", type=click.Choice(["percentage", "fixed"]), default=None)
@click.option("--value", default=None, help="Percent or fixed amount off.")
@click.option("--max-discount", default=None, help="Cap for percentage discounts.")
@click.option("--start", type=click.DateTime(), default=None, help="Discount start (UTC).")
@click.option("--end", type=click.DateTime(), default=None, help="Discount end (UTC).")
@click.option("--clear", is_flag=True, help="Remove the product's discount.")
def product_discount(
    product_id: str,
    kind: str | None,
    value: str | None,
    max_discount: str | None,
    start: datetime | None,
    end: datetime | None,
    clear: bool,
) -> None:
    """Set or clear a product discount."""
    if not clear and (kind is None or value is None):
        raise click.ClickException("--type and --value are required unless --clear is given")

    spec = None
    if not clear:
        spec = DiscountSpec(
            kind=kind,  # type: ignore[arg-type]
            value=value,  # type: ignore[arg-type]
            max_discount=max_discount,
            active_from=as_utc(start),
            active_until=as_utc(end),
        )

    handler = SetProductDiscountHandler(product_repo=product_repository())
    try:
        dto = handler.handle(product_id, spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_product(dto)
