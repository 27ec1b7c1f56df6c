from pathlib import Path

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_apply_coupon,
    cart_refresh,
    cart_remove,
    cart_remove_coupon,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.coupon_commands import (
    coupon_create,
    coupon_delete,
    coupon_list,
    coupon_toggle,
    coupon_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_list,
    order_place,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_discount,
    product_list,
    product_update,
)
from storefront.infrastructure.cli.report_commands import report_sales
from storefront.infrastructure.cli.settings_commands import settings_set_currency, settings_show
from storefront.infrastructure.cli.wishlist_commands import (
    wishlist_add,
    wishlist_remove,
    wishlist_show,
)


class StorefrontGroup(click.Group):
    """Reports any DomainException a command did not handle itself."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except DomainException as exc:
            raise click.ClickException(str(exc)) from exc


@click.group(cls=StorefrontGroup)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=bootstrap.DATA_DIR_ENV,
    default=None,
    help="Directory holding the JSON data files.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar=bootstrap.LOG_LEVEL_ENV,
    default="WARNING",
    show_default=True,
    help="Logging verbosity.",
)
def cli(data_dir: Path | None, log_level: str) -> None:
    """Storefront: catalog, cart, coupons and checkout"""
    bootstrap.configure(data_dir=data_dir, log_level=log_level)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def coupon() -> None:
    """Manage coupons."""


@cli.group()
def cart() -> None:
    """Work with a customer's cart."""


@cli.group()
def wishlist() -> None:
    """Work with a customer's wishlist."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def settings() -> None:
    """Store settings."""


@cli.group()
def report() -> None:
    """Sales reports."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_discount)
product.add_command(product_list)
product.add_command(product_update)
coupon.add_command(coupon_create)
coupon.add_command(coupon_delete)
coupon.add_command(coupon_list)
coupon.add_command(coupon_toggle)
coupon.add_command(coupon_update)
cart.add_command(cart_add)
cart.add_command(cart_apply_coupon)
cart.add_command(cart_refresh)
cart.add_command(cart_remove)
cart.add_command(cart_remove_coupon)
cart.add_command(cart_show)
cart.add_command(cart_update)
wishlist.add_command(wishlist_add)
wishlist.add_command(wishlist_remove)
wishlist.add_command(wishlist_show)
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
settings.add_command(settings_set_currency)
settings.add_command(settings_show)
report.add_command(report_sales)
