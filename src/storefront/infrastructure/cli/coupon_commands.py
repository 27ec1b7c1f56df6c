"""CLI commands for the Coupon aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from storefront.application.create_coupon import CreateCouponHandler
from storefront.application.dto import CouponDTO, CouponSpec
from storefront.application.list_coupons import ListCouponsHandler
from storefront.application.toggle_coupon import DeleteCouponHandler, ToggleCouponHandler
from storefront.application.update_coupon import UpdateCouponHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import coupon_repository
from storefront.infrastructure.cli.options import as_utc


def coupon_options(func):
    """Options shared by ``create`` and ``update``."""
    options = [
        click.option("--code", required=True, help="Coupon code (case-insensitive)."),
        click.option("--type", "kind", required=True, type=click.Choice(["percentage", "fixed"])),
        click.option("--value", required=True, help="Percent or fixed amount off."),
        click.option("--min-amount", default=None, help="Minimum subtotal required."),
        click.option("--max-discount", default=None, help="Cap for percentage coupons."),
        click.option("--expires", type=click.DateTime(), default=None, help="Expiry (UTC)."),
        click.option("--usage-limit", type=int, default=None, help="Maximum number of uses."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _spec(
    code: str,
    kind: str,
    value: str,
    min_amount: str | None,
    max_discount: str | None,
    expires: datetime | None,
    usage_limit: int | None,
) -> CouponSpec:
    return CouponSpec(
        code=code,
        kind=kind,
        value=value,
        min_amount=min_amount,
        max_discount=max_discount,
        expiry_date=as_utc(expires),
        usage_limit=usage_limit,
    )


def _echo_coupon(dto: CouponDTO) -> None:
    state = "active" if dto.is_active else "inactive"
    click.echo(f"Coupon {dto.code}: {dto.description} ({state}, used {dto.usage})")


@click.command("create")
@coupon_options
def coupon_create(**fields) -> None:
    """Create a new coupon."""
    handler = CreateCouponHandler(coupon_repo=coupon_repository())

    try:
        dto = handler.handle(_spec(**fields))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_coupon(dto)


@click.command("update")
@click.argument("current_code")
@coupon_options
def coupon_update(current_code: str, **fields) -> None:
    """Update the coupon stored under CURRENT_CODE."""
    handler = UpdateCouponHandler(coupon_repo=coupon_repository())

    try:
        dto = handler.handle(current_code, _spec(**fields))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_coupon(dto)


@click.command("toggle")
@click.argument("code")
def coupon_toggle(code: str) -> None:
    """Activate or deactivate a coupon."""
    handler = ToggleCouponHandler(coupon_repo=coupon_repository())

    try:
        dto = handler.handle(code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_coupon(dto)


@click.command("delete")
@click.argument("code")
def coupon_delete(code: str) -> None:
    """Delete a coupon."""
    handler = DeleteCouponHandler(coupon_repo=coupon_repository())

    try:
        handler.handle(code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Coupon {code.upper()} deleted.")


@click.command("list")
def coupon_list() -> None:
    """List every coupon."""
    coupons = ListCouponsHandler(coupon_repo=coupon_repository()).handle()

    if not coupons:
        click.echo("No coupons found.")
        return

    click.echo(f"{'Code':<14} {'Discount':<22} {'Min':>9} {'Expires':>11} {'Used':>8}  State")
    click.echo("-" * 76)
    for c in coupons:
        click.echo(
            f"{c.code:<14} {c.description:<22} {c.min_amount or '-':>9} "
            f"{c.expiry_date or '-':>11} {c.usage:>8}  {'active' if c.is_active else 'inactive'}"
        )
