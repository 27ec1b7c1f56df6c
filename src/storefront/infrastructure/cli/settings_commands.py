"""CLI commands for store settings."""

from __future__ import annotations

import click

from storefront.application.update_settings import SetCurrencyHandler, ShowSettingsHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import settings_repository


@click.command("show")
def settings_show() -> None:
    """Show the store settings and exchange rates."""
    settings = ShowSettingsHandler(settings_repo=settings_repository()).handle()

    click.echo(f"Store:    {settings.store_name}")
    click.echo(f"Currency: {settings.currency_code} ({settings.currency_symbol.strip()})")
    click.echo()
    click.echo(f"  {'Code':<6} {'Rate':>10}")
    for code, rate in sorted(settings.exchange_rates.items()):
        marker = "*" if code == settings.currency_code else " "
        click.echo(f" {marker}{code:<6} {rate:>10}")


@click.command("set-currency")
@click.argument("code")
@click.option("--rate", default=None, help="Override the USD exchange rate for CODE.")
def settings_set_currency(code: str, rate: str | None) -> None:
    """Select the currency used to display totals."""
    handler = SetCurrencyHandler(settings_repo=settings_repository())

    try:
        settings = handler.handle(code, rate)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    sample = settings.format(Money.of("100"))
    click.echo(f"Display currency set to {settings.currency_code} ($100.00 = {sample})")
