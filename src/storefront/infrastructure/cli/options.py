"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from storefront.application.session import CustomerSession
from storefront.domain.exceptions import DomainException


def as_utc(value: datetime | None) -> datetime | None:
    """Treat a naive ``click.DateTime`` value as UTC."""
    return value.replace(tzinfo=timezone.utc) if value is not None else None


customer_option = click.option(
    "--customer",
    required=True,
    envvar="STOREFRONT_CUSTOMER",
    help="Customer ID owning the cart.",
)


def session_for(customer: str) -> CustomerSession:
    try:
        return CustomerSession(customer_id=customer)
    except DomainException as exc:
        raise click.BadParameter(str(exc), param_hint="--customer")
