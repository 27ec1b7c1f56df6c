"""CLI commands for sales reporting."""

from __future__ import annotations

import click

from storefront.application.sales_summary import SalesSummaryHandler
from storefront.infrastructure.bootstrap import order_repository


@click.command("sales")
def report_sales() -> None:
    """Summarize sales, coupon spend and best sellers."""
    summary = SalesSummaryHandler(order_repo=order_repository()).handle()

    click.echo(f"Total sales:          {summary.total_sales}")
    click.echo(f"Completed orders:     {summary.completed_orders}")
    click.echo(f"Pending orders:       {summary.pending_orders}")
    click.echo(f"Average order value:  {summary.average_order_value}")
    click.echo(f"Coupon discounts:     {summary.total_coupon_discount}")

    if not summary.top_products:
        return
    click.echo()
    click.echo(f"  {'Top products':<24} {'Qty':>6} {'Revenue':>12}")
    click.echo(f"  {'-'*44}")
    for p in summary.top_products:
        click.echo(f"  {p.title:<24} {p.quantity:>6} {p.revenue:>12}")
