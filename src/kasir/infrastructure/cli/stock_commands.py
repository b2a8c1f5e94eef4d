"""CLI commands for stock queries."""

from __future__ import annotations

import click

from kasir.application.stock_opname import StockOpnameHandler
from kasir.application.stock_report import LowStockHandler
from kasir.domain.exceptions import DomainException
from kasir.infrastructure.cli.context import CliContext
from kasir.infrastructure.cli.params import parse_counts


@click.command("low")
@click.option("--outlet", "outlet_id", default=None, help="Use this outlet's stock.")
@click.pass_obj
def stock_low(obj: CliContext, outlet_id: str | None) -> None:
    """List products at or below minimum stock, with reorder suggestions."""
    handler = LowStockHandler(product_repo=obj.products())

    try:
        lines = handler.handle(outlet_id=outlet_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No products below minimum stock.")
        return

    click.echo(f"{'Product':<24} {'Stock':>7} {'Min':>7} {'Reorder':>9}")
    click.echo("-" * 50)
    for line in lines:
        click.echo(
            f"{line.product_name:<24} {line.current_stock:>7} "
            f"{line.min_stock:>7} {line.suggested_order_quantity:>9}"
        )


@click.command("opname")
@click.option("--counts", required=True, help="Shelf counts as 'Product:Qty,Product:Qty'.")
@click.option("--outlet", "outlet_id", default=None, help="Compare with this outlet's stock.")
@click.pass_obj
def stock_opname(obj: CliContext, counts: str, outlet_id: str | None) -> None:
    """Compare shelf counts with recorded stock."""
    specs = parse_counts(counts)
    handler = StockOpnameHandler(product_repo=obj.products())

    try:
        dto = handler.handle(specs, outlet_id=outlet_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Product':<24} {'System':>7} {'Actual':>7} {'Diff':>6}")
    click.echo("-" * 47)
    for line in dto.lines:
        click.echo(
            f"{line.product_name:<24} {line.system_stock:>7} "
            f"{line.actual_stock:>7} {line.discrepancy:>+6}"
        )
    click.echo("-" * 47)
    click.echo(
        f"Counted: {dto.items_counted}   Discrepancies: {dto.items_with_discrepancy}   "
        f"Surplus: {dto.total_surplus:+}   Shortage: {dto.total_shortage:+}"
    )
