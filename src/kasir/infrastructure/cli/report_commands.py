"""CLI commands for reports."""

from __future__ import annotations

from datetime import datetime

import click

from kasir.application.dashboard import DashboardHandler
from kasir.application.discount_report import DiscountReportHandler
from kasir.application.dto import TopProductDTO
from kasir.application.return_report import ReturnReportHandler
from kasir.application.sales_report import ProductSalesHistoryHandler, SalesReportHandler
from kasir.application.stock_movements import StockMovementReportHandler
from kasir.application.stock_report import StockReportHandler
from kasir.domain.exceptions import DomainException
from kasir.domain.model.report import StockFilters
from kasir.domain.model.stock import MovementFilters
from kasir.domain.model.value_objects import MovementType, PeriodGrouping, StockStatus
from kasir.infrastructure.cli.context import CliContext
from kasir.infrastructure.cli.params import UtcDateTime


def _display_ranking(title: str, products: list[TopProductDTO]) -> None:
    click.echo(title)
    if not products:
        click.echo("  (no sales)")
        return
    for p in products:
        click.echo(f"  {p.rank:>2}. {p.product_name:<24} {p.quantity:>6} {p.revenue:>16}")


@click.command("sales")
@click.option("--start", required=True, type=UtcDateTime(), help="Range start (UTC).")
@click.option("--end", required=True, type=UtcDateTime(end_of_day=True), help="Range end (UTC).")
@click.option(
    "--group-by",
    type=click.Choice([g.value for g in PeriodGrouping]),
    default=PeriodGrouping.DAY.value,
    show_default=True,
)
@click.option("--outlet", "outlet_id", default=None, help="Restrict to one outlet.")
@click.pass_obj
def report_sales(
    obj: CliContext, start: datetime, end: datetime, group_by: str, outlet_id: str | None
) -> None:
    """Sales totals, per-period series and top products."""
    handler = SalesReportHandler(transaction_repo=obj.transactions())

    try:
        dto = handler.handle(start, end, PeriodGrouping(group_by), outlet_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Total sales:    {dto.total_sales}")
    click.echo(f"Transactions:   {dto.total_transactions}")
    click.echo(f"Average:        {dto.average_transaction}")
    click.echo()
    click.echo(f"  {'Period':>6} {'Count':>6} {'Amount':>16}")
    for line in dto.periods:
        click.echo(f"  {line.period:>6} {line.count:>6} {line.amount:>16}")
    click.echo()
    _display_ranking("Top products by quantity", dto.top_by_quantity)
    _display_ranking("Top products by revenue", dto.top_by_revenue)


@click.command("stock")
@click.option("--category", default=None, help="Only this category id.")
@click.option("--status", type=click.Choice([s.value for s in StockStatus]), default=None)
@click.option("--outlet", "outlet_id", default=None, help="Use this outlet's stock.")
@click.pass_obj
def report_stock(
    obj: CliContext, category: str | None, status: str | None, outlet_id: str | None
) -> None:
    """Stock levels, status and inventory value."""
    handler = StockReportHandler(product_repo=obj.products())
    filters = StockFilters(
        category=category,
        stock_status=StockStatus(status) if status else None,
    )

    try:
        dto = handler.handle(filters, outlet_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Product':<24} {'Stock':>7} {'Min':>6} {'Status':<12} {'Value':>16}")
    click.echo("-" * 69)
    for line in dto.lines:
        click.echo(
            f"{line.product_name:<24} {line.current_stock:>7} {line.min_stock:>6} "
            f"{line.status:<12} {line.stock_value:>16}"
        )
    click.echo("-" * 69)
    click.echo(f"Inventory value: {dto.total_inventory_value}   Low stock: {dto.low_stock_count}")


@click.command("movements")
@click.option("--start", type=UtcDateTime(), default=None)
@click.option("--end", type=UtcDateTime(end_of_day=True), default=None)
@click.option("--product", "product_id", default=None, help="Product id.")
@click.option("--type", "movement_type", type=click.Choice([m.value for m in MovementType]), default=None)
@click.option("--outlet", "outlet_id", default=None)
@click.pass_obj
def report_movements(
    obj: CliContext,
    start: datetime | None,
    end: datetime | None,
    product_id: str | None,
    movement_type: str | None,
    outlet_id: str | None,
) -> None:
    """Stock movements with running balance, latest first."""
    handler = StockMovementReportHandler(movement_repo=obj.movements())
    filters = MovementFilters(
        start_date=start,
        end_date=end,
        product_id=product_id,
        movement_type=MovementType(movement_type) if movement_type else None,
        outlet_id=outlet_id,
    )

    try:
        lines = handler.handle(filters)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No stock movements found.")
        return

    click.echo(f"{'Date':<21} {'Product':<20} {'Type':<11} {'Qty':>6} {'Balance':>8}  Ref")
    for line in lines:
        click.echo(
            f"{line.date:<21} {line.product_name:<20} {line.movement_type:<11} "
            f"{line.quantity:>6} {line.running_balance:>8}  {line.reference or '-'}"
        )


@click.command("dashboard")
@click.option("--outlet", "outlet_id", default=None, help="Restrict to one outlet.")
@click.pass_obj
def report_dashboard(obj: CliContext, outlet_id: str | None) -> None:
    """Today / week sales KPIs, low stock and recent transactions."""
    handler = DashboardHandler(
        transaction_repo=obj.transactions(),
        product_repo=obj.products(),
        clock=obj.clock,
    )

    try:
        dto = handler.handle(outlet_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Today:      {dto.today_sales} ({dto.today_transactions} transactions)")
    click.echo(f"Yesterday:  {dto.yesterday_sales}")
    click.echo(f"This week:  {dto.week_sales}")
    click.echo(f"Last week:  {dto.last_week_sales}")
    click.echo(f"Low stock:  {dto.low_stock_count} product(s)")
    click.echo()
    click.echo("Recent transactions")
    for tx in dto.recent_transactions:
        click.echo(f"  {tx.transaction_number:<16} {tx.transaction_date:<21} {tx.total_amount:>16}")


@click.command("discounts")
@click.option("--start", required=True, type=UtcDateTime(), help="Range start (UTC).")
@click.option("--end", required=True, type=UtcDateTime(end_of_day=True), help="Range end (UTC).")
@click.pass_obj
def report_discounts(obj: CliContext, start: datetime, end: datetime) -> None:
    """Discount totals and per-promo performance."""
    handler = DiscountReportHandler(
        transaction_repo=obj.transactions(),
        discount_repo=obj.discounts(),
        clock=obj.clock,
    )

    try:
        dto = handler.handle(start, end)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sales with discount:   {dto.total_sales_with_discount}")
    click.echo(f"Discount given:        {dto.total_discount_amount}")
    click.echo(f"Transactions:          {dto.transaction_count}")
    click.echo(f"Average per tx:        {dto.average_discount_per_transaction}")
    if dto.promos:
        click.echo()
        click.echo(f"  {'Promo':<24} {'Status':<9} {'Tx':>4} {'Sales':>16} {'Discount':>14}")
        for p in dto.promos:
            click.echo(
                f"  {p.promo_name:<24} {p.status:<9} {p.transaction_count:>4} "
                f"{p.sales:>16} {p.discount_given:>14}"
            )


@click.command("product")
@click.argument("product_name")
@click.option("--start", required=True, type=UtcDateTime(), help="Range start (UTC).")
@click.option("--end", required=True, type=UtcDateTime(end_of_day=True), help="Range end (UTC).")
@click.pass_obj
def report_product(obj: CliContext, product_name: str, start: datetime, end: datetime) -> None:
    """Daily sales of one product."""
    handler = ProductSalesHistoryHandler(
        transaction_repo=obj.transactions(),
        product_repo=obj.products(),
    )

    try:
        dto = handler.handle(product_name, start, end)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sales history for {dto.product_name}")
    click.echo(f"  {'Date':<12} {'Qty':>6} {'Tx':>4} {'Revenue':>16}")
    for day in dto.days:
        click.echo(f"  {day.date:<12} {day.quantity:>6} {day.transaction_count:>4} {day.revenue:>16}")
    click.echo(f"  {'Total':<12} {dto.total_quantity:>6} {'':>4} {dto.total_revenue:>16}")


@click.command("returns")
@click.option("--start", required=True, type=UtcDateTime(), help="Range start (UTC).")
@click.option("--end", required=True, type=UtcDateTime(end_of_day=True), help="Range end (UTC).")
@click.pass_obj
def report_returns(obj: CliContext, start: datetime, end: datetime) -> None:
    """Completed returns, refunds, reasons and most-returned products."""
    handler = ReturnReportHandler(return_repo=obj.returns())

    try:
        dto = handler.handle(start, end)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Returns:        {dto.total_returns}")
    click.echo(f"Refunded:       {dto.total_refund_amount}")
    click.echo()
    click.echo("By reason")
    for line in dto.by_reason:
        click.echo(f"  {line.reason:<18} {line.count:>5}")
    click.echo()
    click.echo("Most returned")
    if not dto.top_returned:
        click.echo("  (no returns)")
    for p in dto.top_returned:
        click.echo(f"  {p.rank:>2}. {p.product_name:<24} {p.total_quantity:>6} {p.return_count:>5}")
