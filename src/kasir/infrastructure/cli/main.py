from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import click

from kasir.config import Settings
from kasir.infrastructure.cli.cart_commands import cart_price, checkout_preview
from kasir.infrastructure.cli.context import CliContext
from kasir.infrastructure.cli.params import UtcDateTime
from kasir.infrastructure.cli.report_commands import (
    report_dashboard,
    report_discounts,
    report_movements,
    report_product,
    report_returns,
    report_sales,
    report_stock,
)
from kasir.infrastructure.cli.stock_commands import stock_low, stock_opname
from kasir.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON snapshots (env: KASIR_DATA_DIR).",
)
@click.option("--now", type=UtcDateTime(), default=None, help="Evaluate as of this UTC time.")
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug).")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, now: datetime | None, verbose: int) -> None:
    """Kasir: point-of-sale pricing, stock and reports"""
    settings = Settings.from_env()
    if data_dir is not None:
        settings = replace(settings, data_dir=data_dir)

    level = settings.log_level_number
    if verbose:
        level = logging.DEBUG if verbose > 1 else min(level, logging.INFO)
    configure_logging(level, settings.log_file)

    ctx.obj = CliContext(settings=settings, now=now)


@cli.group()
def cart() -> None:
    """Price carts."""


@cli.group()
def checkout() -> None:
    """Check a sale before it is committed."""


@cli.group()
def report() -> None:
    """Sales, stock, discount and return reports."""


@cli.group()
def stock() -> None:
    """Stock queries and shelf counts."""


# Register subcommands
cart.add_command(cart_price)
checkout.add_command(checkout_preview)
report.add_command(report_dashboard)
report.add_command(report_discounts)
report.add_command(report_movements)
report.add_command(report_product)
report.add_command(report_returns)
report.add_command(report_sales)
report.add_command(report_stock)
stock.add_command(stock_low)
stock.add_command(stock_opname)
