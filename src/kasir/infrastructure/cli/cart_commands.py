"""CLI commands for carts and checkout."""

from __future__ import annotations

import click

from kasir.application.checkout_preview import CheckoutPreviewHandler
from kasir.application.dto import PricedCartDTO
from kasir.application.price_cart import PriceCartHandler
from kasir.domain.exceptions import DomainException
from kasir.domain.model.value_objects import PaymentMethod
from kasir.infrastructure.cli.context import CliContext
from kasir.infrastructure.cli.params import parse_items


def _display_cart(dto: PricedCartDTO) -> None:
    """Shared formatting for a priced cart."""
    click.echo(
        f"  {'Product':<20} {'Qty':>5} {'Price':>12} {'Disc':>10} {'Total':>14}  Applied"
    )
    click.echo(f"  {'-'*75}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>12} "
            f"{item.unit_discount:>10} {item.line_total:>14}  {item.applied or '-'}"
        )
    click.echo(f"  {'-'*75}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>34}")
    click.echo(f"  {'Discount':<27} {dto.total_discount:>34}")
    click.echo(f"  {'Total':<27} {dto.total:>34}")

    for promo in dto.promo_eligibility:
        if promo.eligible:
            click.echo(f"  Promo '{promo.promo_name}': minimum purchase met")
        else:
            click.echo(f"  Promo '{promo.promo_name}': spend {promo.remaining} more to qualify")


@click.command("price")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.pass_obj
def cart_price(obj: CliContext, items: str) -> None:
    """Price a cart with the discounts and promos in force."""
    specs = parse_items(items)
    handler = PriceCartHandler(
        product_repo=obj.products(),
        discount_repo=obj.discounts(),
        clock=obj.clock,
    )

    try:
        dto = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("preview")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Payment method.",
)
@click.option("--cash", "cash_received", type=int, default=None, help="Cash received.")
@click.option("--outlet", "outlet_id", default=None, help="Check stock at this outlet.")
@click.pass_obj
def checkout_preview(
    obj: CliContext, items: str, method: str, cash_received: int | None, outlet_id: str | None
) -> None:
    """Validate a sale: payment, stock and the stock it would leave."""
    specs = parse_items(items)
    handler = CheckoutPreviewHandler(
        product_repo=obj.products(),
        discount_repo=obj.discounts(),
        clock=obj.clock,
    )

    try:
        dto = handler.handle(
            specs,
            method=PaymentMethod(method),
            cash_received=cash_received,
            outlet_id=outlet_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto.cart)
    click.echo()
    for error in dto.errors:
        click.echo(f"  ! {error}")
    for issue in dto.stock_issues:
        click.echo(f"  ! {issue.message}")
    if dto.change is not None:
        click.echo(f"  Change: {dto.change}")
    for name, remaining in dto.stock_after.items():
        click.echo(f"  Stock after sale for {name}: {remaining}")

    if not dto.valid:
        raise click.ClickException("Checkout would be rejected.")
    click.echo("Checkout OK.")
