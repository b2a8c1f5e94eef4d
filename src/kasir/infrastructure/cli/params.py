"""Shared click parameter types and option parsers."""

from __future__ import annotations

from datetime import datetime, time, timezone

import click

from kasir.application.dto import CartItemSpec, StockCountSpec


class UtcDateTime(click.ParamType):
    """ISO date or timestamp, returned as an aware UTC datetime.

    A bare date means the start of that day, or its last millisecond when
    ``end_of_day`` is set, so ``--end 2024-05-31`` covers the whole day.
    """

    name = "datetime"

    def __init__(self, end_of_day: bool = False) -> None:
        self._end_of_day = end_of_day

    def convert(self, value, param, ctx):
        if isinstance(value, datetime):
            return value
        text = str(value).strip()
        try:
            moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            self.fail(f"'{value}' is not an ISO-8601 date or timestamp.", param, ctx)
        if len(text) == 10 and self._end_of_day:
            moment = datetime.combine(moment.date(), time(23, 59, 59, 999000))
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc)


def _parse_pairs(raw: str) -> list[tuple[str, int]]:
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        pairs.append((name.strip(), qty))
    return pairs


def parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'Indomie Goreng:3,Teh Botol:5' into CartItemSpec list."""
    return [CartItemSpec(product_name=name, quantity=qty) for name, qty in _parse_pairs(raw)]


def parse_counts(raw: str) -> list[StockCountSpec]:
    """Parse 'Indomie Goreng:40,Teh Botol:0' into StockCountSpec list."""
    return [
        StockCountSpec(product_name=name, counted_quantity=qty) for name, qty in _parse_pairs(raw)
    ]
