"""Display helpers shared by the application handlers."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from kasir.domain.model.value_objects import Money


def money(amount: int | float) -> str:
    """Format an amount as Rupiah; averages are rounded to whole units."""
    if isinstance(amount, float):
        amount = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return str(Money(amount))


def timestamp(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M UTC")
