"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from datetime import datetime

from kasir.application.clock import Clock, fixed_clock, system_clock
from kasir.config import Settings
from kasir.infrastructure.persistence.json_discount_repository import JsonDiscountRepository
from kasir.infrastructure.persistence.json_product_repository import JsonProductRepository
from kasir.infrastructure.persistence.json_return_repository import JsonReturnRepository
from kasir.infrastructure.persistence.json_stock_movement_repository import (
    JsonStockMovementRepository,
)
from kasir.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)


def clock(now: datetime | None = None) -> Clock:
    """The system clock, or one frozen at ``now`` when given."""
    return fixed_clock(now) if now is not None else system_clock


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(
        settings.data_dir / "products.json",
        settings.data_dir / "outlet_stock.json",
    )


def discount_repository(settings: Settings) -> JsonDiscountRepository:
    return JsonDiscountRepository(
        settings.data_dir / "discounts.json",
        settings.data_dir / "promos.json",
    )


def transaction_repository(settings: Settings) -> JsonTransactionRepository:
    return JsonTransactionRepository(
        settings.data_dir / "transactions.json",
        settings.data_dir / "transaction_items.json",
    )


def stock_movement_repository(settings: Settings) -> JsonStockMovementRepository:
    return JsonStockMovementRepository(settings.data_dir / "stock_movements.json")


def return_repository(settings: Settings) -> JsonReturnRepository:
    return JsonReturnRepository(settings.data_dir / "returns.json")
