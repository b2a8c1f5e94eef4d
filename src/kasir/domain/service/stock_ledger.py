"""Domain service: Stock ledger.

Validation and simulation are deliberately separate functions.
``validate_availability`` reports shortfalls; ``simulate_reduction`` applies
the deltas regardless and may produce negative balances.  A caller that
must not oversell runs the first and only proceeds to the second when it
passes.

Running balances start from zero over the movements supplied.  Callers
passing a partial history get balances relative to that window, not
absolute stock levels.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from kasir.domain.model.cart import CartItem
from kasir.domain.model.product import Product
from kasir.domain.model.stock import (
    LowStockProduct,
    MovementFilters,
    StockMovement,
    StockMovementData,
    StockMovementEntry,
    StockValidationError,
    StockValidationResult,
)
from kasir.domain.model.value_objects import MovementType


# ---------------------------------------------------------------------------
# Availability and simulation
# ---------------------------------------------------------------------------


def validate_availability(
    items: Iterable[CartItem],
    stock_by_product_id: Mapping[str, int],
) -> StockValidationResult:
    """One error per item that is unknown to the map or asks for too much."""
    errors: list[StockValidationError] = []

    for item in items:
        product = item.product
        available = stock_by_product_id.get(product.id)
        if available is not None and item.quantity <= available:
            continue
        available_stock = available if available is not None else 0
        errors.append(
            StockValidationError(
                product_id=product.id,
                product_name=product.name,
                requested_quantity=item.quantity,
                available_stock=available_stock,
                message=(
                    f"Insufficient stock for {product.name} "
                    f"(requested {item.quantity}, available {available_stock})"
                ),
            )
        )

    return StockValidationResult(valid=not errors, errors=errors)


def simulate_reduction(
    stock_by_product_id: Mapping[str, int],
    items: Iterable[CartItem],
) -> dict[str, int]:
    """Return a new stock map with every item's quantity subtracted."""
    new_stock = dict(stock_by_product_id)
    for item in items:
        new_stock[item.product.id] = new_stock.get(item.product.id, 0) - item.quantity
    return new_stock


def movement_delta(quantity: int, movement_type: MovementType) -> int:
    """Signed stock change; an adjustment already carries its own sign.

    Raises ValueError for a type that is not a ``MovementType`` value.
    """
    if MovementType(movement_type) is MovementType.OUT:
        return -quantity
    return quantity


# ---------------------------------------------------------------------------
# Movement history
# ---------------------------------------------------------------------------


def calculate_running_balance(movements: Iterable[StockMovement]) -> list[StockMovementEntry]:
    """Annotate each movement with its product's balance after it.

    Returned latest first.  Movements sharing a timestamp keep their input
    order (before the final reversal).
    """
    ordered = sorted(movements, key=lambda m: m.created_at)
    balances: dict[str, int] = {}
    result: list[StockMovementEntry] = []

    for movement in ordered:
        balance = balances.get(movement.product_id, 0) + movement_delta(
            movement.quantity, movement.movement_type
        )
        balances[movement.product_id] = balance
        result.append(StockMovementEntry(movement=movement, running_balance=balance))

    result.reverse()
    return result


def filter_movements(
    movements: Iterable[StockMovement],
    filters: MovementFilters,
) -> list[StockMovement]:
    wanted_type = MovementType(filters.movement_type) if filters.movement_type is not None else None

    def matches(m: StockMovement) -> bool:
        if filters.start_date is not None and m.created_at < filters.start_date:
            return False
        if filters.end_date is not None and m.created_at > filters.end_date:
            return False
        if filters.product_id is not None and m.product_id != filters.product_id:
            return False
        if wanted_type is not None and MovementType(m.movement_type) is not wanted_type:
            return False
        if filters.outlet_id is not None and m.outlet_id != filters.outlet_id:
            return False
        return True

    return [m for m in movements if matches(m)]


def process_stock_movements(
    movements: Sequence[StockMovement],
    filters: MovementFilters | None = None,
) -> StockMovementData:
    """Filter first, then compute balances over what remains."""
    selected = filter_movements(movements, filters) if filters is not None else list(movements)
    return StockMovementData(movements=calculate_running_balance(selected))


# ---------------------------------------------------------------------------
# Reordering
# ---------------------------------------------------------------------------


def calculate_suggested_order_quantity(current_stock: int, min_stock: int) -> int:
    """Quantity that brings stock to twice the minimum; at least one unit."""
    return max(min_stock * 2 - current_stock, 1)


def filter_low_stock_products(products: Iterable[Product]) -> list[LowStockProduct]:
    return [
        LowStockProduct(
            id=p.id,
            name=p.name,
            current_stock=p.stock_quantity,
            min_stock=p.min_stock,
            suggested_order_quantity=calculate_suggested_order_quantity(
                p.stock_quantity, p.min_stock
            ),
            category_id=p.category_id,
            supplier_id=p.supplier_id,
        )
        for p in products
        if p.is_active and p.stock_quantity <= p.min_stock
    ]
