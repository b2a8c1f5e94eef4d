"""Stock movement records and stock validation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from kasir.domain.model.value_objects import MovementType


@dataclass(frozen=True)
class StockMovement:
    """A raw stock movement as recorded by the store.

    ``quantity`` is interpreted by ``movement_type``: ``in`` and ``out`` carry
    a magnitude, ``adjustment`` carries its own sign.
    """

    id: str
    created_at: datetime
    product_id: str
    movement_type: MovementType
    quantity: int
    product_name: str = "Unknown"
    reference_type: str | None = None
    reference_id: str | None = None
    outlet_id: str | None = None


@dataclass(frozen=True)
class StockMovementEntry:
    """A movement annotated with the product's balance right after it."""

    movement: StockMovement
    running_balance: int

    @property
    def id(self) -> str:
        return self.movement.id

    @property
    def created_at(self) -> datetime:
        return self.movement.created_at

    @property
    def product_id(self) -> str:
        return self.movement.product_id


@dataclass(frozen=True)
class StockMovementData:
    movements: list[StockMovementEntry]


@dataclass(frozen=True)
class MovementFilters:
    """Conjunctive movement filters; ``None`` means "no constraint"."""

    start_date: datetime | None = None
    end_date: datetime | None = None
    product_id: str | None = None
    movement_type: MovementType | None = None
    outlet_id: str | None = None


@dataclass(frozen=True)
class StockValidationError:
    product_id: str
    product_name: str
    requested_quantity: int
    available_stock: int
    message: str = ""


@dataclass(frozen=True)
class StockValidationResult:
    valid: bool
    errors: list[StockValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class LowStockProduct:
    id: str
    name: str
    current_stock: int
    min_stock: int
    suggested_order_quantity: int
    category_id: str | None = None
    supplier_id: str | None = None
