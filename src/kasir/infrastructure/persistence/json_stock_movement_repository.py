"""JSON-file-backed implementation of StockMovementRepository."""

from __future__ import annotations

from pathlib import Path

from kasir.domain.model.stock import StockMovement
from kasir.domain.model.value_objects import MovementType
from kasir.domain.repository.stock_movement_repository import StockMovementRepository
from kasir.infrastructure.persistence.json_snapshot import JsonSnapshot, parse_enum, parse_timestamp


class JsonStockMovementRepository(StockMovementRepository):

    def __init__(self, file_path: Path) -> None:
        self._snapshot = JsonSnapshot(file_path)

    def list_movements(self) -> list[StockMovement]:
        return self._snapshot.load(self._to_domain)

    @staticmethod
    def _to_domain(raw: dict) -> StockMovement:
        return StockMovement(
            id=raw["id"],
            created_at=parse_timestamp(raw["created_at"]),
            product_id=raw["product_id"],
            movement_type=parse_enum(MovementType, raw["movement_type"]),
            quantity=int(raw["quantity"]),
            product_name=raw.get("product_name") or "Unknown",
            reference_type=raw.get("reference_type"),
            reference_id=raw.get("reference_id"),
            outlet_id=raw.get("outlet_id"),
        )
