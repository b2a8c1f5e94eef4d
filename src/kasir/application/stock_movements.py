"""Application service: Stock Movement Report use case (query)."""

from __future__ import annotations

from kasir.application.dto import MovementLineDTO
from kasir.application.formatting import timestamp
from kasir.domain.model.stock import MovementFilters
from kasir.domain.repository.stock_movement_repository import StockMovementRepository
from kasir.domain.service.stock_ledger import process_stock_movements


class StockMovementReportHandler:

    def __init__(self, movement_repo: StockMovementRepository) -> None:
        self._movement_repo = movement_repo

    def handle(self, filters: MovementFilters | None = None) -> list[MovementLineDTO]:
        data = process_stock_movements(self._movement_repo.list_movements(), filters)
        lines = []
        for entry in data.movements:
            m = entry.movement
            reference = f"{m.reference_type}:{m.reference_id}" if m.reference_type else None
            lines.append(
                MovementLineDTO(
                    date=timestamp(m.created_at),
                    product_name=m.product_name,
                    movement_type=m.movement_type.value,
                    quantity=m.quantity,
                    running_balance=entry.running_balance,
                    reference=reference,
                )
            )
        return lines
