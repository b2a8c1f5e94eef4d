"""Abstract repository for stock movements."""

from __future__ import annotations

from abc import ABC, abstractmethod

from kasir.domain.model.stock import StockMovement


class StockMovementRepository(ABC):

    @abstractmethod
    def list_movements(self) -> list[StockMovement]:
        """Return every recorded stock movement."""
