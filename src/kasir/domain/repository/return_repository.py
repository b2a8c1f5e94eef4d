"""Abstract repository for customer returns."""

from __future__ import annotations

from abc import ABC, abstractmethod

from kasir.domain.model.returns import ProductReturn


class ReturnRepository(ABC):

    @abstractmethod
    def list_returns(self) -> list[ProductReturn]:
        """Return every return, with its items, regardless of status."""
