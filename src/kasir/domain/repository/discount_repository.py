"""Abstract repository for discounts and promos."""

from __future__ import annotations

from abc import ABC, abstractmethod

from kasir.domain.model.discount import Discount, Promo


class DiscountRepository(ABC):

    @abstractmethod
    def list_discounts(self) -> list[Discount]:
        """Return every product discount, active or not."""

    @abstractmethod
    def list_promos(self) -> list[Promo]:
        """Return every promo, in the order the store lists them."""
