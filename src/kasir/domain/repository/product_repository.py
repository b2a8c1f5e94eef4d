"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure.  Repositories here are read-only snapshot sources: the
back office's database owns writes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from kasir.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def outlet_stock(self, outlet_id: str) -> dict[str, int]:
        """Return ``{product_id: quantity}`` held at one outlet."""
