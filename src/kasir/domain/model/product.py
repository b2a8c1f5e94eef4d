"""Product catalog record.

Products are snapshots handed to the core by the caller; the core never
mutates them.  Outlet-scoped stock is expressed by replacing
``stock_quantity`` on a copy (see ``stock_report.apply_outlet_stock``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    ``stock_quantity`` may be negative only as the outcome of an oversold
    simulation; ``price`` is in whole currency units.
    """

    id: str
    name: str
    price: int
    stock_quantity: int = 0
    min_stock: int = 0
    is_active: bool = True
    category_id: str | None = None
    supplier_id: str | None = None
    barcode: str | None = None
