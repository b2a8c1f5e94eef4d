"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from kasir.domain.model.product import Product
from kasir.domain.repository.product_repository import ProductRepository
from kasir.infrastructure.persistence.json_snapshot import JsonSnapshot, parse_amount


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, outlet_stock_path: Path | None = None) -> None:
        self._products = JsonSnapshot(file_path)
        self._outlet_stock = JsonSnapshot(
            outlet_stock_path or file_path.with_name("outlet_stock.json")
        )

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for product in self.list_all():
            if product.id == product_id:
                return product
        return None

    def get_by_name(self, name: str) -> Product | None:
        for product in self.list_all():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return self._products.load(self._to_domain)

    def outlet_stock(self, outlet_id: str) -> dict[str, int]:
        rows = self._outlet_stock.load(
            lambda raw: (raw["outlet_id"], raw["product_id"], int(raw["quantity"]))
        )
        return {product_id: qty for outlet, product_id, qty in rows if outlet == outlet_id}

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=parse_amount(raw["price"]),
            stock_quantity=int(raw.get("stock_quantity", 0)),
            min_stock=int(raw.get("min_stock", 0)),
            is_active=raw.get("is_active", True),
            category_id=raw.get("category_id"),
            supplier_id=raw.get("supplier_id"),
            barcode=raw.get("barcode"),
        )
