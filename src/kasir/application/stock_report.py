"""Application services: stock report and low-stock queries."""

from __future__ import annotations

from kasir.application.dto import LowStockLineDTO, StockLineDTO, StockReportDTO
from kasir.application.formatting import money
from kasir.domain.model.product import Product
from kasir.domain.model.report import StockFilters
from kasir.domain.repository.product_repository import ProductRepository
from kasir.domain.service.stock_ledger import filter_low_stock_products
from kasir.domain.service.stock_report import (
    apply_outlet_stock,
    filter_stock_report_data,
    process_stock_report_data,
)


def _stocked_products(product_repo: ProductRepository, outlet_id: str | None) -> list[Product]:
    """Active products, with an outlet's quantities when one is given."""
    products = product_repo.list_all()
    if outlet_id:
        return apply_outlet_stock(products, product_repo.outlet_stock(outlet_id))
    return sorted((p for p in products if p.is_active), key=lambda p: p.name)


class StockReportHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, filters: StockFilters | None = None, outlet_id: str | None = None) -> StockReportDTO:
        report = process_stock_report_data(_stocked_products(self._product_repo, outlet_id))
        if filters is not None and (filters.category or filters.stock_status):
            report = filter_stock_report_data(report, filters)

        return StockReportDTO(
            lines=[
                StockLineDTO(
                    product_name=p.product_name,
                    current_stock=p.current_stock,
                    min_stock=p.min_stock,
                    status=p.stock_status.value,
                    stock_value=money(p.stock_value),
                )
                for p in report.products
            ],
            total_inventory_value=money(report.total_inventory_value),
            low_stock_count=report.low_stock_count,
        )


class LowStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, outlet_id: str | None = None) -> list[LowStockLineDTO]:
        return [
            LowStockLineDTO(
                product_name=p.name,
                current_stock=p.current_stock,
                min_stock=p.min_stock,
                suggested_order_quantity=p.suggested_order_quantity,
            )
            for p in filter_low_stock_products(_stocked_products(self._product_repo, outlet_id))
        ]
