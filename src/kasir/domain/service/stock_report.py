"""Domain service: Stock report.

Status thresholds are fixed: at or below the minimum is low, more than
``OVERSTOCK_FACTOR`` times the minimum is overstocked.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace

from kasir.domain.model.product import Product
from kasir.domain.model.report import StockFilters, StockProductData, StockReportData
from kasir.domain.model.value_objects import StockStatus

OVERSTOCK_FACTOR = 3


def calculate_stock_status(current_stock: int, min_stock: int) -> StockStatus:
    if current_stock <= min_stock:
        return StockStatus.LOW
    if current_stock > min_stock * OVERSTOCK_FACTOR:
        return StockStatus.OVERSTOCKED
    return StockStatus.NORMAL


def _summarize(products: list[StockProductData]) -> StockReportData:
    return StockReportData(
        products=products,
        total_inventory_value=sum(p.stock_value for p in products),
        low_stock_count=sum(1 for p in products if p.stock_status is StockStatus.LOW),
    )


def process_stock_report_data(products: Iterable[Product]) -> StockReportData:
    return _summarize(
        [
            StockProductData(
                product_id=p.id,
                product_name=p.name,
                current_stock=p.stock_quantity,
                min_stock=p.min_stock,
                stock_status=calculate_stock_status(p.stock_quantity, p.min_stock),
                stock_value=p.stock_quantity * p.price,
                price=p.price,
                category_id=p.category_id,
            )
            for p in products
        ]
    )


def filter_stock_report_data(report: StockReportData, filters: StockFilters) -> StockReportData:
    """Narrow by category and/or status; totals are recomputed from the subset."""
    products = report.products
    if filters.category:
        products = [p for p in products if p.category_id == filters.category]
    if filters.stock_status is not None:
        wanted_status = StockStatus(filters.stock_status)
        products = [p for p in products if p.stock_status is wanted_status]
    return _summarize(list(products))


def apply_outlet_stock(
    products: Iterable[Product],
    outlet_stock: Mapping[str, int],
) -> list[Product]:
    """Products stocked at one outlet, carrying that outlet's quantities.

    Products missing from ``outlet_stock`` or inactive are dropped.
    """
    return [
        replace(p, stock_quantity=outlet_stock[p.id])
        for p in products
        if p.is_active and p.id in outlet_stock
    ]
