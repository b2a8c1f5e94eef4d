"""Application service: Stock Opname use case (query).

Compares shelf counts with the stock on record and reports the
discrepancies.  Nothing is adjusted; the report is what a supervisor
reviews before approving the corrections.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from kasir.application.dto import OpnameLineDTO, OpnameReportDTO, StockCountSpec
from kasir.domain.exceptions import EntityNotFoundError, ValidationError
from kasir.domain.model.reconciliation import OpnameCount
from kasir.domain.repository.product_repository import ProductRepository
from kasir.domain.service.stock_reconciliation import count_product, summarize_opname

logger = logging.getLogger(__name__)


class StockOpnameHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, counts: list[StockCountSpec], outlet_id: str | None = None) -> OpnameReportDTO:
        outlet_stock = self._product_repo.outlet_stock(outlet_id) if outlet_id else None

        # A product counted twice keeps its later count.
        by_product: dict[str, OpnameCount] = {}
        for spec in counts:
            if spec.counted_quantity < 0:
                raise ValidationError(
                    f"Counted quantity for '{spec.product_name}' cannot be negative"
                )
            product = self._product_repo.get_by_name(spec.product_name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
            if outlet_stock is not None:
                product = replace(product, stock_quantity=outlet_stock.get(product.id, 0))
            by_product[product.id] = count_product(product, spec.counted_quantity)

        results = list(by_product.values())
        summary = summarize_opname(results)
        if summary.items_with_discrepancy:
            logger.warning(
                "Opname found %d discrepancy(ies): surplus=%d shortage=%d",
                summary.items_with_discrepancy, summary.total_surplus, summary.total_shortage,
            )

        return OpnameReportDTO(
            lines=[
                OpnameLineDTO(
                    product_name=c.product_name,
                    system_stock=c.system_stock,
                    actual_stock=c.actual_stock,
                    discrepancy=c.discrepancy,
                )
                for c in results
            ],
            items_counted=summary.items_counted,
            items_with_discrepancy=summary.items_with_discrepancy,
            total_surplus=summary.total_surplus,
            total_shortage=summary.total_shortage,
        )
