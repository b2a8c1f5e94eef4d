"""Application services: sales report and per-product sales history (queries)."""

from __future__ import annotations

import logging
from datetime import datetime

from kasir.application.dto import (
    DailySalesDTO,
    PeriodLineDTO,
    ProductSalesHistoryDTO,
    SalesReportDTO,
    TopProductDTO,
)
from kasir.application.formatting import money
from kasir.domain.exceptions import EntityNotFoundError
from kasir.domain.model.report import TopProduct
from kasir.domain.model.value_objects import PeriodGrouping
from kasir.domain.repository.product_repository import ProductRepository
from kasir.domain.repository.transaction_repository import TransactionRepository
from kasir.domain.service.sales_report import build_sales_report, product_sales_history

logger = logging.getLogger(__name__)


class SalesReportHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(
        self,
        start: datetime,
        end: datetime,
        group_by: PeriodGrouping,
        outlet_id: str | None = None,
    ) -> SalesReportDTO:
        report = build_sales_report(
            self._transaction_repo.list_transactions(),
            self._transaction_repo.list_items(),
            start,
            end,
            group_by,
            outlet_id,
        )
        logger.info(
            "Sales report %s..%s: %d transaction(s)",
            start.isoformat(), end.isoformat(), report.total_transactions,
        )
        return SalesReportDTO(
            total_sales=money(report.total_sales),
            total_transactions=report.total_transactions,
            average_transaction=money(report.average_transaction),
            periods=[
                PeriodLineDTO(period=p.period, amount=money(p.amount), count=p.count)
                for p in report.sales_by_period
            ],
            top_by_quantity=self._ranked(report.top_products_by_quantity),
            top_by_revenue=self._ranked(report.top_products_by_revenue),
        )

    @staticmethod
    def _ranked(products: list[TopProduct]) -> list[TopProductDTO]:
        return [
            TopProductDTO(
                rank=rank,
                product_name=p.product_name,
                quantity=p.quantity,
                revenue=money(p.revenue),
            )
            for rank, p in enumerate(products, start=1)
        ]


class ProductSalesHistoryHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._product_repo = product_repo

    def handle(self, product_name: str, start: datetime, end: datetime) -> ProductSalesHistoryDTO:
        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")

        history = product_sales_history(
            product.id,
            product.name,
            self._transaction_repo.list_transactions(),
            self._transaction_repo.list_items(),
            start,
            end,
        )
        return ProductSalesHistoryDTO(
            product_name=history.product_name,
            days=[
                DailySalesDTO(
                    date=day.date.isoformat(),
                    quantity=day.quantity,
                    revenue=money(day.revenue),
                    transaction_count=day.transaction_count,
                )
                for day in history.sales_history
            ],
            total_quantity=history.total_quantity,
            total_revenue=money(history.total_revenue),
        )
