"""Application service: Discount Report use case (query)."""

from __future__ import annotations

from datetime import datetime

from kasir.application.clock import Clock, system_clock
from kasir.application.dto import DiscountReportDTO, PromoPerformanceDTO
from kasir.application.formatting import money
from kasir.domain.repository.discount_repository import DiscountRepository
from kasir.domain.repository.transaction_repository import TransactionRepository
from kasir.domain.service.discount_report import (
    calculate_discount_report_summary,
    calculate_promo_performance,
    filter_items_by_date_range,
)
from kasir.domain.service.discount_rules import promo_status


class DiscountReportHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        discount_repo: DiscountRepository,
        clock: Clock = system_clock,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._discount_repo = discount_repo
        self._clock = clock

    def handle(self, start: datetime, end: datetime) -> DiscountReportDTO:
        completed = {
            tx.id: tx for tx in self._transaction_repo.list_transactions() if tx.is_completed
        }
        items = filter_items_by_date_range(
            self._transaction_repo.list_items(), completed, start, end
        )
        summary = calculate_discount_report_summary(items)
        now = self._clock()

        promos = []
        for promo in self._discount_repo.list_promos():
            performance = calculate_promo_performance(promo.id, promo.name, items)
            promos.append(
                PromoPerformanceDTO(
                    promo_name=promo.name,
                    status=promo_status(promo, now).value,
                    sales=money(performance.sales_during_promo),
                    discount_given=money(performance.discount_given),
                    transaction_count=performance.transaction_count,
                )
            )

        return DiscountReportDTO(
            total_sales_with_discount=money(summary.total_sales_with_discount),
            total_discount_amount=money(summary.total_discount_amount),
            transaction_count=summary.transaction_count,
            average_discount_per_transaction=money(summary.average_discount_per_transaction),
            promos=promos,
        )
