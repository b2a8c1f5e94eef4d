"""Application service: Dashboard Summary use case (query)."""

from __future__ import annotations

import logging

from kasir.application.clock import Clock, system_clock
from kasir.application.dto import DashboardDTO, RecentTransactionDTO
from kasir.application.formatting import money, timestamp
from kasir.domain.repository.product_repository import ProductRepository
from kasir.domain.repository.transaction_repository import TransactionRepository
from kasir.domain.service.dashboard import dashboard_date_ranges, process_dashboard_data
from kasir.domain.service.sales_report import filter_transactions_by_outlet
from kasir.domain.service.stock_report import apply_outlet_stock

logger = logging.getLogger(__name__)


class DashboardHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        product_repo: ProductRepository,
        clock: Clock = system_clock,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._product_repo = product_repo
        self._clock = clock

    def handle(self, outlet_id: str | None = None) -> DashboardDTO:
        now = self._clock()
        ranges = dashboard_date_ranges(now)
        logger.debug("Dashboard windows for %s: %s", now.isoformat(), ranges)

        transactions = filter_transactions_by_outlet(
            self._transaction_repo.list_transactions(), outlet_id
        )
        products = self._product_repo.list_all()
        if outlet_id:
            products = apply_outlet_stock(products, self._product_repo.outlet_stock(outlet_id))

        data = process_dashboard_data(transactions, products, ranges)
        return DashboardDTO(
            today_sales=money(data.today_sales),
            today_transactions=data.today_transactions,
            yesterday_sales=money(data.yesterday_sales),
            week_sales=money(data.week_sales),
            last_week_sales=money(data.last_week_sales),
            low_stock_count=data.low_stock_count,
            recent_transactions=[
                RecentTransactionDTO(
                    transaction_number=tx.transaction_number,
                    total_amount=money(tx.total_amount),
                    transaction_date=timestamp(tx.transaction_date),
                )
                for tx in data.recent_transactions
            ],
        )
