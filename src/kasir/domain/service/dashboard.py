"""Domain service: Dashboard KPIs.

All windows are computed in UTC from an explicit ``now``.  Weeks start on
Monday; a Sunday is the seventh day of the week that began six days before.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, time, timedelta, timezone

from kasir.domain.model.product import Product
from kasir.domain.model.report import (
    DashboardData,
    DashboardDateRanges,
    RecentTransaction,
    SalesTotals,
)
from kasir.domain.model.transaction import Transaction
from kasir.domain.service.sales_report import select_completed

RECENT_TRANSACTIONS_LIMIT = 5

# Millisecond precision end of day, matching what the store records.
_END_OF_DAY = time(23, 59, 59, 999000)


def dashboard_date_ranges(now: datetime) -> DashboardDateRanges:
    today = now.astimezone(timezone.utc).date()
    today_start = datetime.combine(today, time.min, tzinfo=timezone.utc)
    today_end = datetime.combine(today, _END_OF_DAY, tzinfo=timezone.utc)

    yesterday_start = today_start - timedelta(days=1)
    yesterday_end = today_end - timedelta(days=1)

    # date.weekday() is already Monday == 0, Sunday == 6
    week_start = today_start - timedelta(days=today.weekday())
    week_end = today_end

    last_week_start = week_start - timedelta(days=7)
    last_week_end = week_start - timedelta(milliseconds=1)

    return DashboardDateRanges(
        today_start=today_start,
        today_end=today_end,
        yesterday_start=yesterday_start,
        yesterday_end=yesterday_end,
        week_start=week_start,
        week_end=week_end,
        last_week_start=last_week_start,
        last_week_end=last_week_end,
    )


def calculate_sales_totals(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
) -> SalesTotals:
    selected = select_completed(transactions, start, end)
    return SalesTotals(
        total_sales=sum(tx.total_amount for tx in selected),
        transaction_count=len(selected),
    )


def calculate_low_stock_count(products: Iterable[Product]) -> int:
    return sum(1 for p in products if p.is_active and p.stock_quantity <= p.min_stock)


def recent_transactions(
    transactions: Iterable[Transaction],
    limit: int = RECENT_TRANSACTIONS_LIMIT,
) -> list[RecentTransaction]:
    completed = sorted(
        (tx for tx in transactions if tx.is_completed),
        key=lambda tx: tx.transaction_date,
        reverse=True,
    )
    return [
        RecentTransaction(
            id=tx.id,
            transaction_number=tx.transaction_number,
            total_amount=tx.total_amount,
            transaction_date=tx.transaction_date,
            status=tx.status.value,
        )
        for tx in completed[:limit]
    ]


def process_dashboard_data(
    transactions: Sequence[Transaction],
    products: Iterable[Product],
    date_ranges: DashboardDateRanges,
) -> DashboardData:
    today = calculate_sales_totals(transactions, date_ranges.today_start, date_ranges.today_end)
    yesterday = calculate_sales_totals(
        transactions, date_ranges.yesterday_start, date_ranges.yesterday_end
    )
    week = calculate_sales_totals(transactions, date_ranges.week_start, date_ranges.week_end)
    last_week = calculate_sales_totals(
        transactions, date_ranges.last_week_start, date_ranges.last_week_end
    )

    return DashboardData(
        today_sales=today.total_sales,
        today_transactions=today.transaction_count,
        yesterday_sales=yesterday.total_sales,
        week_sales=week.total_sales,
        last_week_sales=last_week.total_sales,
        low_stock_count=calculate_low_stock_count(products),
        recent_transactions=recent_transactions(transactions),
    )
