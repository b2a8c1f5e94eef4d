"""Domain service: Sales report aggregation.

Period buckets use UTC.  Top-product rankings are truncated to
``TOP_PRODUCTS_LIMIT`` entries and break ties on product id ascending, so the
ranking does not depend on the order rows arrived in.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime, timezone

from kasir.domain.model.report import (
    DailyProductSales,
    ProductSalesHistory,
    SalesByPeriod,
    SalesReportData,
    SalesTotals,
    TopProduct,
)
from kasir.domain.model.transaction import Transaction, TransactionItem
from kasir.domain.model.value_objects import PeriodGrouping

TOP_PRODUCTS_LIMIT = 10


def _utc(moment: datetime) -> datetime:
    return moment.astimezone(timezone.utc)


# ---------------------------------------------------------------------------
# Period grouping
# ---------------------------------------------------------------------------


def group_sales_by_period(
    transactions: Iterable[Transaction],
    group_by: PeriodGrouping,
) -> list[SalesByPeriod]:
    """Bucket by UTC hour ("00".."23") or UTC day of month ("1".."31").

    The caller has already narrowed ``transactions`` to the date range,
    outlet and status of interest.
    """
    group_by = PeriodGrouping(group_by)
    grouped: dict[str, tuple[int, int]] = {}

    for tx in transactions:
        moment = _utc(tx.transaction_date)
        if group_by is PeriodGrouping.HOUR:
            period = f"{moment.hour:02d}"
        else:
            period = str(moment.day)
        amount, count = grouped.get(period, (0, 0))
        grouped[period] = (amount + tx.total_amount, count + 1)

    return sorted(
        (SalesByPeriod(period=p, amount=a, count=c) for p, (a, c) in grouped.items()),
        key=lambda s: int(s.period),
    )


# ---------------------------------------------------------------------------
# Top products
# ---------------------------------------------------------------------------


def _aggregate_products(items: Iterable[TransactionItem]) -> list[TopProduct]:
    totals: dict[str, TopProduct] = {}
    for item in items:
        existing = totals.get(item.product_id)
        quantity = item.quantity + (existing.quantity if existing else 0)
        revenue = item.total_price + (existing.revenue if existing else 0)
        totals[item.product_id] = TopProduct(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=quantity,
            revenue=revenue,
        )
    return list(totals.values())


def _rank(
    items: Iterable[TransactionItem],
    metric: Callable[[TopProduct], int],
) -> list[TopProduct]:
    products = sorted(_aggregate_products(items), key=lambda p: p.product_id)
    products.sort(key=metric, reverse=True)
    return products[:TOP_PRODUCTS_LIMIT]


def aggregate_top_products_by_quantity(items: Iterable[TransactionItem]) -> list[TopProduct]:
    return _rank(items, lambda p: p.quantity)


def aggregate_top_products_by_revenue(items: Iterable[TransactionItem]) -> list[TopProduct]:
    return _rank(items, lambda p: p.revenue)


# ---------------------------------------------------------------------------
# Selection helpers
# ---------------------------------------------------------------------------


def filter_transactions_by_outlet(
    transactions: Iterable[Transaction],
    outlet_id: str | None = None,
) -> list[Transaction]:
    """All transactions when ``outlet_id`` is None, else that outlet's only."""
    if not outlet_id:
        return list(transactions)
    return [tx for tx in transactions if tx.outlet_id == outlet_id]


def aggregate_sales_with_outlet_filter(
    transactions: Iterable[Transaction],
    outlet_id: str | None = None,
) -> SalesTotals:
    selected = filter_transactions_by_outlet(transactions, outlet_id)
    return SalesTotals(
        total_sales=sum(tx.total_amount for tx in selected),
        transaction_count=len(selected),
    )


def select_completed(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
    outlet_id: str | None = None,
) -> list[Transaction]:
    """Completed transactions dated within ``[start, end]``."""
    return [
        tx
        for tx in filter_transactions_by_outlet(transactions, outlet_id)
        if tx.is_completed and start <= tx.transaction_date <= end
    ]


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def build_sales_report(
    transactions: Sequence[Transaction],
    items: Iterable[TransactionItem],
    start: datetime,
    end: datetime,
    group_by: PeriodGrouping,
    outlet_id: str | None = None,
) -> SalesReportData:
    """Totals, period series and rankings for one date range (and outlet)."""
    selected = select_completed(transactions, start, end, outlet_id)
    selected_ids = {tx.id for tx in selected}
    selected_items = [item for item in items if item.transaction_id in selected_ids]

    total_sales = sum(tx.total_amount for tx in selected)
    total_transactions = len(selected)
    average = total_sales / total_transactions if total_transactions else 0.0

    return SalesReportData(
        total_sales=total_sales,
        total_transactions=total_transactions,
        average_transaction=average,
        sales_by_period=group_sales_by_period(selected, group_by),
        top_products_by_quantity=aggregate_top_products_by_quantity(selected_items),
        top_products_by_revenue=aggregate_top_products_by_revenue(selected_items),
    )


def product_sales_history(
    product_id: str,
    product_name: str,
    transactions: Sequence[Transaction],
    items: Iterable[TransactionItem],
    start: datetime,
    end: datetime,
) -> ProductSalesHistory:
    """Daily (UTC) sales of one product across completed transactions."""
    by_id = {tx.id: tx for tx in select_completed(transactions, start, end)}
    daily: dict[date, tuple[int, int, set[str]]] = {}

    for item in items:
        tx = by_id.get(item.transaction_id)
        if item.product_id != product_id or tx is None:
            continue
        day = _utc(tx.transaction_date).date()
        quantity, revenue, tx_ids = daily.get(day, (0, 0, set()))
        tx_ids.add(tx.id)
        daily[day] = (quantity + item.quantity, revenue + item.total_price, tx_ids)

    history = [
        DailyProductSales(
            date=day,
            quantity=quantity,
            revenue=revenue,
            transaction_count=len(tx_ids),
        )
        for day, (quantity, revenue, tx_ids) in sorted(daily.items())
    ]
    return ProductSalesHistory(
        product_id=product_id,
        product_name=product_name,
        sales_history=history,
        total_quantity=sum(d.quantity for d in history),
        total_revenue=sum(d.revenue for d in history),
    )
