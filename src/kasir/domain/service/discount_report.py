"""Domain service: Discount and promo reporting."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime

from kasir.domain.model.report import DiscountReportSummary, PromoPerformance
from kasir.domain.model.transaction import Transaction, TransactionItem


def _was_discounted(item: TransactionItem) -> bool:
    has_source = item.discount_id is not None or item.promo_id is not None
    return has_source and item.discount_amount is not None and item.discount_amount > 0


def calculate_discount_report_summary(items: Iterable[TransactionItem]) -> DiscountReportSummary:
    """Totals over lines that actually received a discount or promo."""
    discounted = [item for item in items if _was_discounted(item)]
    transaction_count = len({item.transaction_id for item in discounted})
    total_discount = sum(item.discount_amount or 0 for item in discounted)

    return DiscountReportSummary(
        total_sales_with_discount=sum(item.total_price for item in discounted),
        total_discount_amount=total_discount,
        transaction_count=transaction_count,
        average_discount_per_transaction=(
            total_discount / transaction_count if transaction_count else 0.0
        ),
    )


def calculate_promo_performance(
    promo_id: str,
    promo_name: str,
    items: Iterable[TransactionItem],
) -> PromoPerformance:
    promo_items = [item for item in items if item.promo_id == promo_id]
    return PromoPerformance(
        promo_id=promo_id,
        promo_name=promo_name,
        sales_during_promo=sum(item.total_price for item in promo_items),
        discount_given=sum(item.discount_amount or 0 for item in promo_items),
        transaction_count=len({item.transaction_id for item in promo_items}),
    )


def filter_items_by_date_range(
    items: Iterable[TransactionItem],
    transactions_by_id: Mapping[str, Transaction],
    start: datetime,
    end: datetime,
) -> list[TransactionItem]:
    """Lines whose parent transaction is dated within ``[start, end]``.

    Lines whose transaction is not in ``transactions_by_id`` are dropped.
    """
    selected: list[TransactionItem] = []
    for item in items:
        tx = transactions_by_id.get(item.transaction_id)
        if tx is not None and start <= tx.transaction_date <= end:
            selected.append(item)
    return selected
