"""Domain service: Return report aggregation.

Only completed returns are counted.  Every item of a completed return adds
one to its reason and to its product's return count, so the reason
breakdown always sums to the number of returned items.  The product ranking
orders by returned quantity and breaks ties on product id ascending.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from kasir.domain.model.report import ReturnReportSummary, TopReturnedProduct
from kasir.domain.model.returns import ProductReturn
from kasir.domain.model.value_objects import ReturnReason

TOP_RETURNED_LIMIT = 10


def _completed(returns: Iterable[ProductReturn]) -> list[ProductReturn]:
    return [r for r in returns if r.is_completed]


def calculate_total_returns(returns: Iterable[ProductReturn]) -> int:
    return len(_completed(returns))


def calculate_total_refund_amount(returns: Iterable[ProductReturn]) -> int:
    return sum(r.total_refund for r in _completed(returns))


def calculate_returns_by_reason(returns: Iterable[ProductReturn]) -> dict[ReturnReason, int]:
    by_reason = {reason: 0 for reason in ReturnReason}
    for ret in _completed(returns):
        for item in ret.items:
            by_reason[ReturnReason(item.reason)] += 1
    return by_reason


def calculate_top_returned_products(
    returns: Iterable[ProductReturn],
    limit: int = TOP_RETURNED_LIMIT,
) -> list[TopReturnedProduct]:
    totals: dict[str, TopReturnedProduct] = {}
    for ret in _completed(returns):
        for item in ret.items:
            existing = totals.get(item.product_id)
            totals[item.product_id] = TopReturnedProduct(
                product_id=item.product_id,
                product_name=item.product_name,
                return_count=(existing.return_count if existing else 0) + 1,
                total_quantity=(existing.total_quantity if existing else 0) + item.quantity,
            )

    ranked = sorted(totals.values(), key=lambda p: p.product_id)
    ranked.sort(key=lambda p: p.total_quantity, reverse=True)
    return ranked[:limit]


def filter_returns_by_date_range(
    returns: Iterable[ProductReturn],
    start: datetime,
    end: datetime,
) -> list[ProductReturn]:
    """Returns created within ``[start, end]``, whatever their status."""
    return [r for r in returns if start <= r.created_at <= end]


def process_return_report_data(returns: Iterable[ProductReturn]) -> ReturnReportSummary:
    returns = list(returns)
    return ReturnReportSummary(
        total_returns=calculate_total_returns(returns),
        total_refund_amount=calculate_total_refund_amount(returns),
        returns_by_reason=calculate_returns_by_reason(returns),
        top_returned_products=calculate_top_returned_products(returns),
    )
