"""Domain service: Stock reconciliation.

Discrepancies are always ``actual - expected``: positive means more stock
than recorded, negative means less.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from kasir.domain.model.product import Product
from kasir.domain.model.reconciliation import (
    OpnameCount,
    OpnameSummary,
    PurchaseOrderLine,
    ReceiptCheck,
    ReceiptDiscrepancy,
    StockTransfer,
)
from kasir.domain.model.value_objects import TransferStatus


# ---------------------------------------------------------------------------
# Stock opname
# ---------------------------------------------------------------------------


def calculate_discrepancy(actual_stock: int, system_stock: int) -> int:
    return actual_stock - system_stock


def count_product(product: Product, actual_stock: int) -> OpnameCount:
    """Compare a shelf count with the product's system stock."""
    return OpnameCount(
        product_id=product.id,
        product_name=product.name,
        system_stock=product.stock_quantity,
        actual_stock=actual_stock,
        discrepancy=calculate_discrepancy(actual_stock, product.stock_quantity),
    )


def summarize_opname(counts: Iterable[OpnameCount]) -> OpnameSummary:
    counts = list(counts)
    return OpnameSummary(
        items_counted=len(counts),
        items_with_discrepancy=sum(1 for c in counts if c.discrepancy != 0),
        total_surplus=sum(c.discrepancy for c in counts if c.discrepancy > 0),
        total_shortage=sum(c.discrepancy for c in counts if c.discrepancy < 0),
    )


# ---------------------------------------------------------------------------
# Transfers
# ---------------------------------------------------------------------------


def calculate_transfer_stock_change(
    transfer: StockTransfer,
    outlet_id: str,
    product_id: str,
) -> int:
    """Stock change one completed transfer caused at ``outlet_id``.

    Zero for a transfer that is not completed, a product it does not carry,
    or an outlet on neither end.
    """
    if TransferStatus(transfer.status) is not TransferStatus.COMPLETED:
        return 0

    item = next((i for i in transfer.items if i.product_id == product_id), None)
    if item is None:
        return 0

    if outlet_id == transfer.source_outlet_id:
        return -item.quantity
    if outlet_id == transfer.destination_outlet_id:
        return item.quantity
    return 0


# ---------------------------------------------------------------------------
# Purchase orders
# ---------------------------------------------------------------------------


def calculate_purchase_order_total(lines: Iterable[PurchaseOrderLine]) -> int:
    return sum(line.quantity * line.unit_price for line in lines)


def check_receipt_discrepancy(
    ordered: Iterable[PurchaseOrderLine],
    received_by_product_id: Mapping[str, int],
) -> ReceiptCheck:
    """One discrepancy per ordered line whose received quantity differs.

    A product absent from ``received_by_product_id`` counts as none received.
    Received products that were never ordered are ignored.
    """
    discrepancies: list[ReceiptDiscrepancy] = []
    for line in ordered:
        received = received_by_product_id.get(line.product_id, 0)
        if received != line.quantity:
            discrepancies.append(
                ReceiptDiscrepancy(
                    product_id=line.product_id,
                    ordered_quantity=line.quantity,
                    received_quantity=received,
                    difference=received - line.quantity,
                )
            )
    return ReceiptCheck(has_discrepancy=bool(discrepancies), discrepancies=discrepancies)
