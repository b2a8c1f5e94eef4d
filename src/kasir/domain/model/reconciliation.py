"""Records for reconciling recorded stock with what is physically there.

A stock opname is a shelf count compared against system stock.  Transfers
move stock between outlets.  Purchase-order receipts compare what was
ordered with what arrived.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kasir.domain.model.value_objects import TransferStatus


# --- Stock opname --------------------------------------------------------------


@dataclass(frozen=True)
class OpnameCount:
    product_id: str
    product_name: str
    system_stock: int
    actual_stock: int
    discrepancy: int


@dataclass(frozen=True)
class OpnameSummary:
    """``total_surplus`` is >= 0 and ``total_shortage`` is <= 0."""

    items_counted: int
    items_with_discrepancy: int
    total_surplus: int
    total_shortage: int


# --- Transfers -----------------------------------------------------------------


@dataclass(frozen=True)
class TransferItem:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class StockTransfer:
    id: str
    transfer_number: str
    source_outlet_id: str
    destination_outlet_id: str
    status: TransferStatus
    items: tuple[TransferItem, ...] = field(default_factory=tuple)


# --- Purchase orders -------------------------------------------------------------


@dataclass(frozen=True)
class PurchaseOrderLine:
    product_id: str
    quantity: int
    unit_price: int


@dataclass(frozen=True)
class ReceiptDiscrepancy:
    product_id: str
    ordered_quantity: int
    received_quantity: int
    difference: int


@dataclass(frozen=True)
class ReceiptCheck:
    has_discrepancy: bool
    discrepancies: list[ReceiptDiscrepancy] = field(default_factory=list)
