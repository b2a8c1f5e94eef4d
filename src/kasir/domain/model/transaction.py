"""Sales transaction records as read from the store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from kasir.domain.model.value_objects import TransactionStatus


@dataclass(frozen=True)
class Transaction:
    id: str
    transaction_number: str
    total_amount: int
    transaction_date: datetime
    status: TransactionStatus = TransactionStatus.COMPLETED
    outlet_id: str | None = None

    @property
    def is_completed(self) -> bool:
        return TransactionStatus(self.status) is TransactionStatus.COMPLETED


@dataclass(frozen=True)
class TransactionItem:
    """One sold line of a transaction.

    ``discount_id`` and ``promo_id`` are mutually exclusive in practice;
    ``discount_amount`` is the total reduction on the line.
    """

    transaction_id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: int
    total_price: int
    discount_amount: int | None = None
    discount_id: str | None = None
    promo_id: str | None = None
