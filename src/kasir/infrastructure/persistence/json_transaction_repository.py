"""JSON-file-backed implementation of TransactionRepository."""

from __future__ import annotations

from pathlib import Path

from kasir.domain.model.transaction import Transaction, TransactionItem
from kasir.domain.model.value_objects import TransactionStatus
from kasir.domain.repository.transaction_repository import TransactionRepository
from kasir.infrastructure.persistence.json_snapshot import (
    JsonSnapshot,
    parse_amount,
    parse_enum,
    parse_optional_amount,
    parse_timestamp,
)


class JsonTransactionRepository(TransactionRepository):

    def __init__(self, transactions_path: Path, items_path: Path) -> None:
        self._transactions = JsonSnapshot(transactions_path)
        self._items = JsonSnapshot(items_path)

    def list_transactions(self) -> list[Transaction]:
        return self._transactions.load(self._transaction_to_domain)

    def list_items(self) -> list[TransactionItem]:
        return self._items.load(self._item_to_domain)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _transaction_to_domain(raw: dict) -> Transaction:
        return Transaction(
            id=raw["id"],
            transaction_number=raw.get("transaction_number", raw["id"]),
            total_amount=parse_amount(raw["total_amount"]),
            transaction_date=parse_timestamp(raw["transaction_date"]),
            status=parse_enum(TransactionStatus, raw.get("status", "completed")),
            outlet_id=raw.get("outlet_id"),
        )

    @staticmethod
    def _item_to_domain(raw: dict) -> TransactionItem:
        return TransactionItem(
            transaction_id=raw["transaction_id"],
            product_id=raw["product_id"],
            product_name=raw.get("product_name") or "Unknown",
            quantity=int(raw["quantity"]),
            unit_price=parse_amount(raw["unit_price"]),
            total_price=parse_amount(raw["total_price"]),
            discount_amount=parse_optional_amount(raw.get("discount_amount")),
            discount_id=raw.get("discount_id"),
            promo_id=raw.get("promo_id"),
        )
