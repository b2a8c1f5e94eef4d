"""JSON-file-backed implementation of ReturnRepository.

Items are nested in each return record under ``items``.
"""

from __future__ import annotations

from pathlib import Path

from kasir.domain.model.returns import ProductReturn, ReturnItem
from kasir.domain.model.value_objects import ReturnReason, ReturnStatus
from kasir.domain.repository.return_repository import ReturnRepository
from kasir.infrastructure.persistence.json_snapshot import (
    JsonSnapshot,
    parse_amount,
    parse_enum,
    parse_timestamp,
)


class JsonReturnRepository(ReturnRepository):

    def __init__(self, file_path: Path) -> None:
        self._snapshot = JsonSnapshot(file_path)

    def list_returns(self) -> list[ProductReturn]:
        return self._snapshot.load(self._to_domain)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> ProductReturn:
        return ProductReturn(
            id=raw["id"],
            status=parse_enum(ReturnStatus, raw["status"]),
            total_refund=parse_amount(raw.get("total_refund", 0)),
            created_at=parse_timestamp(raw["created_at"]),
            items=tuple(
                ReturnItem(
                    product_id=item["product_id"],
                    product_name=item.get("product_name") or "Unknown",
                    quantity=int(item["quantity"]),
                    reason=parse_enum(ReturnReason, item.get("reason", "other")),
                )
                for item in raw.get("items") or []
            ),
        )
