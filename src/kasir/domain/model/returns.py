"""Customer return records as read from the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from kasir.domain.model.value_objects import ReturnReason, ReturnStatus


@dataclass(frozen=True)
class ReturnItem:
    product_id: str
    product_name: str
    quantity: int
    reason: ReturnReason


@dataclass(frozen=True)
class ProductReturn:
    """A return and its lines.

    Only ``completed`` returns count towards reports; the refund has not
    been paid out in any other state.
    """

    id: str
    status: ReturnStatus
    total_refund: int
    created_at: datetime
    items: tuple[ReturnItem, ...] = field(default_factory=tuple)

    @property
    def is_completed(self) -> bool:
        return ReturnStatus(self.status) is ReturnStatus.COMPLETED
