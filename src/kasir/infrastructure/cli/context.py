"""Per-invocation state shared by every command via ``click.pass_obj``."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from kasir.application.clock import Clock
from kasir.config import Settings
from kasir.infrastructure import bootstrap


@dataclass(frozen=True)
class CliContext:
    settings: Settings
    now: datetime | None = None

    @property
    def clock(self) -> Clock:
        return bootstrap.clock(self.now)

    def products(self):
        return bootstrap.product_repository(self.settings)

    def discounts(self):
        return bootstrap.discount_repository(self.settings)

    def transactions(self):
        return bootstrap.transaction_repository(self.settings)

    def movements(self):
        return bootstrap.stock_movement_repository(self.settings)

    def returns(self):
        return bootstrap.return_repository(self.settings)
