"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
Enumerations here are the closed vocabularies used by every record type.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from kasir.domain.exceptions import ValidationError


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    NOMINAL = "nominal"


class MovementType(Enum):
    IN = "in"
    OUT = "out"
    ADJUSTMENT = "adjustment"


class StockStatus(Enum):
    LOW = "low"
    NORMAL = "normal"
    OVERSTOCKED = "overstocked"


class TransactionStatus(Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"
    E_WALLET = "e-wallet"


class PeriodGrouping(Enum):
    HOUR = "hour"
    DAY = "day"


class PromoStatus(Enum):
    ACTIVE = "active"
    UPCOMING = "upcoming"
    EXPIRED = "expired"
    INACTIVE = "inactive"


class ReturnStatus(Enum):
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    COMPLETED = "completed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class ReturnReason(Enum):
    DAMAGED = "damaged"
    WRONG_PRODUCT = "wrong_product"
    NOT_AS_DESCRIBED = "not_as_described"
    CHANGED_MIND = "changed_mind"
    OTHER = "other"


class TransferStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Money:
    """Monetary amount in whole currency units.

    Rupiah has no minor unit in practice, so amounts are plain ints.  The
    core computes on ints directly; Money formats amounts for display and
    coerces whole-unit input through ``Money.of``.
    """

    amount: int

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(
                f"Money amount must be an int, got {type(self.amount).__name__}"
            )

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        # Indonesian grouping uses "." as the thousands separator
        grouped = f"{abs(self.amount):,}".replace(",", ".")
        sign = "-" if self.amount < 0 else ""
        return f"{sign}Rp {grouped}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Coerce a whole-unit amount (e.g. a numeric column read as text)."""
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite() or value != value.to_integral_value():
            raise ValidationError(f"Money amount must be whole units: {amount!r}")
        return Money(int(value))
