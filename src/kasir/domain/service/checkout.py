"""Checkout validation and change calculation.

Every problem found is reported; validation does not stop at the first one.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from kasir.domain.model.cart import CartItem
from kasir.domain.model.value_objects import Money, PaymentMethod


@dataclass(frozen=True)
class PaymentInfo:
    method: PaymentMethod
    total_amount: int
    cash_received: int | None = None


@dataclass(frozen=True)
class CheckoutValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def validate_payment(payment: PaymentInfo) -> CheckoutValidationResult:
    """Only cash needs checking; card and e-wallet settle the exact total."""
    errors: list[str] = []
    if PaymentMethod(payment.method) is PaymentMethod.CASH:
        if payment.cash_received is None:
            errors.append("Enter the cash amount received.")
        elif payment.cash_received < payment.total_amount:
            shortage = Money(payment.total_amount - payment.cash_received)
            errors.append(f"Payment is short by {shortage}. Cash received must cover the total.")
    return CheckoutValidationResult(valid=not errors, errors=errors)


def validate_checkout(items: Sequence[CartItem], payment: PaymentInfo) -> CheckoutValidationResult:
    errors: list[str] = []

    if not items:
        errors.append("Cart is empty. Add a product to continue.")

    errors.extend(validate_payment(payment).errors)

    if any(item.quantity <= 0 for item in items):
        errors.append("Every item must have a quantity greater than 0.")

    return CheckoutValidationResult(valid=not errors, errors=errors)


def calculate_change(cash_received: int, total_amount: int) -> int:
    return max(0, cash_received - total_amount)


def is_checkout_enabled(items: Sequence[CartItem], payment: PaymentInfo, is_loading: bool = False) -> bool:
    if is_loading or not items:
        return False
    return validate_payment(payment).valid
