"""Input rules for discounts and promos.

These gate what staff may save.  Pricing itself never consults them; it
clamps whatever it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from kasir.domain.model.discount import Promo
from kasir.domain.model.value_objects import DiscountType, PromoStatus


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None


_OK = ValidationResult(valid=True)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == value


def validate_percentage_discount(value: float) -> ValidationResult:
    """A percentage must lie in [1, 100]."""
    if not _is_number(value):
        return ValidationResult(False, "Discount value must be a number")
    if value < 1 or value > 100:
        return ValidationResult(False, "Percentage must be between 1 and 100")
    return _OK


def validate_nominal_discount(value: float, product_price: int) -> ValidationResult:
    """A nominal reduction must be positive and strictly below the price."""
    if not _is_number(value):
        return ValidationResult(False, "Discount value must be a number")
    if not _is_number(product_price):
        return ValidationResult(False, "Product price is not valid")
    if not float(value).is_integer():
        return ValidationResult(False, "Nominal discount must be a whole amount")
    if value <= 0:
        return ValidationResult(False, "Nominal discount must be greater than 0")
    if value >= product_price:
        return ValidationResult(False, "Discount must be less than the product price")
    return _OK


def validate_discount(
    discount_type: DiscountType,
    discount_value: float,
    product_price: int | None = None,
) -> ValidationResult:
    try:
        kind = DiscountType(discount_type)
    except ValueError:
        return ValidationResult(False, "Unknown discount type")
    if kind is DiscountType.PERCENTAGE:
        return validate_percentage_discount(discount_value)
    if product_price is None:
        return ValidationResult(False, "Product price is required for a nominal discount")
    return validate_nominal_discount(discount_value, product_price)


def validate_promo_date_range(start_date: datetime, end_date: datetime) -> ValidationResult:
    if end_date <= start_date:
        return ValidationResult(False, "End date must be after start date")
    return _OK


def promo_status(promo: Promo, now: datetime) -> PromoStatus:
    if not promo.is_active:
        return PromoStatus.INACTIVE
    if now < promo.start_date:
        return PromoStatus.UPCOMING
    if now > promo.end_date:
        return PromoStatus.EXPIRED
    return PromoStatus.ACTIVE
