"""Domain service: Cart pricing.

Unit prices are reduced by at most one discount (see ``discount_resolver``),
then multiplied out per line.  Amounts are whole currency units.  The only
rounding step in the whole core is the percentage calculation below, which
rounds half away from zero.

Out-of-range reductions are clamped, never rejected: a percentage outside
[0, 100] or a nominal larger than the price still yields ``final_price >= 0``.
Rejecting such values is the job of ``discount_rules``.  Wrong types are
programming errors and raise: a discount type that is not a ``DiscountType``
value, or a nominal with a fractional part.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from kasir.domain.model.cart import (
    CartItem,
    CartItemWithDiscount,
    DiscountedPrice,
    MinimumPurchaseResult,
    PricedCart,
)
from kasir.domain.model.discount import Discount, Promo
from kasir.domain.model.value_objects import DiscountType, Money
from kasir.domain.service.discount_resolver import resolve_discount


class HasDiscountTerms(Protocol):
    @property
    def discount_type(self) -> DiscountType: ...

    @property
    def discount_value(self) -> float: ...


def _round_half_away_from_zero(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_percentage_discount(price: int, percentage: float) -> DiscountedPrice:
    """final_price = price - round(price * percentage / 100)"""
    valid_percentage = max(0, min(100, percentage))
    discount_amount = _round_half_away_from_zero(
        Decimal(price) * Decimal(str(valid_percentage)) / Decimal(100)
    )
    return DiscountedPrice(
        original_price=price,
        discount_amount=discount_amount,
        final_price=price - discount_amount,
        discount_type=DiscountType.PERCENTAGE,
        discount_value=valid_percentage,
    )


def calculate_nominal_discount(price: int, nominal: int) -> DiscountedPrice:
    """final_price = price - nominal, with the nominal clamped to [0, price].

    Raises ValidationError for a nominal that is not a whole amount.
    """
    valid_nominal = max(0, min(price, Money.of(nominal).amount))
    return DiscountedPrice(
        original_price=price,
        discount_amount=valid_nominal,
        final_price=price - valid_nominal,
        discount_type=DiscountType.NOMINAL,
        discount_value=valid_nominal,
    )


def price_unit(price: int, discount: HasDiscountTerms) -> DiscountedPrice:
    """Apply a Discount, a Promo or an applied variant to one unit price."""
    if DiscountType(discount.discount_type) is DiscountType.PERCENTAGE:
        return calculate_percentage_discount(price, discount.discount_value)
    return calculate_nominal_discount(price, discount.discount_value)


def price_cart(
    items: Iterable[CartItem],
    discounts: Sequence[Discount],
    promos: Sequence[Promo],
    now: datetime,
) -> PricedCart:
    """Price every line and total the cart.

    ``subtotal`` always uses the original unit price, and
    ``total == subtotal - total_discount`` holds to the unit because every
    line's final price is exactly its original price less its discount.
    """
    priced: list[CartItemWithDiscount] = []
    subtotal = 0
    total_discount = 0
    total = 0

    for item in items:
        resolution = resolve_discount(item.product.id, discounts, promos, now)
        original_price = item.product.price
        discount_amount = 0
        final_price = original_price

        if resolution.applied is not None:
            calculated = price_unit(original_price, resolution.applied)
            discount_amount = calculated.discount_amount
            final_price = calculated.final_price

        line = CartItemWithDiscount(
            item=item,
            original_price=original_price,
            discount_amount=discount_amount,
            final_price=final_price,
            applied=resolution.applied,
        )
        subtotal += line.line_subtotal
        total_discount += line.line_discount
        total += line.line_total
        priced.append(line)

    return PricedCart(
        items=priced,
        subtotal=subtotal,
        total_discount=total_discount,
        total=total,
    )


def check_minimum_purchase(cart_total: int, promo: Promo) -> MinimumPurchaseResult:
    """Whether ``cart_total`` meets the promo's minimum, and how far short it is."""
    if promo.min_purchase is None:
        return MinimumPurchaseResult(eligible=True, remaining=0)

    eligible = cart_total >= promo.min_purchase
    remaining = 0 if eligible else promo.min_purchase - cart_total
    return MinimumPurchaseResult(eligible=eligible, remaining=remaining)
