"""Domain service: Discount resolution.

Decides which single reduction applies to a product.  Precedence:

1. an active product-level Discount (the first one in caller order),
2. otherwise the first promo in caller order that is active, inside its
   window at ``now`` and lists the product explicitly,
3. otherwise nothing.

``now`` is always passed in; nothing here reads the wall clock.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from kasir.domain.model.discount import (
    Discount,
    DiscountResolution,
    ProductDiscount,
    Promo,
    PromoDiscount,
)


def is_promo_active(promo: Promo, now: datetime) -> bool:
    """True when the promo is switched on and ``now`` is inside its window."""
    if not promo.is_active:
        return False
    return promo.start_date <= now <= promo.end_date


def resolve_discount(
    product_id: str,
    discounts: Iterable[Discount],
    promos: Iterable[Promo],
    now: datetime,
) -> DiscountResolution:
    for discount in discounts:
        if discount.product_id == product_id and discount.is_active:
            return DiscountResolution(applied=ProductDiscount(discount))

    for promo in promos:
        if is_promo_active(promo, now) and product_id in promo.product_ids:
            return DiscountResolution(applied=PromoDiscount(promo, product_id))

    return DiscountResolution()
