"""Discount and Promo records, and the result of resolving them.

A Discount is a standing reduction tied to one product.  A Promo is a
time-windowed reduction over an explicit set of products, optionally gated
by a minimum purchase.  Resolution yields at most one of them per product,
wrapped in a tagged variant so downstream code never has to sniff ids to
tell where a reduction came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Union

from kasir.domain.model.value_objects import DiscountType


@dataclass(frozen=True)
class Discount:
    id: str
    product_id: str
    discount_type: DiscountType
    discount_value: float
    is_active: bool = True
    product_name: str | None = None


@dataclass(frozen=True)
class Promo:
    """A promotion.

    The active window ``[start_date, end_date]`` is inclusive on both ends.
    An empty ``product_ids`` applies to no product: eligibility must be
    explicit.
    """

    id: str
    name: str
    start_date: datetime
    end_date: datetime
    discount_type: DiscountType
    discount_value: float
    min_purchase: int | None = None
    product_ids: tuple[str, ...] = field(default_factory=tuple)
    is_active: bool = True
    description: str | None = None


# ---------------------------------------------------------------------------
# Applied discount variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProductDiscount:
    """A product-level Discount applied to a line."""

    discount: Discount
    kind: Literal["discount"] = "discount"

    @property
    def discount_type(self) -> DiscountType:
        return self.discount.discount_type

    @property
    def discount_value(self) -> float:
        return self.discount.discount_value


@dataclass(frozen=True)
class PromoDiscount:
    """A Promo applied to one product's line."""

    promo: Promo
    product_id: str
    kind: Literal["promo"] = "promo"

    @property
    def discount_type(self) -> DiscountType:
        return self.promo.discount_type

    @property
    def discount_value(self) -> float:
        return self.promo.discount_value


AppliedDiscount = Union[ProductDiscount, PromoDiscount]


@dataclass(frozen=True)
class DiscountResolution:
    """Outcome of resolving discounts for one product.

    ``applied`` is None when nothing applies, which is a normal outcome.
    """

    applied: AppliedDiscount | None = None

    @property
    def discount(self) -> Discount | None:
        if isinstance(self.applied, ProductDiscount):
            return self.applied.discount
        return None

    @property
    def promo(self) -> Promo | None:
        if isinstance(self.applied, PromoDiscount):
            return self.applied.promo
        return None
