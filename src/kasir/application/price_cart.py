"""Application service: Price Cart use case (query).

Resolves scanned product names against the catalog, merges repeated
scans, and prices the cart against the discounts and promos in force at
the clock's current time.
"""

from __future__ import annotations

import logging
from datetime import datetime

from kasir.application.clock import Clock, system_clock
from kasir.application.dto import (
    CartItemSpec,
    PricedCartDTO,
    PricedLineDTO,
    PromoEligibilityDTO,
)
from kasir.application.formatting import money
from kasir.domain.exceptions import EntityNotFoundError, ValidationError
from kasir.domain.model.cart import Cart, CartItemWithDiscount, PricedCart
from kasir.domain.model.discount import Promo, ProductDiscount, PromoDiscount
from kasir.domain.repository.discount_repository import DiscountRepository
from kasir.domain.repository.product_repository import ProductRepository
from kasir.domain.service.discount_resolver import is_promo_active
from kasir.domain.service.pricing import check_minimum_purchase, price_cart

logger = logging.getLogger(__name__)


class PriceCartHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        discount_repo: DiscountRepository,
        clock: Clock = system_clock,
    ) -> None:
        self._product_repo = product_repo
        self._discount_repo = discount_repo
        self._clock = clock

    def handle(self, item_specs: list[CartItemSpec]) -> PricedCartDTO:
        cart = self.build_cart(item_specs)
        priced, promos = self.price(cart)
        return to_priced_cart_dto(priced, promos, self._clock())

    # --- Steps shared with checkout -------------------------------------------

    def build_cart(self, item_specs: list[CartItemSpec]) -> Cart:
        """Resolve each product name (fail if unknown) and merge repeats."""
        cart = Cart()
        for spec in item_specs:
            if spec.quantity <= 0:
                raise ValidationError(
                    f"Quantity for '{spec.product_name}' must be positive"
                )
            product = self._product_repo.get_by_name(spec.product_name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
            cart.add_item(product, spec.quantity)
        return cart

    def price(self, cart: Cart) -> tuple[PricedCart, list[Promo]]:
        discounts = self._discount_repo.list_discounts()
        promos = self._discount_repo.list_promos()
        priced = price_cart(cart.items, discounts, promos, self._clock())
        logger.info(
            "Priced %d line(s): subtotal=%d discount=%d total=%d",
            len(priced.items), priced.subtotal, priced.total_discount, priced.total,
        )
        return priced, promos


# --- Mapping --------------------------------------------------------------------


def _describe(line: CartItemWithDiscount) -> str | None:
    if isinstance(line.applied, ProductDiscount):
        return f"discount {line.applied.discount.id}"
    if isinstance(line.applied, PromoDiscount):
        return f"promo {line.applied.promo.name}"
    return None


def to_priced_cart_dto(priced: PricedCart, promos: list[Promo], now: datetime) -> PricedCartDTO:
    eligibility = []
    for promo in promos:
        if not promo.min_purchase or not is_promo_active(promo, now):
            continue
        result = check_minimum_purchase(priced.subtotal, promo)
        eligibility.append(
            PromoEligibilityDTO(
                promo_name=promo.name,
                eligible=result.eligible,
                remaining=money(result.remaining),
            )
        )

    return PricedCartDTO(
        items=[
            PricedLineDTO(
                product_name=line.product.name,
                quantity=line.quantity,
                unit_price=money(line.original_price),
                unit_discount=money(line.discount_amount),
                final_price=money(line.final_price),
                line_total=money(line.line_total),
                applied=_describe(line),
            )
            for line in priced.items
        ],
        subtotal=money(priced.subtotal),
        total_discount=money(priced.total_discount),
        total=money(priced.total),
        total_amount=priced.total,
        promo_eligibility=eligibility,
    )
