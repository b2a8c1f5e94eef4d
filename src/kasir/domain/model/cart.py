"""Cart records and the Cart aggregate.

``CartItem`` is the immutable line handed to pricing and stock validation.
``Cart`` is the mutable aggregate a cashier builds up; it merges repeated
scans of the same product into one line.  The priced views
(``CartItemWithDiscount``, ``PricedCart``) are derived fresh on every call
and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from kasir.domain.model.discount import (
    AppliedDiscount,
    Discount,
    Promo,
    ProductDiscount,
    PromoDiscount,
)
from kasir.domain.model.product import Product
from kasir.domain.model.value_objects import DiscountType


@dataclass(frozen=True)
class CartItem:
    """A requested product and quantity.

    ``discount`` is the legacy per-line ad-hoc amount entered at the
    register.  Resolver-driven pricing does not read it.
    """

    product: Product
    quantity: int
    discount: int = 0


@dataclass(frozen=True)
class DiscountedPrice:
    original_price: int
    discount_amount: int
    final_price: int
    discount_type: DiscountType
    discount_value: float


@dataclass(frozen=True)
class CartItemWithDiscount:
    """A cart line priced per unit, with whichever reduction was applied."""

    item: CartItem
    original_price: int
    discount_amount: int
    final_price: int
    applied: AppliedDiscount | None = None

    @property
    def product(self) -> Product:
        return self.item.product

    @property
    def quantity(self) -> int:
        return self.item.quantity

    @property
    def line_subtotal(self) -> int:
        return self.original_price * self.item.quantity

    @property
    def line_discount(self) -> int:
        return self.discount_amount * self.item.quantity

    @property
    def line_total(self) -> int:
        return self.final_price * self.item.quantity

    @property
    def applied_discount(self) -> Discount | None:
        if isinstance(self.applied, ProductDiscount):
            return self.applied.discount
        return None

    @property
    def applied_promo(self) -> Promo | None:
        if isinstance(self.applied, PromoDiscount):
            return self.applied.promo
        return None


@dataclass(frozen=True)
class PricedCart:
    """Invariant: ``total == subtotal - total_discount``."""

    items: list[CartItemWithDiscount]
    subtotal: int
    total_discount: int
    total: int


@dataclass(frozen=True)
class MinimumPurchaseResult:
    eligible: bool
    remaining: int


# ---------------------------------------------------------------------------
# Cart aggregate
# ---------------------------------------------------------------------------


@dataclass
class Cart:
    """Aggregate root for the register's cart.

    One line per product.  Adding a product already in the cart increases
    its quantity and replaces its legacy line discount.
    """

    items: list[CartItem] = field(default_factory=list)

    def add_item(self, product: Product, quantity: int = 1, discount: int = 0) -> None:
        for i, item in enumerate(self.items):
            if item.product.id == product.id:
                self.items[i] = replace(
                    item, quantity=item.quantity + quantity, discount=discount
                )
                return
        self.items.append(CartItem(product=product, quantity=quantity, discount=discount))

    def remove_item(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.product.id != product_id]

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return
        self.items = [
            replace(item, quantity=quantity) if item.product.id == product_id else item
            for item in self.items
        ]

    def update_discount(self, product_id: str, discount: int) -> None:
        self.items = [
            replace(item, discount=discount) if item.product.id == product_id else item
            for item in self.items
        ]

    def clear(self) -> None:
        self.items = []

    # --- Computed properties --------------------------------------------------

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_amount(self) -> int:
        """Legacy total: list price times quantity, less line discounts."""
        return sum(item.product.price * item.quantity - item.discount for item in self.items)

    @property
    def total_discount(self) -> int:
        return sum(item.discount for item in self.items)
