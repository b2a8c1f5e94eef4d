"""Application service: Checkout Preview use case (query).

Runs every check the register performs before committing a sale: cart and
payment validation, stock availability (at the outlet when one is given),
and the stock levels the sale would leave behind.  Nothing is written;
committing the sale is the store's job.
"""

from __future__ import annotations

import logging

from kasir.application.clock import Clock, system_clock
from kasir.application.dto import CartItemSpec, CheckoutPreviewDTO, StockIssueDTO
from kasir.application.formatting import money
from kasir.application.price_cart import PriceCartHandler, to_priced_cart_dto
from kasir.domain.model.value_objects import PaymentMethod
from kasir.domain.repository.discount_repository import DiscountRepository
from kasir.domain.repository.product_repository import ProductRepository
from kasir.domain.service.checkout import PaymentInfo, calculate_change, validate_checkout
from kasir.domain.service.stock_ledger import simulate_reduction, validate_availability

logger = logging.getLogger(__name__)


class CheckoutPreviewHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        discount_repo: DiscountRepository,
        clock: Clock = system_clock,
    ) -> None:
        self._product_repo = product_repo
        self._pricer = PriceCartHandler(product_repo, discount_repo, clock)
        self._clock = clock

    def handle(
        self,
        item_specs: list[CartItemSpec],
        method: PaymentMethod,
        cash_received: int | None = None,
        outlet_id: str | None = None,
    ) -> CheckoutPreviewDTO:
        """Validate a prospective sale.

        Steps:
        1. Build and price the cart.
        2. Validate cart contents and payment against the priced total.
        3. Validate stock; only when it suffices, simulate the reduction.
        """
        cart = self._pricer.build_cart(item_specs)
        priced, promos = self._pricer.price(cart)

        payment = PaymentInfo(method=method, total_amount=priced.total, cash_received=cash_received)
        checkout = validate_checkout(cart.items, payment)

        if outlet_id:
            stock = self._product_repo.outlet_stock(outlet_id)
        else:
            stock = {p.id: p.stock_quantity for p in self._product_repo.list_all()}
        availability = validate_availability(cart.items, stock)

        stock_after: dict[str, int] = {}
        if availability.valid:
            simulated = simulate_reduction(stock, cart.items)
            stock_after = {item.product.name: simulated[item.product.id] for item in cart.items}
        else:
            logger.warning(
                "Stock check failed for %d product(s)%s",
                len(availability.errors),
                f" at outlet {outlet_id}" if outlet_id else "",
            )

        change = None
        if method is PaymentMethod.CASH and cash_received is not None:
            change = money(calculate_change(cash_received, priced.total))

        return CheckoutPreviewDTO(
            cart=to_priced_cart_dto(priced, promos, self._clock()),
            valid=checkout.valid and availability.valid,
            errors=list(checkout.errors),
            stock_issues=[
                StockIssueDTO(
                    product_name=error.product_name,
                    requested=error.requested_quantity,
                    available=error.available_stock,
                    message=error.message,
                )
                for error in availability.errors
            ],
            change=change,
            stock_after=stock_after,
        )
