"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in lists. No file I/O, no side effects.
"""

from __future__ import annotations

from kasir.domain.model.discount import Discount, Promo
from kasir.domain.model.product import Product
from kasir.domain.model.returns import ProductReturn
from kasir.domain.model.stock import StockMovement
from kasir.domain.model.transaction import Transaction, TransactionItem
from kasir.domain.repository.discount_repository import DiscountRepository
from kasir.domain.repository.product_repository import ProductRepository
from kasir.domain.repository.return_repository import ReturnRepository
from kasir.domain.repository.stock_movement_repository import StockMovementRepository
from kasir.domain.repository.transaction_repository import TransactionRepository


class FakeProductRepository(ProductRepository):

    def __init__(
        self,
        products: list[Product] | None = None,
        outlet_stock: dict[str, dict[str, int]] | None = None,
    ) -> None:
        self._store: dict[str, Product] = {p.id: p for p in products or []}
        self._outlet_stock = outlet_stock or {}

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def outlet_stock(self, outlet_id: str) -> dict[str, int]:
        return dict(self._outlet_stock.get(outlet_id, {}))


class FakeDiscountRepository(DiscountRepository):

    def __init__(
        self,
        discounts: list[Discount] | None = None,
        promos: list[Promo] | None = None,
    ) -> None:
        self._discounts = list(discounts or [])
        self._promos = list(promos or [])

    def list_discounts(self) -> list[Discount]:
        return list(self._discounts)

    def list_promos(self) -> list[Promo]:
        return list(self._promos)


class FakeTransactionRepository(TransactionRepository):

    def __init__(
        self,
        transactions: list[Transaction] | None = None,
        items: list[TransactionItem] | None = None,
    ) -> None:
        self._transactions = list(transactions or [])
        self._items = list(items or [])

    def list_transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def list_items(self) -> list[TransactionItem]:
        return list(self._items)


class FakeStockMovementRepository(StockMovementRepository):

    def __init__(self, movements: list[StockMovement] | None = None) -> None:
        self._movements = list(movements or [])

    def list_movements(self) -> list[StockMovement]:
        return list(self._movements)


class FakeReturnRepository(ReturnRepository):

    def __init__(self, returns: list[ProductReturn] | None = None) -> None:
        self._returns = list(returns or [])

    def list_returns(self) -> list[ProductReturn]:
        return list(self._returns)
