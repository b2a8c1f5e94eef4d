"""Integration tests for the report use cases."""

from datetime import datetime, timedelta, timezone

import pytest

from kasir.application.clock import fixed_clock
from kasir.application.dashboard import DashboardHandler
from kasir.application.discount_report import DiscountReportHandler
from kasir.application.return_report import ReturnReportHandler
from kasir.application.sales_report import ProductSalesHistoryHandler, SalesReportHandler
from kasir.application.stock_movements import StockMovementReportHandler
from kasir.application.stock_report import LowStockHandler, StockReportHandler
from kasir.domain.exceptions import EntityNotFoundError
from kasir.domain.model.discount import Promo
from kasir.domain.model.product import Product
from kasir.domain.model.report import StockFilters
from kasir.domain.model.returns import ProductReturn, ReturnItem
from kasir.domain.model.stock import MovementFilters, StockMovement
from kasir.domain.model.transaction import Transaction, TransactionItem
from kasir.domain.model.value_objects import (
    DiscountType,
    MovementType,
    PeriodGrouping,
    ReturnReason,
    ReturnStatus,
    StockStatus,
    TransactionStatus,
)
from tests.fakes import (
    FakeDiscountRepository,
    FakeProductRepository,
    FakeReturnRepository,
    FakeStockMovementRepository,
    FakeTransactionRepository,
)

UTC = timezone.utc
NOW = datetime(2024, 6, 12, 15, 0, tzinfo=UTC)

TRANSACTIONS = [
    Transaction("t1", "TRX-001", 25_000, datetime(2024, 6, 12, 9, 15, tzinfo=UTC), outlet_id="o1"),
    Transaction("t2", "TRX-002", 15_000, datetime(2024, 6, 12, 10, 40, tzinfo=UTC), outlet_id="o2"),
    Transaction("t3", "TRX-003", 10_000, datetime(2024, 6, 11, 18, 0, tzinfo=UTC), outlet_id="o1"),
    Transaction(
        "t4", "TRX-004", 99_000, datetime(2024, 6, 12, 11, 0, tzinfo=UTC),
        status=TransactionStatus.CANCELLED, outlet_id="o1",
    ),
]
ITEMS = [
    TransactionItem("t1", "p1", "Kopi Susu", 2, 10_000, 18_000, discount_amount=2_000, promo_id="pr1"),
    TransactionItem("t1", "p3", "Teh Manis", 1, 7_000, 7_000),
    TransactionItem("t2", "p2", "Roti Bakar", 1, 15_000, 15_000),
    TransactionItem("t3", "p1", "Kopi Susu", 1, 10_000, 10_000),
    TransactionItem("t4", "p3", "Teh Manis", 9, 11_000, 99_000, discount_amount=5_000, discount_id="d1"),
]
PRODUCTS = [
    Product(id="p1", name="Kopi Susu", price=10_000, stock_quantity=3, min_stock=5, category_id="drinks"),
    Product(id="p2", name="Roti Bakar", price=15_000, stock_quantity=8, min_stock=5, category_id="food"),
    Product(id="p3", name="Teh Manis", price=5_000, stock_quantity=40, min_stock=5, category_id="drinks"),
    Product(id="p4", name="Arsip", price=1_000, stock_quantity=0, min_stock=5, is_active=False),
]


class TestSalesReportHandler:

    def test_day_report(self):
        handler = SalesReportHandler(FakeTransactionRepository(TRANSACTIONS, ITEMS))
        dto = handler.handle(
            datetime(2024, 6, 1, tzinfo=UTC), datetime(2024, 6, 30, tzinfo=UTC), PeriodGrouping.DAY
        )
        assert dto.total_sales == "Rp 50.000"
        assert dto.total_transactions == 3
        assert dto.average_transaction == "Rp 16.667"
        assert [(p.period, p.count) for p in dto.periods] == [("11", 1), ("12", 2)]
        assert dto.top_by_quantity[0].rank == 1
        assert dto.top_by_quantity[0].product_name == "Kopi Susu"
        assert dto.top_by_revenue[0].revenue == "Rp 28.000"

    def test_outlet_report(self):
        handler = SalesReportHandler(FakeTransactionRepository(TRANSACTIONS, ITEMS))
        dto = handler.handle(
            datetime(2024, 6, 12, tzinfo=UTC),
            datetime(2024, 6, 12, 23, 59, tzinfo=UTC),
            PeriodGrouping.HOUR,
            outlet_id="o1",
        )
        assert dto.total_transactions == 1
        assert [p.period for p in dto.periods] == ["09"]


class TestStockReportHandlers:

    def test_stock_report_sorted_by_name_without_inactive(self):
        dto = StockReportHandler(FakeProductRepository(PRODUCTS)).handle()
        assert [line.product_name for line in dto.lines] == ["Kopi Susu", "Roti Bakar", "Teh Manis"]
        assert [line.status for line in dto.lines] == ["low", "normal", "overstocked"]
        assert dto.total_inventory_value == "Rp 350.000"
        assert dto.low_stock_count == 1

    def test_stock_report_filtered(self):
        dto = StockReportHandler(FakeProductRepository(PRODUCTS)).handle(
            StockFilters(category="drinks", stock_status=StockStatus.LOW)
        )
        assert [line.product_name for line in dto.lines] == ["Kopi Susu"]
        assert dto.total_inventory_value == "Rp 30.000"

    def test_stock_report_at_outlet(self):
        repo = FakeProductRepository(PRODUCTS, {"o1": {"p2": 1}})
        dto = StockReportHandler(repo).handle(outlet_id="o1")
        assert [(line.product_name, line.current_stock) for line in dto.lines] == [("Roti Bakar", 1)]

    def test_low_stock(self):
        lines = LowStockHandler(FakeProductRepository(PRODUCTS)).handle()
        assert [(line.product_name, line.suggested_order_quantity) for line in lines] == [
            ("Kopi Susu", 7)
        ]


class TestStockMovementReportHandler:

    def test_lines_with_balances_and_references(self):
        movements = [
            StockMovement(
                "m1", datetime(2024, 6, 1, 8, 0, tzinfo=UTC), "p1", MovementType.IN, 10,
                product_name="Kopi Susu", reference_type="purchase", reference_id="po-7",
            ),
            StockMovement(
                "m2", datetime(2024, 6, 1, 9, 0, tzinfo=UTC), "p1", MovementType.OUT, 4,
                product_name="Kopi Susu",
            ),
        ]
        lines = StockMovementReportHandler(FakeStockMovementRepository(movements)).handle()
        assert [(line.running_balance, line.reference) for line in lines] == [(6, None), (10, "purchase:po-7")]
        assert lines[0].date == "2024-06-01 09:00 UTC"
        assert lines[0].movement_type == "out"

    def test_filtered(self):
        movements = [
            StockMovement("m1", datetime(2024, 6, 1, tzinfo=UTC), "p1", MovementType.IN, 10),
            StockMovement("m2", datetime(2024, 6, 2, tzinfo=UTC), "p2", MovementType.IN, 3),
        ]
        lines = StockMovementReportHandler(FakeStockMovementRepository(movements)).handle(
            MovementFilters(product_id="p2")
        )
        assert [line.running_balance for line in lines] == [3]


class TestDashboardHandler:

    def test_dashboard(self):
        handler = DashboardHandler(
            FakeTransactionRepository(TRANSACTIONS, ITEMS),
            FakeProductRepository(PRODUCTS),
            fixed_clock(NOW),
        )
        dto = handler.handle()
        assert dto.today_sales == "Rp 40.000"
        assert dto.today_transactions == 2
        assert dto.yesterday_sales == "Rp 10.000"
        assert dto.week_sales == "Rp 50.000"
        assert dto.last_week_sales == "Rp 0"
        assert dto.low_stock_count == 1
        assert [tx.transaction_number for tx in dto.recent_transactions] == [
            "TRX-002", "TRX-001", "TRX-003",
        ]

    def test_dashboard_for_outlet(self):
        handler = DashboardHandler(
            FakeTransactionRepository(TRANSACTIONS, ITEMS),
            FakeProductRepository(PRODUCTS, {"o1": {"p1": 50, "p2": 0}}),
            fixed_clock(NOW),
        )
        dto = handler.handle(outlet_id="o1")
        assert dto.today_sales == "Rp 25.000"
        assert dto.low_stock_count == 1


class TestDiscountReportHandler:

    def test_only_completed_transactions_count(self):
        promo = Promo(
            id="pr1",
            name="Payday Sale",
            start_date=NOW - timedelta(days=3),
            end_date=NOW - timedelta(days=1),
            discount_type=DiscountType.PERCENTAGE,
            discount_value=10,
            product_ids=("p1",),
        )
        handler = DiscountReportHandler(
            FakeTransactionRepository(TRANSACTIONS, ITEMS),
            FakeDiscountRepository(promos=[promo]),
            fixed_clock(NOW),
        )
        dto = handler.handle(datetime(2024, 6, 1, tzinfo=UTC), datetime(2024, 6, 30, tzinfo=UTC))

        assert dto.total_discount_amount == "Rp 2.000"
        assert dto.total_sales_with_discount == "Rp 18.000"
        assert dto.transaction_count == 1
        assert dto.average_discount_per_transaction == "Rp 2.000"
        [performance] = dto.promos
        assert performance.status == "expired"
        assert performance.discount_given == "Rp 2.000"
        assert performance.transaction_count == 1


class TestProductSalesHistoryHandler:

    def test_daily_history(self):
        handler = ProductSalesHistoryHandler(
            FakeTransactionRepository(TRANSACTIONS, ITEMS), FakeProductRepository(PRODUCTS)
        )
        dto = handler.handle(
            "kopi susu", datetime(2024, 6, 1, tzinfo=UTC), datetime(2024, 6, 30, tzinfo=UTC)
        )
        assert dto.product_name == "Kopi Susu"
        assert [(d.date, d.quantity, d.revenue) for d in dto.days] == [
            ("2024-06-11", 1, "Rp 10.000"),
            ("2024-06-12", 2, "Rp 18.000"),
        ]
        assert dto.total_quantity == 3
        assert dto.total_revenue == "Rp 28.000"

    def test_unknown_product(self):
        handler = ProductSalesHistoryHandler(
            FakeTransactionRepository(TRANSACTIONS, ITEMS), FakeProductRepository(PRODUCTS)
        )
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle("Es Krim", datetime(2024, 6, 1, tzinfo=UTC), datetime(2024, 6, 30, tzinfo=UTC))


class TestReturnReportHandler:

    def test_completed_returns_in_range(self):
        returns = [
            ProductReturn(
                "r1", ReturnStatus.COMPLETED, 20_000, datetime(2024, 6, 10, tzinfo=UTC),
                (ReturnItem("p1", "Kopi Susu", 2, ReturnReason.DAMAGED),),
            ),
            ProductReturn(
                "r2", ReturnStatus.APPROVED, 15_000, datetime(2024, 6, 11, tzinfo=UTC),
                (ReturnItem("p2", "Roti Bakar", 1, ReturnReason.OTHER),),
            ),
            ProductReturn(
                "r3", ReturnStatus.COMPLETED, 7_000, datetime(2024, 5, 31, tzinfo=UTC),
                (ReturnItem("p3", "Teh Manis", 1, ReturnReason.CHANGED_MIND),),
            ),
        ]
        handler = ReturnReportHandler(FakeReturnRepository(returns))
        dto = handler.handle(datetime(2024, 6, 1, tzinfo=UTC), datetime(2024, 6, 30, tzinfo=UTC))

        assert dto.total_returns == 1
        assert dto.total_refund_amount == "Rp 20.000"
        assert [(r.reason, r.count) for r in dto.by_reason if r.count] == [("damaged", 1)]
        assert len(dto.by_reason) == len(ReturnReason)
        assert [(p.rank, p.product_name, p.total_quantity) for p in dto.top_returned] == [
            (1, "Kopi Susu", 2)
        ]
