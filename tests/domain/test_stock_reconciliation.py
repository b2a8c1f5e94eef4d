"""Unit tests for stock opname, transfer and receipt reconciliation."""

import random

import pytest

from kasir.domain.model.product import Product
from kasir.domain.model.reconciliation import (
    PurchaseOrderLine,
    StockTransfer,
    TransferItem,
)
from kasir.domain.model.value_objects import TransferStatus
from kasir.domain.service.stock_reconciliation import (
    calculate_discrepancy,
    calculate_purchase_order_total,
    calculate_transfer_stock_change,
    check_receipt_discrepancy,
    count_product,
    summarize_opname,
)


def _product(id="p1", stock=10):
    return Product(id=id, name=f"Product {id}", price=1_000, stock_quantity=stock)


class TestOpname:

    def test_discrepancy_is_actual_minus_system(self):
        assert calculate_discrepancy(8, 10) == -2
        assert calculate_discrepancy(12, 10) == 2
        assert calculate_discrepancy(10, 10) == 0

    def test_count_product(self):
        count = count_product(_product(stock=10), 7)
        assert (count.system_stock, count.actual_stock, count.discrepancy) == (10, 7, -3)
        assert count.product_name == "Product p1"

    def test_summary(self):
        counts = [
            count_product(_product("p1", 10), 7),
            count_product(_product("p2", 5), 5),
            count_product(_product("p3", 0), 4),
            count_product(_product("p4", 3), 1),
        ]
        summary = summarize_opname(counts)
        assert summary.items_counted == 4
        assert summary.items_with_discrepancy == 3
        assert summary.total_surplus == 4
        assert summary.total_shortage == -5

    def test_empty_summary(self):
        summary = summarize_opname([])
        assert (summary.items_counted, summary.total_surplus, summary.total_shortage) == (0, 0, 0)

    @pytest.mark.parametrize("seed", range(20))
    def test_surplus_and_shortage_sum_to_net_discrepancy(self, seed):
        rng = random.Random(seed)
        counts = [
            count_product(_product(f"p{i}", rng.randint(-5, 50)), rng.randint(0, 50))
            for i in range(rng.randint(0, 12))
        ]
        summary = summarize_opname(counts)
        assert summary.total_surplus >= 0 >= summary.total_shortage
        assert summary.total_surplus + summary.total_shortage == sum(
            c.actual_stock - c.system_stock for c in counts
        )


class TestTransferStockChange:

    TRANSFER = StockTransfer(
        id="tr1",
        transfer_number="TRF-001",
        source_outlet_id="o1",
        destination_outlet_id="o2",
        status=TransferStatus.COMPLETED,
        items=(TransferItem("p1", 5), TransferItem("p2", 2)),
    )

    def test_source_loses_and_destination_gains(self):
        assert calculate_transfer_stock_change(self.TRANSFER, "o1", "p1") == -5
        assert calculate_transfer_stock_change(self.TRANSFER, "o2", "p1") == 5

    def test_uninvolved_outlet_or_product(self):
        assert calculate_transfer_stock_change(self.TRANSFER, "o3", "p1") == 0
        assert calculate_transfer_stock_change(self.TRANSFER, "o1", "p9") == 0

    @pytest.mark.parametrize(
        "status", [TransferStatus.PENDING, TransferStatus.APPROVED, TransferStatus.CANCELLED, "pending"]
    )
    def test_only_completed_transfers_move_stock(self, status):
        transfer = StockTransfer("tr1", "TRF-001", "o1", "o2", status, (TransferItem("p1", 5),))
        assert calculate_transfer_stock_change(transfer, "o1", "p1") == 0

    def test_raw_completed_status(self):
        transfer = StockTransfer("tr1", "TRF-001", "o1", "o2", "completed", (TransferItem("p1", 5),))
        assert calculate_transfer_stock_change(transfer, "o2", "p1") == 5


class TestPurchaseOrders:

    LINES = [PurchaseOrderLine("p1", 10, 4_000), PurchaseOrderLine("p2", 3, 12_500)]

    def test_total(self):
        assert calculate_purchase_order_total(self.LINES) == 77_500
        assert calculate_purchase_order_total([]) == 0

    def test_full_receipt_has_no_discrepancy(self):
        check = check_receipt_discrepancy(self.LINES, {"p1": 10, "p2": 3})
        assert not check.has_discrepancy
        assert check.discrepancies == []

    def test_partial_and_missing_receipt(self):
        check = check_receipt_discrepancy(self.LINES, {"p1": 7, "p9": 4})
        assert check.has_discrepancy
        assert [(d.product_id, d.ordered_quantity, d.received_quantity, d.difference)
                for d in check.discrepancies] == [("p1", 10, 7, -3), ("p2", 3, 0, -3)]

    def test_over_receipt(self):
        [d] = check_receipt_discrepancy(self.LINES[:1], {"p1": 12}).discrepancies
        assert d.difference == 2
