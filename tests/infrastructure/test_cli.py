"""End-to-end tests for the command-line interface against JSON snapshots."""

import json
import logging

import pytest
from click.testing import CliRunner

from kasir.infrastructure.cli.main import cli
from kasir.infrastructure.logging_config import LOGGER_NAME

NOW = "2024-06-12T15:00:00Z"


@pytest.fixture(autouse=True)
def reset_logging():
    # CliRunner swaps stderr per invocation; drop handlers bound to it.
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def data_dir(tmp_path):
    snapshots = {
        "products.json": [
            {"id": "p1", "name": "Kopi Susu", "price": 10000, "stock_quantity": 20, "min_stock": 5,
             "category_id": "drinks"},
            {"id": "p2", "name": "Roti Bakar", "price": 15000, "stock_quantity": 2, "min_stock": 5,
             "category_id": "food"},
        ],
        "outlet_stock.json": [
            {"outlet_id": "o1", "product_id": "p1", "quantity": 1},
        ],
        "discounts.json": [
            {"id": "d1", "product_id": "p1", "discount_type": "percentage", "discount_value": 10},
        ],
        "promos.json": [
            {"id": "pr1", "name": "Payday Sale", "start_date": "2024-06-01T00:00:00Z",
             "end_date": "2024-06-30T23:59:59Z", "discount_type": "nominal", "discount_value": 3000,
             "min_purchase": 100000, "product_ids": ["p2"]},
        ],
        "transactions.json": [
            {"id": "t1", "transaction_number": "TRX-001", "total_amount": 18000,
             "transaction_date": "2024-06-12T09:15:00Z", "outlet_id": "o1"},
            {"id": "t2", "transaction_number": "TRX-002", "total_amount": 12000,
             "transaction_date": "2024-06-11T10:00:00Z", "outlet_id": "o1"},
        ],
        "transaction_items.json": [
            {"transaction_id": "t1", "product_id": "p1", "product_name": "Kopi Susu", "quantity": 2,
             "unit_price": 10000, "total_price": 18000, "discount_amount": 2000, "discount_id": "d1"},
            {"transaction_id": "t2", "product_id": "p2", "product_name": "Roti Bakar", "quantity": 1,
             "unit_price": 15000, "total_price": 12000, "discount_amount": 3000, "promo_id": "pr1"},
        ],
        "stock_movements.json": [
            {"id": "m1", "created_at": "2024-06-01T08:00:00Z", "product_id": "p1",
             "product_name": "Kopi Susu", "movement_type": "in", "quantity": 22},
            {"id": "m2", "created_at": "2024-06-12T09:15:00Z", "product_id": "p1",
             "product_name": "Kopi Susu", "movement_type": "out", "quantity": 2,
             "reference_type": "sale", "reference_id": "t1"},
        ],
        "returns.json": [
            {"id": "r1", "status": "completed", "total_refund": 9000, "created_at": "2024-06-12T11:00:00Z",
             "items": [{"product_id": "p1", "product_name": "Kopi Susu", "quantity": 1, "reason": "damaged"}]},
            {"id": "r2", "status": "rejected", "total_refund": 15000, "created_at": "2024-06-12T12:00:00Z",
             "items": [{"product_id": "p2", "product_name": "Roti Bakar", "quantity": 1, "reason": "other"}]},
        ],
    }
    for name, records in snapshots.items():
        (tmp_path / name).write_text(json.dumps(records), encoding="utf-8")
    return tmp_path


def _run(data_dir, *args):
    runner = CliRunner()
    return runner.invoke(cli, ["--data-dir", str(data_dir), "--now", NOW, *args])


class TestCartCommands:

    def test_price(self, data_dir):
        result = _run(data_dir, "cart", "price", "--items", "Kopi Susu:2,Roti Bakar:1")
        assert result.exit_code == 0, result.output
        assert "discount d1" in result.output
        assert "promo Payday Sale" in result.output
        assert "Rp 30.000" in result.output
        assert "spend Rp 65.000 more to qualify" in result.output

    def test_unknown_product(self, data_dir):
        result = _run(data_dir, "cart", "price", "--items", "Es Krim:1")
        assert result.exit_code == 1
        assert "Product not found: 'Es Krim'" in result.output

    def test_bad_item_format(self, data_dir):
        result = _run(data_dir, "cart", "price", "--items", "Kopi Susu")
        assert result.exit_code == 2
        assert "Expected 'ProductName:Quantity'" in result.output


class TestCheckoutCommands:

    def test_accepted(self, data_dir):
        result = _run(data_dir, "checkout", "preview", "--items", "Kopi Susu:2", "--cash", "20000")
        assert result.exit_code == 0, result.output
        assert "Change: Rp 2.000" in result.output
        assert "Stock after sale for Kopi Susu: 18" in result.output
        assert "Checkout OK." in result.output

    def test_rejected_for_stock(self, data_dir):
        result = _run(data_dir, "checkout", "preview", "--items", "Roti Bakar:3", "--method", "card")
        assert result.exit_code == 1
        assert "Insufficient stock for Roti Bakar (requested 3, available 2)" in result.output
        assert "Checkout would be rejected." in result.output

    def test_rejected_at_outlet(self, data_dir):
        result = _run(
            data_dir, "checkout", "preview", "--items", "Kopi Susu:2", "--method", "card", "--outlet", "o1"
        )
        assert result.exit_code == 1
        assert "available 1" in result.output


class TestReportCommands:

    def test_sales(self, data_dir):
        result = _run(data_dir, "report", "sales", "--start", "2024-06-01", "--end", "2024-06-30")
        assert result.exit_code == 0, result.output
        assert "Total sales:    Rp 30.000" in result.output
        assert "Transactions:   2" in result.output
        assert "Kopi Susu" in result.output

    def test_sales_bad_date(self, data_dir):
        result = _run(data_dir, "report", "sales", "--start", "yesterday", "--end", "2024-06-30")
        assert result.exit_code == 2
        assert "not an ISO-8601 date" in result.output

    def test_stock(self, data_dir):
        result = _run(data_dir, "report", "stock", "--status", "low")
        assert result.exit_code == 0, result.output
        assert "Roti Bakar" in result.output
        assert "Kopi Susu" not in result.output

    def test_movements(self, data_dir):
        result = _run(data_dir, "report", "movements", "--product", "p1")
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "sale:t1" in lines[1]
        assert lines[1].split()[-2] == "20"

    def test_movements_empty(self, data_dir):
        result = _run(data_dir, "report", "movements", "--product", "p9")
        assert "No stock movements found." in result.output

    def test_dashboard(self, data_dir):
        result = _run(data_dir, "report", "dashboard")
        assert result.exit_code == 0, result.output
        assert "Today:      Rp 18.000 (1 transactions)" in result.output
        assert "Yesterday:  Rp 12.000" in result.output
        assert "TRX-001" in result.output

    def test_product_history(self, data_dir):
        result = _run(data_dir, "report", "product", "Kopi Susu", "--start", "2024-06-01", "--end", "2024-06-30")
        assert result.exit_code == 0, result.output
        assert "2024-06-12" in result.output
        assert "Rp 18.000" in result.output

    def test_returns(self, data_dir):
        result = _run(data_dir, "report", "returns", "--start", "2024-06-01", "--end", "2024-06-30")
        assert result.exit_code == 0, result.output
        assert "Returns:        1" in result.output
        assert "Refunded:       Rp 9.000" in result.output
        assert "Kopi Susu" in result.output
        assert "Roti Bakar" not in result.output

    def test_discounts(self, data_dir):
        result = _run(data_dir, "report", "discounts", "--start", "2024-06-01", "--end", "2024-06-30")
        assert result.exit_code == 0, result.output
        assert "Discount given:        Rp 5.000" in result.output
        assert "Payday Sale" in result.output
        assert "active" in result.output


class TestStockCommands:

    def test_low(self, data_dir):
        result = _run(data_dir, "stock", "low")
        assert result.exit_code == 0, result.output
        assert "Roti Bakar" in result.output
        assert "8" in result.output.splitlines()[-1]

    def test_none_low_at_outlet(self, data_dir):
        result = _run(data_dir, "stock", "low", "--outlet", "o2")
        assert "No products below minimum stock." in result.output

    def test_opname(self, data_dir):
        result = _run(data_dir, "stock", "opname", "--counts", "Kopi Susu:17,Roti Bakar:2")
        assert result.exit_code == 0, result.output
        assert "Discrepancies: 1" in result.output
        assert "Shortage: -3" in result.output
        [kopi] = [line for line in result.output.splitlines() if line.startswith("Kopi Susu")]
        assert kopi.split()[-1] == "-3"

    def test_opname_unknown_product(self, data_dir):
        result = _run(data_dir, "stock", "opname", "--counts", "Es Krim:1")
        assert result.exit_code == 1
        assert "Product not found: 'Es Krim'" in result.output


class TestMalformedData:

    def test_repository_errors_become_click_errors(self, data_dir):
        (data_dir / "products.json").write_text("[{\"id\": \"p1\"}]", encoding="utf-8")
        result = _run(data_dir, "report", "stock")
        assert result.exit_code == 1
        assert "Malformed record #0 in products.json" in result.output
