"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money fields are
pre-formatted strings (e.g. "Rp 20.000").
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the cashier scanned (product name + quantity)."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class StockCountSpec:
    """Input: a shelf count (product name + counted quantity)."""

    product_name: str
    counted_quantity: int


# --- Cart / checkout -----------------------------------------------------------


@dataclass(frozen=True)
class PricedLineDTO:
    product_name: str
    quantity: int
    unit_price: str
    unit_discount: str
    final_price: str
    line_total: str
    applied: str | None  # e.g. "discount d-1" or "promo Payday Sale"


@dataclass(frozen=True)
class PromoEligibilityDTO:
    promo_name: str
    eligible: bool
    remaining: str


@dataclass(frozen=True)
class PricedCartDTO:
    items: list[PricedLineDTO]
    subtotal: str
    total_discount: str
    total: str
    total_amount: int  # unformatted, for payment checks
    promo_eligibility: list[PromoEligibilityDTO] = field(default_factory=list)


@dataclass(frozen=True)
class StockIssueDTO:
    product_name: str
    requested: int
    available: int
    message: str


@dataclass(frozen=True)
class CheckoutPreviewDTO:
    cart: PricedCartDTO
    valid: bool
    errors: list[str]
    stock_issues: list[StockIssueDTO]
    change: str | None
    stock_after: dict[str, int]


# --- Reports -------------------------------------------------------------------


@dataclass(frozen=True)
class PeriodLineDTO:
    period: str
    amount: str
    count: int


@dataclass(frozen=True)
class TopProductDTO:
    rank: int
    product_name: str
    quantity: int
    revenue: str


@dataclass(frozen=True)
class SalesReportDTO:
    total_sales: str
    total_transactions: int
    average_transaction: str
    periods: list[PeriodLineDTO]
    top_by_quantity: list[TopProductDTO]
    top_by_revenue: list[TopProductDTO]


@dataclass(frozen=True)
class StockLineDTO:
    product_name: str
    current_stock: int
    min_stock: int
    status: str
    stock_value: str


@dataclass(frozen=True)
class StockReportDTO:
    lines: list[StockLineDTO]
    total_inventory_value: str
    low_stock_count: int


@dataclass(frozen=True)
class MovementLineDTO:
    date: str
    product_name: str
    movement_type: str
    quantity: int
    running_balance: int
    reference: str | None


@dataclass(frozen=True)
class LowStockLineDTO:
    product_name: str
    current_stock: int
    min_stock: int
    suggested_order_quantity: int


@dataclass(frozen=True)
class RecentTransactionDTO:
    transaction_number: str
    total_amount: str
    transaction_date: str


@dataclass(frozen=True)
class DashboardDTO:
    today_sales: str
    today_transactions: int
    yesterday_sales: str
    week_sales: str
    last_week_sales: str
    low_stock_count: int
    recent_transactions: list[RecentTransactionDTO]


@dataclass(frozen=True)
class PromoPerformanceDTO:
    promo_name: str
    status: str
    sales: str
    discount_given: str
    transaction_count: int


@dataclass(frozen=True)
class DiscountReportDTO:
    total_sales_with_discount: str
    total_discount_amount: str
    transaction_count: int
    average_discount_per_transaction: str
    promos: list[PromoPerformanceDTO]


@dataclass(frozen=True)
class DailySalesDTO:
    date: str
    quantity: int
    revenue: str
    transaction_count: int


@dataclass(frozen=True)
class ProductSalesHistoryDTO:
    product_name: str
    days: list[DailySalesDTO]
    total_quantity: int
    total_revenue: str


# --- Returns -------------------------------------------------------------------


@dataclass(frozen=True)
class ReasonCountDTO:
    reason: str
    count: int


@dataclass(frozen=True)
class ReturnedProductDTO:
    rank: int
    product_name: str
    return_count: int
    total_quantity: int


@dataclass(frozen=True)
class ReturnReportDTO:
    total_returns: int
    total_refund_amount: str
    by_reason: list[ReasonCountDTO]
    top_returned: list[ReturnedProductDTO]


# --- Stock opname --------------------------------------------------------------


@dataclass(frozen=True)
class OpnameLineDTO:
    product_name: str
    system_stock: int
    actual_stock: int
    discrepancy: int


@dataclass(frozen=True)
class OpnameReportDTO:
    lines: list[OpnameLineDTO]
    items_counted: int
    items_with_discrepancy: int
    total_surplus: int
    total_shortage: int
