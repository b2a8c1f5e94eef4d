"""Report view objects.

None of these has a lifecycle of its own: every report is recomputed from
the underlying records on each call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from kasir.domain.model.value_objects import ReturnReason, StockStatus


# --- Sales -------------------------------------------------------------------


@dataclass(frozen=True)
class SalesByPeriod:
    period: str
    amount: int
    count: int


@dataclass(frozen=True)
class TopProduct:
    product_id: str
    product_name: str
    quantity: int
    revenue: int


@dataclass(frozen=True)
class SalesTotals:
    total_sales: int
    transaction_count: int


@dataclass(frozen=True)
class SalesReportData:
    total_sales: int
    total_transactions: int
    average_transaction: float
    sales_by_period: list[SalesByPeriod]
    top_products_by_quantity: list[TopProduct]
    top_products_by_revenue: list[TopProduct]


@dataclass(frozen=True)
class DailyProductSales:
    date: date
    quantity: int
    revenue: int
    transaction_count: int


@dataclass(frozen=True)
class ProductSalesHistory:
    product_id: str
    product_name: str
    sales_history: list[DailyProductSales]
    total_quantity: int
    total_revenue: int


# --- Stock -------------------------------------------------------------------


@dataclass(frozen=True)
class StockProductData:
    product_id: str
    product_name: str
    current_stock: int
    min_stock: int
    stock_status: StockStatus
    stock_value: int
    price: int
    category_id: str | None = None


@dataclass(frozen=True)
class StockReportData:
    products: list[StockProductData]
    total_inventory_value: int
    low_stock_count: int


@dataclass(frozen=True)
class StockFilters:
    category: str | None = None
    stock_status: StockStatus | None = None


# --- Dashboard ---------------------------------------------------------------


@dataclass(frozen=True)
class DashboardDateRanges:
    """UTC window boundaries, each inclusive on both ends."""

    today_start: datetime
    today_end: datetime
    yesterday_start: datetime
    yesterday_end: datetime
    week_start: datetime
    week_end: datetime
    last_week_start: datetime
    last_week_end: datetime


@dataclass(frozen=True)
class RecentTransaction:
    id: str
    transaction_number: str
    total_amount: int
    transaction_date: datetime
    status: str


@dataclass(frozen=True)
class DashboardData:
    today_sales: int
    today_transactions: int
    yesterday_sales: int
    week_sales: int
    last_week_sales: int
    low_stock_count: int
    recent_transactions: list[RecentTransaction] = field(default_factory=list)


# --- Discounts ---------------------------------------------------------------


@dataclass(frozen=True)
class DiscountReportSummary:
    total_sales_with_discount: int
    total_discount_amount: int
    transaction_count: int
    average_discount_per_transaction: float


@dataclass(frozen=True)
class PromoPerformance:
    promo_id: str
    promo_name: str
    sales_during_promo: int
    discount_given: int
    transaction_count: int


# --- Returns -----------------------------------------------------------------


@dataclass(frozen=True)
class TopReturnedProduct:
    product_id: str
    product_name: str
    return_count: int
    total_quantity: int


@dataclass(frozen=True)
class ReturnReportSummary:
    """``returns_by_reason`` always holds every reason, zero when unused."""

    total_returns: int
    total_refund_amount: int
    returns_by_reason: dict[ReturnReason, int]
    top_returned_products: list[TopReturnedProduct]
