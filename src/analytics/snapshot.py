"""Analytics snapshot: the result of one full aggregation pass.

All money fields are integer minor units. Growth values are percentages.
"""

import datetime

from pydantic import BaseModel, ConfigDict

from analytics.window import Window

UNCATEGORIZED = "uncategorized"


class DailyRevenue(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    revenue: int
    order_count: int


class CategoryRollup(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    revenue: int
    order_count: int
    units_sold: int


class ProductSales(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    units_sold: int
    revenue: int


class StockAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    stock: int


class StatusBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    order_count: int
    revenue: int


class SummaryMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_revenue: int = 0
    order_count: int = 0
    average_order_value: int = 0
    items_sold: int = 0
    pending_orders: int = 0
    new_users: int = 0
    total_users: int = 0
    total_products: int = 0


class GrowthMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    revenue: float
    order_count: float
    average_order_value: float
    new_users: float


class AnalyticsSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    window: Window
    timezone: str
    summary: SummaryMetrics
    daily_revenue: tuple[DailyRevenue, ...] = ()
    categories: tuple[CategoryRollup, ...] = ()
    statuses: tuple[StatusBreakdown, ...] = ()
    top_products: tuple[ProductSales, ...] = ()
    low_stock: tuple[StockAlert, ...] = ()
    growth: GrowthMetrics | None = None
