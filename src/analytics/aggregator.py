"""Analytics aggregator — roll a set of orders, products and users into a snapshot.

``aggregate`` is a pure reducer. It is always run over the complete current
collection and keeps no state between runs; there is no incremental update
path. Revenue is the order total (tax and shipping included); category and
product revenue are line totals.

Orders fall in the window when ``window.start <= created_at < window.end``.
Daily buckets use the calendar date in the caller's timezone.
"""

from collections import defaultdict
from datetime import UTC, tzinfo
from decimal import Decimal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog

from analytics.growth import compare
from analytics.snapshot import (
    UNCATEGORIZED,
    AnalyticsSnapshot,
    CategoryRollup,
    DailyRevenue,
    ProductSales,
    StatusBreakdown,
    StockAlert,
    SummaryMetrics,
)
from analytics.window import Window
from ordering.order.order import OrderStatus
from shared.exceptions import AggregationInputError
from shared.money import round_minor

logger = structlog.get_logger(__name__)

LOW_STOCK_THRESHOLD = 5


def resolve_timezone(tz) -> tzinfo:
    if tz is None:
        return UTC
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise AggregationInputError({"tz": [f"Unknown timezone {tz!r}"]}) from None


def _check_limit(name, value):
    if value is not None and value < 1:
        raise AggregationInputError({name: [f"{name} must be at least 1, got {value}"]})


def _category_of(line) -> str:
    category = (line.category or "").strip()
    return category or UNCATEGORIZED


# ---------------------------------------------------------------------------
# Individual rollups
# ---------------------------------------------------------------------------
def daily_revenue(orders, zone: tzinfo, max_days: int | None = None) -> tuple[DailyRevenue, ...]:
    revenue = defaultdict(int)
    counts = defaultdict(int)
    for order in orders:
        day = order.created_at.astimezone(zone).date()
        revenue[day] += order.pricing.total
        counts[day] += 1

    buckets = [DailyRevenue(date=day, revenue=revenue[day], order_count=counts[day]) for day in sorted(revenue)]
    if max_days is not None:
        buckets = buckets[-max_days:]
    return tuple(buckets)


def category_rollup(orders, top_k: int | None = None) -> tuple[CategoryRollup, ...]:
    revenue = defaultdict(int)
    units = defaultdict(int)
    touched = defaultdict(set)
    for order in orders:
        for line in order.items:
            category = _category_of(line)
            revenue[category] += line.line_total
            units[category] += line.quantity
            touched[category].add(order.id)

    rollups = sorted(
        (
            CategoryRollup(
                category=category,
                revenue=revenue[category],
                order_count=len(touched[category]),
                units_sold=units[category],
            )
            for category in revenue
        ),
        key=lambda rollup: (-rollup.revenue, rollup.category),
    )
    if top_k is not None:
        rollups = rollups[:top_k]
    return tuple(rollups)


def status_breakdown(orders) -> tuple[StatusBreakdown, ...]:
    counts = defaultdict(int)
    revenue = defaultdict(int)
    for order in orders:
        counts[order.status] += 1
        revenue[order.status] += order.pricing.total
    return tuple(
        StatusBreakdown(status=status.value, order_count=counts[status], revenue=revenue[status])
        for status in OrderStatus
    )


def top_products(orders, products, limit: int) -> tuple[ProductSales, ...]:
    names = {product.id: product.name for product in products}
    units = defaultdict(int)
    revenue = defaultdict(int)
    for order in orders:
        for line in order.items:
            units[line.product_id] += line.quantity
            revenue[line.product_id] += line.line_total
            names.setdefault(line.product_id, line.name or line.product_id)

    ranked = sorted(units, key=lambda product_id: (-units[product_id], -revenue[product_id], product_id))
    return tuple(
        ProductSales(
            product_id=product_id,
            name=names[product_id],
            units_sold=units[product_id],
            revenue=revenue[product_id],
        )
        for product_id in ranked[:limit]
    )


def low_stock(products, threshold: int = LOW_STOCK_THRESHOLD) -> tuple[StockAlert, ...]:
    alerts = [
        StockAlert(product_id=product.id, name=product.name, stock=product.stock)
        for product in products
        if product.stock <= threshold
    ]
    return tuple(sorted(alerts, key=lambda alert: (alert.stock, alert.product_id)))


def summary(orders, products, users, window: Window) -> SummaryMetrics:
    total_revenue = sum(order.pricing.total for order in orders)
    order_count = len(orders)
    average = round_minor(Decimal(total_revenue) / order_count) if order_count else 0
    return SummaryMetrics(
        total_revenue=total_revenue,
        order_count=order_count,
        average_order_value=average,
        items_sold=sum(order.item_count for order in orders),
        pending_orders=sum(1 for order in orders if order.status == OrderStatus.PENDING),
        new_users=sum(1 for user in users if user.created_at is not None and window.contains(user.created_at)),
        total_users=len(users),
        total_products=len(products),
    )


# ---------------------------------------------------------------------------
# Full pass
# ---------------------------------------------------------------------------
def aggregate(
    orders,
    products,
    users,
    window: Window,
    *,
    tz=None,
    max_days: int | None = None,
    top_categories: int | None = None,
    top_product_count: int = 5,
    low_stock_threshold: int = LOW_STOCK_THRESHOLD,
    previous_window: Window | None = None,
) -> AnalyticsSnapshot:
    """Aggregate the full collections over ``window``.

    When ``previous_window`` is given it must not overlap ``window``; the same
    aggregation is run over it and the snapshot carries growth figures
    comparing the two.
    """
    if not isinstance(window, Window):
        raise AggregationInputError({"window": ["A Window is required"]})
    _check_limit("max_days", max_days)
    _check_limit("top_categories", top_categories)
    _check_limit("top_product_count", top_product_count)
    if previous_window is not None and previous_window.end > window.start:
        raise AggregationInputError({"previous_window": ["The comparison window must end before the current window"]})

    zone = resolve_timezone(tz)
    orders = list(orders)
    products = list(products)
    users = list(users)
    in_window = [order for order in orders if window.contains(order.created_at)]

    snapshot = AnalyticsSnapshot(
        window=window,
        timezone=str(zone),
        summary=summary(in_window, products, users, window),
        daily_revenue=daily_revenue(in_window, zone, max_days),
        categories=category_rollup(in_window, top_categories),
        statuses=status_breakdown(in_window),
        top_products=top_products(in_window, products, top_product_count),
        low_stock=low_stock(products, low_stock_threshold),
    )

    if previous_window is not None:
        baseline = aggregate(orders, products, users, previous_window, tz=zone)
        snapshot = snapshot.model_copy(update={"growth": compare(snapshot, baseline)})

    logger.debug(
        "Analytics aggregated",
        order_count=snapshot.summary.order_count,
        buckets=len(snapshot.daily_revenue),
        categories=len(snapshot.categories),
    )
    return snapshot
