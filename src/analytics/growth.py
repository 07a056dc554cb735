"""Period-over-period growth percentages."""

from analytics.snapshot import AnalyticsSnapshot, GrowthMetrics


def growth(current, previous) -> float:
    """Percentage change from ``previous`` to ``current``.

    A zero baseline yields 100 when there is any current value and 0 when
    there is none, never a division by zero.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def compare(current: AnalyticsSnapshot, previous: AnalyticsSnapshot) -> GrowthMetrics:
    """Growth of ``current`` over ``previous``; both must come from the same aggregation."""
    return GrowthMetrics(
        revenue=growth(current.summary.total_revenue, previous.summary.total_revenue),
        order_count=growth(current.summary.order_count, previous.summary.order_count),
        average_order_value=growth(current.summary.average_order_value, previous.summary.average_order_value),
        new_users=growth(current.summary.new_users, previous.summary.new_users),
    )
