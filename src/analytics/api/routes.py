"""FastAPI routes for the Analytics domain — the admin dashboard snapshot."""

from fastapi import APIRouter, Depends, Query

from analytics.aggregator import aggregate
from analytics.snapshot import AnalyticsSnapshot
from analytics.window import Window
from catalogue.product import get_catalogue
from identity.customer.customer import Customer
from identity.customer.directory import get_customer_directory
from identity.customer.principal import current_admin
from ordering.store import get_order_store
from shared.config import load_settings

analytics_router = APIRouter(prefix="/analytics", tags=["analytics"])


@analytics_router.get("", response_model=AnalyticsSnapshot)
async def get_analytics(
    range_name: str = Query(default="30days", alias="range"),
    tz: str | None = None,
    max_days: int | None = None,
    top_categories: int | None = None,
    compare: bool = True,
    admin: Customer = Depends(current_admin),
) -> AnalyticsSnapshot:
    """Aggregate every order, product and customer over the selected range.

    ``compare`` adds growth figures against the window of equal length
    immediately before the selected one.
    """
    window = Window.last(range_name)
    return aggregate(
        get_order_store().list_orders(),
        get_catalogue().list_products(),
        get_customer_directory().list_customers(),
        window,
        tz=tz or load_settings().timezone,
        max_days=max_days,
        top_categories=top_categories,
        previous_window=window.previous() if compare else None,
    )
