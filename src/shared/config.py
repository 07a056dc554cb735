"""Environment-driven configuration.

Money settings are integer minor units: the defaults are a PKR 500.00 flat
shipping fee and free shipping above PKR 10,000.00, with 16% sales tax applied
identically by the cart summary and by checkout.
"""

import os
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from shared.logging import get_environment


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    environment: str = "development"
    tax_rate: Decimal = Field(default=Decimal("0.16"), ge=0, lt=1)
    shipping_flat_fee: int = Field(default=50_000, ge=0)
    free_shipping_threshold: int = Field(default=1_000_000, ge=0)
    currency: str = Field(default="PKR", min_length=3, max_length=3)
    timezone: str = "UTC"

    def pricing_policy(self):
        from ordering.pricing.policy import PricingPolicy

        return PricingPolicy(
            tax_rate=self.tax_rate,
            shipping_flat_fee=self.shipping_flat_fee,
            free_shipping_threshold=self.free_shipping_threshold,
            currency=self.currency,
        )


_ENV_FIELDS = {
    "STOREFRONT_TAX_RATE": "tax_rate",
    "STOREFRONT_SHIPPING_FEE": "shipping_flat_fee",
    "STOREFRONT_FREE_SHIPPING_THRESHOLD": "free_shipping_threshold",
    "STOREFRONT_CURRENCY": "currency",
    "STOREFRONT_TIMEZONE": "timezone",
}


def load_settings(environ=None) -> Settings:
    """Build ``Settings`` from ``STOREFRONT_*`` environment variables."""
    environ = os.environ if environ is None else environ
    values = {field: environ[var] for var, field in _ENV_FIELDS.items() if environ.get(var)}
    values["environment"] = environ.get("STOREFRONT_ENV") or get_environment()
    return Settings(**values)
