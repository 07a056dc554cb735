"""Pricing policy and price breakdown value objects."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shared.money import VALID_CURRENCIES, to_decimal


class PricingPolicy(BaseModel):
    """Tax and shipping configuration applied to a cart.

    Amounts are integer minor units. ``tax_rate`` is a fraction (``0.16`` for
    16%); float input is converted through its decimal repr so ``0.16`` means
    exactly ``Decimal("0.16")``.
    """

    model_config = ConfigDict(frozen=True)

    tax_rate: Decimal = Field(ge=0, lt=1)
    shipping_flat_fee: int = Field(ge=0)
    free_shipping_threshold: int = Field(ge=0)
    currency: str = "PKR"

    @field_validator("tax_rate", mode="before")
    @classmethod
    def _rate_as_decimal(cls, value):
        if isinstance(value, (float, int, str)):
            return to_decimal(value)
        return value

    @field_validator("currency")
    @classmethod
    def _currency_must_be_supported(cls, value):
        if value not in VALID_CURRENCIES:
            raise ValueError(f"Unsupported currency: {value}")
        return value


class PriceBreakdown(BaseModel):
    """Derived ``subtotal + shipping_cost + tax_amount = total`` for a cart or order."""

    model_config = ConfigDict(frozen=True)

    subtotal: int = Field(ge=0)
    shipping_cost: int = Field(ge=0)
    tax_amount: int = Field(ge=0)
    total: int = Field(ge=0)

    @model_validator(mode="after")
    def _total_must_add_up(self):
        if self.total != self.subtotal + self.shipping_cost + self.tax_amount:
            raise ValueError("total must equal subtotal + shipping_cost + tax_amount")
        return self

    @property
    def free_shipping(self) -> bool:
        return self.shipping_cost == 0
