"""Product record as read from the catalogue store."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A catalogue product and its purchasable options.

    ``price`` and ``original_price`` are integer minor units. An empty
    ``sizes`` or ``colors`` list means the product has no such option.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    price: int = Field(ge=0)
    original_price: int | None = Field(default=None, ge=0)
    category: str | None = None
    sizes: tuple[str, ...] = ()
    colors: tuple[str, ...] = ()
    stock: int = Field(default=0, ge=0)
    sold: int = Field(default=0, ge=0)
    images: tuple[str, ...] = ()
    is_published: bool = True
    is_new_arrival: bool = False
    is_best_seller: bool = False
    created_at: datetime | None = None

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def primary_image(self) -> str | None:
        return self.images[0] if self.images else None
