"""Shopping cart value: an ordered set of line items keyed by product variant.

The cart is an explicit, immutable value owned by the caller (a session, a
request, a browser's local storage). It is never held in module state; every
change goes through ``ordering.cart.engine.apply`` which returns a new cart.

``item_count`` and ``subtotal`` are computed from the lines on access and are
never stored, so they cannot drift from the lines they summarise.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from shared.exceptions import InvalidQuantity


class VariantKey(BaseModel):
    """Identity of one purchasable configuration: product + size + color."""

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(min_length=1)
    size: str = ""
    color: str = ""

    def __str__(self) -> str:
        return f"{self.product_id}-{self.size}-{self.color}"


class CartLine(BaseModel):
    """One variant in the cart.

    ``unit_price`` is the catalogue price (minor units) captured when the line
    was first added. ``name``, ``image`` and ``category`` are display metadata
    and take no part in pricing.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(min_length=1)
    size: str = ""
    color: str = ""
    unit_price: int = Field(ge=0)
    quantity: int
    name: str = ""
    image: str | None = None
    category: str | None = None

    @property
    def variant_key(self) -> VariantKey:
        return VariantKey(product_id=self.product_id, size=self.size, color=self.color)

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLine":
        return self.model_copy(update={"quantity": quantity})


def merge_line(lines, line: CartLine) -> tuple[CartLine, ...]:
    """Add ``line`` to ``lines``, folding it into an existing line with the same key.

    On a merge only the quantity grows; the existing line keeps its
    ``unit_price`` and metadata (first-seen price wins).
    """
    key = line.variant_key
    merged = []
    found = False
    for existing in lines:
        if not found and existing.variant_key == key:
            existing = existing.with_quantity(existing.quantity + line.quantity)
            found = True
        merged.append(existing)
    if not found:
        merged.append(line)
    return tuple(merged)


class Cart(BaseModel):
    model_config = ConfigDict(frozen=True)

    lines: tuple[CartLine, ...] = ()

    @model_validator(mode="after")
    def _lines_must_be_unique_and_positive(self):
        seen = set()
        for line in self.lines:
            if line.quantity < 1:
                raise InvalidQuantity({"quantity": [f"Quantity for {line.variant_key} must be at least 1"]})
            if line.variant_key in seen:
                raise ValueError(f"Duplicate cart line for variant {line.variant_key}")
            seen.add(line.variant_key)
        return self

    # -------------------------------------------------------------------
    # Derived totals
    # -------------------------------------------------------------------
    @computed_field
    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @computed_field
    @property
    def subtotal(self) -> int:
        return sum(line.line_total for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find(self, variant_key: VariantKey) -> CartLine | None:
        return next((line for line in self.lines if line.variant_key == variant_key), None)

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def empty(cls) -> "Cart":
        return cls()

    @classmethod
    def from_lines(cls, lines) -> "Cart":
        """Build a cart from lines that may repeat a variant (e.g. restored storage)."""
        merged: tuple[CartLine, ...] = ()
        for line in lines:
            merged = merge_line(merged, line)
        return cls(lines=merged)
