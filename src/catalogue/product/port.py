"""Catalogue port (abstract interface).

The ordering core reads products only when a line is added to a cart, to
snapshot its price and display metadata. The backing store is an external
collaborator; ``InMemoryCatalogue`` serves development and tests.
"""

from abc import ABC, abstractmethod

from catalogue.product.product import Product


class ProductNotFound(LookupError):
    pass


class CataloguePort(ABC):
    """Abstract catalogue read interface."""

    @abstractmethod
    def get_product(self, product_id: str) -> Product:
        """Return the product or raise ``ProductNotFound``."""
        ...

    @abstractmethod
    def list_products(self) -> list[Product]:
        ...


class InMemoryCatalogue(CataloguePort):
    """Catalogue held in a dict, keyed by product id."""

    def __init__(self, products=()) -> None:
        self._products: dict[str, Product] = {product.id: product for product in products}

    def add(self, product: Product) -> None:
        self._products[product.id] = product

    def get_product(self, product_id: str) -> Product:
        try:
            return self._products[product_id]
        except KeyError:
            raise ProductNotFound(product_id) from None

    def list_products(self) -> list[Product]:
        return list(self._products.values())
