"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Stock changes made at checkout go through the
conditional operations below rather than ``save()``, so concurrent
checkouts cannot both take the last unit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_title(self, title: str) -> Product | None:
        """Return a product by its title (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def set_stock(self, product_id: str, quantity: int) -> bool:
        """Overwrite the stock level; False if the product is missing.

        ``save()`` leaves the stored stock of an existing product alone,
        so an admin edit made from a stale copy cannot undo a checkout.
        """

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically take *quantity* units if at least that many remain.

        Returns False, leaving stock unchanged, when the product is
        missing or has fewer than *quantity* units.
        """

    @abstractmethod
    def restock(self, product_id: str, quantity: int) -> None:
        """Atomically put *quantity* units back into stock."""
