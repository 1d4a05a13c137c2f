"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in
the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from ims.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_many(self, product_ids: Iterable[str]) -> list[Product]:
        """Return every product whose ID is in ``product_ids`` (one batch read).

        Unknown IDs are silently skipped; callers compare counts.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by name."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Persist a new product."""

    @abstractmethod
    def update(self, product: Product) -> None:
        """Persist changes to an existing product.

        The write only succeeds if the stored version still equals
        ``product.version``; on success the version is bumped in place.
        Raises ConcurrencyConflictError otherwise.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product from the catalog."""
