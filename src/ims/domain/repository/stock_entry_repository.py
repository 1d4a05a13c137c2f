"""Abstract repository for the StockEntry ledger (append-only)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.stock_entry import StockEntry


class StockEntryRepository(ABC):

    @abstractmethod
    def add(self, entry: StockEntry) -> None:
        """Append a ledger entry."""

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[StockEntry]:
        """Return a product's entries, oldest first."""
