"""Abstract Unit of Work — the transactional boundary.

Everything done through the repositories inside one ``with uow:`` block
is committed together by ``commit()`` or not at all. Leaving the block
without committing (or through an exception) rolls back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.repository.order_repository import OrderRepository
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.stock_entry_repository import StockEntryRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    stock_entries: StockEntryRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Durably apply every change made since the block started."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes. Safe to call after a commit."""
