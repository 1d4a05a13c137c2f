"""Abstract repository for Order aggregate (append-only)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order and all of its items."""
