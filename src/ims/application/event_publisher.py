"""Port for the fire-and-forget event sink."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EventPublisher(ABC):
    """One-way channel to the outside world.

    ``publish`` has no return value and must never raise: delivery is
    best-effort and at-most-once, and never part of a transaction.
    """

    @abstractmethod
    def publish(self, topic: str, payload: dict) -> None:
        """Hand ``payload`` to the sink under ``topic``."""

    def close(self) -> None:
        """Release sink resources. Default: nothing to release."""
