"""Order aggregate.

The Order is an aggregate root that owns its line items. Orders are
written exactly once, by a successful placement, and never change
afterwards: there is no editing, cancelling or deleting.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ims.domain.exceptions import NoItemsError
from ims.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class OrderItem:
    """Captures the price of a product at order-placement time.

    ``unit_price`` is a copy, not a reference: later price changes on the
    product never reach an existing order.
    """

    id: str
    order_id: str
    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for sales orders.

    Use the ``Order.place()`` factory for new orders — it enforces all
    invariants.  The repository reconstitutes persisted orders through
    ``__init__`` without re-validating.
    """

    id: str
    customer_document: str
    seller_name: str
    items: list[OrderItem]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        customer_document: str | None,
        seller_name: str | None,
        lines: list[tuple[str, Quantity, Money]],
    ) -> Order:
        """Create a new order from ``(product_id, quantity, unit_price)`` lines.

        Items keep the order of ``lines``.
        """
        if not lines:
            raise NoItemsError()

        order_id = uuid.uuid4().hex
        items = [
            OrderItem(
                id=uuid.uuid4().hex,
                order_id=order_id,
                product_id=product_id,
                quantity=quantity,
                unit_price=unit_price,
            )
            for product_id, quantity, unit_price in lines
        ]
        return Order(
            id=order_id,
            customer_document=(customer_document or "").strip(),
            seller_name=(seller_name or "").strip(),
            items=items,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result
