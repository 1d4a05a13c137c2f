"""Domain events.

Events are immutable facts that already happened. They are published
after the transaction that produced them commits.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ims.domain.model.order import Order


@dataclass(frozen=True)
class OrderCreatedItem:
    product_id: str
    quantity: int
    unit_price: str


@dataclass(frozen=True)
class OrderCreated:
    """A new order was placed and its stock deducted."""

    topic = "orders.created"

    order_id: str
    customer_document: str
    seller_name: str
    created_at: datetime
    items: tuple[OrderCreatedItem, ...]

    @staticmethod
    def from_order(order: Order) -> OrderCreated:
        return OrderCreated(
            order_id=order.id,
            customer_document=order.customer_document,
            seller_name=order.seller_name,
            created_at=order.created_at,
            items=tuple(
                OrderCreatedItem(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                )
                for item in order.items
            ),
        )

    def to_payload(self) -> dict:
        return {
            "order_id": self.order_id,
            "customer_document": self.customer_document,
            "seller_name": self.seller_name,
            "created_at": self.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                }
                for item in self.items
            ],
        }
