"""Application service: Place Order use case.

This is the only place that coordinates stock deduction and order
creation. Both happen inside one unit of work, so an order is either
fully placed (stock deducted, order and items written) or not at all.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from ims.application.concurrency import DEFAULT_MAX_RETRIES, retry_on_conflict
from ims.application.dto import OrderDTO, OrderLineSpec
from ims.application.event_publisher import EventPublisher
from ims.domain.events import OrderCreated
from ims.domain.exceptions import InvalidQuantityError, NoItemsError
from ims.domain.model.order import Order
from ims.domain.model.value_objects import Quantity
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.stock_allocation_service import Line, StockAllocationService

logger = structlog.get_logger(__name__)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class PlaceOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        publisher: EventPublisher,
        max_conflict_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._uow = uow
        self._publisher = publisher
        self._max_conflict_retries = max_conflict_retries

    def handle(
        self,
        customer_document: str,
        seller_name: str,
        item_specs: Sequence[OrderLineSpec],
    ) -> OrderDTO:
        """Place a sales order.

        Steps:
        1. Reject empty orders and non-positive quantities (no DB access).
        2. Batch-load products; all must exist.
        3. Check every line against the loaded stock, then deduct.
        4. Build the Order with *current* prices (snapshot).
        5. Commit stock and order together; retry on version conflicts.
        6. Publish ``orders.created`` (best-effort, after commit).
        """
        if not item_specs:
            raise NoItemsError()
        if not all(_is_positive_int(spec.quantity) for spec in item_specs):
            raise InvalidQuantityError()

        lines: list[Line] = [
            (spec.product_id, Quantity(spec.quantity)) for spec in item_specs
        ]

        order, remaining_stock = retry_on_conflict(
            lambda: self._place(customer_document, seller_name, lines),
            max_retries=self._max_conflict_retries,
        )
        logger.info(
            "order.placed",
            order_id=order.id,
            lines=len(order.items),
            total=str(order.total),
        )

        self._notify(order)
        return OrderDTO.from_order(order, remaining_stock)

    def _place(
        self, customer_document: str, seller_name: str, lines: list[Line]
    ) -> tuple[Order, dict[str, int]]:
        with self._uow:
            allocation = StockAllocationService(self._uow.products)
            products = allocation.allocate(lines)

            order = Order.place(
                customer_document,
                seller_name,
                [
                    (product_id, qty, products[product_id].price)  # <-- price snapshot
                    for product_id, qty in lines
                ],
            )
            self._uow.orders.add(order)
            self._uow.commit()
        return order, {pid: p.stock for pid, p in products.items()}

    def _notify(self, order: Order) -> None:
        event = OrderCreated.from_order(order)
        try:
            self._publisher.publish(event.topic, event.to_payload())
        except Exception:
            # the order is committed; a broken sink must not turn it into a failure
            logger.exception("order.publish_failed", order_id=order.id, topic=event.topic)
