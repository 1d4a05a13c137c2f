"""Application service: Get Order use case (query)."""

from __future__ import annotations

from ims.application.dto import OrderDTO
from ims.domain.exceptions import OrderNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork


class GetOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return OrderDTO.from_order(order)
