"""Application service: Receive Stock use case."""

from __future__ import annotations

import structlog

from ims.application.concurrency import DEFAULT_MAX_RETRIES, retry_on_conflict
from ims.application.dto import StockEntryDTO
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.stock_allocation_service import StockAllocationService

logger = structlog.get_logger(__name__)


class ReceiveStockHandler:

    def __init__(
        self, uow: UnitOfWork, max_conflict_retries: int = DEFAULT_MAX_RETRIES
    ) -> None:
        self._uow = uow
        self._max_conflict_retries = max_conflict_retries

    def handle(self, product_id: str, quantity: int, invoice_number: str) -> StockEntryDTO:
        """Record a receipt of goods and raise the product's stock.

        The ledger entry and the stock increment are committed together.
        """
        dto = retry_on_conflict(
            lambda: self._receive(product_id, quantity, invoice_number),
            max_retries=self._max_conflict_retries,
        )
        logger.info(
            "stock.received",
            product_id=dto.product_id,
            quantity=dto.quantity,
            invoice_number=dto.invoice_number,
            stock=dto.stock_after,
        )
        return dto

    def _receive(self, product_id: str, quantity: int, invoice_number: str) -> StockEntryDTO:
        with self._uow:
            allocation = StockAllocationService(self._uow.products)
            product, entry = allocation.receive(product_id, quantity, invoice_number)
            self._uow.stock_entries.add(entry)
            self._uow.commit()
        return StockEntryDTO.from_entry(entry, stock_after=product.stock)
