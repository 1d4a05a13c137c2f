"""Application service: List Stock Entries use case (query)."""

from __future__ import annotations

from ims.application.dto import StockEntryDTO
from ims.domain.exceptions import ProductNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork


class ListStockEntriesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> list[StockEntryDTO]:
        with self._uow:
            if self._uow.products.get_by_id(product_id) is None:
                raise ProductNotFoundError(product_id)
            entries = self._uow.stock_entries.list_for_product(product_id)
        return [StockEntryDTO.from_entry(entry) for entry in entries]
