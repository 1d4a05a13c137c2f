"""Application service: Delete Product use case."""

from __future__ import annotations

import structlog

from ims.domain.exceptions import ProductNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> None:
        """Remove a product from the catalog.

        Orders that already reference it keep their items and prices.
        """
        with self._uow:
            if self._uow.products.get_by_id(product_id) is None:
                raise ProductNotFoundError(product_id)
            self._uow.products.delete(product_id)
            self._uow.commit()

        logger.info("product.deleted", product_id=product_id)
