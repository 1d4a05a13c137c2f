"""Application service: Update Product use case."""

from __future__ import annotations

import structlog

from ims.application.concurrency import DEFAULT_MAX_RETRIES, retry_on_conflict
from ims.application.dto import ProductDTO
from ims.domain.exceptions import ProductNotFoundError
from ims.domain.model.value_objects import Money
from ims.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(
        self, uow: UnitOfWork, max_conflict_retries: int = DEFAULT_MAX_RETRIES
    ) -> None:
        self._uow = uow
        self._max_conflict_retries = max_conflict_retries

    def handle(
        self,
        product_id: str,
        name: str,
        price: str,
        description: str | None = None,
    ) -> ProductDTO:
        """Update a product's name, description and price.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time. Stock is left untouched, so a
        receipt or order committed in between is re-read and kept.
        """
        new_price = Money.of(price)
        dto = retry_on_conflict(
            lambda: self._update(product_id, name, new_price, description),
            max_retries=self._max_conflict_retries,
        )
        logger.info("product.updated", product_id=dto.id, price=dto.price)
        return dto

    def _update(
        self, product_id: str, name: str, price: Money, description: str | None
    ) -> ProductDTO:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            product.update_details(name=name, price=price, description=description)
            self._uow.products.update(product)
            self._uow.commit()
        return ProductDTO.from_product(product)
