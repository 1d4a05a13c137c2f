"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from ims.application.dto import ProductDTO
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money
from ims.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, price: str, description: str | None = None) -> ProductDTO:
        """Add a new product to the catalog. Stock starts at zero."""
        product = Product.create(name=name, price=Money.of(price), description=description)

        with self._uow:
            self._uow.products.add(product)
            self._uow.commit()

        logger.info("product.added", product_id=product.id, name=product.name)
        return ProductDTO.from_product(product)
