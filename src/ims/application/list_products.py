"""Application service: List / Get Product use cases (queries)."""

from __future__ import annotations

from ims.application.dto import ProductDTO
from ims.domain.exceptions import ProductNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[ProductDTO]:
        with self._uow:
            products = self._uow.products.list_all()
        return [ProductDTO.from_product(p) for p in products]


class GetProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> ProductDTO:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return ProductDTO.from_product(product)
