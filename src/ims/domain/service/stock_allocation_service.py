"""Domain service: Stock Allocation.

This service owns every stock movement: deducting stock for an order
and adding stock for a receipt. It lives in the domain layer because
"stock never goes negative" is a core business rule, not orchestration.

The two-phase approach (validate-then-mutate) ensures we never leave
stock partially deducted if one line fails validation. All lines are
checked against the stock as loaded, before any deduction happens.
"""

from __future__ import annotations

from collections.abc import Sequence

from ims.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ProductsNotFoundError,
)
from ims.domain.model.product import Product
from ims.domain.model.stock_entry import StockEntry
from ims.domain.model.value_objects import Quantity
from ims.domain.repository.product_repository import ProductRepository

Line = tuple[str, Quantity]


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def load_products(self, product_ids: Sequence[str]) -> dict[str, Product]:
        """Batch-load the distinct products referenced by an order.

        Raises ProductsNotFoundError if any of them does not exist.
        """
        wanted = list(dict.fromkeys(product_ids))
        products = {p.id: p for p in self._product_repo.get_many(wanted)}
        if len(products) < len(wanted):
            raise ProductsNotFoundError([pid for pid in wanted if pid not in products])
        return products

    @staticmethod
    def check_availability(products: dict[str, Product], lines: Sequence[Line]) -> None:
        """Validate every line against the loaded stock snapshot.

        Lines are checked one by one in input order and the first short
        line is reported. A product spread over several lines is then
        checked once more against its summed demand.
        """
        for product_id, qty in lines:
            product = products[product_id]
            if not product.can_supply(qty.value):
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.name,
                    available=product.stock,
                    required=qty.value,
                )

        demand: dict[str, int] = {}
        for product_id, qty in lines:
            demand[product_id] = demand.get(product_id, 0) + qty.value
        for product_id, required in demand.items():
            product = products[product_id]
            if not product.can_supply(required):
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.name,
                    available=product.stock,
                    required=required,
                )

    def allocate(self, lines: Sequence[Line]) -> dict[str, Product]:
        """Deduct stock for every line and stage the product updates.

          Phase 1 — load and validate: every product exists and has
                    enough stock.  Fails before any mutation.
          Phase 2 — mutate and persist: ``deduct()`` on each product,
                    then one version-guarded update per product.

        Returns the loaded products (post-deduction) keyed by ID.
        """
        # Phase 1: load all products and validate
        products = self.load_products([product_id for product_id, _ in lines])
        self.check_availability(products, lines)

        # Phase 2: mutate and persist
        for product_id, qty in lines:
            products[product_id].deduct(qty)
        for product in products.values():
            self._product_repo.update(product)
        return products

    def receive(
        self, product_id: str, quantity: int, invoice_number: str
    ) -> tuple[Product, StockEntry]:
        """Add received units to a product's stock and stage the update.

        Checks run in a fixed order: product exists, quantity is positive,
        invoice number is present. The returned entry is not persisted.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        qty = Quantity(quantity)
        entry = StockEntry.record(product.id, qty, invoice_number)

        product.receive(qty)
        self._product_repo.update(product)
        return product, entry
