"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is received and sold, products are added and
removed from the catalog.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from ims.domain.exceptions import InsufficientStockError, ValidationError
from ims.domain.model.value_objects import Money, Quantity


def _require_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Product name is required")
    return name.strip()


def _require_price(price: Money) -> Money:
    if price.amount <= 0:
        raise ValidationError("Product price must be greater than zero")
    return price


@dataclass
class Product:
    """A product in the catalog, together with its sellable stock.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is strictly positive

    ``version`` is the optimistic concurrency token. The aggregate never
    changes it; the repository compares it on update and bumps it.
    """

    id: str
    name: str
    price: Money
    description: str = ""
    stock: int = 0
    version: int = 1

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(name: str, price: Money, description: str | None = None) -> Product:
        return Product(
            id=uuid.uuid4().hex,
            name=_require_name(name),
            price=_require_price(price),
            description=(description or "").strip(),
        )

    # --- Catalog edits --------------------------------------------------------

    def update_details(
        self, name: str, price: Money, description: str | None = None
    ) -> None:
        """Change name, description and price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.name = _require_name(name)
        self.price = _require_price(price)
        self.description = (description or "").strip()

    # --- Stock movements ------------------------------------------------------

    def receive(self, quantity: Quantity) -> None:
        """Add received units to stock."""
        self.stock += quantity.value

    def can_supply(self, quantity: int) -> bool:
        return self.stock >= quantity

    def deduct(self, quantity: Quantity) -> None:
        """Remove sold units from stock.

        Raises InsufficientStockError rather than letting stock go negative.
        """
        if not self.can_supply(quantity.value):
            raise InsufficientStockError(
                product_id=self.id,
                product_name=self.name,
                available=self.stock,
                required=quantity.value,
            )
        self.stock -= quantity.value
