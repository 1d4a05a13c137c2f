"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ims.domain.model.order import Order
from ims.domain.model.product import Product
from ims.domain.model.stock_entry import StockEntry


@dataclass(frozen=True)
class OrderLineSpec:
    """Input: one requested line (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    quantity: int
    unit_price: str  # fixed-point, e.g. "100.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_document: str
    seller_name: str
    items: list[OrderItemDTO]
    total: str
    created_at: str
    # product_id -> stock left after placement; empty when read back later
    remaining_stock: dict[str, int] = field(default_factory=dict)

    @staticmethod
    def from_order(order: Order, remaining_stock: dict[str, int] | None = None) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            customer_document=order.customer_document,
            seller_name=order.seller_name,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            remaining_stock=dict(remaining_stock or {}),
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str
    stock: int

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            price=str(product.price),
            stock=product.stock,
        )


@dataclass(frozen=True)
class StockEntryDTO:
    id: str
    product_id: str
    quantity: int
    invoice_number: str
    created_at: str
    stock_after: int | None = None  # only set right after a receipt

    @staticmethod
    def from_entry(entry: StockEntry, stock_after: int | None = None) -> StockEntryDTO:
        return StockEntryDTO(
            id=entry.id,
            product_id=entry.product_id,
            quantity=entry.quantity.value,
            invoice_number=entry.invoice_number,
            created_at=entry.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            stock_after=stock_after,
        )
