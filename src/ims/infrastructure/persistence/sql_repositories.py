"""SQLAlchemy implementations of the domain repositories.

Each repository works on the connection of the unit of work that
created it, so everything it writes shares that unit's transaction.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Row, delete, insert, select, update
from sqlalchemy.engine import Connection

from ims.domain.exceptions import ConcurrencyConflictError
from ims.domain.model.order import Order, OrderItem
from ims.domain.model.product import Product
from ims.domain.model.stock_entry import StockEntry
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.order_repository import OrderRepository
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.stock_entry_repository import StockEntryRepository
from ims.infrastructure.persistence.tables import (
    order_items,
    orders,
    products,
    stock_entries,
)


def _utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _money(value) -> Money:
    return Money(Decimal(str(value)))


class SqlProductRepository(ProductRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._conn.execute(
            select(products).where(products.c.id == product_id)
        ).one_or_none()
        return self._to_domain(row) if row is not None else None

    def get_many(self, product_ids: Iterable[str]) -> list[Product]:
        ids = list(product_ids)
        if not ids:
            return []
        rows = self._conn.execute(select(products).where(products.c.id.in_(ids)))
        return [self._to_domain(row) for row in rows]

    def list_all(self) -> list[Product]:
        rows = self._conn.execute(select(products).order_by(products.c.name, products.c.id))
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> None:
        self._conn.execute(insert(products).values(**self._to_row(product)))

    def update(self, product: Product) -> None:
        values = self._to_row(product)
        values["version"] = product.version + 1
        del values["id"]

        result = self._conn.execute(
            update(products)
            .where(products.c.id == product.id)
            .where(products.c.version == product.version)
            .values(**values)
        )
        if result.rowcount != 1:
            raise ConcurrencyConflictError("Product", product.id)
        product.version += 1

    def delete(self, product_id: str) -> None:
        self._conn.execute(delete(products).where(products.c.id == product_id))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": product.price.amount,
            "stock": product.stock,
            "version": product.version,
        }

    @staticmethod
    def _to_domain(row: Row) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            price=_money(row.price),
            stock=row.stock,
            version=row.version,
        )


class SqlStockEntryRepository(StockEntryRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def add(self, entry: StockEntry) -> None:
        self._conn.execute(
            insert(stock_entries).values(
                id=entry.id,
                product_id=entry.product_id,
                quantity=entry.quantity.value,
                invoice_number=entry.invoice_number,
                created_at=entry.created_at,
            )
        )

    def list_for_product(self, product_id: str) -> list[StockEntry]:
        rows = self._conn.execute(
            select(stock_entries)
            .where(stock_entries.c.product_id == product_id)
            .order_by(stock_entries.c.created_at, stock_entries.c.id)
        )
        return [
            StockEntry(
                id=row.id,
                product_id=row.product_id,
                quantity=Quantity(row.quantity),
                invoice_number=row.invoice_number,
                created_at=_utc(row.created_at),
            )
            for row in rows
        ]


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._conn.execute(
            select(orders).where(orders.c.id == order_id)
        ).one_or_none()
        if row is None:
            return None

        item_rows = self._conn.execute(
            select(order_items)
            .where(order_items.c.order_id == order_id)
            .order_by(order_items.c.position)
        )
        items = [
            OrderItem(
                id=i.id,
                order_id=i.order_id,
                product_id=i.product_id,
                quantity=Quantity(i.quantity),
                unit_price=_money(i.unit_price),
            )
            for i in item_rows
        ]
        return Order(
            id=row.id,
            customer_document=row.customer_document,
            seller_name=row.seller_name,
            items=items,
            created_at=_utc(row.created_at),
        )

    def add(self, order: Order) -> None:
        self._conn.execute(
            insert(orders).values(
                id=order.id,
                customer_document=order.customer_document,
                seller_name=order.seller_name,
                created_at=order.created_at,
            )
        )
        self._conn.execute(
            insert(order_items),
            [
                {
                    "id": item.id,
                    "order_id": order.id,
                    "position": position,
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "unit_price": item.unit_price.amount,
                }
                for position, item in enumerate(order.items)
            ],
        )
