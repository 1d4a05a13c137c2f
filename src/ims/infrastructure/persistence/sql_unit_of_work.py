"""SQLAlchemy Unit of Work: one connection and one transaction per ``with`` block."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine, RootTransaction
from sqlalchemy.engine.url import make_url

from ims.domain.repository.unit_of_work import UnitOfWork
from ims.infrastructure.persistence.sql_repositories import (
    SqlOrderRepository,
    SqlProductRepository,
    SqlStockEntryRepository,
)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite files get their directory and foreign keys."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, echo=echo, pool_pre_ping=True)

    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=echo, connect_args={"timeout": 30})

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Not thread-safe: give each concurrent caller its own instance."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._connection = self._engine.connect()
        self._transaction = self._connection.begin()
        self.products = SqlProductRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)
        self.stock_entries = SqlStockEntryRepository(self._connection)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            if self._connection is not None:
                self._connection.close()
            self._connection = None
            self._transaction = None

    def commit(self) -> None:
        self._transaction.commit()

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            self._transaction.rollback()
