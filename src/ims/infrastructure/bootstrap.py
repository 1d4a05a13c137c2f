"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from ims.application.event_publisher import EventPublisher
from ims.infrastructure.config import Settings
from ims.infrastructure.messaging.publishers import (
    BackgroundEventPublisher,
    JsonLinesEventPublisher,
    NullEventPublisher,
)
from ims.infrastructure.persistence.sql_unit_of_work import (
    SqlAlchemyUnitOfWork,
    build_engine,
)
from ims.infrastructure.persistence.tables import create_schema


@dataclass
class Container:
    settings: Settings
    engine: Engine
    publisher: EventPublisher

    def unit_of_work(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self.engine)

    def close(self) -> None:
        self.publisher.close()
        self.engine.dispose()


def event_publisher(settings: Settings) -> EventPublisher:
    if settings.event_sink == "jsonl":
        return BackgroundEventPublisher(JsonLinesEventPublisher(settings.event_log_path))
    return NullEventPublisher()


def build_container(settings: Settings | None = None) -> Container:
    settings = settings or Settings()
    engine = build_engine(settings.database_url, echo=settings.database_echo)
    create_schema(engine)
    return Container(
        settings=settings,
        engine=engine,
        publisher=event_publisher(settings),
    )
