import pytest

from ims.infrastructure.persistence.sql_unit_of_work import (
    SqlAlchemyUnitOfWork,
    build_engine,
)
from ims.infrastructure.persistence.tables import create_schema


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'ims.db'}")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def uow(engine):
    return SqlAlchemyUnitOfWork(engine)
