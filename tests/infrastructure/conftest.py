"""SQLite fixtures for the persistence and CLI tests."""

from __future__ import annotations

import logging

import pytest

from farmorders.domain.model.listed_item import ListedItem
from farmorders.domain.model.value_objects import Money
from farmorders.infrastructure import bootstrap
from farmorders.infrastructure.logging_config import HANDLER_NAME
from farmorders.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from farmorders.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'farmorders.db'}"


@pytest.fixture
def engine(database_url):
    db_engine = create_db_engine(database_url)
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def make_uow(session_factory):
    def _make() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)
    return _make


@pytest.fixture
def seeded(make_uow):
    """Tomatoes and kale from farmer-a, maize from farmer-b; 10 of each."""
    with make_uow() as uow:
        for item in (
            ListedItem(id="1", seller_id="farmer-a", name="Tomatoes", unit_price=Money.of("120.00"), quantity_available=10),
            ListedItem(id="2", seller_id="farmer-a", name="Kale", unit_price=Money.of("80.00"), quantity_available=10),
            ListedItem(id="3", seller_id="farmer-b", name="Maize", unit_price=Money.of("60.00"), quantity_available=10),
        ):
            uow.ledger.save(item)
        uow.commit()
    return make_uow


@pytest.fixture
def cli_env(database_url, monkeypatch):
    """Point the composition root at a fresh database for CLI runs."""
    monkeypatch.setenv("FARMORDERS_DATABASE_URL", database_url)
    monkeypatch.setenv("FARMORDERS_LOG_FORMAT", "text")
    monkeypatch.setenv("FARMORDERS_LOG_LEVEL", "WARNING")
    bootstrap.reset()
    yield
    bootstrap.reset()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
