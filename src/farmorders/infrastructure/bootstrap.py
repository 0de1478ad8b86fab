"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from farmorders.infrastructure.config import Settings
from farmorders.infrastructure.notifications.logging_receipt_notifier import (
    LoggingReceiptNotifier,
)
from farmorders.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from farmorders.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def engine() -> Engine:
    db_engine = create_db_engine(settings().database_url)
    init_db(db_engine)
    return db_engine


@lru_cache(maxsize=1)
def session_factory() -> sessionmaker[Session]:
    return create_session_factory(engine())


def unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory())


def receipt_notifier() -> LoggingReceiptNotifier:
    return LoggingReceiptNotifier()


def reset() -> None:
    """Forget cached settings and connections (used when config changes)."""
    if engine.cache_info().currsize:
        engine().dispose()
    settings.cache_clear()
    engine.cache_clear()
    session_factory.cache_clear()
