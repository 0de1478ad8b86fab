"""Engine and session factory setup.

PostgreSQL is the production target: row locks from ``FOR UPDATE`` and
``SKIP LOCKED`` do the serialization.  SQLite (local use and tests)
has no row locks, so every SQLite transaction is started with
``BEGIN IMMEDIATE``, which takes the database write lock up front and
makes concurrent writers queue instead of failing half-way.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from farmorders.infrastructure.persistence.orm import Base

SQLITE_BUSY_TIMEOUT_SECONDS = 30


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"timeout": SQLITE_BUSY_TIMEOUT_SECONDS, "check_same_thread": False},
        )
        _use_immediate_transactions(engine)
        return engine
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _use_immediate_transactions(engine: Engine) -> None:
    # pysqlite's own transaction handling defers BEGIN and breaks
    # SAVEPOINT; take over and emit BEGIN ourselves.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")
