"""SQLAlchemy implementation of UnitOfWork.

One Session per ``with`` block.  Every SQLAlchemy error that escapes the
block, a savepoint or ``commit()`` is logged with its detail and
re-raised as a generic PersistenceError after the rollback.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from farmorders.domain.exceptions import PersistenceError
from farmorders.domain.repository.unit_of_work import UnitOfWork
from farmorders.infrastructure.persistence.sqlalchemy_inventory_ledger import (
    SqlAlchemyInventoryLedger,
)
from farmorders.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)
from farmorders.infrastructure.persistence.sqlalchemy_reservation_repository import (
    SqlAlchemyReservationRepository,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.ledger = SqlAlchemyInventoryLedger(self._session)
        self.orders = SqlAlchemyOrderRepository(self._session)
        self.reservations = SqlAlchemyReservationRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self.session.close()
            self._session = None
        if isinstance(exc, SQLAlchemyError):
            logger.error("transaction rolled back", exc_info=(exc_type, exc, tb))
            raise PersistenceError() from exc

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work used outside of its 'with' block")
        return self._session

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("commit failed, transaction rolled back", exc_info=True)
            raise PersistenceError() from exc

    def rollback(self) -> None:
        self.session.rollback()

    @contextmanager
    def savepoint(self) -> Iterator[None]:
        nested = self.session.begin_nested()
        try:
            yield
        except SQLAlchemyError as exc:
            nested.rollback()
            logger.error("savepoint rolled back", exc_info=True)
            raise PersistenceError() from exc
        except BaseException:
            nested.rollback()
            raise
        else:
            nested.commit()
