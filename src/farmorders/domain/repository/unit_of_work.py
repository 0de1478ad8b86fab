"""Abstract Unit of Work — one atomic transaction across repositories.

Usage::

    with uow:
        ...
        uow.commit()

Leaving the block without ``commit()`` (normally or through an
exception) rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from farmorders.domain.repository.inventory_ledger import InventoryLedger
from farmorders.domain.repository.order_repository import OrderRepository
from farmorders.domain.repository.reservation_repository import ReservationRepository


class UnitOfWork(ABC):

    ledger: InventoryLedger
    orders: OrderRepository
    reservations: ReservationRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``__enter__`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  Harmless after ``commit()``."""

    @abstractmethod
    def savepoint(self) -> AbstractContextManager[None]:
        """Nested scope whose failure undoes only its own writes.

        Storage errors inside it surface as PersistenceError.
        """
