"""Abstract repository for order Reservations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection
from datetime import datetime

from farmorders.domain.model.reservation import Reservation


class ReservationRepository(ABC):

    @abstractmethod
    def get_by_order_id(self, order_id: int) -> Reservation | None:
        """Return the reservation of an order, or None."""

    @abstractmethod
    def save(self, reservation: Reservation) -> None:
        """Insert or update the single reservation of an order."""

    @abstractmethod
    def mark_released(self, order_id: int) -> bool:
        """Atomically flip ``released`` from False to True.

        Returns True only for the caller that performed the flip; False if
        the reservation was already released or does not exist.
        """

    @abstractmethod
    def list_expired(self, now: datetime, limit: int) -> list[Reservation]:
        """Expired, unreleased reservations of orders still awaiting payment."""

    @abstractmethod
    def claim_next_expired(
        self, now: datetime, exclude: Collection[int] = ()
    ) -> Reservation | None:
        """Lock and return one expired reservation no other worker holds.

        Same filter as ``list_expired``.  The lock is taken on the order
        row, the same first lock cancel and decline take; orders locked by
        a concurrent transaction are skipped rather than waited on.
        """
