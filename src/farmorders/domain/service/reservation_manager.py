"""Domain service: Reservation Manager.

Attaches a time-to-live hold to every new order and finds the holds that
ran out.  It never touches stock itself: expired holds go to the
RestockReconciler, which releases them in the same transaction that puts
the stock back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from contextlib import AbstractContextManager
from datetime import datetime, timedelta

from farmorders.domain.exceptions import PersistenceError, ValidationError
from farmorders.domain.model.reservation import DEFAULT_RESERVATION_TTL, Reservation
from farmorders.domain.repository.reservation_repository import ReservationRepository

logger = logging.getLogger(__name__)


class ReservationManager:

    def __init__(
        self,
        reservations: ReservationRepository,
        ttl: timedelta = DEFAULT_RESERVATION_TTL,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValidationError("Reservation TTL must be positive")
        self._reservations = reservations
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def open(self, order_id: int, now: datetime) -> Reservation:
        """Create the order's hold, or refresh it if one already exists."""
        reservation = self._reservations.get_by_order_id(order_id)
        if reservation is None:
            reservation = Reservation.open(order_id, now, self._ttl)
        else:
            reservation.reopen(now, self._ttl)
        self._reservations.save(reservation)
        return reservation

    def try_open(
        self,
        order_id: int,
        now: datetime,
        savepoint: Callable[[], AbstractContextManager[None]],
    ) -> Reservation | None:
        """``open()`` as a soft step inside *savepoint*.

        A storage failure here only weakens the expiry safety net, so it
        is logged and the purchase goes ahead.
        """
        try:
            with savepoint():
                return self.open(order_id, now)
        except PersistenceError:
            logger.warning(
                "could not record reservation, order has no expiry hold",
                extra={"order_id": order_id},
                exc_info=True,
            )
            return None

    def sweep_expired(self, now: datetime, limit: int = 100) -> list[Reservation]:
        """Expired, unreleased holds of orders that are still unpaid."""
        return self._reservations.list_expired(now, limit)

    def claim_next_expired(
        self, now: datetime, exclude: Collection[int] = ()
    ) -> Reservation | None:
        return self._reservations.claim_next_expired(now, exclude)
