"""Application service: Sweep Expired Reservations use case.

Finds orders whose reservation ran out before they were paid, puts
their stock back and cancels them.

Each reservation is handled in its own transaction: claim it (locked,
skipping rows another worker already holds), expire it, commit.  A crash
or failure part-way leaves that reservation unreleased, so the next pass
picks it up again.  Within a single pass a failing order is skipped so
one bad row cannot stall the rest.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from farmorders.application.clock import Clock, utcnow
from farmorders.application.dto import SweepReport
from farmorders.domain.exceptions import DomainException
from farmorders.domain.model.reservation import DEFAULT_RESERVATION_TTL, Reservation
from farmorders.domain.repository.unit_of_work import UnitOfWork
from farmorders.domain.service.reservation_manager import ReservationManager
from farmorders.domain.service.restock_reconciler import (
    ReconcileOutcome,
    RestockReconciler,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class SweepExpiredReservationsHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        reservation_ttl: timedelta = DEFAULT_RESERVATION_TTL,
        batch_size: int = DEFAULT_BATCH_SIZE,
        clock: Clock = utcnow,
    ) -> None:
        self._uow = uow
        self._reservation_ttl = reservation_ttl
        self._batch_size = batch_size
        self._clock = clock

    def handle(self) -> SweepReport:
        now = self._clock()
        report = SweepReport()
        skipped: set[int] = set()

        while len(report.expired) + len(report.failed) < self._batch_size:
            order_id: int | None = None
            try:
                with self._uow as uow:
                    manager = ReservationManager(uow.reservations, self._reservation_ttl)
                    reservation = manager.claim_next_expired(now, exclude=skipped)
                    if reservation is None:
                        break
                    order_id = reservation.order_id
                    outcome = RestockReconciler(uow).expire(order_id)
                    uow.commit()
            except DomainException:
                if order_id is None:
                    raise
                logger.exception(
                    "failed to expire reservation, will retry next sweep",
                    extra={"order_id": order_id},
                )
                report.failed.append(order_id)
                skipped.add(order_id)
                continue

            skipped.add(order_id)
            if outcome == ReconcileOutcome.RESTOCKED:
                report.expired.append(order_id)

        if report.expired or report.failed:
            logger.info(
                "reservation sweep finished",
                extra={"expired": len(report.expired), "failed": len(report.failed)},
            )
        return report

    def preview(self, limit: int | None = None) -> list[Reservation]:
        """Expired reservations a sweep would act on right now (read only)."""
        with self._uow as uow:
            manager = ReservationManager(uow.reservations, self._reservation_ttl)
            return manager.sweep_expired(self._clock(), limit or self._batch_size)
