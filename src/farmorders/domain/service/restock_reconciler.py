"""Domain service: Restock Reconciler.

The compensating action for an order that will not go ahead.  It returns
each line's quantity to the ledger exactly once, no matter how many
times or from how many places it is invoked.

The reservation's ``released`` flag is the single serialization point:
it is flipped with a compare-and-set before any stock moves, and the
flip and the restores share one transaction.  If a restore fails the
transaction is abandoned, the flag goes back to False and the next
sweep retries.
"""

from __future__ import annotations

import logging
from enum import Enum

from farmorders.domain.exceptions import EntityNotFoundError
from farmorders.domain.model.order import Order
from farmorders.domain.model.reservation import Reservation
from farmorders.domain.repository.unit_of_work import UnitOfWork
from farmorders.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = logging.getLogger(__name__)


class ReconcileOutcome(Enum):
    RESTOCKED = "restocked"
    ALREADY_RELEASED = "already_released"
    SKIPPED = "skipped"


class RestockReconciler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def reconcile(self, order_id: int) -> ReconcileOutcome:
        """Restore the order's stock unless that already happened."""
        order = self._uow.orders.get_by_id(order_id, for_update=True)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self._reconcile(order)

    def expire(self, order_id: int) -> ReconcileOutcome:
        """Reconcile a lapsed reservation and cancel its order.

        Only orders still waiting for payment are cancelled; anything
        else is left alone.
        """
        order = self._uow.orders.get_by_id(order_id, for_update=True)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if not order.is_awaiting_payment:
            logger.info(
                "skipping expiry, order no longer awaiting payment",
                extra={"order_id": order_id, "status": order.status.value},
            )
            return ReconcileOutcome.SKIPPED

        outcome = self._reconcile(order)
        order.expire()
        self._uow.orders.save(order)
        return outcome

    # --- Internal helpers -----------------------------------------------------

    def _reconcile(self, order: Order) -> ReconcileOutcome:
        reservations = self._uow.reservations

        if not reservations.mark_released(order.id):
            if reservations.get_by_order_id(order.id) is not None:
                logger.info(
                    "reservation already released, nothing to restock",
                    extra={"order_id": order.id},
                )
                return ReconcileOutcome.ALREADY_RELEASED
            # The hold was never recorded.  Record it as released so any
            # later attempt becomes a no-op.
            logger.warning(
                "order has no reservation record, restocking anyway",
                extra={"order_id": order.id},
            )
            reservations.save(
                Reservation(
                    order_id=order.id,
                    expires_at=order.created_at,
                    released=True,
                )
            )

        InventoryReservationService(self._uow.ledger).restore_lines(order.items)
        logger.info(
            "restocked order",
            extra={"order_id": order.id, "lines": len(order.items)},
        )
        return ReconcileOutcome.RESTOCKED
