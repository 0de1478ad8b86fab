"""Application service: Cancel Order use case (buyer).

A buyer may cancel their own order while it is still pending.  The
restock and the status change happen in one transaction, and the
reconciler's released flag guarantees the stock comes back only once
even if the expiry sweep is working on the same order.
"""

from __future__ import annotations

import logging

from farmorders.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidStateError,
)
from farmorders.domain.model.order import OrderStatus
from farmorders.domain.repository.unit_of_work import UnitOfWork
from farmorders.domain.service.restock_reconciler import (
    ReconcileOutcome,
    RestockReconciler,
)

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, buyer_id: str) -> ReconcileOutcome:
        """Cancel and restock; the outcome says whether stock moved now."""
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if order.buyer_id != buyer_id:
                raise ForbiddenError(f"Order #{order_id} does not belong to you")
            if order.status != OrderStatus.PENDING:
                raise InvalidStateError("Only pending orders can be cancelled")

            outcome = RestockReconciler(uow).reconcile(order_id)
            order.cancel()
            uow.orders.save(order)
            uow.commit()

        logger.info(
            "order cancelled by buyer",
            extra={"order_id": order_id, "reconcile": outcome.value},
        )
        return outcome
