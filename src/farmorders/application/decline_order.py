"""Application service: Decline Order use case (seller).

The seller may call off a pending or confirmed order, e.g. when the
harvest falls through.  Stock goes back through the reconciler exactly
as for a buyer cancellation.
"""

from __future__ import annotations

import logging

from farmorders.domain.exceptions import EntityNotFoundError, ForbiddenError
from farmorders.domain.model.principal import Principal
from farmorders.domain.repository.unit_of_work import UnitOfWork
from farmorders.domain.service.restock_reconciler import (
    ReconcileOutcome,
    RestockReconciler,
)

logger = logging.getLogger(__name__)


class DeclineOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, principal: Principal) -> ReconcileOutcome:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if not principal.is_seller(order.seller_id):
                raise ForbiddenError(f"Only the seller can decline order #{order_id}")

            # Validate the transition before any stock moves.
            order.cancel()
            outcome = RestockReconciler(uow).reconcile(order_id)
            uow.orders.save(order)
            uow.commit()

        logger.info(
            "order declined by seller",
            extra={"order_id": order_id, "reconcile": outcome.value},
        )
        return outcome
