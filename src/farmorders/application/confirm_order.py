"""Application service: Confirm Order use case (seller).

PENDING -> CONFIRMED.  Stock was already taken when the order was
placed, so this is a pure state transition; the reservation stays
unreleased so a later cancellation can still give the stock back.
Confirmed orders are never picked up by the expiry sweep.
"""

from __future__ import annotations

from farmorders.domain.exceptions import EntityNotFoundError, ForbiddenError
from farmorders.domain.model.principal import Principal
from farmorders.domain.repository.unit_of_work import UnitOfWork


class ConfirmOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, principal: Principal) -> None:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if not principal.is_seller(order.seller_id):
                raise ForbiddenError(f"Only the seller can confirm order #{order_id}")

            order.confirm()
            uow.orders.save(order)
            uow.commit()
