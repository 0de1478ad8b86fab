"""Application service: Complete Order use case (seller)."""

from __future__ import annotations

from farmorders.domain.exceptions import EntityNotFoundError, ForbiddenError
from farmorders.domain.model.principal import Principal
from farmorders.domain.repository.unit_of_work import UnitOfWork


class CompleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, principal: Principal) -> None:
        """CONFIRMED -> COMPLETED once the goods have been handed over."""
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if not principal.is_seller(order.seller_id):
                raise ForbiddenError(f"Only the seller can complete order #{order_id}")

            order.complete()
            uow.orders.save(order)
            uow.commit()
