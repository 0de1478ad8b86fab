"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from farmorders.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        """Return an order by its ID, or None if not found.

        ``for_update`` locks the order row for the rest of the transaction.
        """

    @abstractmethod
    def list_for_buyer(self, buyer_id: str) -> list[Order]:
        """Return a buyer's orders, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new order with its line items, or an updated header.

        New orders get their ``id`` assigned here.
        """
