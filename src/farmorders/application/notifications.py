"""Port for the receipt/notification collaborator.

Nothing in the order flow depends on a notification succeeding.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from farmorders.application.dto import OrderDTO


class ReceiptNotifier(ABC):

    @abstractmethod
    def send_receipt(self, order: OrderDTO) -> None:
        """Deliver a receipt for a freshly placed order."""
