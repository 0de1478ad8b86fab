"""ReceiptNotifier that writes the receipt summary to the log.

Stands in for the email/SMS collaborator in local runs.
"""

from __future__ import annotations

import logging

from farmorders.application.dto import OrderDTO
from farmorders.application.notifications import ReceiptNotifier

logger = logging.getLogger(__name__)


class LoggingReceiptNotifier(ReceiptNotifier):

    def send_receipt(self, order: OrderDTO) -> None:
        logger.info(
            "receipt issued",
            extra={
                "order_id": order.id,
                "buyer_id": order.buyer_id,
                "seller_id": order.seller_id,
                "total": order.total,
                "lines": [
                    f"{item.item_name} x{item.quantity} @ {item.unit_price}"
                    for item in order.items
                ],
            },
        )
