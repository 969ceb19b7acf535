"""Application service: Update Order Status use case.

Moves an order along the delivery flow. Only the status is sent to the
API; line items are left untouched.
"""

from __future__ import annotations

import logging

from hopshop.application.dto import OrderSummaryDTO
from hopshop.application.list_orders import to_summary
from hopshop.domain.exceptions import EntityNotFoundError, ValidationError
from hopshop.domain.model.order import OrderStatus
from hopshop.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, target: OrderStatus) -> OrderSummaryDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        previous = order.status_text
        if target is OrderStatus.OUT_FOR_DELIVERY:
            order.dispatch()
        elif target is OrderStatus.DELIVERED:
            order.deliver()
        else:
            raise ValidationError(f"Cannot move an order to {target.value}")

        self._order_repo.update_status(order)
        logger.info("Order %s: %s -> %s", order.id, previous, order.status_text)
        return to_summary(order)
