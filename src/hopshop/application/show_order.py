"""Application service: Show Order use case (query)."""

from __future__ import annotations

from hopshop.application.dto import OrderDTO, OrderLineItemDTO
from hopshop.domain.exceptions import EntityNotFoundError
from hopshop.domain.model.order import Order
from hopshop.domain.model.snapshot import OriginalQuantitySnapshot
from hopshop.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return to_dto(order)


def to_dto(
    order: Order, snapshot: OriginalQuantitySnapshot | None = None
) -> OrderDTO:
    """Map an order for display.

    Without a snapshot the order is its own original, as on the view
    screen.
    """
    return OrderDTO(
        id=order.id,
        short_id=order.short_id,
        centre=order.centre_name,
        status=order.status_text,
        editable=order.is_editable,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name or "Unknown Product",
                quantity=item.quantity.value,
                original_quantity=(
                    snapshot.quantity_of(item.product_id)
                    if snapshot is not None
                    else item.quantity.value
                ),
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        item_count=order.item_count,
        total=str(order.total),
    )
