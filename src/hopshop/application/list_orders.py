"""Application service: List Orders use case (query).

Backs the order board: orders filtered by status, by centre, or the
accepted orders assigned to one vendor, plus the per-status counts
shown on the filter tabs.
"""

from __future__ import annotations

from hopshop.application.dto import OrderSummaryDTO
from hopshop.domain.exceptions import ValidationError
from hopshop.domain.model.order import Order, OrderStatus
from hopshop.domain.repository.order_repository import OrderRepository

# Statuses the vendor board offers as filter tabs.
BOARD_STATUSES = (
    OrderStatus.ACCEPTED,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

_DISPLAY_NAMES = {OrderStatus.ACCEPTED: "Receive Order"}


def display_status(order: Order) -> str:
    return _DISPLAY_NAMES.get(order.status, order.status_text)


def to_summary(order: Order) -> OrderSummaryDTO:
    return OrderSummaryDTO(
        id=order.id,
        short_id=order.short_id,
        order_no=str(order.extra.get("orderNo") or order.short_id),
        centre=order.centre_name,
        centre_code=(order.centre.code if order.centre else None) or "",
        status=display_status(order),
        payment_status=order.payment_status,
        products=[item.product_name or "Unknown Product" for item in order.items],
        item_count=order.item_count,
        total=str(order.total),
    )


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        status: OrderStatus | None = None,
        centre_id: str | None = None,
        vendor_id: str | None = None,
        search: str = "",
    ) -> list[OrderSummaryDTO]:
        """List orders from exactly one source, then apply *search*.

        With no status, centre or vendor every order is listed.
        """
        sources = [s for s in (status, centre_id, vendor_id) if s is not None]
        if len(sources) > 1:
            raise ValidationError("Filter by status, centre or vendor, not several")

        if centre_id is not None:
            orders = self._order_repo.list_by_centre(centre_id)
        elif vendor_id is not None:
            orders = self._order_repo.list_accepted(vendor_id)
        else:
            orders = self._order_repo.list_by_status(status)

        return [to_summary(order) for order in orders if order.matches(search)]

    def counts(self) -> dict[str, int]:
        """Orders per board status; statuses with no orders count 0."""
        raw = self._order_repo.count_by_status()
        return {status.value: raw.get(status.value, 0) for status in BOARD_STATUSES}
