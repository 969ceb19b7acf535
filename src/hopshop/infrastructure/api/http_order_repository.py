"""REST implementation of OrderRepository.

Orders come back wrapped as ``{"order": {...}}`` with each product
populated (``_id``, ``name``, ``price``). Saving PUTs the full order
back; the server replaces its product list wholesale.
"""

from __future__ import annotations

from typing import Any

from hopshop.domain.exceptions import ValidationError
from hopshop.domain.model.order import Centre, Order, OrderLineItem, OrderStatus
from hopshop.domain.model.value_objects import Money, Quantity
from hopshop.domain.repository.order_repository import OrderRepository
from hopshop.infrastructure.api.client import ApiClient, ApiError
from hopshop.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

# Fields mapped onto the aggregate; everything else rides along in ``extra``.
_MODELLED_FIELDS = ("_id", "id", "status", "products")
_MODELLED_LINE_FIELDS = ("product", "quantity")
_MODELLED_PRODUCT_FIELDS = ("_id", "id", "name", "price")


class HttpOrderRepository(OrderRepository):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        try:
            body = self._client.get(f"/api/orders/{order_id}")
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise
        raw = body.get("order") if isinstance(body, dict) else None
        if raw is None:
            return None
        return self._to_domain(raw)

    def save(self, order: Order) -> None:
        self._client.put(f"/api/orders/{order.id}", self._to_raw(order))

    def list_by_status(self, status: OrderStatus | None = None) -> list[Order]:
        if status is None:
            body = self._client.get("/api/orders/all")
        else:
            body = self._client.get(f"/api/orders/status/{status.value}")
        return [self._to_domain(raw) for raw in _order_list(body)]

    def list_by_centre(self, centre_id: str) -> list[Order]:
        body = self._client.get(f"/api/orders/centre/{centre_id}")
        return [self._to_domain(raw) for raw in _order_list(body)]

    def list_accepted(self, vendor_id: str) -> list[Order]:
        body = self._client.get(f"/api/orders/accepted/{vendor_id}")
        # Each entry is an assignment record with the order under "orderId".
        orders = []
        for entry in _order_list(body):
            raw = entry.get("orderId") if isinstance(entry, dict) else None
            if not isinstance(raw, dict):
                logger.warning("Skipping accepted entry without a populated order")
                continue
            orders.append(self._to_domain(raw))
        return orders

    def count_by_status(self) -> dict[str, int]:
        body = self._client.get("/api/orders/grouped-by-status")
        if not isinstance(body, list):
            raise ValidationError("Status counts payload is not a list")
        counts: dict[str, int] = {}
        for row in body:
            if isinstance(row, dict) and row.get("status"):
                counts[row["status"]] = _to_int(row.get("count"))
        return counts

    def update_status(self, order: Order) -> None:
        self._client.patch(
            f"/api/orders/{order.id}/status", {"status": order.status_text}
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict[str, Any]:
        return {
            **order.extra,
            "_id": order.id,
            "status": order.status_text,
            "products": [
                {
                    **item.extra,
                    "product": {
                        **item.product_extra,
                        "_id": item.product_id,
                        "name": item.product_name,
                        "price": float(item.unit_price.amount),
                    },
                    "quantity": item.quantity.value,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: Any) -> Order:
        if not isinstance(raw, dict):
            raise ValidationError("Malformed order payload")
        order_id = raw.get("_id") or raw.get("id")
        if not order_id:
            raise ValidationError("Order payload has no id")

        # Keyed by product id so a product listed twice becomes one line.
        lines: dict[str, OrderLineItem] = {}
        for entry in raw.get("products") or []:
            if not isinstance(entry, dict):
                raise ValidationError(f"Malformed line in order {order_id}")
            product = entry.get("product") or {}
            if not isinstance(product, dict):
                raise ValidationError(
                    f"Order {order_id} has an unpopulated product reference: {product!r}"
                )
            product_id = product.get("_id") or product.get("id")
            if not product_id:
                logger.warning("Order %s has a line without a product id", order_id)
                continue
            product_id = str(product_id)
            qty = _to_int(entry.get("quantity"))
            if qty <= 0:
                continue
            existing = lines.get(product_id)
            if existing is not None:
                existing.change_quantity(existing.quantity.value + qty)
                continue
            lines[product_id] = OrderLineItem(
                product_id=product_id,
                product_name=product.get("name") or "",
                unit_price=Money.of(product.get("price")),
                quantity=Quantity(qty),
                extra=_unmodelled(entry, _MODELLED_LINE_FIELDS),
                product_extra=_unmodelled(product, _MODELLED_PRODUCT_FIELDS),
            )

        status_text = raw.get("status") or ""
        return Order(
            id=str(order_id),
            status=OrderStatus.parse(status_text),
            items=list(lines.values()),
            centre=_to_centre(raw.get("centreId")),
            status_text=status_text,
            extra=_unmodelled(raw, _MODELLED_FIELDS),
        )


def _unmodelled(raw: dict[str, Any], modelled: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in raw.items() if k not in modelled}


def _order_list(body: Any) -> list[Any]:
    """Accept both a bare list and the ``{"orders": [...]}`` wrapper."""
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        return list(body.get("orders") or [])
    return []


def _to_centre(raw: Any) -> Centre | None:
    if isinstance(raw, dict):
        return Centre(
            id=raw.get("_id") or raw.get("id"),
            name=raw.get("name"),
            code=raw.get("centreId"),
        )
    if raw:
        return Centre(id=str(raw))
    return None


def _to_int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid quantity in order payload: {value!r}") from exc
