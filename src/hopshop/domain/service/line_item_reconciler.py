"""Domain service: Line-Item Reconciler.

Keeps the working copy of an order's line items under a hard ceiling per
product: the quantity the product had when the order was loaded.

Requests outside the allowed range are clamped, and products that were
never on the order are ignored. Neither case raises; both are logged at
DEBUG so a support session can still see what the vendor asked for.
"""

from __future__ import annotations

import logging

from hopshop.domain.exceptions import ValidationError
from hopshop.domain.model.order import Order, OrderLineItem
from hopshop.domain.model.product import CatalogProduct
from hopshop.domain.model.snapshot import OriginalQuantitySnapshot
from hopshop.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)


class LineItemReconciler:

    def __init__(
        self,
        order: Order,
        snapshot: OriginalQuantitySnapshot,
        catalog: list[CatalogProduct] | None = None,
    ) -> None:
        self._order = order
        self._snapshot = snapshot
        self._catalog = {p.id: p for p in catalog or []}

    # --- Commands -------------------------------------------------------------

    def set_quantity(self, product_id: str, requested_qty: int) -> None:
        """Set the working quantity of *product_id*, clamped to its ceiling.

        0 removes the line. A positive quantity for a product that is not
        currently in the working list puts it back, but only if it was on
        the order originally.
        """
        if not isinstance(requested_qty, int) or isinstance(requested_qty, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(requested_qty).__name__}"
            )

        ceiling = self._snapshot.quantity_of(product_id)
        if ceiling <= 0:
            logger.debug(
                "Ignoring quantity %s for product %s: not on the original order",
                requested_qty, product_id,
            )
            return

        effective = min(max(requested_qty, 0), ceiling)
        if effective != requested_qty:
            logger.debug(
                "Clamped product %s from %s to %s (original %s)",
                product_id, requested_qty, effective, ceiling,
            )

        if effective == 0:
            self._order.remove_item(product_id)
            return

        item = self._order.find_item(product_id)
        if item is not None:
            item.change_quantity(effective)
        else:
            self._order.add_item(self._build_line(product_id, effective))

    def remove_item(self, product_id: str) -> None:
        """Remove the line regardless of its quantity. Idempotent."""
        self._order.remove_item(product_id)

    # --- Queries --------------------------------------------------------------

    def current_quantity(self, product_id: str) -> int:
        item = self._order.find_item(product_id)
        return item.quantity.value if item is not None else 0

    def original_quantity(self, product_id: str) -> int:
        return self._snapshot.quantity_of(product_id)

    def can_increase(self, product_id: str) -> bool:
        return self.current_quantity(product_id) < self.original_quantity(product_id)

    def total(self) -> Money:
        # Derived on every call; the order never stores a total.
        return self._order.total

    def item_count(self) -> int:
        return self._order.item_count

    @property
    def items(self) -> list[OrderLineItem]:
        return list(self._order.items)

    # --- Internal helpers -----------------------------------------------------

    def _build_line(self, product_id: str, qty: int) -> OrderLineItem:
        original = self._snapshot.original_line(product_id)
        product = self._catalog.get(product_id)
        if product is not None:
            return OrderLineItem(
                product_id=product.id,
                product_name=product.name,
                unit_price=product.price,
                quantity=Quantity(qty),
                extra=dict(original.extra) if original is not None else {},
                product_extra=dict(product.extra),
            )
        # Not in the live catalog any more: fall back to the loaded line.
        original.change_quantity(qty)
        return original
