"""Order aggregate — the working copy a vendor edits.

The Order owns its line items. Totals are always derived from the
current items and are never stored. The ceiling on each item's quantity
lives in the OriginalQuantitySnapshot and is enforced by the
line-item reconciler, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from hopshop.domain.exceptions import ValidationError
from hopshop.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    DRAFT = "Draft"
    ACCEPTED = "Accepted"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"
    DECLINED = "Declined"
    CANCELLED = "Cancelled"
    PROCESSING = "Processing"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, raw: str | None) -> OrderStatus:
        """Map a wire value to a status; anything unrecognised is UNKNOWN."""
        for status in cls:
            if status.value == raw:
                return status
        return cls.UNKNOWN


# Only these statuses may be edited; everything else renders read-only.
EDITABLE_STATUSES = frozenset({OrderStatus.DRAFT, OrderStatus.ACCEPTED})

# Orders in these statuses can no longer be sent out for delivery.
_NOT_DISPATCHABLE = frozenset({OrderStatus.PROCESSING, OrderStatus.DELIVERED})


@dataclass(frozen=True)
class Centre:
    """Delivery destination of an order."""

    id: str | None
    name: str | None = None
    code: str | None = None  # the centre's own "centreId", e.g. "CH-014"

    @property
    def display_name(self) -> str:
        return self.name or "N/A"


@dataclass
class OrderLineItem:
    """One product/quantity pair of the working order.

    ``extra`` and ``product_extra`` hold the line's and the product's
    unmodelled payload fields so they survive a save.
    """

    product_id: str
    product_name: str
    unit_price: Money
    quantity: Quantity
    extra: dict[str, Any] = field(default_factory=dict)
    product_extra: dict[str, Any] = field(default_factory=dict)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def change_quantity(self, qty: int) -> None:
        self.quantity = Quantity(qty)


@dataclass
class Order:
    """Aggregate root for an order being viewed or edited.

    ``extra`` carries every payload field the dashboard does not model so
    that a save sends back a full replacement of what was loaded.
    """

    id: str
    status: OrderStatus
    items: list[OrderLineItem]
    centre: Centre | None = None
    status_text: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.status_text:
            self.status_text = self.status.value

    # --- Line item mutations --------------------------------------------------

    def find_item(self, product_id: str) -> OrderLineItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_item(self, item: OrderLineItem) -> None:
        if self.find_item(item.product_id) is not None:
            raise ValidationError(
                f"Product ID '{item.product_id}' is already in order {self.id}"
            )
        self.items.append(item)

    def remove_item(self, product_id: str) -> None:
        """Drop the line for *product_id*; absent products are ignored."""
        self.items = [item for item in self.items if item.product_id != product_id]

    # --- State transitions ----------------------------------------------------

    def dispatch(self) -> None:
        """Transition to OUT_FOR_DELIVERY (the vendor accepts the order)."""
        if self.status in _NOT_DISPATCHABLE:
            raise ValidationError(
                f"Cannot dispatch order {self.short_id}: status is {self.status_text}"
            )
        self._set_status(OrderStatus.OUT_FOR_DELIVERY)

    def deliver(self) -> None:
        """Transition OUT_FOR_DELIVERY -> DELIVERED."""
        if self.status != OrderStatus.OUT_FOR_DELIVERY:
            raise ValidationError(
                f"Cannot deliver order {self.short_id}: status is {self.status_text}, "
                f"expected {OrderStatus.OUT_FOR_DELIVERY.value}"
            )
        self._set_status(OrderStatus.DELIVERED)

    def _set_status(self, status: OrderStatus) -> None:
        self.status = status
        self.status_text = status.value

    # --- Search ---------------------------------------------------------------

    def matches(self, search: str) -> bool:
        """Case-insensitive match on order number, centre or product names."""
        needle = search.strip().lower()
        if not needle:
            return True
        haystack = [self.id, str(self.extra.get("orderNo") or "")]
        if self.centre is not None:
            haystack += [self.centre.name or "", self.centre.code or ""]
        haystack += [item.product_name or "" for item in self.items]
        return any(needle in value.lower() for value in haystack)

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        if not self.items:
            return Money.zero()
        result = Money.zero(self.items[0].unit_price.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def is_editable(self) -> bool:
        return self.status in EDITABLE_STATUSES

    @property
    def short_id(self) -> str:
        return self.id[-8:]

    @property
    def centre_name(self) -> str:
        return self.centre.display_name if self.centre else "N/A"

    @property
    def payment_status(self) -> str | None:
        """Delivered orders count as paid unless the API says otherwise."""
        recorded = self.extra.get("paymentStatus")
        if self.status == OrderStatus.DELIVERED:
            return recorded or "Paid"
        return recorded
