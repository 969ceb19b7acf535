"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the vendor."""

    product_id: str
    product_name: str
    quantity: int
    original_quantity: int
    unit_price: str  # formatted, e.g. "₹15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the vendor."""

    id: str
    short_id: str
    centre: str
    status: str
    editable: bool
    items: list[OrderLineItemDTO]
    item_count: int
    total: str


@dataclass(frozen=True)
class ProductCardDTO:
    """Output: one catalog card on the edit screen."""

    product_id: str
    name: str
    price: str
    category: str | None
    current_quantity: int
    max_quantity: int
    badge: str  # "In Order", "In Order (-2)" or "Removed"


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: one row of an order list."""

    id: str
    short_id: str
    order_no: str
    centre: str
    centre_code: str
    status: str  # as shown, e.g. "Receive Order" for Accepted
    payment_status: str | None
    products: list[str]
    item_count: int
    total: str
