"""Quantity stepper state for one catalog card of the edit screen."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hopshop.application.edit_order import OrderEditSession


class Badge(Enum):
    NONE = "NONE"
    DEFICIT = "DEFICIT"
    REMOVED = "REMOVED"


@dataclass(frozen=True)
class QuantityControl:
    product_id: str
    current: int
    original: int
    decrement_enabled: bool
    increment_enabled: bool
    badge: Badge

    @property
    def deficit(self) -> int:
        return self.original - self.current if self.badge is Badge.DEFICIT else 0

    @property
    def in_order(self) -> bool:
        return self.current > 0

    @property
    def badge_text(self) -> str:
        if self.badge is Badge.REMOVED:
            return "Removed"
        if self.badge is Badge.DEFICIT:
            return f"In Order (-{self.deficit})"
        return "In Order"


def control_for(session: OrderEditSession, product_id: str) -> QuantityControl:
    reconciler = session.reconciler
    current = reconciler.current_quantity(product_id)
    original = reconciler.original_quantity(product_id)
    editable = session.is_editable

    if current == 0:
        badge = Badge.REMOVED
    elif current < original:
        badge = Badge.DEFICIT
    else:
        badge = Badge.NONE

    return QuantityControl(
        product_id=product_id,
        current=current,
        original=original,
        decrement_enabled=editable and current > 0,
        increment_enabled=editable and reconciler.can_increase(product_id),
        badge=badge,
    )
