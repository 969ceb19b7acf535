"""Original quantities of an order, captured when it was loaded.

Taken once per edit session and never mutated afterwards. It is the
sole source of the upper bound on any line item's quantity.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import replace
from types import MappingProxyType

from hopshop.domain.model.order import Order, OrderLineItem


class OriginalQuantitySnapshot(Mapping):
    """Immutable mapping of product id -> original quantity.

    Also keeps a copy of each original line item so a product that has
    been taken down to zero can be put back even when the live catalog
    no longer lists it.
    """

    def __init__(self, lines: dict[str, OrderLineItem]) -> None:
        self._lines = MappingProxyType(dict(lines))
        self._quantities = MappingProxyType(
            {pid: line.quantity.value for pid, line in lines.items()}
        )

    @classmethod
    def capture(cls, order: Order) -> OriginalQuantitySnapshot:
        lines: dict[str, OrderLineItem] = {}
        for item in order.items:
            # Copies, so later edits to the working items cannot leak in.
            lines[item.product_id] = replace(
                item, extra=dict(item.extra), product_extra=dict(item.product_extra)
            )
        return cls(lines)

    # --- Mapping interface ----------------------------------------------------

    def __getitem__(self, product_id: str) -> int:
        return self._quantities[product_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._quantities)

    def __len__(self) -> int:
        return len(self._quantities)

    # --- Queries --------------------------------------------------------------

    def quantity_of(self, product_id: str) -> int:
        """Original quantity, or 0 for products never on the order."""
        return self._quantities.get(product_id, 0)

    def original_line(self, product_id: str) -> OrderLineItem | None:
        line = self._lines.get(product_id)
        if line is None:
            return None
        return replace(line, extra=dict(line.extra), product_extra=dict(line.product_extra))

    # Immutable, so copies can share the instance.
    def __copy__(self) -> OriginalQuantitySnapshot:
        return self

    def __deepcopy__(self, memo: dict) -> OriginalQuantitySnapshot:
        return self

    def __repr__(self) -> str:
        return f"OriginalQuantitySnapshot({dict(self._quantities)!r})"
