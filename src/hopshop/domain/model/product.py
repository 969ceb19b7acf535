"""Catalog product.

Products are owned by the remote API. The dashboard only reads them to
resolve display names and prices and to decide which entries may be put
back into an order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from hopshop.domain.model.value_objects import Money


@dataclass(frozen=True)
class CatalogProduct:
    """A read-only entry of the live product catalog.

    ``extra`` keeps the catalog entry's other fields so a line rebuilt
    from it carries them on save.
    """

    id: str
    name: str
    price: Money
    category: str | None = None
    stock: int | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def matches(self, search: str) -> bool:
        """Case-insensitive substring match on the product name."""
        return search.lower() in (self.name or "").lower()
