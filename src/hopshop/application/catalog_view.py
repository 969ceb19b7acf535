"""Application service: the catalog panel of the edit screen (query).

Only products that were on the original order are listed, since nothing
else can be added back from this screen.
"""

from __future__ import annotations

from hopshop.application.dto import ProductCardDTO
from hopshop.application.edit_order import OrderEditSession
from hopshop.application.quantity_controls import control_for
from hopshop.domain.model.product import CatalogProduct
from hopshop.domain.model.snapshot import OriginalQuantitySnapshot

ALL_CATEGORIES = "All"


def eligible_products(
    catalog: list[CatalogProduct],
    snapshot: OriginalQuantitySnapshot,
    search: str = "",
    category: str = ALL_CATEGORIES,
) -> list[CatalogProduct]:
    return [
        p
        for p in catalog
        if snapshot.quantity_of(p.id) > 0
        and p.matches(search)
        and (category == ALL_CATEGORIES or p.category == category)
    ]


def categories(catalog: list[CatalogProduct]) -> list[str]:
    """``All`` followed by every distinct category, in catalog order."""
    seen: list[str] = []
    for p in catalog:
        if p.category and p.category not in seen:
            seen.append(p.category)
    return [ALL_CATEGORIES, *seen]


class CatalogViewHandler:

    def __init__(self, session: OrderEditSession) -> None:
        self._session = session

    def handle(
        self, search: str = "", category: str = ALL_CATEGORIES
    ) -> list[ProductCardDTO]:
        products = eligible_products(
            self._session.catalog, self._session.snapshot, search, category
        )
        cards: list[ProductCardDTO] = []
        for product in products:
            control = control_for(self._session, product.id)
            cards.append(
                ProductCardDTO(
                    product_id=product.id,
                    name=product.name,
                    price=str(product.price),
                    category=product.category,
                    current_quantity=control.current,
                    max_quantity=control.original,
                    badge=control.badge_text,
                )
            )
        return cards
