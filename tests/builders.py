"""Builders for the orders and products used across the tests."""

from __future__ import annotations

from hopshop.domain.model.order import Centre, Order, OrderLineItem, OrderStatus
from hopshop.domain.model.product import CatalogProduct
from hopshop.domain.model.value_objects import Money, Quantity


def make_item(product_id: str, qty: int, price: str, name: str | None = None) -> OrderLineItem:
    return OrderLineItem(
        product_id=product_id,
        product_name=name or product_id,
        unit_price=Money.of(price),
        quantity=Quantity(qty),
    )


def make_order(
    status: OrderStatus = OrderStatus.DRAFT,
    order_id: str = "64f1c0ffee0000000000abcd",
) -> Order:
    """A: 5 @ ₹10, B: 2 @ ₹20 -> total ₹90."""
    return Order(
        id=order_id,
        status=status,
        items=[make_item("A", 5, "10"), make_item("B", 2, "20")],
        centre=Centre(id="c1", name="Anna Nagar"),
    )


def make_catalog() -> list[CatalogProduct]:
    return [
        CatalogProduct(id="A", name="Apples", price=Money.of("10"), category="Fruit"),
        CatalogProduct(id="B", name="Bananas", price=Money.of("20"), category="Fruit"),
        CatalogProduct(id="C", name="Carrots", price=Money.of("30"), category="Vegetables"),
    ]
