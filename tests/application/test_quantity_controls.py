"""Tests for the quantity stepper binding."""

from hopshop.application.edit_order import OrderEditSession
from hopshop.application.quantity_controls import Badge, control_for
from hopshop.domain.model.order import OrderStatus
from tests.builders import make_catalog, make_order
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _loaded(status=OrderStatus.DRAFT) -> OrderEditSession:
    order = make_order(status)
    session = OrderEditSession(
        order.id, FakeOrderRepository([order]), FakeProductRepository(make_catalog())
    )
    session.load()
    return session


class TestQuantityControl:

    def test_at_ceiling(self):
        control = control_for(_loaded(), "A")
        assert control.current == 5
        assert control.decrement_enabled
        assert not control.increment_enabled
        assert control.badge is Badge.NONE
        assert control.badge_text == "In Order"

    def test_below_ceiling_shows_deficit(self):
        session = _loaded()
        session.set_quantity("A", 2)
        control = control_for(session, "A")
        assert control.increment_enabled
        assert control.badge is Badge.DEFICIT
        assert control.deficit == 3
        assert control.badge_text == "In Order (-3)"

    def test_removed(self):
        session = _loaded()
        session.remove_item("B")
        control = control_for(session, "B")
        assert control.badge is Badge.REMOVED
        assert not control.in_order
        assert not control.decrement_enabled
        assert control.increment_enabled
        assert control.deficit == 0

    def test_read_only_disables_both(self):
        session = _loaded(OrderStatus.COMPLETED)
        session.reconciler.set_quantity("A", 2)
        control = control_for(session, "A")
        assert not control.decrement_enabled
        assert not control.increment_enabled
        assert control.badge is Badge.DEFICIT

    def test_never_ordered_product(self):
        control = control_for(_loaded(), "C")
        assert control.original == 0
        assert not control.increment_enabled
        assert not control.decrement_enabled
