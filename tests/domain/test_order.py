"""Unit tests for the Order aggregate."""

import pytest

from hopshop.domain.exceptions import ValidationError
from hopshop.domain.model.order import Centre, Order, OrderStatus
from hopshop.domain.model.value_objects import Money
from tests.builders import make_item, make_order


class TestOrderStatus:

    def test_parse_wire_values(self):
        assert OrderStatus.parse("On Hold") is OrderStatus.ON_HOLD
        assert OrderStatus.parse("Accepted") is OrderStatus.ACCEPTED

    def test_unknown_value(self):
        assert OrderStatus.parse("Shipped") is OrderStatus.UNKNOWN
        assert OrderStatus.parse(None) is OrderStatus.UNKNOWN

    @pytest.mark.parametrize("status", [OrderStatus.DRAFT, OrderStatus.ACCEPTED])
    def test_editable(self, status):
        assert make_order(status).is_editable

    @pytest.mark.parametrize(
        "status",
        [OrderStatus.ON_HOLD, OrderStatus.COMPLETED, OrderStatus.DECLINED,
         OrderStatus.CANCELLED, OrderStatus.PROCESSING, OrderStatus.OUT_FOR_DELIVERY,
         OrderStatus.DELIVERED, OrderStatus.UNKNOWN],
    )
    def test_read_only(self, status):
        assert not make_order(status).is_editable


class TestOrderTotals:

    def test_total_is_sum_of_line_items(self):
        assert make_order().total == Money.of("90")

    def test_item_count(self):
        assert make_order().item_count == 7

    def test_empty_order(self):
        order = Order(id="x", status=OrderStatus.DRAFT, items=[])
        assert order.total == Money.zero()
        assert order.item_count == 0

    def test_total_follows_items(self):
        order = make_order()
        order.find_item("A").change_quantity(1)
        assert order.total == Money.of("50")


class TestOrderItems:

    def test_remove_absent_item_is_noop(self):
        order = make_order()
        order.remove_item("Z")
        assert [i.product_id for i in order.items] == ["A", "B"]

    def test_add_duplicate_rejected(self):
        order = make_order()
        with pytest.raises(ValidationError, match="already in order"):
            order.add_item(make_item("A", 1, "10"))

    def test_change_quantity_to_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            make_order().find_item("A").change_quantity(0)


class TestOrderDisplay:

    def test_short_id(self):
        assert make_order(order_id="64f1c0ffee0000000000abcd").short_id == "0000abcd"

    def test_status_text_defaults_to_enum_value(self):
        assert make_order(OrderStatus.ON_HOLD).status_text == "On Hold"

    def test_centre_name_missing(self):
        order = Order(id="x", status=OrderStatus.DRAFT, items=[])
        assert order.centre_name == "N/A"

    def test_payment_status_defaults_to_paid_once_delivered(self):
        assert make_order(OrderStatus.DELIVERED).payment_status == "Paid"
        assert make_order(OrderStatus.OUT_FOR_DELIVERY).payment_status is None

    def test_recorded_payment_status_wins(self):
        order = make_order(OrderStatus.DELIVERED)
        order.extra["paymentStatus"] = "Pending"
        assert order.payment_status == "Pending"


class TestOrderTransitions:

    @pytest.mark.parametrize(
        "status", [OrderStatus.ACCEPTED, OrderStatus.ON_HOLD, OrderStatus.OUT_FOR_DELIVERY],
    )
    def test_dispatch(self, status):
        order = make_order(status)
        order.dispatch()
        assert order.status is OrderStatus.OUT_FOR_DELIVERY
        assert order.status_text == "Out for Delivery"

    @pytest.mark.parametrize("status", [OrderStatus.PROCESSING, OrderStatus.DELIVERED])
    def test_dispatch_rejected(self, status):
        with pytest.raises(ValidationError, match="Cannot dispatch"):
            make_order(status).dispatch()

    def test_deliver(self):
        order = make_order(OrderStatus.OUT_FOR_DELIVERY)
        order.deliver()
        assert order.status is OrderStatus.DELIVERED
        assert order.status_text == "Delivered"

    def test_deliver_requires_out_for_delivery(self):
        order = make_order(OrderStatus.ACCEPTED)
        with pytest.raises(ValidationError, match="expected Out for Delivery"):
            order.deliver()
        assert order.status is OrderStatus.ACCEPTED


class TestOrderSearch:

    def test_blank_matches_everything(self):
        assert make_order().matches("  ")

    def test_matches_order_number_centre_and_products(self):
        order = make_order()
        order.extra["orderNo"] = "HS-1001"
        order.centre = Centre(id="c1", name="Anna Nagar", code="CH-014")
        order.items[0].product_name = "Apples"
        assert order.matches("hs-10")
        assert order.matches("anna")
        assert order.matches("ch-014")
        assert order.matches("apples")

    def test_no_match(self):
        assert not make_order().matches("zucchini")
