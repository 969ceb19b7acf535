"""Tests for the REST gateways against an in-process API stub."""

import json
from datetime import date

import httpx
import pytest

from hopshop.application.edit_order import EditState, OrderEditSession
from hopshop.domain.exceptions import (
    AuthenticationError,
    LoadFailure,
    SaveFailure,
    ValidationError,
)
from hopshop.domain.model.order import OrderStatus
from hopshop.domain.model.value_objects import Money
from hopshop.infrastructure.api.client import ApiClient, ApiError
from hopshop.infrastructure.api.http_auth_gateway import HttpAuthGateway
from hopshop.infrastructure.api.http_notification_feed import HttpNotificationFeed
from hopshop.infrastructure.api.http_order_repository import HttpOrderRepository
from hopshop.infrastructure.api.http_product_repository import HttpProductRepository
from tests.infrastructure.api_stub import ORDER_ID, OTHER_ID, ApiStub


class TestApiClient:

    def test_bearer_token_sent(self):
        stub = ApiStub()
        stub.client(token="tok").get("/api/products")
        assert stub.requests[0].headers["Authorization"] == "Bearer tok"

    def test_no_token_no_header(self):
        stub = ApiStub()
        stub.client().get("/api/products")
        assert "Authorization" not in stub.requests[0].headers

    def test_non_2xx_raises(self):
        with pytest.raises(ApiError) as info:
            ApiStub().client().get("/api/unknown")
        assert info.value.status_code == 404

    def test_transport_error_raises(self):
        def broken(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = ApiClient("http://api.test", transport=httpx.MockTransport(broken))
        with pytest.raises(ApiError, match="connection refused"):
            client.get("/api/products")


class TestHttpOrderRepository:

    def test_get_maps_payload(self):
        order = HttpOrderRepository(ApiStub().client()).get_by_id(ORDER_ID)
        assert order.status is OrderStatus.DRAFT
        assert order.centre_name == "Anna Nagar"
        assert [(i.product_id, i.quantity.value) for i in order.items] == [("A", 5), ("B", 2)]
        assert order.total == Money.of("90")
        assert order.extra["vendorId"] == "v42"

    def test_missing_order_is_none(self):
        assert HttpOrderRepository(ApiStub().client()).get_by_id("nope") is None

    def test_unknown_status_kept_for_display(self):
        stub = ApiStub(status="Dispatched")
        order = HttpOrderRepository(stub.client()).get_by_id(ORDER_ID)
        assert order.status is OrderStatus.UNKNOWN
        assert order.status_text == "Dispatched"
        assert not order.is_editable

    def test_duplicate_and_zero_lines(self):
        stub = ApiStub()
        stub.orders[ORDER_ID]["products"] += [
            {"product": {"_id": "A", "name": "Apples", "price": 10}, "quantity": 1},
            {"product": {"id": "C", "name": "Carrots", "price": 30}, "quantity": 0},
            {"product": None, "quantity": 3},
        ]
        order = HttpOrderRepository(stub.client()).get_by_id(ORDER_ID)
        assert [(i.product_id, i.quantity.value) for i in order.items] == [("A", 6), ("B", 2)]

    def test_bad_quantity_rejected(self):
        stub = ApiStub()
        stub.orders[ORDER_ID]["products"][0]["quantity"] = "lots"
        with pytest.raises(ValidationError, match="Invalid quantity"):
            HttpOrderRepository(stub.client()).get_by_id(ORDER_ID)

    def test_save_sends_full_replacement(self):
        stub = ApiStub()
        repo = HttpOrderRepository(stub.client())
        order = repo.get_by_id(ORDER_ID)
        order.remove_item("B")
        repo.save(order)

        put = stub.requests[-1]
        assert put.method == "PUT"
        saved = stub.orders[ORDER_ID]
        assert saved["status"] == "Draft"
        assert saved["centreId"] == {"_id": "c1", "name": "Anna Nagar", "centreId": "CH-014"}
        assert saved["orderNo"] == "HS-1001"
        assert saved["vendorId"] == "v42"
        assert saved["products"] == [
            {"product": {"_id": "A", "name": "Apples", "price": 10.0}, "quantity": 5}
        ]

    def test_unpopulated_product_rejected(self):
        stub = ApiStub()
        stub.orders[ORDER_ID]["products"][0]["product"] = "A"
        with pytest.raises(ValidationError, match="unpopulated product"):
            HttpOrderRepository(stub.client()).get_by_id(ORDER_ID)

    def test_line_and_product_fields_survive_save(self):
        stub = ApiStub()
        line = stub.orders[ORDER_ID]["products"][0]
        line["_id"] = "line-1"
        line["product"]["category"] = "Fruit"
        repo = HttpOrderRepository(stub.client())

        order = repo.get_by_id(ORDER_ID)
        order.find_item("A").change_quantity(4)
        repo.save(order)

        assert stub.orders[ORDER_ID]["products"][0] == {
            "_id": "line-1",
            "product": {"_id": "A", "name": "Apples", "price": 10.0, "category": "Fruit"},
            "quantity": 4,
        }

    def test_list_all_and_by_status(self):
        repo = HttpOrderRepository(ApiStub().client())
        assert {o.id for o in repo.list_by_status()} == {ORDER_ID, OTHER_ID}
        shipped = repo.list_by_status(OrderStatus.OUT_FOR_DELIVERY)
        assert [o.id for o in shipped] == [OTHER_ID]
        assert shipped[0].centre.code == "CH-020"

    def test_list_by_centre(self):
        orders = HttpOrderRepository(ApiStub().client()).list_by_centre("c1")
        assert [o.id for o in orders] == [ORDER_ID]

    def test_list_accepted_unwraps_assignments(self):
        stub = ApiStub(status="Accepted")
        orders = HttpOrderRepository(stub.client()).list_accepted("v42")
        assert [o.id for o in orders] == [ORDER_ID]
        assert stub.requests[0].url.path == "/api/orders/accepted/v42"

    def test_count_by_status(self):
        counts = HttpOrderRepository(ApiStub().client()).count_by_status()
        assert counts == {"Draft": 1, "Out for Delivery": 1}

    def test_update_status_patches_only_status(self):
        stub = ApiStub()
        repo = HttpOrderRepository(stub.client())
        order = repo.get_by_id(OTHER_ID)
        order.deliver()
        repo.update_status(order)

        patch = stub.requests[-1]
        assert patch.method == "PATCH"
        assert json.loads(patch.content) == {"status": "Delivered"}
        assert stub.orders[OTHER_ID]["status"] == "Delivered"


class TestHttpProductRepository:

    def test_list_all(self):
        products = HttpProductRepository(ApiStub().client()).list_all()
        assert [p.id for p in products] == ["A", "B", "C"]
        assert products[0].stock == 40
        assert products[1].stock is None
        assert products[1].price == Money.of("20.5")

    def test_non_list_rejected(self):
        stub = ApiStub()
        stub.catalog = {"products": []}
        with pytest.raises(ValidationError):
            HttpProductRepository(stub.client()).list_all()


class TestEditSessionOverHttp:

    def test_edit_and_save(self):
        stub = ApiStub()
        client = stub.client()
        session = OrderEditSession(
            ORDER_ID, HttpOrderRepository(client), HttpProductRepository(client)
        )
        session.load()
        session.set_quantity("B", 0)
        session.set_quantity("B", 1)
        session.save()

        assert session.state is EditState.SAVE_SUCCEEDED
        products = stub.orders[ORDER_ID]["products"]
        # B came back from the live catalog at its current price.
        assert products[-1] == {
            "product": {"_id": "B", "name": "Bananas", "price": 20.5, "category": "Fruit"},
            "quantity": 1,
        }

    def test_unpopulated_product_fails_the_load(self):
        stub = ApiStub()
        stub.orders[ORDER_ID]["products"][0]["product"] = "A"
        client = stub.client()
        session = OrderEditSession(
            ORDER_ID, HttpOrderRepository(client), HttpProductRepository(client)
        )
        with pytest.raises(LoadFailure, match="unpopulated product"):
            session.load()
        assert session.state is EditState.LOAD_FAILED

    def test_server_error_on_save(self):
        stub = ApiStub()
        stub.fail_put = True
        client = stub.client()
        session = OrderEditSession(
            ORDER_ID, HttpOrderRepository(client), HttpProductRepository(client)
        )
        session.load()
        session.set_quantity("A", 1)
        with pytest.raises(SaveFailure):
            session.save()
        assert session.state is EditState.SAVE_FAILED
        assert session.reconciler.current_quantity("A") == 1


class TestOtherGateways:

    def test_notifications(self):
        feed = HttpNotificationFeed(ApiStub().client(token="t"))
        stub_customers = feed.offline_or_no_camera(date(2026, 10, 19))
        assert stub_customers == [{"_id": "k1", "name": "Ravi"}]
        assert feed.accepted_count("v42") == 4

    def test_notifications_date_param(self):
        stub = ApiStub()
        HttpNotificationFeed(stub.client()).offline_or_no_camera(date(2026, 1, 5))
        assert stub.requests[0].url.params["date"] == "2026-01-05"

    def test_login(self):
        body = HttpAuthGateway(ApiStub().client()).login("me", "secret")
        assert body["data"]["token"] == "tok-123"

    def test_login_bad_password(self):
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            HttpAuthGateway(ApiStub().client()).login("me", "wrong")
