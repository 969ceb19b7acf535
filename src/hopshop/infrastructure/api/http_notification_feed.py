"""REST implementation of NotificationFeed."""

from __future__ import annotations

from datetime import date
from typing import Any

from hopshop.domain.repository.notification_feed import NotificationFeed
from hopshop.infrastructure.api.client import ApiClient


class HttpNotificationFeed(NotificationFeed):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def offline_or_no_camera(self, day: date) -> list[dict[str, Any]]:
        body = self._client.get(
            "/api/customer/customers/offline-or-nocamera",
            params={"date": day.isoformat()},
        )
        customers = body.get("customers") if isinstance(body, dict) else None
        return list(customers or [])

    def accepted_count(self, vendor_id: str) -> int:
        body = self._client.get(f"/api/orders/accepted/{vendor_id}")
        count = body.get("count") if isinstance(body, dict) else None
        return int(count or 0)
