"""Abstract feed for the dashboard's periodic alerts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any


class NotificationFeed(ABC):

    @abstractmethod
    def offline_or_no_camera(self, day: date) -> list[dict[str, Any]]:
        """Customers that were offline or had no camera on *day*."""

    @abstractmethod
    def accepted_count(self, vendor_id: str) -> int:
        """Number of accepted orders waiting on the vendor."""
