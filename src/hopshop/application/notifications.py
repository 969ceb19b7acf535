"""Notification poller.

Periodically fetches customers that were offline or had no camera today,
plus the vendor's accepted-order count. The poller runs on its own
thread and must be stopped by whoever started it; it is also a context
manager for that reason.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Callable

from hopshop.domain.exceptions import GatewayError
from hopshop.domain.repository.notification_feed import NotificationFeed

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 300.0  # five minutes


@dataclass(frozen=True)
class NotificationSnapshot:
    customers: list[dict[str, Any]] = field(default_factory=list)
    accepted_count: int = 0
    fetched_at: datetime | None = None
    day: date | None = None  # date of the customer report

    @property
    def count(self) -> int:
        return len(self.customers)


class NotificationPoller:

    def __init__(
        self,
        feed: NotificationFeed,
        vendor_id: str,
        interval: float = DEFAULT_INTERVAL,
        on_update: Callable[[NotificationSnapshot], None] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        if interval <= 0:
            raise ValueError("Polling interval must be positive")
        self._feed = feed
        self._vendor_id = vendor_id
        self._interval = interval
        self._on_update = on_update
        self._today = today
        self._latest = NotificationSnapshot()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    # --- Polling --------------------------------------------------------------

    def poll_once(self, day: date | None = None) -> NotificationSnapshot:
        """Fetch both feeds once. Failures keep the previous values.

        *day* picks the date of the customer report; it defaults to today.
        """
        previous = self.latest
        customers = previous.customers
        accepted = previous.accepted_count
        fetched_day = previous.day
        report_day = day or self._today()

        try:
            customers = self._feed.offline_or_no_camera(report_day)
            fetched_day = report_day
        except GatewayError as exc:
            logger.warning("Error fetching notifications: %s", exc)
        try:
            accepted = self._feed.accepted_count(self._vendor_id)
        except GatewayError as exc:
            logger.warning("Error fetching accepted count: %s", exc)

        snapshot = NotificationSnapshot(
            customers=list(customers),
            accepted_count=accepted,
            day=fetched_day,
            fetched_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._latest = snapshot
        if self._on_update is not None:
            self._on_update(snapshot)
        return snapshot

    @property
    def latest(self) -> NotificationSnapshot:
        with self._lock:
            return self._latest

    # --- Scheduling -----------------------------------------------------------

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="hopshop-notifications", daemon=True
        )
        self._thread.start()
        logger.debug("Notification poller started (every %ss)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.debug("Notification poller stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> NotificationPoller:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.poll_once()
            except Exception:
                # Keep the schedule alive; the next tick may succeed.
                logger.exception("Notification poll failed")
            if self._stop.wait(self._interval):
                break
