"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hopshop.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Replace the stored order with *order* (whole product list)."""

    @abstractmethod
    def list_by_status(self, status: OrderStatus | None = None) -> list[Order]:
        """Orders in *status*, or every order when *status* is None."""

    @abstractmethod
    def list_by_centre(self, centre_id: str) -> list[Order]:
        """Orders placed by one centre."""

    @abstractmethod
    def list_accepted(self, vendor_id: str) -> list[Order]:
        """Accepted orders assigned to *vendor_id*."""

    @abstractmethod
    def count_by_status(self) -> dict[str, int]:
        """Number of orders per wire status string."""

    @abstractmethod
    def update_status(self, order: Order) -> None:
        """Persist only the status of *order*."""
