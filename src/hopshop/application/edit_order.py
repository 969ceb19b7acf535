"""Application service: Edit Order session.

One session per order being edited. It loads the order and the catalog,
captures the original quantities, and hosts the line-item reconciler
until the vendor saves or navigates away.

State flow::

    LOADING -> READY_EDITABLE | READY_READ_ONLY | LOAD_FAILED
    READY_EDITABLE -> SAVE_IN_FLIGHT -> SAVE_SUCCEEDED | SAVE_FAILED

SAVE_FAILED and SAVE_SUCCEEDED stay editable, and the next edit moves
the session back to READY_EDITABLE. LOAD_FAILED is terminal.

Read-only orders are enforced here, at the session boundary. The
reconciler itself stays callable whatever the order status is.
"""

from __future__ import annotations

import logging
from enum import Enum

from hopshop.domain.exceptions import (
    EntityNotFoundError,
    GatewayError,
    LoadFailure,
    SaveFailure,
    ValidationError,
)
from hopshop.domain.model.order import Order
from hopshop.domain.model.product import CatalogProduct
from hopshop.domain.model.snapshot import OriginalQuantitySnapshot
from hopshop.domain.repository.order_repository import OrderRepository
from hopshop.domain.repository.product_repository import ProductRepository
from hopshop.domain.service.line_item_reconciler import LineItemReconciler

logger = logging.getLogger(__name__)


class EditState(Enum):
    LOADING = "LOADING"
    READY_EDITABLE = "READY_EDITABLE"
    READY_READ_ONLY = "READY_READ_ONLY"
    SAVE_IN_FLIGHT = "SAVE_IN_FLIGHT"
    SAVE_FAILED = "SAVE_FAILED"
    SAVE_SUCCEEDED = "SAVE_SUCCEEDED"
    LOAD_FAILED = "LOAD_FAILED"


_EDITABLE_STATES = frozenset(
    {EditState.READY_EDITABLE, EditState.SAVE_FAILED, EditState.SAVE_SUCCEEDED}
)


class OrderEditSession:

    def __init__(
        self,
        order_id: str,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_id = order_id
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._state = EditState.LOADING
        self._closed = False
        self._order: Order | None = None
        self._snapshot: OriginalQuantitySnapshot | None = None
        self._catalog: list[CatalogProduct] = []
        self._reconciler: LineItemReconciler | None = None

    # --- Lifecycle ------------------------------------------------------------

    def load(self) -> None:
        """Fetch the order, then the catalog.

        Any failure leaves the session in LOAD_FAILED and raises
        LoadFailure. Nothing is retried.
        """
        if self._state is not EditState.LOADING:
            raise ValidationError(f"Order {self._order_id} is already loaded")

        try:
            order = self._order_repo.get_by_id(self._order_id)
            if order is None:
                raise EntityNotFoundError(f"Order {self._order_id} not found")
            catalog = self._product_repo.list_all()
        except (GatewayError, EntityNotFoundError, ValidationError) as exc:
            if self._closed:
                logger.debug("Discarding failed load of closed order %s", self._order_id)
                return
            self._state = EditState.LOAD_FAILED
            logger.warning("Loading order %s failed: %s", self._order_id, exc)
            raise LoadFailure(f"Error loading order {self._order_id}: {exc}") from exc

        if self._closed:
            logger.debug("Discarding load of closed order %s", self._order_id)
            return

        self._order = order
        self._catalog = catalog
        self._snapshot = OriginalQuantitySnapshot.capture(order)
        self._reconciler = LineItemReconciler(order, self._snapshot, catalog)

        if order.is_editable:
            self._state = EditState.READY_EDITABLE
        else:
            self._state = EditState.READY_READ_ONLY
        logger.info(
            "Loaded order %s (%s, %d lines) as %s",
            order.id, order.status_text, len(order.items), self._state.value,
        )

    def close(self) -> None:
        """Navigate away: unsaved edits are dropped."""
        self._closed = True
        self._order = None
        self._snapshot = None
        self._reconciler = None
        self._catalog = []

    def save(self) -> None:
        """Send the whole working order back to the API.

        On failure the working copy is kept and the session stays
        editable so the vendor can retry.
        """
        if self._state is EditState.SAVE_IN_FLIGHT:
            raise ValidationError("A save is already in progress")
        if not self.is_editable:
            raise ValidationError(self.status_label or "Order cannot be saved")

        order = self._require_order()
        self._state = EditState.SAVE_IN_FLIGHT
        try:
            self._order_repo.save(order)
        except GatewayError as exc:
            self._state = EditState.SAVE_FAILED
            logger.warning("Saving order %s failed: %s", order.id, exc)
            raise SaveFailure("Failed to save order. Please try again.") from exc

        self._state = EditState.SAVE_SUCCEEDED
        logger.info("Saved order %s (total %s)", order.id, order.total)

    # --- Edits (ignored unless editable) --------------------------------------

    def set_quantity(self, product_id: str, quantity: int) -> None:
        if self._accept_edit("set_quantity", product_id):
            self._reconciler.set_quantity(product_id, quantity)

    def remove_item(self, product_id: str) -> None:
        if self._accept_edit("remove_item", product_id):
            self._reconciler.remove_item(product_id)

    def increment(self, product_id: str) -> None:
        if self._accept_edit("increment", product_id):
            current = self._reconciler.current_quantity(product_id)
            self._reconciler.set_quantity(product_id, current + 1)

    def decrement(self, product_id: str) -> None:
        if self._accept_edit("decrement", product_id):
            current = self._reconciler.current_quantity(product_id)
            self._reconciler.set_quantity(product_id, max(0, current - 1))

    # --- Accessors ------------------------------------------------------------

    @property
    def order_id(self) -> str:
        return self._order_id

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_editable(self) -> bool:
        return not self._closed and self._state in _EDITABLE_STATES

    @property
    def order(self) -> Order:
        return self._require_order()

    @property
    def snapshot(self) -> OriginalQuantitySnapshot:
        self._require_order()
        return self._snapshot

    @property
    def reconciler(self) -> LineItemReconciler:
        self._require_order()
        return self._reconciler

    @property
    def catalog(self) -> list[CatalogProduct]:
        return list(self._catalog)

    @property
    def status_label(self) -> str | None:
        """Banner shown instead of the save button on read-only orders."""
        if self._state is EditState.READY_READ_ONLY and self._order is not None:
            return f"Cannot edit in {self._order.status_text} status"
        return None

    # --- Internal helpers -----------------------------------------------------

    def _accept_edit(self, action: str, product_id: str) -> bool:
        if not self.is_editable:
            logger.debug(
                "Ignoring %s on product %s: order %s is %s",
                action, product_id, self._order_id, self._state.value,
            )
            return False
        if self._state is not EditState.READY_EDITABLE:
            self._state = EditState.READY_EDITABLE
        return True

    def _require_order(self) -> Order:
        if self._order is None:
            raise ValidationError(f"Order {self._order_id} is not loaded")
        return self._order
