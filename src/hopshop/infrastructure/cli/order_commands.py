"""CLI commands for viewing and editing orders."""

from __future__ import annotations

import click

from hopshop.application.catalog_view import ALL_CATEGORIES, CatalogViewHandler, categories
from hopshop.application.dto import OrderDTO
from hopshop.application.edit_order import OrderEditSession
from hopshop.application.list_orders import BOARD_STATUSES, ListOrdersHandler
from hopshop.application.show_order import ShowOrderHandler, to_dto
from hopshop.application.update_order_status import UpdateOrderStatusHandler
from hopshop.domain.exceptions import DomainException
from hopshop.domain.model.order import OrderStatus
from hopshop.infrastructure.api.client import ApiClient
from hopshop.infrastructure.bootstrap import (
    api_client,
    order_repository,
    product_repository,
    session_context,
)
from hopshop.infrastructure.config import Settings


def _client(settings: Settings) -> ApiClient:
    return api_client(settings, session_context(settings))


def _parse_item(raw: str) -> tuple[str, int]:
    """Parse 'Tomatoes:3' into ('Tomatoes', 3)."""
    raw = raw.strip()
    if ":" not in raw:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'Product:Quantity'."
        )
    name, qty_str = raw.rsplit(":", 1)
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid quantity '{qty_str}' for product '{name}'."
        )
    return name.strip(), qty


def _parse_op(raw: str) -> tuple[str, str, int | None]:
    """Parse 'set:Tomatoes:3' or 'remove:Tomatoes'."""
    action, _, rest = raw.strip().partition(":")
    action = action.lower()
    if action == "set":
        name, qty = _parse_item(rest)
        return action, name, qty
    if action == "remove" and rest.strip():
        return action, rest.strip(), None
    raise click.BadParameter(
        f"Invalid edit '{raw}'. Expected 'set:Product:Qty' or 'remove:Product'."
    )


def _resolve(edit: OrderEditSession, ref: str) -> str:
    """Accept a product id or a product name from the original order."""
    snapshot = edit.snapshot
    if ref in snapshot:
        return ref
    for product_id in snapshot:
        line = snapshot.original_line(product_id)
        if line.product_name.lower() == ref.lower():
            return product_id
    for product in edit.catalog:
        if product.name.lower() == ref.lower():
            return product.id
    return ref


def _load(client: ApiClient, order_id: str) -> OrderEditSession:
    edit = OrderEditSession(order_id, order_repository(client), product_repository(client))
    try:
        edit.load()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    return edit


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.short_id}  (status={dto.status})")
    click.echo(f"Centre: {dto.centre}")
    click.echo()

    if not dto.items:
        click.echo("  No items in order")
    else:
        click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>12}")
        click.echo(f"  {'-'*54}")
        for item in dto.items:
            qty = str(item.quantity)
            if item.original_quantity > item.quantity:
                qty = f"{qty} (orig: {item.original_quantity})"
            click.echo(
                f"  {item.product_name:<24} {qty:>5} {item.unit_price:>10} {item.line_total:>12}"
            )
        click.echo(f"  {'-'*54}")

    click.echo(f"  {'Items':<24} {dto.item_count:>5}")
    click.echo(f"  {'Order Total':<24} {dto.total:>29}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: str) -> None:
    """Show an order (read-only)."""
    with _client(settings) as client:
        handler = ShowOrderHandler(order_repo=order_repository(client))
        try:
            dto = handler.handle(order_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("edit")
@click.option("--id", "order_id", required=True, help="Order ID to edit.")
@click.option(
    "--op", "ops", multiple=True,
    help="Edit to apply, in the order given (repeatable): 'set:Product:Qty' "
         "(capped at the original quantity) or 'remove:Product'.",
)
@click.option("--save/--no-save", default=False, help="Send the edited order to the server.")
@click.pass_obj
def order_edit(
    settings: Settings,
    order_id: str,
    ops: tuple[str, ...],
    save: bool,
) -> None:
    """Change quantities on a Draft or Accepted order.

    Quantities can only go down to zero and back up to what was
    originally ordered; products that were never on the order cannot
    be added.
    """
    edits = [_parse_op(raw) for raw in ops]

    with _client(settings) as client:
        edit = _load(client, order_id)

        if (edits or save) and not edit.is_editable:
            raise click.ClickException(edit.status_label)

        for action, ref, qty in edits:
            if action == "set":
                edit.set_quantity(_resolve(edit, ref), qty)
            else:
                edit.remove_item(_resolve(edit, ref))

        _display_order(to_dto(edit.order, edit.snapshot))

        if save:
            try:
                edit.save()
            except DomainException as exc:
                raise click.ClickException(str(exc))
            click.echo()
            click.echo(f"Order #{edit.order.short_id} saved.")


@click.command("catalog")
@click.option("--id", "order_id", required=True, help="Order ID whose catalog to show.")
@click.option("--search", default="", help="Filter by product name.")
@click.option("--category", default=ALL_CATEGORIES, show_default=True, help="Filter by category.")
@click.pass_obj
def order_catalog(settings: Settings, order_id: str, search: str, category: str) -> None:
    """List the products that can be adjusted on an order."""
    with _client(settings) as client:
        edit = _load(client, order_id)
        cards = CatalogViewHandler(edit).handle(search=search, category=category)

        click.echo(f"Categories: {', '.join(categories(edit.catalog))}")
        click.echo(f"{len(cards)} products")
        if edit.status_label:
            click.echo(edit.status_label)
        click.echo()

        if not cards:
            click.echo("No products found.")
            return

        click.echo(f"{'Name':<24} {'Price':>10} {'Qty':>5} {'Max':>5}  Status")
        click.echo("-" * 60)
        for card in cards:
            click.echo(
                f"{card.name:<24} {card.price:>10} {card.current_quantity:>5} "
                f"{card.max_quantity:>5}  {card.badge}"
            )


_STATUS_FILTERS = {s.value.lower(): s for s in BOARD_STATUSES}


@click.command("list")
@click.option(
    "--status", "status_name", default=OrderStatus.ACCEPTED.value, show_default=True,
    help="Board tab to show: 'Accepted', 'Out for Delivery', 'Delivered' or 'All'.",
)
@click.option("--centre", "centre_id", default=None, help="Only orders of this centre.")
@click.option("--mine", is_flag=True, help="Accepted orders assigned to the signed-in vendor.")
@click.option("--search", default="", help="Match order number, centre or product name.")
@click.pass_obj
def order_list(
    settings: Settings,
    status_name: str,
    centre_id: str | None,
    mine: bool,
    search: str,
) -> None:
    """List orders on the order board."""
    status = None
    vendor_id = None
    if mine:
        context = session_context(settings)
        if not context.is_loaded:
            raise click.ClickException("Not signed in. Run 'hopshop session login' first.")
        vendor_id = context.vendor.id
    elif centre_id is None and status_name.lower() != "all":
        status = _STATUS_FILTERS.get(status_name.lower())
        if status is None:
            raise click.BadParameter(
                f"Unknown status '{status_name}'.", param_hint="'--status'"
            )

    with _client(settings) as client:
        handler = ListOrdersHandler(order_repository(client))
        try:
            rows = handler.handle(
                status=status, centre_id=centre_id, vendor_id=vendor_id, search=search
            )
            counts = handler.counts()
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo("  ".join(f"{name}: {n}" for name, n in counts.items()))
    click.echo()
    if not rows:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<12} {'Centre':<20} {'Status':<18} {'Items':>5} {'Total':>12}")
    click.echo("-" * 71)
    for row in rows:
        status_col = row.status
        if row.payment_status:
            status_col = f"{status_col} ({row.payment_status})"
        click.echo(
            f"{row.order_no:<12} {row.centre:<20} {status_col:<18} "
            f"{row.item_count:>5} {row.total:>12}"
        )


_ACTIONS = {
    "dispatch": OrderStatus.OUT_FOR_DELIVERY,
    "deliver": OrderStatus.DELIVERED,
}


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.argument("action", type=click.Choice(sorted(_ACTIONS)))
@click.pass_obj
def order_status(settings: Settings, order_id: str, action: str) -> None:
    """Move an order along the delivery flow.

    'dispatch' accepts the order and sends it out for delivery;
    'deliver' marks an order that is out for delivery as delivered.
    """
    with _client(settings) as client:
        handler = UpdateOrderStatusHandler(order_repository(client))
        try:
            row = handler.handle(order_id, _ACTIONS[action])
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Order #{row.short_id} is now {row.status}.")
