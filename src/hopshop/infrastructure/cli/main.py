import click

from hopshop.infrastructure.cli.notification_commands import (
    notifications_check,
    notifications_watch,
)
from hopshop.infrastructure.cli.order_commands import (
    order_catalog,
    order_edit,
    order_list,
    order_show,
    order_status,
)
from hopshop.infrastructure.cli.session_commands import (
    session_login,
    session_logout,
    session_whoami,
)
from hopshop.infrastructure.config import get_settings
from hopshop.infrastructure.logging_config import configure_logging


@click.group()
@click.option("-v", "--verbose", count=True, help="Log more (repeat for debug).")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """HOP SHOP vendor dashboard."""
    settings = get_settings()
    if verbose >= 2:
        configure_logging("DEBUG")
    elif verbose == 1:
        configure_logging("INFO")
    else:
        configure_logging(settings.log_level)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """List, view, edit and update orders."""


@cli.group()
def session() -> None:
    """Sign in and out."""


@cli.group()
def notifications() -> None:
    """Offline / no-camera customer alerts."""


# Register subcommands
order.add_command(order_show)
order.add_command(order_edit)
order.add_command(order_catalog)
order.add_command(order_list)
order.add_command(order_status)
session.add_command(session_login)
session.add_command(session_logout)
session.add_command(session_whoami)
notifications.add_command(notifications_check)
notifications.add_command(notifications_watch)
