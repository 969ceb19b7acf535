"""CLI commands for the notification feed."""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta

import click

from hopshop.application.notifications import NotificationPoller, NotificationSnapshot
from hopshop.application.session import SessionContext
from hopshop.infrastructure.bootstrap import api_client, notification_feed, session_context
from hopshop.infrastructure.config import Settings


class ReportDay(click.ParamType):
    """'today', 'yesterday' or a YYYY-MM-DD date."""

    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        text = value.strip().lower()
        if text == "today":
            return date.today()
        if text == "yesterday":
            return date.today() - timedelta(days=1)
        try:
            return datetime.strptime(text, "%Y-%m-%d").date()
        except ValueError:
            self.fail(f"'{value}' is not 'today', 'yesterday' or YYYY-MM-DD.", param, ctx)


def _require_session(settings: Settings) -> SessionContext:
    context = session_context(settings)
    if not context.is_loaded:
        raise click.ClickException("Not signed in. Run 'hopshop session login' first.")
    return context


def _display(snapshot: NotificationSnapshot) -> None:
    stamp = snapshot.fetched_at.strftime("%Y-%m-%d %H:%M UTC") if snapshot.fetched_at else "-"
    day = snapshot.day.isoformat() if snapshot.day else "-"
    click.echo(f"[{stamp}] {snapshot.count} offline / no-camera customers on {day}, "
               f"{snapshot.accepted_count} accepted orders")
    for customer in snapshot.customers:
        name = customer.get("name") or customer.get("_id") or "Unknown"
        click.echo(f"  - {name}")


@click.command("check")
@click.option(
    "--date", "day", type=ReportDay(), default="today", show_default=True,
    help="Report date: 'today', 'yesterday' or YYYY-MM-DD.",
)
@click.pass_obj
def notifications_check(settings: Settings, day: date) -> None:
    """Fetch notifications once."""
    context = _require_session(settings)
    with api_client(settings, context) as client:
        poller = NotificationPoller(notification_feed(client), context.vendor.id)
        _display(poller.poll_once(day))


@click.command("watch")
@click.option("--interval", type=float, default=None, help="Seconds between polls.")
@click.pass_obj
def notifications_watch(settings: Settings, interval: float | None) -> None:
    """Poll notifications until interrupted (Ctrl+C)."""
    context = _require_session(settings)
    with api_client(settings, context) as client:
        poller = NotificationPoller(
            notification_feed(client),
            context.vendor.id,
            interval=interval or settings.notification_interval,
            on_update=_display,
        )
        with poller:
            try:
                while poller.running:
                    time.sleep(0.5)
            except KeyboardInterrupt:
                click.echo("Stopped.")
