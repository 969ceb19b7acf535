"""CLI commands for signing in and out."""

from __future__ import annotations

import click

from hopshop.application.session import LoginHandler
from hopshop.domain.exceptions import DomainException
from hopshop.infrastructure.bootstrap import (
    api_client,
    auth_gateway,
    session_context,
    session_store,
)
from hopshop.infrastructure.config import Settings


@click.command("login")
@click.option("--user", "user_id", required=True, help="User ID or email.")
@click.password_option("--password", confirmation_prompt=False, help="Password.")
@click.pass_obj
def session_login(settings: Settings, user_id: str, password: str) -> None:
    """Sign in as a vendor."""
    with api_client(settings) as client:
        handler = LoginHandler(auth_gateway(client), session_store(settings))
        try:
            vendor = handler.handle(user_id=user_id, password=password)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Signed in as {vendor.name or vendor.id}")


@click.command("logout")
@click.pass_obj
def session_logout(settings: Settings) -> None:
    """Forget the stored session."""
    session_context(settings).clear()
    click.echo("Signed out.")


@click.command("whoami")
@click.pass_obj
def session_whoami(settings: Settings) -> None:
    """Show the signed-in vendor."""
    context = session_context(settings)
    if not context.is_loaded:
        raise click.ClickException("Not signed in")

    vendor = context.vendor
    click.echo(f"Vendor:   {vendor.name or 'N/A'}")
    click.echo(f"ID:       {vendor.id}")
    click.echo(f"Role:     {vendor.role}")
    click.echo(f"KK stock: {'yes' if context.capabilities.show_kk_stock else 'no'}")
