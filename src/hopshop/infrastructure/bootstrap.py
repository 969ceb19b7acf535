"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from hopshop.application.session import SessionContext
from hopshop.infrastructure.api.client import ApiClient
from hopshop.infrastructure.api.http_auth_gateway import HttpAuthGateway
from hopshop.infrastructure.api.http_notification_feed import HttpNotificationFeed
from hopshop.infrastructure.api.http_order_repository import HttpOrderRepository
from hopshop.infrastructure.api.http_product_repository import HttpProductRepository
from hopshop.infrastructure.config import Settings
from hopshop.infrastructure.persistence.json_session_store import JsonSessionStore


def session_store(settings: Settings) -> JsonSessionStore:
    return JsonSessionStore(settings.session_file)


def session_context(settings: Settings) -> SessionContext:
    context = SessionContext(
        session_store(settings), kk_stock_vendor_ids=settings.kk_stock_vendors
    )
    context.load()
    return context


def api_client(settings: Settings, session: SessionContext | None = None) -> ApiClient:
    def token() -> str | None:
        return session.token if session is not None and session.is_loaded else None

    return ApiClient(settings.api_url, token_provider=token, timeout=settings.request_timeout)


def order_repository(client: ApiClient) -> HttpOrderRepository:
    return HttpOrderRepository(client)


def product_repository(client: ApiClient) -> HttpProductRepository:
    return HttpProductRepository(client)


def auth_gateway(client: ApiClient) -> HttpAuthGateway:
    return HttpAuthGateway(client)


def notification_feed(client: ApiClient) -> HttpNotificationFeed:
    return HttpNotificationFeed(client)
