"""Vendor session: who is signed in, with which token and capabilities.

The session is loaded once from the session store and handed to the
screens that need it, instead of every screen reading the store on its
own. Capabilities are resolved at load time from configured vendor ids.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from hopshop.domain.exceptions import AuthenticationError, SessionNotLoadedError
from hopshop.domain.repository.auth_gateway import AuthGateway
from hopshop.domain.repository.session_store import SessionStore

logger = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
PROFILE_KEY = "userData"
VENDOR_ROLE = "Vendor"


@dataclass(frozen=True)
class VendorProfile:
    id: str
    name: str
    role: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @staticmethod
    def from_raw(raw: dict[str, Any]) -> VendorProfile:
        return VendorProfile(
            id=str(raw.get("_id") or raw.get("id") or ""),
            name=raw.get("name") or "",
            role=raw.get("role") or "",
            raw=dict(raw),
        )


@dataclass(frozen=True)
class VendorCapabilities:
    show_kk_stock: bool = False


class SessionContext:

    def __init__(
        self,
        store: SessionStore,
        kk_stock_vendor_ids: frozenset[str] = frozenset(),
    ) -> None:
        self._store = store
        self._kk_stock_vendor_ids = kk_stock_vendor_ids
        self._token: str | None = None
        self._vendor: VendorProfile | None = None
        self._capabilities = VendorCapabilities()

    def load(self) -> bool:
        """Read token and profile from the store.

        Returns False (and stays unloaded) when nobody is signed in or the
        stored profile cannot be parsed.
        """
        self._reset()
        token = self._store.get(TOKEN_KEY)
        raw_profile = self._store.get(PROFILE_KEY)
        if not token or not raw_profile:
            return False

        try:
            profile = json.loads(raw_profile)
        except json.JSONDecodeError:
            logger.error("Stored vendor profile is not valid JSON; ignoring it")
            return False
        if not isinstance(profile, dict):
            logger.error("Stored vendor profile is not an object; ignoring it")
            return False

        self._token = token
        self._vendor = VendorProfile.from_raw(profile)
        self._capabilities = VendorCapabilities(
            show_kk_stock=self._vendor.id in self._kk_stock_vendor_ids,
        )
        logger.debug("Session loaded for vendor %s", self._vendor.id)
        return True

    def clear(self) -> None:
        """Sign out: forget the token and profile here and in the store."""
        self._store.remove(TOKEN_KEY)
        self._store.remove(PROFILE_KEY)
        self._reset()

    @property
    def is_loaded(self) -> bool:
        return self._token is not None

    @property
    def token(self) -> str:
        if self._token is None:
            raise SessionNotLoadedError("Not signed in")
        return self._token

    @property
    def vendor(self) -> VendorProfile:
        if self._vendor is None:
            raise SessionNotLoadedError("Not signed in")
        return self._vendor

    @property
    def capabilities(self) -> VendorCapabilities:
        return self._capabilities

    def _reset(self) -> None:
        self._token = None
        self._vendor = None
        self._capabilities = VendorCapabilities()


class LoginHandler:

    def __init__(self, auth_gateway: AuthGateway, store: SessionStore) -> None:
        self._auth_gateway = auth_gateway
        self._store = store

    def handle(self, user_id: str, password: str) -> VendorProfile:
        """Sign in and persist the session. Only vendors are let in."""
        if not user_id or not password:
            raise AuthenticationError("User ID and password are required")

        body = self._auth_gateway.login(user_id, password)
        token, user = self._extract(body)

        if not user or user.get("role") != VENDOR_ROLE:
            logger.info("Rejected login for %s: role check failed", user_id)
            raise AuthenticationError("Login not allowed.")

        self._store.set(TOKEN_KEY, token)
        self._store.set(PROFILE_KEY, json.dumps(user))
        profile = VendorProfile.from_raw(user)
        logger.info("Vendor %s signed in", profile.id)
        return profile

    @staticmethod
    def _extract(body: dict[str, Any]) -> tuple[str, dict[str, Any] | None]:
        # The API answers either {success, data: {token, hopUser}} or
        # {token, hopUser}.
        if body.get("success") is True:
            data = body.get("data") or {}
            token, user = data.get("token"), data.get("hopUser")
        elif body.get("token") and body.get("hopUser"):
            token, user = body["token"], body["hopUser"]
        elif not body:
            raise AuthenticationError(
                "Server returned empty response. Please check your API endpoint."
            )
        else:
            raise AuthenticationError(body.get("message") or "Login failed")

        if not token:
            raise AuthenticationError("Server response did not include a token")
        return token, user
