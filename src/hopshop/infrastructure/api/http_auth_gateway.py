"""REST implementation of AuthGateway."""

from __future__ import annotations

from typing import Any

from hopshop.domain.exceptions import AuthenticationError
from hopshop.domain.repository.auth_gateway import AuthGateway
from hopshop.infrastructure.api.client import ApiClient, ApiError


class HttpAuthGateway(AuthGateway):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def login(self, user_id: str, password: str) -> dict[str, Any]:
        try:
            body = self._client.post(
                "/api/hop-user/login", {"userId": user_id, "pass": password}
            )
        except ApiError as exc:
            if exc.status_code in (400, 401, 403):
                raise AuthenticationError("Invalid credentials") from exc
            raise
        return body if isinstance(body, dict) else {}
