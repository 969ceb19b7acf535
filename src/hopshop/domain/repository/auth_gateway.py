"""Abstract gateway for the login endpoint."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class AuthGateway(ABC):

    @abstractmethod
    def login(self, user_id: str, password: str) -> dict[str, Any]:
        """Post credentials and return the decoded response body."""
