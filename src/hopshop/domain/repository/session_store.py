"""Abstract key-value store holding the signed-in vendor's session."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SessionStore(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored string for *key*, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Forget *key*; missing keys are ignored."""
