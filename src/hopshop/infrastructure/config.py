"""Runtime configuration, read from ``HOPSHOP_*`` environment variables or ``.env``."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HOPSHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Origin of the REST API; every endpoint path is relative to it.
    api_url: str = "http://localhost:5000"

    # Stands in for the browser's local storage.
    session_file: Path = Path.home() / ".hopshop" / "session.json"

    # None leaves httpx's default timeout in place.
    request_timeout: float | None = None

    notification_interval: float = 300.0

    # Comma separated vendor ids that see the KK stock column.
    kk_stock_vendor_ids: str = ""

    log_level: str = "WARNING"

    @property
    def kk_stock_vendors(self) -> frozenset[str]:
        return frozenset(
            v.strip() for v in self.kk_stock_vendor_ids.split(",") if v.strip()
        )


def get_settings() -> Settings:
    return Settings()
