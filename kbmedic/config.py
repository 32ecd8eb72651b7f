"""
Configuration — process settings read from the environment and ``.env``.

Variable names match the storefront deployment (``DATABASE_URL``,
``JWT_SECRET``, ...); matching is case-insensitive.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "local"
    log_level: str = "INFO"

    # ── storage ─────────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///kbmedic.db"
    database_echo: bool = False

    # ── auth ────────────────────────────────────────────────────────────────
    jwt_secret: str = "pharmacy-store-secret-key-2024"
    jwt_algorithm: str = "HS256"

    # ── store ───────────────────────────────────────────────────────────────
    store_name: str = "KB-Medic"
    store_phone: str = ""
    delivery_fee: Decimal = Decimal("300")
    free_shipping_threshold: Decimal | None = Decimal("5000")

    # ── http ────────────────────────────────────────────────────────────────
    host: str = "127.0.0.1"
    port: int = 8000


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Process-wide settings, loaded on first use."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


__all__ = ("AppConfig", "get_config")
