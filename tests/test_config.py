"""Tests for configuration loading and logger setup."""

from __future__ import annotations

from decimal import Decimal

import pytest

from kbmedic import config as config_module
from kbmedic import logging as logging_module
from kbmedic.config import AppConfig, get_config
from kbmedic.logging import get_logger


@pytest.fixture(autouse=True)
def reset_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def store_config(monkeypatch: pytest.MonkeyPatch) -> AppConfig:
    config = AppConfig(_env_file=None, store_name="Test Pharmacy", log_level="debug")
    monkeypatch.setattr(config_module, "_config", config)
    monkeypatch.setattr(logging_module, "_sink_level", None)
    return config


def test_defaults() -> None:
    config = AppConfig(_env_file=None)

    assert config.database_url == "sqlite+aiosqlite:///kbmedic.db"
    assert config.jwt_algorithm == "HS256"
    assert config.delivery_fee == Decimal("300")
    assert config.free_shipping_threshold == Decimal("5000")


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://shop@db/kbmedic")
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("FREE_SHIPPING_THRESHOLD", "8000")

    config = AppConfig(_env_file=None)

    assert config.database_url == "postgresql+asyncpg://shop@db/kbmedic"
    assert config.jwt_secret == "from-env"
    assert config.free_shipping_threshold == Decimal("8000")


def test_get_config_is_a_singleton() -> None:
    assert get_config() is get_config()


def test_get_config_returns_installed_settings(store_config: AppConfig) -> None:
    assert get_config() is store_config
    assert get_config().store_name == "Test Pharmacy"


def test_get_logger_uses_configured_level(store_config: AppConfig) -> None:
    get_logger("kbmedic.tests")

    assert logging_module._sink_level == "DEBUG"
