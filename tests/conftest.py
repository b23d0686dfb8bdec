"""Shared fixtures for envconfig tests."""

import pytest
from loguru import logger

CONFIG_VARS = ("NODE_ENV", "PORT", "DATABASE_URL", "JWT_SECRET", "ENVCONFIG_EXTRA_KEYS")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove the configuration variables from the real process environment."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def log_messages():
    """Collect WARNING-and-above loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="WARNING",
        format="{message}",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def write_env_file(tmp_path):
    """Write a dotenv file into tmp_path and return its path."""
    def _write(content: str, name: str = ".env"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
