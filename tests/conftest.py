"""Shared pytest fixtures."""

import shutil
from pathlib import Path

import pytest

from recreator.utils.config import reset_settings
from recreator.utils.logging_config import reset_logging


@pytest.fixture(scope="session", autouse=True)
def backup_env_file():
    """Backup .env file during test session to prevent pollution."""
    env_file = Path(".env")
    backup_file = Path(".env.test_backup")

    if env_file.exists():
        shutil.copy(env_file, backup_file)
        env_file.unlink()

    yield

    if backup_file.exists():
        shutil.move(backup_file, env_file)


@pytest.fixture
def app_env(monkeypatch):
    """Minimal valid environment with a hosted OpenAI key and fast retries."""
    for name in ("CUSTOM_LLM_BASE_URL", "CUSTOM_LLM_MODEL", "CUSTOM_LLM_API_KEY", "LLM_SYSTEM_PROMPT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APP_NAME", "test-app")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("LLM_API_KEY", "test-openai-key")
    monkeypatch.setenv("LLM_DEFAULT_MODEL", "gpt-4.1-mini")
    monkeypatch.setenv("LLM_MAX_RETRIES", "2")
    monkeypatch.setenv("LLM_RETRY_DELAY", "0.01")

    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()
