"""Shared fixtures for the descriptor test suite."""

import logging

import pytest

from bulkdata_config.config.settings import get_settings
from bulkdata_config.descriptor.loader import get_config
from bulkdata_config.descriptor.models import ApiClientConfig, AuthType
from bulkdata_config.logging.audit import get_audit_logger

ENV_KEYS = ("BASE_URL", "CLIENT_ID", "CLIENT_SECRET", "LOG_LEVEL", "AUDIT_LOG_FILE")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Start every test without descriptor env vars or cached singletons."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    get_config.cache_clear()

    yield

    get_settings.cache_clear()
    get_config.cache_clear()
    logger = get_audit_logger()
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def sample_env() -> dict[str, str]:
    """A complete, valid environment snapshot."""
    return {
        "BASE_URL": "https://api.example.com",
        "CLIENT_ID": "abc",
        "CLIENT_SECRET": "xyz",
    }


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(BASE_URL="https://api.example.com", LOG_LEVEL="DEBUG")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()
        get_config.cache_clear()

    yield _override


@pytest.fixture
def make_config():
    """Factory fixture: a valid authenticated descriptor with per-test overrides."""
    def _make(**overrides) -> ApiClientConfig:
        fields = {
            "auth_type": AuthType.CLIENT_CREDENTIALS,
            "base_url": "https://api.example.com/api/v1",
            "client_id": "abc",
            "client_secret": "xyz",
            "name": "Test API",
            "group_export_endpoint": "/Group/all/$export",
            "patient_export_endpoint": "/Patient/$export",
            "requires_auth": True,
            "token_endpoint": "https://api.example.com/auth/token",
        }
        fields.update(overrides)
        return ApiClientConfig(**fields)

    return _make


@pytest.fixture
def audit_records():
    """Collect records emitted on the audit logger."""
    records: list[logging.LogRecord] = []

    class _ListHandler(logging.Handler):
        def emit(self, record):
            records.append(record)

    logger = get_audit_logger()
    handler = _ListHandler(level=logging.DEBUG)
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield records

    logger.removeHandler(handler)
    logger.setLevel(previous_level)
