"""Test fixtures and configuration for the price API tests."""
from __future__ import annotations

import os
from collections.abc import Iterator

import pytest


def pytest_configure(config):
    """Set up environment variables before any test imports happen."""
    os.environ["ENVIRONMENT"] = "development"
    os.environ["API_PREFIX"] = "/api"
    os.environ["FALLBACK_PRICE_STRATEGY"] = "random"

    try:
        from pricecheck.core.config import get_settings
        get_settings.cache_clear()
    except ImportError:
        pass


from fastapi.testclient import TestClient


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Each test sees settings built from the current environment."""
    from pricecheck.core.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client for the application."""
    from pricecheck.main import app
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unsafe_client() -> Iterator[TestClient]:
    """Test client that returns 500 responses instead of re-raising server errors."""
    from pricecheck.main import app
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def fallback_strategy(monkeypatch):
    """Switch the configured fallback price strategy for one test."""
    from pricecheck.core.config import get_settings

    def _set(strategy: str, **extra: str) -> None:
        monkeypatch.setenv("FALLBACK_PRICE_STRATEGY", strategy)
        for key, value in extra.items():
            monkeypatch.setenv(key.upper(), value)
        get_settings.cache_clear()

    return _set


@pytest.fixture
def test_settings():
    """Get test settings."""
    from pricecheck.core.config import get_settings
    get_settings.cache_clear()
    return get_settings()
