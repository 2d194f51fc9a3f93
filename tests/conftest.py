"""
Pytest configuration and shared fixtures.
"""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bluegreen_service.config import Settings, get_settings
from bluegreen_service.main import create_app

SERVICE_ENV_VARS = [
    "APP_HOST",
    "APP_PORT",
    "APP_POOL",
    "RELEASE_ID",
    "LOG_LEVEL",
    "LOG_JSON",
    "CHAOS_MAX_HANG_S",
    "SHUTDOWN_GRACE_S",
    "MAX_CONNECTIONS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Generator[None, None, None]:
    """Keep the developer's environment and any local .env out of tests."""
    for var in SERVICE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings for a blue pool member."""
    return Settings(_env_file=None, pool="blue", release_id="rel-2024.1")


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Isolated application (own ChaosState) per test."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client running the app lifespan."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def default_client() -> Generator[TestClient, None, None]:
    """Client for an app built from default configuration."""
    with TestClient(create_app(Settings(_env_file=None))) as client:
        yield client
