"""Tests for settings and process startup."""

import pytest

from ggleap_mcp.config import Environment, base_url_for, get_settings
from ggleap_mcp.dependencies import ServerState
from ggleap_mcp.main import startup_configure


@pytest.fixture
def fresh_settings(monkeypatch):
    """Clear cached settings around a test that changes the environment."""
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def test_base_url_for_environments():
    assert base_url_for("production") == "https://api.ggleap.com/production"
    assert base_url_for(Environment.BETA) == "https://api.ggleap.com/beta"


def test_base_url_for_unknown_environment():
    with pytest.raises(ValueError):
        base_url_for("staging")


def test_settings_defaults(fresh_settings):
    fresh_settings.delenv("GGLEAP_AUTH_TOKEN", raising=False)
    fresh_settings.delenv("GGLEAP_ENVIRONMENT", raising=False)

    settings = get_settings()

    assert settings.GGLEAP_AUTH_TOKEN == ""
    assert settings.GGLEAP_ENVIRONMENT is Environment.PRODUCTION
    assert settings.LOG_LEVEL == "INFO"


@pytest.mark.asyncio
async def test_startup_without_token_stays_unconfigured(fresh_settings, http_client, backend):
    fresh_settings.setenv("GGLEAP_AUTH_TOKEN", "")
    state = ServerState(http_client=http_client)

    await startup_configure(state)

    assert state.auth is None
    assert backend.requests == []


@pytest.mark.asyncio
async def test_startup_configures_from_environment(fresh_settings, http_client, backend):
    fresh_settings.setenv("GGLEAP_AUTH_TOKEN", "S")
    fresh_settings.setenv("GGLEAP_ENVIRONMENT", "beta")
    state = ServerState(http_client=http_client)

    await startup_configure(state)

    assert state.auth is not None
    assert state.auth.base_url == "https://api.ggleap.com/beta"
    assert len(backend.auth_requests) == 1


@pytest.mark.asyncio
async def test_startup_failure_is_not_fatal(fresh_settings, http_client, backend):
    fresh_settings.setenv("GGLEAP_AUTH_TOKEN", "bad")
    backend.auth_status = 401
    state = ServerState(http_client=http_client)

    await startup_configure(state)

    assert state.auth is None
