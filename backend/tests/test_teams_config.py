# backend/tests/test_teams_config.py

import pytest

from app.teams.config import get_teams_settings
from app.utils.config import EnvVarMissingError, get_env, get_env_int


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_teams_settings.cache_clear()
    yield
    get_teams_settings.cache_clear()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("TEAMS_TENANT_ID", "tenant-x")
    monkeypatch.setenv("TEAMS_CLIENT_ID", "client-x")
    monkeypatch.setenv("TEAMS_CLIENT_SECRET", "secret-x")
    monkeypatch.setenv("TEAMS_DEFAULT_TEAM_ID", "team-x")
    monkeypatch.setenv("TEAMS_DEFAULT_FORMAT", "markdown")
    monkeypatch.setenv("TEAMS_GRAPH_BASE_URL", "https://graph.example.com/beta/")

    settings = get_teams_settings()

    assert settings.credentials.is_complete()
    assert settings.default_team_id == "team-x"
    assert settings.default_channel_id is None
    assert settings.default_format == "markdown"
    assert settings.graph_base_url == "https://graph.example.com/beta"
    assert settings.login_base_url == "https://login.microsoftonline.com"
    assert "secret-x" not in repr(settings)


def test_missing_credentials_do_not_fail_at_load(monkeypatch):
    monkeypatch.delenv("TEAMS_CLIENT_SECRET", raising=False)

    settings = get_teams_settings()

    assert settings.client_secret is None
    assert settings.credentials.is_complete() is False
    assert settings.default_format == "text"


def test_get_env_treats_blank_as_missing(monkeypatch):
    monkeypatch.setenv("SOME_BLANK_VAR", "   ")

    assert get_env("SOME_BLANK_VAR", default="fallback", required=False) == "fallback"
    with pytest.raises(EnvVarMissingError):
        get_env("SOME_BLANK_VAR")


def test_get_env_int(monkeypatch):
    monkeypatch.setenv("SOME_INT_VAR", "8081")
    assert get_env_int("SOME_INT_VAR", 1) == 8081

    monkeypatch.setenv("SOME_INT_VAR", "eighty")
    with pytest.raises(RuntimeError):
        get_env_int("SOME_INT_VAR", 1)
