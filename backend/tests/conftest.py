# backend/tests/conftest.py
"""
Pytest configuration for Teams notification relay tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import app.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (e.g., TEAMS_TENANT_ID, TEAMS_CLIENT_SECRET).
- Provides shared fixtures for building the service against respx-mocked HTTP.
"""

import os
import sys
from pathlib import Path

import httpx
import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    """
    os.environ.setdefault("TEAMS_TENANT_ID", "dummy-tenant")
    os.environ.setdefault("TEAMS_CLIENT_ID", "dummy-client-id")
    os.environ.setdefault("TEAMS_CLIENT_SECRET", "dummy-client-secret")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture
def teams_settings():
    from app.teams.config import TeamsSettings

    return TeamsSettings(
        tenant_id="tenant-1",
        client_id="client-1",
        client_secret="secret-1",
    )


@pytest.fixture
def http_client():
    with httpx.Client() as client:
        yield client


@pytest.fixture
def build_service(http_client):
    """設定だけ差し替えて TeamsNotificationService を組み立てるファクトリ。"""
    from app.teams.auth import TokenAcquirer
    from app.teams.client import GraphClient
    from app.teams.service import TeamsNotificationService

    def _build(settings, event_sink=None):
        return TeamsNotificationService(
            settings=settings,
            token_acquirer=TokenAcquirer(http_client, login_base_url=settings.login_base_url),
            graph_client=GraphClient(http_client, base_url=settings.graph_base_url),
            event_sink=event_sink,
        )

    return _build
