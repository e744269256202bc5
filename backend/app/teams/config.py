# backend/app/teams/config.py

"""
Teams 連携に必要な設定値をまとめるモジュール。

OAuth 認証情報はリクエスト処理時に検証する（未設定でもアプリ自体は起動できる）。
未設定のまま /notify や /validate が呼ばれた場合は ConfigurationError になる。
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from app.utils.config import get_env

from .schemas import Credentials

DEFAULT_GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_LOGIN_BASE_URL = "https://login.microsoftonline.com"
GRAPH_DEFAULT_SCOPE = "https://graph.microsoft.com/.default"


@dataclass(frozen=True)
class TeamsSettings:
    """Teams / Microsoft Graph 用の設定値コンテナ。"""

    tenant_id: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = field(default=None, repr=False)
    default_team_id: Optional[str] = None
    default_channel_id: Optional[str] = None
    default_format: str = "text"
    graph_base_url: str = DEFAULT_GRAPH_BASE_URL
    login_base_url: str = DEFAULT_LOGIN_BASE_URL

    @property
    def credentials(self) -> Credentials:
        return Credentials(
            tenant_id=self.tenant_id or "",
            client_id=self.client_id or "",
            client_secret=self.client_secret or "",
        )


@lru_cache()
def get_teams_settings() -> TeamsSettings:
    """
    環境変数から Teams 設定を読み込む。

    認証情報（呼び出し時に検証）:
      - TEAMS_TENANT_ID
      - TEAMS_CLIENT_ID
      - TEAMS_CLIENT_SECRET

    任意:
      - TEAMS_DEFAULT_TEAM_ID    (team_id 省略時のフォールバック)
      - TEAMS_DEFAULT_CHANNEL_ID (channel_id 省略時のフォールバック)
      - TEAMS_DEFAULT_FORMAT     (デフォルト: text)
      - TEAMS_GRAPH_BASE_URL     (デフォルト: https://graph.microsoft.com/v1.0)
      - TEAMS_LOGIN_BASE_URL     (デフォルト: https://login.microsoftonline.com)
    """
    return TeamsSettings(
        tenant_id=get_env("TEAMS_TENANT_ID", required=False),
        client_id=get_env("TEAMS_CLIENT_ID", required=False),
        client_secret=get_env("TEAMS_CLIENT_SECRET", required=False),
        default_team_id=get_env("TEAMS_DEFAULT_TEAM_ID", required=False),
        default_channel_id=get_env("TEAMS_DEFAULT_CHANNEL_ID", required=False),
        default_format=get_env("TEAMS_DEFAULT_FORMAT", default="text", required=False),
        graph_base_url=get_env(
            "TEAMS_GRAPH_BASE_URL",
            default=DEFAULT_GRAPH_BASE_URL,
            required=False,
        ).rstrip("/"),
        login_base_url=get_env(
            "TEAMS_LOGIN_BASE_URL",
            default=DEFAULT_LOGIN_BASE_URL,
            required=False,
        ).rstrip("/"),
    )
