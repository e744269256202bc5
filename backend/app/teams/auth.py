# backend/app/teams/auth.py

"""
Microsoft identity platform からアクセストークンを取得する。

クライアントクレデンシャルフロー（ユーザーコンテキストなし）のみ対応。
トークンはリクエストごとに取得し、キャッシュしない。
"""

import logging

import httpx

from .client import parse_json_body
from .config import DEFAULT_LOGIN_BASE_URL, GRAPH_DEFAULT_SCOPE
from .errors import ConfigurationError, RemoteAPIError
from .schemas import Credentials

logger = logging.getLogger(__name__)


class TokenAcquirer:
    """client_id / client_secret を Graph 用のベアラートークンに交換する。"""

    def __init__(
        self,
        http_client: httpx.Client,
        *,
        login_base_url: str = DEFAULT_LOGIN_BASE_URL,
        scope: str = GRAPH_DEFAULT_SCOPE,
    ) -> None:
        self._http = http_client
        self._login_base_url = login_base_url.rstrip("/")
        self._scope = scope

    def token_url(self, tenant_id: str) -> str:
        return f"{self._login_base_url}/{tenant_id}/oauth2/v2.0/token"

    def acquire_token(self, credentials: Credentials) -> str:
        """
        アクセストークンを 1 回だけ取得する（内部リトライなし）。

        :raises ConfigurationError: 認証情報のいずれかが空の場合。
        :raises RemoteAPIError: トークンエンドポイントがエラーを返した、
            もしくはレスポンスに access_token が含まれない場合。
        """
        if not credentials.is_complete():
            raise ConfigurationError("missing Teams OAuth credentials")

        response = self._http.post(
            self.token_url(credentials.tenant_id),
            data={
                "client_id": credentials.client_id,
                "client_secret": credentials.client_secret,
                "scope": self._scope,
                "grant_type": "client_credentials",
            },
        )

        if not response.is_success:
            logger.warning(
                "Token request failed: tenant=%s status=%s",
                credentials.tenant_id,
                response.status_code,
            )
            raise RemoteAPIError(
                "failed to obtain access token",
                status=response.status_code,
            )

        data = parse_json_body(response)
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise RemoteAPIError("missing access_token in response")

        return token
