# backend/app/teams/client.py

"""
Microsoft Graph API との通信を担当するクライアントモジュール。
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .errors import RemoteAPIError
from .schemas import ChannelTarget, ChatTarget, OutboundMessagePayload

logger = logging.getLogger(__name__)


def parse_json_body(response: httpx.Response) -> Any:
    """
    レスポンスボディを JSON として読む。

    空ボディや壊れた JSON は例外にせず空の dict として扱う。
    """
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


def _parse_retry_after(response: httpx.Response) -> Optional[int]:
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        # HTTP-date 形式は扱わない
        return None


def _error_message(body: Any, response: httpx.Response) -> str:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("message"):
            return str(body["message"])

    if response.reason_phrase:
        return response.reason_phrase
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return f"HTTP {response.status_code}"


def normalize_response(response: httpx.Response) -> Any:
    """
    Graph API のレスポンスを正規化する。

    - 2xx: パース済みボディをそのまま返す
    - それ以外: RemoteAPIError（status / retry_after / message 付き）
    """
    body = parse_json_body(response)

    if response.is_success:
        return body

    raise RemoteAPIError(
        _error_message(body, response),
        status=response.status_code,
        retry_after=_parse_retry_after(response),
    )


class GraphClient:
    """
    Microsoft Graph API の薄いラッパークライアント。

    - チャネル / チャットへのメッセージ投稿
    - チャネル / チャットの存在確認

    httpx.Client はプロセス単位で共有する想定で、外から注入する。
    タイムアウトは httpx のデフォルトに任せる。
    """

    def __init__(self, http_client: httpx.Client, base_url: str) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        """共有している httpx.Client を閉じる（TokenAcquirer も同じ Client を使う）。"""
        self._http.close()

    def _url(self, *segments: str) -> str:
        path = "/".join(quote(segment, safe=":@") for segment in segments)
        return f"{self._base_url}/{path}"

    def post_message(self, url: str, token: str, payload: Dict[str, Any]) -> Any:
        response = self._http.post(
            url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            json=payload,
        )
        logger.debug("Graph POST %s -> %s", url, response.status_code)
        return normalize_response(response)

    def get_resource(self, url: str, token: str) -> Any:
        response = self._http.get(
            url,
            headers={"Authorization": f"Bearer {token}"},
        )
        logger.debug("Graph GET %s -> %s", url, response.status_code)
        return normalize_response(response)

    # ---- 送信先ごとの操作 ---------------------------------------------

    def send_channel_message(
        self, token: str, target: ChannelTarget, payload: OutboundMessagePayload
    ) -> Any:
        url = self._url("teams", target.team_id, "channels", target.channel_id, "messages")
        return self.post_message(url, token, payload.to_graph_json())

    def send_chat_message(
        self, token: str, target: ChatTarget, payload: OutboundMessagePayload
    ) -> Any:
        url = self._url("chats", target.chat_id, "messages")
        return self.post_message(url, token, payload.to_graph_json())

    def get_channel(self, token: str, target: ChannelTarget) -> Any:
        url = self._url("teams", target.team_id, "channels", target.channel_id)
        return self.get_resource(url, token)

    def get_chat(self, token: str, target: ChatTarget) -> Any:
        url = self._url("chats", target.chat_id)
        return self.get_resource(url, token)
