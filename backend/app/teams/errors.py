# backend/app/teams/errors.py

"""
Teams 通知リレーの例外定義。

下位レイヤ (validator / auth / client) はこれらを送出し、
TeamsNotificationService が呼び出し元向けの結果に変換する。
"""

from typing import Optional


class TeamsNotificationError(Exception):
    """Teams 通知リレー全般の基底例外。"""


class InvalidRequest(TeamsNotificationError):
    """リクエスト内容の不備。メッセージはそのままレスポンスの error に入る。"""


class ConfigurationError(TeamsNotificationError):
    """OAuth 認証情報の不足など、設定の不備。"""


class RemoteAPIError(TeamsNotificationError):
    """Microsoft identity platform / Graph API がエラーを返した場合の例外。"""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        retry_after: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.retry_after = retry_after
