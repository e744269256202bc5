# backend/app/teams/schemas.py

"""
Teams 通知リレーで扱うスキーマ定義。

- 受信リクエスト (NotificationRequest / ValidationRequest)
- 検証済みの送信先 (ChannelTarget / ChatTarget)
- Graph API へ送るメッセージ本文 (OutboundMessagePayload)
- 呼び出し元へ返す結果 (NotifyResult / ValidateResult)

※ Credentials 以外のモデルには認証情報を含めないこと。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChannelType(str, Enum):
    """送信先の種別。"""

    CHANNEL = "channel"
    CHAT = "chat"


class MessageFormat(str, Enum):
    """
    メッセージ本文のフォーマット。

    未知の値は TEXT と同じ扱い（formatter 側で解釈する）。
    """

    HTML = "html"
    MARKDOWN = "markdown"
    TEXT = "text"


class ValidationRequest(BaseModel):
    """
    /validate のリクエストボディ（送信先指定のみ）。

    型エラーで 422 にせず validator で 400 を返すため、全フィールドを任意の文字列として受け取る。
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    channel_type: Optional[str] = Field(None, description="channel / chat")
    team_id: Optional[str] = Field(None, description="チャネル送信時のチーム ID")
    channel_id: Optional[str] = Field(None, description="チャネル送信時のチャネル ID")
    chat_id: Optional[str] = Field(None, description="1:1 チャット送信時のチャット ID")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> Any:
        # 数値 ID などもそのまま文字列として扱う
        if value is None or isinstance(value, str):
            return value
        return str(value)


class NotificationRequest(ValidationRequest):
    """/notify のリクエストボディ。"""

    subject: Optional[str] = Field(None, description="メッセージの件名（チャネル投稿のみ表示）")
    format: Optional[str] = Field(None, description="html / markdown / text（省略時は設定値）")
    message: Optional[str] = Field(None, description="本文。空白のみは不可。")


@dataclass(frozen=True)
class ChannelTarget:
    """チームのチャネルへの投稿先。"""

    team_id: str
    channel_id: str


@dataclass(frozen=True)
class ChatTarget:
    """1:1 / グループチャットへの投稿先。"""

    chat_id: str


Target = Union[ChannelTarget, ChatTarget]


@dataclass(frozen=True)
class Credentials:
    """
    クライアントクレデンシャルフローで使用する認証情報。

    client_secret は repr に出さない（ログ混入防止）。
    """

    tenant_id: str
    client_id: str
    client_secret: str = field(repr=False)

    def is_complete(self) -> bool:
        return all(
            value.strip()
            for value in (self.tenant_id, self.client_id, self.client_secret)
        )


class MessageBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(..., alias="contentType", description="html / text")
    content: str


class OutboundMessagePayload(BaseModel):
    """
    Graph API の chatMessage 作成リクエストに渡す本文。

    値のないフィールドは null として送らず省略する (to_graph_json)。
    """

    model_config = ConfigDict(populate_by_name=True)

    subject: Optional[str] = None
    body: MessageBody

    def to_graph_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class NotifyResult(BaseModel):
    """
    /notify の結果。

    status_code はルーターが HTTP ステータスに使うだけで、レスポンスには含めない。
    """

    success: bool
    message_id: Optional[str] = None
    delivered_at: Optional[str] = Field(
        None,
        description="配信時刻（UTC, ISO8601, 秒精度, 末尾 Z）",
    )
    error: Optional[str] = None
    retry_after: Optional[int] = Field(
        None,
        description="再試行までの推奨待ち秒数（429 の Retry-After 由来。参考情報のみ）",
    )
    status_code: int = Field(200, exclude=True)

    def to_response_body(self) -> dict:
        return self.model_dump(exclude_none=True)


class ValidateResult(BaseModel):
    """/validate の結果。valid=False でも status_code は通常 200。"""

    valid: bool
    message: Optional[str] = None
    error: Optional[str] = None
    status_code: int = Field(200, exclude=True)

    def to_response_body(self) -> dict:
        return self.model_dump(exclude_none=True)
