# backend/app/notifications/schemas.py

"""
配信イベントのスキーマ定義。

※ セキュリティ上の観点から、DeliveryEvent には
  メッセージ本文や OAuth 認証情報を含めないこと。
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DeliveryEventType(str, Enum):
    """
    配信イベントの種別。

    現時点では送信成功のみを発行する。
    """

    MESSAGE_DELIVERED = "message_delivered"


class DeliveryEvent(BaseModel):
    """配信 1 件分の監査情報。"""

    model_config = ConfigDict(frozen=True)

    event_type: DeliveryEventType = Field(
        DeliveryEventType.MESSAGE_DELIVERED,
        description="イベント種別。",
    )
    channel_type: str = Field(..., description="channel / chat")
    target_id: str = Field(
        ...,
        description="送信先 ID（channel は team_id/channel_id、chat は chat_id）。",
    )
    message_id: Optional[str] = Field(None, description="Graph API が払い出したメッセージ ID。")
    format: str = Field(..., description="本文フォーマット（html / markdown / text）。")
    delivered_at: str = Field(..., description="配信時刻（UTC, ISO8601）。")
