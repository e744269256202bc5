# backend/app/teams/validator.py

"""
受信リクエストの検証と送信先 (Target) の確定。

最初に違反したルールで InvalidRequest を投げる（複数エラーの集約はしない）。
エラーメッセージはそのままレスポンスに載るため、文言を変える場合はテストも合わせること。
"""

from typing import Optional

from .errors import InvalidRequest
from .schemas import (
    ChannelTarget,
    ChannelType,
    ChatTarget,
    NotificationRequest,
    Target,
    ValidationRequest,
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def resolve_target(
    request: ValidationRequest,
    *,
    default_team_id: Optional[str] = None,
    default_channel_id: Optional[str] = None,
) -> Target:
    """
    channel_type に応じて必須フィールドを確認し、ChannelTarget / ChatTarget を返す。

    team_id / channel_id が省略（空白のみを含む）された場合は設定値のデフォルトにフォールバックする。
    """
    channel_type = request.channel_type
    if channel_type is None:
        raise InvalidRequest("channel_type is required")

    if channel_type == ChannelType.CHANNEL.value:
        team_id = default_team_id if _is_blank(request.team_id) else request.team_id
        if _is_blank(team_id):
            raise InvalidRequest("team_id is required for channel notifications")
        channel_id = default_channel_id if _is_blank(request.channel_id) else request.channel_id
        if _is_blank(channel_id):
            raise InvalidRequest("channel_id is required for channel notifications")
        return ChannelTarget(team_id=team_id.strip(), channel_id=channel_id.strip())

    if channel_type == ChannelType.CHAT.value:
        if _is_blank(request.chat_id):
            raise InvalidRequest("chat_id is required for chat notifications")
        return ChatTarget(chat_id=request.chat_id.strip())

    raise InvalidRequest(f"unsupported channel_type: {channel_type}")


def validate_notification_request(
    request: NotificationRequest,
    *,
    default_team_id: Optional[str] = None,
    default_channel_id: Optional[str] = None,
) -> Target:
    """/notify 用の検証。message の有無を確認してから送信先を確定する。"""
    if _is_blank(request.message):
        raise InvalidRequest("message is required")

    return resolve_target(
        request,
        default_team_id=default_team_id,
        default_channel_id=default_channel_id,
    )
