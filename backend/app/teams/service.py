# backend/app/teams/service.py

"""
Teams 通知リレーのサービス層。

validator / TokenAcquirer / formatter / GraphClient を組み合わせて
/notify と /validate の処理を行い、すべての例外を NotifyResult / ValidateResult に変換する。
ここより外（ルーター）に例外を漏らさない。
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from app.notifications.schemas import DeliveryEvent
from app.notifications.service import EventSink

from .auth import TokenAcquirer
from .client import GraphClient
from .config import TeamsSettings
from .errors import ConfigurationError, InvalidRequest, RemoteAPIError
from .formatter import format_message
from .validator import resolve_target, validate_notification_request
from .schemas import (
    ChannelTarget,
    ChatTarget,
    MessageBody,
    NotificationRequest,
    NotifyResult,
    OutboundMessagePayload,
    Target,
    ValidateResult,
    ValidationRequest,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"
REMOTE_ERROR_PREFIX = "Teams API error: "


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _target_id(target: Target) -> str:
    if isinstance(target, ChannelTarget):
        return f"{target.team_id}/{target.channel_id}"
    return target.chat_id


class TeamsNotificationService:
    """
    Teams へのメッセージ送信と送信先の存在確認を行うサービス。

    責務:
    - リクエスト検証と送信先の確定
    - アクセストークン取得（リクエストごと、キャッシュなし）
    - 本文の整形と Graph API 呼び出し
    - 例外 → 結果モデルへの変換（retry_after は参考情報として返すだけで再送はしない）
    - 送信成功時の配信イベント送出

    状態は持たないので、同一インスタンスを並行リクエストで共有してよい。
    """

    def __init__(
        self,
        settings: TeamsSettings,
        token_acquirer: TokenAcquirer,
        graph_client: GraphClient,
        *,
        event_sink: Optional[EventSink] = None,
        logger_: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings
        self._tokens = token_acquirer
        self._graph = graph_client
        self._events = event_sink
        self._logger = logger_ or logger

    def close(self) -> None:
        self._graph.close()

    # ---- 公開 API ------------------------------------------------------

    def notify(self, request: NotificationRequest) -> NotifyResult:
        """メッセージを 1 件送信し、結果を NotifyResult で返す。"""
        try:
            return self._notify(request)
        except (InvalidRequest, ConfigurationError) as exc:
            return NotifyResult(success=False, error=str(exc), status_code=400)
        except RemoteAPIError as exc:
            self._logger.warning(
                "Teams API error during notify: status=%s retry_after=%s message=%s",
                exc.status,
                exc.retry_after,
                exc.message,
            )
            return NotifyResult(
                success=False,
                error=REMOTE_ERROR_PREFIX + exc.message,
                retry_after=exc.retry_after,
                status_code=exc.status or 502,
            )
        except Exception:  # noqa: BLE001
            self._logger.exception("Unexpected error while sending Teams notification")
            return NotifyResult(success=False, error=INTERNAL_ERROR_MESSAGE, status_code=500)

    def validate(self, request: ValidationRequest) -> ValidateResult:
        """
        送信先のチャネル / チャットに到達できるか確認する。

        ドメイン上の失敗（入力不備・設定不備・Graph のエラー）はすべて valid=False で返す。
        """
        try:
            token = self._tokens.acquire_token(self._settings.credentials)
            target = self._resolve_target(request)
            if isinstance(target, ChannelTarget):
                self._graph.get_channel(token, target)
            else:
                self._graph.get_chat(token, target)
        except (InvalidRequest, ConfigurationError) as exc:
            return ValidateResult(valid=False, error=str(exc))
        except RemoteAPIError as exc:
            self._logger.info(
                "Teams target validation failed: status=%s message=%s",
                exc.status,
                exc.message,
            )
            return ValidateResult(valid=False, error=REMOTE_ERROR_PREFIX + exc.message)
        except Exception:  # noqa: BLE001
            self._logger.exception("Unexpected error while validating Teams target")
            return ValidateResult(valid=False, error=INTERNAL_ERROR_MESSAGE, status_code=500)

        return ValidateResult(valid=True, message="configuration is valid")

    # ---- 内部ヘルパー -------------------------------------------------

    def _resolve_target(self, request: ValidationRequest) -> Target:
        return resolve_target(
            request,
            default_team_id=self._settings.default_team_id,
            default_channel_id=self._settings.default_channel_id,
        )

    def _notify(self, request: NotificationRequest) -> NotifyResult:
        target = validate_notification_request(
            request,
            default_team_id=self._settings.default_team_id,
            default_channel_id=self._settings.default_channel_id,
        )
        token = self._tokens.acquire_token(self._settings.credentials)

        format_ = request.format or self._settings.default_format
        payload = self._build_payload(request, format_)

        if isinstance(target, ChannelTarget):
            response = self._graph.send_channel_message(token, target, payload)
        elif isinstance(target, ChatTarget):
            response = self._graph.send_chat_message(token, target, payload)
        else:  # pragma: no cover - Target は 2 種類のみ
            raise TypeError(f"Unknown target: {target!r}")

        delivered_at = _utc_timestamp()
        message_id = self._message_id(response)
        self._emit_delivered(target, message_id, format_, delivered_at)

        return NotifyResult(
            success=True,
            message_id=message_id,
            delivered_at=delivered_at,
        )

    def _build_payload(
        self, request: NotificationRequest, format_: str
    ) -> OutboundMessagePayload:
        content, content_type = format_message(request.message, format_)
        return OutboundMessagePayload(
            subject=request.subject,
            body=MessageBody(content_type=content_type, content=content),
        )

    @staticmethod
    def _message_id(response: Any) -> Optional[str]:
        if isinstance(response, dict) and response.get("id") is not None:
            return str(response["id"])
        return None

    def _emit_delivered(
        self,
        target: Target,
        message_id: Optional[str],
        format_: str,
        delivered_at: str,
    ) -> None:
        if self._events is None:
            return

        event = DeliveryEvent(
            channel_type="channel" if isinstance(target, ChannelTarget) else "chat",
            target_id=_target_id(target),
            message_id=message_id,
            format=format_,
            delivered_at=delivered_at,
        )
        try:
            self._events.emit(event)
        except Exception:  # noqa: BLE001 - 監査イベントの失敗で配信結果を変えない
            self._logger.exception("Failed to emit delivery event")
