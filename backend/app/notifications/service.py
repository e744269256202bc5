# backend/app/notifications/service.py

"""
配信イベントの送出インターフェースと最小実装。

- DeliveryEvent を受け取る emit() インターフェース
- ログ出力のみ行う LoggingEventSink
- 複数 Sink にファンアウトする CompositeEventEmitter
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from .schemas import DeliveryEvent

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """
    配信イベント受け取りの最小インターフェース。

    実装例:
    - LoggingEventSink: ログ出力のみ
    """

    def emit(self, event: DeliveryEvent) -> None:  # pragma: no cover - Protocol
        ...


class LoggingEventSink:
    """DeliveryEvent を Python の logger に INFO で記録するだけの Sink。"""

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    def emit(self, event: DeliveryEvent) -> None:
        self._logger.info(
            "[%s] %s target=%s message_id=%s format=%s delivered_at=%s",
            event.event_type.value,
            event.channel_type,
            event.target_id,
            event.message_id,
            event.format,
            event.delivered_at,
        )


class CompositeEventEmitter:
    """
    複数の EventSink にイベントをファンアウトする。

    Sink の失敗は記録するだけで、配信結果には影響させない。
    """

    def __init__(self, sinks: Iterable[EventSink]) -> None:
        self._sinks: List[EventSink] = list(sinks)

    def emit(self, event: DeliveryEvent) -> None:
        for sink in self._sinks:
            try:
                sink.emit(event)
            except Exception:  # noqa: BLE001 - 監査イベントは本処理を止めない
                logger.exception(
                    "Event sink %s failed for %s. Continuing with others.",
                    type(sink).__name__,
                    event.message_id,
                )
