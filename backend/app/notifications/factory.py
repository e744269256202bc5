# backend/app/notifications/factory.py

"""
配信イベント送出の簡易ファクトリ。

LoggingEventSink のみを登録した CompositeEventEmitter を返す。
"""

from __future__ import annotations

from typing import Optional

from .schemas import DeliveryEvent, DeliveryEventType
from .service import CompositeEventEmitter, EventSink, LoggingEventSink

_event_emitter: Optional[CompositeEventEmitter] = None


def get_event_emitter() -> CompositeEventEmitter:
    """
    アプリ全体で共有する CompositeEventEmitter を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _event_emitter
    if _event_emitter is None:
        _event_emitter = CompositeEventEmitter([LoggingEventSink()])
    return _event_emitter


__all__ = [
    "DeliveryEvent",
    "DeliveryEventType",
    "EventSink",
    "CompositeEventEmitter",
    "LoggingEventSink",
    "get_event_emitter",
]
