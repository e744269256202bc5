# backend/app/teams/router.py
"""
Teams 通知用の FastAPI ルーター定義。

- POST /notify
- POST /validate

ボディは自前で JSON パースする（壊れた JSON を 422 ではなく 400 で返すため）。
サービス層はブロッキング I/O なので、スレッドプール上で実行する。
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Dict, Tuple

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.notifications.factory import get_event_emitter

from .auth import TokenAcquirer
from .client import GraphClient
from .config import get_teams_settings
from .schemas import NotificationRequest, ValidationRequest
from .service import TeamsNotificationService

router = APIRouter(tags=["teams"])

INVALID_JSON_MESSAGE = "Invalid JSON in request body"
NOT_AN_OBJECT_MESSAGE = "request body must be a JSON object"


@lru_cache()
def get_teams_service() -> TeamsNotificationService:
    """
    TeamsNotificationService のシングルトンインスタンスを取得する。

    httpx.Client はプロセス内で共有する（リクエストごとに状態は持たない）。
    """
    settings = get_teams_settings()
    http_client = httpx.Client()

    return TeamsNotificationService(
        settings=settings,
        token_acquirer=TokenAcquirer(http_client, login_base_url=settings.login_base_url),
        graph_client=GraphClient(http_client, base_url=settings.graph_base_url),
        event_sink=get_event_emitter(),
    )


def close_teams_service() -> None:
    """
    get_teams_service で生成済みのサービスがあれば httpx.Client を閉じ、キャッシュを捨てる。

    アプリ終了時 (lifespan) に呼ばれる。
    """
    if get_teams_service.cache_info().currsize:
        get_teams_service().close()
    get_teams_service.cache_clear()


async def _read_json_object(request: Request) -> Tuple[Dict[str, Any] | None, str | None]:
    """ボディを JSON オブジェクトとして読む。失敗時は (None, エラーメッセージ)。"""
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError):
        # 深すぎるネストも壊れた JSON と同じ扱い
        return None, INVALID_JSON_MESSAGE

    if not isinstance(payload, dict):
        return None, NOT_AN_OBJECT_MESSAGE
    return payload, None


@router.post(
    "/notify",
    summary="Teams のチャネル / チャットにメッセージを送信",
    description=(
        "channel_type=channel なら team_id / channel_id、chat なら chat_id 宛てに "
        "message を送信する。format は html / markdown / text。"
    ),
)
async def post_notify(
    request: Request,
    service: TeamsNotificationService = Depends(get_teams_service),
) -> JSONResponse:
    """
    - 入力不備・認証情報不足 → 400
    - Graph API エラー → Graph のステータスをそのまま返す（不明なら 502）。429 なら retry_after 付き
    - 想定外の内部エラー → 500
    """
    payload, error = await _read_json_object(request)
    if payload is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": error},
        )

    result = await run_in_threadpool(
        service.notify, NotificationRequest.model_validate(payload)
    )
    return JSONResponse(status_code=result.status_code, content=result.to_response_body())


@router.post(
    "/validate",
    summary="Teams の送信先が到達可能か確認",
)
async def post_validate(
    request: Request,
    service: TeamsNotificationService = Depends(get_teams_service),
) -> JSONResponse:
    """
    送信先の検証結果は valid=true/false として常に 200 で返す。
    壊れた JSON は 400、想定外の内部エラーは 500。
    """
    payload, error = await _read_json_object(request)
    if payload is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"valid": False, "error": error},
        )

    result = await run_in_threadpool(
        service.validate, ValidationRequest.model_validate(payload)
    )
    return JSONResponse(status_code=result.status_code, content=result.to_response_body())
