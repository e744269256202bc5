# backend/app/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /notify, /validate エンドポイントを公開する（Teams 通知リレー）
- /health エンドポイントを公開する
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from app.teams.router import close_teams_service, router as teams_router
from app.utils.config import get_env

SERVICE_NAME = "teams-notifications"
SERVICE_VERSION = "1.0.0"


def _configure_logging() -> None:
    level_name = get_env("LOG_LEVEL", default="INFO", required=False).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # httpx の INFO ログにはリクエスト URL が毎回出るので抑える
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    # 共有 httpx.Client を閉じる
    close_teams_service()


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - Teams 通知エンドポイント (/notify, /validate)
    - ヘルスチェックエンドポイント (/health)
    """
    _configure_logging()

    app = FastAPI(
        title="Teams Notification Relay",
        version=SERVICE_VERSION,
        lifespan=_lifespan,
    )

    # ルーター登録
    app.include_router(teams_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        }

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
