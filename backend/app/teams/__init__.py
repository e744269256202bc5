"""
Teams 通知リレーモジュール。

- config: Teams / Graph の設定値（認証情報, デフォルト送信先, フォーマット）
- schemas: リクエスト・送信先・結果の Pydantic モデル
- validator: リクエスト検証と送信先の確定
- formatter: 本文の html / markdown / text 変換
- auth: クライアントクレデンシャルフローでのトークン取得
- client: Microsoft Graph API への HTTP クライアント
- service: 上記を組み合わせた /notify /validate の本体
- router: /notify /validate エンドポイント
"""

from .config import TeamsSettings, get_teams_settings  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    InvalidRequest,
    RemoteAPIError,
    TeamsNotificationError,
)
from .formatter import format_message  # noqa: F401
from .service import TeamsNotificationService  # noqa: F401
from .schemas import (  # noqa: F401
    NotificationRequest,
    NotifyResult,
    ValidateResult,
    ValidationRequest,
)
