# backend/app/notifications/__init__.py

"""
配信イベント（監査ログ）用モジュール群。

/notify でメッセージ送信に成功した後、配信イベントを登録済みの Sink に流す。

構成:
- schemas: 配信イベントのスキーマ
- service: EventSink インターフェースとログ出力実装、ファンアウト
- factory: アプリ全体で共有する CompositeEventEmitter の生成
"""
