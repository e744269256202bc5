# backend/app/teams/formatter.py

"""
メッセージ本文を Graph API の chatMessage body 形式に変換する。
"""

import html
import re
from typing import Optional, Tuple

from .schemas import MessageFormat

# 置換は上から順に適用する（** を * より先に処理しないと太字が斜体に化ける）
_MARKDOWN_RULES = (
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    (re.compile(r"`(.*?)`"), r"<code>\1</code>"),
    (re.compile(r"\n"), "<br />"),
)


def markdown_to_html(text: str) -> str:
    """
    ごく簡易な Markdown → HTML 変換。

    全体を HTML エスケープした後に太字・斜体・インラインコード・改行のみを変換する。
    """
    converted = html.escape(text, quote=True)
    for pattern, replacement in _MARKDOWN_RULES:
        converted = pattern.sub(replacement, converted)
    return converted


def format_message(message: Optional[str], format_: Optional[str]) -> Tuple[str, str]:
    """
    本文とフォーマット指定から (content, contentType) を返す。

    - html: そのまま渡す（サニタイズは呼び出し元の責任）
    - markdown: markdown_to_html で変換
    - それ以外: HTML エスケープしたプレーンテキスト
    """
    text = "" if message is None else str(message)

    if format_ == MessageFormat.HTML.value:
        return text, "html"
    if format_ == MessageFormat.MARKDOWN.value:
        return markdown_to_html(text), "html"
    return html.escape(text, quote=True), "text"
