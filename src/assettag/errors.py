# src/assettag/errors.py
"""
AssetTag の例外階層。

- ParseError 系は貼り付けテキストの解析失敗（ユーザー向けメッセージを持つ）
- RestoreCorruptError は保存データ破損（呼び出し側で「保存なし」として扱う）
- RendererUnavailableError は条码/二维码の描画機能が使えない状態
- SessionStateError は現在のモードでは実行できない操作
"""

from __future__ import annotations


class AssetTagError(Exception):
    """AssetTag 共通の基底例外。"""


class ParseError(AssetTagError):
    user_message = "数据解析失败"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class EmptyInputError(ParseError):
    user_message = "请先粘贴数据"


class NoValidRowsError(ParseError):
    user_message = "未能识别有效数据，请确保从Excel直接复制"


class RestoreCorruptError(AssetTagError):
    pass


class RendererUnavailableError(AssetTagError):
    pass


class SessionStateError(AssetTagError):
    pass
