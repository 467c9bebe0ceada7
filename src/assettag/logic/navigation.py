# src/assettag/logic/navigation.py

from __future__ import annotations

import re

# 全体が10進数として読めるか（"12", "3.7", "1e3", ".5" など）
_NUMERIC_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
# 先頭の整数部分
_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


class NavigationCursor:
    """
    资产一覧のうち「いま表示している1件」の位置（0始まり）。

    1つの资产一覧の件数に結び付いており、一覧が差し替わったら作り直す。
    端での next/prev や範囲外の jump は何もしない（エラーにしない）。
    各操作は位置が実際に動いたかどうかを返す。
    """

    def __init__(self, length: int) -> None:
        self.length = max(0, length)
        self.index = 0

    def next(self) -> bool:
        if self.index < self.length - 1:
            self.index += 1
            return True
        return False

    def prev(self) -> bool:
        if self.index > 0:
            self.index -= 1
            return True
        return False

    def jump(self, page: int) -> bool:
        """1始まりのページ番号で移動する。範囲外なら無視。"""
        target = page - 1
        if target < 0 or target >= self.length:
            return False
        moved = target != self.index
        self.index = target
        return moved

    def reset(self) -> None:
        self.index = 0


def parse_page_number(text: str | None) -> int | None:
    """
    ジャンプ用プロンプトの入力をページ番号に変換する。

    入力全体が数値として読めることを確認したうえで、先頭の整数部分を使う。

        "3" -> 3, " 12 " -> 12, "3.7" -> 3, "1e3" -> 1
        "3abc" -> None, "inf" -> None, ".5" -> None

    None の場合、呼び出し側は何もしない。
    """
    if text is None:
        return None
    s = text.strip()
    if not _NUMERIC_RE.match(s):
        return None
    m = _LEADING_INT_RE.match(s)
    if m is None:
        return None
    return int(m.group(0))
