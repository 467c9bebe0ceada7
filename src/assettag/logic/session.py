# src/assettag/logic/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from assettag.errors import SessionStateError
from assettag.logic.navigation import NavigationCursor
from assettag.models.asset_record import AssetRecord
from assettag.parser.asset_text_parser import parse_asset_text
from assettag.render.symbol_renderer import RenderedSymbols, SymbolBridge
from assettag.storage.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    EDITING = "editing"     # 貼り付けテキストの入力中
    BROWSING = "browsing"   # 资产を1件ずつ閲覧中


@dataclass
class SessionState:
    """
    画面全体で1つだけ持つ状態。

    書き換えは SessionController のメソッド経由でのみ行う。
    閲覧モード中は records が必ず1件以上ある。
    """
    mode: ViewMode = ViewMode.EDITING
    raw_text: str = ""
    records: tuple[AssetRecord, ...] = ()
    cursor: NavigationCursor = field(default_factory=lambda: NavigationCursor(0))

    @property
    def index(self) -> int:
        return self.cursor.index

    @property
    def current_record(self) -> Optional[AssetRecord]:
        if not self.records:
            return None
        return self.records[self.cursor.index]

    @property
    def page_label(self) -> str:
        """カウンタ表示用（例: "3 / 10"）。"""
        if not self.records:
            return "0 / 0"
        return f"{self.cursor.index + 1} / {len(self.records)}"

    @property
    def progress(self) -> float:
        """進捗バー用の割合（0.0〜1.0）。"""
        if not self.records:
            return 0.0
        return (self.cursor.index + 1) / len(self.records)


class SessionController:
    """
    入力モード / 閲覧モードの切り替えと、资产一覧・カーソル・保存データの更新を担う。

        EDITING --submit 成功--> BROWSING   （一覧差し替え・カーソル0・保存）
        EDITING --submit 失敗--> EDITING    （原文はそのまま残す）
        BROWSING --edit-------> EDITING    （原文・一覧・保存データはそのまま）
        BROWSING --reset------> EDITING    （一覧・原文・保存データをすべて消す）

    閲覧モードに入ったとき・カーソルが動いたときに SymbolBridge で描き直す。
    """

    def __init__(self, store: SnapshotStore, bridge: SymbolBridge | None = None) -> None:
        self.store = store
        self.bridge = bridge
        self.state = SessionState()

    # ─────────────────────────────
    # 起動時の復元
    # ─────────────────────────────
    def restore(self) -> bool:
        """
        前回保存した Snapshot を読み込む。

        1件以上の资产が復元できたら閲覧モードで始める。
        保存が無い・壊れている場合は入力モードのまま（エラーにしない）。
        """
        snapshot = self.store.load()
        if snapshot is None:
            return False

        self._commit(snapshot.raw_text, snapshot.records)
        logger.info("前回の资产データを復元しました (%d 件)", len(snapshot.records))
        return True

    # ─────────────────────────────
    # 入力モード
    # ─────────────────────────────
    def set_raw_text(self, text: str) -> None:
        if self.state.mode is not ViewMode.EDITING:
            raise SessionStateError("raw text can only be edited in editing mode")
        self.state.raw_text = text

    def submit(self, raw_text: str | None = None) -> tuple[AssetRecord, ...]:
        """
        入力テキストを解析して閲覧モードに切り替える。

        解析に失敗したら ParseError、保存に失敗したら OSError をそのまま送出する。
        どちらの場合も入力テキストは入力されたまま残り、モードも変わらない。
        """
        if self.state.mode is not ViewMode.EDITING:
            raise SessionStateError("submit is only available in editing mode")

        if raw_text is not None:
            self.state.raw_text = raw_text

        records = parse_asset_text(self.state.raw_text)

        self.store.save(self.state.raw_text, records)
        self._commit(self.state.raw_text, records)
        logger.info("资产データを %d 件識別しました", len(records))
        return records

    # ─────────────────────────────
    # 閲覧モード
    # ─────────────────────────────
    def edit(self) -> None:
        """入力モードに戻る。原文は消さないのでそのまま修正できる。"""
        self.state.mode = ViewMode.EDITING

    def reset(self) -> None:
        """
        一覧・原文・保存データをすべて消して入力モードに戻る。

        確認ダイアログは呼び出し側（GUI）の責務。ここでは無条件に消す。
        保存データを消せなかった場合は OSError を送出し、画面側の状態も残す。
        """
        self.store.clear()

        self.state = SessionState()
        logger.info("资产データをすべて消去しました")

    def next(self) -> bool:
        return self._move(self.state.cursor.next)

    def prev(self) -> bool:
        return self._move(self.state.cursor.prev)

    def jump(self, page: int) -> bool:
        return self._move(lambda: self.state.cursor.jump(page))

    def refresh_symbols(self) -> Optional[RenderedSymbols]:
        """
        表示中の资产で条码・二维码を描き直す。

        閲覧モードでなければ何もしない。描画機能の準備が整ったときにも呼ぶ。
        """
        if self.bridge is None or self.state.mode is not ViewMode.BROWSING:
            return None
        record = self.state.current_record
        if record is None:
            return None
        return self.bridge.render(record.code)

    # ─────────────────────────────
    # 内部ヘルパー
    # ─────────────────────────────
    def _commit(self, raw_text: str, records: tuple[AssetRecord, ...]) -> None:
        # 一覧・カーソル・モードを新しい SessionState ごと差し替える
        self.state = SessionState(
            mode=ViewMode.BROWSING,
            raw_text=raw_text,
            records=tuple(records),
            cursor=NavigationCursor(len(records)),
        )
        self.refresh_symbols()

    def _move(self, step) -> bool:
        if self.state.mode is not ViewMode.BROWSING:
            return False
        moved = step()
        if moved:
            self.refresh_symbols()
        return moved
