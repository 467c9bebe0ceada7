# src/assettag/gui/main_window.py

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeyEvent, QKeySequence
from PySide6.QtWidgets import (
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QProgressBar,
    QPushButton,
    QStackedWidget,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from assettag.config import AppConfig, load_config
from assettag.errors import ParseError
from assettag.gui.label_card import LabelCardWidget, print_widget
from assettag.logic.navigation import parse_page_number
from assettag.logic.session import SessionController, ViewMode
from assettag.render.symbol_renderer import (
    RenderedSymbols,
    RendererGate,
    SymbolBridge,
    load_default_renderer,
)
from assettag.storage.snapshot_store import JsonFileStore, SnapshotStore

logger = logging.getLogger(__name__)

NOTIFY_TIMEOUT_MS = 3000

INPUT_PLACEHOLDER = (
    "例：\n"
    "ZC40-SH-0004\t16T机械硬盘\t16T机械硬盘 NAS用\n"
    "ZC34-SH-0240\t10.2寸 IPAD 64G\t10.2寸 IPAD 64G"
)


class MainWindow(QMainWindow):
    """
    AssetTag のメインウィンドウ。

    - ページ0: Excel からの貼り付け入力
    - ページ1: 资产ラベルを1件ずつ閲覧（← → で移動、印刷）
    """

    PAGE_INPUT = 0
    PAGE_VIEWER = 1

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        store: Optional[SnapshotStore] = None,
        gate: Optional[RendererGate] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("AssetTag Pro - 资产标签")
        self.resize(720, 760)

        self._config = config or load_config()
        if store is None:
            store = SnapshotStore(JsonFileStore(self._config.session_path))
        if gate is None:
            gate = RendererGate(load_default_renderer(self._config.barcode, self._config.qr))
        self._gate = gate

        bridge = SymbolBridge(self._gate, on_rendered=self._on_symbols_rendered)
        self.session = SessionController(store, bridge)

        # UI 構築
        self._create_central_widgets()
        self._create_actions()
        self._create_menus()
        self._create_status_bar()

        # 前回の资产データがあれば閲覧モードで始める
        if self.session.restore():
            n = len(self.session.state.records)
            self._notify(f"已恢复上次的 {n} 条资产数据")
        self._sync_view()

        # 描画機能の読み込みはイベントループに入ってから1回だけ
        QTimer.singleShot(0, self._load_renderer)

    # ─────────────────────────────
    # UI 構築
    # ─────────────────────────────
    def _create_central_widgets(self) -> None:
        self.stack = QStackedWidget(self)

        # ── ページ0: 入力 ─────────────────────
        input_page = QWidget(self.stack)
        input_layout = QVBoxLayout(input_page)

        heading = QLabel("粘贴 Excel 数据", input_page)
        heading.setAlignment(Qt.AlignCenter)
        heading.setStyleSheet("font-size: 20px; font-weight: bold;")
        hint = QLabel(
            "直接从 Excel 复制三列数据：资产编码、资产名称、规格型号。\n"
            "系统会自动识别并生成条形码与二维码。",
            input_page,
        )
        hint.setAlignment(Qt.AlignCenter)
        hint.setStyleSheet("color: #6b7280;")

        self.editor = QPlainTextEdit(input_page)
        self.editor.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.editor.setPlaceholderText(INPUT_PLACEHOLDER)
        self.editor.textChanged.connect(self._on_text_changed)

        self.submit_button = QPushButton(input_page)
        self.submit_button.clicked.connect(self._on_submit)

        input_layout.addWidget(heading)
        input_layout.addWidget(hint)
        input_layout.addWidget(self.editor, 1)
        input_layout.addWidget(self.submit_button)

        # ── ページ1: 閲覧 ─────────────────────
        self.viewer_page = QWidget(self.stack)
        self.viewer_page.setFocusPolicy(Qt.StrongFocus)
        viewer_layout = QVBoxLayout(self.viewer_page)

        self.progress_bar = QProgressBar(self.viewer_page)
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setFixedHeight(4)

        self.card = LabelCardWidget(self.viewer_page)

        nav = QHBoxLayout()
        self.prev_button = QPushButton("← 上一个", self.viewer_page)
        self.prev_button.clicked.connect(self._on_prev)
        self.counter_button = QPushButton(self.viewer_page)
        self.counter_button.setToolTip("点击跳转到指定页码")
        self.counter_button.clicked.connect(self._on_jump)
        self.next_button = QPushButton("下一个 →", self.viewer_page)
        self.next_button.clicked.connect(self._on_next)
        for button in (self.prev_button, self.counter_button, self.next_button):
            # ← → キーを閲覧ページ側で受け取るため、ボタンにはフォーカスを渡さない
            button.setFocusPolicy(Qt.NoFocus)
        nav.addWidget(self.prev_button, 1)
        nav.addWidget(self.counter_button, 0)
        nav.addWidget(self.next_button, 1)

        key_hint = QLabel("提示：可使用键盘 ← → 方向键快速切换", self.viewer_page)
        key_hint.setAlignment(Qt.AlignCenter)
        key_hint.setStyleSheet("color: #9ca3af; font-size: 11px;")

        viewer_layout.addWidget(self.progress_bar)
        viewer_layout.addStretch(1)
        viewer_layout.addWidget(self.card, 0, Qt.AlignHCenter)
        viewer_layout.addStretch(1)
        viewer_layout.addLayout(nav)
        viewer_layout.addWidget(key_hint)

        self.stack.addWidget(input_page)
        self.stack.addWidget(self.viewer_page)
        self.setCentralWidget(self.stack)

    def _create_actions(self) -> None:
        # 印刷（表示中のラベルだけ）
        self.print_action = QAction("打印当前标签(&P)...", self)
        self.print_action.setShortcut(QKeySequence.Print)
        self.print_action.triggered.connect(self._on_print)

        # 入力モードに戻る
        self.edit_action = QAction("返回修改数据(&E)", self)
        self.edit_action.setShortcut("Ctrl+E")
        self.edit_action.triggered.connect(self._on_edit)

        # ページ番号でジャンプ
        self.jump_action = QAction("跳转到页码(&G)...", self)
        self.jump_action.setShortcut("Ctrl+G")
        self.jump_action.triggered.connect(self._on_jump)

        # すべて消去
        self.reset_action = QAction("清空并重新开始(&R)...", self)
        self.reset_action.triggered.connect(self._on_reset)

        # 終了
        self.exit_action = QAction("退出(&Q)", self)
        self.exit_action.setShortcut("Ctrl+Q")
        self.exit_action.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menubar = self.menuBar()

        file_menu = menubar.addMenu("文件(&F)")
        file_menu.addAction(self.print_action)
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        data_menu = menubar.addMenu("数据(&D)")
        data_menu.addAction(self.edit_action)
        data_menu.addAction(self.jump_action)
        data_menu.addSeparator()
        data_menu.addAction(self.reset_action)

        toolbar = self.addToolBar("操作")
        toolbar.setMovable(False)
        toolbar.addAction(self.print_action)
        toolbar.addAction(self.edit_action)
        toolbar.addAction(self.reset_action)

    def _create_status_bar(self) -> None:
        status = QStatusBar(self)
        self.setStatusBar(status)

    # ─────────────────────────────
    # 表示の同期
    # ─────────────────────────────
    def _sync_view(self) -> None:
        """SessionState の内容を画面に反映する。"""
        state = self.session.state
        browsing = state.mode is ViewMode.BROWSING

        for action in (self.print_action, self.edit_action, self.jump_action, self.reset_action):
            action.setEnabled(browsing)

        if not browsing:
            self.stack.setCurrentIndex(self.PAGE_INPUT)
            if self.editor.toPlainText() != state.raw_text:
                self.editor.blockSignals(True)
                self.editor.setPlainText(state.raw_text)
                self.editor.blockSignals(False)
            self.submit_button.setText("重新生成" if state.records else "开始识别生成")
            self.editor.setFocus()
            return

        self.stack.setCurrentIndex(self.PAGE_VIEWER)
        self.card.show_record(state.current_record)
        self.counter_button.setText(state.page_label)
        self.progress_bar.setValue(round(state.progress * 1000))
        self.prev_button.setEnabled(state.index > 0)
        self.next_button.setEnabled(state.index < len(state.records) - 1)
        self.viewer_page.setFocus()

    def _notify(self, message: str) -> None:
        self.statusBar().showMessage(message, NOTIFY_TIMEOUT_MS)

    # ─────────────────────────────
    # 描画機能
    # ─────────────────────────────
    def _load_renderer(self) -> None:
        if self._gate.resolved:
            return
        if self._gate.resolve():
            self.session.refresh_symbols()
        else:
            self._notify("条码/二维码组件加载失败")

    def _on_symbols_rendered(self, result: RenderedSymbols) -> None:
        self.card.show_symbols(result)

    # ─────────────────────────────
    # 入力モード
    # ─────────────────────────────
    def _on_text_changed(self) -> None:
        if self.session.state.mode is ViewMode.EDITING:
            self.session.set_raw_text(self.editor.toPlainText())

    def _on_submit(self) -> None:
        try:
            records = self.session.submit(self.editor.toPlainText())
        except ParseError as e:
            self._notify(str(e))
            return
        except OSError as e:
            logger.error("资产データを保存できませんでした: %s", e)
            self._notify(f"保存失败：{e}")
            return

        self._sync_view()
        self._notify(f"成功识别 {len(records)} 条资产数据")

    # ─────────────────────────────
    # 閲覧モード
    # ─────────────────────────────
    def _on_next(self) -> None:
        if self.session.next():
            self._sync_view()

    def _on_prev(self) -> None:
        if self.session.prev():
            self._sync_view()

    def _ask_page(self) -> Optional[str]:
        state = self.session.state
        text, ok = QInputDialog.getText(
            self,
            "跳转",
            f"跳转到页码 (1-{len(state.records)}):",
            text=str(state.index + 1),
        )
        if not ok:
            return None
        return text

    def _on_jump(self) -> None:
        if self.session.state.mode is not ViewMode.BROWSING:
            return
        page = parse_page_number(self._ask_page())
        if page is None:
            return
        if self.session.jump(page):
            self._sync_view()

    def _on_edit(self) -> None:
        self.session.edit()
        self._sync_view()
        self._notify("已返回编辑模式")

    def _on_reset(self) -> None:
        answer = QMessageBox.question(
            self,
            "清空数据",
            "确定要清空当前列表并返回输入界面吗？此操作不可恢复。",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if answer != QMessageBox.Yes:
            return

        try:
            self.session.reset()
        except OSError as e:
            logger.error("保存データを削除できませんでした: %s", e)
            self._notify(f"清空失败：{e}")
            return
        self._sync_view()
        self._notify("已清空所有数据")

    def _on_print(self) -> None:
        if self.session.state.current_record is None:
            return
        print_widget(self.card, self)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if self.session.state.mode is ViewMode.BROWSING:
            if event.key() == Qt.Key_Right:
                self._on_next()
                return
            if event.key() == Qt.Key_Left:
                self._on_prev()
                return
        super().keyPressEvent(event)
