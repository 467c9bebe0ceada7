# src/assettag/gui/label_card.py

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter, QPixmap
from PySide6.QtPrintSupport import QPrintDialog, QPrinter
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from assettag.models.asset_record import AssetRecord
from assettag.render.symbol_renderer import RenderedSymbols

BARCODE_MAX_HEIGHT = 60
QR_SIZE = 90


def pixmap_from_png(data: Optional[bytes]) -> Optional[QPixmap]:
    if not data:
        return None
    pixmap = QPixmap()
    if not pixmap.loadFromData(data, "PNG"):
        return None
    return pixmap


class LabelCardWidget(QFrame):
    """
    资产1件分のラベル（印刷対象）。

      ASSET TAG
      [ 条码 | 二维码 ]
      Asset Code / Asset Name / Spec / Model
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("labelCard")
        self.setFrameShape(QFrame.StyledPanel)
        self.setStyleSheet("#labelCard { background: white; border-radius: 12px; }")
        self.setMinimumWidth(360)

        # いま条码・二维码を描いている编码（別の资产に移ったら消すため）
        self._symbol_code: Optional[str] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(12)

        title = QLabel("ASSET TAG", self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("color: #9ca3af; font-size: 11px; font-weight: bold; letter-spacing: 3px;")
        layout.addWidget(title)

        # ── 码区：条码と二维码を横並び ─────────────
        symbols = QHBoxLayout()
        self.barcode_label = QLabel(self)
        self.barcode_label.setAlignment(Qt.AlignCenter)
        self.barcode_label.setMinimumHeight(BARCODE_MAX_HEIGHT)
        self.qr_label = QLabel(self)
        self.qr_label.setAlignment(Qt.AlignCenter)
        self.qr_label.setFixedSize(QR_SIZE, QR_SIZE)
        symbols.addWidget(self.barcode_label, 1)
        symbols.addWidget(self.qr_label, 0)
        layout.addLayout(symbols)

        # ── 詳細 ───────────────────────────────
        self.code_label = self._add_field(layout, "Asset Code", "font-family: monospace; font-size: 24px; font-weight: bold;")
        self.name_label = self._add_field(layout, "Asset Name", "font-size: 18px; font-weight: bold;")
        self.spec_label = self._add_field(layout, "Spec / Model", "font-size: 13px; color: #4b5563;")

    def _add_field(self, layout: QVBoxLayout, caption: str, style: str) -> QLabel:
        caption_label = QLabel(caption, self)
        caption_label.setAlignment(Qt.AlignCenter)
        caption_label.setStyleSheet("color: #9ca3af; font-size: 10px; font-weight: bold;")
        value_label = QLabel(self)
        value_label.setAlignment(Qt.AlignCenter)
        value_label.setWordWrap(True)
        value_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        value_label.setStyleSheet(style)
        layout.addWidget(caption_label)
        layout.addWidget(value_label)
        return value_label

    @property
    def symbol_code(self) -> Optional[str]:
        return self._symbol_code

    def show_record(self, record: Optional[AssetRecord]) -> None:
        if record is None:
            self.code_label.clear()
            self.name_label.clear()
            self.spec_label.clear()
            self.clear_symbols()
            return

        self.code_label.setText(record.code)
        self.name_label.setText(record.name)
        self.spec_label.setText(record.spec)

        # 描画が追いついていない間に前の资产の码を残さない
        if self._symbol_code != record.code:
            self.clear_symbols()

    def show_symbols(self, result: RenderedSymbols) -> None:
        self._symbol_code = result.code

        linear = pixmap_from_png(result.linear)
        if linear is not None:
            self.barcode_label.setPixmap(
                linear.scaledToHeight(BARCODE_MAX_HEIGHT, Qt.SmoothTransformation)
            )
        else:
            self.barcode_label.setText("条码生成失败")

        matrix = pixmap_from_png(result.matrix)
        if matrix is not None:
            self.qr_label.setPixmap(
                matrix.scaled(QR_SIZE, QR_SIZE, Qt.KeepAspectRatio, Qt.SmoothTransformation)
            )
        else:
            self.qr_label.setText("二维码生成失败")

    def clear_symbols(self) -> None:
        self._symbol_code = None
        self.barcode_label.clear()
        self.qr_label.clear()


def print_widget(widget: QWidget, parent: Optional[QWidget] = None) -> bool:
    """
    指定ウィジェット（ラベルカード）だけを印刷する。

    印刷ダイアログでキャンセルされたら False。
    """
    printer = QPrinter(QPrinter.HighResolution)
    dialog = QPrintDialog(printer, parent)
    if not dialog.exec():
        return False

    pixmap = widget.grab()
    painter = QPainter(printer)
    try:
        # ページ中央に縦横比を保って配置する
        rect = painter.viewport()
        size = pixmap.size()
        size.scale(rect.size(), Qt.KeepAspectRatio)
        painter.setViewport(
            rect.x() + (rect.width() - size.width()) // 2,
            rect.y() + (rect.height() - size.height()) // 2,
            size.width(),
            size.height(),
        )
        painter.setWindow(pixmap.rect())
        painter.drawPixmap(0, 0, pixmap)
    finally:
        painter.end()
    return True
