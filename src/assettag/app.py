# src/assettag/app.py
"""
AssetTag のアプリ起動処理。

- config.json を読み込み、ログ出力を設定
- PySide6 の QApplication を立ち上げて MainWindow を表示
"""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from assettag.config import load_config
from assettag.gui.main_window import MainWindow


def main() -> int:
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    win = MainWindow(config=config)
    win.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
