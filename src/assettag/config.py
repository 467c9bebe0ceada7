# src/assettag/config.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".assettag"
CONFIG_FILE_NAME = "config.json"
SESSION_FILE_NAME = "session.json"


@dataclass
class BarcodeOptions:
    """python-barcode の ImageWriter に渡す寸法（単位 mm）。"""
    module_width: float = 0.2
    module_height: float = 10.0
    quiet_zone: float = 1.0


@dataclass
class QrOptions:
    box_size: int = 10
    border: int = 0


@dataclass
class AppConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"
    barcode: BarcodeOptions = field(default_factory=BarcodeOptions)
    qr: QrOptions = field(default_factory=QrOptions)

    @property
    def session_path(self) -> Path:
        return self.data_dir / SESSION_FILE_NAME


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _pick(section: dict[str, Any], name: str, default: Any) -> Any:
    """型が合っている値だけ採用し、それ以外は既定値に戻す。"""
    value = section.get(name, default)
    if isinstance(default, float) and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, type(default)) and not isinstance(value, bool):
        return value
    return default


def load_config(data_dir: Path | None = None) -> AppConfig:
    """
    データディレクトリの config.json から設定を読み込む。

    ファイルが無い・壊れている・型が違う項目は既定値で補う。
    設定の不備でアプリの起動を止めることはしない。
    """
    base = Path(data_dir) if data_dir is not None else DEFAULT_DATA_DIR
    config = AppConfig(data_dir=base)

    path = base / CONFIG_FILE_NAME
    if not path.exists():
        return config

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("設定ファイルを読めませんでした (%s): %s", path, e)
        return config

    if not isinstance(raw, dict):
        logger.warning("設定ファイルの形式が不正です: %s", path)
        return config

    level = raw.get("log_level")
    if isinstance(level, str) and isinstance(logging.getLevelName(level.upper()), int):
        config.log_level = level.upper()

    bc = _section(raw, "barcode")
    defaults = BarcodeOptions()
    config.barcode = BarcodeOptions(
        module_width=_pick(bc, "module_width", defaults.module_width),
        module_height=_pick(bc, "module_height", defaults.module_height),
        quiet_zone=_pick(bc, "quiet_zone", defaults.quiet_zone),
    )

    qr = _section(raw, "qr")
    qr_defaults = QrOptions()
    config.qr = QrOptions(
        box_size=_pick(qr, "box_size", qr_defaults.box_size),
        border=_pick(qr, "border", qr_defaults.border),
    )

    return config
