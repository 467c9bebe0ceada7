# src/assettag/storage/snapshot_store.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Protocol

from assettag.errors import RestoreCorruptError
from assettag.models.asset_record import AssetRecord

logger = logging.getLogger(__name__)

# 保存キー（2つは独立したエントリとして扱う）
RECORDS_KEY = "asset_records"
RAW_TEXT_KEY = "asset_raw_text"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def update(self, values: Mapping[str, Optional[str]]) -> None:
        """まとめて書き込む。値が None のキーは削除する。"""
        ...


class MemoryStore:
    """プロセス内だけで完結するストア（テスト・一時利用向け）。"""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def update(self, values: Mapping[str, Optional[str]]) -> None:
        for key, value in values.items():
            if value is None:
                self._data.pop(key, None)
            else:
                self._data[key] = value


class JsonFileStore:
    """
    文字列キー → 文字列値 を1つの JSON ファイルに保存するストア。

    保存先の例:
        ~/.assettag/session.json

    JSON 形式:
        {
          "asset_records": "[{\\"code\\": ...}]",
          "asset_raw_text": "..."
        }

    update() は1回のファイル書き込みで完了するので、
    複数キーの削除が途中で止まった状態は残らない。
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("保存ファイルを読めませんでした (%s): %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("保存ファイルの形式が不正です: %s", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def update(self, values: Mapping[str, Optional[str]]) -> None:
        data = self._read_all()
        for key, value in values.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)


@dataclass(frozen=True)
class Snapshot:
    """前回セッションの状態（貼り付けた原文 + 解析済みの资产一覧）。"""
    raw_text: str
    records: tuple[AssetRecord, ...]


def encode_records(records: Iterable[AssetRecord]) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def decode_records(payload: str) -> tuple[AssetRecord, ...]:
    """保存済み JSON 文字列を AssetRecord の並びに戻す。壊れていれば RestoreCorruptError。"""
    try:
        data = json.loads(payload)
    except ValueError as e:
        raise RestoreCorruptError(f"records are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise RestoreCorruptError("records must be a JSON array")

    records = []
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise RestoreCorruptError(f"record #{idx} is not an object")
        try:
            records.append(AssetRecord.from_dict(item))
        except ValueError as e:
            raise RestoreCorruptError(f"record #{idx}: {e}") from e

    return tuple(records)


class SnapshotStore:
    """
    Snapshot の読み書き。

    - save(): 解析に成功したときだけ呼ばれる（records と原文を一緒に上書き）
    - load(): 起動時に1回。records が無い・空なら原文も無視して None
    - clear(): リセット時。両方のキーを1回の書き込みで消す
    """

    def __init__(self, backend: KeyValueStore) -> None:
        self._backend = backend

    def save(self, raw_text: str, records: Iterable[AssetRecord]) -> None:
        self._backend.update({
            RECORDS_KEY: encode_records(records),
            RAW_TEXT_KEY: raw_text,
        })

    def load(self) -> Optional[Snapshot]:
        payload = self._backend.get(RECORDS_KEY)
        if not payload:
            return None

        try:
            records = decode_records(payload)
        except RestoreCorruptError as e:
            logger.warning("保存データが壊れているため無視します: %s", e)
            return None

        if not records:
            return None

        raw_text = self._backend.get(RAW_TEXT_KEY) or ""
        return Snapshot(raw_text=raw_text, records=records)

    def clear(self) -> None:
        self._backend.update({RECORDS_KEY: None, RAW_TEXT_KEY: None})
