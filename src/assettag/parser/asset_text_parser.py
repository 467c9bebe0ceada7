# src/assettag/parser/asset_text_parser.py
from __future__ import annotations

from typing import List

from assettag.errors import EmptyInputError, NoValidRowsError
from assettag.models.asset_record import NO_NAME, NO_SPEC, AssetRecord

# 1行目の先頭列がこれらを含んでいたら見出し行とみなす
HEADER_KEYWORDS = ("编码", "Code")
# 完全一致で見出しとみなす値
HEADER_EXACT = ("资产编码",)


def split_columns(line: str) -> List[str]:
    """1行をタブで分割し、各列の前後の空白（\\r を含む）を取り除く。"""
    return [col.strip() for col in line.split("\t")]


def is_header_row(columns: List[str]) -> bool:
    """Excel からコピーした見出し行（资产编码 / Code など）かどうか。"""
    if not columns:
        return False
    first = columns[0]
    if first in HEADER_EXACT:
        return True
    return any(keyword in first for keyword in HEADER_KEYWORDS)


def _is_blank_line(line: str) -> bool:
    # タブを含む行は「空の列が並んだ行」であって空行ではない
    return not line.strip() and "\t" not in line


def _trim_blank_edges(lines: List[str]) -> List[str]:
    start = 0
    end = len(lines)
    while start < end and _is_blank_line(lines[start]):
        start += 1
    while end > start and _is_blank_line(lines[end - 1]):
        end -= 1
    return lines[start:end]


def parse_asset_text(raw_text: str) -> tuple[AssetRecord, ...]:
    """
    Excel から貼り付けたタブ区切りテキストを AssetRecord の並びに変換する。

    - 1行 = 1资产。列は「资产编码 / 资产名称 / 规格型号」の順
    - 先頭行が見出しなら読み飛ばす（判定するのは先頭行だけ）
    - 先頭列が空の行は黙って捨てる
    - 名称・规格が空なら NO_NAME / NO_SPEC を入れる

    何も入力されていなければ EmptyInputError、
    有効な行が1つも無ければ NoValidRowsError を送出する。
    保存などの副作用は一切持たない。
    """
    lines = _trim_blank_edges((raw_text or "").split("\n"))
    if not lines:
        raise EmptyInputError()

    records: List[AssetRecord] = []

    for idx, line in enumerate(lines):
        cols = split_columns(line)

        if idx == 0 and is_header_row(cols):
            continue

        code = cols[0]
        if not code:
            continue

        name = cols[1] if len(cols) > 1 and cols[1] else NO_NAME
        spec = cols[2] if len(cols) > 2 and cols[2] else NO_SPEC

        records.append(AssetRecord(code=code, name=name, spec=spec))

    if not records:
        raise NoValidRowsError()

    return tuple(records)
