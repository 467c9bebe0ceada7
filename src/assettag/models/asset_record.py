# src/assettag/models/asset_record.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping

# 名称・规格型号が空のときに表示するプレースホルダ
NO_NAME = "无名称"
NO_SPEC = "无规格型号"


@dataclass(frozen=True)
class AssetRecord:
    """
    资产1件分（Excel の1行）を表すモデル。

    - code: 资产编码（必須・空でない）。重複チェックはしない
    - name: 资产名称（空なら NO_NAME）
    - spec: 规格型号（空なら NO_SPEC）

    生成後は書き換えない。内容を変えたいときはパースし直して丸ごと差し替える。
    """
    code: str
    name: str = NO_NAME
    spec: str = NO_SPEC

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "name": self.name, "spec": self.spec}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssetRecord:
        """
        保存済み JSON の1要素から復元する。
        code が無い・文字列でない場合は ValueError。
        """
        code = data.get("code")
        if not isinstance(code, str) or not code:
            raise ValueError(f"invalid asset code: {code!r}")

        name = data.get("name") or NO_NAME
        spec = data.get("spec") or NO_SPEC
        if not isinstance(name, str) or not isinstance(spec, str):
            raise ValueError(f"invalid asset fields for {code!r}")

        return cls(code=code, name=name, spec=spec)
