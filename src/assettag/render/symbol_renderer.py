# src/assettag/render/symbol_renderer.py
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

import barcode
import qrcode
from barcode.writer import ImageWriter

from assettag.config import BarcodeOptions, QrOptions
from assettag.errors import RendererUnavailableError

logger = logging.getLogger(__name__)

LINEAR_FORMAT = "code128"


class SymbolRenderer(Protocol):
    """资产编码から条码（一维码）と二维码の PNG を作る描画機能。"""

    def draw_linear(self, code: str) -> bytes: ...

    def draw_matrix(self, code: str) -> bytes: ...


class BarcodeSymbolRenderer:
    """
    python-barcode（Code128）と qrcode で PNG を生成する既定の実装。

    ラベル上には编码を別途大きく表示するので、条码の下に文字は入れない。
    """

    def __init__(
        self,
        barcode_options: BarcodeOptions | None = None,
        qr_options: QrOptions | None = None,
    ) -> None:
        self.barcode_options = barcode_options or BarcodeOptions()
        self.qr_options = qr_options or QrOptions()
        self._barcode_class = barcode.get_barcode_class(LINEAR_FORMAT)

    def draw_linear(self, code: str) -> bytes:
        bc = self._barcode_class(str(code), writer=ImageWriter())

        buffer = io.BytesIO()
        bc.write(buffer, options={
            "module_width": self.barcode_options.module_width,
            "module_height": self.barcode_options.module_height,
            "quiet_zone": self.barcode_options.quiet_zone,
            "write_text": False,
            "background": "white",
            "foreground": "black",
        })
        return buffer.getvalue()

    def draw_matrix(self, code: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self.qr_options.box_size,
            border=self.qr_options.border,
        )
        qr.add_data(str(code))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()


class RendererGate:
    """
    描画機能の準備が整ったかどうかを表す1回きりのゲート。

    resolve() はプロセス中に1回だけ loader を呼ぶ。
    loader が失敗したらログに残し、以後ずっと「未準備」のまま（再試行しない）。
    """

    def __init__(self, loader: Callable[[], SymbolRenderer]) -> None:
        self._loader = loader
        self._renderer: Optional[SymbolRenderer] = None
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def ready(self) -> bool:
        return self._renderer is not None

    @property
    def renderer(self) -> SymbolRenderer:
        if self._renderer is None:
            raise RendererUnavailableError("symbol renderer is not ready")
        return self._renderer

    def resolve(self) -> bool:
        if self._resolved:
            return self.ready
        self._resolved = True

        try:
            self._renderer = self._loader()
        except Exception:
            logger.exception("条码/二维码の描画機能を読み込めませんでした")
            return False

        logger.info("条码/二维码の描画機能を読み込みました")
        return True


@dataclass
class RenderedSymbols:
    """1件分の描画結果。失敗した方は None で、理由は errors に入る。"""
    code: str
    linear: Optional[bytes] = None
    matrix: Optional[bytes] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class SymbolBridge:
    """
    表示中の资产が変わるたびに、その编码で条码と二维码を描き直す橋渡し役。

    描画するのは「閲覧モード」「表示中の资产がある」「ゲートが準備済み」の
    3条件がそろったときだけ。描画の失敗はログと結果に残すだけで、
    閲覧や解析の流れを止めない。
    """

    def __init__(
        self,
        gate: RendererGate,
        on_rendered: Callable[[RenderedSymbols], None] | None = None,
    ) -> None:
        self.gate = gate
        self.on_rendered = on_rendered

    def render(self, code: str) -> Optional[RenderedSymbols]:
        if not code:
            return None
        if not self.gate.ready:
            logger.debug("描画機能が未準備のため %s の描画を見送ります", code)
            return None

        renderer = self.gate.renderer
        result = RenderedSymbols(code=code)

        try:
            result.linear = renderer.draw_linear(code)
        except Exception as e:
            logger.warning("条码の生成に失敗しました (%s): %s", code, e)
            result.errors.append(f"linear: {e}")

        try:
            result.matrix = renderer.draw_matrix(code)
        except Exception as e:
            logger.warning("二维码の生成に失敗しました (%s): %s", code, e)
            result.errors.append(f"matrix: {e}")

        if self.on_rendered is not None:
            self.on_rendered(result)
        return result


def load_default_renderer(
    barcode_options: BarcodeOptions | None = None,
    qr_options: QrOptions | None = None,
) -> Callable[[], SymbolRenderer]:
    """RendererGate に渡す loader を作る。"""
    def _load() -> SymbolRenderer:
        return BarcodeSymbolRenderer(barcode_options, qr_options)
    return _load
