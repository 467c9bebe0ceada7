# tests/conftest.py
import os

# GUI テストはディスプレイなしで動かす
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from assettag.render.symbol_renderer import RendererGate, SymbolBridge
from assettag.storage.snapshot_store import MemoryStore, SnapshotStore


class FakeRenderer:
    """描画の呼び出しを記録するだけの SymbolRenderer。"""

    def __init__(self, fail_linear=False, fail_matrix=False):
        self.calls = []
        self.fail_linear = fail_linear
        self.fail_matrix = fail_matrix

    def draw_linear(self, code):
        self.calls.append(("linear", code))
        if self.fail_linear:
            raise ValueError("unsupported character")
        return b"linear:" + code.encode("utf-8")

    def draw_matrix(self, code):
        self.calls.append(("matrix", code))
        if self.fail_matrix:
            raise RuntimeError("qr overflow")
        return b"matrix:" + code.encode("utf-8")

    @property
    def linear_codes(self):
        return [code for kind, code in self.calls if kind == "linear"]


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def ready_gate(renderer):
    gate = RendererGate(lambda: renderer)
    gate.resolve()
    return gate


@pytest.fixture
def bridge(ready_gate):
    return SymbolBridge(ready_gate)


@pytest.fixture
def memory_backend():
    return MemoryStore()


@pytest.fixture
def snapshot_store(memory_backend):
    return SnapshotStore(memory_backend)
