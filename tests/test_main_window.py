# tests/test_main_window.py
import pytest
from PySide6.QtCore import Qt

from assettag.config import AppConfig
from assettag.gui.main_window import MainWindow
from assettag.logic.session import ViewMode
from assettag.render.symbol_renderer import RendererGate

from conftest import FakeRenderer


@pytest.fixture
def make_window(qtbot, tmp_path, snapshot_store):
    def _make(renderer=None):
        renderer = renderer or FakeRenderer()
        gate = RendererGate(lambda: renderer)
        win = MainWindow(config=AppConfig(data_dir=tmp_path), store=snapshot_store, gate=gate)
        qtbot.addWidget(win)
        win.show()
        qtbot.waitExposed(win)
        qtbot.waitUntil(lambda: gate.resolved)
        return win
    return _make


def test_starts_in_input_page(make_window):
    win = make_window()
    assert win.stack.currentIndex() == MainWindow.PAGE_INPUT
    assert win.submit_button.text() == "开始识别生成"
    assert not win.print_action.isEnabled()


def test_submit_and_navigate_with_keys(qtbot, make_window):
    renderer = FakeRenderer()
    win = make_window(renderer)

    win.editor.setPlainText("A1\tFoo\tBar\nA2\tBaz\tQux")
    qtbot.mouseClick(win.submit_button, Qt.LeftButton)

    assert win.stack.currentIndex() == MainWindow.PAGE_VIEWER
    assert win.counter_button.text() == "1 / 2"
    assert win.card.code_label.text() == "A1"
    assert win.statusBar().currentMessage() == "成功识别 2 条资产数据"

    qtbot.keyClick(win, Qt.Key_Right)
    assert win.session.state.index == 1
    assert win.card.name_label.text() == "Baz"
    assert not win.next_button.isEnabled()

    qtbot.keyClick(win, Qt.Key_Right)
    assert win.session.state.index == 1

    qtbot.keyClick(win, Qt.Key_Left)
    assert win.counter_button.text() == "1 / 2"
    assert renderer.linear_codes == ["A1", "A2", "A1"]


def test_parse_error_is_shown_in_status_bar(qtbot, make_window):
    win = make_window()
    qtbot.mouseClick(win.submit_button, Qt.LeftButton)
    assert win.stack.currentIndex() == MainWindow.PAGE_INPUT
    assert win.statusBar().currentMessage() == "请先粘贴数据"


def test_jump_prompt(make_window, monkeypatch):
    win = make_window()
    win.editor.setPlainText("A1\nA2\nA3")
    win._on_submit()

    monkeypatch.setattr(win, "_ask_page", lambda: "3")
    win._on_jump()
    assert win.card.code_label.text() == "A3"

    monkeypatch.setattr(win, "_ask_page", lambda: "abc")
    win._on_jump()
    assert win.session.state.index == 2


def test_edit_returns_to_input_with_text(make_window):
    win = make_window()
    win.editor.setPlainText("A1\tFoo")
    win._on_submit()

    win._on_edit()
    assert win.session.state.mode is ViewMode.EDITING
    assert win.stack.currentIndex() == MainWindow.PAGE_INPUT
    assert win.editor.toPlainText() == "A1\tFoo"
    assert win.submit_button.text() == "重新生成"


def test_restores_previous_session(make_window, snapshot_store):
    snapshot_store.save("A1\tFoo\tBar", [])
    first = make_window()
    assert first.stack.currentIndex() == MainWindow.PAGE_INPUT

    first.editor.setPlainText("A1\tFoo\tBar")
    first._on_submit()

    renderer = FakeRenderer()
    second = make_window(renderer)
    assert second.stack.currentIndex() == MainWindow.PAGE_VIEWER
    assert second.card.code_label.text() == "A1"
    assert renderer.linear_codes == ["A1"]
    assert second.card.symbol_code == "A1"


def test_storage_failure_is_shown_in_status_bar(qtbot, make_window, memory_backend, monkeypatch):
    win = make_window()

    def fail(values):
        raise OSError("disk full")

    monkeypatch.setattr(memory_backend, "update", fail)
    win.editor.setPlainText("A1\tFoo")
    qtbot.mouseClick(win.submit_button, Qt.LeftButton)

    assert win.stack.currentIndex() == MainWindow.PAGE_INPUT
    assert win.statusBar().currentMessage() == "保存失败：disk full"
    assert win.session.state.mode is ViewMode.EDITING
