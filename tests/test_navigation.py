# tests/test_navigation.py
import pytest

from assettag.logic.navigation import NavigationCursor, parse_page_number


@pytest.mark.parametrize("n", [1, 2, 7])
def test_next_saturates_at_last(n):
    cursor = NavigationCursor(n)
    for _ in range(n + 5):
        cursor.next()
    assert cursor.index == n - 1


@pytest.mark.parametrize("n", [1, 2, 7])
def test_prev_saturates_at_zero(n):
    cursor = NavigationCursor(n)
    cursor.jump(n)
    for _ in range(n + 5):
        cursor.prev()
    assert cursor.index == 0


def test_moves_report_whether_index_changed():
    cursor = NavigationCursor(2)
    assert cursor.prev() is False
    assert cursor.next() is True
    assert cursor.next() is False


def test_jump_is_one_based():
    cursor = NavigationCursor(5)
    assert cursor.jump(3) is True
    assert cursor.index == 2


@pytest.mark.parametrize("page", [0, -1, 6, 100])
def test_jump_out_of_range_is_ignored(page):
    cursor = NavigationCursor(5)
    cursor.jump(2)
    assert cursor.jump(page) is False
    assert cursor.index == 1


def test_reset():
    cursor = NavigationCursor(4)
    cursor.jump(4)
    cursor.reset()
    assert cursor.index == 0


def test_empty_cursor_never_moves():
    cursor = NavigationCursor(0)
    assert not cursor.next()
    assert not cursor.prev()
    assert not cursor.jump(1)
    assert cursor.index == 0


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3", 3),
        (" 12 ", 12),
        ("3.7", 3),
        ("0", 0),
        ("abc", None),
        ("", None),
        ("   ", None),
        (None, None),
        ("nan", None),
        ("inf", None),
        ("1e3", 1),
        ("3abc", None),
        (".5", None),
        ("+4", 4),
        ("-2", -2),
    ],
)
def test_parse_page_number(text, expected):
    assert parse_page_number(text) == expected
