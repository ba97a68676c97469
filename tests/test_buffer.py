from __future__ import annotations

import itertools
from pathlib import Path

import pytest

from rocket_editor.buffer import (
    Buffer,
    BufferIOError,
    BufferValidationError,
    NoPathError,
    grapheme_length,
)


def make_buffer(*lines: str, cursor: tuple[int, int] = (0, 0)) -> Buffer:
    buffer = Buffer(lines=list(lines) or None)
    buffer.set_cursor(*cursor)
    return buffer


def assert_cursor_in_bounds(buffer: Buffer) -> None:
    column, row = buffer.cursor
    assert 0 <= row < len(buffer.lines)
    assert 0 <= column <= grapheme_length(buffer.lines[row])


def test_new_buffer_has_one_empty_line() -> None:
    buffer = Buffer()

    assert buffer.lines == ("",)
    assert buffer.cursor == (0, 0)
    assert buffer.dirty is False
    assert buffer.path is None


def test_move_cursor_clamps_horizontally() -> None:
    buffer = make_buffer("abc")

    buffer.move_cursor(-5, 0)
    assert buffer.cursor == (0, 0)

    buffer.move_cursor(10, 0)
    assert buffer.cursor == (3, 0)


def test_move_cursor_reclamps_column_on_shorter_line() -> None:
    buffer = make_buffer("long line", "ab", cursor=(9, 0))

    buffer.move_cursor(0, 1)

    assert buffer.cursor == (2, 1)


def test_move_cursor_applies_horizontal_before_vertical() -> None:
    buffer = make_buffer("abcdef", "ab", cursor=(2, 1))

    # Horizontal clamp is measured on "ab" before moving up.
    buffer.move_cursor(3, -1)

    assert buffer.cursor == (2, 0)


def test_move_cursor_saturates_rows() -> None:
    buffer = make_buffer("a", "b", "c")

    buffer.move_cursor(0, -3)
    assert buffer.cursor.row == 0

    buffer.move_cursor(0, 10)
    assert buffer.cursor.row == 2


def test_cursor_stays_in_bounds_for_any_move_sequence() -> None:
    buffer = make_buffer("hello", "", "wörld e\u0301", "x")
    moves = [(-1, 0), (1, 0), (0, -1), (0, 1), (4, 2), (-3, -1), (7, 0)]

    for dx, dy in itertools.chain.from_iterable(itertools.repeat(moves, 5)):
        buffer.move_cursor(dx, dy)
        assert_cursor_in_bounds(buffer)


def test_insert_character_appends_and_splices() -> None:
    buffer = make_buffer("ac", cursor=(1, 0))

    buffer.insert_character("b")
    assert buffer.lines == ("abc",)
    assert buffer.cursor == (2, 0)

    buffer.move_cursor(5, 0)
    buffer.insert_character("d")
    assert buffer.lines == ("abcd",)
    assert buffer.cursor == (4, 0)
    assert buffer.dirty is True


@pytest.mark.parametrize("column", [0, 1, 3, 5])
def test_insert_then_delete_backward_is_local_inverse(column: int) -> None:
    buffer = make_buffer("hello", cursor=(column, 0))

    buffer.insert_character("Z")
    buffer.delete_backward()

    assert buffer.lines == ("hello",)
    assert buffer.cursor == (column, 0)


def test_insert_splices_by_grapheme() -> None:
    buffer = make_buffer("e\u0301x", cursor=(1, 0))

    buffer.insert_character("-")

    assert buffer.lines == ("e\u0301-x",)
    assert buffer.cursor == (2, 0)


def test_insert_line_break_at_end_adds_empty_line() -> None:
    buffer = make_buffer("one", "two", cursor=(3, 0))

    buffer.insert_line_break()

    assert buffer.lines == ("one", "", "two")
    assert buffer.cursor == (0, 1)


def test_insert_line_break_splits_line() -> None:
    buffer = make_buffer("hello world", cursor=(5, 0))

    buffer.insert_line_break()

    assert buffer.lines == ("hello", " world")
    assert buffer.current_line() == " world"
    assert buffer.cursor == (0, 1)
    assert buffer.dirty is True


@pytest.mark.parametrize("column", [0, 2, 4])
def test_line_break_then_backspace_round_trips(column: int) -> None:
    buffer = make_buffer("abcd", cursor=(column, 0))

    buffer.insert_line_break()
    buffer.delete_backward()

    assert buffer.lines == ("abcd",)
    assert buffer.cursor == (column, 0)


def test_delete_backward_merges_lines() -> None:
    buffer = make_buffer("foo", "bar", cursor=(0, 1))

    buffer.delete_backward()

    assert buffer.lines == ("foobar",)
    assert buffer.cursor == (3, 0)


def test_delete_backward_at_origin_is_noop() -> None:
    buffer = make_buffer("foo")

    buffer.delete_backward()

    assert buffer.lines == ("foo",)
    assert buffer.cursor == (0, 0)
    assert buffer.dirty is False


def test_delete_backward_removes_whole_grapheme() -> None:
    buffer = make_buffer("ae\u0301b", cursor=(2, 0))

    buffer.delete_backward()

    assert buffer.lines == ("ab",)
    assert buffer.cursor == (1, 0)


def test_delete_forward_removes_character_under_cursor() -> None:
    buffer = make_buffer("abc", cursor=(1, 0))

    buffer.delete_forward()

    assert buffer.lines == ("ac",)
    assert buffer.cursor == (1, 0)


def test_delete_forward_joins_next_line_at_line_end() -> None:
    buffer = make_buffer("ab", "cd", cursor=(2, 0))

    buffer.delete_forward()

    assert buffer.lines == ("abcd",)
    assert buffer.cursor == (2, 0)


def test_delete_forward_at_end_of_last_line_is_noop() -> None:
    buffer = make_buffer("ab", cursor=(2, 0))

    buffer.delete_forward()

    assert buffer.lines == ("ab",)
    assert buffer.dirty is False


def test_save_without_path_raises_and_keeps_state() -> None:
    buffer = make_buffer("draft")
    buffer.insert_character("!")

    with pytest.raises(NoPathError) as excinfo:
        buffer.save()

    assert excinfo.value.kind == "no_path"
    assert isinstance(excinfo.value, BufferIOError)
    assert buffer.dirty is True
    assert buffer.lines == ("!draft",)


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    buffer = make_buffer("abc", "", "def")

    buffer.save_to(str(target))

    assert target.read_text(encoding="utf-8") == "abc\n\ndef\n"
    assert buffer.dirty is False
    assert buffer.last_saved is not None

    fresh = Buffer()
    fresh.load_from(str(target))
    assert fresh.lines == ("abc", "", "def")
    assert fresh.cursor == (0, 0)
    assert fresh.dirty is False
    assert fresh.path == str(target)


def test_from_path_reads_lines(tmp_path: Path) -> None:
    target = tmp_path / "main.rs"
    target.write_text("fn main() {\r\n}\r\n", encoding="utf-8")

    buffer = Buffer.from_path(str(target))

    assert buffer.lines == ("fn main() {", "}")
    assert buffer.extension == "rs"


def test_from_path_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(BufferIOError) as excinfo:
        Buffer.from_path(str(tmp_path / "missing.txt"))

    assert excinfo.value.kind == "read"


def test_load_rejects_invalid_utf8(tmp_path: Path) -> None:
    target = tmp_path / "binary.bin"
    target.write_bytes(b"\xff\xfe\x00bad")
    buffer = make_buffer("keep")

    with pytest.raises(BufferIOError) as excinfo:
        buffer.load_from(str(target))

    assert excinfo.value.kind == "decode"
    assert buffer.lines == ("keep",)


def test_save_into_missing_directory_raises_write_error(tmp_path: Path) -> None:
    buffer = make_buffer("x")

    with pytest.raises(BufferIOError) as excinfo:
        buffer.save_to(str(tmp_path / "nope" / "file.txt"))

    assert excinfo.value.kind == "write"
    assert buffer.path == str(tmp_path / "nope" / "file.txt")


def test_set_cursor_rejects_out_of_range() -> None:
    buffer = make_buffer("ab")

    with pytest.raises(BufferValidationError):
        buffer.set_cursor(3, 0)
    with pytest.raises(BufferValidationError):
        buffer.set_cursor(0, 1)


def test_follow_cursor_scrolls_viewport() -> None:
    buffer = make_buffer(*[str(i) for i in range(20)])

    buffer.move_cursor(0, 12)
    buffer.follow_cursor(5)
    assert buffer.state.scroll == 8
    assert buffer.screen_cursor() == (0, 4)

    buffer.move_cursor(0, -10)
    buffer.follow_cursor(5)
    assert buffer.state.scroll == 2
    assert buffer.screen_cursor() == (0, 0)


def test_load_then_save_keeps_control_separators(tmp_path: Path) -> None:
    target = tmp_path / "paged.py"
    content = "x = 1\n\x0c\ndef f():\n    pass  # a\x1cb c\n"
    target.write_bytes(content.encode("utf-8"))

    buffer = Buffer.from_path(str(target))
    assert buffer.lines == ("x = 1", "\x0c", "def f():", "    pass  # a\x1cb c")

    buffer.save()
    assert target.read_bytes() == content.encode("utf-8")


@pytest.mark.parametrize(
    ("content", "lines"), [("", ("",)), ("\n", ("",)), ("a", ("a",))]
)
def test_from_path_edge_contents(tmp_path: Path, content: str, lines: tuple) -> None:
    target = tmp_path / "edge.txt"
    target.write_bytes(content.encode("utf-8"))

    assert Buffer.from_path(str(target)).lines == lines


def test_combining_mark_joins_previous_grapheme() -> None:
    buffer = make_buffer("e", cursor=(1, 0))

    # The accent merges into "e", so the column does not advance.
    buffer.insert_character("\u0301")
    assert buffer.lines == ("e\u0301",)
    assert buffer.cursor == (1, 0)

    # Backspace removes the whole cluster, not just the accent.
    buffer.delete_backward()
    assert buffer.lines == ("",)
    assert buffer.cursor == (0, 0)
