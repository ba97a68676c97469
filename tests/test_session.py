from __future__ import annotations

from pathlib import Path

from rocket_editor.editor import KeyInput
from rocket_editor.keymaps import Binding
from rocket_editor.popups import PopupKind
from rocket_editor.runtime.config import EditorSettings
from rocket_editor.session import Session


def ctrl(char: str) -> KeyInput:
    return KeyInput(char, modifiers=("ctrl",), text=char)


def alt(char: str) -> KeyInput:
    return KeyInput(char, modifiers=("alt",), text=char)


def make_session(*paths: str) -> Session:
    return Session.open(paths, settings=EditorSettings())


def test_new_session_starts_in_edit_mode() -> None:
    session = make_session()

    view = session.view()

    assert view.mode == "edit"
    assert view.popup is None
    assert view.popup_depth == 0


def test_typed_keys_reach_the_buffer() -> None:
    session = make_session()

    result = session.handle_key(KeyInput.char("a"))

    assert result.consumed is True
    assert session.editor.active.lines == ("a",)


def test_save_on_scratch_buffer_prompts_for_path() -> None:
    session = make_session()
    opened: list[object] = []
    session.bus.subscribe("popup.opened", opened.append)

    result = session.handle_key(ctrl("s"))

    assert result.status == "save_prompt"
    assert session.popups.top is not None
    assert session.popups.top.kind is PopupKind.SAVE_FILE
    assert session.view().mode == "popup"
    assert opened == ["save file"]


def test_popup_captures_input_until_dismissed() -> None:
    session = make_session()
    session.handle_key(ctrl("s"))

    session.handle_key(KeyInput.char("x"))
    assert session.view().popup.content == "x"
    assert session.editor.active.lines == ("",)

    result = session.handle_key(KeyInput("ESC"))

    assert result.status == "popup_closed"
    assert session.view().mode == "edit"
    assert not session.popups


def test_save_prompt_writes_file(tmp_path: Path) -> None:
    session = make_session()
    session.handle_key(KeyInput.char("z"))
    session.handle_key(ctrl("s"))
    for char in str(tmp_path / "new.txt"):
        session.handle_key(KeyInput.char(char))
    session.handle_key(KeyInput("RIGHT"))

    result = session.handle_key(KeyInput("ENTER"))

    assert result.status == "popup_closed"
    assert (tmp_path / "new.txt").read_text(encoding="utf-8") == "z\n"
    assert session.view().mode == "edit"
    assert session.view().editor.saved_recently is True


def test_save_with_path_writes_directly(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("a\n", encoding="utf-8")
    session = make_session(str(target))
    saved: list[object] = []
    session.bus.subscribe("buffer.saved", saved.append)

    session.handle_key(KeyInput.char("b"))
    result = session.handle_key(ctrl("s"))

    assert result.status == "saved"
    assert target.read_text(encoding="utf-8") == "ba\n"
    assert saved == [str(target)]
    assert session.view().popup is None


def test_failed_save_shows_io_error(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("a\n", encoding="utf-8")
    session = make_session(str(target))
    target.unlink()
    target.mkdir()

    result = session.handle_key(ctrl("s"))

    assert result.status == "save_failed"
    assert session.popups.top.kind is PopupKind.IO_ERROR


def test_popup_error_replaces_prompt(tmp_path: Path) -> None:
    session = make_session()
    session.handle_key(ctrl("o"))
    for char in str(tmp_path / "absent.txt"):
        session.handle_key(KeyInput.char(char))
    session.handle_key(KeyInput("RIGHT"))

    result = session.handle_key(KeyInput("ENTER"))

    assert result.status == "popup_error"
    assert session.popups.top.kind is PopupKind.IO_ERROR
    assert session.view().popup_depth == 1

    session.handle_key(KeyInput("ENTER"))
    assert session.view().mode == "edit"


def test_help_lists_bindings() -> None:
    session = make_session()

    session.handle_key(ctrl("h"))

    content = session.view().popup.content
    assert "ctrl+q" in content
    assert "alt+i" in content


def test_save_as_prefills_current_path(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("", encoding="utf-8")
    session = make_session(str(target))

    session.handle_key(ctrl("t"))

    assert session.view().popup.content == str(target)


def test_buffer_switch_bindings(tmp_path: Path) -> None:
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("a\n", encoding="utf-8")
    second.write_text("b\n", encoding="utf-8")
    session = make_session(str(first), str(second))

    session.handle_key(alt("i"))
    assert session.editor.active_index == 1

    session.handle_key(alt("i"))
    assert session.editor.active_index == 0

    session.handle_key(alt("u"))
    assert session.editor.active_index == 1


def test_quit_sets_flag_and_emits_event() -> None:
    session = make_session()
    events: list[object] = []
    session.bus.subscribe("session.quit", events.append)

    session.handle_key(ctrl("q"))

    assert session.quit_requested is True
    assert events == [None]


def test_quit_works_while_popup_open() -> None:
    session = make_session()
    session.handle_key(ctrl("h"))

    session.handle_key(ctrl("q"))

    assert session.quit_requested is True


def test_extra_bindings_remap_commands() -> None:
    session = Session.open(
        [],
        settings=EditorSettings(),
        extra_bindings=[
            Binding(
                id="edit.custom_quit",
                mode="edit",
                stroke="ctrl+x",
                action_id="session.quit",
            )
        ],
    )

    session.handle_key(ctrl("x"))

    assert session.quit_requested is True


def test_unhandled_key_is_reported() -> None:
    session = make_session()

    result = session.handle_key(KeyInput("F9"))

    assert result.consumed is False
    assert result.message == "unhandled"


def test_save_inside_save_prompt_does_not_stack_prompts() -> None:
    session = make_session()
    session.handle_key(ctrl("s"))

    session.handle_key(ctrl("s"))

    assert session.view().popup_depth == 1
    assert session.popups.top.content == ""


def test_popup_open_flag_follows_stack() -> None:
    session = make_session()
    flags = session.context.extras["keymap_flags"]
    assert flags.get("popup_open", False) is False

    session.handle_key(ctrl("h"))
    assert flags["popup_open"] is True

    session.handle_key(KeyInput("ESC"))
    assert flags["popup_open"] is False
