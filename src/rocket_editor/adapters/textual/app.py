"""Executable Textual app hosting a rocket_editor session."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from rocket_editor import __version__
from rocket_editor.buffer import BufferIOError
from rocket_editor.buffer.text import split_at
from rocket_editor.editor import EditorView
from rocket_editor.popups import PopupView
from rocket_editor.runtime import telemetry
from rocket_editor.runtime.config import EditorSettings
from rocket_editor.session import Session, SessionView
from rocket_editor.styling import StyleTag

from .controller import TextualEditorAdapter, TextualUIHooks

HIGHLIGHT = "rgb(251,203,179)"
GUTTER = "rgb(42,126,105)"

TAG_STYLES = {
    StyleTag.PLAIN: "",
    StyleTag.KEYWORD: f"bold {HIGHLIGHT}",
    StyleTag.OPERATOR: HIGHLIGHT,
    StyleTag.BRACKET: HIGHLIGHT,
}

GUTTER_WIDTH = 4


def render_tabs(view: EditorView) -> Text:
    text = Text()
    for index, name in enumerate(view.display_names):
        style = "on rgb(42,126,105)" if index == view.active_index else ""
        if index:
            text.append(" ")
        text.append(f"[{name}]", style=style)
    return text


def render_body(view: EditorView, height: int) -> Text:
    text = Text()
    first = view.scroll
    last = len(view.styled_lines) if height <= 0 else first + height
    for row, line in enumerate(view.styled_lines[first:last], start=first):
        if row != first:
            text.append("\n")
        text.append(f"{row + 1:>{GUTTER_WIDTH - 1}}~", style=GUTTER)
        line_text = Text()
        for token in line:
            line_text.append(token.text, style=TAG_STYLES[token.tag])
        if row - first == view.cursor.row:
            _mark_cursor(line_text, view.cursor.column)
        text.append_text(line_text)
    return text


def _mark_cursor(line: Text, column: int) -> None:
    # Text offsets are code points; the cursor column counts graphemes.
    before, after = split_at(line.plain, column)
    if not after:
        line.append(" ", style="reverse")
        return
    start = len(before)
    line.stylize("reverse", start, start + 1)


def render_footer(view: EditorView, scratch_label: str) -> Text:
    saved = " \\\\ saved!" if view.saved_recently else ""
    left = f"[{view.path or scratch_label}] \\\\ ({view.cursor.column}:{view.cursor.row}){saved}"
    return Text(left)


def render_popup(popup: PopupView) -> Text:
    text = Text()
    text.append(f" {popup.title} \n", style="bold on rgb(0,71,71)")
    text.append(popup.content or " ")
    text.append("\n\n")
    for index, label in enumerate(popup.buttons):
        style = "on rgb(191,141,124)" if index == popup.selected_index else "on rgb(0,71,71)"
        text.append(f" {label} ", style=style)
        text.append("   ")
    return text


class RocketApp(App[None]):
    """Header tabs, styled buffer body, footer, and a popup overlay."""

    CSS = """
    Screen {
        layers: base overlay;
        layout: vertical;
        background: rgb(32,64,56);
    }

    #tabs {
        height: 1;
        background: rgb(0,59,59);
    }

    #buffer-view {
        height: 1fr;
        padding: 0 0;
    }

    #footer {
        height: 1;
        background: rgb(0,59,59);
    }

    #popup {
        layer: overlay;
        display: none;
        width: 50%;
        height: auto;
        offset: 25% 30%;
        padding: 0 1;
        background: rgb(42,126,105);
    }
    """

    def __init__(self, session: Session) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._tabs = Static("", id="tabs")
        self._body = Static("", id="buffer-view")
        self._footer = Static("", id="footer")
        self._popup = Static("", id="popup")

    def compose(self) -> ComposeResult:
        yield self._tabs
        yield self._body
        yield self._footer
        yield self._popup

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            request_exit=self.exit,
        )
        self.adapter = TextualEditorAdapter(
            self.session, hooks, viewport_height=self._body_height()
        )
        # Keeps the "saved!" flash expiring without further input.
        self.set_interval(0.25, self._tick)

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.adapter:
            self.adapter.resize(self._body_height())

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(event.key, text=event.character)
        event.stop()
        event.prevent_default()

    def _tick(self) -> None:
        if self.adapter:
            self.adapter.refresh()

    def _body_height(self) -> int:
        return max(1, self.size.height - 2)

    def _update_view(self, view: SessionView) -> None:
        settings = self.session.editor.settings
        self._tabs.update(render_tabs(view.editor))
        self._body.update(render_body(view.editor, self._body_height()))
        self._footer.update(render_footer(view.editor, settings.scratch_label))
        if view.popup is None:
            self._popup.display = False
        else:
            self._popup.update(render_popup(view.popup))
            self._popup.display = True

    def _update_status(self, status: str) -> None:
        self.sub_title = status


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rocket", description="Terminal multi-buffer text editor."
    )
    parser.add_argument("paths", nargs="*", help="Files to open, one buffer each")
    parser.add_argument(
        "--tab-width",
        type=_positive_int,
        default=None,
        help="Spaces inserted for Tab (default: $ROCKET_TAB_WIDTH or 4)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        default=None,
        help="Telemetry preset overriding ROCKET_LOG_* variables",
    )
    parser.add_argument("--version", action="version", version=f"rocket {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = EditorSettings.from_env().with_overrides(tab_width=args.tab_width)
    try:
        session = Session.open(args.paths, settings=settings)
    except BufferIOError as exc:
        print(f"rocket: {exc}", file=sys.stderr)
        return 1
    RocketApp(session).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
