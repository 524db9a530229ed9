"""Interactive editor that rewrites casing commands as you type.

Usage:
  linkcase tui [--file FILE]

Features:
  • Live rewriting: finish typing [[Note\\l]] or [[Note]]\\u and the line is
    rewritten in place, caret right after the closing ]].
  • Ctrl-T toggles "lowercase first word only" for \\l (persisted).
  • Each accepted line is echoed and, if --file is given, appended to it.

Design notes:
  - The prompt buffer is the editor host; the controller is attached to its
    text-changed event, exactly as a GUI editor would wire it.
  - quit / exit / Ctrl-D leaves.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from linkcase_core import JsonSettingsStore
from linkcase_rewrite import LinkCasingController
from linkcase_rewrite.host import ChangeCallback
from prompt_toolkit import PromptSession
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from rich.console import Console

tui_app = typer.Typer(help="Interactive editor with live link casing")

console = Console()


class BufferHost:
    """Editor host backed by a prompt_toolkit Buffer."""

    def __init__(self, buffer: Buffer):
        self.buffer = buffer

    def get_full_text(self) -> str:
        return self.buffer.text

    def set_full_text(self, text: str) -> None:
        # Buffer clamps the cursor to the new length
        self.buffer.text = text

    def get_caret_offset(self) -> int:
        return self.buffer.cursor_position

    def set_caret_offset(self, offset: int) -> None:
        self.buffer.cursor_position = offset

    def on_content_changed(self, callback: ChangeCallback) -> None:
        self.buffer.on_text_changed += lambda _buffer: callback()


def _bottom_toolbar(controller: LinkCasingController) -> HTML:
    mode = "first word" if controller.settings.lowercase_first_word_only else "all words"
    return HTML(
        f"<b>\\l</b> lowers: <b>{mode}</b>"
        " • <b>Ctrl-T</b> toggle • <b>quit</b> to exit"
    )


def _append_line(path: Path, line: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")


@tui_app.callback(invoke_without_command=True)
def tui(
    _ctx: typer.Context,
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Append accepted lines to this file"),
) -> None:
    """
    Launch the interactive editor. Just run `linkcase tui`.
    """
    target = Path(file).expanduser() if file else None

    history = InMemoryHistory()
    session = PromptSession(history=history)
    controller = LinkCasingController(BufferHost(session.default_buffer), JsonSettingsStore())
    controller.attach()

    kb = KeyBindings()

    @kb.add("c-t")
    def _toggle(_event):
        controller.set_lowercase_first_word_only(not controller.settings.lowercase_first_word_only)

    while True:
        try:
            text = session.prompt(
                "linkcase> ",
                key_bindings=kb,
                bottom_toolbar=lambda: _bottom_toolbar(controller),
            )
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if text.strip() in ("quit", "exit"):
            break

        console.print(text, markup=False, highlight=False)
        if target is not None:
            try:
                _append_line(target, text)
            except OSError as e:
                console.print(f"[red]Could not write {target}:[/red] {e}")
