"""Console front-end (curses).

Screen layout::

    行列 30 輸入法 - 終端機模式
    鍵盤輸入：<raw keys>
    編輯區：碼 = <code>
    候選：[1]… [2]…   (頁 1/2)
    輸出區：<output>
    提示：<hint>
"""

from __future__ import annotations

import curses
import logging
from typing import TYPE_CHECKING

from array30.core.engine import KeyResult
from array30.platform.clipboard import set_clipboard

if TYPE_CHECKING:
    from array30.core.engine import InputEngine

logger = logging.getLogger(__name__)

CTRL_C = "\x03"
CTRL_Q = "\x11"
ENGINE_CONTROLS = ("\x08", "\x1b", "\n", "\r")
EMPTY = "（空）"


def render_lines(engine: "InputEngine") -> list[str]:
    """Text of every screen line for the engine's current state."""
    state = engine.state
    candidates = engine.current_page_candidates()

    lines = ["行列 30 輸入法 - 終端機模式", "", f"鍵盤輸入：{state.raw_keys}", ""]

    if state.current_code:
        lines.append(f"編輯區：碼 = {state.current_code}")
        if candidates:
            numbered = " ".join(f"[{(i + 1) % 10}]{cand.text}" for i, cand in enumerate(candidates))
            if engine.page_count > 1:
                numbered += f"  (頁 {engine.page_index + 1}/{engine.page_count})"
            lines.append(f"候選：{numbered}")
        else:
            lines.append("編輯區：無候選字")
    else:
        lines.append(f"編輯區：{EMPTY}")
    lines.append("")

    lines.append(f"輸出區：{state.output or EMPTY}")
    lines.append("")
    lines.append(f"提示：{state.get_hint()}")
    lines.append("")
    lines.append("按 Ctrl+C 或 Ctrl+Q 離開；Tab/PgDn 下一頁，PgUp 上一頁")
    return lines


class ConsoleApp:
    """Feeds curses key events to an InputEngine and redraws after each one."""

    def __init__(self, engine: "InputEngine", sync_clipboard: bool = False):
        self.engine = engine
        self.sync_clipboard = sync_clipboard
        self.should_quit = False

    def handle_key_event(self, key: "str | int") -> KeyResult:
        """Translate one ``get_wch()`` result into engine calls."""
        if isinstance(key, int):
            return self._handle_special_key(key)

        if key in (CTRL_C, CTRL_Q):
            self.should_quit = True
            return KeyResult.NO_CHANGE
        if key == "\t":
            return KeyResult.NEED_UPDATE if self.engine.next_page() else KeyResult.NO_CHANGE
        if len(key) == 1 and key < " " and key not in ENGINE_CONTROLS:
            # other Ctrl+letter chords in raw mode
            return KeyResult.NO_CHANGE

        result = self.engine.handle_key(key)
        if result is KeyResult.COMMITTED and self.sync_clipboard:
            set_clipboard(self.engine.get_output_text())
        return result

    def _handle_special_key(self, key: int) -> KeyResult:
        if key == curses.KEY_BACKSPACE:
            return self.engine.handle_key("\x08")
        if key == curses.KEY_ENTER:
            return self.engine.handle_key("\n")
        if key == curses.KEY_NPAGE:
            return KeyResult.NEED_UPDATE if self.engine.next_page() else KeyResult.NO_CHANGE
        if key in (curses.KEY_PPAGE, curses.KEY_BTAB):
            return KeyResult.NEED_UPDATE if self.engine.prev_page() else KeyResult.NO_CHANGE
        if key == curses.KEY_RESIZE:
            return KeyResult.NEED_UPDATE
        return KeyResult.NO_CHANGE

    def draw(self, stdscr) -> None:
        stdscr.erase()
        height, width = stdscr.getmaxyx()
        for y, line in enumerate(render_lines(self.engine)[:height]):
            try:
                stdscr.addstr(y, 0, line[:max(width - 1, 0)])
            except curses.error:
                # wide CJK text can still overrun the last column
                pass
        stdscr.refresh()

    def run(self, stdscr) -> None:
        curses.raw()
        stdscr.keypad(True)
        self.should_quit = False
        logger.info("Console front-end started")

        while not self.should_quit:
            self.draw(stdscr)
            try:
                key = stdscr.get_wch()
            except curses.error:
                continue
            self.handle_key_event(key)

        logger.info("Console front-end stopped")


def run_console(engine: "InputEngine", sync_clipboard: bool = False) -> None:
    app = ConsoleApp(engine, sync_clipboard=sync_clipboard)
    curses.wrapper(app.run)
    print("行列 30 輸入法 - 再見！")
