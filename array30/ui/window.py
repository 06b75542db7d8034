"""InputWindow: PyQt5 front-end for the input engine."""

from __future__ import annotations

import logging
import sys

from PyQt5.QtWidgets import (
    QApplication, QWidget, QBoxLayout, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton,
)
from PyQt5.QtGui import QFont
from PyQt5.QtCore import Qt

from array30.core.engine import KeyResult
from array30.core.keymap import CHART_COLUMNS, CHART_ROWS, layout_chart
from array30.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)

PAGE_NEXT = "page_next"
PAGE_PREV = "page_prev"
SLOT_COUNT = 10
EMPTY = "（空）"


def format_root_table() -> str:
    """The Array30 chart as monospace text (column digits over three key rows)."""
    lines = ["   " + " ".join(f"{c:>2}" for c in CHART_COLUMNS)]
    for row_mark, keys in zip(CHART_ROWS, layout_chart()):
        lines.append(f"{row_mark:>2} " + " ".join(f"{key.code_char().upper():>2}" for key in keys))
    return "\n".join(lines)


def translate_key(key: int, text: str) -> str | None:
    """Map a Qt key press to an engine symbol, PAGE_NEXT/PAGE_PREV, or None."""
    if key == Qt.Key_Backspace:
        return "\x08"
    if key in (Qt.Key_Return, Qt.Key_Enter):
        return "\n"
    if key == Qt.Key_Escape:
        return "\x1b"
    if key == Qt.Key_Space:
        return " "
    if key in (Qt.Key_PageDown, Qt.Key_Tab):
        return PAGE_NEXT
    if key in (Qt.Key_PageUp, Qt.Key_Backtab):
        return PAGE_PREV
    # visible ASCII only; IME composition from the desktop is ignored
    if len(text) == 1 and text.isascii() and text.isprintable():
        return text
    return None


_DIRECTIONS = {
    'up': QBoxLayout.TopToBottom,
    'down': QBoxLayout.BottomToTop,
    'left': QBoxLayout.LeftToRight,
    'right': QBoxLayout.RightToLeft,
}


class InputWindow(QWidget):
    """Main window: raw keys, code + candidates, output, hint, root table."""

    def __init__(self, engine, config=None, table_files: tuple[str, str] | None = None, parent=None):
        super().__init__(parent)
        self.engine = engine
        self.config = config
        self.table_files = table_files

        self.setWindowTitle("行列 30 輸入法")
        self._build_ui()
        self._apply_settings()
        self.refresh()

    # -- UI construction ---------------------------------------------------

    def _build_ui(self) -> None:
        self._outer = QBoxLayout(QBoxLayout.TopToBottom, self)

        self._root_table_label = QLabel(format_root_table())
        self._outer.addWidget(self._root_table_label)

        body = QVBoxLayout()
        self._raw_keys_label = QLabel()
        self._code_label = QLabel()
        self._output_label = QLabel()
        self._output_label.setWordWrap(True)
        self._hint_label = QLabel()
        self._status_label = QLabel()

        body.addWidget(self._raw_keys_label)
        body.addWidget(self._code_label)

        slots = QHBoxLayout()
        self._slot_buttons: list = []
        for i in range(SLOT_COUNT):
            btn = QPushButton()
            btn.setFocusPolicy(Qt.NoFocus)
            btn.clicked.connect(lambda _checked=False, slot=i: self.select_slot(slot))
            slots.addWidget(btn)
            self._slot_buttons.append(btn)
        body.addLayout(slots)

        paging = QHBoxLayout()
        self._prev_btn = QPushButton("◄ 上一頁")
        self._prev_btn.clicked.connect(lambda _checked=False: self.change_page(PAGE_PREV))
        self._next_btn = QPushButton("下一頁 ►")
        self._next_btn.clicked.connect(lambda _checked=False: self.change_page(PAGE_NEXT))
        self._page_label = QLabel()
        for widget in (self._prev_btn, self._page_label, self._next_btn):
            paging.addWidget(widget)
        body.addLayout(paging)

        body.addWidget(self._output_label)
        body.addWidget(self._hint_label)

        actions = QHBoxLayout()
        copy_btn = QPushButton("📋 複製輸出到剪貼簿")
        copy_btn.clicked.connect(lambda _checked=False: self.copy_output())
        clear_btn = QPushButton("清空輸出區")
        clear_btn.clicked.connect(lambda _checked=False: self.clear_output())
        settings_btn = QPushButton("設定")
        settings_btn.clicked.connect(lambda _checked=False: self.open_settings())
        for widget in (copy_btn, clear_btn, settings_btn):
            widget.setFocusPolicy(Qt.NoFocus)
            actions.addWidget(widget)
        actions.addStretch()
        actions.addWidget(self._status_label)
        body.addLayout(actions)

        if self.table_files:
            char_file, phrase_file = self.table_files
            body.addWidget(QLabel(f"詞庫：{phrase_file}"))
            body.addWidget(QLabel(f"字表：{char_file}"))

        self._outer.addLayout(body)

    def _setting(self, key: str, default):
        return self.config.get(key, default) if self.config is not None else default

    def _apply_settings(self) -> None:
        """Apply font and root-table settings from the current config."""
        font_size = float(self._setting('font_size', 20.0))
        font = QFont()
        font.setPointSizeF(font_size)
        self.setFont(font)

        table_font = QFont("monospace")
        table_font.setPointSizeF(max(font_size * float(self._setting('root_table_scale', 0.5)), 6.0))
        self._root_table_label.setFont(table_font)
        self._root_table_label.setVisible(bool(self._setting('show_root_table', True)))

        position = self._setting('root_table_position', 'up')
        self._outer.setDirection(_DIRECTIONS.get(position, QBoxLayout.TopToBottom))

    # -- rendering -----------------------------------------------------------

    def refresh(self) -> None:
        state = self.engine.state
        candidates = self.engine.current_page_candidates()

        self._raw_keys_label.setText(f"鍵盤輸入區：{state.raw_keys}")
        if not state.current_code:
            self._code_label.setText(f"編輯區：{EMPTY}")
        elif candidates:
            self._code_label.setText(f"編輯區：碼：{state.current_code}")
        else:
            self._code_label.setText(f"編輯區：碼：{state.current_code}（無候選字）")

        for i, btn in enumerate(self._slot_buttons):
            if i < len(candidates):
                btn.setText(f"[{(i + 1) % 10}] {candidates[i].text}")
                btn.setVisible(True)
            else:
                btn.setVisible(False)

        pages = self.engine.page_count
        self._page_label.setText(f"{self.engine.page_index + 1}/{pages}" if pages > 1 else "")
        self._prev_btn.setEnabled(self.engine.page_index > 0)
        self._next_btn.setEnabled(self.engine.page_index + 1 < pages)

        self._output_label.setText(f"輸出區：{state.output or EMPTY}")
        self._hint_label.setText(f"提示：{state.get_hint()}")

    # -- actions -------------------------------------------------------------

    def feed(self, symbol: str) -> KeyResult:
        """Send one symbol (or PAGE_NEXT/PAGE_PREV) to the engine and redraw."""
        if symbol in (PAGE_NEXT, PAGE_PREV):
            result = self.change_page(symbol)
        else:
            result = self.engine.handle_key(symbol)
            if result is KeyResult.COMMITTED:
                self._on_committed()
        if result is not KeyResult.NO_CHANGE:
            self.refresh()
        return result

    def change_page(self, direction: str) -> KeyResult:
        moved = self.engine.next_page() if direction == PAGE_NEXT else self.engine.prev_page()
        if moved:
            self.refresh()
            return KeyResult.NEED_UPDATE
        return KeyResult.NO_CHANGE

    def select_slot(self, slot: int) -> bool:
        if not self.engine.select_candidate(slot):
            return False
        self._on_committed()
        self.refresh()
        return True

    def _on_committed(self) -> None:
        if self._setting('sync_clipboard', False):
            self.copy_output()

    def copy_output(self) -> str:
        text = self.engine.get_output_text()
        QApplication.clipboard().setText(text)
        self._status_label.setText(f"已複製 {len(text)} 字元")
        logger.debug("Copied %d chars to clipboard", len(text))
        return text

    def clear_output(self) -> None:
        self.engine.clear_output()
        self._status_label.setText("")
        self.refresh()

    def open_settings(self) -> None:
        dialog = SettingsDialog(self.config, on_applied=self._apply_settings, parent=self)
        dialog.exec_()

    # -- QWidget overrides ---------------------------------------------------

    def keyPressEvent(self, event) -> None:
        symbol = translate_key(event.key(), event.text())
        if symbol is None:
            super().keyPressEvent(event)
            return
        self.feed(symbol)


def run_gui(engine, config=None, table_files: tuple[str, str] | None = None) -> int:
    """Start the Qt event loop with an InputWindow. Returns the exit code."""
    app = QApplication.instance() or QApplication(sys.argv)
    window = InputWindow(engine, config=config, table_files=table_files)
    if config is not None:
        window.resize(int(config.get('window_width', 1600)), int(config.get('window_height', 900)))
    window.show()
    logger.info("Window front-end started")
    return app.exec_()
